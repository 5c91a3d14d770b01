"""Effects service — particle bursts and per-frame particle decay.

Purely visual. Nothing here feeds back into gameplay.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from holdout.models.projectile import Particle
from holdout.util.constants import WINDOW_POP_RATE

if TYPE_CHECKING:
    from holdout.models.simulation import SimulationState

PARTICLE_DRAG: float = 4.0


class BurstKind:
    """Particle burst identifiers."""

    DEBRIS = "debris"
    BLOOD = "blood"
    SPARK = "spark"


@dataclass(frozen=True)
class BurstStyle:
    count: int
    colors: tuple[str, ...]
    speed: tuple[float, float]
    size: tuple[float, float]
    life: tuple[float, float]


BURST_STYLES: dict[str, BurstStyle] = {
    BurstKind.DEBRIS: BurstStyle(
        count=12,
        colors=("#9b7a1a", "#5a3e08", "#c49a22", "#e8c060", "#7a5c10"),
        speed=(60.0, 200.0), size=(2.0, 6.0), life=(0.25, 0.55),
    ),
    BurstKind.BLOOD: BurstStyle(
        count=10,
        colors=("#8b0000", "#b01010", "#5a0000", "#cc2020"),
        speed=(40.0, 140.0), size=(2.0, 5.0), life=(0.3, 0.6),
    ),
    BurstKind.SPARK: BurstStyle(
        count=7,
        colors=("#ffdd00", "#ff8800", "#ffffff", "#ffaa00"),
        speed=(40.0, 130.0), size=(1.5, 3.0), life=(0.08, 0.2),
    ),
}


class EffectsService:
    """Spawns and ages particles.

    Args:
        rng: Random source for burst directions and sizes.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def burst(self, state: SimulationState, kind: str, x: float, y: float) -> None:
        """Add one burst of ``kind`` particles at (x, y)."""
        style = BURST_STYLES[kind]
        rng = self._rng
        for _ in range(style.count):
            angle = rng.uniform(0.0, math.tau)
            speed = rng.uniform(*style.speed)
            life = rng.uniform(*style.life)
            state.particles.append(Particle(
                x=x, y=y,
                vx=math.cos(angle) * speed,
                vy=math.sin(angle) * speed,
                size=rng.uniform(*style.size),
                color=rng.choice(style.colors),
                life=life,
                max_life=life,
            ))

    @staticmethod
    def step(state: SimulationState, dt: float) -> None:
        """Integrate, drag and expire particles."""
        drag = max(0.0, 1.0 - PARTICLE_DRAG * dt)
        alive: list[Particle] = []
        for p in state.particles:
            p.x += p.vx * dt
            p.y += p.vy * dt
            p.vx *= drag
            p.vy *= drag
            p.life -= dt
            if p.life > 0:
                alive.append(p)
        state.particles = alive

    @staticmethod
    def step_windows(state: SimulationState, dt: float) -> None:
        """Advance the plank pop-in animation on every window."""
        for window in state.building.windows:
            if window.pop < 1.0:
                window.pop = min(1.0, window.pop + WINDOW_POP_RATE * dt)
