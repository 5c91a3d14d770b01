"""Zombie model — a single shambler and its AI state.

Zombies are spawned on the world boundary, walk a short detour route to
a window, tear off its planks, climb through, then hunt the players.
Behaviour lives in engine/zombie_ai.py; this module is pure data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ZombieState(str, Enum):
    """AI states. Values are the wire names used in snapshots."""

    TO_WINDOW = "toWindow"
    ATTACKING = "attacking"
    CLIMBING = "climbing"
    HUNTING = "hunting"


@dataclass
class Zombie:
    """A simulated zombie (authority side only).

    Attributes:
        zid: Unique id, monotonic within the process.
        x, y: World position.
        angle: Facing angle in radians.
        health: Hit points; the zombie is removed once this reaches 0.
        speed: Movement speed in px/s (scaled by wave).
        state: Current AI state.
        target_window: Index of the window this zombie is heading for.
        waypoints: Remaining route points, consumed front-to-back.
        attack_timer: Seconds until the next plank comes off.
        climb_timer: Seconds until the climb through the window finishes.
    """

    zid: int
    x: float
    y: float
    health: float
    speed: float
    target_window: int
    angle: float = 0.0
    state: ZombieState = ZombieState.TO_WINDOW
    waypoints: list[tuple[float, float]] = field(default_factory=list)
    attack_timer: float = 0.0
    climb_timer: float = 0.0

    @property
    def is_alive(self) -> bool:
        return self.health > 0


@dataclass
class ZombieView:
    """Joiner-side copy of one snapshot entry, applied verbatim."""

    zid: int
    x: float
    y: float
    state: ZombieState
    angle: float = 0.0
