"""Projectile and particle models — bullets in flight and visual debris.

Pure data. Integration and collision are handled by
engine/bullet_service.py and engine/effects_service.py.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Bullet:
    """A bullet in flight.

    Attributes:
        x, y: World position.
        vx, vy: Velocity in px/s.
        life: Seconds left before the bullet expires.
        damage: Damage on hit (remote bullets carry 0, they are visual only).
    """

    x: float
    y: float
    vx: float
    vy: float
    life: float
    damage: float = 0.0


@dataclass
class Particle:
    """A short-lived visual fragment (debris, blood, spark)."""

    x: float
    y: float
    vx: float
    vy: float
    size: float
    color: str
    life: float
    max_life: float

    @property
    def alpha(self) -> float:
        """Fade factor for a renderer, 1 at birth and 0 at expiry."""
        if self.max_life <= 0:
            return 0.0
        return max(0.0, self.life / self.max_life)
