"""Upgrade catalogue — shop entries bought with money earned from hits.

Each entry raises one player stat per level. The medkit is repeatable
(no level, no max) and only heals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class UpgradeKind:
    """Upgrade effect identifiers."""

    SPEED = "speed"
    MAGAZINE = "magazine"
    RELOAD = "reload"
    MAX_HEALTH = "max_health"
    DAMAGE = "damage"
    MEDKIT = "medkit"


@dataclass(frozen=True)
class UpgradeDef:
    """Static definition of one shop entry.

    Attributes:
        name: Display name.
        kind: UpgradeKind constant selecting the effect.
        base_cost: Cost of the first level (and of every medkit).
        max_level: Level cap, or None for repeatable items.
        amount: Effect magnitude per level.
    """

    name: str
    kind: str
    base_cost: int
    max_level: Optional[int]
    amount: float

    @property
    def is_repeatable(self) -> bool:
        return self.max_level is None


MIN_RELOAD_TIME: float = 0.5

UPGRADES: tuple[UpgradeDef, ...] = (
    UpgradeDef("Move Speed", UpgradeKind.SPEED, 30, 5, 15.0),
    UpgradeDef("Magazine", UpgradeKind.MAGAZINE, 50, 5, 2),
    UpgradeDef("Reload Speed", UpgradeKind.RELOAD, 50, 5, 0.2),
    UpgradeDef("Max Health", UpgradeKind.MAX_HEALTH, 100, 3, 20.0),
    UpgradeDef("Bullet Damage", UpgradeKind.DAMAGE, 100, 2, 1.0),
    UpgradeDef("Medkit", UpgradeKind.MEDKIT, 40, None, 50.0),
)
