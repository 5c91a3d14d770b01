"""Upgrade service — cost calculation and purchases.

A purchase is all-or-nothing: either the money is deducted, the level
raised by one and the effect applied, or nothing changes at all.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from holdout.loaders.game_config_loader import GameConfig
from holdout.models.upgrades import MIN_RELOAD_TIME, UPGRADES, UpgradeDef, UpgradeKind
from holdout.util.events import UpgradePurchased

if TYPE_CHECKING:
    from holdout.models.player import Player
    from holdout.models.simulation import SimulationState
    from holdout.util.events import EventBus

log = logging.getLogger(__name__)


class UpgradeService:
    """Service for the upgrade shop.

    Args:
        event_bus: Receives UpgradePurchased.
        config: Gameplay tuning (cost step).
        upgrades: Shop catalogue; defaults to the standard one.
    """

    def __init__(self, event_bus: EventBus, config: GameConfig | None = None,
                 upgrades: tuple[UpgradeDef, ...] = UPGRADES) -> None:
        self._events = event_bus
        self._config = config or GameConfig()
        self._upgrades = upgrades

    @property
    def upgrades(self) -> tuple[UpgradeDef, ...]:
        return self._upgrades

    def reset(self, state: SimulationState) -> None:
        state.upgrade_levels = [0] * len(self._upgrades)

    def level(self, state: SimulationState, index: int) -> int:
        if 0 <= index < len(state.upgrade_levels):
            return state.upgrade_levels[index]
        return 0

    def get_upgrade_cost(self, state: SimulationState, index: int) -> int:
        """Cost of the next level of upgrade ``index`` (medkit: always base).

        An index outside the catalogue costs 0; buy_upgrade rejects it.
        """
        if not 0 <= index < len(self._upgrades):
            return 0
        upgrade = self._upgrades[index]
        if upgrade.is_repeatable:
            return upgrade.base_cost
        step = math.floor(upgrade.base_cost * self._config.upgrade_cost_step)
        return upgrade.base_cost + self.level(state, index) * step

    def can_buy(self, state: SimulationState, index: int) -> bool:
        if not 0 <= index < len(self._upgrades):
            return False
        upgrade = self._upgrades[index]
        player = state.player
        if not player.is_alive:
            return False
        if upgrade.is_repeatable:
            if upgrade.kind == UpgradeKind.MEDKIT and player.health >= player.max_health:
                return False
        elif self.level(state, index) >= upgrade.max_level:
            return False
        return state.money >= self.get_upgrade_cost(state, index)

    def buy_upgrade(self, state: SimulationState, index: int) -> bool:
        """Buy upgrade ``index``. Returns False (and changes nothing) if not allowed."""
        if not self.can_buy(state, index):
            return False
        if len(state.upgrade_levels) < len(self._upgrades):
            state.upgrade_levels.extend([0] * (len(self._upgrades) - len(state.upgrade_levels)))

        upgrade = self._upgrades[index]
        cost = self.get_upgrade_cost(state, index)
        state.money -= cost
        if not upgrade.is_repeatable:
            state.upgrade_levels[index] += 1
        self._apply(state.player, upgrade)

        level = state.upgrade_levels[index]
        log.info("Upgrade bought: %s (level %d) for %d", upgrade.name, level, cost)
        self._events.emit(UpgradePurchased(index=index, level=level, cost=cost))
        return True

    @staticmethod
    def _apply(player: Player, upgrade: UpgradeDef) -> None:
        kind = upgrade.kind
        if kind == UpgradeKind.SPEED:
            player.speed += upgrade.amount
        elif kind == UpgradeKind.MAGAZINE:
            player.mag_size += int(upgrade.amount)
        elif kind == UpgradeKind.RELOAD:
            player.reload_time = max(MIN_RELOAD_TIME, player.reload_time - upgrade.amount)
        elif kind == UpgradeKind.MAX_HEALTH:
            player.max_health += upgrade.amount
            player.health += upgrade.amount
        elif kind == UpgradeKind.DAMAGE:
            player.bullet_damage += upgrade.amount
        elif kind == UpgradeKind.MEDKIT:
            player.health = min(player.max_health, player.health + upgrade.amount)
