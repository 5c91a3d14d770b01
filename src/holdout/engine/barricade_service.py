"""Barricade service — plank counts and player repairs.

Plank counts are always clamped to [0, MAX_PLANKS]. Repair progress is
tracked per window: the window being worked on fills up, every other
window slowly loses progress. A completed repair only raises
PlankRepairCompleted; the session decides who actually adds the plank.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from holdout.loaders.game_config_loader import GameConfig
from holdout.util.constants import KEYS_REPAIR
from holdout.util.events import PlankAdded, PlankRemoved, PlankRepairCompleted
from holdout.util.geometry import distance

if TYPE_CHECKING:
    from holdout.models.input import InputState
    from holdout.models.simulation import SimulationState
    from holdout.models.world import Window
    from holdout.util.events import EventBus

log = logging.getLogger(__name__)


class BarricadeService:
    """Service for window planks.

    Args:
        event_bus: Receives PlankAdded, PlankRemoved and PlankRepairCompleted.
        config: Gameplay tuning (repair range and timing).
    """

    def __init__(self, event_bus: EventBus, config: GameConfig | None = None) -> None:
        self._events = event_bus
        self._config = config or GameConfig()

    # -- Planks ----------------------------------------------------------

    def apply_add_plank(self, state: SimulationState, index: int) -> bool:
        """Add one plank to window ``index``. False if invalid or already full."""
        window = state.building.window(index)
        if window is None:
            log.warning("addPlank for unknown window index %d ignored", index)
            return False
        if window.is_full:
            return False
        window.planks += 1
        window.pop = 0.0
        log.debug("Plank added to window %d (%d now)", index, window.planks)
        self._events.emit(PlankAdded(window_index=index, planks=window.planks))
        return True

    def remove_plank(self, state: SimulationState, index: int) -> bool:
        """Take one plank off window ``index``. False if invalid or already bare."""
        window = state.building.window(index)
        if window is None or window.planks <= 0:
            return False
        window.planks -= 1
        cx, cy = window.center
        log.debug("Plank torn off window %d (%d left)", index, window.planks)
        self._events.emit(PlankRemoved(window_index=index, planks=window.planks, x=cx, y=cy))
        return True

    # -- Repair ----------------------------------------------------------

    def repair_target(self, state: SimulationState) -> Optional[Window]:
        """Nearest damaged window within repair range of the player, if any."""
        player = state.player
        best: Optional[Window] = None
        best_dist = self._config.repair_range
        for window in state.building.windows:
            if window.is_full:
                continue
            cx, cy = window.center
            d = distance(player.x, player.y, cx, cy)
            if d <= best_dist:
                best, best_dist = window, d
        return best

    def step_repair(self, state: SimulationState, inp: InputState, dt: float) -> None:
        """Grow progress on the window being repaired, decay all others."""
        cfg = self._config
        active: Optional[Window] = None
        if state.player.is_alive and inp.held(KEYS_REPAIR):
            active = self.repair_target(state)

        decay = cfg.repair_decay_multiplier * dt / cfg.repair_time_s
        for window in state.building.windows:
            if window is active:
                continue
            window.repair_progress = max(0.0, window.repair_progress - decay)

        if active is None:
            return
        active.repair_progress += dt / cfg.repair_time_s
        if active.repair_progress >= 1.0:
            active.repair_progress = 0.0
            log.debug("Repair completed on window %d", active.index)
            self._events.emit(PlankRepairCompleted(window_index=active.index))

    @staticmethod
    def active_progress(state: SimulationState) -> float:
        """Highest repair progress over all windows (for the HUD bar)."""
        return max((w.repair_progress for w in state.building.windows), default=0.0)
