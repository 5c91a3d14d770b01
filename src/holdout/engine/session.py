"""Game session — wires the event bus, simulation and network sync for one role.

The session owns the SimulationState. A front end (or the headless
runner in main) calls step() once per frame with that frame's input and
reads hud() for display.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Optional

from holdout.engine.effects_service import BurstKind
from holdout.engine.simulation import Simulation
from holdout.loaders.game_config_loader import GameConfig
from holdout.models.hud import Hud
from holdout.models.input import InputState
from holdout.models.simulation import Role
from holdout.network.sync import NetworkSync
from holdout.util.events import EventBus, PlankRemoved, PlankRepairCompleted

if TYPE_CHECKING:
    from holdout.network.channel import Channel

log = logging.getLogger(__name__)


class GameSession:
    """One player's view of a game.

    Args:
        role: solo, host or joiner. Fixed for the session's lifetime.
        config: Gameplay tuning.
        channel: Peer channel; required for host and joiner, ignored for solo.
        rng: Random source (seed it for reproducible runs).
    """

    def __init__(self, role: Role = Role.SOLO, config: GameConfig | None = None,
                 channel: Optional[Channel] = None,
                 rng: Optional[random.Random] = None) -> None:
        if role is not Role.SOLO and channel is None:
            raise ValueError(f"{role.value} session needs a peer channel")
        self.config = config or GameConfig()
        self.events = EventBus()
        self.simulation = Simulation(self.events, self.config, rng)
        self.state = self.simulation.new_state(role)
        self.sync: Optional[NetworkSync] = None
        if role is not Role.SOLO:
            self.sync = NetworkSync(self.state, channel, self.events, self.simulation)

        self.events.on(PlankRemoved, self._on_plank_removed)
        self.events.on(PlankRepairCompleted, self._on_repair_completed)
        log.info("Session started: role=%s", role.value)

    @property
    def role(self) -> Role:
        return self.state.role

    # -- Frame -----------------------------------------------------------

    def step(self, inp: Optional[InputState] = None, dt: float = 0.0) -> None:
        """Run one simulation tick, then this frame's network traffic."""
        self.simulation.tick(self.state, inp or InputState(), dt)
        if self.sync is not None:
            self.sync.step(dt)

    def hud(self) -> Hud:
        state = self.state
        player = state.player
        return Hud(
            health=player.health,
            max_health=player.max_health,
            ammo=player.mag_ammo,
            mag_size=player.mag_size,
            reloading=player.reloading,
            reload_progress=player.reload_progress,
            weapon=player.weapon,
            money=state.money,
            wave=state.wave,
            wave_timer=state.wave_timer,
            zombies_alive=state.zombies_alive,
            zombies_to_spawn=state.zombies_to_spawn,
            repair_progress=self.simulation.barricades.active_progress(state),
            status=state.status,
        )

    # -- Shop ------------------------------------------------------------

    def buy_upgrade(self, index: int) -> bool:
        return self.simulation.upgrades.buy_upgrade(self.state, index)

    def get_upgrade_cost(self, index: int) -> int:
        return self.simulation.upgrades.get_upgrade_cost(self.state, index)

    # -- Event handlers --------------------------------------------------

    def _on_plank_removed(self, event: PlankRemoved) -> None:
        self.simulation.effects.burst(self.state, BurstKind.DEBRIS, event.x, event.y)

    def _on_repair_completed(self, event: PlankRepairCompleted) -> None:
        """Authority adds the plank itself; a joiner asks the host to."""
        index = event.window_index
        if self.state.role.is_authority:
            applied = self.simulation.barricades.apply_add_plank(self.state, index)
            if applied and self.sync is not None:
                self.sync.send_add_plank(index)
        elif self.sync is not None:
            self.sync.send_add_plank(index)
