"""Simulation — one deterministic frame tick over a SimulationState.

Tick order:
1. player: movement, aim, weapon, firing
2. repair: barricade repair progress
3. bullets: flight, wall hits, zombie hits
4. authority: waves then zombie AI / joiner: snapshot contact damage
5. windows: plank pop-in animation
6. particles: visual decay
7. camera: follow the player, clamped to the world
8. elapsed += dt

dt is always passed in; nothing here reads a clock.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Optional

from holdout.engine.barricade_service import BarricadeService
from holdout.engine.bullet_service import BulletService
from holdout.engine.effects_service import EffectsService
from holdout.engine.player_service import PlayerService, new_player
from holdout.engine.upgrade_service import UpgradeService
from holdout.engine.wave_service import WaveService
from holdout.engine.zombie_ai import ZombieAI
from holdout.loaders.game_config_loader import GameConfig
from holdout.models.simulation import Role, SimulationState
from holdout.util.constants import WORLD_H, WORLD_W

if TYPE_CHECKING:
    from holdout.models.input import InputState
    from holdout.util.events import EventBus

log = logging.getLogger(__name__)


class Simulation:
    """Owns the gameplay services and runs them in tick order.

    Args:
        event_bus: Shared bus handed to every service.
        config: Gameplay tuning.
        rng: Random source for spawns and particles (seed it for replays).
    """

    def __init__(self, event_bus: EventBus, config: GameConfig | None = None,
                 rng: Optional[random.Random] = None) -> None:
        self._config = config or GameConfig()
        rng = rng or random.Random()
        self.effects = EffectsService(rng)
        self.players = PlayerService(event_bus, self._config)
        self.barricades = BarricadeService(event_bus, self._config)
        self.bullets = BulletService(event_bus, self.effects, self._config)
        self.waves = WaveService(event_bus, self._config, rng)
        self.zombie_ai = ZombieAI(event_bus, self._config, self.barricades)
        self.upgrades = UpgradeService(event_bus, self._config)

    @property
    def config(self) -> GameConfig:
        return self._config

    def new_state(self, role: Role = Role.SOLO) -> SimulationState:
        """Fresh state for a session playing ``role``."""
        state = SimulationState(role=role, player=new_player(self._config))
        self.waves.reset(state)
        self.upgrades.reset(state)
        self.update_camera(state)
        return state

    def tick(self, state: SimulationState, inp: InputState, dt: float) -> None:
        """Advance ``state`` by one frame of dt seconds."""
        self.players.step(state, inp, dt)
        self.barricades.step_repair(state, inp, dt)
        self.bullets.step(state, dt)
        if state.role.is_authority:
            self.waves.step(state, dt)
            self.zombie_ai.step(state, dt)
        else:
            self.zombie_ai.step_remote_contact(state, dt)
        self.effects.step_windows(state, dt)
        self.effects.step(state, dt)
        self.update_camera(state)
        state.elapsed += dt

    def update_camera(self, state: SimulationState) -> None:
        """Centre the viewport on the player, clamped to the world."""
        vw = self._config.viewport_width
        vh = self._config.viewport_height
        state.camera_x = max(0.0, min(WORLD_W - vw, state.player.x - vw / 2))
        state.camera_y = max(0.0, min(WORLD_H - vh, state.player.y - vh / 2))
