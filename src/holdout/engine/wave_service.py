"""Wave service — wave countdown and zombie spawning.

Authority only. Between waves a countdown runs while the world is clear;
when it reaches zero the next wave queues zombies_for_wave(wave) zombies,
which then spawn one per spawn interval on the world boundary.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Optional

from holdout.engine.pathfinding import compute_path_to_window, has_line_of_sight
from holdout.loaders.game_config_loader import GameConfig
from holdout.models.zombie import Zombie
from holdout.util.constants import WORLD_H, WORLD_W
from holdout.util.events import WaveStarted, ZombieSpawned
from holdout.util.geometry import distance

if TYPE_CHECKING:
    from holdout.models.simulation import SimulationState
    from holdout.models.world import Building, Window
    from holdout.util.events import EventBus

log = logging.getLogger(__name__)

SPAWN_MIN_PLAYER_DISTANCE: float = 300.0
SPAWN_ATTEMPTS: int = 10

# Next unique zombie id (global counter)
_next_zid: int = 1


def _new_zid() -> int:
    global _next_zid
    zid = _next_zid
    _next_zid += 1
    return zid


def pick_window(x: float, y: float, building: Building) -> Window:
    """Nearest window with a clear line to its approach point.

    Falls back to the nearest window by distance when none is visible.
    """
    def dist_to(w: Window) -> float:
        ax, ay = w.approach_point
        return distance(x, y, ax, ay)

    visible = [w for w in building.windows if has_line_of_sight(x, y, w, building)]
    return min(visible or building.windows, key=dist_to)


class WaveService:
    """Service for wave timing and zombie spawns.

    Args:
        event_bus: Receives WaveStarted / ZombieSpawned.
        config: Gameplay tuning (wave sizes, delays, zombie stats).
        rng: Random source for spawn positions.
    """

    def __init__(self, event_bus: EventBus, config: GameConfig | None = None,
                 rng: Optional[random.Random] = None) -> None:
        self._events = event_bus
        self._config = config or GameConfig()
        self._rng = rng or random.Random()

    def zombies_for_wave(self, wave: int) -> int:
        return self._config.zombies_base + self._config.zombies_per_wave * wave

    def zombie_speed(self, wave: int) -> float:
        cfg = self._config
        return min(cfg.zombie_max_speed,
                   cfg.zombie_base_speed + cfg.zombie_speed_per_wave * max(0, wave - 1))

    def reset(self, state: SimulationState) -> None:
        """Put ``state`` before the first wave."""
        state.wave = 0
        state.wave_timer = self._config.first_wave_delay_s
        state.zombies_to_spawn = 0
        state.spawn_timer = 0.0

    # -- Tick ------------------------------------------------------------

    def step(self, state: SimulationState, dt: float) -> None:
        """Run the wave countdown and spawn queued zombies."""
        started = False
        if state.zombies_to_spawn == 0 and not state.zombies:
            state.wave_timer = max(0.0, state.wave_timer - dt)
            if state.wave_timer <= 0:
                self.start_wave(state)
                started = True

        if state.zombies_to_spawn > 0:
            if not started:
                state.spawn_timer -= dt
            if state.spawn_timer <= 0:
                x, y = self.random_edge_position(state)
                window = pick_window(x, y, state.building)
                self.spawn_zombie(state, x, y, window.index)
                state.zombies_to_spawn -= 1
                # carry the overshoot into the next interval
                state.spawn_timer = max(0.0, state.spawn_timer + self._config.spawn_interval_s)

    def start_wave(self, state: SimulationState) -> None:
        state.wave += 1
        state.zombies_to_spawn = self.zombies_for_wave(state.wave)
        state.wave_timer = self._config.wave_delay_s
        state.spawn_timer = 0.0
        log.info("Wave %d started: %d zombies", state.wave, state.zombies_to_spawn)
        self._events.emit(WaveStarted(wave=state.wave, zombie_count=state.zombies_to_spawn))

    # -- Spawning --------------------------------------------------------

    def random_edge_position(self, state: SimulationState) -> tuple[float, float]:
        """Random point on the world boundary, preferably away from the player."""
        rng = self._rng
        pos = (0.0, 0.0)
        for _ in range(SPAWN_ATTEMPTS):
            side = rng.randrange(4)
            if side == 0:
                pos = (rng.uniform(0, WORLD_W), 0.0)
            elif side == 1:
                pos = (WORLD_W, rng.uniform(0, WORLD_H))
            elif side == 2:
                pos = (rng.uniform(0, WORLD_W), WORLD_H)
            else:
                pos = (0.0, rng.uniform(0, WORLD_H))
            if distance(pos[0], pos[1], state.player.x, state.player.y) >= SPAWN_MIN_PLAYER_DISTANCE:
                return pos
        return pos

    def spawn_zombie(self, state: SimulationState, x: float, y: float, window_index: int) -> Zombie:
        """Place a new zombie at (x, y) routed to window ``window_index``."""
        window = state.building.windows[window_index]
        zombie = Zombie(
            zid=_new_zid(),
            x=x,
            y=y,
            health=self._config.zombie_health,
            speed=self.zombie_speed(state.wave),
            target_window=window_index,
            waypoints=compute_path_to_window(x, y, window, state.building),
        )
        state.zombies[zombie.zid] = zombie
        log.debug("Zombie %d spawned at (%.0f, %.0f) -> window %d (%d waypoints)",
                  zombie.zid, x, y, window_index, len(zombie.waypoints))
        self._events.emit(ZombieSpawned(zombie_id=zombie.zid, window_index=window_index))
        return zombie
