"""Zombie AI — the four-state machine driving every simulated zombie.

States:
  toWindow  → follow waypoints to the target window's approach point
  attacking → tear planks off, one per plank_attack_time_s
  climbing  → stand in the gap for climb_time_s, then drop inside
  hunting   → chase the nearest player (terminal)

Only the authority (solo or host) runs this. A joiner calls
step_remote_contact instead, which applies contact damage from the
host's snapshot to the joiner's own player.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Optional

from holdout.engine.barricade_service import BarricadeService
from holdout.engine.player_service import damage_player
from holdout.loaders.game_config_loader import GameConfig
from holdout.models.zombie import Zombie, ZombieState
from holdout.util.constants import ARRIVAL_TOLERANCE, PLAYER_RADIUS, ZOMBIE_RADIUS
from holdout.util.events import ZombieStateChanged
from holdout.util.geometry import distance, resolve_circle_rect

if TYPE_CHECKING:
    from holdout.models.simulation import SimulationState
    from holdout.models.world import Window
    from holdout.util.events import EventBus

log = logging.getLogger(__name__)

CONTACT_DISTANCE: float = ZOMBIE_RADIUS + PLAYER_RADIUS


def steer_towards(zombie: Zombie, tx: float, ty: float, max_step: float) -> float:
    """Move ``zombie`` up to ``max_step`` toward (tx, ty) and face it.

    Returns the remaining distance before the move.
    """
    dx = tx - zombie.x
    dy = ty - zombie.y
    dist = math.hypot(dx, dy)
    if dist <= 0:
        return 0.0
    zombie.angle = math.atan2(dy, dx)
    step = min(max_step, dist)
    zombie.x += dx / dist * step
    zombie.y += dy / dist * step
    return dist


def separate(zombies: list[Zombie]) -> None:
    """Push overlapping zombies apart, half the penetration each.

    Coincident centres are split along the x axis.
    """
    min_dist = ZOMBIE_RADIUS * 2
    for i in range(len(zombies)):
        a = zombies[i]
        for j in range(i + 1, len(zombies)):
            b = zombies[j]
            dx = b.x - a.x
            dy = b.y - a.y
            d = math.hypot(dx, dy)
            if d >= min_dist:
                continue
            half = (min_dist - d) / 2
            if d == 0:
                a.x -= half
                b.x += half
                continue
            nx = dx / d
            ny = dy / d
            a.x -= nx * half
            a.y -= ny * half
            b.x += nx * half
            b.y += ny * half


class ZombieAI:
    """Steps the zombie state machine for the authority.

    Args:
        event_bus: Receives ZombieStateChanged events.
        config: Gameplay tuning (timers, contact damage).
        barricades: Removes planks for attacking zombies. A private one
            on the same bus is created when omitted.
    """

    def __init__(self, event_bus: EventBus, config: GameConfig | None = None,
                 barricades: Optional[BarricadeService] = None) -> None:
        self._events = event_bus
        self._config = config or GameConfig()
        self._barricades = barricades or BarricadeService(event_bus, self._config)

    # -- Tick ------------------------------------------------------------

    def step(self, state: SimulationState, dt: float) -> None:
        """Advance every zombie by dt seconds, then separate them."""
        zombies = list(state.zombies.values())
        for zombie in zombies:
            self.step_zombie(zombie, state, dt)
        separate(zombies)

    def step_zombie(self, zombie: Zombie, state: SimulationState, dt: float) -> None:
        window = state.building.window(zombie.target_window)
        if window is None and zombie.state is not ZombieState.HUNTING:
            log.warning("Zombie %d targets unknown window %d, hunting instead",
                        zombie.zid, zombie.target_window)
            self._transition(zombie, ZombieState.HUNTING)

        if zombie.state is ZombieState.TO_WINDOW:
            self._step_to_window(zombie, window, dt)
        elif zombie.state is ZombieState.ATTACKING:
            self._step_attacking(zombie, window, state, dt)
        elif zombie.state is ZombieState.CLIMBING:
            self._step_climbing(zombie, window, dt)
        else:
            self._step_hunting(zombie, state, dt)

        if zombie.state is not ZombieState.HUNTING:
            for wall in state.building.walls:
                resolve_circle_rect(zombie, ZOMBIE_RADIUS, wall)

    # -- States ----------------------------------------------------------

    def _step_to_window(self, zombie: Zombie, window: Window, dt: float) -> None:
        if not zombie.waypoints:
            if window.planks > 0:
                zombie.attack_timer = self._config.plank_attack_time_s
                self._transition(zombie, ZombieState.ATTACKING)
            else:
                zombie.climb_timer = self._config.climb_time_s
                self._transition(zombie, ZombieState.CLIMBING)
            return

        tx, ty = zombie.waypoints[0]
        if distance(zombie.x, zombie.y, tx, ty) <= ARRIVAL_TOLERANCE:
            zombie.waypoints.pop(0)
            return
        steer_towards(zombie, tx, ty, zombie.speed * dt)

    def _step_attacking(self, zombie: Zombie, window: Window,
                        state: SimulationState, dt: float) -> None:
        cx, cy = window.center
        zombie.angle = math.atan2(cy - zombie.y, cx - zombie.x)
        zombie.attack_timer -= dt
        if zombie.attack_timer > 0:
            return

        if self._barricades.remove_plank(state, window.index):
            log.debug("Zombie %d tore a plank off window %d", zombie.zid, window.index)
        if window.planks == 0:
            self._transition(zombie, ZombieState.TO_WINDOW)
        else:
            zombie.attack_timer = self._config.plank_attack_time_s

    def _step_climbing(self, zombie: Zombie, window: Window, dt: float) -> None:
        zombie.climb_timer -= dt
        if zombie.climb_timer > 0:
            return
        zombie.x, zombie.y = window.entry_point
        self._transition(zombie, ZombieState.HUNTING)

    def _step_hunting(self, zombie: Zombie, state: SimulationState, dt: float) -> None:
        target = self._nearest_target(zombie, state)
        if target is None:
            return
        tx, ty = target
        dist = distance(zombie.x, zombie.y, tx, ty)
        steer_towards(zombie, tx, ty, min(zombie.speed * dt, max(0.0, dist - PLAYER_RADIUS)))

        player = state.player
        if player.is_alive and distance(zombie.x, zombie.y, player.x, player.y) < CONTACT_DISTANCE:
            damage_player(state, self._events, self._config.zombie_damage_per_second * dt)

    # -- Joiner ----------------------------------------------------------

    def step_remote_contact(self, state: SimulationState, dt: float) -> None:
        """Contact damage to the local player from snapshot zombies."""
        player = state.player
        for view in state.remote_zombies.values():
            if not player.is_alive:
                return
            if view.state is not ZombieState.HUNTING:
                continue
            if distance(view.x, view.y, player.x, player.y) < CONTACT_DISTANCE:
                damage_player(state, self._events, self._config.zombie_damage_per_second * dt)

    # -- Helpers ---------------------------------------------------------

    @staticmethod
    def _nearest_target(zombie: Zombie, state: SimulationState) -> Optional[tuple[float, float]]:
        candidates: list[tuple[float, float]] = []
        if state.player.is_alive:
            candidates.append((state.player.x, state.player.y))
        if state.remote_peer is not None:
            candidates.append((state.remote_peer.x, state.remote_peer.y))
        if not candidates:
            return None
        return min(candidates, key=lambda p: distance(zombie.x, zombie.y, p[0], p[1]))

    def _transition(self, zombie: Zombie, new_state: ZombieState) -> None:
        old = zombie.state
        zombie.state = new_state
        log.debug("Zombie %d: %s -> %s", zombie.zid, old.value, new_state.value)
        self._events.emit(ZombieStateChanged(
            zombie_id=zombie.zid, old_state=old.value, new_state=new_state.value,
        ))
