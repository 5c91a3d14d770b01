"""Bullet service — bullet flight, wall hits and zombie hits.

Local bullets do damage: on the authority directly, on a joiner via a
ZombieHitDetected event that the network sync forwards to the host.
Remote bullets (the peer's) are visual only and vanish on contact.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from holdout.engine.effects_service import BurstKind
from holdout.loaders.game_config_loader import GameConfig
from holdout.models.projectile import Bullet
from holdout.util.constants import WORLD_H, WORLD_W, ZOMBIE_RADIUS
from holdout.util.events import ZombieDied, ZombieHitDetected
from holdout.util.geometry import distance, point_in_rect

if TYPE_CHECKING:
    from holdout.engine.effects_service import EffectsService
    from holdout.models.simulation import SimulationState
    from holdout.util.events import EventBus

log = logging.getLogger(__name__)


class BulletService:
    """Service for bullets in flight.

    Args:
        event_bus: Receives ZombieDied / ZombieHitDetected.
        effects: Particle spawner for blood and sparks.
        config: Gameplay tuning (money per hit).
    """

    def __init__(self, event_bus: EventBus, effects: EffectsService,
                 config: GameConfig | None = None) -> None:
        self._events = event_bus
        self._effects = effects
        self._config = config or GameConfig()

    # -- Tick ------------------------------------------------------------

    def step(self, state: SimulationState, dt: float) -> None:
        """Advance local and remote bullets by dt seconds."""
        state.bullets = [b for b in state.bullets if self._step_local(state, b, dt)]
        state.remote_bullets = [b for b in state.remote_bullets if self._step_remote(state, b, dt)]

    def _fly(self, state: SimulationState, bullet: Bullet, dt: float) -> bool:
        """Integrate one bullet. Returns False once it expires or hits a wall."""
        bullet.x += bullet.vx * dt
        bullet.y += bullet.vy * dt
        bullet.life -= dt
        if bullet.life <= 0:
            return False
        if not (0 <= bullet.x <= WORLD_W and 0 <= bullet.y <= WORLD_H):
            return False
        for wall in state.building.walls:
            if point_in_rect(bullet.x, bullet.y, wall):
                self._effects.burst(state, BurstKind.SPARK, bullet.x, bullet.y)
                return False
        return True

    def _step_local(self, state: SimulationState, bullet: Bullet, dt: float) -> bool:
        if not self._fly(state, bullet, dt):
            return False

        if state.role.is_authority:
            for zombie in list(state.zombies.values()):
                if distance(bullet.x, bullet.y, zombie.x, zombie.y) < ZOMBIE_RADIUS:
                    self._on_hit(state, bullet)
                    self.damage_zombie(state, zombie.zid, bullet.damage)
                    return False
        else:
            for view in state.remote_zombies.values():
                if distance(bullet.x, bullet.y, view.x, view.y) < ZOMBIE_RADIUS:
                    self._on_hit(state, bullet)
                    self._events.emit(ZombieHitDetected(zombie_id=view.zid, damage=bullet.damage))
                    return False
        return True

    def _step_remote(self, state: SimulationState, bullet: Bullet, dt: float) -> bool:
        if not self._fly(state, bullet, dt):
            return False
        targets: Iterable = state.zombies.values() if state.role.is_authority else state.remote_zombies.values()
        for target in targets:
            if distance(bullet.x, bullet.y, target.x, target.y) < ZOMBIE_RADIUS:
                return False
        return True

    def _on_hit(self, state: SimulationState, bullet: Bullet) -> None:
        state.money += self._config.money_per_hit
        self._effects.burst(state, BurstKind.BLOOD, bullet.x, bullet.y)

    # -- Damage ----------------------------------------------------------

    def damage_zombie(self, state: SimulationState, zombie_id: int, damage: float) -> bool:
        """Apply authoritative damage. Returns True if the zombie died.

        Unknown ids (already dead, or never existed) are ignored.
        """
        zombie = state.zombies.get(zombie_id)
        if zombie is None:
            log.debug("Hit on unknown zombie %d ignored", zombie_id)
            return False
        zombie.health -= damage
        log.debug("Zombie %d hit for %.1f (health %.1f)", zombie_id, damage, zombie.health)
        if zombie.health > 0:
            return False
        del state.zombies[zombie_id]
        self._events.emit(ZombieDied(zombie_id=zombie_id))
        return True
