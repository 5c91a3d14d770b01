"""Player service — movement, aiming, weapon handling for the local player.

Per frame, for a living player:
1. movement from held keys (diagonal scaled), clamped to the world
2. collision against every wall, then every window rect
3. aim at the pointer (screen space + camera)
4. weapon slot switching and manual reload
5. cooldown / reload countdown
6. firing, when the pointer was clicked this frame

No network I/O; a shot is announced through ShotFired.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from holdout.loaders.game_config_loader import GameConfig
from holdout.models.player import Player
from holdout.models.projectile import Bullet
from holdout.util.constants import (
    DIAGONAL_SCALE,
    GUN_TIP_X,
    GUN_TIP_Y,
    KEYS_DOWN,
    KEYS_LEFT,
    KEYS_RELOAD,
    KEYS_RIGHT,
    KEYS_UP,
    PISTOL_SLOT,
    PLAYER_RADIUS,
    WEAPON_KEYS,
    WORLD_H,
    WORLD_W,
)
from holdout.util.events import PlayerDamaged, PlayerDied, ShotFired
from holdout.util.geometry import resolve_circle_rect

if TYPE_CHECKING:
    from holdout.models.input import InputState
    from holdout.models.simulation import SimulationState
    from holdout.util.events import EventBus

log = logging.getLogger(__name__)


def new_player(config: GameConfig) -> Player:
    """A fresh player with stats taken from the config."""
    return Player(
        health=config.player_max_health,
        max_health=config.player_max_health,
        speed=config.player_speed,
        mag_ammo=config.mag_size,
        mag_size=config.mag_size,
        reload_time=config.reload_time_s,
        bullet_damage=config.bullet_damage,
    )


def gun_tip(player: Player) -> tuple[float, float]:
    """Muzzle position: the local gun offset rotated by the player's angle."""
    cos_a = math.cos(player.angle)
    sin_a = math.sin(player.angle)
    return (
        player.x + GUN_TIP_X * cos_a - GUN_TIP_Y * sin_a,
        player.y + GUN_TIP_X * sin_a + GUN_TIP_Y * cos_a,
    )


def damage_player(state: SimulationState, events: EventBus, amount: float) -> None:
    """Apply damage to the local player; health never drops below 0.

    PlayerDied fires once, on the hit that brings health to 0.
    """
    player = state.player
    if not player.is_alive or amount <= 0:
        return
    player.health = max(0.0, player.health - amount)
    events.emit(PlayerDamaged(amount=amount, health=player.health))
    if player.health == 0:
        log.info("Player died at elapsed=%.1fs (wave %d)", state.elapsed, state.wave)
        events.emit(PlayerDied())


class PlayerService:
    """Service for the locally controlled player.

    Args:
        event_bus: Receives ShotFired.
        config: Gameplay tuning (cooldown, bullet speed and lifetime).
    """

    def __init__(self, event_bus: EventBus, config: GameConfig | None = None) -> None:
        self._events = event_bus
        self._config = config or GameConfig()

    # -- Tick ------------------------------------------------------------

    def step(self, state: SimulationState, inp: InputState, dt: float) -> None:
        """Advance the local player by dt seconds."""
        player = state.player
        if not player.is_alive:
            return

        self._move(state, inp, dt)
        player.angle = math.atan2(
            inp.pointer_y + state.camera_y - player.y,
            inp.pointer_x + state.camera_x - player.x,
        )

        for key, slot in WEAPON_KEYS.items():
            if key in inp.pressed:
                player.weapon = slot

        if inp.just_pressed(KEYS_RELOAD) and not player.reloading and player.mag_ammo < player.mag_size:
            self.start_reload(player)

        if player.weapon_cooldown > 0:
            player.weapon_cooldown = max(0.0, player.weapon_cooldown - dt)
        if player.reloading:
            player.reload_timer -= dt
            if player.reload_timer <= 0:
                player.reloading = False
                player.reload_timer = 0.0
                player.mag_ammo = player.mag_size

        if inp.fire:
            self.fire(state)

    def _move(self, state: SimulationState, inp: InputState, dt: float) -> None:
        player = state.player
        dx = 0.0
        dy = 0.0
        if inp.held(KEYS_UP):
            dy -= 1
        if inp.held(KEYS_DOWN):
            dy += 1
        if inp.held(KEYS_LEFT):
            dx -= 1
        if inp.held(KEYS_RIGHT):
            dx += 1
        if dx and dy:
            dx *= DIAGONAL_SCALE
            dy *= DIAGONAL_SCALE

        player.x += dx * player.speed * dt
        player.y += dy * player.speed * dt
        player.x = max(PLAYER_RADIUS, min(WORLD_W - PLAYER_RADIUS, player.x))
        player.y = max(PLAYER_RADIUS, min(WORLD_H - PLAYER_RADIUS, player.y))

        # windows block the player regardless of plank count
        for wall in state.building.walls:
            resolve_circle_rect(player, PLAYER_RADIUS, wall)
        for window in state.building.windows:
            resolve_circle_rect(player, PLAYER_RADIUS, window.rect)

    # -- Weapon ----------------------------------------------------------

    @staticmethod
    def start_reload(player: Player) -> None:
        player.reloading = True
        player.reload_timer = player.reload_time

    def fire(self, state: SimulationState) -> bool:
        """Try to fire the pistol. Returns True if a bullet was spawned.

        An empty magazine starts a reload instead of firing.
        """
        player = state.player
        if not player.is_alive or player.weapon != PISTOL_SLOT:
            return False
        if player.weapon_cooldown > 0 or player.reloading:
            return False
        if player.mag_ammo <= 0:
            self.start_reload(player)
            return False

        x, y = gun_tip(player)
        speed = self._config.bullet_speed
        vx = math.cos(player.angle) * speed
        vy = math.sin(player.angle) * speed
        state.bullets.append(Bullet(
            x=x, y=y, vx=vx, vy=vy,
            life=self._config.bullet_life_s,
            damage=player.bullet_damage,
        ))
        player.mag_ammo -= 1
        player.weapon_cooldown = self._config.fire_cooldown_s
        self._events.emit(ShotFired(x=x, y=y, vx=vx, vy=vy))
        return True
