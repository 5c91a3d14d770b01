"""Player models — the local survivor and the last-known remote peer."""

from __future__ import annotations

from dataclasses import dataclass

from holdout.util.constants import PLAYER_START_X, PLAYER_START_Y


@dataclass
class Player:
    """The locally controlled survivor.

    Upgradeable stats (speed, mag_size, reload_time, bullet_damage,
    max_health) live here so purchases mutate a single record.

    Attributes:
        x, y: World position.
        angle: Facing angle in radians (toward the pointer).
        health: Current hit points, never below 0.
        max_health: Health cap.
        speed: Movement speed in px/s.
        weapon: Active hotbar slot (only slot 0, the pistol, fires).
        mag_ammo: Rounds left in the magazine.
        mag_size: Magazine capacity.
        reloading: True while a reload is in progress.
        reload_timer: Seconds until the reload completes.
        reload_time: Duration of a full reload.
        weapon_cooldown: Seconds until the next shot is allowed.
        bullet_damage: Damage dealt per bullet hit.
    """

    x: float = PLAYER_START_X
    y: float = PLAYER_START_Y
    angle: float = 0.0
    health: float = 100.0
    max_health: float = 100.0
    speed: float = 200.0
    weapon: int = 0
    mag_ammo: int = 8
    mag_size: int = 8
    reloading: bool = False
    reload_timer: float = 0.0
    reload_time: float = 1.5
    weapon_cooldown: float = 0.0
    bullet_damage: float = 1.0

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    @property
    def reload_progress(self) -> float:
        """Fraction of the current reload done (0 when not reloading)."""
        if not self.reloading or self.reload_time <= 0:
            return 0.0
        return max(0.0, min(1.0, 1.0 - self.reload_timer / self.reload_time))


@dataclass
class RemotePeer:
    """Last ``move`` received from the other player. No interpolation."""

    x: float
    y: float
    angle: float = 0.0
    weapon: int = 0
