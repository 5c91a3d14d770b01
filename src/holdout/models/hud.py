"""HUD snapshot — the values a front end displays each frame."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Hud:
    health: float
    max_health: float
    ammo: int
    mag_size: int
    reloading: bool
    reload_progress: float
    weapon: int
    money: int
    wave: int
    wave_timer: float
    zombies_alive: int
    zombies_to_spawn: int
    repair_progress: float
    status: str
