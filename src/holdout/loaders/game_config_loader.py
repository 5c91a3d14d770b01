"""Game configuration — loads tunable constants from config/game.yaml.

Provides a single ``GameConfig`` dataclass that is loaded once at startup
and then passed to every service that needs a tunable value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

log = logging.getLogger(__name__)

DEFAULT_GAME_CONFIG_PATH = "config/game.yaml"


@dataclass
class GameConfig:
    """All tunable gameplay constants.

    Loaded from ``config/game.yaml``.  Every field has a sensible default
    so a session can start even without the file.
    """

    # -- Timing ------------------------------------------------------
    frame_rate: float = 60.0
    snapshot_interval_s: float = 0.1

    # -- Viewport ----------------------------------------------------
    viewport_width: float = 1280.0
    viewport_height: float = 720.0

    # -- Player ------------------------------------------------------
    player_speed: float = 200.0
    player_max_health: float = 100.0
    mag_size: int = 8
    reload_time_s: float = 1.5
    fire_cooldown_s: float = 0.25
    bullet_speed: float = 700.0
    bullet_life_s: float = 1.2
    bullet_damage: float = 1.0

    # -- Zombies -----------------------------------------------------
    zombie_base_speed: float = 55.0
    zombie_speed_per_wave: float = 4.0
    zombie_max_speed: float = 120.0
    zombie_health: float = 3.0
    zombie_damage_per_second: float = 10.0
    plank_attack_time_s: float = 1.5
    climb_time_s: float = 1.0

    # -- Waves -------------------------------------------------------
    first_wave_delay_s: float = 5.0
    wave_delay_s: float = 10.0
    spawn_interval_s: float = 1.0
    zombies_base: int = 4
    zombies_per_wave: int = 2

    # -- Barricades --------------------------------------------------
    repair_range: float = 60.0
    repair_time_s: float = 1.5
    repair_decay_multiplier: float = 2.0

    # -- Economy -----------------------------------------------------
    money_per_hit: int = 10
    upgrade_cost_step: float = 0.5

    # -- Network -----------------------------------------------------
    ws_host: str = "0.0.0.0"
    ws_port: int = 8765
    compress_messages: bool = False


def load_game_config(path: str = DEFAULT_GAME_CONFIG_PATH) -> GameConfig:
    """Load game configuration from a YAML file.

    Missing keys fall back to dataclass defaults.  If the file does not
    exist, a warning is logged and pure defaults are returned.
    """
    p = Path(path)
    if not p.exists():
        log.warning("Game config not found at %s, using defaults", p)
        return GameConfig()

    with p.open() as f:
        raw = yaml.safe_load(f) or {}

    log.info("Loaded game config from %s (%d keys)", p, len(raw))

    unknown = sorted(k for k in raw if k not in GameConfig.__dataclass_fields__)
    if unknown:
        log.warning("Ignoring unknown config keys: %s", ", ".join(unknown))

    return GameConfig(**{
        k: v for k, v in raw.items()
        if k in GameConfig.__dataclass_fields__
    })
