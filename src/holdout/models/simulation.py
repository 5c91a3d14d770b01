"""Simulation state — everything one session mutates frame by frame.

Created once at session start and handed to every service. Exactly one
tick per frame mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from holdout.models.player import Player, RemotePeer
from holdout.models.projectile import Bullet, Particle
from holdout.models.world import Building, build_default_building
from holdout.models.zombie import Zombie, ZombieView


class Role(str, Enum):
    """Which side of a session this process plays.

    solo and host run the zombie simulation; a joiner only mirrors the
    host's snapshots.
    """

    SOLO = "solo"
    HOST = "host"
    JOINER = "joiner"

    @property
    def is_authority(self) -> bool:
        return self is not Role.JOINER


@dataclass
class SimulationState:
    """Aggregate game state for one session.

    Attributes:
        role: Session role, fixed at start.
        building: The defended building (walls and windows).
        player: The local player.
        remote_peer: Last known state of the other player, or None.
        zombies: Simulated zombies by id (authority only).
        remote_zombies: Snapshot copies by id (joiner only).
        bullets: Bullets fired locally.
        remote_bullets: Bullets fired by the peer (visual only).
        particles: Visual particles.
        wave: Current wave number (0 before the first wave).
        wave_timer: Countdown to the next wave in seconds.
        zombies_to_spawn: Zombies still queued for the current wave.
        spawn_timer: Countdown to the next spawn in seconds.
        money: Money available for upgrades.
        upgrade_levels: Level per upgrade index.
        camera_x, camera_y: Top-left corner of the viewport in world space.
        elapsed: Total simulated time in seconds.
        status: Connection status line for the HUD.
    """

    role: Role = Role.SOLO
    building: Building = field(default_factory=build_default_building)
    player: Player = field(default_factory=Player)
    remote_peer: Optional[RemotePeer] = None
    zombies: dict[int, Zombie] = field(default_factory=dict)
    remote_zombies: dict[int, ZombieView] = field(default_factory=dict)
    bullets: list[Bullet] = field(default_factory=list)
    remote_bullets: list[Bullet] = field(default_factory=list)
    particles: list[Particle] = field(default_factory=list)
    wave: int = 0
    wave_timer: float = 0.0
    zombies_to_spawn: int = 0
    spawn_timer: float = 0.0
    money: int = 0
    upgrade_levels: list[int] = field(default_factory=list)
    camera_x: float = 0.0
    camera_y: float = 0.0
    elapsed: float = 0.0
    status: str = ""

    @property
    def zombies_alive(self) -> int:
        """Zombies currently in the world (snapshot count on a joiner)."""
        if self.role.is_authority:
            return len(self.zombies)
        return len(self.remote_zombies)
