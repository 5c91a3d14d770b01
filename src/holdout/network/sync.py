"""Network sync — keeps two peers' simulations in step over a Channel.

Outgoing:
  move       every frame
  shoot      on ShotFired
  zombies    host only, every snapshot_interval_s
  zombieHit  joiner only, on ZombieHitDetected
  addPlank   when a repair completes (see GameSession)

Incoming messages are last-write-wins; there are no sequence numbers
and nothing is replayed. When the channel closes the remote player is
cleared but all other mirrored state is kept as it was.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from holdout.engine.effects_service import BurstKind
from holdout.models.messages import (
    AddPlankMessage,
    MoveMessage,
    ShootMessage,
    ZombieEntry,
    ZombieHitMessage,
    ZombiesSnapshot,
)
from holdout.models.player import RemotePeer
from holdout.models.projectile import Bullet
from holdout.models.simulation import Role
from holdout.models.zombie import ZombieView
from holdout.network.router import Router
from holdout.util.constants import STATUS_CONNECTED, STATUS_DISCONNECTED
from holdout.util.events import (
    PeerConnected,
    PeerDisconnected,
    ShotFired,
    ZombieHitDetected,
)

if TYPE_CHECKING:
    from holdout.engine.simulation import Simulation
    from holdout.models.messages import PeerMessage
    from holdout.models.simulation import SimulationState
    from holdout.network.channel import Channel
    from holdout.util.events import EventBus

log = logging.getLogger(__name__)


class NetworkSync:
    """Bridges one SimulationState and one peer Channel.

    Args:
        state: The local simulation state (role must be host or joiner).
        channel: Connection to the other player.
        event_bus: Bus the simulation services emit on.
        simulation: Services used to apply incoming actions.
    """

    def __init__(self, state: SimulationState, channel: Channel,
                 event_bus: EventBus, simulation: Simulation) -> None:
        self._state = state
        self._channel = channel
        self._events = event_bus
        self._sim = simulation
        self._config = simulation.config
        self._snapshot_timer = 0.0

        self.router = Router()
        self.router.register("move", self._on_move)
        self.router.register("shoot", self._on_shoot)
        self.router.register("addPlank", self._on_add_plank)
        if state.role is Role.HOST:
            self.router.register("zombieHit", self._on_zombie_hit)
        else:
            self.router.register("zombies", self._on_zombies)
            event_bus.on(ZombieHitDetected, self._send_zombie_hit)
        event_bus.on(ShotFired, self._send_shoot)

        channel.on_message(self.router.route)
        channel.on_open(self._on_open)
        channel.on_close(self._on_close)

    @property
    def is_host(self) -> bool:
        return self._state.role is Role.HOST

    # -- Per-frame -------------------------------------------------------

    def step(self, dt: float) -> None:
        """Send this frame's outgoing traffic."""
        if not self._channel.is_open:
            return
        player = self._state.player
        self._send(MoveMessage(x=player.x, y=player.y, angle=player.angle, weapon=player.weapon))

        if self.is_host:
            interval = self._config.snapshot_interval_s
            self._snapshot_timer += dt
            if self._snapshot_timer >= interval:
                # carry the remainder, at most one interval of backlog
                self._snapshot_timer = min(self._snapshot_timer - interval, interval)
                self.send_snapshot()

    def send_snapshot(self) -> None:
        state = self._state
        self._send(ZombiesSnapshot(
            zombies=[
                ZombieEntry(id=z.zid, x=z.x, y=z.y, state=z.state, angle=z.angle)
                for z in state.zombies.values()
            ],
            wave=state.wave,
            wave_timer=state.wave_timer,
            planks=state.building.plank_counts,
        ))

    def send_add_plank(self, index: int) -> None:
        self._send(AddPlankMessage(index=index))

    # -- Outgoing --------------------------------------------------------

    def _send(self, message: PeerMessage) -> None:
        if self._channel.is_open:
            self._channel.send(message.model_dump(mode="json"))

    def _send_shoot(self, event: ShotFired) -> None:
        self._send(ShootMessage(x=event.x, y=event.y, vx=event.vx, vy=event.vy))

    def _send_zombie_hit(self, event: ZombieHitDetected) -> None:
        self._send(ZombieHitMessage(id=event.zombie_id, damage=event.damage))

    # -- Incoming --------------------------------------------------------

    def _on_move(self, msg: MoveMessage) -> None:
        self._state.remote_peer = RemotePeer(x=msg.x, y=msg.y, angle=msg.angle, weapon=msg.weapon)

    def _on_shoot(self, msg: ShootMessage) -> None:
        self._state.remote_bullets.append(Bullet(
            x=msg.x, y=msg.y, vx=msg.vx, vy=msg.vy,
            life=self._config.bullet_life_s,
        ))

    def _on_zombies(self, msg: ZombiesSnapshot) -> None:
        state = self._state
        state.remote_zombies = {
            e.id: ZombieView(zid=e.id, x=e.x, y=e.y, state=e.state, angle=e.angle)
            for e in msg.zombies
        }
        state.wave = msg.wave
        state.wave_timer = msg.wave_timer
        for index, planks in enumerate(msg.planks):
            window = state.building.window(index)
            if window is None:
                log.warning("Snapshot carries planks for unknown window %d", index)
                continue
            if planks < window.planks:
                cx, cy = window.center
                self._sim.effects.burst(state, BurstKind.DEBRIS, cx, cy)
            elif planks > window.planks:
                window.pop = 0.0
            window.planks = planks

    def _on_zombie_hit(self, msg: ZombieHitMessage) -> None:
        self._sim.bullets.damage_zombie(self._state, msg.id, msg.damage)

    def _on_add_plank(self, msg: AddPlankMessage) -> None:
        applied = self._sim.barricades.apply_add_plank(self._state, msg.index)
        if applied and self.is_host:
            self.send_add_plank(msg.index)

    # -- Lifecycle -------------------------------------------------------

    def _on_open(self) -> None:
        log.info("Peer channel open (%s)", self._state.role.value)
        self._state.status = STATUS_CONNECTED
        self._events.emit(PeerConnected())

    def _on_close(self) -> None:
        log.info("Peer channel closed")
        self._state.remote_peer = None
        self._state.status = STATUS_DISCONNECTED
        self._events.emit(PeerDisconnected())
