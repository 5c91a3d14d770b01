"""Typed event bus — decoupled communication between simulation services.

Services emit small frozen events; the session, the effects service and
the network sync subscribe to the ones they care about.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, TypeVar, Type

T = TypeVar("T")


# -- Zombie events -------------------------------------------------------

@dataclass(frozen=True)
class ZombieSpawned:
    """A zombie was placed on the world boundary."""
    zombie_id: int
    window_index: int


@dataclass(frozen=True)
class ZombieStateChanged:
    """A zombie moved to another AI state."""
    zombie_id: int
    old_state: str
    new_state: str


@dataclass(frozen=True)
class ZombieDied:
    """A zombie's health dropped to zero and it was removed."""
    zombie_id: int


@dataclass(frozen=True)
class ZombieHitDetected:
    """A joiner bullet overlapped a snapshot zombie (host applies the damage)."""
    zombie_id: int
    damage: float


# -- Barricade events ----------------------------------------------------

@dataclass(frozen=True)
class PlankRemoved:
    """A zombie tore a plank off a window."""
    window_index: int
    planks: int
    x: float
    y: float


@dataclass(frozen=True)
class PlankAdded:
    """A plank was nailed back onto a window."""
    window_index: int
    planks: int


@dataclass(frozen=True)
class PlankRepairCompleted:
    """Repair progress on a window reached 1.0; a plank should be added."""
    window_index: int


# -- Wave events ---------------------------------------------------------

@dataclass(frozen=True)
class WaveStarted:
    """A new wave began spawning."""
    wave: int
    zombie_count: int


# -- Player events -------------------------------------------------------

@dataclass(frozen=True)
class ShotFired:
    """The local player fired a bullet."""
    x: float
    y: float
    vx: float
    vy: float


@dataclass(frozen=True)
class PlayerDamaged:
    """The local player lost health."""
    amount: float
    health: float


@dataclass(frozen=True)
class PlayerDied:
    """The local player's health reached zero."""


@dataclass(frozen=True)
class UpgradePurchased:
    """An upgrade (or medkit) was bought."""
    index: int
    level: int
    cost: int


# -- Peer events ---------------------------------------------------------

@dataclass(frozen=True)
class PeerConnected:
    """The peer channel opened."""


@dataclass(frozen=True)
class PeerDisconnected:
    """The peer channel closed."""


# -- Event Bus -----------------------------------------------------------

class EventBus:
    """Simple synchronous event bus with typed events.

    Usage:
        bus = EventBus()
        bus.on(ZombieDied, lambda e: print(e.zombie_id))
        bus.emit(ZombieDied(zombie_id=42))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable[[Any], None]]] = defaultdict(list)

    def on(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for an event type."""
        self._handlers[event_type].append(handler)

    def off(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Unregister a handler."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: object) -> None:
        """Emit an event to all registered handlers."""
        for handler in list(self._handlers.get(type(event), [])):
            handler(event)

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
