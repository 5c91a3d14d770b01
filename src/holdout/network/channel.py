"""Peer channel — the bidirectional message pipe between two players.

The simulation never talks to a transport directly; it sees a Channel
that can send dicts and calls back on message, open and close. Two
implementations exist: the in-memory LoopbackChannel here (tests, local
play) and the websockets-based WebSocketChannel.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol

from holdout.network.serialization import decode, encode

log = logging.getLogger(__name__)

MessageHandler = Callable[[dict[str, Any]], Any]
LifecycleHandler = Callable[[], None]


class Channel(Protocol):
    @property
    def is_open(self) -> bool: ...

    def send(self, data: dict[str, Any]) -> None: ...

    def on_message(self, handler: MessageHandler) -> None: ...

    def on_open(self, handler: LifecycleHandler) -> None: ...

    def on_close(self, handler: LifecycleHandler) -> None: ...

    def close(self) -> None: ...


class BaseChannel:
    """Handler bookkeeping shared by the concrete channels.

    Open and close handlers fire at most once each.
    """

    def __init__(self) -> None:
        self._message_handlers: list[MessageHandler] = []
        self._open_handlers: list[LifecycleHandler] = []
        self._close_handlers: list[LifecycleHandler] = []
        self._open = False
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self._open

    def on_message(self, handler: MessageHandler) -> None:
        self._message_handlers.append(handler)

    def on_open(self, handler: LifecycleHandler) -> None:
        self._open_handlers.append(handler)

    def on_close(self, handler: LifecycleHandler) -> None:
        self._close_handlers.append(handler)

    def _fire_open(self) -> None:
        if self._open or self._closed:
            return
        self._open = True
        for handler in list(self._open_handlers):
            handler()

    def _fire_close(self) -> None:
        if self._closed:
            return
        self._open = False
        self._closed = True
        for handler in list(self._close_handlers):
            handler()

    def _dispatch(self, data: dict[str, Any]) -> None:
        for handler in list(self._message_handlers):
            handler(data)


class LoopbackChannel(BaseChannel):
    """In-memory channel endpoint. Create connected endpoints with pair().

    Messages go through the real wire encoding so anything that would
    not survive JSON fails here too. Delivery is synchronous.
    """

    def __init__(self, compress: bool = False) -> None:
        super().__init__()
        self._peer: Optional[LoopbackChannel] = None
        self._compress = compress

    @classmethod
    def pair(cls, compress: bool = False) -> tuple[LoopbackChannel, LoopbackChannel]:
        a = cls(compress)
        b = cls(compress)
        a._peer = b
        b._peer = a
        return a, b

    def open(self) -> None:
        """Open both endpoints (fires open handlers on each)."""
        self._fire_open()
        if self._peer is not None:
            self._peer._fire_open()

    def send(self, data: dict[str, Any]) -> None:
        if not self._open or self._peer is None:
            log.debug("Loopback send on closed channel dropped: %s", data.get("type"))
            return
        raw = encode(data, self._compress)
        self._peer._dispatch(decode(raw, self._compress))

    def close(self) -> None:
        """Close both endpoints (fires close handlers on each)."""
        self._fire_close()
        if self._peer is not None:
            self._peer._fire_close()
