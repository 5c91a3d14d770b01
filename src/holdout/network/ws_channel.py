"""WebSocket channel — a peer channel over a single websockets connection.

The host side listens and accepts exactly one peer; the joiner side
connects to the host's URL. Either way, one reader task decodes
incoming frames and dispatches them to the message handlers. Uses the
``websockets`` library with asyncio.
"""

from __future__ import annotations

import asyncio
import logging
import zlib
from typing import Any, Optional

import websockets
from websockets.asyncio.server import Server as WSServer

from holdout.network.channel import BaseChannel
from holdout.network.serialization import decode, encode

log = logging.getLogger(__name__)


class WebSocketChannel(BaseChannel):
    """Peer channel backed by a websockets connection.

    Args:
        compress: zlib-compress frames (both peers must agree).
        ping_interval: Keepalive ping interval in seconds.
        ping_timeout: Keepalive timeout in seconds.
        max_size: Maximum accepted frame size in bytes.
    """

    def __init__(self, compress: bool = False, ping_interval: int = 20,
                 ping_timeout: int = 10, max_size: int = 1_048_576) -> None:
        super().__init__()
        self._compress = compress
        self._ping_interval = ping_interval
        self._ping_timeout = ping_timeout
        self._max_size = max_size
        self._ws: Any = None
        self._server: Optional[WSServer] = None
        self._reader: Optional[asyncio.Task] = None
        self._done = asyncio.Event()
        self._pending: set[asyncio.Task] = set()

    # -- Lifecycle -------------------------------------------------------

    async def host(self, host: str, port: int) -> None:
        """Listen on ``host:port``; the first peer to connect is attached."""
        self._server = await websockets.serve(
            self._on_connect,
            host,
            port,
            ping_interval=self._ping_interval,
            ping_timeout=self._ping_timeout,
            max_size=self._max_size,
        )
        log.info("Hosting on ws://%s:%d, waiting for a peer", host, port)

    async def join(self, url: str) -> None:
        """Connect to a hosting peer at ``url``."""
        ws = await websockets.connect(
            url,
            ping_interval=self._ping_interval,
            ping_timeout=self._ping_timeout,
            max_size=self._max_size,
        )
        log.info("Connected to host %s", url)
        self._reader = asyncio.ensure_future(self.attach(ws))

    async def _on_connect(self, ws: Any) -> None:
        if self._ws is not None or self._closed:
            log.info("Rejecting extra peer from %s", ws.remote_address)
            await ws.close(1013, "Session full")
            return
        log.info("Peer connected from %s", ws.remote_address)
        await self.attach(ws)

    async def attach(self, ws: Any) -> None:
        """Drive an open connection until it closes.

        Fires open on entry, dispatches every decoded frame, and fires
        close exactly once on exit.
        """
        self._ws = ws
        self._fire_open()
        try:
            async for raw in ws:
                self._receive(raw)
        except websockets.ConnectionClosed as e:
            log.info("Peer connection closed: code=%s reason=%s", e.code, e.reason or "(none)")
        else:
            log.info("Peer closed cleanly")
        finally:
            self._fire_close()
            self._done.set()

    def _receive(self, raw: bytes | str) -> None:
        try:
            data = decode(raw, self._compress)
        except (ValueError, zlib.error) as e:
            log.warning("Undecodable frame dropped: %s", e)
            return
        self._dispatch(data)

    async def wait_closed(self) -> None:
        """Block until the peer connection has closed."""
        await self._done.wait()

    # -- Sending ---------------------------------------------------------

    def send(self, data: dict[str, Any]) -> None:
        """Schedule ``data`` for sending; dropped if the channel is not open."""
        if not self._open or self._ws is None:
            return
        payload = encode(data, self._compress)
        frame: bytes | str = payload if self._compress else payload.decode("utf-8")
        self._track(self._send(frame))

    def _track(self, coro: Any) -> asyncio.Task:
        """Run ``coro`` as a task held until it finishes."""
        task = asyncio.ensure_future(coro)
        self._pending.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            log.error("Background channel task failed: %r", task.exception())

    @property
    def pending_tasks(self) -> int:
        """Background sends and closes not yet finished."""
        return len(self._pending)

    async def _send(self, frame: bytes | str) -> None:
        try:
            await self._ws.send(frame)
        except websockets.ConnectionClosed:
            log.debug("Send failed, connection closed")

    def close(self) -> None:
        """Close the connection (and the listening server, if hosting)."""
        if self._server is not None:
            self._server.close()
        if self._ws is not None:
            self._track(self._ws.close())
        else:
            self._fire_close()
            self._done.set()
