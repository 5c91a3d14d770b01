"""Message router — dispatches incoming peer messages to handlers.

Handlers are plain callables receiving the parsed message. Messages
that fail validation (unknown type, missing or invalid fields) are
logged and dropped; the session keeps running.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from pydantic import ValidationError

from holdout.models.messages import PeerMessage, parse_message

log = logging.getLogger(__name__)

Handler = Callable[[PeerMessage], None]


class Router:
    """Message dispatcher.

    Register handlers for message types, then call route() with raw dicts.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def register(self, msg_type: str, handler: Handler) -> None:
        """Register a handler for a message type.

        Args:
            msg_type: The message type string (e.g. ``"move"``).
            handler: Callable ``(message) -> None``.
        """
        self._handlers[msg_type] = handler
        log.debug("Handler registered: %s", msg_type)

    @property
    def registered_types(self) -> list[str]:
        """List of all message types that have a handler."""
        return list(self._handlers.keys())

    def route(self, raw: dict[str, Any]) -> bool:
        """Parse and dispatch a raw message dict.

        Returns:
            True if a handler ran, False if the message was dropped.
        """
        try:
            message = parse_message(raw)
        except ValidationError as exc:
            log.warning("Dropping invalid message type=%r: %d error(s)",
                        raw.get("type"), exc.error_count())
            return False
        handler = self._handlers.get(message.type)
        if handler is None:
            log.debug("No handler for message type: %s", message.type)
            return False
        handler(message)
        return True
