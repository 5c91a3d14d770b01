"""Serialization — JSON encoding/decoding of peer messages with optional compression."""

from __future__ import annotations

import json
import zlib
from typing import Any


def encode(data: dict[str, Any], compress: bool = False) -> bytes:
    """Encode a message dict to bytes (compact JSON, optionally zlib-compressed)."""
    payload = json.dumps(data, separators=(",", ":")).encode("utf-8")
    if compress:
        payload = zlib.compress(payload)
    return payload


def decode(raw: bytes | str, compressed: bool = False) -> dict[str, Any]:
    """Decode a frame to a message dict.

    Raises:
        ValueError: the frame is not valid JSON or not a JSON object
            (json.JSONDecodeError and UnicodeDecodeError are ValueErrors).
        zlib.error: ``compressed`` is set but the frame is not zlib data.
    """
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    if compressed:
        raw = zlib.decompress(raw)
    data = json.loads(raw.decode("utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Message must be a JSON object")
    return data
