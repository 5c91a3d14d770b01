"""Peer message models.

Typed Pydantic models for every message exchanged between the two
players. Each message type gets its own model, discriminated by the
``type`` field; anything that does not match is rejected at parse time.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from holdout.models.zombie import ZombieState
from holdout.util.constants import MAX_PLANKS, WEAPON_SLOTS


# -- Base ----------------------------------------------------------------

class PeerMessage(BaseModel):
    """Base class for all peer messages."""

    type: str


# -- Player --------------------------------------------------------------

class MoveMessage(PeerMessage):
    """Sender's position, aim and weapon slot. Sent every frame."""

    type: Literal["move"] = "move"
    x: float
    y: float
    angle: float
    weapon: int = Field(default=0, ge=0, lt=WEAPON_SLOTS)


class ShootMessage(PeerMessage):
    """A bullet the sender just fired."""

    type: Literal["shoot"] = "shoot"
    x: float
    y: float
    vx: float
    vy: float


# -- Zombies (host → joiner) --------------------------------------------

class ZombieEntry(BaseModel):
    id: int
    x: float
    y: float
    state: ZombieState
    angle: float = 0.0


class ZombiesSnapshot(PeerMessage):
    """Authoritative zombie list plus wave and barricade status."""

    type: Literal["zombies"] = "zombies"
    zombies: list[ZombieEntry] = []
    wave: int = Field(default=0, ge=0)
    wave_timer: float = Field(default=0.0, ge=0)
    planks: list[Annotated[int, Field(ge=0, le=MAX_PLANKS)]] = []


# -- Joiner → host -------------------------------------------------------

class ZombieHitMessage(PeerMessage):
    """Joiner's bullet hit a zombie; the host applies the damage."""

    type: Literal["zombieHit"] = "zombieHit"
    id: int
    damage: float = Field(gt=0)


# -- Barricades ----------------------------------------------------------

class AddPlankMessage(PeerMessage):
    """A plank was repaired onto window ``index``."""

    type: Literal["addPlank"] = "addPlank"
    index: int = Field(ge=0)


# -- Parsing -------------------------------------------------------------

AnyPeerMessage = Annotated[
    Union[MoveMessage, ShootMessage, ZombiesSnapshot, ZombieHitMessage, AddPlankMessage],
    Field(discriminator="type"),
]

_adapter: TypeAdapter[Any] = TypeAdapter(AnyPeerMessage)


def parse_message(data: dict[str, Any]) -> PeerMessage:
    """Parse a raw dict into the matching typed message model.

    Raises:
        pydantic.ValidationError: unknown ``type`` or invalid fields.
    """
    return _adapter.validate_python(data)
