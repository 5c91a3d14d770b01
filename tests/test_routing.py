"""Tests for peer message parsing and routing."""

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from holdout.models.messages import (
    AddPlankMessage,
    MoveMessage,
    ShootMessage,
    ZombieHitMessage,
    ZombiesSnapshot,
    parse_message,
)
from holdout.models.zombie import ZombieState
from holdout.network.router import Router
from holdout.network.serialization import decode, encode


class TestParseMessage:
    def test_parse_move(self):
        msg = parse_message({"type": "move", "x": 1.5, "y": 2, "angle": 0.3, "weapon": 1})
        assert isinstance(msg, MoveMessage)
        assert (msg.x, msg.y, msg.weapon) == (1.5, 2.0, 1)

    def test_parse_shoot(self):
        msg = parse_message({"type": "shoot", "x": 1, "y": 2, "vx": 700, "vy": 0})
        assert isinstance(msg, ShootMessage)

    def test_parse_snapshot(self):
        msg = parse_message({
            "type": "zombies",
            "zombies": [{"id": 7, "x": 100, "y": 100, "state": "hunting", "angle": 0}],
            "wave": 2, "wave_timer": 4.5, "planks": [3, 2, 1, 0],
        })
        assert isinstance(msg, ZombiesSnapshot)
        assert msg.zombies[0].state is ZombieState.HUNTING
        assert msg.planks == [3, 2, 1, 0]

    def test_parse_zombie_hit(self):
        msg = parse_message({"type": "zombieHit", "id": 3, "damage": 1.0})
        assert isinstance(msg, ZombieHitMessage)

    def test_parse_add_plank(self):
        msg = parse_message({"type": "addPlank", "index": 2})
        assert isinstance(msg, AddPlankMessage)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            parse_message({"type": "nonexistent"})

    def test_missing_type_rejected(self):
        with pytest.raises(ValidationError):
            parse_message({"x": 1})

    @pytest.mark.parametrize("raw", [
        {"type": "move", "x": 1, "y": 2},
        {"type": "move", "x": 1, "y": 2, "angle": 0, "weapon": 3},
        {"type": "zombies", "planks": [4]},
        {"type": "zombies", "planks": [-1]},
        {"type": "zombies", "wave": -1},
        {"type": "zombies", "zombies": [{"id": 1, "x": 0, "y": 0, "state": "dancing"}]},
        {"type": "zombieHit", "id": 1, "damage": 0},
        {"type": "addPlank", "index": -1},
        {"type": "shoot", "x": "left", "y": 0, "vx": 0, "vy": 0},
    ])
    def test_invalid_fields_rejected(self, raw):
        with pytest.raises(ValidationError):
            parse_message(raw)

    @pytest.mark.parametrize("raw, cls", [
        ({"type": "move", "x": 0, "y": 0, "angle": 0}, MoveMessage),
        ({"type": "shoot", "x": 0, "y": 0, "vx": 0, "vy": 0}, ShootMessage),
        ({"type": "zombies"}, ZombiesSnapshot),
        ({"type": "zombieHit", "id": 1, "damage": 1}, ZombieHitMessage),
        ({"type": "addPlank", "index": 0}, AddPlankMessage),
    ])
    def test_type_tag_selects_model(self, raw, cls):
        msg = parse_message(raw)
        assert type(msg) is cls
        assert msg.model_dump()["type"] == raw["type"]

    def test_snapshot_dumps_wire_state_names(self):
        msg = parse_message({
            "type": "zombies",
            "zombies": [{"id": 1, "x": 0, "y": 0, "state": "toWindow"}],
        })
        assert msg.model_dump(mode="json")["zombies"][0]["state"] == "toWindow"


class TestSerialization:
    def test_plain_and_compressed(self):
        data = {"type": "addPlank", "index": 1}
        assert decode(encode(data)) == data
        assert decode(encode(data, compress=True), compressed=True) == data

    def test_text_frame(self):
        assert decode('{"type":"move"}') == {"type": "move"}

    def test_non_object_rejected(self):
        with pytest.raises(ValueError):
            decode(b"[1, 2]")

    def test_garbage_rejected(self):
        with pytest.raises(ValueError):
            decode(b"not json")


class TestRouter:
    def test_register_and_list(self):
        router = Router()
        router.register("move", MagicMock())
        router.register("shoot", MagicMock())
        assert sorted(router.registered_types) == ["move", "shoot"]

    def test_dispatch_by_type(self):
        router = Router()
        move, shoot = MagicMock(), MagicMock()
        router.register("move", move)
        router.register("shoot", shoot)
        assert router.route({"type": "move", "x": 1, "y": 2, "angle": 0})
        move.assert_called_once()
        assert isinstance(move.call_args.args[0], MoveMessage)
        shoot.assert_not_called()

    def test_invalid_message_dropped(self, caplog):
        router = Router()
        handler = MagicMock()
        router.register("addPlank", handler)
        with caplog.at_level("WARNING"):
            assert not router.route({"type": "addPlank", "index": "x"})
        handler.assert_not_called()
        assert "Dropping invalid message" in caplog.text

    def test_unknown_type_dropped(self):
        router = Router()
        assert not router.route({"type": "bogus"})

    def test_valid_but_unhandled(self):
        router = Router()
        assert not router.route({"type": "addPlank", "index": 0})
