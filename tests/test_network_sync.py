"""Two sessions connected over a loopback channel."""

import random

import pytest

from holdout.engine.session import GameSession
from holdout.models.input import InputState
from holdout.models.projectile import Bullet
from holdout.models.simulation import Role
from holdout.models.zombie import ZombieState, ZombieView
from holdout.network.channel import LoopbackChannel
from holdout.util.constants import STATUS_CONNECTED, STATUS_DISCONNECTED
from holdout.util.events import PeerConnected, PeerDisconnected, PlankRepairCompleted


def _make_pair(open_channel: bool = True):
    host_ch, join_ch = LoopbackChannel.pair()
    host = GameSession(Role.HOST, channel=host_ch, rng=random.Random(1))
    joiner = GameSession(Role.JOINER, channel=join_ch, rng=random.Random(2))
    if open_channel:
        host_ch.open()
    return host, joiner, host_ch, join_ch


class TestLifecycle:
    def test_open_sets_status_and_emits(self):
        host, joiner, host_ch, _ = _make_pair(open_channel=False)
        connected = []
        joiner.events.on(PeerConnected, connected.append)
        host_ch.open()
        assert host.state.status == STATUS_CONNECTED
        assert joiner.state.status == STATUS_CONNECTED
        assert len(connected) == 1

    def test_close_clears_remote_player_only(self):
        host, joiner, host_ch, _ = _make_pair()
        disconnected = []
        joiner.events.on(PeerDisconnected, disconnected.append)
        host.step(InputState(), 0.1)
        joiner.state.remote_zombies[3] = ZombieView(zid=3, x=1, y=2, state=ZombieState.HUNTING)
        assert joiner.state.remote_peer is not None
        host_ch.close()
        assert joiner.state.remote_peer is None
        assert joiner.state.status == STATUS_DISCONNECTED
        assert 3 in joiner.state.remote_zombies
        assert len(disconnected) == 1

    def test_nothing_sent_after_close(self):
        host, joiner, host_ch, _ = _make_pair()
        host_ch.close()
        host.step(InputState(), 0.1)
        assert joiner.state.remote_peer is None

    def test_peer_session_needs_channel(self):
        with pytest.raises(ValueError):
            GameSession(Role.HOST)


class TestMove:
    def test_move_every_frame_last_wins(self):
        host, joiner, _, _ = _make_pair()
        joiner.state.player.x = 700
        joiner.step(InputState(), 0.0)
        joiner.state.player.x = 710
        joiner.step(InputState(), 0.0)
        assert host.state.remote_peer.x == pytest.approx(710)
        assert host.state.remote_peer.y == pytest.approx(joiner.state.player.y)


class TestSnapshot:
    def test_snapshot_applied_verbatim(self):
        host, joiner, host_ch, _ = _make_pair()
        host_ch.send({
            "type": "zombies",
            "zombies": [{"id": 7, "x": 100, "y": 100, "state": "hunting", "angle": 0}],
            "wave": 2, "wave_timer": 3.5, "planks": [3, 2, 1, 0],
        })
        assert joiner.state.remote_zombies == {
            7: ZombieView(zid=7, x=100, y=100, state=ZombieState.HUNTING, angle=0),
        }
        assert joiner.state.wave == 2
        assert joiner.state.wave_timer == pytest.approx(3.5)
        assert joiner.state.building.plank_counts == [3, 2, 1, 0]

    def test_snapshot_replaces_previous(self):
        host, joiner, host_ch, _ = _make_pair()
        host_ch.send({"type": "zombies", "zombies": [{"id": 1, "x": 0, "y": 0, "state": "toWindow"}]})
        host_ch.send({"type": "zombies", "zombies": [{"id": 2, "x": 5, "y": 5, "state": "climbing"}]})
        assert list(joiner.state.remote_zombies) == [2]

    def test_plank_loss_in_snapshot_spawns_debris(self):
        host, joiner, host_ch, _ = _make_pair()
        host_ch.send({"type": "zombies", "planks": [2, 3, 3, 3]})
        assert joiner.state.particles

    def test_host_sends_snapshot_on_interval(self):
        host, joiner, _, _ = _make_pair()
        z = host.simulation.waves.spawn_zombie(host.state, 0, 1200, 2)
        host.step(InputState(), 0.05)
        assert joiner.state.remote_zombies == {}
        host.step(InputState(), 0.05)
        assert z.zid in joiner.state.remote_zombies
        view = joiner.state.remote_zombies[z.zid]
        assert (view.x, view.y) == pytest.approx((z.x, z.y))
        assert view.state is z.state

    def test_joiner_does_not_simulate_zombies(self):
        host, joiner, _, _ = _make_pair()
        for _ in range(100):
            joiner.step(InputState(), 0.1)
        assert joiner.state.zombies == {}
        assert joiner.state.wave == 0

    def test_host_ignores_snapshots(self):
        host, joiner, _, join_ch = _make_pair()
        join_ch.send({"type": "zombies", "wave": 9})
        assert host.state.wave == 0


class TestShooting:
    def test_shot_mirrored_as_remote_bullet(self):
        host, joiner, _, _ = _make_pair()
        host.state.player.x, host.state.player.y = 500, 500
        assert host.simulation.players.fire(host.state)
        assert len(joiner.state.remote_bullets) == 1
        b = joiner.state.remote_bullets[0]
        assert (b.x, b.y) == pytest.approx((518, 509.5))
        assert b.damage == 0.0

    def test_joiner_hit_applied_by_host(self):
        host, joiner, _, _ = _make_pair()
        z = host.simulation.waves.spawn_zombie(host.state, 500, 500, 2)
        host.sync.send_snapshot()
        joiner.state.bullets.append(Bullet(x=500, y=500, vx=0, vy=0, life=1.0, damage=1.0))
        joiner.step(InputState(), 0.01)
        assert z.health == pytest.approx(2.0)
        assert joiner.state.money == 10
        assert host.state.money == 0

    def test_joiner_kill_removes_host_zombie(self):
        host, joiner, _, join_ch = _make_pair()
        z = host.simulation.waves.spawn_zombie(host.state, 500, 500, 2)
        join_ch.send({"type": "zombieHit", "id": z.zid, "damage": 3.0})
        assert z.zid not in host.state.zombies

    def test_hit_on_unknown_zombie_ignored(self):
        host, joiner, _, join_ch = _make_pair()
        join_ch.send({"type": "zombieHit", "id": 123456, "damage": 3.0})
        assert host.state.zombies == {}


class TestPlanks:
    def test_joiner_repair_goes_through_host(self):
        host, joiner, _, _ = _make_pair()
        host.state.building.windows[0].planks = 1
        joiner.state.building.windows[0].planks = 1
        joiner.events.emit(PlankRepairCompleted(window_index=0))
        assert host.state.building.windows[0].planks == 2
        assert joiner.state.building.windows[0].planks == 2

    def test_joiner_repair_not_applied_without_host(self):
        host, joiner, host_ch, _ = _make_pair()
        host_ch.close()
        joiner.state.building.windows[0].planks = 1
        joiner.events.emit(PlankRepairCompleted(window_index=0))
        assert joiner.state.building.windows[0].planks == 1

    def test_host_repair_mirrored(self):
        host, joiner, _, _ = _make_pair()
        host.state.building.windows[1].planks = 2
        joiner.state.building.windows[1].planks = 2
        host.events.emit(PlankRepairCompleted(window_index=1))
        assert host.state.building.windows[1].planks == 3
        assert joiner.state.building.windows[1].planks == 3

    def test_bad_window_index_ignored(self):
        host, joiner, _, join_ch = _make_pair()
        join_ch.send({"type": "addPlank", "index": 99})
        assert host.state.building.plank_counts == [3, 3, 3, 3]


class TestMalformed:
    @pytest.mark.parametrize("raw", [
        {"type": "bogus"},
        {"type": "move"},
        {"type": "zombies", "planks": [7]},
        {"no_type": True},
    ])
    def test_malformed_dropped(self, raw):
        host, joiner, host_ch, _ = _make_pair()
        host_ch.send(raw)
        assert joiner.state.remote_zombies == {}
        assert joiner.state.building.plank_counts == [3, 3, 3, 3]


class TestSnapshotRate:
    @pytest.mark.parametrize("fps", [30, 60, 144])
    def test_ten_per_second_at_any_frame_rate(self, fps):
        host, joiner, _, join_ch = _make_pair()
        received = []
        join_ch.on_message(lambda m: m.get("type") == "zombies" and received.append(m))
        for _ in range(fps * 10):
            host.step(InputState(), 1.0 / fps)
        assert len(received) in (99, 100)

    def test_long_frame_does_not_burst(self):
        host, joiner, _, join_ch = _make_pair()
        received = []
        join_ch.on_message(lambda m: m.get("type") == "zombies" and received.append(m))
        host.step(InputState(), 1.0)
        host.step(InputState(), 0.01)
        host.step(InputState(), 0.01)
        assert len(received) == 2
