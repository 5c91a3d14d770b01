"""Tests for wave timing and zombie spawning."""

import random

import pytest

from holdout.engine.wave_service import WaveService, pick_window
from holdout.loaders.game_config_loader import GameConfig
from holdout.models.simulation import SimulationState
from holdout.models.world import build_default_building
from holdout.models.zombie import ZombieState
from holdout.util.constants import WORLD_H, WORLD_W
from holdout.util.events import EventBus, WaveStarted, ZombieSpawned


def _make_service(seed: int = 1, **config):
    bus = EventBus()
    return WaveService(bus, GameConfig(**config), random.Random(seed)), bus


def _make_state(service: WaveService) -> SimulationState:
    state = SimulationState()
    service.reset(state)
    return state


class TestWaveFormula:
    @pytest.mark.parametrize("wave, expected", [(0, 4), (1, 6), (2, 8), (10, 24)])
    def test_zombies_for_wave(self, wave, expected):
        service, _ = _make_service()
        assert service.zombies_for_wave(wave) == expected

    def test_speed_scales_and_caps(self):
        service, _ = _make_service()
        assert service.zombie_speed(1) == pytest.approx(55)
        assert service.zombie_speed(3) == pytest.approx(63)
        assert service.zombie_speed(100) == pytest.approx(120)


class TestWaveCountdown:
    def test_reset_state(self):
        service, _ = _make_service()
        state = _make_state(service)
        assert state.wave == 0
        assert state.wave_timer == pytest.approx(5.0)

    def test_first_wave_after_delay(self):
        service, bus = _make_service()
        started = []
        bus.on(WaveStarted, started.append)
        state = _make_state(service)
        service.step(state, 4.0)
        assert state.wave == 0
        service.step(state, 1.0)
        assert state.wave == 1
        assert started == [WaveStarted(wave=1, zombie_count=6)]
        assert state.wave_timer == pytest.approx(10.0)

    def test_first_spawn_immediate_then_interval(self):
        service, _ = _make_service()
        state = _make_state(service)
        service.step(state, 5.0)
        assert len(state.zombies) == 1
        assert state.zombies_to_spawn == 5
        service.step(state, 0.5)
        assert len(state.zombies) == 1
        service.step(state, 0.5)
        assert len(state.zombies) == 2

    def test_countdown_paused_while_zombies_alive(self):
        service, _ = _make_service()
        state = _make_state(service)
        service.step(state, 5.0)
        for _ in range(5):
            service.step(state, 1.0)
        assert state.zombies_to_spawn == 0
        timer = state.wave_timer
        service.step(state, 3.0)
        assert state.wave_timer == pytest.approx(timer)
        assert state.wave == 1

    def test_next_wave_after_clear(self):
        service, _ = _make_service()
        state = _make_state(service)
        service.step(state, 5.0)
        for _ in range(5):
            service.step(state, 1.0)
        state.zombies.clear()
        service.step(state, 10.0)
        assert state.wave == 2
        assert state.zombies_to_spawn == 7  # 8 queued, one spawned this frame


class TestSpawning:
    def test_spawn_on_world_edge(self):
        service, _ = _make_service(seed=7)
        state = _make_state(service)
        for _ in range(50):
            x, y = service.random_edge_position(state)
            assert x in (0.0, WORLD_W) or y in (0.0, WORLD_H)

    def test_spawn_zombie_fields(self):
        service, bus = _make_service()
        spawned = []
        bus.on(ZombieSpawned, spawned.append)
        state = _make_state(service)
        z = service.spawn_zombie(state, 0, 1200, 2)
        assert state.zombies[z.zid] is z
        assert z.state is ZombieState.TO_WINDOW
        assert z.health == pytest.approx(3.0)
        assert z.target_window == 2
        assert z.waypoints == [pytest.approx((1270, 1272.5))]
        assert spawned == [ZombieSpawned(zombie_id=z.zid, window_index=2)]

    def test_ids_unique_and_increasing(self):
        service, _ = _make_service()
        state = _make_state(service)
        a = service.spawn_zombie(state, 0, 0, 0)
        b = service.spawn_zombie(state, 0, 0, 0)
        assert b.zid > a.zid


class TestPickWindow:
    def test_nearest_visible_window(self):
        b = build_default_building()
        assert pick_window(0, 1200, b).index == 2
        assert pick_window(3200, 1200, b).index == 3
        assert pick_window(1600, 0, b).index == 0
        assert pick_window(1427, 2400, b).index == 1


class TestSpawnCadence:
    def test_overshoot_carried_into_next_interval(self):
        service, _ = _make_service()
        state = _make_state(service)
        service.step(state, 5.0)
        assert len(state.zombies) == 1
        for _ in range(8):
            service.step(state, 0.375)
        # spawns at 5, 6, 7 and 8 seconds
        assert len(state.zombies) == 4
        assert state.zombies_to_spawn == 2

    def test_at_most_one_spawn_per_frame(self):
        service, _ = _make_service()
        state = _make_state(service)
        service.step(state, 5.0)
        service.step(state, 4.0)
        assert len(state.zombies) == 2
        service.step(state, 0.01)
        assert len(state.zombies) == 3
