"""
Tests for the GrADyS-SIM NG boat mobility handler.

The event loop and nodes are replaced with small fakes so the handler can
be stepped without running a simulation.
"""

import math

import pytest
from boat_mobility.config import BoatMobilityConfiguration
from boat_mobility.handler import BoatMobilityHandler, core_to_host, host_to_core
from boat_mobility.vehicle import BoatKey


class FakeEventLoop:
    def __init__(self):
        self.current_time = 0.0
        self.events = []

    def schedule_event(self, timestamp, callback, label=""):
        self.events.append((timestamp, callback, label))

    def run_next(self):
        self.events.sort(key=lambda event: event[0])
        timestamp, callback, _ = self.events.pop(0)
        self.current_time = timestamp
        callback()


class FakeEncapsulator:
    def __init__(self):
        self.telemetry = []

    def handle_telemetry(self, telemetry):
        self.telemetry.append(telemetry)


class FakeNode:
    def __init__(self, node_id, position):
        self.id = node_id
        self.position = position
        self.protocol_encapsulator = FakeEncapsulator()


@pytest.fixture
def setup():
    config = BoatMobilityConfiguration(update_rate=0.1, send_telemetry=False)
    handler = BoatMobilityHandler(config)
    loop = FakeEventLoop()
    node = FakeNode(7, (1.0, 0.0, 2.0))
    handler.inject(loop)
    handler.register_node(node)
    return handler, loop, node


class TestBoatMobilityHandler:
    """Test controller hosting inside the simulator handler."""

    def test_label(self, setup):
        handler, _, _ = setup
        assert handler.get_label() == "BoatMobilityHandler"

    def test_register_spawns_boat_at_node_position(self, setup):
        handler, _, _ = setup
        assert handler.get_node_position(7) == (1.0, 0.0, 2.0)
        assert handler.get_node_velocity(7) == (0.0, 0.0, 0.0)
        assert handler.get_node_yaw(7) == 0.0
        assert handler.get_node_state(7).is_rowing is False

    def test_unknown_node_getters_return_none(self, setup):
        handler, _, _ = setup
        assert handler.get_node_position(99) is None
        assert handler.get_node_velocity(99) is None
        assert handler.get_node_state(99) is None
        assert handler.get_node_vehicle(99) is None

    def test_initialize_schedules_first_update(self, setup):
        handler, loop, _ = setup
        handler.initialize()
        assert len(loop.events) == 1
        assert loop.events[0][0] == pytest.approx(0.1)

    def test_update_moves_node_and_reschedules(self, setup):
        handler, loop, node = setup
        handler.set_keys(7, {BoatKey.FORWARD})
        handler.initialize()
        loop.run_next()

        assert handler.get_node_state(7).current_speed == pytest.approx(0.3)
        assert node.position == pytest.approx((1.0, 0.03, 2.0))
        assert len(loop.events) == 1
        assert loop.events[0][0] == pytest.approx(0.2)

    def test_keys_persist_until_released(self, setup):
        handler, loop, _ = setup
        handler.set_keys(7, {BoatKey.FORWARD})
        handler.initialize()
        loop.run_next()
        loop.run_next()
        assert handler.get_node_state(7).current_speed == pytest.approx(0.6)

        handler.set_keys(7, frozenset())
        loop.run_next()
        assert handler.get_node_state(7).current_speed == pytest.approx(0.54)

    def test_node_moved_externally_is_respected(self, setup):
        handler, loop, node = setup
        handler.initialize()
        node.position = (50.0, 0.0, 50.0)
        loop.run_next()
        assert node.position == pytest.approx((50.0, 0.0, 50.0))

    def test_set_keys_for_unknown_node_is_ignored(self, setup):
        handler, _, _ = setup
        handler.set_keys(99, {BoatKey.FORWARD})
        assert handler.get_node_vehicle(99) is None

    def test_telemetry_decimation(self):
        config = BoatMobilityConfiguration(update_rate=0.1, telemetry_decimation=2)
        handler = BoatMobilityHandler(config)
        loop = FakeEventLoop()
        node = FakeNode(0, (0.0, 0.0, 0.0))
        handler.inject(loop)
        handler.register_node(node)
        handler.initialize()

        # 4 mobility updates interleaved with 2 telemetry deliveries
        for _ in range(6):
            loop.run_next()
        assert len(node.protocol_encapsulator.telemetry) == 2


class TestSimulatorFrame:
    """Test the mapping between simulator (z up) and controller (y up) frames."""

    def test_round_trip(self):
        v = (1.5, -2.0, 10.0)
        assert core_to_host(host_to_core(v)) == pytest.approx(v)

    def test_altitude_maps_to_up_axis(self):
        assert host_to_core((0.0, 0.0, 10.0)) == pytest.approx((0.0, 10.0, 0.0))

    def test_default_heading_is_north(self):
        # Controller forward at yaw 0 is -Z
        assert core_to_host((0.0, 0.0, -1.0)) == pytest.approx((0.0, 1.0, 0.0))

    def test_rowing_keeps_altitude(self):
        config = BoatMobilityConfiguration(update_rate=0.1, send_telemetry=False)
        handler = BoatMobilityHandler(config)
        loop = FakeEventLoop()
        node = FakeNode(0, (0.0, 0.0, 10.0))
        handler.inject(loop)
        handler.register_node(node)
        handler.set_keys(0, {BoatKey.FORWARD})
        handler.initialize()

        for _ in range(20):
            loop.run_next()

        x, y, z = node.position
        assert z == pytest.approx(10.0)
        assert x == pytest.approx(0.0, abs=1e-12)
        assert y > 5.0
        vx, vy, vz = handler.get_node_velocity(0)
        assert vz == pytest.approx(0.0)
        assert vy == pytest.approx(handler.get_node_state(0).current_speed)

    def test_right_turn_heads_east(self):
        config = BoatMobilityConfiguration(update_rate=0.1, send_telemetry=False)
        handler = BoatMobilityHandler(config)
        loop = FakeEventLoop()
        node = FakeNode(0, (0.0, 0.0, 0.0))
        handler.inject(loop)
        handler.register_node(node)
        handler.set_keys(0, {BoatKey.FORWARD, BoatKey.TURN_RIGHT})
        handler.initialize()

        # pi/2 of yaw at 1.5 rad/s, then keep rowing straight
        turn_ticks = int(round((math.pi / 2) / (1.5 * 0.1)))
        for _ in range(turn_ticks):
            loop.run_next()
        handler.set_keys(0, {BoatKey.FORWARD})
        before = node.position
        loop.run_next()

        assert node.position[0] > before[0]
        assert node.position[2] == pytest.approx(0.0)
