"""
Boat mobility handler for GrADyS-SIM NG.

This handler hosts the boat controller inside the simulator: the event
loop is the host scheduler, the protocol sets which helm keys are held,
and every ``update_rate`` seconds each registered node is stepped through
input sampling, speed integration and pose update.
"""

import logging
from typing import Dict, Optional, Tuple

from gradysim.simulator.event import EventLoop
from gradysim.simulator.node import Node
from gradysim.simulator.handler.interface import INodeHandler
from gradysim.protocol.messages.telemetry import Telemetry

from .config import BoatMobilityConfiguration
from .controller import HeldKeys, step_vehicle
from .vehicle import BoatState, Vehicle, spawn_vehicle

logger = logging.getLogger(__name__)

Vector3 = Tuple[float, float, float]


# GrADyS-SIM positions are (x east, y north, z up); the controller works in
# (x right, y up, z back) so that a boat at yaw 0 heads north.
def host_to_core(v: Vector3) -> Vector3:
    """Convert a simulator vector (z up) into the controller frame (y up)."""
    x, y, z = v
    return (x, z, -y)


def core_to_host(v: Vector3) -> Vector3:
    """Convert a controller vector (y up) into the simulator frame (z up)."""
    x, y, z = v
    return (x, -z, y)


class BoatMobilityHandler(INodeHandler):
    """
    Keyboard-style boat mobility handler for GrADyS-SIM NG.

    Usage:
        config = BoatMobilityConfiguration(update_rate=0.02)
        handler = BoatMobilityHandler(config)

        # In your protocol:
        handler.set_keys(node_id, {BoatKey.FORWARD, BoatKey.TURN_RIGHT})
    """

    def __init__(self, config: BoatMobilityConfiguration):
        """
        Initialize the boat mobility handler.

        Args:
            config: Tick rate, boat tuning constants and telemetry settings.
        """
        self._config = config
        self._loop: EventLoop = None
        self._nodes: Dict[int, Node] = {}

        # Per-node boat record and currently held keys
        self._vehicles: Dict[int, Vehicle] = {}
        self._held: Dict[int, HeldKeys] = {}

        self._update_counter: Dict[int, int] = {}

    def get_label(self) -> str:
        """Return the handler label for identification."""
        return "BoatMobilityHandler"

    def register_node(self, node: Node):
        """Spawn a boat at rest at the node's starting position."""
        node_id = node.id
        self._nodes[node_id] = node
        self._vehicles[node_id] = spawn_vehicle(
            node_id, control=self._config.control, position=host_to_core(node.position)
        )
        self._held[node_id] = frozenset()
        self._update_counter[node_id] = 0

    def inject(self, event_loop: EventLoop):
        """
        Inject the event loop into the handler.

        Args:
            event_loop: The event loop for scheduling periodic updates.
        """
        self._loop = event_loop

    def initialize(self):
        """Start the periodic controller loop."""
        if self._nodes:
            self._loop.schedule_event(
                self._loop.current_time + self._config.update_rate,
                self._mobility_update
            )

    def handle_timer(self, timer: str):
        """Handle timer events (not used by this handler)."""
        pass

    def handle_packet(self, message: str):
        """Handle incoming packets (not used by this handler)."""
        pass

    def finish(self):
        """Cleanup when simulation ends (not used by this handler)."""
        pass

    def finalize(self):
        """Finalize handler after simulation ends (not used by this handler)."""
        pass

    def after_simulation_step(self, iteration: int, time: float):
        """Called after each simulation step (not used by this handler)."""
        pass

    def set_keys(self, node_id: int, held: HeldKeys) -> None:
        """
        Set the helm keys held for a node.

        The keys stay held until replaced. Release everything with an empty
        set to let the boat coast.

        Args:
            node_id: Identifier of the node to control.
            held: Container of BoatKey values (or an is_held callable).
        """
        if node_id not in self._vehicles:
            logger.warning("set_keys for unregistered node %s ignored", node_id)
            return
        self._held[node_id] = held

    def get_node_vehicle(self, node_id: int) -> Optional[Vehicle]:
        return self._vehicles.get(node_id)

    def get_node_state(self, node_id: int) -> Optional[BoatState]:
        vehicle = self._vehicles.get(node_id)
        return vehicle.state if vehicle is not None else None

    def get_node_velocity(self, node_id: int) -> Optional[Tuple[float, float, float]]:
        """
        Get the current linear velocity of a node.

        Returns:
            Velocity vector (vx, vy, vz) in m/s in simulator coordinates,
            or None if node not registered
        """
        vehicle = self._vehicles.get(node_id)
        return core_to_host(vehicle.velocity.lin) if vehicle is not None else None

    def get_node_yaw(self, node_id: int) -> Optional[float]:
        vehicle = self._vehicles.get(node_id)
        return vehicle.pose.yaw if vehicle is not None else None

    def get_node_position(self, node_id: int) -> Optional[Tuple[float, float, float]]:
        node = self._nodes.get(node_id)
        return node.position if node is not None else None

    def _mobility_update(self):
        """
        Perform a single controller tick for all nodes and reschedule.
        """
        dt = self._config.update_rate

        for node_id, node in self._nodes.items():
            vehicle = self._vehicles[node_id]

            # Other handlers may have moved the node since the last tick
            vehicle.pose.position = host_to_core(node.position)

            step_vehicle(vehicle, self._held[node_id], dt, self._config.max_dt)
            node.position = core_to_host(vehicle.pose.position)

            self._update_counter[node_id] += 1
            if self._should_emit_telemetry(node_id):
                self._emit_telemetry(node)

        self._loop.schedule_event(
            self._loop.current_time + self._config.update_rate,
            self._mobility_update
        )

    def _should_emit_telemetry(self, node_id: int) -> bool:
        if not self._config.send_telemetry:
            return False

        count = self._update_counter[node_id]
        return (count % self._config.telemetry_decimation) == 0

    def _emit_telemetry(self, node: Node):
        """Deliver a Telemetry message with the node position to its protocol."""
        telemetry = Telemetry(current_position=node.position)

        def send_telemetry():
            node.protocol_encapsulator.handle_telemetry(telemetry)

        self._loop.schedule_event(
            self._loop.current_time,
            send_telemetry,
            f"Node {node.id} handle_telemetry"
        )
