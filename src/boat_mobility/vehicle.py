"""Vehicle record for a controllable boat.

A Vehicle owns its pose, velocity, helm state and tuning constants. The
controller stages mutate pose, velocity and state in place every tick;
the control block is frozen at spawn time.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from .config import DEFAULT_BOAT_CONTROL, BoatControl


class BoatKey(Enum):
    """Logical helm keys queried from the input collaborator."""

    FORWARD = "forward"
    BACKWARD = "backward"
    TURN_LEFT = "turn_left"
    TURN_RIGHT = "turn_right"


@dataclass
class Pose:
    """Position (meters) and heading (radians about the +Y axis)."""

    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    yaw: float = 0.0


@dataclass
class Velocity3D:
    """Linear velocity (m/s) and normalized yaw rate in [-1, 1]."""

    lin: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    ang_yaw: float = 0.0


@dataclass
class BoatState:
    """Per-tick helm state; ``target_speed`` is the raw thrust axis in [-1, 1]."""

    current_speed: float = 0.0
    target_speed: float = 0.0
    is_rowing: bool = False


@dataclass
class Vehicle:
    """One boat: pose, velocity and helm state, plus its fixed tuning constants."""

    vehicle_id: int
    control: BoatControl
    pose: Pose = field(default_factory=Pose)
    velocity: Velocity3D = field(default_factory=Velocity3D)
    state: BoatState = field(default_factory=BoatState)


def spawn_vehicle(
    vehicle_id: int = 0,
    control: Optional[BoatControl] = None,
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0),
    yaw: float = 0.0,
) -> Vehicle:
    """Create a boat at rest.

    Args:
        vehicle_id: Identifier used by the frame loop / simulator handler.
        control: Tuning constants. Defaults to the stock rowing boat
            (max_speed=5.0, acceleration=3.0, turn_speed=1.5, drag=1.0).
        position: Initial position, world origin by default.
        yaw: Initial heading in radians.
    """
    return Vehicle(
        vehicle_id=vehicle_id,
        control=control if control is not None else DEFAULT_BOAT_CONTROL,
        pose=Pose(position=tuple(position), yaw=yaw),
    )


# Physical key names as reported by the keyboard backend.
DEFAULT_KEY_BINDINGS: Dict[str, BoatKey] = {
    "W": BoatKey.FORWARD,
    "ArrowUp": BoatKey.FORWARD,
    "S": BoatKey.BACKWARD,
    "ArrowDown": BoatKey.BACKWARD,
    "A": BoatKey.TURN_LEFT,
    "ArrowLeft": BoatKey.TURN_LEFT,
    "D": BoatKey.TURN_RIGHT,
    "ArrowRight": BoatKey.TURN_RIGHT,
}


class KeyBindings:
    """Map physical key names onto logical helm keys.

    Usage:
        bindings = KeyBindings()
        held = bindings.resolve({"W", "D"})
        # -> frozenset({BoatKey.FORWARD, BoatKey.TURN_RIGHT})
    """

    def __init__(self, bindings: Optional[Dict[str, BoatKey]] = None):
        self._bindings = dict(DEFAULT_KEY_BINDINGS if bindings is None else bindings)

    def bind(self, physical_key: str, logical_key: BoatKey) -> None:
        self._bindings[physical_key] = logical_key

    def resolve(self, pressed: Iterable[str]) -> FrozenSet[BoatKey]:
        """Return the logical keys held given the pressed physical keys.

        Unbound physical keys are ignored.
        """
        return frozenset(
            self._bindings[key] for key in pressed if key in self._bindings
        )
