"""Per-tick boat controller.

Three stages run in strict order for each vehicle and tick:

1. Input sampler: held keys -> target speed, rowing flag, yaw rate.
2. Motion integrator: state + control + dt -> current speed.
3. Pose updater: rotate, re-derive forward, scale by speed, translate.

Nothing feeds back from the pose updater into the earlier stages within
the same tick.
"""

import logging
from typing import Callable, Container, Union

from .config import DEFAULT_MAX_DT
from .core import (
    clamp_dt,
    derive_linear_velocity,
    integrate_position,
    integrate_speed,
    rotate_yaw,
    sample_input,
)
from .vehicle import BoatKey, Vehicle

logger = logging.getLogger(__name__)

HeldKeys = Union[Container[BoatKey], Callable[[BoatKey], bool]]


class _HeldQuery:
    """Adapt an ``is_held(key) -> bool`` callable to the ``in`` protocol."""

    def __init__(self, is_held: Callable[[BoatKey], bool]):
        self._is_held = is_held

    def __contains__(self, key: BoatKey) -> bool:
        return bool(self._is_held(key))


def apply_input(vehicle: Vehicle, held: HeldKeys) -> None:
    """Sample the helm keys and write the intent into the vehicle."""
    if callable(held):
        held = _HeldQuery(held)

    thrust_axis, turn_axis, is_rowing = sample_input(held)

    vehicle.state.target_speed = thrust_axis
    vehicle.state.is_rowing = is_rowing
    vehicle.velocity.ang_yaw = turn_axis


def update_motion(vehicle: Vehicle, dt: float) -> None:
    """Advance ``state.current_speed`` by one tick of rowing or coasting."""
    control = vehicle.control
    state = vehicle.state

    state.current_speed = integrate_speed(
        state.current_speed,
        state.target_speed,
        state.is_rowing,
        control.max_speed,
        control.acceleration,
        control.drag,
        dt,
    )


def update_pose(vehicle: Vehicle, dt: float) -> None:
    """Rotate the heading, then move along the rotated forward direction.

    The linear velocity is derived from the heading after this tick's
    rotation so that the boat always travels where it points.
    """
    pose = vehicle.pose
    velocity = vehicle.velocity

    pose.yaw = rotate_yaw(pose.yaw, velocity.ang_yaw, vehicle.control.turn_speed, dt)
    velocity.lin = derive_linear_velocity(pose.yaw, vehicle.state.current_speed)
    pose.position = integrate_position(pose.position, velocity.lin, dt)


def advance_vehicle(vehicle: Vehicle, held: HeldKeys, dt: float) -> None:
    """Run the three stages in order with an already-clamped ``dt``."""
    apply_input(vehicle, held)
    update_motion(vehicle, dt)
    update_pose(vehicle, dt)


def step_vehicle(
    vehicle: Vehicle,
    held: HeldKeys,
    dt: float,
    max_dt: float = DEFAULT_MAX_DT,
) -> float:
    """Run one full controller tick for a vehicle.

    Args:
        vehicle: The boat to update in place.
        held: Held logical keys, either a container of BoatKey or an
            ``is_held(BoatKey) -> bool`` query.
        dt: Elapsed time reported by the host clock (seconds).
        max_dt: Upper bound applied to ``dt``.

    Returns:
        The tick duration actually integrated after clamping.
    """
    applied_dt = clamp_dt(dt, max_dt)
    if applied_dt != dt:
        logger.debug(
            "Vehicle %s: clamped dt %r to %r", vehicle.vehicle_id, dt, applied_dt
        )

    advance_vehicle(vehicle, held, applied_dt)

    return applied_dt
