"""Boat mobility building blocks.

This package contains a keyboard-driven rowing boat controller (input
sampling, speed integration with rowing acceleration or coasting drag,
and yaw/translation pose update), an explicit frame loop, and a
GrADyS-SIM NG handler hosting the controller inside a simulation.
"""

from .config import DEFAULT_BOAT_CONTROL, DEFAULT_MAX_DT, BoatControl, BoatMobilityConfiguration
from .vehicle import BoatKey, BoatState, KeyBindings, Pose, Vehicle, Velocity3D, spawn_vehicle
from .controller import advance_vehicle, apply_input, step_vehicle, update_motion, update_pose
from .loop import BoatFrameLoop
from .handler import BoatMobilityHandler
from .core import (
    clamp_dt,
    derive_linear_velocity,
    forward_direction,
    integrate_position,
    integrate_speed,
    rotate_yaw,
    sample_input,
)

__version__ = "0.1.0"

__all__ = [
    "BoatControl",
    "BoatFrameLoop",
    "BoatKey",
    "BoatMobilityConfiguration",
    "BoatMobilityHandler",
    "BoatState",
    "DEFAULT_BOAT_CONTROL",
    "DEFAULT_MAX_DT",
    "KeyBindings",
    "Pose",
    "Vehicle",
    "Velocity3D",
    "advance_vehicle",
    "apply_input",
    "clamp_dt",
    "derive_linear_velocity",
    "forward_direction",
    "integrate_position",
    "integrate_speed",
    "rotate_yaw",
    "sample_input",
    "spawn_vehicle",
    "step_vehicle",
    "update_motion",
    "update_pose",
]
