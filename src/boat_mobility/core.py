"""Pure mathematical functions for boat mobility.

This module contains stateless mathematical operations for:
- Helm input sampling (thrust axis, turn axis, rowing flag)
- Speed integration (rowing acceleration vs. coasting drag)
- Yaw rotation and forward direction
- Position integration

All functions operate on simple tuples and floats, making them
easy to test and reuse independently of the simulation framework.

Axis conventions: world up is +Y, the forward direction at yaw 0 is -Z,
and a positive yaw turns the heading toward +X (a rightward turn).
"""

import math
from typing import Container, Tuple

from .vehicle import BoatKey


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` to the closed interval [low, high]."""
    return max(low, min(high, value))


def clamp_dt(dt: float, max_dt: float) -> float:
    """Bound a host-supplied tick duration to [0, max_dt].

    Negative or non-finite durations (a stalled or rewound host clock)
    collapse to 0.0 so that the tick is a no-op instead of inverting the
    drag factor or producing unbounded jumps.

    Raises:
        ValueError: If ``max_dt`` is not a finite positive number.
    """
    if not (math.isfinite(max_dt) and max_dt > 0.0):
        raise ValueError(f"max_dt must be finite and > 0, got {max_dt!r}")
    if not math.isfinite(dt) or dt <= 0.0:
        return 0.0
    return min(dt, max_dt)


def sample_input(held: Container[BoatKey]) -> Tuple[float, float, bool]:
    """Turn the set of held logical keys into a control intent.

    Args:
        held: Any container answering ``key in held`` for BoatKey values.

    Returns:
        (thrust_axis, turn_axis, is_rowing). ``is_rowing`` is True whenever
        Forward or Backward is held, even if both are held and the thrust
        axis cancels to 0.
    """
    forward = BoatKey.FORWARD in held
    backward = BoatKey.BACKWARD in held

    thrust_axis = (1.0 if forward else 0.0) - (1.0 if backward else 0.0)
    turn_axis = (
        (1.0 if BoatKey.TURN_RIGHT in held else 0.0)
        - (1.0 if BoatKey.TURN_LEFT in held else 0.0)
    )
    is_rowing = forward or backward

    return (thrust_axis, turn_axis, is_rowing)


def apply_rowing_acceleration(
    current_speed: float,
    desired_speed: float,
    acceleration: float,
    dt: float,
) -> float:
    """Approach ``desired_speed`` with a change bounded by acceleration * dt.

    Example:
        >>> v = apply_rowing_acceleration(0.0, 5.0, 3.0, 0.1)
        >>> # Change limited to 3.0 m/s² * 0.1 s = 0.3 m/s
    """
    max_delta = acceleration * dt
    delta = clamp(desired_speed - current_speed, -max_delta, max_delta)
    return current_speed + delta


def apply_drag(current_speed: float, drag: float, dt: float) -> float:
    """Decay speed toward zero by the per-tick drag factor.

    The factor ``max(1 - drag * dt, 0)`` never goes negative, so the speed
    never changes sign and is exactly 0.0 once ``drag * dt >= 1``.
    """
    drag_factor = max(1.0 - drag * dt, 0.0)
    return current_speed * drag_factor


def integrate_speed(
    current_speed: float,
    target_speed: float,
    is_rowing: bool,
    max_speed: float,
    acceleration: float,
    drag: float,
    dt: float,
) -> float:
    """Advance the scalar boat speed by one tick.

    Rowing ticks approach ``target_speed * max_speed`` at the bounded
    acceleration (this includes target 0 when Forward and Backward cancel).
    Coasting ticks apply drag. The result is always clamped to
    [-max_speed, max_speed].

    Args:
        current_speed: Speed carried over from the previous tick (m/s).
        target_speed: Normalized thrust intent in [-1, 1].
        is_rowing: Whether thrust input is active this tick.
        max_speed: Maximum speed magnitude (m/s).
        acceleration: Maximum rate of speed change while rowing (m/s²).
        drag: Drag coefficient (1/s) applied while coasting.
        dt: Time step in seconds (already clamped).

    Returns:
        The new current speed.
    """
    if is_rowing:
        desired_speed = target_speed * max_speed
        speed = apply_rowing_acceleration(current_speed, desired_speed, acceleration, dt)
    else:
        speed = apply_drag(current_speed, drag, dt)

    return clamp(speed, -max_speed, max_speed)


def wrap_angle(angle: float) -> float:
    """Wrap an angle in radians to the interval (-pi, pi]."""
    wrapped = math.fmod(angle + math.pi, 2.0 * math.pi)
    if wrapped <= 0.0:
        wrapped += 2.0 * math.pi
    return wrapped - math.pi


def rotate_yaw(yaw: float, yaw_rate: float, turn_speed: float, dt: float) -> float:
    """Rotate the heading about the up axis by yaw_rate * turn_speed * dt."""
    return wrap_angle(yaw + yaw_rate * turn_speed * dt)


def forward_direction(yaw: float) -> Tuple[float, float, float]:
    """Unit heading vector for a yaw angle (forward is -Z at yaw 0)."""
    return (math.sin(yaw), 0.0, -math.cos(yaw))


def derive_linear_velocity(yaw: float, speed: float) -> Tuple[float, float, float]:
    """Scale the forward direction by the scalar speed."""
    fx, fy, fz = forward_direction(yaw)
    return (fx * speed, fy * speed, fz * speed)


def integrate_position(
    position: Tuple[float, float, float],
    velocity: Tuple[float, float, float],
    dt: float,
) -> Tuple[float, float, float]:
    """Update position using simple Euler integration."""
    x, y, z = position
    vx, vy, vz = velocity

    return (
        x + vx * dt,
        y + vy * dt,
        z + vz * dt,
    )
