"""
Tests for heading and position integration.

Tests yaw rotation, forward direction, linear velocity and the Euler
position step.
"""

import math

import pytest
from boat_mobility.core import (
    derive_linear_velocity,
    forward_direction,
    integrate_position,
    rotate_yaw,
    wrap_angle,
)


class TestHeading:
    """Test yaw rotation about the up axis."""

    def test_right_turn(self):
        """Full right helm for 0.1 s at 1.5 rad/s turns 0.15 rad right."""
        assert rotate_yaw(0.0, 1.0, 1.5, 0.1) == pytest.approx(0.15)

    def test_left_turn(self):
        assert rotate_yaw(0.0, -1.0, 1.5, 0.1) == pytest.approx(-0.15)

    def test_no_helm(self):
        assert rotate_yaw(0.7, 0.0, 1.5, 0.1) == pytest.approx(0.7)

    def test_wraps_past_pi(self):
        yaw = rotate_yaw(math.pi - 0.05, 1.0, 1.0, 0.1)
        assert yaw == pytest.approx(-math.pi + 0.05)

    @pytest.mark.parametrize(
        "angle, expected",
        [
            (0.0, 0.0),
            (math.pi, math.pi),
            (-math.pi, math.pi),
            (3 * math.pi / 2, -math.pi / 2),
            (-4.0, -4.0 + 2 * math.pi),
        ],
    )
    def test_wrap_angle(self, angle, expected):
        assert wrap_angle(angle) == pytest.approx(expected)


class TestForwardDirection:
    """Test the heading vector convention (forward is -Z at yaw 0)."""

    def test_default_heading(self):
        assert forward_direction(0.0) == pytest.approx((0.0, 0.0, -1.0))

    def test_right_turn_points_to_positive_x(self):
        assert forward_direction(math.pi / 2) == pytest.approx((1.0, 0.0, 0.0))

    def test_about_face_points_to_positive_z(self):
        assert forward_direction(math.pi) == pytest.approx((0.0, 0.0, 1.0), abs=1e-12)

    def test_unit_length_and_horizontal(self):
        for yaw in (-2.5, -0.3, 0.0, 1.1, 3.0):
            fx, fy, fz = forward_direction(yaw)
            assert fy == 0.0
            assert math.hypot(fx, fz) == pytest.approx(1.0)

    def test_velocity_scales_with_speed(self):
        assert derive_linear_velocity(0.0, 2.0) == pytest.approx((0.0, 0.0, -2.0))
        assert derive_linear_velocity(0.0, -2.0) == pytest.approx((0.0, 0.0, 2.0))


class TestPositionIntegration:
    """Test position integration using Euler method."""

    def test_stationary_boat(self):
        pos = (10.0, 0.0, 30.0)
        assert integrate_position(pos, (0.0, 0.0, 0.0), dt=0.1) == pytest.approx(pos)

    def test_horizontal_motion(self):
        new_pos = integrate_position((0.0, 0.0, 0.0), (1.0, 0.0, 2.0), dt=0.1)
        assert new_pos == pytest.approx((0.1, 0.0, 0.2))

    def test_multiple_steps_trajectory(self):
        pos = (0.0, 0.0, 0.0)
        vel = derive_linear_velocity(math.pi / 2, 1.0)
        for _ in range(10):
            pos = integrate_position(pos, vel, 0.1)
        assert pos == pytest.approx((1.0, 0.0, 0.0), abs=1e-9)
