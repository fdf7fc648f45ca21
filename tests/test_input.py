"""
Tests for helm input sampling and key bindings.
"""

import pytest
from boat_mobility.core import sample_input
from boat_mobility.vehicle import BoatKey, KeyBindings


class TestSampleInput:
    """Test the conversion of held keys into a control intent."""

    def test_nothing_held(self):
        assert sample_input(frozenset()) == (0.0, 0.0, False)

    def test_forward(self):
        assert sample_input({BoatKey.FORWARD}) == (1.0, 0.0, True)

    def test_backward(self):
        assert sample_input({BoatKey.BACKWARD}) == (-1.0, 0.0, True)

    def test_forward_and_backward_cancel_but_still_row(self):
        thrust, turn, rowing = sample_input({BoatKey.FORWARD, BoatKey.BACKWARD})
        assert thrust == 0.0
        assert turn == 0.0
        assert rowing is True

    def test_turning_alone_does_not_row(self):
        assert sample_input({BoatKey.TURN_RIGHT}) == (0.0, 1.0, False)
        assert sample_input({BoatKey.TURN_LEFT}) == (0.0, -1.0, False)

    def test_both_turn_keys_cancel(self):
        assert sample_input({BoatKey.TURN_LEFT, BoatKey.TURN_RIGHT}) == (0.0, 0.0, False)

    def test_all_keys(self):
        assert sample_input(set(BoatKey)) == (0.0, 0.0, True)


class TestKeyBindings:
    """Test physical-to-logical key resolution."""

    def test_default_layout(self):
        bindings = KeyBindings()
        assert bindings.resolve({"W", "D"}) == frozenset({BoatKey.FORWARD, BoatKey.TURN_RIGHT})
        assert bindings.resolve({"ArrowDown", "ArrowLeft"}) == frozenset(
            {BoatKey.BACKWARD, BoatKey.TURN_LEFT}
        )

    def test_unbound_keys_are_ignored(self):
        assert KeyBindings().resolve({"Space", "Q"}) == frozenset()

    def test_custom_binding(self):
        bindings = KeyBindings({})
        bindings.bind("I", BoatKey.FORWARD)
        assert bindings.resolve(["I", "W"]) == frozenset({BoatKey.FORWARD})

    def test_two_physical_keys_for_one_logical_key(self):
        assert KeyBindings().resolve({"W", "ArrowUp"}) == frozenset({BoatKey.FORWARD})

    @pytest.mark.parametrize("key", list(BoatKey))
    def test_every_logical_key_has_a_default(self, key):
        assert key in KeyBindings().resolve(
            {"W", "S", "A", "D"}
        )
