"""Tests for state snapshots, actions and phases."""

import dataclasses

import pytest

from suggestbox.domain.actions import Navigate, SelectHighlighted
from suggestbox.domain.state import ComboPhase, ComboState, phase_of


class TestComboState:
    """Tests for ComboState."""

    def test_defaults(self):
        """Test the initial snapshot is empty."""
        state = ComboState()

        assert state.suggestions == ()
        assert state.highlighted is None
        assert state.selected is None
        assert state.has_highlight is False

    def test_fresh_copies_list_into_tuple(self):
        """Test fresh() builds an epoch base from any iterable."""
        items = ["London", "Los Angeles"]
        state = ComboState.fresh(items)
        items.append("Lyon")

        assert state == ComboState(suggestions=("London", "Los Angeles"))

    def test_is_immutable(self):
        """Test snapshots cannot be mutated in place."""
        state = ComboState()

        with pytest.raises(dataclasses.FrozenInstanceError):
            state.highlighted = 1

    def test_update_returns_new_snapshot(self):
        """Test update() leaves the original untouched."""
        state = ComboState.fresh(["a", "b"])
        updated = state.update(highlighted=1)

        assert state.highlighted is None
        assert updated.highlighted == 1
        assert updated.highlighted_value == "b"

    def test_to_dict(self):
        """Test the render-contract shape."""
        state = ComboState(suggestions=("a",), highlighted=0, selected=None)

        assert state.to_dict() == {"suggestions": ["a"], "highlighted": 0, "selected": None}


class TestPhase:
    """Tests for phase_of."""

    @pytest.mark.parametrize(
        "state,focused,phase",
        [
            (ComboState(), False, ComboPhase.IDLE),
            (ComboState(), True, ComboPhase.FOCUSED_EMPTY),
            (ComboState.fresh(["a"]), True, ComboPhase.FOCUSED_LISTING),
            (ComboState(suggestions=("a",), highlighted=0), True, ComboPhase.FOCUSED_HIGHLIGHTED),
            (ComboState(selected="a"), True, ComboPhase.COMMITTING),
            (ComboState(selected="a"), False, ComboPhase.COMMITTING),
        ],
    )
    def test_phase_of(self, state, focused, phase):
        """Test the phase derived from snapshot and focus."""
        assert phase_of(state, focused) is phase


class TestActions:
    """Tests for action records."""

    def test_navigate_accepts_only_unit_steps(self):
        """Test Navigate rejects deltas other than -1 and +1."""
        assert Navigate(1).delta == 1
        assert Navigate(-1).delta == -1

        with pytest.raises(ValueError):
            Navigate(2)
        with pytest.raises(ValueError):
            Navigate(0)

    def test_select_defaults_to_commit(self):
        """Test a plain SelectHighlighted commits."""
        assert SelectHighlighted().commit is True
        assert SelectHighlighted() == SelectHighlighted(commit=True)
