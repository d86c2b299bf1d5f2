"""Combo box state snapshots.

A `ComboState` is never mutated. Every update produces a new record through
`dataclasses.replace`, so any number of readers may hold a snapshot while
the reducer moves on.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable

__all__ = ["ComboState", "ComboPhase", "phase_of"]


@dataclass(frozen=True)
class ComboState:
    """Immutable snapshot of the combo box.

    Attributes:
        suggestions: Ordered suggestion labels; may be empty.
        highlighted: Index into `suggestions`, or None when nothing is highlighted.
        selected: The committed value, set for exactly one update of a select pulse.
    """

    suggestions: tuple[str, ...] = ()
    highlighted: int | None = None
    selected: str | None = None

    @classmethod
    def fresh(cls, suggestions: Iterable[str]) -> "ComboState":
        """Base state of a new epoch: the list, no highlight, no selection."""
        return cls(suggestions=tuple(suggestions))

    @property
    def has_highlight(self) -> bool:
        return self.highlighted is not None

    @property
    def highlighted_value(self) -> str | None:
        if self.highlighted is None or not self.suggestions:
            return None
        return self.suggestions[self.highlighted]

    def update(self, **changes) -> "ComboState":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        """Render contract shape: plain lists and nulls."""
        return {
            "suggestions": list(self.suggestions),
            "highlighted": self.highlighted,
            "selected": self.selected,
        }


class ComboPhase(Enum):
    """Implicit state machine of the combo box."""

    IDLE = "idle"
    FOCUSED_EMPTY = "focused-empty"
    FOCUSED_LISTING = "focused-listing"
    FOCUSED_HIGHLIGHTED = "focused-highlighted"
    COMMITTING = "committing"


def phase_of(state: ComboState, focused: bool) -> ComboPhase:
    """Derive the phase from a snapshot and the field's focus flag."""
    if state.selected is not None:
        return ComboPhase.COMMITTING
    if not focused:
        return ComboPhase.IDLE
    if not state.suggestions:
        return ComboPhase.FOCUSED_EMPTY
    if state.highlighted is None:
        return ComboPhase.FOCUSED_LISTING
    return ComboPhase.FOCUSED_HIGHLIGHTED
