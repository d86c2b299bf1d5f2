"""Actions produced by the event classifier.

Actions are a tagged variant: one frozen dataclass per kind, consumed by the
reducer's `apply_action` dispatcher (state-modifying kinds) or by the query
dispatcher (`SearchQuery`).
"""

from dataclasses import dataclass
from typing import Union

__all__ = [
    "Action",
    "Navigate",
    "SetHighlight",
    "SelectHighlighted",
    "Quit",
    "WantSuggestions",
    "SearchQuery",
]


@dataclass(frozen=True)
class Navigate:
    """Move the highlight one row up (-1) or down (+1), wrapping around."""

    delta: int

    def __post_init__(self) -> None:
        if self.delta not in (-1, 1):
            raise ValueError(f"Navigate delta must be -1 or +1, got {self.delta!r}")


@dataclass(frozen=True)
class SetHighlight:
    """Highlight a row directly (mouse hover)."""

    index: int


@dataclass(frozen=True)
class SelectHighlighted:
    """Commit the highlighted row.

    The reducer expands one selection into a pulse of two updates: the
    committing one (`commit=True`) and the reset (`commit=False`).
    """

    commit: bool = True


@dataclass(frozen=True)
class Quit:
    """Dismiss the suggestion menu."""


@dataclass(frozen=True)
class WantSuggestions:
    """Whether the field currently wants suggestions (focused)."""

    wanted: bool


@dataclass(frozen=True)
class SearchQuery:
    """A committed, debounced, non-empty search text."""

    text: str


Action = Union[Navigate, SetHighlight, SelectHighlighted, Quit, WantSuggestions, SearchQuery]
