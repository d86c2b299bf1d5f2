"""Domain layer: immutable data, events and collaborator protocols."""

from suggestbox.domain.actions import (
    Action,
    Navigate,
    Quit,
    SearchQuery,
    SelectHighlighted,
    SetHighlight,
    WantSuggestions,
)
from suggestbox.domain.state import ComboPhase, ComboState, phase_of

__all__ = [
    "Action",
    "Navigate",
    "SetHighlight",
    "SelectHighlighted",
    "Quit",
    "WantSuggestions",
    "SearchQuery",
    "ComboState",
    "ComboPhase",
    "phase_of",
]
