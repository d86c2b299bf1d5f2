"""Application layer: the combo box engine and its components."""

from suggestbox.application.classifier import EventClassifier, Intents
from suggestbox.application.correlator import ResponseCorrelator
from suggestbox.application.dispatcher import QueryDispatcher
from suggestbox.application.engine import ComboBoxEngine
from suggestbox.application.reducer import StateReducer, apply_action
from suggestbox.application.suppression import SuppressionFilter

__all__ = [
    "ComboBoxEngine",
    "EventClassifier",
    "Intents",
    "QueryDispatcher",
    "ResponseCorrelator",
    "StateReducer",
    "SuppressionFilter",
    "apply_action",
]
