"""Textual application for suggestbox."""

from suggestbox.presentation.tui.app import SuggestBoxApp

__all__ = ["SuggestBoxApp"]
