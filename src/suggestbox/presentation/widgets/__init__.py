"""Widgets of the terminal combo box."""

from suggestbox.presentation.widgets.search_field import SearchField
from suggestbox.presentation.widgets.suggestion_menu import MenuItemRef, SuggestionMenu

__all__ = ["SearchField", "SuggestionMenu", "MenuItemRef"]
