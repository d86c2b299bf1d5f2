"""
Utility functions for suggestbox.
"""

import os


def get_project_root() -> str:
    """
    Get the project root directory (parent of src/suggestbox).

    Returns:
        Absolute path to the project root directory
    """
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def truncate(text: str, limit: int = 50) -> str:
    """Shorten text for log lines, marking the cut with an ellipsis."""
    return f"{text[:limit]}{'...' if len(text) > limit else ''}"
