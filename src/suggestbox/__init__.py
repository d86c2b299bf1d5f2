"""suggestbox - a search-suggestion combo box driven by event streams."""

from loguru import logger

__version__ = "0.1.0"

# Silent when used as a library; setup_logger() turns logging on.
logger.disable("suggestbox")
