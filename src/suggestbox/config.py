"""Runtime settings.

Settings come from `SUGGESTBOX_*` environment variables (a `.env` file is
loaded by the entry point) and may be overridden by CLI options.
"""

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from suggestbox.logger import get_logger

logger = get_logger("config")

WIKIPEDIA_OPENSEARCH_URL = "https://en.wikipedia.org/w/api.php?action=opensearch&format=json&search="

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class SuggestBoxSettings(BaseModel):
    """Settings for the engine and its front end."""

    endpoint: str = Field(
        default=WIKIPEDIA_OPENSEARCH_URL,
        description="Base URL the URL-encoded query is appended to",
    )
    debounce_seconds: float = Field(
        default=0.5,
        gt=0,
        description="Quiet period after the last keystroke before a lookup is issued",
    )
    log_level: str = Field(default="INFO", description="loguru level name")
    offline: bool = Field(default=False, description="Answer lookups from the built-in title list")

    model_config = ConfigDict(frozen=True)

    @field_validator("endpoint")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"endpoint must be an http(s) URL, got {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


def _env_flag(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return None
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_settings(**overrides) -> SuggestBoxSettings:
    """
    Build settings from the environment, then apply explicit overrides.

    Overrides whose value is None are ignored, so CLI options that were not
    given fall back to the environment.

    Raises:
        ValidationError: If a value is invalid
    """
    values: dict = {}
    if endpoint := os.getenv("SUGGESTBOX_ENDPOINT"):
        values["endpoint"] = endpoint
    if debounce := os.getenv("SUGGESTBOX_DEBOUNCE_SECONDS"):
        values["debounce_seconds"] = debounce
    if log_level := os.getenv("SUGGESTBOX_LOG_LEVEL"):
        values["log_level"] = log_level
    offline = _env_flag("SUGGESTBOX_OFFLINE")
    if offline is not None:
        values["offline"] = offline

    values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        settings = SuggestBoxSettings(**values)
    except ValidationError as e:
        logger.error(f"Invalid suggestbox settings: {e}")
        raise

    logger.debug(f"Settings: {settings.model_dump()}")
    return settings
