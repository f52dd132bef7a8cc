"""Process-wide defaults for display options and styles.

Values come from the environment (``MROPATH_*`` variables). Entry points call
:func:`load_env` first so a ``.env`` file in the working directory is honored.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from mropath.models import STYLE_KEYS, DisplayOptions
from mropath.rendering.styles import StyleTable, validate_template

logger = logging.getLogger(__name__)

ENV_PREFIX = "MROPATH_"
DEFAULT_OPTIONS = "public,protected,overridden"
DEFAULT_LOG_LEVEL = "WARNING"

DEFAULT_STYLES: Dict[str, str] = {
    "module": "\033[1;37m%s\033[0m",      # white
    "public": "\033[1;32m%s\033[0m",      # green
    "protected": "\033[1;33m%s\033[0m",   # yellow
    "private": "\033[1;31m%s\033[0m",     # red
    "undefined": "\033[1;34m%s\033[0m",   # blue
    "overridden": "\033[1;30m%s\033[0m",  # black
}

_FALSE_VALUES = {"0", "false", "no", "off", "never"}


class Settings(BaseModel):
    """Validated configuration snapshot."""

    model_config = ConfigDict(frozen=True)

    options: DisplayOptions = Field(default_factory=lambda: DisplayOptions.parse(DEFAULT_OPTIONS))
    styles: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_STYLES))
    log_level: str = Field(DEFAULT_LOG_LEVEL, description="Log level name for entry points")
    width: Optional[int] = Field(None, gt=0, description="Column width for method lines")

    @field_validator("styles")
    @classmethod
    def check_styles(cls, value: Dict[str, str]) -> Dict[str, str]:
        unknown = sorted(set(value) - set(STYLE_KEYS))
        if unknown:
            raise ValueError(f"Unknown style key(s): {', '.join(unknown)}")
        return {key: validate_template(template) for key, template in value.items()}

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    def style_table(self) -> StyleTable:
        return StyleTable(self.styles)


def load_env() -> None:
    """Load environment variables from .env file."""
    load_dotenv()


def _decode_escapes(value: str) -> str:
    # Lets "\033[1m%s\033[0m" be written literally in a .env file
    return value.encode("latin-1", "backslashreplace").decode("unicode_escape")


def _is_disabled(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in _FALSE_VALUES


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build a :class:`Settings` from ``environ`` (defaults to ``os.environ``).

    Raises:
        ValueError: for unknown option names, invalid templates, log levels or widths.
    """
    env = os.environ if environ is None else environ

    def get(name: str) -> Optional[str]:
        value = env.get(ENV_PREFIX + name)
        return value if value not in (None, "") else None

    options_text = get("OPTIONS")
    styles = {} if _is_disabled(get("COLOR")) else dict(DEFAULT_STYLES)
    for key in STYLE_KEYS:
        template = get("STYLE_" + key.upper())
        if template is not None:
            styles[key] = _decode_escapes(template)

    values: Dict[str, object] = {
        "options": DisplayOptions.parse(options_text if options_text is not None else DEFAULT_OPTIONS),
        "styles": styles,
    }
    if get("LOG_LEVEL") is not None:
        values["log_level"] = get("LOG_LEVEL")
    if get("WIDTH") is not None:
        values["width"] = get("WIDTH")

    settings = Settings(**values)
    logger.debug("Loaded settings: options=%s width=%s", settings.options, settings.width)
    return settings


def default_display_options() -> DisplayOptions:
    """Return the process-wide default display options."""
    return load_settings().options


def style_table() -> StyleTable:
    """Return the process-wide style table; unconfigured keys format as identity."""
    return load_settings().style_table()
