"""Configuration helpers"""
from .settings import (
    DEFAULT_STYLES,
    Settings,
    default_display_options,
    load_env,
    load_settings,
    style_table,
)

__all__ = [
    "DEFAULT_STYLES",
    "Settings",
    "default_display_options",
    "load_env",
    "load_settings",
    "style_table",
]
