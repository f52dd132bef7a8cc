"""Data models and collaborator protocols"""
from .models import (
    CATEGORIES,
    MODULE_STYLE,
    OVERRIDDEN_STYLE,
    STYLE_KEYS,
    Category,
    DisplayOptions,
    Entry,
    MethodInfo,
    ModuleRef,
    ObjectModel,
)

__all__ = [
    "CATEGORIES",
    "MODULE_STYLE",
    "OVERRIDDEN_STYLE",
    "STYLE_KEYS",
    "Category",
    "DisplayOptions",
    "Entry",
    "MethodInfo",
    "ModuleRef",
    "ObjectModel",
]
