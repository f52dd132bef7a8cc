"""
mropath - method lookup paths for Python objects

This is a pure library module with NO CLI code.
Import this in your CLI, REPL startup file, or any other application.

Usage:
    from mropath import lookup_path

    print(lookup_path(obj, private=True).grep("save"))
"""
from typing import Any

from mropath.api import LookupPath
from mropath.introspection import PythonObjectModel
from mropath.models import Category, DisplayOptions, Entry, MethodInfo, ModuleRef
from mropath.rendering import StyleTable


def lookup_path(subject: Any, **flags: bool) -> LookupPath:
    """Shortcut for ``LookupPath(subject, **flags)`` using the configured defaults."""
    return LookupPath(subject, **flags)


__all__ = [
    "Category",
    "DisplayOptions",
    "Entry",
    "LookupPath",
    "MethodInfo",
    "ModuleRef",
    "PythonObjectModel",
    "StyleTable",
    "lookup_path",
]
