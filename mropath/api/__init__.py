"""
Core API for the mropath library.

Interface-agnostic: the CLI or a REPL helper builds on these objects.
"""
from .lookup_path import LookupPath, resolve_display_name

__all__ = ["LookupPath", "resolve_display_name"]
