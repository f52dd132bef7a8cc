"""Styled text rendering for lookup paths"""
from .columns import layout_cells
from .renderer import render_entries, render_entry, style_method
from .styles import IDENTITY_TEMPLATE, StyleTable, validate_template

__all__ = [
    "IDENTITY_TEMPLATE",
    "StyleTable",
    "layout_cells",
    "render_entries",
    "render_entry",
    "style_method",
    "validate_template",
]
