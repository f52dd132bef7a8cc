"""Turn lookup path entries into a styled multi-line text block."""

from __future__ import annotations

from typing import Iterable, List, Optional

from mropath.models import MODULE_STYLE, OVERRIDDEN_STYLE, Entry, MethodInfo
from mropath.rendering.columns import layout_cells
from mropath.rendering.styles import StyleTable


def style_method(info: MethodInfo, styles: StyleTable) -> str:
    """Wrap a method name in its category style, then in the overridden style if shadowed."""
    text = styles.apply(info.category, info.name)
    if info.overridden:
        text = styles.apply(OVERRIDDEN_STYLE, text)
    return text


def render_entry(entry: Entry, styles: StyleTable, width: Optional[int] = None) -> List[str]:
    lines = [styles.apply(MODULE_STYLE, entry.module_name)]
    # Entries iterate in name order across every category
    cells = [(info.name, style_method(info, styles)) for info in entry]
    lines.extend(layout_cells(cells, width))
    return lines


def render_entries(entries: Iterable[Entry], styles: StyleTable, width: Optional[int] = None) -> str:
    """Render entries one module line each, followed by an indented method line when non-empty.

    Lines are joined with a newline and the result has no trailing newline; an
    empty sequence renders as the empty string.
    """
    lines: List[str] = []
    for entry in entries:
        lines.extend(render_entry(entry, styles, width))
    return "\n".join(lines)
