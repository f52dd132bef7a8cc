"""Style table: category name -> single-placeholder ``%s`` template."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Dict, Iterator, Optional, Union

IDENTITY_TEMPLATE = "%s"

StyleKey = Union[str, Enum]


def _key(key: StyleKey) -> str:
    return key.value if isinstance(key, Enum) else str(key)


def validate_template(template: str) -> str:
    """Return ``template`` if it formats exactly one ``%s`` placeholder.

    Raises:
        ValueError: if the template has no placeholder, several of them, or
            other ``%`` directives that cannot be filled with one string.
    """
    try:
        probe = template % ("\x00",)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid style template {template!r}: {exc}") from exc
    if probe.count("\x00") != 1:
        raise ValueError(f"Style template {template!r} must contain exactly one %s")
    return template


class StyleTable(Mapping):
    """Read-only style mapping whose missing keys format as identity."""

    def __init__(self, templates: Optional[Mapping] = None):
        self._templates: Dict[str, str] = {
            _key(k): validate_template(v) for k, v in (templates or {}).items()
        }

    def __getitem__(self, key: StyleKey) -> str:
        return self._templates.get(_key(key), IDENTITY_TEMPLATE)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (str, Enum)) and _key(key) in self._templates

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __repr__(self) -> str:
        return f"StyleTable({self._templates!r})"

    def apply(self, key: StyleKey, text: str) -> str:
        return self[key] % (text,)
