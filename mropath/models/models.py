from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Protocol, Sequence, Tuple

from pydantic import BaseModel, ConfigDict


class Category(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    UNDEFINED = "undefined"


CATEGORIES: Tuple[Category, ...] = (
    Category.PUBLIC,
    Category.PROTECTED,
    Category.PRIVATE,
    Category.UNDEFINED,
)

# Style keys that are not method categories
MODULE_STYLE = "module"
OVERRIDDEN_STYLE = "overridden"
STYLE_KEYS: Tuple[str, ...] = (MODULE_STYLE,) + tuple(c.value for c in CATEGORIES) + (OVERRIDDEN_STYLE,)


@dataclass(frozen=True)
class ModuleRef:
    """One module of a resolution order.

    ``obj`` is the underlying class (``None`` for synthetic refs). A ref with an
    ``owner`` is the singleton (class-side) module of that owner.
    """
    name: str
    obj: Any = field(default=None, repr=False)
    owner: Optional["ModuleRef"] = None

    @property
    def is_singleton(self) -> bool:
        return self.owner is not None

    def singleton(self) -> "ModuleRef":
        return ModuleRef(name="", obj=self.obj, owner=self)


@dataclass(frozen=True)
class MethodInfo:
    name: str
    category: Category
    overridden: bool = False


@dataclass(frozen=True)
class Entry:
    module: ModuleRef
    module_name: str
    methods: Dict[str, MethodInfo] = field(default_factory=dict)

    @property
    def names(self) -> List[str]:
        return sorted(self.methods)

    def category_of(self, name: str) -> Category:
        return self.methods[name].category

    def is_overridden(self, name: str) -> bool:
        return self.methods[name].overridden

    def __iter__(self) -> Iterator[MethodInfo]:
        for name in self.names:
            yield self.methods[name]

    def __len__(self) -> int:
        return len(self.methods)

    def __contains__(self, name: object) -> bool:
        return name in self.methods


class DisplayOptions(BaseModel):
    """Which categories are materialized and whether overridden names are shown."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    public: bool = False
    protected: bool = False
    private: bool = False
    undefined: bool = False
    overridden: bool = False

    @classmethod
    def parse(cls, text: str) -> "DisplayOptions":
        """Build options from a comma separated list such as ``"public,overridden"``."""
        names = [part.strip().lower() for part in text.split(",") if part.strip()]
        unknown = [n for n in names if n not in cls.model_fields]
        if unknown:
            raise ValueError(f"Unknown display option(s): {', '.join(unknown)}")
        return cls(**{n: True for n in names})

    def with_flags(self, **flags: bool) -> "DisplayOptions":
        # Round-trip through the constructor so unknown flags are rejected
        return type(self)(**{**self.model_dump(), **flags})

    def enabled_categories(self) -> List[Category]:
        return [c for c in CATEGORIES if getattr(self, c.value)]


# Collaborator that knows how to query a live object model
class ObjectModel(Protocol):
    def resolution_order(self, subject: Any) -> Sequence[ModuleRef]: ...
    def classify(self, module: ModuleRef, category: Category) -> Iterable[str]: ...
    def display_name(self, module: ModuleRef) -> str: ...
    def singleton_owner(self, module: ModuleRef) -> Optional[ModuleRef]: ...
