"""
Core API for method lookup paths

A lookup path is the ordered list of classes Python searches when resolving an
attribute on a subject, with the methods each class defines grouped by
visibility and flagged when an earlier class shadows them.
"""
import logging
import re
from typing import Any, Dict, FrozenSet, Iterator, List, Optional, Set, Tuple, Union

from mropath.introspection import PythonObjectModel
from mropath.models import Category, DisplayOptions, Entry, MethodInfo, ModuleRef, ObjectModel
from mropath.rendering import StyleTable, render_entries
from mropath.utils.settings import default_display_options, style_table

logger = logging.getLogger(__name__)

Pattern = Union[str, re.Pattern]

# Names fetched for one module, before shadow tracking
_Fetched = Tuple[ModuleRef, str, Dict[Category, FrozenSet[str]]]


def resolve_display_name(model: ObjectModel, module: ModuleRef) -> str:
    """Display name of ``module``: singleton modules wrap their owner's name in brackets."""
    owner = model.singleton_owner(module)
    if owner is None:
        return model.display_name(module)
    return "[" + resolve_display_name(model, owner) + "]"


def _matcher(pattern: Pattern):
    if isinstance(pattern, str):
        return lambda name: pattern in name
    return lambda name: pattern.search(name) is not None


class LookupPath:
    """
    Method lookup path of a subject.

    Usage:
        path = LookupPath(obj, public=True, overridden=True)
        print(path.grep("save").render())

    Options start from the process-wide defaults (see
    ``mropath.utils.settings``) unless ``options`` is given, and keyword flags
    override individual fields. Styles and options are captured once; the
    object model is queried only while constructing.
    """

    def __init__(
        self,
        subject: Any,
        options: Optional[DisplayOptions] = None,
        *,
        model: Optional[ObjectModel] = None,
        styles: Optional[StyleTable] = None,
        **flags: bool,
    ):
        base = options if options is not None else default_display_options()
        self.subject = subject
        self.options = base.with_flags(**flags) if flags else base
        self.styles = styles if styles is not None else style_table()
        self._fetched = self._fetch(model or PythonObjectModel(), subject, self.options)
        self._entries = self._build_entries(self._fetched, self.options)
        logger.debug("Built lookup path for %r with %d entries", subject, len(self._entries))

    @classmethod
    def _derive(cls, source: "LookupPath", fetched: Tuple[_Fetched, ...]) -> "LookupPath":
        path = cls.__new__(cls)
        path.subject = source.subject
        path.options = source.options
        path.styles = source.styles
        path._fetched = fetched
        path._entries = cls._build_entries(fetched, source.options)
        return path

    @staticmethod
    def _fetch(model: ObjectModel, subject: Any, options: DisplayOptions) -> Tuple[_Fetched, ...]:
        categories = options.enabled_categories()
        fetched = []
        for module in model.resolution_order(subject):
            names = {category: frozenset(model.classify(module, category)) for category in categories}
            fetched.append((module, resolve_display_name(model, module), names))
        return tuple(fetched)

    @staticmethod
    def _build_entries(fetched: Tuple[_Fetched, ...], options: DisplayOptions) -> Tuple[Entry, ...]:
        seen: Set[str] = set()
        entries = []
        for module, module_name, names in fetched:
            methods: Dict[str, MethodInfo] = {}
            for category, category_names in names.items():
                for name in category_names:
                    overridden = name in seen
                    if overridden and not options.overridden:
                        continue
                    methods[name] = MethodInfo(name, category, overridden)
            for category_names in names.values():
                seen |= category_names
            entries.append(Entry(module=module, module_name=module_name, methods=methods))
        return tuple(entries)

    @property
    def entries(self) -> Tuple[Entry, ...]:
        return self._entries

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def grep(self, pattern: Pattern) -> "LookupPath":
        """
        Return a new lookup path keeping only method names matching ``pattern``.

        A string matches by containment, a compiled regex by ``search``.
        Filtering happens before shadow tracking, so names that do not match
        never mark another module's methods as overridden.
        """
        matches = _matcher(pattern)
        fetched = tuple(
            (module, module_name, {
                category: frozenset(n for n in category_names if matches(n))
                for category, category_names in names.items()
            })
            for module, module_name, names in self._fetched
        )
        logger.debug("Filtered lookup path for %r with pattern %r", self.subject, pattern)
        return self._derive(self, fetched)

    def owner_of(self, name: str) -> Optional[Entry]:
        """Return the entry normal dispatch would find ``name`` in, or None."""
        for (_, _, names), entry in zip(self._fetched, self._entries):
            if any(name in category_names for category_names in names.values()):
                return entry
        return None

    def render(self, width: Optional[int] = None) -> str:
        return render_entries(self._entries, self.styles, width)

    def module_names(self) -> List[str]:
        return [entry.module_name for entry in self._entries]

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"<LookupPath {self.subject!r}: {' > '.join(self.module_names())}>"
