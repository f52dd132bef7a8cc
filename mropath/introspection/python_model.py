import inspect
import logging
import types
from typing import Any, List, Optional, Set

from mropath.models import Category, ModuleRef

logger = logging.getLogger(__name__)

# Callables that can be reached on the class object itself
_CLASS_SIDE_TYPES = (
    classmethod,
    staticmethod,
    types.ClassMethodDescriptorType,
    types.BuiltinFunctionType,
)


class PythonObjectModel:
    """Query live Python objects for their method lookup path.

    A subject's resolution order is the MRO of its type. Class subjects are
    looked up on their class side first (classmethods and staticmethods of
    every class in the MRO, shown as ``[Name]``) and then on their metaclass.

    Methods are the routines stored in each class ``__dict__`` and are
    classified by naming convention, since Python has no enforced visibility:

    - ``private``: name-mangled names (``_Class__x``) or ``__x`` names
    - ``protected``: other single-underscore names that are not dunders
    - ``public``: everything else, dunders included
    - ``undefined``: names set to ``None`` to block an inherited routine
      (``__hash__ = None`` is the common case)
    """

    def __init__(self, instance_side: bool = False):
        self.instance_side = instance_side

    def resolution_order(self, subject: Any) -> List[ModuleRef]:
        if isinstance(subject, type):
            if self.instance_side:
                return [self.module_ref(cls) for cls in subject.__mro__]
            class_side = [self.module_ref(cls).singleton() for cls in subject.__mro__]
            return class_side + [self.module_ref(cls) for cls in type(subject).__mro__]
        return [self.module_ref(cls) for cls in type(subject).__mro__]

    @staticmethod
    def module_ref(cls: type) -> ModuleRef:
        return ModuleRef(name=_class_name(cls), obj=cls)

    def classify(self, module: ModuleRef, category: Category) -> Set[str]:
        cls = module.obj
        if not isinstance(cls, type):
            return set()
        if category == Category.UNDEFINED:
            return self._undefined_names(cls, module.is_singleton)
        return {
            name for name in self._method_names(cls, module.is_singleton)
            if _visibility(cls, name) == category
        }

    def display_name(self, module: ModuleRef) -> str:
        return module.name

    def singleton_owner(self, module: ModuleRef) -> Optional[ModuleRef]:
        return module.owner

    def _method_names(self, cls: type, class_side: bool) -> Set[str]:
        names = set()
        for name, value in vars(cls).items():
            if class_side:
                if isinstance(value, _CLASS_SIDE_TYPES):
                    names.add(name)
            elif inspect.isroutine(value):
                names.add(name)
        return names

    def _undefined_names(self, cls: type, class_side: bool) -> Set[str]:
        blocked = {name for name, value in vars(cls).items() if value is None}
        if not blocked:
            return set()
        logger.debug("%s blocks inherited names: %s", _class_name(cls), sorted(blocked))
        inherited: Set[str] = set()
        for base in cls.__mro__[1:]:
            inherited |= self._method_names(base, class_side)
        return blocked & inherited


def _class_name(cls: type) -> str:
    # Classes defined inside functions carry "<locals>" in their qualname
    return cls.__qualname__.rpartition("<locals>.")[2]


def _visibility(cls: type, name: str) -> Category:
    mangled_prefix = "_" + cls.__name__.lstrip("_") + "__"
    if name.startswith(mangled_prefix) and len(name) > len(mangled_prefix):
        return Category.PRIVATE
    is_dunder = name.startswith("__") and name.endswith("__") and len(name) > 4
    if is_dunder:
        return Category.PUBLIC
    if name.startswith("__"):
        return Category.PRIVATE
    if name.startswith("_"):
        return Category.PROTECTED
    return Category.PUBLIC
