"""
Small helpers shared by the options, parser and values layers.

- Unset: the "argument omitted" marker, for places where None is a real value
  (a default for a typed cast, an explicit console, a missing descr).
- coalesce(): swap Unset for a fallback.
- rename(): give generated callables readable names in tracebacks and reprs.
- mirror(): read-only property over a private "_field".

    >>> coalesce(Unset, 8)
    8
    >>> coalesce(0, 8)
    0
"""
import builtins
import functools
from collections.abc import Mapping, Sequence, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker.

    There is exactly one instance. It is falsy, prints as "Unset", can take
    part in PEP 604 unions (``str | Unset``) and cannot be subclassed.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __or__(self, other, /):
        try:
            return UnsetType | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | UnsetType
        except TypeError:
            return NotImplemented

    def __init_subclass__(cls, **kwargs):
        raise TypeError("UnsetType cannot be subclassed")


Unset = UnsetType()


def coalesce(value, fallback=None, /):
    """return fallback when value is Unset, value otherwise (even if falsy)."""
    return fallback if value is Unset else value


def _apply_name(function, name):
    if not builtins.callable(function):
        raise TypeError("rename() target must be callable, not %s" % type(function).__name__)
    if not isinstance(name, str):
        raise TypeError("rename() name must be a string, not %s" % type(name).__name__)
    try:
        function.__name__ = function.__qualname__ = name
    except (AttributeError, TypeError):
        raise TypeError("rename() target does not allow renaming") from None
    return function


def rename(*args):
    """
    rename(function, name) renames in place and returns function.
    rename(name) returns a decorator doing the same.
    """
    if len(args) == 2:
        return _apply_name(*args)
    if len(args) != 1:
        raise TypeError("rename() expects 1 or 2 arguments, got %d" % len(args))
    if not isinstance(name := args[0], str):
        raise TypeError("rename() name must be a string, not %s" % type(name).__name__)
    return _apply_name(lambda function: _apply_name(function, name), "rename")


def _readonly(value):
    # containers leave through an immutable view
    match value:
        case str():
            return value
        case Mapping():
            return MappingProxyType(value)
        case Set():
            return frozenset(value)
        case Sequence():
            return tuple(value)
    return value


def mirror(name, /):
    """property serving self._<name> through a read-only view."""
    if not isinstance(name, str):
        raise TypeError("mirror() name must be a string, not %s" % type(name).__name__)
    attribute = "_" + name

    @rename(name)
    def getter(self):
        return _readonly(getattr(self, attribute))

    return property(getter)


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
)
