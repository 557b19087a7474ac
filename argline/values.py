"""
Argline typed value access.

What this module provides
- ScalarKind: the closed set of kinds a parsed value can be rendered as
  (STRING, INTEGER, BOOLEAN), each with its own coercion.
- Integer / int8 … uint64: bounded integer kinds; values outside the range
  raise NumericOverflowError instead of wrapping.
- ValueProxy: a deferred-lookup handle bound to one parser and one key
  (an option name or a positional index).

Kind resolution
- str, pathlib.Path (any os.PathLike class) → STRING
- bool                                       → BOOLEAN (presence only)
- int, Integer instances                     → INTEGER
- anything else                              → TypeError, before any lookup

Examples
    >>> parser = Parser([Option("count", expects_value=True)])
    >>> parser.parse(["prog", "--count=42", "file"])
    >>> parser["count"].cast(int)
    42
    >>> parser[0].cast(str)
    'file'
    >>> parser["missing"](7)
    7
"""
import os
import re
import sys
import weakref
from enum import Enum
from typing import NamedTuple

from .faults import *
from .utils import *


class Integer(NamedTuple):
    """
    fixed-width integer kind.

    the parsed value must fit in [minimum, maximum]; unsigned kinds reject a
    leading '-' as an invalid numeric value.
    """
    name: str
    bits: int
    signed: bool

    @property
    def minimum(self):
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def maximum(self):
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def __repr__(self):
        return self.name


int8 = Integer("int8", 8, True)
int16 = Integer("int16", 16, True)
int32 = Integer("int32", 32, True)
int64 = Integer("int64", 64, True)
uint8 = Integer("uint8", 8, False)
uint16 = Integer("uint16", 16, False)
uint32 = Integer("uint32", 32, False)
uint64 = Integer("uint64", 64, False)


def _describe(proxy):
    # option name or 1-based position, as used in messages
    if isinstance(proxy.index, str):
        return "option --%s" % proxy.index
    return "argument at position %d" % (proxy.index + 1)


def _as_string(proxy, kind):
    parser = proxy.parser
    if not proxy.exists():
        parser.trigger(MissingRequiredValueError(
            "missing required %s" % _describe(proxy),
            title="missing required value",
            code=FaultCode.MISSING_REQUIRED_VALUE,
            hint="pass %s on the command line" % (
                "--%s" % proxy.index if isinstance(proxy.index, str) else "at least %d positional arguments" % (proxy.index + 1)
            ),
            index=proxy.index,
            docs=getdoc(FaultCode.MISSING_REQUIRED_VALUE),
        ))
    if isinstance(proxy.index, str):
        value = parser.options[proxy.index]
    else:
        value = parser.arguments[proxy.index]
    return value if kind is str else kind(value)


def _abbreviate(value, width=24):
    return value if len(value) <= width else "%s...(%d digits)" % (value[:width], len(value.lstrip("-")))


def _overflow(proxy, kind, value, hint):
    proxy.parser.trigger(NumericOverflowError(
        "%s does not fit in %s" % (_abbreviate(value), getattr(kind, "name", "int")),
        title="numeric overflow",
        code=FaultCode.NUMERIC_OVERFLOW,
        hint=hint,
        index=proxy.index,
        value=value,
        kind=kind,
        docs=getdoc(FaultCode.NUMERIC_OVERFLOW),
    ))


def _as_integer(proxy, kind):
    value = _as_string(proxy, str)
    signed = kind is int or kind.signed

    if not re.fullmatch(r"-?[0-9]+" if signed else r"[0-9]+", value):
        proxy.parser.trigger(InvalidNumericValueError(
            "%s is not a valid numeric value" % _abbreviate(value),
            title="invalid numeric value",
            code=FaultCode.INVALID_NUMERIC_VALUE,
            hint="pass a base-10 %sinteger for %s" % ("" if signed else "non-negative ", _describe(proxy)),
            index=proxy.index,
            value=value,
            docs=getdoc(FaultCode.INVALID_NUMERIC_VALUE),
        ))

    negative = value.startswith("-")
    digits = value.removeprefix("-").lstrip("0") or "0"

    if kind is int:
        # int() refuses digit strings longer than sys.get_int_max_str_digits()
        try:
            return -int(digits, 10) if negative else int(digits, 10)
        except ValueError:
            _overflow(proxy, kind, value, "pass at most %d digits for %s" % (
                sys.get_int_max_str_digits(), _describe(proxy)
            ))

    # compare digit counts first so oversized input never reaches int()
    bound = kind.minimum if negative else kind.maximum
    if len(digits) > len(str(abs(bound))):
        number = None
    else:
        number = -int(digits, 10) if negative else int(digits, 10)
    if number is None or not kind.minimum <= number <= kind.maximum:
        _overflow(proxy, kind, value, "pass a value between %d and %d for %s" % (
            kind.minimum, kind.maximum, _describe(proxy)
        ))
    return number


def _as_boolean(proxy, kind):
    return proxy.exists()


class ScalarKind(Enum):
    """
    closed set of renderable kinds; each member carries its coercion.
    """
    STRING = (_as_string,)
    INTEGER = (_as_integer,)
    BOOLEAN = (_as_boolean,)

    def __init__(self, coerce):
        self.coerce = coerce

    @classmethod
    def resolve(cls, kind, /):
        """
        map a requested type to its kind, or raise TypeError.
        """
        if kind is bool:
            return cls.BOOLEAN
        if kind is int or isinstance(kind, Integer):
            return cls.INTEGER
        if kind is str or isinstance(kind, type) and issubclass(kind, os.PathLike):
            return cls.STRING
        raise TypeError("cannot render a parsed value as %r (expected str, a path type, int, an integer width or bool)" % (kind,))


class ValueProxy:
    """
    Deferred view on one parsed value.

    The proxy does not own any data: it keeps a weak reference to its parser and
    looks the value up on every call, so it always reflects the latest parse().
    Using it after the parser is gone raises ReferenceError.
    """
    __slots__ = ("_parser", "_index")

    def __init__(self, parser, index, /):
        if isinstance(index, bool) or not isinstance(index, str | int):
            raise TypeError("value index must be an option name or a positional index")
        if isinstance(index, int) and index < 0:
            raise ValueError("positional index cannot be negative, got %d" % index)
        self._parser = weakref.ref(parser)
        self._index = index

    @property
    def parser(self):
        if (parser := self._parser()) is None:
            raise ReferenceError("value proxy used after its parser was released")
        return parser

    @property
    def index(self):
        return self._index

    def exists(self):
        """
        True when the option was given, or the position is within bounds.
        """
        if isinstance(self._index, str):
            return self._index in self.parser.options
        return 0 <= self._index < self.parser.argument_count

    def cast(self, kind, /, default=Unset):
        """
        render the value as 'kind'.

        - without default: missing values raise MissingRequiredValueError
          (except bool, which reports presence).
        - with default: missing values return 'default'; present values are
          still coerced and may raise.
        """
        scalar = ScalarKind.resolve(kind)
        if default is not Unset and not self.exists():
            return default
        return scalar.coerce(self, kind)

    def __call__(self, default, /):
        """
        cast with the kind inferred from default; a None default keeps the raw string.
        """
        return self.cast(str if default is None else type(default), default)

    def __eq__(self, other):
        if isinstance(other, ValueProxy):
            return NotImplemented
        try:
            ScalarKind.resolve(type(other))
        except TypeError:
            return NotImplemented
        return self.cast(type(other)) == other

    __hash__ = None

    def __bool__(self):
        return self.exists()

    def __int__(self):
        return self.cast(int)

    def __str__(self):
        return self.cast(str)

    def __fspath__(self):
        return self.cast(str)

    def __repr__(self):
        return "value-proxy(index=%r)" % (self._index,)


__all__ = (
    "ScalarKind",
    "Integer",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "ValueProxy",
)
