r"""
Argline option definitions and the option registry.

Overview
- Option: one recognized option (full name, short alias, description and
  whether it expects a value). Immutable once built.
- OptionRegistry: the ordered set of options a parser recognizes; rejects
  duplicated short aliases and duplicated full names up front.

Metadata (sanitized on construction)
- name: non-empty string; must not start with '-' nor contain '=' or whitespace.
- short: single character, defaults to the first character of name.
- descr: Unset | str | Text (short help), None when omitted.
- expects_value: bool.

Examples
    >>> verbose = Option("verbose", descr="print more")
    >>> verbose.short
    'v'
    >>> output = Option("output", "o", descr="output file", expects_value=True)
    >>> registry = OptionRegistry([verbose, output])
    >>> registry.lookup_short("o") is output
    True
"""
import functools
import operator
import re
from collections.abc import Iterable
from types import MappingProxyType

from rich.text import Text

from .faults import *
from .utils import *


class DefinitionType(type):
    """
    Metaclass giving definitions read-only fields and stable representations.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_{name}" field.
    - Provide __repr__/__rich_repr__ built from the same fields.
    - Derive __typename__ (hyphenated, lowercase) for messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize option metadata in place.

    Raises
    - TypeError: for values of the wrong type.
    - ValueError: for empty or malformed names/aliases/descriptions.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif not re.fullmatch(r"[^\s=-][^\s=]*", name):
        raise ValueError(f"{cls.__typename__} 'name' cannot start with '-' or contain '=' or spaces")
    metadata["name"] = name

    # Short alias defaults to the first character of the full name
    if not isinstance(short := coalesce(metadata["short"], name[0]), str):
        raise TypeError(f"{cls.__typename__} 'short' must be a string")
    elif len(short) != 1:
        raise ValueError(f"{cls.__typename__} 'short' must be a single character")
    elif short == "-" or short.isspace():
        raise ValueError(f"{cls.__typename__} 'short' cannot be '-' or a space")
    metadata["short"] = short

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


class Option(metaclass=DefinitionType):
    """
    A recognized command-line option.

    The same definition answers to both spellings on the command line:
    "--name" (optionally "--name=value") and "-s" where s is the short alias.
    Parsed values are always recorded under the full name.
    """

    __introspectable__ = (
        "name",
        "short",
        "descr",
        "expects_value",
    )

    def __new__(cls, name, short=Unset, /, descr=Unset, *, expects_value=False):
        metadata = {
            "name": name,
            "short": short,
            "descr": descr,
            "expects_value": bool(expects_value),
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        # Backing fields are written once here; __setattr__ rejects later writes.
        for field, value in metadata.items():
            object.__setattr__(self, "_" + field, value)
        return self

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is read-only")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__typename__} is read-only")


class OptionRegistry:
    """
    Ordered, immutable collection of the options a parser recognizes.

    invariants
    - no two options share a short alias.
    - no two options share a full name.
    both are checked eagerly; a violation raises ConfigurationError and the
    registry is never built.
    """

    def __init__(self, options=(), /):
        if not isinstance(options, Iterable):
            raise TypeError("option registry argument must be an iterable of options")
        options = tuple(options)
        for option in options:
            if not isinstance(option, Option):
                raise TypeError("option registry accepts only Option instances")

        for index, current in enumerate(options):
            for duplicate in options[index + 1:]:
                if current.short == duplicate.short:
                    raise ConfigurationError(
                        "found short option duplicates for -%s (--%s and --%s)" % (
                            current.short, current.name, duplicate.name
                        ),
                        title="duplicated short option",
                        code=FaultCode.DUPLICATED_SHORT_NAME,
                        hint="give one of them an explicit short name (for example: Option(%r, '<char>'))" % duplicate.name,
                        short=current.short,
                        names=(current.name, duplicate.name),
                        docs=getdoc(FaultCode.DUPLICATED_SHORT_NAME),
                    )
                if current.name == duplicate.name:
                    raise ConfigurationError(
                        "found option duplicates for --%s" % current.name,
                        title="duplicated option",
                        code=FaultCode.DUPLICATED_FULL_NAME,
                        hint="every option must have a distinct full name",
                        name=current.name,
                        docs=getdoc(FaultCode.DUPLICATED_FULL_NAME),
                    )

        self._options = options
        self._names = MappingProxyType({option.name: option for option in options})
        self._shorts = MappingProxyType({option.short: option for option in options})

    def lookup(self, name, /):
        """
        return the option whose full name is exactly 'name', or None.
        """
        return self._names.get(name)

    def lookup_short(self, short, /):
        """
        return the option whose short alias is exactly 'short', or None.
        """
        return self._shorts.get(short)

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __getitem__(self, index, /):
        return self._options[index]

    def __contains__(self, name, /):
        return name in self._names

    def __repr__(self):
        return "option-registry(%s)" % ", ".join(option.name for option in self._options)

    def __rich_repr__(self):
        yield from self._options


__all__ = (
    "Option",
    "OptionRegistry",
)

# Keep the metaclass out of star-imports and the public namespace.
del DefinitionType
