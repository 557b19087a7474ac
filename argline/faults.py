"""
Argline faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  (errors and warnings), grouped by the phase that raises them.
- ParserException / ParserWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Phases
- configuration: raised while the option registry is built (the parser is unusable).
- parsing: raised by Parser.parse(); the first fault aborts the whole parse.
- access: raised by ValueProxy casts, at the point of the offending call.

Integration
- Outside shell mode errors are raised and warnings go through warnings.warn().
- In shell mode faults are rendered via rich on stderr; errors then exit(1).
"""
import copy
import inspect
import os.path
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - configuration (1100x)
      • DUPLICATED_SHORT_NAME, DUPLICATED_FULL_NAME
    - parsing (1111x)
      • UNRECOGNIZED_OPTION, MISSING_OPTION_VALUE
    - access (1112x)
      • MISSING_REQUIRED_VALUE, INVALID_NUMERIC_VALUE, NUMERIC_OVERFLOW
    - warnings (121xx)
      • SUPERFLUOUS_VALUE, EMPTY_INLINE_VALUE
    """
    # --- configuration errors (1100x) ---
    DUPLICATED_SHORT_NAME       = 11001
    DUPLICATED_FULL_NAME        = 11002

    # --- parsing errors (1111x) ---
    UNRECOGNIZED_OPTION         = 11111
    MISSING_OPTION_VALUE        = 11112

    # --- access errors (1112x) ---
    MISSING_REQUIRED_VALUE      = 11121
    INVALID_NUMERIC_VALUE       = 11122
    NUMERIC_OVERFLOW            = 11123

    # --- warnings (121xx) ---
    SUPERFLUOUS_VALUE           = 12111
    EMPTY_INLINE_VALUE          = 12112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _progname(options):
    main = __import__("__main__")
    if hasattr(main, "__prog__"):
        return main.__prog__
    parser = options.get("parser")
    if parser is not None and parser.executable_path is not None:
        return parser.executable_path.name
    return os.path.basename(sys.argv[0]) or "argline"


def _render(fault, palette):
    """
    renderable shared by errors and warnings:

        [ prog — code | Title ]
        message
         → hint
        docs

    fancy mode moves the header into a panel title; __main__.__styles__
    overrides palette entries.
    """
    options = fault.options
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))

    def styled(fragment, key):
        if isinstance(fragment, Text) and options.get("colorful", True):
            return fragment
        return Text(str(fragment), styles[key] if options.get("colorful", True) else "")

    code = options.get("code")
    header = Text.assemble(
        "[ ",
        styled(_progname(options), "prog-name"),
        " — ",
        styled("?" if code is None else code.normalize(), "code"),
        " | ",
        styled(str(options.get("title", type(fault).__name__)).title(), "title"),
        " ]",
    )
    body = [styled(fault.message or "", "message")]
    if hint := options.get("hint"):
        body.append(Text.assemble(styled(" → ", "hint-arrow"), styled(hint, "hint")))
    if docs := options.get("docs"):
        body.append(styled(docs, "docs"))

    if options.get("fancy", False):
        return Panel(Group(*body), title=header, title_align="left")
    return Group(header, *body)


class _Fault:
    """message + read-only options, shared by errors and warnings."""

    def __init__(self, message=Unset, /, **options):
        if not isinstance(message, str | Unset):
            raise TypeError("fault message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __replace__(self, /, **changes):
        return type(self)(self.message, **(dict(self.options) | changes))


class ParserException(_Fault, Exception):
    palette = {
        "prog-name": "bold #E6E6F0",  # near-white program name
        "code": "bold #00E5FF",  # cyan fault code
        "title": "bold #FF4DA6",
        "message": "#C8C8D0",
        "hint-arrow": "#9CE19C dim",
        "hint": "italic #9CE19C",
        "docs": "#737373",
    }

    def __rich__(self):
        return _render(self, self.palette)

    def __trigger__(self):
        if self.options.get("shell", False):
            console.print(self)
            sys.exit(1)
        raise self from None


class ConfigurationError(ParserException): ...
class UnrecognizedOptionError(ParserException): ...
class MissingOptionValueError(ParserException): ...
class MissingRequiredValueError(ParserException): ...
class InvalidNumericValueError(ParserException): ...
class NumericOverflowError(ParserException): ...


class ParserWarning(_Fault, ABC, Warning):
    palette = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #FFB400",  # amber for warnings
        "title": "bold #FFC2E0",
        "message": "#D6D6DE",
        "hint-arrow": "#B8EFAF dim",
        "hint": "italic #B8EFAF",
        "docs": "#737373",
    }

    def __rich__(self):
        return _render(self, self.palette)

    def __trigger__(self):
        if self.options.get("shell", False):
            console.print(self)
        else:
            # attribute the warning to the outermost caller
            warnings.warn(self, stacklevel=len(inspect.stack()))


class SuperfluousValueWarning(ParserWarning): ...
class EmptyOptionValueWarning(ParserWarning): ...


def trigger(fault, /, **options):
    """
    surface fault with options merged in.

    the fault is copied through copy.replace() and its __trigger__ decides:
    raise / warn by default, print (and exit for errors) in shell mode.
    """
    for method in ("__trigger__", "__replace__"):
        if not callable(getattr(fault, method, None)):
            raise TypeError("trigger() argument must implement %s()" % method)
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    look up the host's documentation for code.

    reads the __docs__ mapping of __main__; None when nothing is registered.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a FaultCode, not %s" % type(code).__name__)
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "FaultCode",
    "ParserException",
    "ConfigurationError",
    "UnrecognizedOptionError",
    "MissingOptionValueError",
    "MissingRequiredValueError",
    "InvalidNumericValueError",
    "NumericOverflowError",
    "ParserWarning",
    "SuperfluousValueWarning",
    "EmptyOptionValueWarning",
    "trigger",
    "getdoc",
)
