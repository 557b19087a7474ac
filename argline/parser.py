"""
Argline parsing engine.

What this module provides
- Parser: owns an OptionRegistry, classifies one argv-like vector per parse()
  call and exposes the results:
  • options: full name → value ("" for a flag that takes no value).
  • arguments: positional tokens, in order.
  • remaining_arguments: tokens after a bare "--", verbatim.
  • executable_path: the first token.
  • get(index) / parser[index]: ValueProxy for typed access.

Token grammar
- "--"               remaining-arguments tail (when accepted); stops classification
- "--name"           long option
- "--name=value"     long option with attached value
- "--name value"     long option with next-token value (value options only;
                     the next token must not start with '-')
- "-x"               short option; same next-token rule
- "-xyz"             rejected (options cannot be grouped)
- anything else      positional argument (including a single "-")

Faults
- UnrecognizedOptionError and MissingOptionValueError abort the parse; results
  of a failed parse are empty, never partial.
- SuperfluousValueWarning: "--flag=value" on an option that takes no value
  (the value is discarded).
- EmptyOptionValueWarning: "--name=" on an option that expects a value.

Quick start
    from argline import Parser, Option

    parser = Parser([
        Option("verbose", descr="print more"),
        Option("output", "o", descr="output file", expects_value=True),
    ])
    parser.parse()                  # sys.argv
    if parser["verbose"]:
        ...
    path = parser["output"]("out.txt")
"""
import pathlib
import shlex
import sys
from collections.abc import Iterable
from types import MappingProxyType

from rich.console import Console

from .faults import *
from .help import render_options
from .options import OptionRegistry
from .utils import *
from .values import ValueProxy


class Parser:
    """
    Command-line parser for one flat argv vector.

    Construction
    - options: iterable of Option; duplicated short aliases or full names raise
      ConfigurationError.
    - shell: when True, faults are rendered on stderr (errors then exit) instead
      of being raised / warned.
    - fancy: render faults inside a panel (shell mode).
    - colorful: style rendered faults and help.

    Notes
    - parse() may be called again; each call fully replaces previous results.
    - reads after parse() are pure lookups; concurrent parse() calls on one
      instance are not supported.
    """

    def __init__(self, options=(), /, *, shell=False, fancy=False, colorful=True):
        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)

        self._executable_path = None
        self._options = {}
        self._arguments = []
        self._remaining_arguments = []

        try:
            self._registry = OptionRegistry(options)
        except ConfigurationError as fault:
            self.trigger(fault)

    @property
    def registry(self):
        return self._registry

    @property
    def executable_path(self):
        return self._executable_path

    @property
    def options(self):
        return MappingProxyType(self._options)

    @property
    def arguments(self):
        return tuple(self._arguments)

    @property
    def remaining_arguments(self):
        return tuple(self._remaining_arguments)

    @property
    def argument_count(self):
        return len(self._arguments)

    @property
    def option_count(self):
        return len(self._options)

    def trigger(self, fault, /, **options):
        """
        surface a fault with this parser's runtime options merged in.
        """
        trigger(fault, **options | {
            "parser": self,
            "shell": self.shell,
            "fancy": self.fancy,
            "colorful": self.colorful,
        })

    def _unrecognized(self, input, token):
        self.trigger(UnrecognizedOptionError(
            "unrecognized option %r" % token,
            title="unrecognized option",
            code=FaultCode.UNRECOGNIZED_OPTION,
            hint="this program takes no options" if not len(self._registry)
            else "available options: %s" % ", ".join("--" + option.name for option in self._registry),
            name=input,
            token=token,
            docs=getdoc(FaultCode.UNRECOGNIZED_OPTION),
        ))

    def _missing(self, option, token):
        self.trigger(MissingOptionValueError(
            "expected value for option %r" % token,
            title="missing option value",
            code=FaultCode.MISSING_OPTION_VALUE,
            hint="pass a value after a space (for example: %s <value>)" % token if token.startswith("--")
            else "pass a value after a space (for example: %s <value>) or use --%s=<value>" % (token, option.name),
            name=option.name,
            token=token,
            docs=getdoc(FaultCode.MISSING_OPTION_VALUE),
        ))

    def _parseargs(self, tokens, accept_remaining_arguments):
        """
        classify tokens[1:] and return (options, arguments, remaining).

        the first fault aborts; nothing is committed by this method.
        """
        options = {}
        arguments = []
        remaining = []

        index = 1
        while index < len(tokens):
            token = tokens[index]

            if token.startswith("--"):
                # bare separator: everything after it is taken verbatim
                if token == "--":
                    if accept_remaining_arguments:
                        remaining.extend(tokens[index + 1:])
                        break
                    arguments.append(token)
                    index += 1
                    continue

                input, separator, value = token[2:].partition("=")
                option = self._registry.lookup(input)
                if option is None:
                    self._unrecognized(input, "--" + input)

                if not option.expects_value:
                    if separator:
                        self.trigger(SuperfluousValueWarning(
                            "option '--%s' takes no value, ignoring %r" % (input, value),
                            title="superfluous value",
                            code=FaultCode.SUPERFLUOUS_VALUE,
                            hint="remove everything from '=' (for example: --%s)" % input,
                            name=input,
                            value=value,
                            docs=getdoc(FaultCode.SUPERFLUOUS_VALUE),
                        ))
                    value = ""
                elif separator:
                    if not value:
                        self.trigger(EmptyOptionValueWarning(
                            "empty inline value for option '--%s'" % input,
                            title="empty inline value",
                            code=FaultCode.EMPTY_INLINE_VALUE,
                            hint="add a value after '=' (for example: --%s=<value>)" % input,
                            name=input,
                            docs=getdoc(FaultCode.EMPTY_INLINE_VALUE),
                        ))
                elif index + 1 < len(tokens) and not tokens[index + 1].startswith("-"):
                    index += 1
                    value = tokens[index]
                else:
                    self._missing(option, "--" + input)

                options[option.name] = value

            elif token.startswith("-") and len(token) > 1:
                # short options are exactly "-x"; grouping is not supported
                if len(token) > 2:
                    self._unrecognized(token[1:], token)

                option = self._registry.lookup_short(short := token[1])
                if option is None:
                    self._unrecognized(short, token)

                value = ""
                if option.expects_value:
                    if index + 1 < len(tokens) and not tokens[index + 1].startswith("-"):
                        index += 1
                        value = tokens[index]
                    else:
                        self._missing(option, token)

                options[option.name] = value

            else:
                arguments.append(token)

            index += 1

        return options, arguments, remaining

    def parse(self, argv=Unset, /, *, accept_remaining_arguments=True):
        """
        Parse an argv-like vector, replacing any previous results.

        Parameters
        - argv:
          • Unset: read sys.argv.
          • str: shell-like string; split via shlex.split.
          • Iterable[str]: pre-tokenized vector.
          In every case the first token is the executable path.
        - accept_remaining_arguments: when True, a bare "--" starts the verbatim
          remaining-arguments tail; when False it is a positional argument.

        Raises
        - TypeError: argv is not a string or an iterable of strings.
        - ValueError: argv is empty (no executable path).
        - UnrecognizedOptionError / MissingOptionValueError (outside shell mode).
        """
        if argv is Unset:
            tokens = list(sys.argv)
        elif isinstance(argv, str):
            tokens = shlex.split(argv)
        elif isinstance(argv, Iterable):
            tokens = list(argv)
            for token in tokens:
                if not isinstance(token, str):
                    raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        if not tokens:
            raise ValueError("parse() argument must contain at least the executable path")

        self._executable_path = None
        self._options = {}
        self._arguments = []
        self._remaining_arguments = []

        self._executable_path = pathlib.Path(tokens[0])
        options, arguments, remaining = self._parseargs(tokens, bool(accept_remaining_arguments))

        self._options = options
        self._arguments = arguments
        self._remaining_arguments = remaining

    def get(self, index, /):
        """
        return a ValueProxy for an option name (str) or positional index (int).
        """
        return ValueProxy(self, index)

    def __getitem__(self, index, /):
        return self.get(index)

    def print_available_options(self, console=Unset, /):
        """
        print the registered options as an aligned table and return the console.
        """
        console = coalesce(console, Console())
        console.print(self)
        return console

    def __rich__(self):
        return render_options(self._registry, colorful=self.colorful)

    def __repr__(self):
        return "parser(options=%r, arguments=%r, remaining_arguments=%r)" % (
            dict(self._options), self._arguments, self._remaining_arguments
        )


__all__ = (
    "Parser",
)
