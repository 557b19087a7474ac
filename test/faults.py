"""
Faults module behavioral tests (codes, replacement, triggering, rendering).

Scope
- Validate FaultCode normalization against host __codes__ overrides.
- Validate __replace__ merging and trigger() dispatch in shell and non-shell mode.
- Validate rich rendering (plain and fancy) and getdoc() lookups.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import io
import unittest
import warnings
from unittest import TestCase, mock

from rich.console import Console
from rich.panel import Panel

from argline import (
    FaultCode,
    ParserException,
    ParserWarning,
    UnrecognizedOptionError,
    SuperfluousValueWarning,
    trigger,
    getdoc,
)


def _render(renderable, width=100):
    stream = io.StringIO()
    Console(file=stream, width=width).print(renderable)
    return stream.getvalue()


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode."""

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.UNRECOGNIZED_OPTION.normalize(), "11111")

    def testNormalizeHonoursHostCodes(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__codes__", {FaultCode.UNRECOGNIZED_OPTION: "E-UNKNOWN"}, create=True):
            self.assertEqual(FaultCode.UNRECOGNIZED_OPTION.normalize(), "E-UNKNOWN")
            self.assertEqual(FaultCode.MISSING_OPTION_VALUE.normalize(), "11112")

    def testCodesAreGroupedByPhase(self):
        self.assertTrue(all(11000 < code < 11100 for code in (
            FaultCode.DUPLICATED_SHORT_NAME, FaultCode.DUPLICATED_FULL_NAME
        )))
        self.assertTrue(all(code >= 12000 for code in (
            FaultCode.SUPERFLUOUS_VALUE, FaultCode.EMPTY_INLINE_VALUE
        )))


class TestGetdoc(TestCase):
    """Behavioral tests for getdoc()."""

    def testMissingDocsReturnNone(self):
        self.assertIsNone(getdoc(FaultCode.NUMERIC_OVERFLOW))

    def testHostDocs(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__docs__", {FaultCode.NUMERIC_OVERFLOW: "see the manual"}, create=True):
            self.assertEqual(getdoc(FaultCode.NUMERIC_OVERFLOW), "see the manual")

    def testRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(11123)


class TestParserException(TestCase):
    """Behavioral tests for error faults."""

    def setUp(self):
        self.fault = UnrecognizedOptionError(
            "unrecognized option '--x'",
            title="unrecognized option",
            code=FaultCode.UNRECOGNIZED_OPTION,
            hint="available options: --verbose",
            name="x",
        )

    def testMessageAndOptions(self):
        self.assertEqual(str(self.fault), "unrecognized option '--x'")
        self.assertEqual(self.fault.message, "unrecognized option '--x'")
        self.assertEqual(self.fault.options["name"], "x")
        with self.assertRaises(TypeError):
            self.fault.options["name"] = "y"

    def testReplaceMergesOptions(self):
        replaced = copy.replace(self.fault, name="y", shell=False)
        self.assertIsInstance(replaced, UnrecognizedOptionError)
        self.assertIsNot(replaced, self.fault)
        self.assertEqual(replaced.options["name"], "y")
        self.assertEqual(replaced.options["hint"], "available options: --verbose")
        self.assertEqual(self.fault.options["name"], "x")

    def testTriggerRaisesOutsideShell(self):
        with self.assertRaises(UnrecognizedOptionError) as context:
            trigger(self.fault, extra=1)
        self.assertEqual(context.exception.options["extra"], 1)

    def testTriggerPrintsAndExitsInShell(self):
        stream = io.StringIO()
        with mock.patch("argline.faults.console", Console(file=stream, width=100)):
            with self.assertRaises(SystemExit):
                trigger(self.fault, shell=True, colorful=False)
        output = stream.getvalue()
        self.assertIn("11111", output)
        self.assertIn("Unrecognized Option", output)
        self.assertIn("→ available options: --verbose", output)

    def testTriggerRequiresProtocol(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))

    def testPlainRendering(self):
        output = _render(copy.replace(self.fault, colorful=False))
        self.assertTrue(output.startswith("[ "))
        self.assertIn("unrecognized option '--x'", output)

    def testFancyRenderingUsesPanel(self):
        renderable = copy.replace(self.fault, fancy=True).__rich__()
        self.assertIsInstance(renderable, Panel)
        self.assertIn("unrecognized option '--x'", _render(renderable))

    def testHostProgramName(self):
        main = __import__("__main__")
        with mock.patch.object(main, "__prog__", "mytool", create=True):
            self.assertIn("mytool", _render(copy.replace(self.fault, colorful=False)))

    def testBaseClass(self):
        self.assertIsInstance(self.fault, ParserException)


class TestParserWarning(TestCase):
    """Behavioral tests for warning faults."""

    def setUp(self):
        self.fault = SuperfluousValueWarning(
            "option '--verbose' takes no value, ignoring 'yes'",
            title="superfluous value",
            code=FaultCode.SUPERFLUOUS_VALUE,
        )

    def testTriggerWarnsOutsideShell(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            trigger(self.fault)
        self.assertEqual(len(caught), 1)
        self.assertIs(caught[0].category, SuperfluousValueWarning)
        self.assertIn("takes no value", str(caught[0].message))

    def testTriggerPrintsInShellWithoutExit(self):
        stream = io.StringIO()
        with mock.patch("argline.faults.console", Console(file=stream, width=100)):
            trigger(self.fault, shell=True, colorful=False)
        self.assertIn("12111", stream.getvalue())

    def testBaseClass(self):
        self.assertIsInstance(self.fault, ParserWarning)
        self.assertIsInstance(self.fault, Warning)


if __name__ == "__main__":
    unittest.main()
