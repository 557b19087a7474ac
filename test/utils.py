"""
Utils module behavioral tests (sentinel, coalesce, rename, mirror).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import MappingProxyType
from unittest import TestCase

from argline.utils import Unset, UnsetType, coalesce, rename, mirror


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsey(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            class Derived(UnsetType): ...

    def testUnionWithTypes(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", Unset | str)
        self.assertNotIsInstance(None, str | Unset)


class TestCoalesce(TestCase):
    """Behavioral tests for coalesce()."""

    def testUnsetResolvesToDefault(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalseyValuesKept(self):
        for value in (None, 0, "", False):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class TestRename(TestCase):
    """Behavioral tests for rename()."""

    def testDirectForm(self):
        def function(): ...
        renamed = rename(function, "renamed")
        self.assertIs(renamed, function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testDecoratorForm(self):
        @rename("decorated")
        def function(): ...
        self.assertEqual(function.__name__, "decorated")

    def testRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            rename(42, "name")

    def testRejectsNonStringName(self):
        with self.assertRaises(TypeError):
            rename(lambda: None, 42)
        with self.assertRaises(TypeError):
            rename(42)

    def testRejectsWrongArity(self):
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(lambda: None, "a", "b")


class TestMirror(TestCase):
    """Behavioral tests for mirror()."""

    class Holder:
        items = mirror("items")
        table = mirror("table")
        label = mirror("label")

        def __init__(self):
            self._items = ["a", "b"]
            self._table = {"key": "value"}
            self._label = "text"

    def testContainersAreFrozen(self):
        holder = self.Holder()
        self.assertEqual(holder.items, ("a", "b"))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.label, "text")

    def testReadOnly(self):
        holder = self.Holder()
        with self.assertRaises(AttributeError):
            holder.label = "other"

    def testRejectsNonStringName(self):
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == "__main__":
    unittest.main()
