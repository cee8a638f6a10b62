"""
Markers module behavioral tests.

Scope
- Validate Value and Option construction, normalization and read-only metadata.
- Validate metadata constraints (group pluralization, descr defaults, names, separator, index).
- Validate marker lookup inside Annotated annotations.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from typing import Annotated
from unittest import TestCase

from bindery import Value, Option, marker_of
from bindery.utils import Unset


class TestValue(TestCase):
    """Behavioral tests for Value (positional) markers."""

    def testValueDefaults(self):
        v = Value()
        self.assertIsNone(v.index)
        self.assertIsNone(v.metavar)
        self.assertIsNone(v.descr)
        self.assertIs(v.default, Unset)
        self.assertFalse(v.required)
        self.assertFalse(v.hidden)
        self.assertFalse(v.deprecated)

    def testValueGroupPluralDefault(self):
        self.assertEqual(Value(0).group, "values")

    def testValueGroupExplicitIsTrimmed(self):
        self.assertEqual(Value(0, group="  operands ").group, "operands")

    def testValueGroupEmptyRejected(self):
        with self.assertRaises(ValueError):
            Value(0, group="  ")

    def testValueIndexNegativeRejected(self):
        with self.assertRaises(ValueError):
            Value(-1)

    def testValueIndexMustBeInteger(self):
        with self.assertRaises(TypeError):
            Value("0")
        with self.assertRaises(TypeError):
            Value(True)

    def testValueMetavarMustBeNonEmpty(self):
        with self.assertRaises(ValueError):
            Value(0, "")

    def testValueDescrExplicitNoneRejected(self):
        with self.assertRaises(TypeError):
            Value(0, descr=None)

    def testValueRequiredWithDefaultRejected(self):
        with self.assertRaises(TypeError):
            Value(0, default="x", required=True)

    def testValueDefaultNonePreserved(self):
        self.assertIsNone(Value(0, default=None).default)

    def testValueMetadataIsReadOnly(self):
        v = Value(0)
        with self.assertRaises(AttributeError):
            v.index = 1

    def testValueIntrospectionHook(self):
        v = Value(0)
        self.assertIs(v.__value__(), v)


class TestOption(TestCase):
    """Behavioral tests for Option (named) markers."""

    def testOptionWithoutNamesAllowed(self):
        self.assertEqual(Option().names, [])

    def testOptionNamesKeepDeclarationOrder(self):
        self.assertEqual(Option("-v", "--verbose").names, ["-v", "--verbose"])

    def testOptionNamesAreCopies(self):
        o = Option("-v")
        o.names.append("--other")
        self.assertEqual(o.names, ["-v"])

    def testOptionGroupPluralDefault(self):
        self.assertEqual(Option("--opt").group, "options")

    def testOptionNamesRejectUnderscore(self):
        with self.assertRaises(ValueError):
            Option("--bad_name")

    def testOptionNamesRequireDash(self):
        with self.assertRaises(ValueError):
            Option("verbose")

    def testOptionNamesMustBeStrings(self):
        with self.assertRaises(TypeError):
            Option(1)

    def testOptionDuplicateNamesRejected(self):
        with self.assertRaises(ValueError):
            Option("--dup", "--dup")

    def testOptionNamesAllowI18N(self):
        self.assertIn("--名-前", Option("--名-前").names)

    def testOptionSeparatorSingleCharacter(self):
        self.assertEqual(Option("--tags", separator=",").separator, ",")
        self.assertIsNone(Option("--tags").separator)
        with self.assertRaises(ValueError):
            Option("--tags", separator=",;")
        with self.assertRaises(ValueError):
            Option("--tags", separator=" ")
        with self.assertRaises(TypeError):
            Option("--tags", separator=1)

    def testOptionRequiredWithDefaultRejected(self):
        with self.assertRaises(TypeError):
            Option("--level", required=True, default=1)

    def testOptionRepr(self):
        text = repr(Option("-v", deprecated=True))
        self.assertTrue(text.startswith("option(names=['-v']"))
        self.assertIn("deprecated=True", text)

    def testOptionRichRepr(self):
        pairs = dict(Option("-v").__rich_repr__())
        self.assertEqual(pairs["names"], ["-v"])
        self.assertEqual(pairs["group"], "options")

    def testOptionIntrospectionHook(self):
        o = Option()
        self.assertIs(o.__option__(), o)


class TestMarkerOf(TestCase):
    """Behavioral tests for marker lookup in annotations."""

    def testMarkerOfAnnotated(self):
        o = Option("-x")
        self.assertIs(marker_of(Annotated[int, "doc", o]), o)

    def testMarkerOfFirstMarkerWins(self):
        v, o = Value(0), Option("-x")
        self.assertIs(marker_of(Annotated[int, v, o]), v)

    def testMarkerOfPlainAnnotation(self):
        self.assertIs(marker_of(int), Unset)

    def testMarkerOfAnnotatedWithoutMarker(self):
        self.assertIs(marker_of(Annotated[int, "doc"]), Unset)


if __name__ == "__main__":
    unittest.main()
