"""
Binding module behavioral tests (single and batch assignment).

Scope
- Validate set_property() writes, deprecation notices and AssignmentError wrapping.
- Validate set_properties() predicate filtering, ordering and non-atomic partial failure.
- Validate SpecificationProperty creation and resolution.

Conventions
- Test method names follow CamelCase per project convention.
"""

import dataclasses
import unittest
import warnings
from typing import Annotated, NamedTuple
from unittest import TestCase

from bindery import (
    AssignmentError,
    DeprecatedMemberWarning,
    Option,
    SpecificationProperty,
    Value,
    extract,
    set_properties,
    set_property,
    synthesize,
)
from bindery.utils import Unset


class Settings:
    name: Annotated[str, Value()] = ""
    legacy: Annotated[int, Option("--legacy", deprecated=True)] = 0

    def __init__(self):
        self._level = 0

    @property
    def level(self) -> Annotated[int, Option("--level")]:
        return self._level

    @level.setter
    def level(self, value):
        if value < 0:
            raise ValueError("level must be non-negative")
        self._level = value

    @property
    def identifier(self) -> Annotated[str, Option("--id")]:
        return "fixed"

    @property
    def alias(self) -> Annotated[str, Option("--alias", deprecated=True)]:
        return "fixed"


class Recorder:
    first: Annotated[int, Option()] = 0
    second: Annotated[int, Option()] = 0
    third: Annotated[int, Option()] = 0

    def __init__(self):
        self.order = []

    def __setattr__(self, name, value):
        if name != "order":
            self.order.append(name)
        super().__setattr__(name, value)


@dataclasses.dataclass(frozen=True)
class Frozen:
    size: Annotated[int, Option("--size")]


class Pair(NamedTuple):
    left: Annotated[int, Option("--left")]
    right: Annotated[int, Option("--right")]


class Options:
    name: Annotated[str, Value()] = ""
    verbose: Annotated[bool, Option()] = False


def member(cls, name):
    found, = (member for member in extract(cls) if member.name == name)
    return found


class TestSetProperty(TestCase):
    """Behavioral tests for single assignment."""

    def testSetAttribute(self):
        settings = Settings()
        self.assertIs(set_property(settings, member(Settings, "name"), "alpha"), settings)
        self.assertEqual(settings.name, "alpha")

    def testSetThroughSetter(self):
        settings = set_property(Settings(), member(Settings, "level"), 3)
        self.assertEqual(settings.level, 3)

    def testSetByName(self):
        settings = set_property(Settings(), "name", "beta")
        self.assertEqual(settings.name, "beta")

    def testRejectsNonStringMember(self):
        with self.assertRaises(TypeError):
            set_property(Settings(), 42, "value")

    def testReadOnlyPropertyIsWrapped(self):
        with self.assertRaises(AssignmentError) as context:
            set_property(Settings(), member(Settings, "identifier"), "other")
        self.assertIsInstance(context.exception.__cause__, AttributeError)
        self.assertNotIsInstance(context.exception, AttributeError)

    def testSetterFailureIsWrapped(self):
        with self.assertRaises(AssignmentError) as context:
            set_property(Settings(), member(Settings, "level"), -1)
        self.assertIsInstance(context.exception.__cause__, ValueError)
        self.assertEqual(context.exception.message, "cannot set value to target instance")
        self.assertEqual(context.exception.options["value"], -1)

    def testFrozenDataclassIsWrapped(self):
        with self.assertRaises(AssignmentError) as context:
            set_property(Frozen(1), member(Frozen, "size"), 2)
        self.assertIsInstance(context.exception.__cause__, dataclasses.FrozenInstanceError)

    def testNamedTupleIsWrapped(self):
        with self.assertRaises(AssignmentError):
            set_property(Pair(1, 2), member(Pair, "left"), 3)

    def testDeprecatedMemberWarns(self):
        settings = Settings()
        with self.assertWarns(DeprecatedMemberWarning):
            set_property(settings, member(Settings, "legacy"), 5)
        self.assertEqual(settings.legacy, 5)

    def testCurrentMemberDoesNotWarn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            set_property(Settings(), member(Settings, "name"), "quiet")

    def testDeprecationFollowsTheWrite(self):
        settings = Settings()
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            with self.assertRaises(DeprecatedMemberWarning):
                set_property(settings, member(Settings, "legacy"), 9)
        self.assertEqual(settings.legacy, 9)

    def testFailedDeprecatedWriteDoesNotWarn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            with self.assertRaises(AssignmentError):
                set_property(Settings(), member(Settings, "alias"), "other")


class TestSetProperties(TestCase):
    """Behavioral tests for batch assignment."""

    def testPredicateMatchingNothingIsNoop(self):
        settings = Settings()
        specs = [SpecificationProperty.create(m, "x") for m in extract(Settings)]
        self.assertIs(set_properties(settings, specs, lambda spec: False, lambda spec: spec.value), settings)
        self.assertEqual(settings.name, "")
        self.assertEqual(settings.level, 0)

    def testAssignmentFollowsSpecOrder(self):
        recorder = Recorder()
        specs = [SpecificationProperty.create(m, 1) for m in reversed(extract(Recorder))]
        set_properties(recorder, specs, lambda spec: True, lambda spec: spec.value)
        self.assertEqual(recorder.order, ["third", "second", "first"])

    def testPredicateFilters(self):
        recorder = Recorder()
        specs = [SpecificationProperty.create(m, 7) for m in extract(Recorder)]
        set_properties(recorder, specs, lambda spec: spec.member.name != "second", lambda spec: spec.value)
        self.assertEqual(recorder.order, ["first", "third"])
        self.assertEqual((recorder.first, recorder.second, recorder.third), (7, 0, 7))

    def testPartialFailureKeepsEarlierAssignments(self):
        settings = Settings()
        values = {"name": "kept", "level": -1}
        specs = [SpecificationProperty.create(member(Settings, name)) for name in ("name", "level")]
        with self.assertRaises(AssignmentError):
            set_properties(settings, specs, lambda spec: True, lambda spec: values[spec.member.name])
        self.assertEqual(settings.name, "kept")
        self.assertEqual(settings.level, 0)

    def testBindSynthesizedOptions(self):
        options = synthesize(Options)
        specs = [
            SpecificationProperty.create(m).resolve(value)
            for m, value in zip(extract(Options), ("report.txt", True))
        ]
        set_properties(options, specs, lambda spec: spec.value is not Unset, lambda spec: spec.value)
        self.assertEqual(options.name, "report.txt")
        self.assertIs(options.verbose, True)


class TestSpecificationProperty(TestCase):
    """Behavioral tests for the specification/member/value record."""

    def testCreateCarriesMarker(self):
        verbose = member(Options, "verbose")
        prop = SpecificationProperty.create(verbose)
        self.assertIs(prop.specification, verbose.marker)
        self.assertIs(prop.member, verbose)
        self.assertIs(prop.value, Unset)

    def testResolveReturnsCopy(self):
        prop = SpecificationProperty.create(member(Options, "name"))
        resolved = prop.resolve("value")
        self.assertEqual(resolved.value, "value")
        self.assertIs(prop.value, Unset)


if __name__ == "__main__":
    unittest.main()
