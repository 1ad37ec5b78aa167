"""
Utilities behavioral tests (sentinel, helpers, SpecType metaclass).

Scope
- Validate the Unset sentinel: singleton identity, falsy semantics, finality.
- Validate coalesce() and rename() in both call forms.
- Validate mirror() copies and SpecType-generated names, properties and repr.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from optbind.utils import *


class Sample(metaclass=SpecType):
    __introspectable__ = (
        "label",
        "values",
        "table",
    )

    def __init__(self, label, values, table):
        self._label = label
        self._values = values
        self._table = table


class Narrow(metaclass=SpecType):
    __introspectable__ = (
        "first",
        "second",
    )
    __displayable__ = (
        "first",
    )

    def __init__(self):
        self._first = 1
        self._second = 2


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsyButNotNone(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, 0)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testNotUsableInTypeUnions(self):
        with self.assertRaises(TypeError):
            Unset | int

    def testCannotBeSubclassed(self):
        with self.assertRaises(TypeError):
            class Other(UnsetType):
                pass


class TestHelpers(TestCase):
    """Behavioral tests for coalesce(), rename() and mirror()."""

    def testCoalesceReplacesUnsetOnly(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 5), 0)
        self.assertEqual(coalesce("", "fallback"), "")

    def testRenameDirect(self):
        def work():
            pass

        self.assertIs(rename(work, "job"), work)
        self.assertEqual(work.__name__, "job")
        self.assertEqual(work.__qualname__, "job")

    def testRenameDecorator(self):
        @rename("job")
        def work():
            pass

        self.assertEqual(work.__name__, "job")

    def testRenameRejectsBadArguments(self):
        with self.assertRaises(TypeError):
            rename(42, "job")
        with self.assertRaises(TypeError):
            rename(print, 42)
        with self.assertRaises(TypeError):
            rename(42)
        with self.assertRaises(TypeError):
            rename()

    def testMirrorRejectsNonString(self):
        with self.assertRaises(TypeError):
            mirror(3)

    def testMirrorCopiesContainers(self):
        values = ["a", "b"]
        table = {"k": 1}
        sample = Sample("x", values, table)
        self.assertEqual(sample.values, ("a", "b"))
        self.assertEqual(sample.table, {"k": 1})
        sample.table["k"] = 2
        self.assertEqual(table, {"k": 1})

    def testMirrorKeepsTuples(self):
        class Pair(metaclass=SpecType):
            __introspectable__ = ("pair",)

            def __init__(self, pair):
                self._pair = pair

        pair = divmod(7, 2)
        self.assertIs(Pair(pair).pair, pair)

    def testMirrorIsReadOnly(self):
        sample = Sample("x", [], {})
        with self.assertRaises(AttributeError):
            sample.label = "y"


class TestSpecType(TestCase):
    """Behavioral tests for the SpecType metaclass."""

    def testTypename(self):
        self.assertEqual(Sample.__typename__, "sample")

        class OptionGroupLike(metaclass=SpecType):
            pass

        self.assertEqual(OptionGroupLike.__typename__, "option-group-like")

    def testRepr(self):
        self.assertEqual(repr(Sample("x", ["a"], {})), "sample(label='x', values=('a',), table={})")

    def testDisplayableNarrowsRepr(self):
        self.assertEqual(repr(Narrow()), "narrow(first=1)")
        self.assertEqual(list(Narrow().__rich_repr__()), [("first", 1)])
        self.assertEqual(Narrow().second, 2)


if __name__ == "__main__":
    unittest.main()
