"""
Faults module tests (codes, options, hierarchy, rich rendering).

Scope
- Validate FaultCode normalization and host remapping through __main__.__codes__.
- Validate the read-only options mapping and the per-class defaults.
- Validate that schema faults stay catchable as ValueError/TypeError.
- Validate plain and fancy rich rendering (header, message, hint).

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured through a non-terminal rich Console (no color codes).
"""
import io
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console

from optbind import (
    DuplicateNameError,
    Fault,
    FaultCode,
    GroupUsageError,
    InvalidDeclarationError,
    MalformedShortOptionError,
    MissingArgumentError,
    ParseError,
    SchemaError,
    UnknownOptionError,
    UnsupportedTypeError,
)


def render(renderable):
    output = io.StringIO()
    Console(file=output, width=120, color_system=None).print(renderable)
    return output.getvalue()


class TestFaultCode(TestCase):
    """Behavioral tests for FaultCode."""

    def testNormalizeDefaultsToNumber(self):
        with patch.object(__import__("__main__"), "__codes__", {}, create=True):
            self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), "21111")

    def testNormalizeUsesHostMapping(self):
        codes = {FaultCode.MISSING_ARGUMENT: "E-MISSING"}
        with patch.object(__import__("__main__"), "__codes__", codes, create=True):
            self.assertEqual(FaultCode.MISSING_ARGUMENT.normalize(), "E-MISSING")
            self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), "21111")


class TestFault(TestCase):
    """Behavioral tests for fault construction and hierarchy."""

    def testClassDefaults(self):
        fault = UnknownOptionError("unknown option name '--x' in arg '--x'", token="--x")
        self.assertIs(fault.code, FaultCode.UNKNOWN_OPTION)
        self.assertEqual(fault.title, "unknown option")
        self.assertEqual(fault.token, "--x")
        self.assertIsNone(fault.hint)
        self.assertEqual(str(fault), "unknown option name '--x' in arg '--x'")

    def testOptionsOverrideDefaults(self):
        fault = MissingArgumentError("option -c requires an argument", title="custom title")
        self.assertEqual(fault.title, "custom title")

    def testOptionsAreReadOnly(self):
        fault = MissingArgumentError("option -c requires an argument")
        with self.assertRaises(TypeError):
            fault.options["hint"] = "nope"

    def testMessageMustBeString(self):
        with self.assertRaises(TypeError):
            Fault(42)

    def testHierarchy(self):
        self.assertTrue(issubclass(UnknownOptionError, ParseError))
        self.assertTrue(issubclass(MissingArgumentError, ParseError))
        for cls in (MalformedShortOptionError, DuplicateNameError, GroupUsageError, InvalidDeclarationError):
            with self.subTest(cls=cls):
                self.assertTrue(issubclass(cls, SchemaError))
                self.assertTrue(issubclass(cls, ValueError))
        self.assertTrue(issubclass(UnsupportedTypeError, SchemaError))
        self.assertTrue(issubclass(UnsupportedTypeError, TypeError))
        self.assertFalse(issubclass(ParseError, ValueError))

    def testSchemaContext(self):
        fault = DuplicateNameError("option name '-a' appears twice", name="-a", field="alpha", source=int)
        self.assertEqual(fault.name, "-a")
        self.assertEqual(fault.field, "alpha")
        self.assertIs(fault.source, int)


class TestFaultRendering(TestCase):
    """Behavioral tests for Fault.__rich__()."""

    def setUp(self):
        main = __import__("__main__")
        self.patches = [
            patch.object(main, "__prog__", "demo", create=True),
            patch.object(main, "__codes__", {}, create=True),
        ]
        for patcher in self.patches:
            patcher.start()
            self.addCleanup(patcher.stop)

    def testPlainRendering(self):
        fault = UnknownOptionError(
            "unknown option name '--colr' in arg '--colr'",
            hint="did you mean '--color'?",
            colorful=False,
        )
        lines = render(fault).splitlines()
        self.assertEqual(lines[0], "[ demo — 21111 | Unknown Option ]")
        self.assertEqual(lines[1], "unknown option name '--colr' in arg '--colr'")
        self.assertEqual(lines[2], " → did you mean '--color'?")

    def testRenderingWithoutHint(self):
        fault = MissingArgumentError("option -c requires an argument", colorful=False)
        self.assertEqual(len(render(fault).splitlines()), 2)

    def testFaultWithoutCode(self):
        fault = ParseError("bad command line", colorful=False)
        self.assertIn("[ demo — - | Bad Command Line ]", render(fault))

    def testFancyRendering(self):
        fault = UnknownOptionError("unknown option name '--x' in arg '--x'", hint="check the spelling", fancy=True)
        text = render(fault)
        self.assertIn("Unknown Option", text)
        self.assertIn("unknown option name '--x' in arg '--x'", text)
        self.assertIn("check the spelling", text)


if __name__ == "__main__":
    unittest.main()
