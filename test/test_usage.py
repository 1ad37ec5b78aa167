"""
Usage rendering tests (synopsis, usage message, sections, settings).

Scope
- Validate per-option synopsis under every naming configuration.
- Validate the exact usage layout for group-less and grouped registries.
- Validate group selection faults, the list legend and the settings dump.

Conventions
- Test method names follow CamelCase per project convention.
"""
import re
import unittest
from typing import Annotated
from unittest import TestCase

from optbind import Option, OptionGroup, ParserConfig, Registry, Unpublicized
from optbind.usage import LIST_HELP, lists, sections, settings, synopsis, usage


class Small:
    day: Annotated[str, Option("-d Set the day")] = "Friday"
    verbose: Annotated[bool, Option("Be chatty")] = False
    tags: Annotated[list[str], Option("Add a tag")] = []
    secret: Annotated[int, Option("Hidden knob"), Unpublicized] = 7
    quiet: Annotated[int, Option("Quiet level", nodocdefault=True)] = 2


class Labels:
    temperature: Annotated[float, Option("-t Set the temperature")] = 42.0
    lp: Annotated[list[re.Pattern], Option("list of patterns")] = []
    arg1: Annotated[str, Option("-a <filename> argument 1")] = "/tmp/foobar"
    printVersion: Annotated[bool, Option("Print the program version")] = False


class Grouped:
    help: Annotated[bool, Option("-h Display help message"), OptionGroup("General options")] = False
    mu: Annotated[float, Option("Set mu"), OptionGroup("Internal options", unpublicized=True)] = 4902.7
    pi: Annotated[float, Option("Set pi"), Unpublicized] = 3.14
    color: Annotated[bool, Option("Use colors"), OptionGroup("Display options")] = False
    hue: Annotated[int, Option("Hidden hue"), OptionGroup("Hidden options"), Unpublicized] = 0


class TestSynopsis(TestCase):
    """Behavioral tests for synopsis()."""

    def setUp(self):
        self.registry = Registry(Labels)

    def testShortAndLong(self):
        self.assertEqual(synopsis(self.registry.lookup("-t")), "-t --temperature=<float>")

    def testListMarker(self):
        self.assertEqual(synopsis(self.registry.lookup("--lp")), "--lp=<regex> [+]")

    def testExplicitLabel(self):
        self.assertEqual(synopsis(self.registry.lookup("-a")), "-a --arg1=<filename>")

    def testSingleDash(self):
        descriptor = self.registry.lookup("-t")
        self.assertEqual(synopsis(descriptor, ParserConfig(single_dash=True)), "-t -temperature=<float>")

    def testUnderscores(self):
        descriptor = self.registry.lookup("--print-version")
        self.assertEqual(synopsis(descriptor), "--print-version=<boolean>")
        self.assertEqual(synopsis(descriptor, ParserConfig(use_dashes=False)), "--print_version=<boolean>")


class TestUsage(TestCase):
    """Behavioral tests for usage() layout and selection."""

    def testGroupLessLayout(self):
        self.assertEqual(
            usage(Registry(Small)),
            "\n".join((
                "  -d --day=<string>   - Set the day [default Friday]",
                "  --verbose=<boolean> - Be chatty [default false]",
                "  --tags=<string> [+] - Add a tag",
                "  --quiet=<int>       - Quiet level",
            )),
        )

    def testShowUnpublicized(self):
        text = usage(Registry(Small), show_unpublicized=True)
        self.assertIn("  --secret=<int>      - Hidden knob [default 7]", text.splitlines())

    def testGroupedLayout(self):
        self.assertEqual(
            usage(Registry(Grouped)),
            "\n".join((
                "",
                "General options:",
                "  -h --help=<boolean> - Display help message [default false]",
                "",
                "Display options:",
                "  --color=<boolean>   - Use colors [default false]",
            )),
        )

    def testNamedGroups(self):
        text = usage(Registry(Grouped), "Internal options")
        self.assertIn("Internal options:", text)
        self.assertIn("Set mu", text)
        self.assertNotIn("Set pi", text)
        self.assertNotIn("General options:", text)

    def testNamedGroupsKeepGivenOrder(self):
        text = usage(Registry(Grouped), "Display options", "General options")
        self.assertLess(text.index("Display options:"), text.index("General options:"))

    def testShowUnpublicizedGroups(self):
        text = usage(Registry(Grouped), show_unpublicized=True)
        for name in ("General options:", "Internal options:", "Display options:", "Hidden options:"):
            self.assertIn(name, text)
        self.assertIn("Set pi", text)

    def testSelectionFaults(self):
        with self.assertRaises(ValueError):
            usage(Registry(Small), "General options")
        with self.assertRaises(ValueError):
            usage(Registry(Grouped), "Missing options")
        with self.assertRaises(ValueError):
            usage(Registry(Grouped), "Hidden options")
        self.assertIn("Hidden hue", usage(Registry(Grouped), "Hidden options", show_unpublicized=True))

    def testSections(self):
        selected = sections(Registry(Grouped))
        self.assertEqual([name for name, _ in selected], ["General options", "Display options"])
        self.assertEqual([[option.field for option in options] for _, options in selected], [["help"], ["color"]])

    def testUsageIsRepeatable(self):
        registry = Registry(Small)
        self.assertEqual(usage(registry), usage(registry))

    def testLists(self):
        self.assertTrue(lists(Registry(Small)))
        self.assertFalse(lists(Registry(Grouped)))
        self.assertEqual(LIST_HELP, "[+] means option can be specified multiple times")


class TestSettings(TestCase):
    """Behavioral tests for settings()."""

    def testCurrentValues(self):
        self.assertEqual(
            settings(Registry(Small)),
            "\n".join((
                "day     = Friday",
                "verbose = false",
                "tags    = []",
                "quiet   = 2",
            )),
        )

    def testReflectsAssignments(self):
        class Sample:
            count: Annotated[int, Option("-c Count")] = 0
            printVersion: Annotated[bool, Option("Print the version")] = False
            names: Annotated[list[str], Option("Names")] = []

        registry = Registry(Sample)
        registry.lookup("-c").store(3)
        registry.lookup("--names").store("a")
        registry.lookup("--names").store("b")
        self.assertEqual(
            settings(registry, ParserConfig(use_dashes=False)),
            "\n".join((
                "count         = 3",
                "print_version = false",
                "names         = [a, b]",
            )),
        )

    def testShowUnpublicized(self):
        self.assertIn("secret  = 7", settings(Registry(Small), show_unpublicized=True).splitlines())


if __name__ == "__main__":
    unittest.main()
