"""
Command-line tokenizer tests.

Scope
- Validate whitespace splitting, quoted spans and unterminated quotes.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from optbind import tokenize


class TestTokenize(TestCase):
    """Behavioral tests for tokenize()."""

    def testSplitsOnWhitespace(self):
        self.assertEqual(tokenize("-d Monday -temp -12.3"), ["-d", "Monday", "-temp", "-12.3"])

    def testCollapsesWhitespaceRuns(self):
        self.assertEqual(tokenize("  a   b\t c \n"), ["a", "b", "c"])

    def testEmptyInput(self):
        self.assertEqual(tokenize(""), [])
        self.assertEqual(tokenize("   "), [])

    def testQuotedSpanKeepsQuotes(self):
        self.assertEqual(
            tokenize("--ld '42.1 9.3 10.5' --ld 2.7"),
            ["--ld", "'42.1 9.3 10.5'", "--ld", "2.7"],
        )

    def testQuotedSpanInsideToken(self):
        self.assertEqual(tokenize('x"a b"y z'), ['x"a b"y', "z"])

    def testOtherQuoteIsLiteralInsideSpan(self):
        self.assertEqual(tokenize("\"it's here\""), ["\"it's here\""])

    def testEmptyQuotes(self):
        self.assertEqual(tokenize("a '' b"), ["a", "''", "b"])

    def testUnterminatedQuoteIsClosed(self):
        self.assertEqual(tokenize("a 'b c"), ["a", "'b c'"])

    def testRejectsNonString(self):
        with self.assertRaises(TypeError):
            tokenize(["a", "b"])


if __name__ == "__main__":
    unittest.main()
