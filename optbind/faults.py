"""
optbind faults (schema and parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by tier so logs and searches stay predictable.
- Fault: base type that carries message + options and knows how to render itself
  for rich in a friendly, lowercased and actionable way.
- ParseError and subclasses: recoverable parse-time failures (unknown option,
  missing argument, invalid value). The caller decides whether to print usage,
  retry with corrected input or abort.
- SchemaError and subclasses: construction-time failures (malformed short-name
  syntax, duplicate names, inconsistent grouping, unsupported bound types). They
  also subclass ValueError/TypeError so generic handlers keep working.

UX goals
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The parser raises ParseError subclasses; Options.parse_or_exit() renders them
  through the shared stderr console and exits with status 1.
"""
import os
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import rename

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by tier)
    - parse errors (211xx), recoverable
      • UNKNOWN_OPTION, MISSING_ARGUMENT, INVALID_ARGUMENT_VALUE
    - schema errors (221xx), raised while building a registry
      • MALFORMED_SHORT_OPTION, DUPLICATE_NAME, GROUP_USAGE, UNSUPPORTED_TYPE,
        INVALID_DECLARATION

    rationale
    - codes are discoverable (searchable in logs and docs) and normalized to a string
      via normalize() so hosts can remap them if desired (e.g., to shorter labels).
    """
    # --- parse errors (211xx) ---
    UNKNOWN_OPTION              = 21111
    MISSING_ARGUMENT            = 21117
    INVALID_ARGUMENT_VALUE      = 21124

    # --- schema errors (221xx) ---
    MALFORMED_SHORT_OPTION      = 22101
    DUPLICATE_NAME              = 22102
    GROUP_USAGE                 = 22103
    UNSUPPORTED_TYPE            = 22104
    INVALID_DECLARATION         = 22105

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _option(name, /):
    """
    read-only property exposing one entry of fault.options.
    """
    @rename(name)
    def getter(self):
        return self.options.get(name)

    return property(getter)


class Fault(Exception):
    """
    base type of every optbind fault.

    options
    - code: FaultCode of the fault (defaults to the class-level __faultcode__).
    - title: short lowercased title shown in the rendered header.
    - hint: one actionable sentence shown after the arrow.
    - colorful: render with the palette (default True); False yields plain text.
    - fancy: render inside a panel (default False).
    - any other context the reporter wants to carry (input, token, value, ...).
    """
    __faultcode__ = None
    __title__ = "error"

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__}() message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({
            "code": type(self).__faultcode__,
            "title": type(self).__title__,
        } | options)

    code = _option("code")
    title = _option("title")
    hint = _option("hint")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", os.path.basename(sys.argv[0]) or "python"), styler("prog-name"))
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "-"

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, styler("code")),
            " | ",
            text(str(self.title).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)


class ParseError(Fault):
    """
    recoverable failure raised while scanning an argument vector.

    options already applied before the failing token stay applied; a parse error
    never rolls back earlier assignments.
    """
    __title__ = "bad command line"

    input = _option("input")


class UnknownOptionError(ParseError):
    __faultcode__ = FaultCode.UNKNOWN_OPTION
    __title__ = "unknown option"

    token = _option("token")
    suggestions = _option("suggestions")


class MissingArgumentError(ParseError):
    __faultcode__ = FaultCode.MISSING_ARGUMENT
    __title__ = "missing option value"

    option = _option("option")


class InvalidArgumentValueError(ParseError):
    __faultcode__ = FaultCode.INVALID_ARGUMENT_VALUE
    __title__ = "invalid option value"

    option = _option("option")
    value = _option("value")
    reason = _option("reason")


class SchemaError(Fault):
    """
    non-recoverable failure raised while building a registry from declarations.

    the registry is never left half-built: construction fails as a whole.
    """
    __title__ = "bad option declaration"

    source = _option("source")
    field = _option("field")


class MalformedShortOptionError(SchemaError, ValueError):
    __faultcode__ = FaultCode.MALFORMED_SHORT_OPTION
    __title__ = "malformed short option"


class DuplicateNameError(SchemaError, ValueError):
    __faultcode__ = FaultCode.DUPLICATE_NAME
    __title__ = "duplicate option name"

    name = _option("name")


class GroupUsageError(SchemaError, ValueError):
    __faultcode__ = FaultCode.GROUP_USAGE
    __title__ = "inconsistent option groups"


class UnsupportedTypeError(SchemaError, TypeError):
    __faultcode__ = FaultCode.UNSUPPORTED_TYPE
    __title__ = "unsupported option type"

    annotation = _option("annotation")


class InvalidDeclarationError(SchemaError, ValueError):
    __faultcode__ = FaultCode.INVALID_DECLARATION
    __title__ = "invalid option declaration"


__all__ = (
    "Fault",
    "ParseError",
    "UnknownOptionError",
    "MissingArgumentError",
    "InvalidArgumentValueError",
    "SchemaError",
    "MalformedShortOptionError",
    "DuplicateNameError",
    "GroupUsageError",
    "UnsupportedTypeError",
    "InvalidDeclarationError",
    "FaultCode",
    "console",
)
