r"""
optbind binding declarations.

Overview
- Markers (used as typing.Annotated metadata on class-level annotations)
  • Option: marks an attribute as command-line settable; carries the description
    text (with the short-name/type-label sub-grammar), aliases and doc flags.
  • OptionGroup: starts a named group of options (presentation only).
  • Unpublicized: hides an option from the default usage message; it stays parseable.

- Introspection & representation
  • SpecType metaclass provides stable __repr__/__rich_repr__ and exposes the
    sanitized metadata via read-only properties declared in __introspectable__.

Metadata (sanitized on construction)
- Option
  • text: str, non-empty after trimming. "-v <level> verbosity" declares the short
    name "v", the type label "level" and the description "verbosity".
  • aliases: Iterable[str], each a dash-prefixed literal without whitespace or "=";
    duplicates rejected; normalized to a tuple (declaration order kept).
  • nodocdefault: bool, hides the default value in usage text.
- OptionGroup
  • name: str, non-empty after trimming.
  • unpublicized: bool, hides the whole group from the default usage message.

Quick example:
    >>> from typing import Annotated
    >>> from optbind import Option, OptionGroup, Unpublicized
    >>> class Settings:
    ...     verbose: Annotated[bool, Option("-v Print progress"), OptionGroup("General")] = False
    ...     threads: Annotated[int, Option("-t <count> Worker threads", aliases=("-j",))] = 4
    ...     trace: Annotated[bool, Option("Trace internals"), Unpublicized] = False

Public API
- Classes: Option, OptionGroup, Unpublicized
"""
import functools
import re
from collections.abc import Iterable

from .faults import InvalidDeclarationError
from .utils import *


def _sanitize_text(cls, text, /):
    """
    Internal: validate the free-form description text of an Option.

    Raises
    - TypeError: if text is not a string.
    - InvalidDeclarationError: if text is empty after trimming.
    """
    if not isinstance(text, str):
        raise TypeError(f"{cls.__typename__} text must be a string")
    elif not (text := text.strip()):
        raise InvalidDeclarationError(f"{cls.__typename__} text cannot be empty")
    return text


def _sanitize_aliases(cls, aliases, /):
    r"""
    Internal: validate and normalize the alias names of an Option.

    Accepted forms: "-x", "-long", "--long", "--long-name" (any dash-prefixed literal
    with no whitespace and no "="). Duplicates are rejected.

    Raises
    - TypeError: if aliases is a string, not iterable, or holds non-strings.
    - InvalidDeclarationError: on malformed or repeated names.
    """
    if isinstance(aliases, str) or not isinstance(aliases, Iterable):
        raise TypeError(f"{cls.__typename__} 'aliases' must be an iterable of strings")
    result = []
    for alias in aliases:
        if not isinstance(alias, str):
            raise TypeError(f"{cls.__typename__} 'aliases' must be an iterable of strings")
        if not re.fullmatch(r"--?[^\s=-][^\s=]*", alias):
            raise InvalidDeclarationError(f"{cls.__typename__} alias {alias!r} must start with '-' followed by a name")
        if alias in result:
            raise InvalidDeclarationError(f"{cls.__typename__} alias {alias!r} is duplicated")
        result.append(alias)
    return tuple(result)


class Option(metaclass=SpecType):
    """
    Annotated marker for a command-line settable attribute.

    The attribute's declared type selects the coercion rule; its current value at
    registration time becomes the advertised default.

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes
      on instances, mirroring the sanitized metadata values.
    """

    __introspectable__ = (
        "text",
        "aliases",
        "nodocdefault",
    )

    def __init__(self, text, /, aliases=(), *, nodocdefault=False):
        """
        Construct an Option marker.

        Parameters
        - text: str
          "[-x ][<label> ]description". A leading "-x " names the short option;
          a "<label>" right after overrides the type label shown in usage text.
        - aliases: Iterable[str]
          Additional literal names, dashes included (e.g., "-temp", "--version").
        - nodocdefault: bool
          If True, usage text does not show the default value.
        """
        self._text = _sanitize_text(type(self), text)
        self._aliases = _sanitize_aliases(type(self), aliases)
        self._nodocdefault = bool(nodocdefault)


class OptionGroup(metaclass=SpecType):
    """
    Annotated marker that opens a named group of options.

    Every option after the marked one (in the same declaration source) belongs
    to the group until the next OptionGroup marker.
    """

    __introspectable__ = (
        "name",
        "unpublicized",
    )

    def __init__(self, name, /, *, unpublicized=False):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} name must be a string")
        elif not (name := name.strip()):
            raise InvalidDeclarationError(f"{type(self).__typename__} name cannot be empty")
        self._name = name
        self._unpublicized = bool(unpublicized)


class Unpublicized(metaclass=SpecType):
    """
    Annotated marker hiding an option from the default usage message.

    Both the class and its (singleton) instance are accepted as metadata.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)


__all__ = (
    "Option",
    "OptionGroup",
    "Unpublicized",
)
