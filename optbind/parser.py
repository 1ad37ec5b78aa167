"""
optbind argument parser.

The Parser scans an argument vector left to right against a Registry and mutates
the bound storage of every option it recognizes. Whatever is not an option is
returned, in encounter order, as the leftover arguments.

Token handling
- "--": stop recognizing options; the token itself is dropped. Every later token
  (a second "--" included) is a leftover argument.
- "-...": an option. A ",-" inside the token splits it in two; the second part is
  processed as the next token before the real next input token ("-a,-b"). Then
  "name=value" supplies an inline value. A value-taking option without an inline
  value consumes the next input token. A boolean without one is set to true.
- anything else: a leftover argument. When parse_after_arg is false, options are
  no longer recognized after the first leftover.

Errors are raised as ParseError subclasses. Options applied before the failing
token stay applied.
"""
import difflib
import logging
import shlex
import typing
from collections import deque
from collections.abc import Iterable

from .coercion import CoercionError
from .faults import InvalidArgumentValueError, MissingArgumentError, UnknownOptionError
from .registry import Registry
from .tokenizer import tokenize
from .utils import *

logger = logging.getLogger(__name__)


class ParserConfig(typing.NamedTuple):
    """
    Parse-time switches; passed per call, never stored process-wide.

    - single_dash: long options are spelled "-long" instead of "--long".
    - parse_after_arg: keep recognizing options after the first non-option.
    - space_separated_lists: a list option value "a b c" adds three elements.
    - use_dashes: usage text advertises "--long-name" (False: "--long_name").
      Both spellings are always accepted on the command line.
    """
    single_dash: bool = False
    parse_after_arg: bool = True
    space_separated_lists: bool = False
    use_dashes: bool = True


class Parser(metaclass=SpecType):
    """
    Argument-vector scanner bound to one Registry.

    Properties
    - registry: the Registry options are looked up in.
    - config: default ParserConfig for parse() calls that do not pass one.
    - history: every option applied so far ("name" or "name=value"), joined by
      spaces; accumulates across parse() calls.
    """

    __introspectable__ = (
        "registry",
        "config",
    )

    def __init__(self, registry, /, config=ParserConfig()):
        if not isinstance(registry, Registry):
            raise TypeError("Parser() first argument must be a registry")
        if not isinstance(config, ParserConfig):
            raise TypeError("Parser() 'config' must be a parser-config")
        self._registry = registry
        self._config = config
        self._history = []

    @property
    def history(self):
        return " ".join(self._history)

    def parse(self, args, /, config=None):
        """
        Apply every option in args and return the leftover arguments.

        Parameters
        - args: Iterable[str] | str
          An argument vector, or a single command line routed through tokenize().
        - config: ParserConfig | None
          Overrides the parser's default configuration for this call only.

        Returns
        - list[str]: non-option arguments, in encounter order.

        Raises
        - UnknownOptionError: a token names no registered option.
        - MissingArgumentError: a value-taking option ends the argument vector.
        - InvalidArgumentValueError: a value cannot be coerced to the option type.
        - DuplicateNameError: single-dash mode is used for the first time and two
          options share a single-dash name.
        """
        config = self._config if config is None else config
        if not isinstance(config, ParserConfig):
            raise TypeError("parse() 'config' must be a parser-config")
        if isinstance(args, str):
            args = tokenize(args)
        elif not isinstance(args, Iterable):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        tokens = deque(args)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")

        leftovers = []
        ignore = False
        tail = None
        while tail is not None or tokens:
            if tail is not None:
                token, tail = tail, None
            else:
                token = tokens.popleft()

            if token == "--" and not ignore:
                ignore = True
                continue

            if token.startswith("-") and not ignore:
                # "-a,-b" is read as "-a" followed by "-b"
                if (position := token.find(",-")) > 0:
                    token, tail = token[:position], token[position + 1:]

                name, separator, value = token.partition("=")
                if not separator:
                    value = None

                descriptor = self._registry.lookup(name, single_dash=config.single_dash)
                if descriptor is None:
                    suggestions = difflib.get_close_matches(name, self._registry.names(config.single_dash), 5)
                    raise UnknownOptionError(
                        "unknown option name %r in arg %r" % (name, token),
                        input=name,
                        token=token,
                        suggestions=suggestions,
                        hint="did you mean %r?" % suggestions[0] if suggestions else None,
                    )

                if descriptor.requires_argument and value is None:
                    if not tokens:
                        raise MissingArgumentError(
                            "option %s requires an argument" % token,
                            input=name,
                            option=descriptor,
                            hint="provide a value (e.g., %s=<%s>)" % (name, descriptor.label),
                        )
                    value = tokens.popleft()

                self._apply(descriptor, name, value, config)
                continue

            if not config.parse_after_arg:
                ignore = True
            leftovers.append(token)

        return leftovers

    def _apply(self, descriptor, name, value, config, /):
        """
        Coerce value and store it into the option's binding.
        """
        self._history.append(name if value is None else "%s=%s" % (name, shlex.quote(value)))

        if value is None:
            value = "true"

        if descriptor.is_list and config.space_separated_lists:
            pieces = value.split() or [value]
        else:
            pieces = [value]

        for piece in pieces:
            try:
                element = descriptor.coerce(piece)
            except CoercionError as error:
                raise InvalidArgumentValueError(
                    "invalid value %r for option %s: %s" % (piece, name, error.reason),
                    input=name,
                    option=descriptor,
                    value=piece,
                    reason=error.reason,
                    hint=error.hint,
                ) from error
            descriptor.store(element)
            logger.debug("option %s set from %s=%r", descriptor.name, name, piece)


__all__ = (
    "ParserConfig",
    "Parser",
)
