"""
optbind Options facade.

Options ties the pieces together for the common case:

    >>> from typing import Annotated
    >>> from optbind import Option, Options
    >>> class Settings:
    ...     day: Annotated[str, Option("-d Set the day")] = "Friday"
    ...     temperature: Annotated[float, Option("-t Set the temperature", aliases=("-temp",))] = 42.0
    >>> options = Options(Settings, synopsis="forecast [options] city")
    >>> options.parse(["-d", "Monday", "-temp", "-12.3", "Paris"])
    ['Paris']
    >>> Settings.day, Settings.temperature
    ('Monday', -12.3)

- construction builds the Registry once (failing on any schema error).
- parse() raises ParseError subclasses; parse_or_exit() renders the fault and the
  usage message on stderr and exits with status 1 instead.
- usage()/print_usage()/settings() render the registry for humans.
"""
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from . import usage as _usage
from .faults import ParseError, console
from .parser import Parser, ParserConfig
from .registry import Registry
from .utils import *

logger = logging.getLogger(__package__)


class Options:
    """
    Registry + parser + usage rendering for a set of declaration sources.

    Parameters
    - *sources: classes (class attributes are bound) and/or instances (instance
      attributes are bound), processed in order.
    - synopsis: str | None, printed as "Usage: {synopsis}" by print_usage().
    - config: ParserConfig used by parse() and by usage rendering; the attribute
      can be replaced at any time.
    """

    def __init__(self, *sources, synopsis=None, config=ParserConfig()):
        if synopsis is not None and not isinstance(synopsis, str):
            raise TypeError("Options() 'synopsis' must be a string")
        if not isinstance(config, ParserConfig):
            raise TypeError("Options() 'config' must be a parser-config")
        self._registry = Registry(*sources)
        self._parser = Parser(self._registry, config)
        self._synopsis = synopsis
        self._handler = None
        self.config = config

    registry = mirror("registry")
    synopsis = mirror("synopsis")

    @property
    def options_string(self):
        """
        Every option applied so far, as it could be passed on a command line.
        """
        return self._parser.history

    def parse(self, args=Unset, /, config=None):
        """
        Apply the options in args (sys.argv[1:] when omitted) and return the
        leftover arguments; a string is tokenized first.

        Raises
        - ParseError subclasses (see Parser.parse()).
        """
        return self._parser.parse(
            sys.argv[1:] if args is Unset else args,
            config=self.config if config is None else config,
        )

    def parse_or_exit(self, args=Unset, /, message=Unset, config=None):
        """
        Like parse(), but on a ParseError print it, then message (or the usage
        message when message is omitted) to stderr and exit with status 1.
        """
        try:
            return self.parse(args, config)
        except ParseError as error:
            console.print(error)
            if message is Unset:
                self._print_usage(console)
            else:
                console.print(message, markup=False, highlight=False, soft_wrap=True)
            sys.exit(1)

    def usage(self, *groups, show_unpublicized=False):
        """
        Usage message for the options (all publicized groups, or the named ones).
        """
        return _usage.usage(self._registry, *groups, config=self.config, show_unpublicized=show_unpublicized)

    def print_usage(self, file=None):
        """
        Print the synopsis, usage message and list legend (stdout by default).
        """
        self._print_usage(Console(file=file) if file is not None else Console())

    def _print_usage(self, output, /):
        if self._synopsis is not None:
            output.print("Usage: %s" % self._synopsis, markup=False, highlight=False, soft_wrap=True)
        output.print(self.usage(), markup=False, highlight=False, soft_wrap=True)
        if _usage.lists(self._registry):
            output.print()
            output.print(_usage.LIST_HELP, markup=False, highlight=False, soft_wrap=True)

    def settings(self, show_unpublicized=False):
        """
        Current value of every option, one "long-name = value" line each.
        """
        return _usage.settings(self._registry, config=self.config, show_unpublicized=show_unpublicized)

    def enable_debug_logging(self, enabled=True):
        """
        Route optbind debug logging (discovery, assignments) to stderr through rich.
        """
        if enabled and self._handler is None:
            self._handler = RichHandler(console=console, show_path=False)
            logger.addHandler(self._handler)
            logger.setLevel(logging.DEBUG)
        elif not enabled and self._handler is not None:
            logger.removeHandler(self._handler)
            logger.setLevel(logging.NOTSET)
            self._handler = None

    def __str__(self):
        return "\n".join(map(str, self._registry))

    def __rich_repr__(self):
        yield "registry", self._registry
        yield "config", self.config
        yield "synopsis", self._synopsis


__all__ = (
    "Options",
)
