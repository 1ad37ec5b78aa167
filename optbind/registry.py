"""
optbind option registry.

The Registry owns every OptionDescriptor built from the given declaration sources
plus the lookup structures derived from them:

- descriptors: tuple of descriptors, in declaration order.
- groups: name -> GroupInfo, in declaration order (empty for a group-less registry).
- two name tables: one for "--long" spellings and one for "-long" (single-dash
  mode). Short names and aliases appear literally in both. The single-dash table
  is only built (and checked) the first time single-dash mode looks a name up.

Invariants (checked once, at construction; any violation aborts construction)
1. every command-line name maps to exactly one option (in single-dash mode,
   checked on first use).
2. groups are all-or-nothing: if the very first option field carries an
   OptionGroup, the first option field of every source must carry one too; if it
   does not, no later field may carry one.
3. group names are unique.
4. every option's declared type has a coercion rule.
"""
import inspect
import logging
import typing

from .declarations import Option, OptionGroup, Unpublicized
from .descriptors import build
from .faults import DuplicateNameError, GroupUsageError, InvalidDeclarationError
from .utils import *

logger = logging.getLogger(__name__)


class GroupInfo(metaclass=SpecType):
    """
    One option group: its name, visibility and member options.
    """

    __introspectable__ = (
        "name",
        "unpublicized",
        "options",
    )

    def __init__(self, name, options, /, unpublicized=False):
        self._name = name
        self._options = tuple(options)
        self._unpublicized = bool(unpublicized)

    @property
    def publicized(self):
        """
        True when at least one member option is publicized.
        """
        return any(not option.unpublicized for option in self._options)


def _discover(owner, /):
    """
    Yield (field, annotation, option, group, unpublicized) for every option field
    declared directly on owner, in declaration order.
    """
    for field, annotation in inspect.get_annotations(owner, eval_str=True).items():
        if typing.get_origin(annotation) is not typing.Annotated:
            continue
        metadata = annotation.__metadata__
        options = [marker for marker in metadata if isinstance(marker, Option)]
        if not options:
            continue
        if len(options) > 1:
            raise InvalidDeclarationError(
                "option field %s.%s has more than one Option marker" % (owner.__qualname__, field),
                field=field,
                source=owner,
            )
        groups = [marker for marker in metadata if isinstance(marker, OptionGroup)]
        if len(groups) > 1:
            raise InvalidDeclarationError(
                "option field %s.%s has more than one OptionGroup marker" % (owner.__qualname__, field),
                field=field,
                source=owner,
            )
        unpublicized = any(marker is Unpublicized or isinstance(marker, Unpublicized) for marker in metadata)
        yield field, typing.get_args(annotation)[0], options[0], groups[0] if groups else None, unpublicized


def _index(descriptors, /, single_dash=False):
    """
    Build one name table; a name claimed by two different options is an error.

    In the "--" table any repeated name fails, even within one option (e.g., an
    alias equal to its own short name). In the single-dash table a long name may
    coincide with the same option's short name or alias.
    """
    table = {}
    for descriptor in descriptors:
        for key in descriptor.keys(single_dash):
            if (other := table.get(key)) is not None and (not single_dash or other is not descriptor):
                raise DuplicateNameError(
                    "option name %r of %s appears twice (already used by %s)" % (key, descriptor, other),
                    name=key,
                    field=descriptor.field,
                    source=descriptor.source,
                    hint="rename one of the fields or change its short name or aliases",
                )
            table[key] = descriptor
    return table


class Registry(metaclass=SpecType):
    """
    Validated collection of option descriptors plus lookup tables, built once.

    Sources are processed in the given order, fields within each source in
    declaration order. A source is a class (its class attributes are bound) or an
    instance (its instance attributes are bound; annotations come from its type).
    """

    __introspectable__ = (
        "sources",
        "descriptors",
        "groups",
        "has_groups",
    )
    __displayable__ = (
        "descriptors",
        "has_groups",
    )

    def __init__(self, *sources):
        if not sources:
            raise TypeError("Registry() takes at least one declaration source")

        descriptors = []
        members = {}
        markers = {}
        has_groups = None
        first = None

        for source in sources:
            owner = source if isinstance(source, type) else type(source)
            if first is None:
                first = owner
            current = None
            for field, annotation, option, group, unpublicized in _discover(owner):
                logger.debug("considering option field %s.%s", owner.__qualname__, field)

                # the very first option field decides whether groups are in use
                if has_groups is None:
                    has_groups = group is not None
                elif not has_groups and group is not None:
                    raise GroupUsageError(
                        "missing group annotation on the first option field of %s" % first.__qualname__,
                        field=field,
                        source=owner,
                        hint="add an OptionGroup marker to the first option of %s" % first.__qualname__,
                    )

                if has_groups:
                    if group is not None:
                        if group.name in markers:
                            raise GroupUsageError(
                                "option group %s declared twice" % group.name,
                                field=field,
                                source=owner,
                                hint="give every OptionGroup marker a distinct name",
                            )
                        markers[group.name] = group
                        members[group.name] = []
                        current = group.name
                    if current is None:
                        raise GroupUsageError(
                            "missing group annotation in field %s of %s" % (field, owner.__qualname__),
                            field=field,
                            source=owner,
                            hint="the first option of every source needs an OptionGroup marker",
                        )

                descriptor = build(source, field, annotation, option, unpublicized=unpublicized, group=current)
                descriptors.append(descriptor)
                if current is not None:
                    members[current].append(descriptor)

        self._sources = sources
        self._descriptors = tuple(descriptors)
        self._has_groups = bool(has_groups)
        self._groups = {
            name: GroupInfo(name, members[name], unpublicized=marker.unpublicized)
            for name, marker in markers.items()
        }
        self._names = _index(self._descriptors)
        self._single_dash_names = None
        logger.debug("registered %d options in %d groups", len(self._descriptors), len(self._groups))

    def lookup(self, name, /, single_dash=False):
        """
        Return the descriptor registered under name (dashes included), or None.

        Raises
        - DuplicateNameError: on the first single-dash lookup, when two options
          share a single-dash name.
        """
        return self._table(single_dash).get(name)

    def names(self, single_dash=False):
        """
        Every accepted command-line name, in registration order.
        """
        return tuple(self._table(single_dash))

    def _table(self, single_dash, /):
        if not single_dash:
            return self._names
        if self._single_dash_names is None:
            self._single_dash_names = _index(self._descriptors, single_dash=True)
        return self._single_dash_names

    def group(self, name, /):
        """
        Return the GroupInfo called name.

        Raises
        - ValueError: when the registry has no groups or none is called name.
        """
        if not self._has_groups:
            raise ValueError("this registry does not have any option groups defined")
        try:
            return self._groups[name]
        except KeyError:
            raise ValueError("invalid option group: %s" % name) from None

    def __iter__(self):
        return iter(self._descriptors)

    def __len__(self):
        return len(self._descriptors)


__all__ = (
    "GroupInfo",
    "Registry",
)
