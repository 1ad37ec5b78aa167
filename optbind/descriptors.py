"""
optbind option descriptors.

Overview
- Binding: (target, attribute) pair naming the storage an option writes to. The
  target is a class (class attributes, the "static" case) or an instance.
- parse_text(): splits an Option text into short name, type label and description.
- OptionDescriptor: immutable metadata record for one option (names, coercion
  target, labels, advertised default, group) plus the binding it mutates.
- build(): assembles an OptionDescriptor from one declared field and initializes
  its storage (empty list for list options, zero/False/None for missing scalars).

Option text grammar
    "-v <level> Verbosity level"
     │   │       └── description
     │   └── type label (optional, overrides the derived one)
     └── short name (optional; "-" + one character + a mandatory space)
"""
import logging
import re
import typing

from . import names
from .coercion import Kind, classify, coerce, render, typename
from .faults import InvalidDeclarationError, MalformedShortOptionError, UnsupportedTypeError
from .utils import *

logger = logging.getLogger(__name__)


class Binding(typing.NamedTuple):
    """
    Storage location of an option: attribute `attribute` of `target`.
    """
    target: typing.Any
    attribute: str

    def get(self, default=Unset, /):
        if default is Unset:
            return getattr(self.target, self.attribute)
        return getattr(self.target, self.attribute, default)

    def assign(self, value, /):
        setattr(self.target, self.attribute, value)

    def append(self, value, /):
        """
        Append to the list currently bound; a None attribute gets a fresh list first.
        """
        if (values := self.get(None)) is None:
            self.assign(values := [])
        values.append(value)


class ParsedText(typing.NamedTuple):
    short_name: str | None
    label: str | None
    description: str


def parse_text(text, /):
    """
    Split an Option text into (short_name, label, description).

    - "-x rest": short name "x"; the character after it must be a space and the
      text must be at least four characters long.
    - "<label> rest": label is the text after "<" up to the first ">", and the
      description drops the first "<...> " span.

    Raises
    - MalformedShortOptionError when the short-name syntax is broken.
    """
    short_name = None
    description = text
    if text.startswith("-"):
        if len(text) < 4 or text[2] != " ":
            raise MalformedShortOptionError(
                "malformed option text %r: a text that starts with '-' needs a short name, "
                "a space and a description" % text,
                text=text,
                hint="write it as '-x description' (e.g., '-v print progress')",
            )
        short_name = text[1]
        description = text[3:]

    label = None
    if description.startswith("<"):
        label = re.sub(r">.*", "", description[1:], count=1)
        description = re.sub(r"<.*> ", "", description, count=1)

    return ParsedText(short_name, label, description)


class OptionDescriptor(metaclass=SpecType):
    """
    Immutable metadata record for one option.

    Properties
    - name: canonical option name ("first_pass").
    - short_name: single-character alias or None.
    - aliases: additional literal names, dashes included.
    - target: coercion Target (kind, element type, list-ness, nullability).
    - label: type label shown in usage text ("int", "filename", "<label>").
    - description: first line of help text.
    - default: rendered value at construction time, or None.
    - unpublicized / nodocdefault: documentation flags.
    - group: owning group name, or None for a group-less registry.
    - binding: storage location updated by the parser.
    - field / source: declaring attribute and class (for messages).
    """

    __introspectable__ = (
        "name",
        "short_name",
        "aliases",
        "target",
        "label",
        "description",
        "default",
        "unpublicized",
        "nodocdefault",
        "group",
        "binding",
        "field",
        "source",
    )
    __displayable__ = (
        "name",
        "short_name",
        "aliases",
        "label",
        "default",
        "group",
    )

    def __init__(
            self,
            *,
            name,
            short_name,
            aliases,
            target,
            label,
            description,
            default,
            binding,
            unpublicized=False,
            nodocdefault=False,
            group=None,
            field=None,
            source=None
    ):
        self._name = name
        self._short_name = short_name
        self._aliases = tuple(aliases)
        self._target = target
        self._label = label
        self._description = description
        self._default = default
        self._binding = binding
        self._unpublicized = bool(unpublicized)
        self._nodocdefault = bool(nodocdefault)
        self._group = group
        self._field = coalesce(field, binding.attribute)
        self._source = source

    @property
    def kind(self):
        return self._target.kind

    @property
    def is_list(self):
        return self._target.is_list

    @property
    def requires_argument(self):
        """
        Whether the option consumes a value; only scalar booleans do not.
        """
        return self.is_list or self.kind is not Kind.BOOLEAN

    @property
    def value(self):
        """
        Current value of the bound storage.
        """
        return self._binding.get(None)

    def display_name(self, use_dashes=True):
        return names.to_display_name(self._name, use_dashes)

    def keys(self, single_dash=False):
        """
        Every command-line name of this option: short, long spellings, aliases.

        The declared attribute name is accepted verbatim too ("--firstPass"
        next to "--first-pass" and "--first_pass").
        """
        prefix = "-" if single_dash else "--"
        if self._short_name is not None:
            yield "-" + self._short_name
        spellings = names.spellings(self._name)
        for spelling in spellings:
            yield prefix + spelling
        if self._field not in spellings:
            yield prefix + self._field
        yield from self._aliases

    def coerce(self, token, /):
        """
        Convert one token to an element value (see coercion.coerce()).
        """
        return coerce(self._target, token)

    def store(self, value, /):
        """
        Append value to a list option, or overwrite a scalar one.
        """
        if self.is_list:
            self._binding.append(value)
        else:
            self._binding.assign(value)

    def __str__(self):
        short = "-%s " % self._short_name if self._short_name is not None else ""
        owner = self._source.__qualname__ + "." if self._source is not None else ""
        return "%s--%s field %s%s" % (short, self.display_name(), owner, self._field)


def _initial_value(target, /):
    """
    Value bound to a scalar attribute that has none.
    """
    if target.kind is Kind.BOOLEAN and not target.nullable:
        return False
    if target.kind is Kind.NUMERIC and not target.nullable:
        return target.type()
    return None


def _render_default(target, value, /):
    if target.is_list:
        if not value:
            return None
        return "[%s]" % ", ".join(render(target, element) for element in value)
    return render(target, value)


def build(source, field, annotation, option, /, *, unpublicized=False, group=None):
    """
    Build the OptionDescriptor of one declared field and initialize its storage.

    Parameters
    - source: class or instance owning the attribute.
    - field: attribute name.
    - annotation: declared type (Annotated already stripped).
    - option: the Option marker of the field.
    - unpublicized: whether an Unpublicized marker was present.
    - group: name of the group the option belongs to, if any.

    Raises
    - UnsupportedTypeError: the declared type has no coercion rule.
    - MalformedShortOptionError: broken "-x description" syntax.
    - InvalidDeclarationError: a list option whose current value is not a list.
    """
    owner = source if isinstance(source, type) else type(source)
    where = "%s.%s" % (owner.__qualname__, field)

    try:
        target = classify(annotation)
    except UnsupportedTypeError as error:
        raise UnsupportedTypeError(
            "option field %s: %s" % (where, error.message),
            **error.options | {"field": field, "source": owner}
        ) from None

    try:
        text = parse_text(option.text)
    except MalformedShortOptionError as error:
        raise MalformedShortOptionError(
            "option field %s: %s" % (where, error.message),
            **error.options | {"field": field, "source": owner}
        ) from None

    binding = Binding(source, field)
    current = getattr(source, field, Unset)
    if target.is_list:
        if current is Unset or current is None:
            binding.assign(current := [])
        elif not isinstance(current, list):
            raise InvalidDeclarationError(
                "list option field %s must hold a list, not %s" % (where, type(current).__name__),
                field=field,
                source=owner,
            )
        elif not isinstance(source, type) and field not in getattr(source, "__dict__", {}):
            # instance options must not append to the class-level default list
            binding.assign(current := list(current))
    elif current is Unset:
        binding.assign(current := _initial_value(target))

    descriptor = OptionDescriptor(
        name=names.to_option_name(field),
        short_name=text.short_name,
        aliases=option.aliases,
        target=target,
        label=text.label if text.label is not None else typename(target),
        description=text.description,
        default=_render_default(target, current),
        binding=binding,
        unpublicized=unpublicized,
        nodocdefault=option.nodocdefault,
        group=group,
        field=field,
        source=owner,
    )
    logger.debug("built option %r for field %s", descriptor.name, where)
    return descriptor


__all__ = (
    "Binding",
    "ParsedText",
    "OptionDescriptor",
    "parse_text",
    "build",
)
