"""
optbind type coercion.

A declared annotation is classified once into a Target (its Kind plus the concrete
element type, list-ness and nullability); the parser then converts one string
token at a time with coerce(). render() is the inverse used for default values.

Kinds
- BOOLEAN: "true"/"t"/"false"/"f", case-insensitive.
- NUMERIC: int (any base prefix accepted by int(token, 0)), float, complex and
  their subclasses.
- ENUM: member name lookup, case-insensitive, "-" read as "_".
- FACTORY: types built through a fixed factory (re.compile for patterns,
  cls(token, *()) for paths, fromisoformat for dates and times).
- STRING_LIKE: any other class constructible from a single string argument.

Lists are not a kind: a Target with is_list set accumulates elements of its kind.
"""
import datetime
import enum
import inspect
import re
import types
import typing
from pathlib import PurePath

from .faults import UnsupportedTypeError


class Kind(enum.Enum):
    BOOLEAN = "boolean"
    NUMERIC = "numeric"
    STRING_LIKE = "string-like"
    FACTORY = "factory"
    ENUM = "enum"


class Target(typing.NamedTuple):
    """
    Classified form of a declared option type.

    - kind: coercion rule used for each token.
    - type: concrete class produced by the rule (the element type for lists).
    - is_list: repeated occurrences accumulate instead of overwriting.
    - nullable: the declared type admits None (Optional[T] / T | None).
    """
    kind: Kind
    type: type
    is_list: bool = False
    nullable: bool = False


class CoercionError(ValueError):
    """
    A token could not be converted to the target type.

    - reason: one-sentence, lowercased explanation.
    - hint: optional actionable suggestion shown to the user.
    """

    def __init__(self, reason, /, hint=None):
        super().__init__(reason)
        self.reason = reason
        self.hint = hint


# Containers and raw types that have no meaningful single-token conversion.
_REJECTED = (tuple, dict, set, frozenset, bytes, bytearray, list, type)


def _unsupported(annotation, reason, /):
    return UnsupportedTypeError(
        "unsupported option type %s: %s" % (_describe(annotation), reason),
        annotation=annotation,
        hint="use bool, a number, str, an enum, a path, a pattern, a date or a list of those",
    )


def _describe(annotation, /):
    return annotation.__name__ if isinstance(annotation, type) else repr(annotation)


def _classify_scalar(annotation, /):
    """
    Classify one non-list, non-optional annotation.
    """
    if typing.get_origin(annotation) is re.Pattern:
        annotation = re.Pattern
    if annotation is typing.Any or annotation is object:
        raise _unsupported(annotation, "an option needs a concrete type")
    if typing.get_origin(annotation) is not None or not isinstance(annotation, type):
        raise _unsupported(annotation, "only plain classes and list[...] are accepted")
    if annotation is bool:
        return Target(Kind.BOOLEAN, bool)
    if issubclass(annotation, enum.Enum):
        return Target(Kind.ENUM, annotation)
    if issubclass(annotation, (int, float, complex)):
        return Target(Kind.NUMERIC, annotation)
    if annotation is re.Pattern or issubclass(annotation, (PurePath, datetime.date, datetime.time)):
        return Target(Kind.FACTORY, annotation)
    if issubclass(annotation, _REJECTED):
        raise _unsupported(annotation, "containers cannot be built from a single token")
    try:
        inspect.signature(annotation).bind("")
    except TypeError:
        raise _unsupported(annotation, "its constructor does not accept a single string") from None
    except ValueError:
        pass  # builtins without an introspectable signature (str, decimal.Decimal, ...)
    return Target(Kind.STRING_LIKE, annotation)


def classify(annotation, /):
    """
    Classify a declared annotation into a Target.

    Accepted shapes
    - T
    - T | None / Optional[T]               (nullable)
    - list[T] / typing.List[T] / list      (bare list holds strings)
    - list[T] | None

    Raises
    - UnsupportedTypeError for any other shape (non-list generics, unions of two
      or more concrete types, nested lists, containers, Any, ...).
    """
    nullable = False
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        members = [member for member in typing.get_args(annotation) if member is not types.NoneType]
        if len(members) != 1:
            raise _unsupported(annotation, "unions must be a single type or None")
        annotation, = members
        nullable = True
        origin = typing.get_origin(annotation)

    if annotation is list or origin is list:
        arguments = typing.get_args(annotation)
        element = arguments[0] if arguments else str
        if element is list or typing.get_origin(element) is list:
            raise _unsupported(annotation, "lists cannot be nested")
        return _classify_scalar(element)._replace(is_list=True, nullable=nullable)

    return _classify_scalar(annotation)._replace(nullable=nullable)


def _coerce_boolean(token, /):
    match token.lower():
        case "true" | "t":
            return True
        case "false" | "f":
            return False
    raise CoercionError("%r is not a boolean value" % token, hint="use one of true, t, false or f")


def _coerce_numeric(cls, token, /):
    try:
        if issubclass(cls, int):
            value = int(token, 0)
            return value if cls is int else cls(value)
        return cls(token)
    except (ValueError, ArithmeticError) as error:
        raise CoercionError(
            "%r is not a valid %s (%s)" % (token, cls.__name__, error),
            hint="decimal, 0x, 0o and 0b literals are accepted" if issubclass(cls, int) else None,
        ) from error


def _coerce_enum(cls, token, /):
    key = token.replace("-", "_").lower()
    for name, member in cls.__members__.items():
        if name.lower() == key:
            return member
    raise CoercionError(
        "%r is not a valid %s" % (token, cls.__name__),
        hint="choose one of: %s" % ", ".join(name.lower().replace("_", "-") for name in cls.__members__),
    )


def _coerce_factory(cls, token, /):
    try:
        if cls is re.Pattern:
            return re.compile(token)
        if issubclass(cls, PurePath):
            return cls(token, *())
        return cls.fromisoformat(token)
    except (re.error, ValueError, TypeError) as error:
        raise CoercionError("%r is not a valid %s (%s)" % (token, typename(Target(Kind.FACTORY, cls)), error)) from error


def _coerce_string_like(cls, token, /):
    try:
        return cls(token)
    except Exception as error:  # any constructor failure is a conversion failure
        raise CoercionError("%r is not a valid %s (%s)" % (token, cls.__name__, error)) from error


def coerce(target, token, /):
    """
    Convert a single string token into a value of target.type.

    List targets convert one element; accumulation belongs to the parser.

    Raises
    - CoercionError when the token cannot be converted.
    """
    if not isinstance(token, str):
        raise TypeError("coerce() token must be a string")
    match target.kind:
        case Kind.BOOLEAN:
            return _coerce_boolean(token)
        case Kind.NUMERIC:
            return _coerce_numeric(target.type, token)
        case Kind.ENUM:
            return _coerce_enum(target.type, token)
        case Kind.FACTORY:
            return _coerce_factory(target.type, token)
        case Kind.STRING_LIKE:
            return _coerce_string_like(target.type, token)
    raise TypeError("coerce() unknown kind %r" % (target.kind,))


def render(target, value, /):
    """
    Render one scalar value the way it would be written on the command line.

    coerce(target, render(target, value)) == value for every scalar kind.
    """
    if value is None:
        return None
    match target.kind:
        case Kind.BOOLEAN:
            return "true" if value else "false"
        case Kind.ENUM:
            return value.name
        case Kind.FACTORY if isinstance(value, re.Pattern):
            return value.pattern
        case Kind.FACTORY if isinstance(value, (datetime.date, datetime.time)):
            return value.isoformat()
    return str(value)


def typename(target, /):
    """
    Short, lowercased label for the element type of target (used in usage text).
    """
    cls = target.type
    match target.kind:
        case Kind.BOOLEAN:
            return "boolean"
        case Kind.ENUM:
            return "enum"
        case Kind.FACTORY if cls is re.Pattern:
            return "regex"
        case Kind.FACTORY if issubclass(cls, PurePath):
            return "filename"
    if cls is str:
        return "string"
    return cls.__name__.lower()


__all__ = (
    # Functions
    "classify",
    "coerce",
    "render",
    "typename",

    # Types
    "Kind",
    "Target",
    "CoercionError",
)
