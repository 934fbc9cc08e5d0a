"""Type classification — maps Python type annotations onto OpenAPI primitives.

Every annotation is first resolved to one tag of a closed set (`TypeTag`);
the OpenAPI type name and format are derived from that tag, so the
classifier is total and has no side effects.
"""

import collections
import collections.abc
import dataclasses
import inspect
import types
import typing
from datetime import date, datetime
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Annotated, Any, NewType, NoReturn, Union, get_args, get_origin

from pydantic import BaseModel
from typing_extensions import Never, NotRequired, ReadOnly, Required, is_typeddict

Int32 = NewType("Int32", int)
Int64 = NewType("Int64", int)
Float32 = NewType("Float32", float)
Float64 = NewType("Float64", float)


class Missing:
    """Marker for a value that may be left out entirely, e.g. ``int | Missing``."""


class TypeTag(Enum):
    NOTHING = "nothing"
    UNION = "union"
    ENUM = "enum"
    BOOLEAN = "boolean"
    NUMBER = "number"
    INTEGER = "integer"
    ARRAY = "array"
    STRING = "string"
    DATE = "date"
    DATETIME = "date-time"
    MAPPING = "mapping"
    OBJECT = "object"
    UNKNOWN = "unknown"


NONE_TYPES = (type(None), Missing)
NOTHING_TYPES = (None, type(None), NoReturn, Never, inspect.Signature.empty)

ARRAY_ORIGINS = (
    list,
    set,
    frozenset,
    tuple,
    collections.deque,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Iterable,
    collections.abc.Collection,
)

MAPPING_ORIGINS = (
    dict,
    collections.OrderedDict,
    collections.defaultdict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)

# Modules whose classes are never documented as component schemas
BUILTIN_MODULES = {
    "builtins",
    "datetime",
    "decimal",
    "uuid",
    "pathlib",
    "ipaddress",
    "collections",
    "typing",
    "types",
    "enum",
}

# Carry no type information of their own: Annotated[T, ...], NotRequired[T], ...
_WRAPPER_ORIGINS = (Annotated, Required, NotRequired, ReadOnly)

# Checked by identity, most specific first
_FORMATS = (
    (Int32, "int32"),
    (Int64, "int64"),
    (Float32, "float"),
    (Float64, "double"),
    (int, "int64"),
    (float, "double"),
    (datetime, "date-time"),
    (date, "date"),
)

_TAG_NAMES = {
    TypeTag.BOOLEAN: "boolean",
    TypeTag.NUMBER: "number",
    TypeTag.INTEGER: "integer",
    TypeTag.ARRAY: "array",
    TypeTag.STRING: "string",
    TypeTag.DATE: "string",
    TypeTag.DATETIME: "string",
    TypeTag.MAPPING: "object",
    TypeTag.OBJECT: "object",
}

DATETIME_HINT = (
    "Note: timezone information is not preserved for this value. "
    "Send UTC timestamps or convert to a timezone-aware value on the server."
)


def unwrap(tp: Any) -> Any:
    """Strip ``Annotated`` metadata, TypedDict qualifiers and ``NewType`` aliases down to the runtime type."""
    while True:
        tp = _strip_annotated(tp)
        if isinstance(tp, NewType):
            tp = tp.__supertype__
        else:
            return tp


def _strip_annotated(tp: Any) -> Any:
    while get_origin(tp) in _WRAPPER_ORIGINS:
        tp = get_args(tp)[0]
    return tp


def strip_optional(tp: Any) -> Any:
    """``T | None`` -> ``T``; anything else is returned unchanged."""
    union_info = resolve_nullable(tp)
    if union_info is not None and union_info[0] and len(union_info[1]) == 1:
        return union_info[1][0]
    return tp


def _issubclass(tp: Any, parent: type | tuple[type, ...]) -> bool:
    try:
        return inspect.isclass(tp) and issubclass(tp, parent)
    except TypeError:
        return False


def is_nothing(tp: Any) -> bool:
    """True for annotations that describe the absence of any value."""
    return any(tp is marker for marker in NOTHING_TYPES)


def is_union(tp: Any) -> bool:
    return get_origin(tp) in (Union, types.UnionType)


def is_custom_struct(tp: Any) -> bool:
    """True for user-defined structured classes that become component schemas."""
    return type_tag(tp) is TypeTag.OBJECT


def _is_declared_struct(tp: Any) -> bool:
    if not inspect.isclass(tp):
        return False
    if is_typeddict(tp) or dataclasses.is_dataclass(tp):
        return True
    if _issubclass(tp, BaseModel) and tp is not BaseModel:
        return True
    # NamedTuple
    return _issubclass(tp, tuple) and hasattr(tp, "_fields")


def type_tag(tp: Any) -> TypeTag:
    """Resolve an annotation to exactly one TypeTag."""
    tp = unwrap(tp)

    if is_nothing(tp):
        return TypeTag.NOTHING
    if is_union(tp):
        return TypeTag.UNION
    if _issubclass(tp, Enum):
        return TypeTag.ENUM
    if _is_declared_struct(tp):
        return TypeTag.OBJECT
    if tp is bool:
        return TypeTag.BOOLEAN
    if _issubclass(tp, (float, Decimal)):
        return TypeTag.NUMBER
    if _issubclass(tp, int) and not _issubclass(tp, bool):
        return TypeTag.INTEGER

    origin = get_origin(tp)
    if origin in ARRAY_ORIGINS or tp in ARRAY_ORIGINS or _issubclass(tp, (list, set, frozenset, tuple)):
        return TypeTag.ARRAY
    if _issubclass(tp, datetime):
        return TypeTag.DATETIME
    if _issubclass(tp, date):
        return TypeTag.DATE
    if _issubclass(tp, (str, bytes)):
        return TypeTag.STRING
    if origin in MAPPING_ORIGINS or tp in MAPPING_ORIGINS or _issubclass(tp, dict):
        return TypeTag.MAPPING

    if inspect.isclass(tp) and tp.__module__ not in BUILTIN_MODULES and tp is not typing.Any:
        return TypeTag.OBJECT
    return TypeTag.UNKNOWN


def get_format(tp: Any) -> str | None:
    """Return the OpenAPI format hint for a numeric or date/time annotation."""
    tp = _strip_annotated(tp)
    while True:
        for known, fmt in _FORMATS:
            if tp is known:
                return fmt
        if isinstance(tp, NewType):
            tp = _strip_annotated(tp.__supertype__)
            continue
        break

    tag = type_tag(tp)
    if tag is TypeTag.DATETIME:
        return "date-time"
    if tag is TypeTag.DATE:
        return "date"
    if _issubclass(tp, float):
        return "double"
    if tag is TypeTag.INTEGER:
        return "int64"
    return None


def get_type(tp: Any) -> str:
    """Returns the OpenAPI type name for an annotation, ``"string"`` when unknown."""
    tag = type_tag(tp)
    if tag is TypeTag.ENUM:
        return "integer" if _issubclass(unwrap(tp), IntEnum) else "string"
    return _TAG_NAMES.get(tag, "string")


def openapi_type(tp: Any) -> tuple[str, str | None]:
    """Classify an annotation as an OpenAPI ``(type, format)`` pair."""
    tag = type_tag(tp)
    if tag in (TypeTag.ENUM, TypeTag.UNION, TypeTag.NOTHING, TypeTag.UNKNOWN):
        return get_type(tp), None
    return get_type(tp), get_format(tp)


def is_datetime(tp: Any) -> bool:
    return type_tag(tp) is TypeTag.DATETIME


def example_datetime() -> str:
    """Sample timestamp whose year follows the clock; the rest is pinned."""
    return f"{datetime.now():%Y}-01-01T00:00:00.000"


def datetime_hint() -> str:
    return DATETIME_HINT


def resolve_nullable(tp: Any) -> tuple[bool, list[Any]] | None:
    """Split a union into its nullability and its non-null members.

    Returns None when ``tp`` is not a union at all.
    """
    tp = _strip_annotated(tp)
    if not is_union(tp):
        return None
    members = get_args(tp)
    nullable = any(m is n for m in members for n in NONE_TYPES)
    non_null = [m for m in members if not any(m is n for n in NONE_TYPES)]
    return nullable, non_null


def is_nullable(tp: Any) -> bool:
    info = resolve_nullable(tp)
    return info is not None and info[0]


def array_item_type(tp: Any) -> Any:
    """Element type of a sequence annotation, ``Any`` when unparameterised."""
    args = get_args(unwrap(tp))
    return args[0] if args else Any
