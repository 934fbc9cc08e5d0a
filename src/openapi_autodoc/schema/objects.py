"""Object schema builder — turns annotations into OpenAPI schema fragments.

Structured types are emitted as ``$ref``s and their definitions registered
in a shared registry keyed by type name. A type is inserted into the
registry before its fields are visited, so self-referencing and mutually
referencing types terminate.
"""

from typing import Any

from pydantic_core import PydanticSerializationError, to_jsonable_python

from openapi_autodoc.constants import COMPONENT_PREFIX
from openapi_autodoc.routing.reflection import split_fields
from openapi_autodoc.schema.types import (
    TypeTag,
    array_item_type,
    datetime_hint,
    example_datetime,
    openapi_type,
    resolve_nullable,
    type_tag,
    unwrap,
)
from openapi_autodoc.utilities.logging import get_logger

logger = get_logger(__name__)

SchemaRegistry = dict[str, dict[str, Any]]


def get_component(name: str) -> str:
    return f"{COMPONENT_PREFIX}{name}"


def type_name(tp: Any) -> str:
    return unwrap(tp).__name__


def to_jsonable(value: Any) -> Any:
    """Serialize a default value to a JSON-compatible literal."""
    try:
        return to_jsonable_python(value)
    except PydanticSerializationError:
        return str(value)


def build_schema(current_type: Any, schemas: SchemaRegistry) -> dict[str, Any] | None:
    """Generate the OpenAPI schema for a single annotation.

    Structured types get a ``$ref`` (registering their definition in
    ``schemas`` if needed); everything else is described inline. Returns
    None when nothing can be documented for the annotation.
    """
    if type_tag(current_type) is TypeTag.NOTHING:
        return None

    current_field: dict[str, Any] = {}

    # Nullable unions: T | None, Optional[T], T | Missing
    union_info = resolve_nullable(current_type)
    if union_info is not None:
        nullable, non_null_types = union_info
        if nullable:
            current_field["nullable"] = True
        if len(non_null_types) != 1:
            logger.warning("OpenAPI nullable union must have exactly one non-null type, got %s", current_type)
            return None
        current_type = non_null_types[0]

    tag = type_tag(current_type)

    if tag is TypeTag.OBJECT:
        name = type_name(current_type)
        current_field["$ref"] = get_component(name)
        if name not in schemas:
            convert_object(unwrap(current_type), schemas)

    elif tag is TypeTag.ARRAY:
        items = build_schema(array_item_type(current_type), schemas)
        if items is None:
            logger.warning("Unable to generate a schema for the items of %s", current_type)
            return None
        current_field["type"] = "array"
        current_field["items"] = items

    else:
        openapi_name, fmt = openapi_type(current_type)
        current_field["type"] = openapi_name
        if fmt is not None:
            current_field["format"] = fmt
        if tag is TypeTag.ENUM:
            current_field["enum"] = [to_jsonable(member.value) for member in unwrap(current_type)]
        if tag is TypeTag.DATETIME:
            current_field["example"] = example_datetime()
            current_field["description"] = datetime_hint()

    return current_field


def convert_object(tp: type, schemas: SchemaRegistry) -> dict[str, Any]:
    """Convert a structured type into an OpenAPI 3.0 object schema.

    The schema is stored in ``schemas`` under the type's name and returned.
    A name that is already registered is returned as-is.
    """
    typename = type_name(tp)
    if typename in schemas:
        return schemas[typename]

    obj: dict[str, Any] = {"type": "object", "properties": {}}
    schemas[typename] = obj
    required_fields = []

    for field in split_fields(tp):
        schema = build_schema(field.type, schemas)
        if schema is None:
            logger.warning("Unable to generate a schema for %s.%s", typename, field.name)
            continue

        if field.has_default:
            schema["default"] = to_jsonable(field.default)

        if field.required and not schema.get("nullable", False):
            required_fields.append(field.name)

        obj["properties"][field.name] = schema

    # OpenAPI forbids an empty required list
    if required_fields:
        obj["required"] = required_fields

    logger.debug("Registered component schema %s", typename)
    return obj
