"""Path, query and header parameters for one route."""

from typing import Any

from openapi_autodoc.routing.base import Param
from openapi_autodoc.routing.extractors import extract_type, is_extractor, is_request_param
from openapi_autodoc.routing.reflection import split_fields
from openapi_autodoc.schema.objects import SchemaRegistry, build_schema, to_jsonable
from openapi_autodoc.schema.types import (
    datetime_hint,
    example_datetime,
    is_custom_struct,
    is_datetime,
    strip_optional,
    unwrap,
)
from openapi_autodoc.utilities.logging import get_logger

logger = get_logger(__name__)

PARAM_LOCATIONS = ("path", "query", "header")


def create_param(p: Param, location: str, schemas: SchemaRegistry) -> dict[str, Any] | None:
    """Build a single OpenAPI parameter entry, or None if its type can't be described."""
    param_type = extract_type(p.type)
    schema = build_schema(param_type, schemas)
    if schema is None:
        logger.warning("Unable to generate a schema for %s parameter '%s'", location, p.name)
        return None

    if p.has_default:
        schema["default"] = to_jsonable(p.default)

    param = {
        "in": location,
        "name": p.name,
        # path params are always required
        "required": True if location == "path" else p.required,
        "schema": schema,
    }

    if is_datetime(strip_optional(param_type)):
        # documented on the parameter, not repeated in its schema
        schema.pop("example", None)
        schema.pop("description", None)
        param["example"] = example_datetime()
        param["description"] = datetime_hint()

    return param


def format_param(params: list[dict[str, Any]], p: Param, location: str, schemas: SchemaRegistry) -> None:
    """Append the entries for ``p``, flattening request extractors into their fields."""
    inner_type = strip_optional(extract_type(p.type))
    if is_extractor(p.type) and is_request_param(p.type) and is_custom_struct(inner_type):
        candidates = split_fields(unwrap(inner_type))
    else:
        candidates = [p]

    for candidate in candidates:
        param = create_param(candidate, location, schemas)
        if param is not None:
            params.append(param)


def format_params(
    path_params: list[Param],
    query_params: list[Param],
    header_params: list[Param],
    schemas: SchemaRegistry,
) -> list[dict[str, Any]]:
    params: list[dict[str, Any]] = []
    for param_list, location in zip((path_params, query_params, header_params), PARAM_LOCATIONS):
        for p in param_list:
            format_param(params, p, location, schemas)
    return params
