"""Documents one route inside the shared schema."""

import re
from typing import TYPE_CHECKING, Any

from openapi_autodoc.constants import BODY_METHODS, METHOD_ALIASES
from openapi_autodoc.routing.base import Route
from openapi_autodoc.routing.extractors import extract_type
from openapi_autodoc.schema.content import format_content
from openapi_autodoc.schema.merge import merge_route_schema, merge_schema
from openapi_autodoc.schema.objects import build_schema, convert_object
from openapi_autodoc.schema.params import format_params
from openapi_autodoc.schema.types import is_custom_struct, resolve_nullable, strip_optional, unwrap
from openapi_autodoc.utilities.logging import get_logger

if TYPE_CHECKING:
    from openapi_autodoc.docs import Documentation

logger = get_logger(__name__)

# "{id:\d+}" -> "{id}", only inside a placeholder that closes a segment
ROUTE_REGEX_RE = re.compile(r"(\{\w+):.*?(?=\}(?:/|$))")


def clean_path(path: str) -> str:
    """Strip routing regex fragments from path placeholders."""
    return ROUTE_REGEX_RE.sub(r"\1", path)


def normalize_method(method: str) -> str:
    method = method.upper()
    return METHOD_ALIASES.get(method, method)


def build_responses(return_types: list[Any], schemas: dict[str, Any]) -> dict[str, Any]:
    responses: dict[str, Any] = {
        "200": {"description": "200 response"},
        "500": {"description": "500 Server encountered a problem"},
    }

    # Handlers often return T | None, document the concrete type(s)
    concrete_types = []
    for item in return_types:
        union_info = resolve_nullable(item)
        if union_info is not None:
            concrete_types.extend(union_info[1])
        else:
            concrete_types.append(item)

    return_type_schemas: list[dict[str, Any]] = []
    for tp in concrete_types:
        schema = build_schema(tp, schemas)
        if schema is not None and schema not in return_type_schemas:
            return_type_schemas.append(schema)

    if len(return_type_schemas) > 1:
        json_response_schema = {"anyOf": return_type_schemas}
    elif len(return_type_schemas) == 1:
        json_response_schema = return_type_schemas[0]
    else:
        return responses

    responses["200"]["content"] = {"application/json": {"schema": json_response_schema}}
    return responses


def register_schema(docs: "Documentation", route: Route) -> dict[str, Any]:
    """Generate and register the schema for one route; returns its operation object."""
    schemas = docs.registry
    known = set(schemas)

    for p in route.body_params:
        inner_type = strip_optional(extract_type(p.type))
        if is_custom_struct(inner_type):
            convert_object(unwrap(inner_type), schemas)

    params = format_params(route.path_params, route.query_params, route.header_params, schemas)
    content = format_content(route.body_params)

    method = normalize_method(route.method)
    tags = docs.tags_for(route.path, route.method) or docs.tags_for(route.path, method) or route.tags

    operation: dict[str, Any] = {
        "tags": list(tags),
        "parameters": params,
        "responses": build_responses(route.return_types, schemas),
    }

    if method in BODY_METHODS or route.body_params:
        operation["requestBody"] = {
            # one required body param makes the whole body required
            "required": any(p.required for p in route.body_params),
            "content": content,
        }

    new_schemas = {name: schema for name, schema in schemas.items() if name not in known}
    if new_schemas:
        merge_schema(docs.schema, {"components": {"schemas": new_schemas}})

    path = clean_path(route.path)
    merge_route_schema(docs.schema, path, {method.lower(): operation})
    logger.debug("Registered %s %s", method, path)
    return operation
