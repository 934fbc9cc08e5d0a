"""Content negotiation for request bodies.

Body parameters declared through the same kind of extractor are combined
with ``allOf``. The preferred encodings (JSON, then plain text, then form)
come first in the resulting content map so docs UIs default to them; XML
and multipart file upload are always offered as fallbacks.
"""

import copy
from collections import Counter
from typing import Any

from openapi_autodoc.constants import FORM_CONTENT, JSON_CONTENT, MULTIPART_CONTENT, TEXT_CONTENT, XML_CONTENT
from openapi_autodoc.routing.base import Param
from openapi_autodoc.routing.extractors import BodyKind, body_kind, extract_type
from openapi_autodoc.schema.objects import get_component, type_name
from openapi_autodoc.schema.types import get_type, is_custom_struct, strip_optional

FALLBACK_CONTENT: dict[str, dict[str, Any]] = {
    XML_CONTENT: {"schema": {"type": "object"}},
    MULTIPART_CONTENT: {
        "schema": {
            "type": "object",
            "properties": {"file": {"type": "string", "format": "binary"}},
            "required": ["file"],
        }
    },
}


def collect_schema_refs(refs: dict[BodyKind, list[str]], kind: BodyKind, schematype: str = "allOf") -> dict[str, Any]:
    return {schematype: [{"$ref": ref} for ref in refs.get(kind, [])]}


def format_content(bodyparams: list[Param]) -> dict[str, dict[str, Any]]:
    """Build the ordered ``content`` map of a request body."""
    body_refs: dict[BodyKind, list[str]] = {}
    body_types: dict[BodyKind, str] = {}
    body_counts: Counter[BodyKind] = Counter()

    for p in bodyparams:
        inner_type = strip_optional(extract_type(p.type))
        kind = body_kind(p.type)
        body_types[kind] = get_type(inner_type)
        body_counts[kind] += 1

        if is_custom_struct(inner_type):
            body_refs.setdefault(kind, []).append(get_component(type_name(inner_type)))

    jsonschema = collect_schema_refs(body_refs, BodyKind.JSON) | {"type": "object"}

    # Several raw bodies can only be described together as an opaque string
    textschema = collect_schema_refs(body_refs, BodyKind.TEXT)
    textschema["type"] = "string" if body_counts[BodyKind.TEXT] > 1 else body_types.get(BodyKind.TEXT, "string")

    formschema = collect_schema_refs(body_refs, BodyKind.FORM) | {"type": "object"}

    content: dict[str, dict[str, Any]] = {}
    for mimetype, schema in ((JSON_CONTENT, jsonschema), (TEXT_CONTENT, textschema), (FORM_CONTENT, formschema)):
        if schema["allOf"]:
            content[mimetype] = {"schema": schema}

    for mimetype, value in FALLBACK_CONTENT.items():
        if mimetype not in content:
            content[mimetype] = copy.deepcopy(value)

    return content
