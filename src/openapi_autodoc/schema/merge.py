"""Deep merge of hand-written overrides into the generated document.

Mappings are merged key by key; any other value (lists included) in the
override replaces the existing one wholesale.
"""

import copy
from collections.abc import Mapping
from typing import Any


def recursive_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new mapping with ``override`` deep-merged over ``base``."""
    merged = dict(base)
    for key, value in override.items():
        existing = merged.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            merged[key] = recursive_merge(existing, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def merge_schema(schema: dict[str, Any], customschema: Mapping[str, Any]) -> dict[str, Any]:
    """Merge a custom fragment into the whole document, in place."""
    schema.update(recursive_merge(schema, customschema))
    return schema


def merge_route_schema(schema: dict[str, Any], route: str, customschema: Mapping[str, Any]) -> dict[str, Any]:
    """Merge a custom fragment into ``paths[route]`` only, in place."""
    paths = schema.setdefault("paths", {})
    paths[route] = recursive_merge(paths.get(route, {}), customschema)
    return schema
