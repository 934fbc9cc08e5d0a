"""Route and parameter descriptors.

The router hands these to the schema registrar; all schema generation works
from them and never from the handler functions directly.
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from openapi_autodoc.routing.extractors import extract_type
from openapi_autodoc.schema.types import is_nullable


class Param(BaseModel):
    """A single typed parameter or structured-type field."""

    name: str
    type: Any = Field(default_factory=lambda: Any)
    required: bool
    has_default: bool = False
    default: Any = None

    @model_validator(mode="before")
    @classmethod
    def _infer_required(cls, data: Any) -> Any:
        # Without an explicit flag: required unless defaulted or nullable
        if isinstance(data, dict) and data.get("required") is None:
            data = dict(data)
            param_type = extract_type(data.get("type", Any))
            data["required"] = not data.get("has_default", False) and not is_nullable(param_type)
        return data


class Route(BaseModel):
    """Everything the registrar needs to document one handler."""

    path: str
    method: str
    path_params: list[Param] = []
    query_params: list[Param] = []
    header_params: list[Param] = []
    body_params: list[Param] = []
    return_types: list[Any] = []
    tags: list[str] = []


class TaggedRoute(BaseModel):
    """Tags registered for a path, restricted to some of its HTTP methods."""

    methods: list[str]
    tags: list[str]
