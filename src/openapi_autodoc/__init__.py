"""Generate OpenAPI 3.0 documents from typed route descriptors."""

from openapi_autodoc.docs import Documentation, DocumentationFinalizedError
from openapi_autodoc.routing.base import Param, Route, TaggedRoute
from openapi_autodoc.routing.extractors import Body, Form, Header, Json, JsonFragment, Path, Query
from openapi_autodoc.schema.merge import merge_route_schema, merge_schema, recursive_merge
from openapi_autodoc.schema.types import Float32, Float64, Int32, Int64, Missing
from openapi_autodoc.settings import Settings

__all__ = [
    "Body",
    "Documentation",
    "DocumentationFinalizedError",
    "Float32",
    "Float64",
    "Form",
    "Header",
    "Int32",
    "Int64",
    "Json",
    "JsonFragment",
    "Missing",
    "Param",
    "Path",
    "Query",
    "Route",
    "Settings",
    "TaggedRoute",
    "merge_route_schema",
    "merge_schema",
    "recursive_merge",
]
