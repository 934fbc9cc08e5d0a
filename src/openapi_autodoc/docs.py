"""The OpenAPI document and schema registry of one application.

Create one per application, register every route during setup, then call
`finalize()` before the document is served.
"""

import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from openapi_autodoc.constants import OPENAPI_VERSION
from openapi_autodoc.routing.base import Route, TaggedRoute
from openapi_autodoc.routing.reflection import route_from_function
from openapi_autodoc.schema.merge import merge_route_schema, merge_schema
from openapi_autodoc.schema.objects import SchemaRegistry
from openapi_autodoc.schema.registrar import register_schema
from openapi_autodoc.settings import Settings
from openapi_autodoc.utilities.logging import get_logger

logger = get_logger(__name__)


class DocumentationFinalizedError(RuntimeError):
    """Raised when the document is modified after it has been finalized."""


def default_schema(settings: Settings) -> dict[str, Any]:
    info: dict[str, Any] = {"title": settings.title, "version": settings.version}
    if settings.description:
        info["description"] = settings.description
    return {
        "openapi": OPENAPI_VERSION,
        "info": info,
        "paths": {},
        "components": {"schemas": {}},
    }


class Documentation:
    """Owns the generated schema, the component registry and the route tags."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self.schema: dict[str, Any] = default_schema(self.settings)
        self.registry: SchemaRegistry = {}
        self.tagged_routes: dict[str, list[TaggedRoute]] = {}
        self.finalized = False
        self._lock = threading.RLock()

    def _check_open(self) -> None:
        if self.finalized:
            raise DocumentationFinalizedError("The OpenAPI document is finalized and can no longer change")

    def tag(self, path: str, methods: Iterable[str], tags: Iterable[str]) -> None:
        """Attach tags to some methods of a path; must happen before the route is registered.

        Calls for other methods of the same path add to the earlier ones; a
        later call for a method that is already tagged replaces its tags.
        """
        with self._lock:
            self._check_open()
            self.tagged_routes.setdefault(path, []).append(
                TaggedRoute(
                    methods=[m.upper() for m in methods],
                    tags=list(tags),
                )
            )

    def tags_for(self, path: str, method: str) -> list[str]:
        method = method.upper()
        for tagged in reversed(self.tagged_routes.get(path, [])):
            if method in tagged.methods:
                return list(tagged.tags)
        return []

    def register_route(self, route: Route) -> dict[str, Any]:
        with self._lock:
            self._check_open()
            return register_schema(self, route)

    def register_function(
        self,
        method: str,
        path: str,
        fn: Callable[..., Any],
        tags: list[str] | None = None,
    ) -> dict[str, Any]:
        """Describe a handler from its signature and register it."""
        return self.register_route(route_from_function(method, path, fn, tags=tags))

    def merge_schema(self, customschema: Mapping[str, Any]) -> dict[str, Any]:
        with self._lock:
            self._check_open()
            return merge_schema(self.schema, customschema)

    def merge_route_schema(self, route: str, customschema: Mapping[str, Any]) -> dict[str, Any]:
        with self._lock:
            self._check_open()
            return merge_route_schema(self.schema, route, customschema)

    def finalize(self) -> dict[str, Any]:
        """Freeze the document for serving and return it."""
        with self._lock:
            if not self.finalized:
                self.finalized = True
                logger.debug(
                    "Finalized OpenAPI document with %d paths and %d schemas",
                    len(self.schema.get("paths", {})),
                    len(self.registry),
                )
            return self.schema
