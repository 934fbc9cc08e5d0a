"""Extractor markers — annotate handler parameters with where their value comes from.

    def create_user(user: Json[User], trace: Header[TraceHeaders]) -> User: ...

Path, Query and Header are request-parameter extractors and get flattened
into one OpenAPI parameter per field. Json, JsonFragment, Body and Form are
body extractors; each belongs to one MIME family (`BodyKind`).
"""

import inspect
from enum import Enum
from typing import Any, Generic, TypeVar, get_args, get_origin

T = TypeVar("T")


class BodyKind(Enum):
    JSON = "json"
    TEXT = "text"
    FORM = "form"


class Extractor(Generic[T]):
    """Base class for all extractor markers."""


class RequestParam(Extractor[T]):
    location: str = ""


class Path(RequestParam[T]):
    location = "path"


class Query(RequestParam[T]):
    location = "query"


class Header(RequestParam[T]):
    location = "header"


class BodyExtractor(Extractor[T]):
    kind: BodyKind = BodyKind.JSON


class Json(BodyExtractor[T]):
    kind = BodyKind.JSON


class JsonFragment(BodyExtractor[T]):
    """A single top-level key of a JSON body, named after the parameter."""

    kind = BodyKind.JSON


class Body(BodyExtractor[T]):
    """The raw request body, documented as text/plain."""

    kind = BodyKind.TEXT


class Form(BodyExtractor[T]):
    kind = BodyKind.FORM


def _extractor_class(tp: Any) -> type | None:
    cls = get_origin(tp) or tp
    if inspect.isclass(cls) and issubclass(cls, Extractor):
        return cls
    return None


def is_extractor(tp: Any) -> bool:
    return _extractor_class(tp) is not None


def is_request_param(tp: Any) -> bool:
    """True for Path/Query/Header extractors."""
    cls = _extractor_class(tp)
    return cls is not None and issubclass(cls, RequestParam)


def is_body_extractor(tp: Any) -> bool:
    cls = _extractor_class(tp)
    return cls is not None and issubclass(cls, BodyExtractor)


def extract_type(tp: Any) -> Any:
    """Return the type wrapped by an extractor, or ``tp`` itself for non-extractors."""
    if not is_extractor(tp):
        return tp
    args = get_args(tp)
    return args[0] if args else Any


def extractor_location(tp: Any) -> str | None:
    cls = _extractor_class(tp)
    if cls is None or not issubclass(cls, RequestParam):
        return None
    return cls.location


def body_kind(tp: Any) -> BodyKind:
    """MIME family of a body parameter; unwrapped types are treated as JSON."""
    cls = _extractor_class(tp)
    if cls is None or not issubclass(cls, BodyExtractor):
        return BodyKind.JSON
    return cls.kind
