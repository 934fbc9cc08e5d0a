"""Reads fields off structured types and parameters off handler signatures."""

import dataclasses
import inspect
import re
import typing
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel
from typing_extensions import is_typeddict

from openapi_autodoc.routing.base import Param, Route
from openapi_autodoc.routing.extractors import extractor_location, is_body_extractor
from openapi_autodoc.utilities.logging import get_logger

logger = get_logger(__name__)

PLACEHOLDER_RE = re.compile(r"\{(\w+)")

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _type_hints(obj: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(obj, include_extras=True)
    except (NameError, TypeError) as e:
        # Unresolvable forward references: keep the raw annotations
        logger.debug("Falling back to raw annotations for %r: %s", obj, e)
        return dict(getattr(obj, "__annotations__", {}))


def _pydantic_fields(tp: type[BaseModel]) -> list[Param]:
    params = []
    for name, field in tp.model_fields.items():
        has_default = not field.is_required()
        params.append(
            Param(
                name=field.alias or name,
                type=field.annotation,
                required=field.is_required(),
                has_default=has_default,
                default=field.get_default(call_default_factory=True) if has_default else None,
            )
        )
    return params


def _dataclass_fields(tp: type) -> list[Param]:
    hints = _type_hints(tp)
    params = []
    for field in dataclasses.fields(tp):
        if field.default is not dataclasses.MISSING:
            has_default, default = True, field.default
        elif field.default_factory is not dataclasses.MISSING:
            has_default, default = True, field.default_factory()
        else:
            has_default, default = False, None
        params.append(Param(name=field.name, type=hints.get(field.name, field.type), has_default=has_default, default=default))
    return params


def _namedtuple_fields(tp: type) -> list[Param]:
    hints = _type_hints(tp)
    defaults = getattr(tp, "_field_defaults", {})
    return [
        Param(
            name=name,
            type=hints.get(name, Any),
            has_default=name in defaults,
            default=defaults.get(name),
        )
        for name in tp._fields
    ]


def _typeddict_fields(tp: type) -> list[Param]:
    hints = _type_hints(tp)
    required_keys = getattr(tp, "__required_keys__", frozenset(hints))
    return [Param(name=name, type=hint, required=name in required_keys) for name, hint in hints.items()]


def _class_fields(tp: type) -> list[Param]:
    """Class annotations first, then the constructor signature."""
    params = []
    for name, hint in _type_hints(tp).items():
        if name.startswith("_") or typing.get_origin(hint) is typing.ClassVar:
            continue
        has_default = name in vars(tp)
        params.append(Param(name=name, type=hint, has_default=has_default, default=vars(tp).get(name)))

    init = tp.__dict__.get("__init__")
    if init is not None:
        params.extend(_signature_params(init, skip_first=True))
    return params


def _signature_params(fn: Callable[..., Any], skip_first: bool = False) -> list[Param]:
    hints = _type_hints(fn)
    params = []
    for i, (name, parameter) in enumerate(inspect.signature(fn).parameters.items()):
        if (skip_first and i == 0) or parameter.kind in _SKIPPED_KINDS:
            continue
        has_default = parameter.default is not inspect.Parameter.empty
        params.append(
            Param(
                name=name,
                type=hints.get(name, Any),
                has_default=has_default,
                default=parameter.default if has_default else None,
            )
        )
    return params


def split_fields(tp: Any) -> list[Param]:
    """Return the distinct named fields of a structured type, in declaration order.

    A name declared twice keeps its first position, but the later declaration
    wins (e.g. an ``__init__`` parameter overrides the class annotation).
    """
    if inspect.isclass(tp) and issubclass(tp, BaseModel):
        fields = _pydantic_fields(tp)
    elif dataclasses.is_dataclass(tp):
        fields = _dataclass_fields(tp)
    elif is_typeddict(tp):
        fields = _typeddict_fields(tp)
    elif inspect.isclass(tp) and issubclass(tp, tuple) and hasattr(tp, "_fields"):
        fields = _namedtuple_fields(tp)
    elif inspect.isclass(tp):
        fields = _class_fields(tp)
    else:
        return []

    by_name: dict[str, Param] = {}
    for field in fields:
        by_name[field.name] = field
    return list(by_name.values())


def route_from_function(
    method: str,
    path: str,
    fn: Callable[..., Any],
    tags: list[str] | None = None,
) -> Route:
    """Build a Route from a handler's signature and return annotation."""
    placeholders = set(PLACEHOLDER_RE.findall(path))
    hints = _type_hints(fn)

    located: dict[str, list[Param]] = {"path": [], "query": [], "header": [], "body": []}
    for param in _signature_params(fn):
        if is_body_extractor(param.type):
            located["body"].append(param)
        elif (location := extractor_location(param.type)) is not None:
            located[location].append(param)
        elif param.name in placeholders:
            located["path"].append(param)
        else:
            located["query"].append(param)

    return_types = [hints["return"]] if "return" in hints else []

    return Route(
        path=path,
        method=method,
        path_params=located["path"],
        query_params=located["query"],
        header_params=located["header"],
        body_params=located["body"],
        return_types=return_types,
        tags=tags or [],
    )
