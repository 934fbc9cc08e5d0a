from typing import Any, Optional

from openapi_autodoc.routing.base import Param, Route, TaggedRoute
from openapi_autodoc.routing.extractors import Json, Query


class TestParam:
    def test_create_required_param(self):
        p = Param(name="id", type=int)
        assert p.name == "id"
        assert p.required is True
        assert p.has_default is False
        assert p.default is None

    def test_default_makes_param_optional(self):
        p = Param(name="limit", type=int, has_default=True, default=10)
        assert p.required is False
        assert p.default == 10

    def test_nullable_type_makes_param_optional(self):
        assert Param(name="q", type=Optional[str]).required is False
        assert Param(name="q", type=str | None).required is False

    def test_explicit_required_is_kept(self):
        p = Param(name="q", type=Optional[str], required=True)
        assert p.required is True

    def test_untyped_param(self):
        p = Param(name="anything")
        assert p.type is Any
        assert p.required is True

    def test_nullable_type_inside_extractor_makes_param_optional(self):
        assert Param(name="q", type=Query[int | None]).required is False
        assert Param(name="user", type=Json[Optional[dict]]).required is False
        assert Param(name="q", type=Query[int]).required is True


class TestRoute:
    def test_create_minimal_route(self):
        route = Route(path="/api/users", method="GET")
        assert route.path_params == []
        assert route.body_params == []
        assert route.return_types == []
        assert route.tags == []

    def test_create_post_route_with_body(self):
        route = Route(
            path="/api/users",
            method="POST",
            body_params=[Param(name="user", type=Json[dict])],
            return_types=[dict],
            tags=["users"],
        )
        assert route.body_params[0].required is True
        assert route.tags == ["users"]

    def test_routes_do_not_share_defaults(self):
        first = Route(path="/a", method="GET")
        first.tags.append("a")
        assert Route(path="/b", method="GET").tags == []

    def test_model_dump(self):
        route = Route(path="/pets/{id}", method="GET", path_params=[Param(name="id", type=int)])
        data = route.model_dump()
        assert data["path"] == "/pets/{id}"
        assert data["path_params"][0]["name"] == "id"
        assert data["path_params"][0]["required"] is True


class TestTaggedRoute:
    def test_create(self):
        tagged = TaggedRoute(methods=["GET", "POST"], tags=["pets"])
        assert tagged.methods == ["GET", "POST"]
        assert tagged.tags == ["pets"]
