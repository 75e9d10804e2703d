"""Tests for roost.codegen — rendering compiled routes as module source."""

import inspect

import pytest

from roost.codegen import create_environment, render_module
from roost.compiler import compile_routes
from roost.config import CompilerConfig
from roost.errors import ConfigurationError
from roost.routing.declaration import route
from roost.routing.segments import OptionalParam, Param, Static, Wildcard


def _decl():
    return route(
        "root", "/",
        route("welcome", "/welcome"),
        route("complex", "/complex/:foo/:type?/*baz"),
        route("users", "/users",
            route("user", "/:id",
                route("welcome", "/settings"),
                route("details", "/details"),
            ),
        ),
    )


def _load(source: str) -> dict[str, object]:
    namespace: dict[str, object] = {"__name__": "generated_routes"}
    exec(compile(source, "<generated>", "exec"), namespace)
    return namespace


@pytest.fixture
def source() -> str:
    return render_module(compile_routes(_decl()))


class TestRenderModule:
    def test_header(self, source: str) -> None:
        assert source.startswith('"""Route descriptors generated by roost.')
        assert "from roost.routing import segments as _roost_segments" in source

    def test_class_per_route(self, source: str) -> None:
        for name in ("Root", "RootWelcome", "RootComplex", "RootUsersUserWelcome"):
            assert f"class {name}:" in source

    def test_children_defined_before_parents(self, source: str) -> None:
        assert source.index("class RootUsersUserDetails:") < source.index("class RootUsersUser:")
        assert source.index("class RootUsers:") < source.index("class Root:")

    def test_fixed_arity_signatures(self, source: str) -> None:
        assert "def materialize(id: str) -> str:" in source
        assert "def materialize(foo: str, type_: str | None, baz: str) -> str:" in source

    def test_root_name(self) -> None:
        compiled = compile_routes(_decl(), config=CompilerConfig(root_name="app_routes"))
        assert "app_routes = Root()" in render_module(compiled)

    def test_custom_environment(self) -> None:
        compiled = compile_routes(route("root", "/"))
        assert "class Root:" in render_module(compiled, env=create_environment())


class TestGeneratedModule:
    def test_materialize(self, source: str) -> None:
        routes = _load(source)["routes"]
        assert routes.materialize() == "/"  # type: ignore[attr-defined]
        assert routes.welcome.materialize() == "/welcome"  # type: ignore[attr-defined]
        assert routes.users.user.details.materialize("42") == "/users/42/details"  # type: ignore[attr-defined]
        assert routes.users.user.welcome.materialize("7") == "/users/7/settings"  # type: ignore[attr-defined]

    def test_optional_segments(self, source: str) -> None:
        complex_ = _load(source)["routes"].complex  # type: ignore[attr-defined]
        assert complex_.materialize("42", "ok", "bob") == "/complex/42/ok/bob"
        assert complex_.materialize("42", None, "otto/") == "/complex/42/otto"

    def test_path(self, source: str) -> None:
        routes = _load(source)["routes"]
        assert routes.path() == ()  # type: ignore[attr-defined]
        assert routes.users.user.path() == (Param("id"),)  # type: ignore[attr-defined]
        assert routes.complex.path() == (  # type: ignore[attr-defined]
            Static("complex"),
            Param("foo"),
            OptionalParam("type"),
            Wildcard("baz"),
        )

    def test_signature(self, source: str) -> None:
        details = _load(source)["routes"].users.user.details  # type: ignore[attr-defined]
        assert list(inspect.signature(details.materialize).parameters) == ["id"]

    def test_route_enum(self, source: str) -> None:
        route_enum = _load(source)["Route"]
        names = [member.name for member in route_enum]  # type: ignore[attr-defined]
        assert names == [
            "Root",
            "RootWelcome",
            "RootComplex",
            "RootUsers",
            "RootUsersUser",
            "RootUsersUserWelcome",
            "RootUsersUserDetails",
        ]
        details = route_enum.RootUsersUserDetails.value  # type: ignore[attr-defined]
        assert details.materialize("1") == "/users/1/details"


class TestModuleNames:
    def _routes(self) -> object:
        decl = route(
            "root", "/",
            route("a", "/a/:str/:self"),
            route("b", "/b/:_parts/:_rest"),
            route("c", "/c/:path/:Route"),
            route("q", '/q/say"hi"\\'),
        )
        return _load(render_module(compile_routes(decl)))["routes"]

    def test_parameters_named_like_builtins(self) -> None:
        routes = self._routes()
        assert routes.a.materialize("x", "y") == "/a/x/y"  # type: ignore[attr-defined]

    def test_parameters_named_like_helpers(self) -> None:
        routes = self._routes()
        assert routes.b.materialize("1", "2") == "/b/1/2"  # type: ignore[attr-defined]
        assert routes.c.materialize("p", "r") == "/c/p/r"  # type: ignore[attr-defined]

    def test_quotes_in_pattern(self) -> None:
        q = self._routes().q  # type: ignore[attr-defined]
        assert q.materialize() == '/q/say"hi"\\'
        assert q.__doc__ == '/q/say"hi"\\'

    def test_route_named_like_enum(self) -> None:
        compiled = compile_routes(route("route", "/"))
        with pytest.raises(ConfigurationError, match="reserved for the route enum"):
            render_module(compiled)

    @pytest.mark.parametrize("root_name", ["Root", "Route", "_roost_text"])
    def test_root_name_collides(self, root_name: str) -> None:
        compiled = compile_routes(route("root", "/"), config=CompilerConfig(root_name=root_name))
        with pytest.raises(ConfigurationError, match="collides with a generated name"):
            render_module(compiled)

    def test_distinct_variants_render_distinct_classes(self) -> None:
        decl = route("root", "/", route("user_details", "/ud"), route("user", "/u"))
        namespace = _load(render_module(compile_routes(decl)))
        routes = namespace["routes"]
        assert routes.user_details.materialize() == "/ud"  # type: ignore[attr-defined]
        assert routes.user.materialize() == "/u"  # type: ignore[attr-defined]
