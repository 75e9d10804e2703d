"""Shared fixtures — fake modules holding route declarations for the CLI."""

import sys
import types

import pytest

from roost.routing.declaration import route


def home() -> str:
    return "home"


def shell() -> str:
    return "shell"


@pytest.fixture
def decl_module(monkeypatch: pytest.MonkeyPatch) -> types.ModuleType:
    """Register ``_roost_test_routes`` with valid, broken and factory declarations."""
    mod = types.ModuleType("_roost_test_routes")
    mod.routes = route(  # type: ignore[attr-defined]
        "root", "/",
        route("users", "/users",
            route("user", "/:id", view="home"),
            layout="shell",
            fallback="home",
        ),
        layout="shell",
        fallback="home",
    )
    mod.broken = route(  # type: ignore[attr-defined]
        "root", "/",
        route("user", "/:id", route("again", "/:id")),
        route("bad", "bad"),
    )
    mod.as_mapping = {"name": "root", "path": "/", "children": [{"name": "a", "path": "/a"}]}  # type: ignore[attr-defined]
    mod.factory = lambda: route("root", "/", route("made", "/made/:x"))  # type: ignore[attr-defined]
    mod.not_a_decl = 42  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_roost_test_routes", mod)

    views = types.ModuleType("_roost_test_views")
    views.home = home  # type: ignore[attr-defined]
    views.shell = shell  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_roost_test_views", views)
    return mod
