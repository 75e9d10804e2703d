"""Tests for roost.cli._resolve — import string resolution."""

import types

import pytest

from roost.cli._resolve import resolve_declaration, resolve_scope
from roost.routing.declaration import RouteDecl


class TestResolveDeclaration:
    def test_module_and_attribute(self, decl_module: types.ModuleType) -> None:
        assert resolve_declaration("_roost_test_routes:routes") is decl_module.routes

    def test_default_attribute(self, decl_module: types.ModuleType) -> None:
        assert resolve_declaration("_roost_test_routes") is decl_module.routes

    def test_mapping(self, decl_module: types.ModuleType) -> None:
        assert resolve_declaration("_roost_test_routes:as_mapping") is decl_module.as_mapping

    def test_factory_is_called(self, decl_module: types.ModuleType) -> None:
        decl = resolve_declaration("_roost_test_routes:factory")
        assert isinstance(decl, RouteDecl)
        assert decl.children[0].name == "made"

    def test_wrong_type(self, decl_module: types.ModuleType) -> None:
        with pytest.raises(TypeError, match="not a route declaration"):
            resolve_declaration("_roost_test_routes:not_a_decl")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_declaration("nonexistent_module_xyz:routes")

    def test_missing_attribute(self, decl_module: types.ModuleType) -> None:
        with pytest.raises(AttributeError):
            resolve_declaration("_roost_test_routes:nope")


class TestResolveScope:
    def test_none(self) -> None:
        assert resolve_scope(None) == {}

    def test_module_names(self, decl_module: types.ModuleType) -> None:
        scope = resolve_scope("_roost_test_views")
        assert callable(scope["home"])
        assert callable(scope["shell"])
