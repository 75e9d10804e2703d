"""Tests for roost.config — CompilerConfig frozen dataclass."""

import pytest

from roost.config import CompilerConfig
from roost.errors import ConfigurationError


class TestCompilerConfig:
    def test_defaults(self) -> None:
        cfg = CompilerConfig()

        assert cfg.with_views is False
        assert cfg.not_found is None
        assert cfg.optional_wildcards is False
        assert cfg.root_name == "routes"

    def test_override(self) -> None:
        cfg = CompilerConfig(with_views=True, not_found="NotFound", root_name="app_routes")

        assert cfg.with_views is True
        assert cfg.not_found == "NotFound"
        assert cfg.root_name == "app_routes"

    def test_frozen(self) -> None:
        cfg = CompilerConfig()
        with pytest.raises(AttributeError):
            cfg.with_views = True  # type: ignore[misc]


class TestValidate:
    def test_defaults_are_valid(self) -> None:
        CompilerConfig().validate()

    def test_not_found_requires_views(self) -> None:
        with pytest.raises(ConfigurationError, match="with_views=True"):
            CompilerConfig(not_found="NotFound").validate()

    def test_not_found_with_views(self) -> None:
        CompilerConfig(with_views=True, not_found="NotFound").validate()

    def test_root_name_must_be_identifier(self) -> None:
        with pytest.raises(ConfigurationError, match="root_name"):
            CompilerConfig(root_name="my-routes").validate()
