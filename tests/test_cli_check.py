"""Tests for roost.cli._check — ``roost check`` subcommand."""

import types

import pytest

from roost.cli import main


class TestRoostCheck:
    def test_valid_declaration(
        self, decl_module: types.ModuleType, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["check", "_roost_test_routes:routes"])
        assert "OK: 3 routes" in capsys.readouterr().out

    def test_with_views_prints_assembly(
        self, decl_module: types.ModuleType, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main([
            "check",
            "_roost_test_routes:routes",
            "--with-views",
            "--scope",
            "_roost_test_views",
            "--not-found",
            "home",
        ])
        out = capsys.readouterr().out
        assert "OK: 3 routes" in out
        assert "RouteAssembly(not_found=home)" in out
        assert "Route /:id  view=home" in out

    def test_unresolved_views_fail(
        self, decl_module: types.ModuleType, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "_roost_test_routes:routes", "--with-views"])
        assert exc_info.value.code == 1
        assert "[unresolved-binding]" in capsys.readouterr().out

    def test_failed_check_lists_every_problem(
        self, decl_module: types.ModuleType, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "_roost_test_routes:broken"])
        assert exc_info.value.code == 1
        out = capsys.readouterr().out
        assert "error: root > bad: [malformed-pattern]" in out
        assert "error: root > user > again: [duplicate-parameter]" in out
        assert "2 problems found." in out

    def test_not_found_without_views(
        self, decl_module: types.ModuleType, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "_roost_test_routes:routes", "--not-found", "home"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_import_string(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "nonexistent_module_xyz:routes"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
