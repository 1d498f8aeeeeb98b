"""Tests for the bulloak CLI, config, and error rendering."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from bulloak import __version__
from bulloak.cli import main
from bulloak.config import Config, find_config, load_config
from bulloak.errors import (
    CompileError,
    Diagnostic,
    DiagnosticLabel,
    DiagnosticRenderer,
    Severity,
    Suggestion,
)
from bulloak.source import Span


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def tmp_project(tmp_path):
    """Create a project with a config and one tree file."""
    (tmp_path / "bulloak.toml").write_text(
        '[translate]\nbackend = "noir"\nskip_modifiers = true\n'
        "[translate.options]\nvm_skip = true\n"
    )
    tests = tmp_path / "test"
    tests.mkdir()
    (tests / "hash_pair.tree").write_text(
        "HashPairTest\n"
        "├── It should never revert.\n"
        "└── When first arg is smaller\n"
        "    └── It should match.\n",
        encoding="utf-8",
    )
    return tmp_path


# --- CLI tests ---


class TestCLI:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "check" in result.output
        assert "hir" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_check_ok(self, runner, tmp_project):
        path = tmp_project / "test" / "hash_pair.tree"
        result = runner.invoke(main, ["check", str(path)])
        assert result.exit_code == 0
        assert "checked 1 file(s), no errors" in result.output

    def test_check_reports_diagnostics(self, runner, tmp_path):
        bad = tmp_path / "bad.tree"
        bad.write_text("Foo\n└── When a\n", encoding="utf-8")
        result = runner.invoke(main, ["check", "--no-color", str(bad)])
        assert result.exit_code == 1
        assert "error[E302]" in result.output
        assert f"{bad}:2:1" in result.output

    def test_check_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["check", str(tmp_path / "nope.tree")])
        assert result.exit_code != 0

    def test_hir_outline(self, runner, tmp_project):
        path = tmp_project / "test" / "hash_pair.tree"
        result = runner.invoke(main, ["hir", str(path)])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "backend noir"
        assert lines[1] == "module HashPairTest"
        assert "  modifier <unconditional>" in lines
        assert "  modifier When first arg is smaller" in lines
        assert "    - It should match." in lines

    def test_hir_backend_override(self, runner, tmp_project):
        path = tmp_project / "test" / "hash_pair.tree"
        result = runner.invoke(main, ["hir", "--backend", "foundry", str(path)])
        assert result.output.splitlines()[0] == "backend foundry"

    def test_hir_submodules(self, runner, tmp_path):
        tree = tmp_path / "multi.tree"
        tree.write_text(
            "Contract::one\n└── It a\n\nContract::two\n└── It b\n", encoding="utf-8",
        )
        result = runner.invoke(main, ["hir", str(tree)])
        assert result.exit_code == 0
        assert "  submodule one" in result.output
        assert "  submodule two" in result.output

    def test_verbose_flag(self, runner, tmp_project):
        path = tmp_project / "test" / "hash_pair.tree"
        result = runner.invoke(main, ["--verbose", "check", str(path)])
        assert result.exit_code == 0


# --- Config tests ---


class TestConfig:
    def test_find_config(self, tmp_project):
        found = find_config(tmp_project / "test" / "hash_pair.tree")
        assert found == tmp_project / "bulloak.toml"

    def test_load_config(self, tmp_project):
        config = load_config(tmp_project / "bulloak.toml")
        assert config.backend == "noir"
        assert config.skip_modifiers is True
        assert config.format_descriptions is False
        assert config.options == {"vm_skip": True}

    def test_load_empty_config(self, tmp_path):
        path = tmp_path / "bulloak.toml"
        path.write_text("")
        assert load_config(path) == Config()

    def test_find_config_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            find_config(tmp_path)


# --- Diagnostic rendering ---


class TestDiagnosticRenderer:
    def test_render_from_memory(self):
        span = Span("mem.tree", 2, 5, 2, 10)
        diag = Diagnostic(
            severity=Severity.ERROR,
            code="E302",
            message="found a condition with no children",
            labels=[DiagnosticLabel(span=span, message="add an action")],
            notes=["conditions must lead somewhere"],
            suggestions=[Suggestion("add", "└── It works")],
        )
        renderer = DiagnosticRenderer(color=False, sources={"mem.tree": "Foo\n└── When a\n"})
        out = renderer.render(diag)
        assert "error[E302]: found a condition with no children" in out
        assert "--> mem.tree:2:5" in out
        assert "└── When a" in out
        assert "^^^^^^" in out
        assert "add an action" in out
        assert "note: conditions must lead somewhere" in out
        assert "try: └── It works" in out

    def test_render_colors(self):
        diag = Diagnostic.error("E101", "tabs are not allowed; use spaces")
        assert "\033[" in DiagnosticRenderer(color=True).render(diag)

    def test_compile_error_message(self):
        err = CompileError([Diagnostic.error("E101", "a"), Diagnostic.error("E102", "b")])
        assert str(err) == "2 error(s): a; b"
        assert err.code == "E101"
        assert err.span is None

