"""Tests for `ezacomp cfg` (programmatic config editor)."""

from pathlib import Path

import pytest
import tomlkit
import typer
from typer.testing import CliRunner

from ezacomp.cfg import _coerce, _load_toml, _save_toml, app
from ezacomp.config import load_config

runner = CliRunner()

SAMPLE_TOML = """\
# Project completions
[completion]
command = "eza"
shells = ["bash", "fish"]  # keep zsh off for now

[paths]
fish = "~/fish/eza.fish"
"""


@pytest.fixture
def project(tmp_path: Path) -> Path:
    path = tmp_path / "work" / "ezacomp.toml"
    path.write_text(SAMPLE_TOML, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestLoadSave:
    def test_round_trip_preserves_comments(self, project: Path) -> None:
        doc, path = _load_toml(project)
        _save_toml(doc, path)
        result = path.read_text(encoding="utf-8")
        assert "# Project completions" in result
        assert "# keep zsh off for now" in result

    def test_load_nonexistent_raises(self, tmp_path: Path) -> None:
        with pytest.raises(typer.Exit):
            _load_toml(tmp_path / "missing.toml")

    def test_search_without_file_raises(self) -> None:
        with pytest.raises(typer.Exit):
            _load_toml()


class TestCoerce:
    def test_bool(self) -> None:
        assert _coerce("TRUE") is True

    def test_int(self) -> None:
        assert _coerce("12") == 12

    def test_float(self) -> None:
        assert _coerce("1.5") == 1.5

    def test_string(self) -> None:
        assert _coerce("exa") == "exa"


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class TestInit:
    def test_creates_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["init", str(tmp_path / "new")])
        assert result.exit_code == 0
        assert load_config(tmp_path / "new" / "ezacomp.toml").command == "eza"

    def test_does_not_overwrite(self, project: Path) -> None:
        result = runner.invoke(app, ["init", str(project.parent)])
        assert result.exit_code == 0
        assert "already exists" in result.output
        assert "keep zsh off" in project.read_text(encoding="utf-8")

    def test_force(self, project: Path) -> None:
        result = runner.invoke(app, ["init", "--force", str(project.parent)])
        assert result.exit_code == 0
        assert "keep zsh off" not in project.read_text(encoding="utf-8")


class TestShowAndPath:
    def test_path(self, project: Path) -> None:
        result = runner.invoke(app, ["path"])
        assert result.exit_code == 0
        assert result.output.strip() == str(project.resolve())

    def test_show_key(self, project: Path) -> None:
        result = runner.invoke(app, ["show", "completion.command"])
        assert result.exit_code == 0
        assert result.output.strip() == "eza"

    def test_show_missing_key(self, project: Path) -> None:
        result = runner.invoke(app, ["show", "completion.nope"])
        assert result.exit_code == 1

    def test_show_all(self, project: Path) -> None:
        result = runner.invoke(app, ["show"])
        assert "[completion]" in result.output


class TestSet:
    def test_set_scalar(self, project: Path) -> None:
        result = runner.invoke(app, ["set", "completion.command", "exa"])
        assert result.exit_code == 0
        assert load_config(project).command == "exa"
        assert "# Project completions" in project.read_text(encoding="utf-8")

    def test_set_path(self, project: Path) -> None:
        result = runner.invoke(app, ["set", "paths.zsh", "/tmp/_eza"])
        assert result.exit_code == 0
        assert load_config(project).path_for("zsh") == Path("/tmp/_eza")

    def test_set_path_unknown_shell(self, project: Path) -> None:
        result = runner.invoke(app, ["set", "paths.tcsh", "/tmp/x"])
        assert result.exit_code == 1

    def test_set_refuses_list_key(self, project: Path) -> None:
        result = runner.invoke(app, ["set", "completion.shells", "fish"])
        assert result.exit_code == 1
        assert "add-shell" in result.output
        assert load_config(project).shells == ["bash", "fish"]


class TestShells:
    def test_add_shell(self, project: Path) -> None:
        result = runner.invoke(app, ["add-shell", "nushell"])
        assert result.exit_code == 0
        assert load_config(project).shells == ["bash", "fish", "nushell"]

    def test_add_shell_idempotent(self, project: Path) -> None:
        result = runner.invoke(app, ["add-shell", "bash"])
        assert result.exit_code == 0
        assert "already enabled" in result.output
        assert load_config(project).shells == ["bash", "fish"]

    def test_add_unknown_shell(self, project: Path) -> None:
        assert runner.invoke(app, ["add-shell", "tcsh"]).exit_code == 1

    def test_remove_shell(self, project: Path) -> None:
        result = runner.invoke(app, ["remove-shell", "fish"])
        assert result.exit_code == 0
        assert load_config(project).shells == ["bash"]

    def test_remove_absent_shell(self, project: Path) -> None:
        result = runner.invoke(app, ["remove-shell", "zsh"])
        assert result.exit_code == 0
        assert "already removed" in result.output


class TestAliases:
    def test_add_alias(self, project: Path) -> None:
        result = runner.invoke(app, ["add-alias", "exa"])
        assert result.exit_code == 0
        assert load_config(project).commands == ["eza", "exa"]

    def test_add_alias_idempotent(self, project: Path) -> None:
        runner.invoke(app, ["add-alias", "exa"])
        result = runner.invoke(app, ["add-alias", "exa"])
        assert "already present" in result.output
        assert load_config(project).aliases == ["exa"]


class TestExclude:
    def test_exclude_flag(self, project: Path) -> None:
        result = runner.invoke(app, ["exclude", "--", "--git-repos"])
        assert result.exit_code == 0
        assert load_config(project).exclude == ["git-repos"]

    def test_exclude_unknown_flag(self, project: Path) -> None:
        result = runner.invoke(app, ["exclude", "no-such-flag"])
        assert result.exit_code == 1

    def test_exclude_idempotent(self, project: Path) -> None:
        runner.invoke(app, ["exclude", "git"])
        result = runner.invoke(app, ["exclude", "git"])
        assert "already excluded" in result.output
        doc = tomlkit.parse(project.read_text(encoding="utf-8"))
        assert list(doc["completion"]["exclude"]) == ["git"]
