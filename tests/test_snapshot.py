"""Tests for the golden snapshot of the eza option set."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from ezacomp.flags import FLAGS, Arity, FlagDescriptor
from ezacomp.helpscan import HelpOption
from ezacomp.snapshot import (
    app,
    build_snapshot,
    compare_snapshot,
    load_snapshot,
    snapshot_from_help,
    write_snapshot,
)

runner = CliRunner()

GOLDEN = Path(__file__).parent / "golden" / "eza_flags.json"


class TestGolden:
    def test_table_matches_golden_file(self) -> None:
        diff = compare_snapshot(FLAGS, load_snapshot(GOLDEN))
        assert diff.ok, diff.to_dict()

    def test_golden_is_sorted_snapshot(self) -> None:
        assert load_snapshot(GOLDEN) == build_snapshot(FLAGS)


class TestBuild:
    def test_sorted_by_long(self) -> None:
        names = [e["long"] for e in build_snapshot(FLAGS)]
        assert names == sorted(names)

    def test_excludes_descriptions(self) -> None:
        entry = build_snapshot([FlagDescriptor("all", "a", Arity.FLAG, "Show all")])[0]
        assert entry == {"long": "all", "short": "a", "arity": "flag"}


class TestCompare:
    def test_missing_and_extra(self) -> None:
        golden = [{"long": "all", "short": "a", "arity": "flag"}]
        flags = [FlagDescriptor("tree", "T", Arity.FLAG, "Tree")]
        diff = compare_snapshot(flags, golden)
        assert diff.missing == ["all"]
        assert diff.extra == ["tree"]
        assert not diff.ok

    def test_changed_arity(self) -> None:
        golden = [{"long": "level", "short": "L", "arity": "flag"}]
        flags = [FlagDescriptor("level", "L", Arity.VALUE, "Depth")]
        diff = compare_snapshot(flags, golden)
        assert [name for name, _, _ in diff.changed] == ["level"]

    def test_lenient_comparison(self) -> None:
        golden = [{"long": "level", "short": None, "arity": "flag"}]
        flags = [FlagDescriptor("level", "L", Arity.VALUE, "Depth")]
        assert compare_snapshot(flags, golden, check_short=False, check_arity=False).ok

    def test_from_help(self) -> None:
        entries = snapshot_from_help([HelpOption("width", "w", True), HelpOption("all", "a", False)])
        assert entries == [
            {"long": "all", "short": "a", "arity": "flag"},
            {"long": "width", "short": "w", "arity": "value"},
        ]


class TestLoadWrite:
    def test_write_then_load(self, tmp_path: Path) -> None:
        path = tmp_path / "sub" / "golden.json"
        written = write_snapshot(path)
        assert load_snapshot(path) == written

    def test_load_rejects_non_list(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text('{"long": "all"}', encoding="utf-8")
        with pytest.raises(ValueError):
            load_snapshot(path)


class TestCommand:
    def test_print(self) -> None:
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert len(json.loads(result.output)) == len(FLAGS)

    def test_check_passes(self) -> None:
        result = runner.invoke(app, ["--check", str(GOLDEN)])
        assert result.exit_code == 0
        assert "matches" in result.output

    def test_check_detects_drift(self, tmp_path: Path) -> None:
        golden = json.loads(GOLDEN.read_text(encoding="utf-8"))
        golden.append({"long": "zzz-new", "short": None, "arity": "flag"})
        path = tmp_path / "drift.json"
        path.write_text(json.dumps(golden), encoding="utf-8")
        result = runner.invoke(app, ["--check", str(path), "--json"])
        assert result.exit_code == 1
        assert json.loads(result.output)["missing"] == ["zzz-new"]

    def test_check_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--check", str(tmp_path / "nope.json")])
        assert result.exit_code == 1

    def test_write(self, tmp_path: Path) -> None:
        path = tmp_path / "out.json"
        result = runner.invoke(app, ["--write", str(path)])
        assert result.exit_code == 0
        assert load_snapshot(path) == build_snapshot(FLAGS)

    def test_mutually_exclusive(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--write", str(tmp_path / "a"), "--check", str(GOLDEN)])
        assert result.exit_code == 1

    def test_from_help_lenient(self, monkeypatch: pytest.MonkeyPatch) -> None:
        options = [HelpOption(f.long_name, None, False) for f in FLAGS]
        monkeypatch.setattr("ezacomp.snapshot.scan_tool", lambda command: options)
        result = runner.invoke(app, ["--from-help"])
        assert result.exit_code == 0

    def test_from_help_strict_reports_changes(self, monkeypatch: pytest.MonkeyPatch) -> None:
        options = [HelpOption(f.long_name, None, False) for f in FLAGS]
        monkeypatch.setattr("ezacomp.snapshot.scan_tool", lambda command: options)
        result = runner.invoke(app, ["--from-help", "--strict", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.output)["changed"]

    def test_from_help_tool_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _missing(command: str):
            raise FileNotFoundError(f"{command!r} not found on PATH")

        monkeypatch.setattr("ezacomp.snapshot.scan_tool", _missing)
        result = runner.invoke(app, ["--from-help", "--command", "nope-eza", "--json"])
        assert result.exit_code == 1
        assert "nope-eza" in json.loads(result.output)["error"]
