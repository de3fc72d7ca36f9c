"""Tests for recovering an option set from --help output."""

import subprocess
from types import SimpleNamespace

import pytest

from ezacomp.helpscan import HelpOption, parse_help, scan_tool

EZA_HELP = """\
Usage:
  eza [options] [files...]

META OPTIONS
  -?, --help                 show list of command-line options
  -v, --version              show version of eza

DISPLAY OPTIONS
  -1, --oneline              display one entry per line
  -l, --long                 display extended file metadata as a table
  --colo[u]r=WHEN            when to use terminal colours (always, auto, never)
  --colo[u]r-scale           highlight levels of 'field' distinctly(all, age, size)
  --colo[u]r-scale-mode      use gradient or fixed colors in --color-scale (fixed, gradient)
  --color, --colour          alias spellings on one line
  -w, --width COLS           set screen width in columns

FILTERING AND SORTING OPTIONS
  -L, --level DEPTH          limit the depth of recursion
  --time-style <STYLE>       how to format timestamps
  -I, --ignore-glob GLOBS    glob patterns (pipe-separated) of files to ignore

Pass --long twice for more detail.
"""


class TestParseHelp:
    @pytest.fixture
    def options(self) -> dict[str, HelpOption]:
        return {o.long_name: o for o in parse_help(EZA_HELP)}

    def test_short_and_long(self, options: dict[str, HelpOption]) -> None:
        assert options["oneline"] == HelpOption("oneline", "1", False)
        assert options["help"].short_name == "?"

    def test_equals_metavar(self, options: dict[str, HelpOption]) -> None:
        assert options["color"].takes_value

    def test_space_metavar(self, options: dict[str, HelpOption]) -> None:
        assert options["level"] == HelpOption("level", "L", True)
        assert options["width"].takes_value

    def test_angle_metavar(self, options: dict[str, HelpOption]) -> None:
        assert options["time-style"].takes_value

    def test_description_not_taken_as_value(self, options: dict[str, HelpOption]) -> None:
        assert not options["long"].takes_value

    def test_second_spelling_on_line(self, options: dict[str, HelpOption]) -> None:
        assert "colour" in options
        assert options["colour"].short_name is None

    def test_optional_letter_expanded(self, options: dict[str, HelpOption]) -> None:
        assert "colo" not in options
        assert {
            "color",
            "colour",
            "color-scale",
            "colour-scale",
            "color-scale-mode",
            "colour-scale-mode",
        } <= set(options)
        assert options["colour"].takes_value
        assert not options["colour-scale"].takes_value

    def test_optional_letter_keeps_short_on_first(self) -> None:
        options = parse_help("  -C, --colo[u]r=WHEN   when to use colours\n")
        assert options == [HelpOption("color", "C", True), HelpOption("colour", None, True)]

    def test_first_appearance_wins(self) -> None:
        names = [o.long_name for o in parse_help(EZA_HELP)]
        assert names.count("color") == 1

    def test_prose_ignored(self, options: dict[str, HelpOption]) -> None:
        # "--long" inside the trailing sentence must not create a new entry
        assert len([o for o in parse_help(EZA_HELP) if o.long_name == "long"]) == 1

    def test_empty(self) -> None:
        assert parse_help("") == []


class TestScanTool:
    def test_parses_stdout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _run(args, **kwargs):
            assert args == ["eza", "--help"]
            return SimpleNamespace(returncode=0, stdout=EZA_HELP, stderr="")

        monkeypatch.setattr(subprocess, "run", _run)
        names = {o.long_name for o in scan_tool("eza")}
        assert {"help", "level", "time-style"} <= names

    def test_missing_command(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _run(args, **kwargs):
            raise FileNotFoundError(args[0])

        monkeypatch.setattr(subprocess, "run", _run)
        with pytest.raises(FileNotFoundError, match="not-installed"):
            scan_tool("not-installed")

    def test_failure_without_output(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            subprocess, "run", lambda args, **kw: SimpleNamespace(returncode=2, stdout="", stderr="")
        )
        with pytest.raises(RuntimeError, match="status 2"):
            scan_tool("eza")

    def test_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _run(args, **kwargs):
            raise subprocess.TimeoutExpired(args, kwargs["timeout"])

        monkeypatch.setattr(subprocess, "run", _run)
        with pytest.raises(RuntimeError, match="did not finish"):
            scan_tool("eza", timeout=0.5)
