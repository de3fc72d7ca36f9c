"""helpscan.py – Recover an option set from a tool's ``--help`` output.

Used to compare the static table against whatever eza version is installed.
Recognises the usual help layouts::

      -1, --oneline              display one entry per line
      -L, --level DEPTH          limit the depth of recursion
      --colo[u]r=WHEN            when to use terminal colours
      --time-style <STYLE>       how to format timestamps
"""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass

_SHORT_RE = re.compile(r"^-(?P<short>[^\s-]),?(?:\s|$)")
_LONG_RE = re.compile(
    r"--(?P<long>[A-Za-z0-9](?:[A-Za-z0-9-]|\[[a-z]+\])*)"
    r"(?P<value>\[?=\S+|[ ](?:<[^>]+>|[A-Z][A-Z0-9_|-]+)(?=[\s,]|$))?"
)
# Optional letters in a spelling, as in --colo[u]r
_OPTIONAL_RE = re.compile(r"\[([a-z]+)\]")


@dataclass(frozen=True)
class HelpOption:
    """One option as advertised by ``--help``."""

    long_name: str
    short_name: str | None
    takes_value: bool


def _spellings(name: str) -> list[str]:
    """Expand ``colo[u]r`` into ``["color", "colour"]``."""
    if "[" not in name:
        return [name]
    return [_OPTIONAL_RE.sub("", name), _OPTIONAL_RE.sub(r"\1", name)]


def parse_help(text: str) -> list[HelpOption]:
    """Extract options from help *text*, in order of first appearance.

    Only lines whose first non-blank character is ``-`` are considered, so
    flags mentioned inside prose descriptions are ignored.  When one line
    lists several long spellings (``--color, --colour`` or ``--colo[u]r``),
    the short alias is attached to the first.
    """
    options: list[HelpOption] = []
    seen: set[str] = set()
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped.startswith("-"):
            continue
        short = None
        m = _SHORT_RE.match(stripped)
        if m:
            short = m.group("short")
            stripped = stripped[m.end():].lstrip()
        # Option column ends at the first run of two spaces
        column = re.split(r"\s{2,}", stripped, maxsplit=1)[0]
        for lm in _LONG_RE.finditer(column):
            takes_value = lm.group("value") is not None
            for name in _spellings(lm.group("long")):
                if name in seen:
                    continue
                seen.add(name)
                options.append(HelpOption(name, short, takes_value))
                short = None
    return options


def scan_tool(command: str = "eza", timeout: float = 10.0) -> list[HelpOption]:
    """Run ``COMMAND --help`` and parse its output.

    Raises ``FileNotFoundError`` when the command is not installed and
    ``RuntimeError`` when it exits non-zero without printing help.
    """
    try:
        proc = subprocess.run(
            [command, "--help"],
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError:
        raise FileNotFoundError(f"{command!r} not found on PATH") from None
    except subprocess.TimeoutExpired:
        raise RuntimeError(f"{command} --help did not finish within {timeout:g}s") from None
    output = proc.stdout or proc.stderr
    if proc.returncode != 0 and not output.strip():
        raise RuntimeError(f"{command} --help exited with status {proc.returncode}")
    return parse_help(output)
