"""lint.py - Structural linter for the eza flag table.

Checks the invariants every completion generator relies on: long and short
names are unique, descriptions are present, names are well-formed, and value
choices only appear where a value is expected.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import typer
from rich.console import Console
from rich.text import Text

from ezacomp.cli import json_print
from ezacomp.flags import FLAGS, Arity, FlagDescriptor

out_console = Console()

_LONG_NAME_RE = re.compile(r"^[a-z0-9][a-z0-9-]*$")


@dataclass
class LintResult:
    """Accumulated errors and warnings for a flag table.

    Diagnostics are keyed by the long name of the offending row so the
    output reads like ``--color: E003: ...``.
    """

    errors: list[tuple[str, str, str]] = field(default_factory=list)
    warnings: list[tuple[str, str, str]] = field(default_factory=list)
    checked: int = 0

    def error(self, flag: str, code: str, msg: str) -> None:
        self.errors.append((flag, code, msg))

    def warning(self, flag: str, code: str, msg: str) -> None:
        self.warnings.append((flag, code, msg))

    @property
    def passed(self) -> bool:
        """True if no errors were recorded."""
        return len(self.errors) == 0

    def codes(self) -> list[str]:
        """All diagnostic codes, errors first."""
        return [c for _, c, _ in self.errors] + [c for _, c, _ in self.warnings]

    def display(self, quiet: bool = False) -> None:
        """Print errors (and optionally warnings) to the console."""
        for flag, code, msg in self.errors:
            out_console.print(f"  [bold]--{flag}[/bold]: [red]{code}[/red]: {msg}")
        if not quiet:
            for flag, code, msg in self.warnings:
                out_console.print(f"  [bold]--{flag}[/bold]: [yellow]{code}[/yellow]: {msg}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "checked": self.checked,
            "errors": [{"flag": f, "code": c, "message": m} for f, c, m in self.errors],
            "warnings": [{"flag": f, "code": c, "message": m} for f, c, m in self.warnings],
            "passed": self.passed,
        }


# ---------------------------------------------------------------------------
# Per-row checks
# ---------------------------------------------------------------------------


def _check_E001_duplicate_long(result: LintResult, f: FlagDescriptor, seen: set[str]) -> None:
    if f.long_name in seen:
        result.error(f.long_name, "E001", "Duplicate long name")
    seen.add(f.long_name)


def _check_E002_duplicate_short(result: LintResult, f: FlagDescriptor, seen: dict[str, str]) -> None:
    if not f.short_name:
        return
    owner = seen.get(f.short_name)
    if owner is not None:
        result.error(f.long_name, "E002", f"Short alias -{f.short_name} already used by --{owner}")
    else:
        seen[f.short_name] = f.long_name


def _check_E003_description(result: LintResult, f: FlagDescriptor) -> None:
    if not f.description or not f.description.strip():
        result.error(f.long_name, "E003", "Empty description")


def _check_E004_short_length(result: LintResult, f: FlagDescriptor) -> None:
    if f.short_name is not None and len(f.short_name) != 1:
        result.error(f.long_name, "E004", f"Short alias {f.short_name!r} must be exactly one character")


def _check_E005_long_format(result: LintResult, f: FlagDescriptor) -> None:
    if not _LONG_NAME_RE.match(f.long_name):
        result.error(f.long_name, "E005", f"Malformed long name {f.long_name!r}")


def _check_E006_choices_arity(result: LintResult, f: FlagDescriptor) -> None:
    if f.choices and f.arity is Arity.FLAG:
        result.error(f.long_name, "E006", "Choices given for a flag that takes no value")


def _check_W001_description_style(result: LintResult, f: FlagDescriptor) -> None:
    desc = f.description.strip()
    if not desc:
        return
    if desc.endswith("."):
        result.warning(f.long_name, "W001", "Description ends with a period")
    elif desc[0].islower():
        result.warning(f.long_name, "W001", "Description starts with a lowercase letter")


def _check_W002_duplicate_choices(result: LintResult, f: FlagDescriptor) -> None:
    dupes = sorted({c for c in f.choices if f.choices.count(c) > 1})
    if dupes:
        result.warning(f.long_name, "W002", f"Duplicate choices: {', '.join(dupes)}")


def lint_table(flags: Iterable[FlagDescriptor] = FLAGS) -> LintResult:
    """Run every structural check over *flags*."""
    result = LintResult()
    seen_long: set[str] = set()
    seen_short: dict[str, str] = {}
    for f in flags:
        result.checked += 1
        _check_E001_duplicate_long(result, f, seen_long)
        _check_E002_duplicate_short(result, f, seen_short)
        _check_E003_description(result, f)
        _check_E004_short_length(result, f)
        _check_E005_long_format(result, f)
        _check_E006_choices_arity(result, f)
        _check_W001_description_style(result, f)
        _check_W002_duplicate_choices(result, f)
    return result


app = typer.Typer(
    help="Check the eza flag table for structural problems.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

ezacomp lint                                 Lint the built-in table

ezacomp lint --quiet                         Errors only, suppress warnings

ezacomp lint --json                          Machine-readable JSON output

[bold]Error codes:[/bold]

E001   Duplicate long name

E002   Duplicate short alias

E003   Empty description

E004   Short alias is not a single character

E005   Malformed long name

E006   Choices on a flag that takes no value

W001   Description style (trailing period, lowercase start)

W002   Duplicate choice words""",
)


@app.callback(invoke_without_command=True)
def main(
    quiet: bool = typer.Option(False, help="Only show errors, suppress warnings"),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Lint the eza flag table."""
    result = lint_table(FLAGS)

    if json_output:
        json_print(result.to_dict())
    else:
        result.display(quiet=quiet)
        pass_style = "green" if result.passed else "red"
        result_text = Text()
        result_text.append(f"Checked {result.checked} flags: ")
        result_text.append(f"{len(result.errors)} errors", style=pass_style)
        result_text.append(f", {len(result.warnings)} warnings")
        out_console.print(result_text)

    if not result.passed:
        raise typer.Exit(code=1)


def main_entry() -> None:
    """Package entry point for ``ezacomp-lint``."""
    app()


if __name__ == "__main__":
    main_entry()
