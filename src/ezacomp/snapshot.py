"""snapshot.py – Golden-file comparison of the flag table.

A snapshot is the option *set* of the table — long name, short alias and
arity per flag, sorted by long name.  Descriptions are deliberately left
out; they are display text and may be reworded freely.

Usage::

    ezacomp snapshot                          Print the current snapshot
    ezacomp snapshot --write golden.json      Record a new golden file
    ezacomp snapshot --check golden.json      Fail if the table drifted
    ezacomp snapshot --from-help              Compare with installed eza --help
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import typer
from rich.console import Console

from ezacomp.cli import CommandOption, error_exit, json_print
from ezacomp.flags import FLAGS, FlagDescriptor
from ezacomp.helpscan import HelpOption, scan_tool
from ezacomp.utils import atomic_write_text

out_console = Console()

Entry = dict[str, Any]


@dataclass
class SnapshotDiff:
    """Differences between the table and a golden option set."""

    missing: list[str] = field(default_factory=list)  # in golden, not in table
    extra: list[str] = field(default_factory=list)  # in table, not in golden
    changed: list[tuple[str, Entry, Entry]] = field(default_factory=list)  # (long, table, golden)

    @property
    def ok(self) -> bool:
        return not (self.missing or self.extra or self.changed)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "ok": self.ok,
            "missing": self.missing,
            "extra": self.extra,
            "changed": [{"flag": name, "table": ours, "golden": theirs} for name, ours, theirs in self.changed],
        }


def build_snapshot(flags: Iterable[FlagDescriptor] = FLAGS) -> list[Entry]:
    """Reduce *flags* to the sorted ``{"long", "short", "arity"}`` option set."""
    entries = [{"long": f.long_name, "short": f.short_name, "arity": f.arity.value} for f in flags]
    return sorted(entries, key=lambda e: e["long"])


def snapshot_from_help(options: Iterable[HelpOption]) -> list[Entry]:
    """Convert parsed ``--help`` options to snapshot entries."""
    entries = [
        {"long": o.long_name, "short": o.short_name, "arity": "value" if o.takes_value else "flag"}
        for o in options
    ]
    return sorted(entries, key=lambda e: e["long"])


def load_snapshot(path: Path) -> list[Entry]:
    """Read a golden file written by :func:`write_snapshot`."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list) or not all(isinstance(e, dict) and "long" in e for e in data):
        raise ValueError(f"{path}: expected a JSON list of objects with a 'long' key")
    return data


def write_snapshot(path: Path, flags: Iterable[FlagDescriptor] = FLAGS) -> list[Entry]:
    entries = build_snapshot(flags)
    atomic_write_text(path, json.dumps(entries, indent=2) + "\n")
    return entries


def compare_snapshot(
    flags: Iterable[FlagDescriptor],
    golden: list[Entry],
    *,
    check_short: bool = True,
    check_arity: bool = True,
) -> SnapshotDiff:
    """Compare the table's option set with *golden*."""
    ours = {e["long"]: e for e in build_snapshot(flags)}
    theirs = {e["long"]: e for e in golden}
    diff = SnapshotDiff(
        missing=sorted(set(theirs) - set(ours)),
        extra=sorted(set(ours) - set(theirs)),
    )
    for name in sorted(set(ours) & set(theirs)):
        a, b = ours[name], theirs[name]
        if (check_short and a.get("short") != b.get("short")) or (
            check_arity and a.get("arity") != b.get("arity")
        ):
            diff.changed.append((name, a, b))
    return diff


def _display(diff: SnapshotDiff, source: str) -> None:
    if diff.ok:
        out_console.print(f"[green]Flag table matches {source}.[/green]")
        return
    for name in diff.missing:
        out_console.print(f"  [red]missing[/red]  --{name}  (documented by {source}, absent from table)")
    for name in diff.extra:
        out_console.print(f"  [yellow]extra[/yellow]    --{name}  (in table, not in {source})")
    for name, ours, theirs in diff.changed:
        out_console.print(
            f"  [magenta]changed[/magenta]  --{name}  "
            f"table short={ours.get('short')} arity={ours.get('arity')}; "
            f"{source} short={theirs.get('short')} arity={theirs.get('arity')}"
        )


app = typer.Typer(
    help="Record or verify a golden snapshot of the eza option set.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

ezacomp snapshot                              Print the snapshot JSON

ezacomp snapshot --write tests/golden/eza_flags.json

ezacomp snapshot --check tests/golden/eza_flags.json

ezacomp snapshot --from-help                  Compare against installed eza

[dim]Snapshots hold long name, short alias and arity only; descriptions are
not compared.  --from-help ignores short aliases and arity by default since
help layouts vary; pass --strict to compare them too.[/dim]""",
)


@app.callback(invoke_without_command=True)
def main(
    write: Path | None = typer.Option(None, "--write", help="Write the snapshot to this file."),
    check: Path | None = typer.Option(None, "--check", help="Compare the table against this golden file."),
    from_help: bool = typer.Option(False, "--from-help", help="Compare against COMMAND --help output."),
    command: str | None = CommandOption,
    strict: bool = typer.Option(False, "--strict", help="With --from-help, also compare aliases and arity."),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Print, write or check the option-set snapshot."""
    if sum(bool(x) for x in (write, check, from_help)) > 1:
        error_exit("--write, --check and --from-help are mutually exclusive", json_mode=json_output)

    if write is not None:
        try:
            entries = write_snapshot(write)
        except OSError as exc:
            error_exit(f"Could not write {write}: {exc}", json_mode=json_output)
        if json_output:
            json_print({"written": str(write), "flags": len(entries)})
        else:
            typer.secho(f"Wrote {len(entries)} flags to {write}", fg=typer.colors.GREEN)
        return

    if check is not None:
        try:
            golden = load_snapshot(check)
        except (OSError, ValueError) as exc:
            error_exit(f"Could not read golden file: {exc}", json_mode=json_output)
        diff = compare_snapshot(FLAGS, golden)
        source = str(check)
    elif from_help:
        tool = command or "eza"
        try:
            golden = snapshot_from_help(scan_tool(tool))
        except (OSError, RuntimeError, ValueError) as exc:
            error_exit(str(exc), json_mode=json_output)
        diff = compare_snapshot(FLAGS, golden, check_short=strict, check_arity=strict)
        source = f"{tool} --help"
    else:
        json_print(build_snapshot(FLAGS))
        return

    if json_output:
        json_print(diff.to_dict())
    else:
        _display(diff, source)
    if not diff.ok:
        raise typer.Exit(code=1)


def main_entry() -> None:
    app()


if __name__ == "__main__":
    main_entry()
