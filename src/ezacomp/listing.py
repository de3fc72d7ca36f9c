"""listing.py – Browse the eza flag table.

Prints the table as a Rich table grouped by help section, optionally
filtered by a substring, or as JSON for scripting.
"""

from __future__ import annotations

from collections.abc import Iterable

import typer
from rich.console import Console
from rich.table import Table

from ezacomp.cli import error_exit, json_print
from ezacomp.flags import ENV_VARS, FLAGS, GROUPS, FlagDescriptor

out_console = Console()

_GROUP_TITLES = {
    "meta": "Meta options",
    "display": "Display options",
    "filtering": "Filtering and sorting options",
    "long-view": "Long view options",
}


def filter_flags(
    flags: Iterable[FlagDescriptor],
    pattern: str | None = None,
    group: str | None = None,
) -> list[FlagDescriptor]:
    """Return flags whose names or description contain *pattern* (case-insensitive)."""
    needle = pattern.lower().lstrip("-") if pattern else None
    selected = []
    for f in flags:
        if group is not None and f.group != group:
            continue
        if needle is not None:
            haystack = " ".join([f.long_name, f.short_name or "", f.description]).lower()
            if needle not in haystack:
                continue
        selected.append(f)
    return selected


def _flag_table(title: str, flags: list[FlagDescriptor]) -> Table:
    table = Table(title=title, title_justify="left", show_lines=False)
    table.add_column("Short", style="cyan", no_wrap=True)
    table.add_column("Long", style="cyan bold", no_wrap=True)
    table.add_column("Value", style="magenta")
    table.add_column("Description")
    for f in flags:
        if f.choices:
            value = " ".join(f.choices)
        elif f.takes_value:
            value = f.long_name.upper()
        else:
            value = ""
        table.add_row(f"-{f.short_name}" if f.short_name else "", f"--{f.long_name}", value, f.description)
    return table


def _env_table() -> Table:
    table = Table(title="Environment variables", title_justify="left")
    table.add_column("Variable", style="green", no_wrap=True)
    table.add_column("Fallback", style="dim", no_wrap=True)
    table.add_column("Description")
    for var in ENV_VARS:
        table.add_row(var.name, var.fallback or "", var.description)
    return table


app = typer.Typer(
    help="List the eza flags known to ezacomp.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

ezacomp list                           All flags grouped by help section

ezacomp list time                      Flags mentioning 'time'

ezacomp list --group long-view         Only long view options

ezacomp list --env                     Include environment variables

ezacomp list --json                    Machine-readable JSON output""",
)


@app.callback(invoke_without_command=True)
def main(
    pattern: str | None = typer.Argument(None, help="Substring to match in names or descriptions."),
    group: str | None = typer.Option(None, "--group", "-g", help=f"One of: {', '.join(GROUPS)}."),
    env: bool = typer.Option(False, "--env", help="Also list environment variables eza reads."),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Show the eza flag table."""
    if group is not None and group not in GROUPS:
        error_exit(f"Unknown group {group!r}.  Choose from: {', '.join(GROUPS)}", json_mode=json_output)

    flags = filter_flags(FLAGS, pattern, group)

    if json_output:
        data: dict[str, object] = {"count": len(flags), "flags": [f.to_dict() for f in flags]}
        if env:
            data["env"] = [
                {"name": v.name, "fallback": v.fallback, "description": v.description} for v in ENV_VARS
            ]
        json_print(data)
        return

    if not flags:
        out_console.print(f"[yellow]No flags match {pattern!r}.[/yellow]")
    for name in GROUPS:
        members = [f for f in flags if f.group == name]
        if members:
            out_console.print(_flag_table(_GROUP_TITLES[name], members))
    if env:
        out_console.print(_env_table())


def main_entry() -> None:
    app()


if __name__ == "__main__":
    main_entry()
