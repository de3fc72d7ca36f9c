"""ezacomp cfg: Programmatic editor for ezacomp.toml.

Uses tomlkit for format-preserving round-trip editing (comments,
ordering, and whitespace are retained).

Usage::

    ezacomp cfg init
    ezacomp cfg path
    ezacomp cfg show [KEY]
    ezacomp cfg set completion.command exa
    ezacomp cfg add-shell nushell
    ezacomp cfg add-alias exa
    ezacomp cfg exclude git-repos
"""

import contextlib
from pathlib import Path

import tomlkit
import typer

from ezacomp.config import CONFIG_NAME, DEFAULT_TOML, _find_config
from ezacomp.flags import by_long
from ezacomp.generators import SHELLS

# Array keys, with the command that edits each one
_LIST_KEYS = {
    "completion.shells": "add-shell / remove-shell",
    "completion.exclude": "exclude",
    "completion.aliases": "add-alias",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _find_path() -> Path:
    """Locate ezacomp.toml or exit with a hint to run ``ezacomp cfg init``."""
    path = _find_config()
    if path is None:
        typer.secho(
            f"Error: Could not find {CONFIG_NAME} in any parent directory or the user config dir.\n"
            "Run 'ezacomp cfg init' first.",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)
    return path


def _load_toml(path: Path | None = None) -> tuple[tomlkit.TOMLDocument, Path]:
    """Load ezacomp.toml as a tomlkit document, preserving formatting."""
    if path is None:
        path = _find_path()
    if not path.exists():
        typer.secho(f"Error: {path} not found.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    doc = tomlkit.parse(path.read_text(encoding="utf-8"))
    return doc, path


def _save_toml(doc: tomlkit.TOMLDocument, path: Path) -> None:
    """Write tomlkit document back, preserving formatting."""
    path.write_text(tomlkit.dumps(doc), encoding="utf-8")


def _completion_table(doc: tomlkit.TOMLDocument):
    table = doc.get("completion")
    if table is None:
        table = tomlkit.table()
        doc["completion"] = table
    return table


def _coerce(value: str) -> str | int | float | bool:
    """Coerce a command-line string to bool/int/float where it looks like one."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    with contextlib.suppress(ValueError):
        return int(value)
    with contextlib.suppress(ValueError):
        return float(value)
    return value


# ---------------------------------------------------------------------------
# Typer app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="Read and edit ezacomp.toml programmatically.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]
  ezacomp cfg init                        Create ezacomp.toml in the current directory
  ezacomp cfg show completion.shells      Read a config value
  ezacomp cfg set completion.command exa  Set a config value
  ezacomp cfg add-shell nushell           Enable another shell
  ezacomp cfg add-alias exa               Complete another command name too
  ezacomp cfg exclude git-repos           Leave a flag out of generated scripts

[dim]Supports dotted key paths for nested TOML tables (e.g. 'paths.fish').[/dim]""",
)


@app.command("init")
def init(
    directory: Path = typer.Argument(Path("."), help="Directory to create ezacomp.toml in."),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file."),
) -> None:
    """Write a default ezacomp.toml."""
    path = directory / CONFIG_NAME
    if path.exists() and not force:
        typer.secho(f"{path} already exists (use --force to overwrite).", fg=typer.colors.YELLOW)
        return
    directory.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_TOML, encoding="utf-8")
    typer.secho(f"Created {path}", fg=typer.colors.GREEN)


@app.command("path")
def show_path() -> None:
    """Print the path of the ezacomp.toml in effect."""
    typer.echo(str(_find_path()))


@app.command("show")
def show(
    key: str | None = typer.Argument(None, help="Dot-separated key to show, e.g. 'completion.shells'"),
) -> None:
    """Show the current config, or a specific key."""
    doc, _ = _load_toml()

    if key is None:
        typer.echo(tomlkit.dumps(doc))
        return

    current = doc
    for part in key.split("."):
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            typer.secho(f"Key '{key}' not found.", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    if isinstance(current, dict):
        typer.echo(tomlkit.dumps(current))
    else:
        typer.echo(str(current))


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Dot-separated key, e.g. 'completion.command' or 'paths.fish'."),
    value: str = typer.Argument(..., help="Value to set."),
) -> None:
    """Set a scalar config key."""
    doc, path = _load_toml()

    if key in _LIST_KEYS:
        typer.secho(
            f"Error: '{key}' is a list; use 'ezacomp cfg {_LIST_KEYS[key]}' instead.",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)

    parts = key.split(".")
    if parts[0] == "paths" and len(parts) == 2 and parts[1] not in SHELLS:
        typer.secho(
            f"Error: Unknown shell '{parts[1]}'. Supported: {list(SHELLS)}", fg=typer.colors.RED, err=True
        )
        raise typer.Exit(code=1)

    current = doc
    for part in parts[:-1]:
        if part not in current:
            current[part] = tomlkit.table()
        current = current[part]

    parsed_value = _coerce(value)
    current[parts[-1]] = parsed_value
    _save_toml(doc, path)
    typer.secho(f"Set {key} = {parsed_value!r}", fg=typer.colors.GREEN)


@app.command("add-shell")
def add_shell(
    shell: str = typer.Argument(..., help="Shell to enable (bash, zsh, fish, nushell)."),
) -> None:
    """Add a shell to [completion].shells (idempotent)."""
    shell = shell.lower()
    if shell not in SHELLS:
        typer.secho(f"Error: Unknown shell '{shell}'. Supported: {list(SHELLS)}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    doc, path = _load_toml()
    completion = _completion_table(doc)
    shells = completion.get("shells")
    if shells is None:
        shells = tomlkit.array()
        completion["shells"] = shells
    if shell in shells:
        typer.secho(f"Shell '{shell}' already enabled.", fg=typer.colors.YELLOW)
        return
    shells.append(shell)
    _save_toml(doc, path)
    typer.secho(f"Enabled {shell}. Shells: {list(shells)}", fg=typer.colors.GREEN)


@app.command("remove-shell")
def remove_shell(
    shell: str = typer.Argument(..., help="Shell to disable."),
) -> None:
    """Remove a shell from [completion].shells (idempotent)."""
    doc, path = _load_toml()
    shells = _completion_table(doc).get("shells")
    if shells is None or shell.lower() not in shells:
        typer.secho(f"Shell '{shell}' not enabled (already removed).", fg=typer.colors.YELLOW)
        return
    shells.remove(shell.lower())
    _save_toml(doc, path)
    typer.secho(f"Disabled {shell}. Shells: {list(shells)}", fg=typer.colors.GREEN)


@app.command("add-alias")
def add_alias(
    alias: str = typer.Argument(..., help="Extra command name that should get eza completions."),
) -> None:
    """Add a command name to [completion].aliases (idempotent)."""
    doc, path = _load_toml()
    completion = _completion_table(doc)
    aliases = completion.get("aliases")
    if aliases is None:
        aliases = tomlkit.array()
        completion["aliases"] = aliases
    if alias in aliases:
        typer.secho(f"Alias '{alias}' already present.", fg=typer.colors.YELLOW)
        return
    aliases.append(alias)
    _save_toml(doc, path)
    typer.secho(f"Added alias {alias}. Aliases: {list(aliases)}", fg=typer.colors.GREEN)


@app.command("exclude")
def exclude(
    flag: str = typer.Argument(..., help="Long flag name to leave out of generated scripts."),
) -> None:
    """Add a flag to [completion].exclude (idempotent)."""
    try:
        name = by_long(flag).long_name
    except KeyError as exc:
        typer.secho(f"Error: {exc.args[0]}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from None
    doc, path = _load_toml()
    completion = _completion_table(doc)
    excluded = completion.get("exclude")
    if excluded is None:
        excluded = tomlkit.array()
        completion["exclude"] = excluded
    if name in excluded:
        typer.secho(f"--{name} already excluded.", fg=typer.colors.YELLOW)
        return
    excluded.append(name)
    _save_toml(doc, path)
    typer.secho(f"Excluded --{name}. Exclude list: {list(excluded)}", fg=typer.colors.GREEN)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main_entry() -> None:
    app()


if __name__ == "__main__":
    main_entry()
