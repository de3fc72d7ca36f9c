"""Shared CLI utilities for ezacomp commands.

Provides the common ``--config`` option, config loading, and standardised
output / error helpers so every command reports errors and JSON the same way.

Usage in a command module::

    import typer
    from ezacomp.cli import ConfigOption, error_exit, get_config, json_print

    app = typer.Typer()

    @app.callback(invoke_without_command=True)
    def main(config: Path | None = ConfigOption) -> None:
        cfg = get_config(config)
        ...
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from ezacomp.config import ProjectConfig, load_config
from ezacomp.generators import SHELLS

# Re-usable Typer option for --config
ConfigOption: Path | None = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to ezacomp.toml (default: search upward from cwd, then XDG config dir).",
)

CommandOption: str | None = typer.Option(
    None,
    "--command",
    help="Command name to complete (default: [completion].command, usually 'eza').",
)


# ---------------------------------------------------------------------------
# Standardised output helpers
# ---------------------------------------------------------------------------

_err_console = Console(stderr=True)


def error_exit(msg: str, *, json_mode: bool = False, code: int = 1) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``."""
    if json_mode:
        print(json.dumps({"error": msg}, indent=2))
    else:
        _err_console.print(f"[red bold]error:[/red bold] {escape(msg)}")
    raise typer.Exit(code=code)


def warn(msg: str) -> None:
    """Print a non-fatal warning to stderr."""
    _err_console.print(f"[yellow bold]warning:[/yellow bold] {escape(msg)}")


def json_print(data: dict[str, Any] | list[Any]) -> None:
    """Print *data* as pretty-printed JSON to stdout."""
    print(json.dumps(data, indent=2))


def get_config(path: Path | None = None, *, json_mode: bool = False) -> ProjectConfig:
    """Load the config, turning loader errors into a clean CLI exit."""
    try:
        return load_config(path)
    except (FileNotFoundError, ValueError) as exc:
        error_exit(str(exc), json_mode=json_mode)


def check_shell(shell: str, *, json_mode: bool = False) -> str:
    """Normalise a shell name, exiting on unsupported shells."""
    name = shell.strip().lower()
    if name == "nu":
        name = "nushell"
    if name not in SHELLS:
        error_exit(
            f"Unsupported shell {shell!r}.  Choose from: {', '.join(SHELLS)}",
            json_mode=json_mode,
        )
    return name
