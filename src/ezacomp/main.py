"""main.py – Umbrella CLI entry point for ezacomp.

Lazily imports and registers all subcommand typer apps so that a broken
optional module doesn't prevent the entire CLI from loading.

Single-command modules are registered as flat ``app.command()`` entries,
avoiding the Typer "group" behaviour of ``add_typer()`` which expects a
``COMMAND [ARGS]...`` token after callback arguments.  Only true
multi-command modules (currently only ``cfg``) use ``add_typer()``.
"""

import importlib
import sys
from collections.abc import Callable

import typer

app = typer.Typer(
    help="Shell completion tables for the eza file lister.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Typical workflow:[/bold]
  ezacomp list                 Browse the eza flag table
  ezacomp register             Install completions for your shells
  ezacomp generate fish        Print a completion script
  ezacomp lint                 Check the table's structure
  ezacomp snapshot --check F   Compare the option set with a golden file

[dim]Settings are read from ezacomp.toml (searched upward from cwd, then
$XDG_CONFIG_HOME/ezacomp/).  Run 'ezacomp cfg init' to create one.[/dim]""",
)

# ---------------------------------------------------------------------------
# Subcommand registry
# ---------------------------------------------------------------------------

# Single-command modules – registered as flat commands via app.command().
_SINGLE_COMMANDS: list[tuple[str, str, str]] = [
    ("list", "ezacomp.listing", "List the eza flags known to ezacomp."),
    ("generate", "ezacomp.generate", "Print a completion script for a shell."),
    ("register", "ezacomp.register", "Install eza completions for one or more shells."),
    ("lint", "ezacomp.lint", "Check the flag table for structural problems."),
    ("snapshot", "ezacomp.snapshot", "Record or verify a golden snapshot of the option set."),
]

# Multi-command modules – registered as groups via app.add_typer().
_MULTI_COMMANDS: list[tuple[str, str, str]] = [
    ("cfg", "ezacomp.cfg", "Read and edit ezacomp.toml programmatically."),
]


def _make_stub_cmd(mod_name: str, err: ImportError) -> Callable[[], None]:
    """Create a stub command function that reports a module that failed to import."""

    def _stub() -> None:
        print(f"Error: could not load '{mod_name}': {err}", file=sys.stderr)
        raise typer.Exit(code=1)

    return _stub


def _make_stub_app(mod_name: str, err: ImportError) -> typer.Typer:
    """Create a stub Typer app that reports a module that failed to import."""
    stub = typer.Typer(help=f"[unavailable] {mod_name}")

    @stub.callback(invoke_without_command=True)
    def _stub_main() -> None:
        print(f"Error: could not load '{mod_name}': {err}", file=sys.stderr)
        raise typer.Exit(code=1)

    return stub


# Register single-command modules as flat commands.
for _name, _module, _help in _SINGLE_COMMANDS:
    try:
        _mod = importlib.import_module(_module)
        _epilog = getattr(_mod.app.info, "epilog", None)
        if not isinstance(_epilog, str):
            _epilog = None
        app.command(name=_name, help=_help, epilog=_epilog)(_mod.main)
    except ImportError as _exc:
        app.command(name=_name, help=f"[unavailable] {_help}")(_make_stub_cmd(_module, _exc))

# Register multi-command modules as groups (Typer sub-apps).
for _name, _module, _help in _MULTI_COMMANDS:
    try:
        _mod = importlib.import_module(_module)
        app.add_typer(_mod.app, name=_name, help=_help)
    except ImportError as _exc:
        app.add_typer(_make_stub_app(_module, _exc), name=_name, help=f"[unavailable] {_help}")


def _version_callback(value: bool) -> None:
    if value:
        from ezacomp import __version__

        typer.echo(f"ezacomp {__version__}")
        raise typer.Exit()


@app.callback()
def _root(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the ezacomp version and exit."
    ),
) -> None:
    pass


def main() -> None:
    app()


if __name__ == "__main__":
    main()
