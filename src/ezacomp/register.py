"""register.py – Install eza completions where each shell's engine loads them.

Renders the flag table for a host shell and writes the script atomically
into that shell's user completion directory (or a configured/explicit path).

Usage::

    ezacomp register                 Install for every shell in ezacomp.toml
    ezacomp register fish zsh        Install for specific shells
    ezacomp register --all           Install for every supported shell
    ezacomp register bash --dry-run  Show where the script would go
"""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from pathlib import Path

import typer
from rich.console import Console

from ezacomp.cli import (
    CommandOption,
    ConfigOption,
    check_shell,
    error_exit,
    get_config,
    json_print,
    warn,
)
from ezacomp.flags import FLAGS, FlagDescriptor, select
from ezacomp.generators import ALIAS_FILE_SHELLS, SHELLS, render, render_alias
from ezacomp.utils import atomic_write_text, xdg_dir

out_console = Console()

# Executable that hosts each shell's completion engine
_SHELL_EXECUTABLES: dict[str, str] = {
    "bash": "bash",
    "zsh": "zsh",
    "fish": "fish",
    "nushell": "nu",
}


def default_path(shell: str, command: str = "eza") -> Path:
    """Return the per-user location *shell* loads completions for *command* from."""
    if shell == "bash":
        return xdg_dir("XDG_DATA_HOME", ".local/share") / "bash-completion" / "completions" / command
    if shell == "zsh":
        return Path.home() / ".zfunc" / f"_{command}"
    if shell == "fish":
        return xdg_dir("XDG_CONFIG_HOME", ".config") / "fish" / "completions" / f"{command}.fish"
    if shell == "nushell":
        return xdg_dir("XDG_CONFIG_HOME", ".config") / "nushell" / "completions" / f"{command}.nu"
    raise ValueError(f"Unsupported shell {shell!r}.  Supported: {list(SHELLS)}")


def engine_available(shell: str) -> bool:
    """True if the shell hosting the completion engine is on PATH."""
    return shutil.which(_SHELL_EXECUTABLES.get(shell, shell)) is not None


def alias_destinations(shell: str, commands: Sequence[str], primary: Path) -> list[Path]:
    """Return the alias loader files for *shell*, placed beside *primary*."""
    if shell not in ALIAS_FILE_SHELLS:
        return []
    suffix = ".fish" if shell == "fish" else ""
    return [primary.with_name(f"{alias}{suffix}") for alias in commands[1:]]


def register(
    shell: str,
    flags: Sequence[FlagDescriptor] = FLAGS,
    *,
    command: str | Sequence[str] = "eza",
    path: Path | None = None,
    dry_run: bool = False,
) -> Path:
    """Render *flags* for *shell* and install the script.

    For bash and fish each alias also gets a loader file next to the script
    (see ``alias_destinations``), since their engines look completions up by
    the name being completed.

    Returns the path written (or that would be written with *dry_run*).
    Raises ``ValueError`` for unknown shells and ``OSError`` when the
    destination cannot be written.
    """
    commands = [command] if isinstance(command, str) else list(command)
    script = render(shell, flags, commands)
    dest = path if path is not None else default_path(shell, commands[0])
    if not dry_run:
        atomic_write_text(dest, script)
        for alias, alias_dest in zip(commands[1:], alias_destinations(shell, commands, dest)):
            if alias_dest != dest:
                atomic_write_text(alias_dest, render_alias(shell, commands[0], alias, dest))
    return dest


# ---------------------------------------------------------------------------
# Typer app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="Install eza completions for one or more shells.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

ezacomp register                        Install for shells listed in ezacomp.toml

ezacomp register fish                   Install fish completions only

ezacomp register --all                  Install for bash, zsh, fish and nushell

ezacomp register zsh -o ~/.zsh/_eza     Install to an explicit path

ezacomp register --dry-run --json       Report destinations without writing

[bold]Default locations:[/bold]

bash      $XDG_DATA_HOME/bash-completion/completions/eza

zsh       ~/.zfunc/_eza (add ~/.zfunc to $fpath)

fish      $XDG_CONFIG_HOME/fish/completions/eza.fish

nushell   $XDG_CONFIG_HOME/nushell/completions/eza.nu (source it from config.nu)

[dim]Paths can be overridden per shell in the [paths] table of ezacomp.toml.[/dim]""",
)


@app.callback(invoke_without_command=True)
def main(
    shells: list[str] = typer.Argument(None, help="Shells to install for (bash, zsh, fish, nushell)."),
    all_shells: bool = typer.Option(False, "--all", help="Install for every supported shell."),
    command: str | None = CommandOption,
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Explicit destination (only with a single shell)."
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report destinations without writing."),
    config: Path | None = ConfigOption,
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Install completion scripts for eza."""
    cfg = get_config(config, json_mode=json_output)

    if all_shells:
        targets = list(SHELLS)
    elif shells:
        targets = [check_shell(s, json_mode=json_output) for s in shells]
    else:
        targets = list(cfg.shells)

    if not targets:
        error_exit("No shells selected (pass SHELL, --all, or set [completion].shells)", json_mode=json_output)
    if output is not None and len(targets) != 1:
        error_exit("--output requires exactly one shell", json_mode=json_output)

    commands = [command] if command else cfg.commands
    flags = select(FLAGS, cfg.exclude)

    results: list[dict[str, object]] = []
    for shell in targets:
        available = engine_available(shell)
        if not available and not json_output:
            warn(f"{_SHELL_EXECUTABLES[shell]} not found on PATH; installing {shell} completions anyway")
        if output is not None:
            dest = output
        elif command:
            # [paths] belongs to the configured command, not an override
            dest = None
        else:
            dest = cfg.path_for(shell)
        try:
            written = register(shell, flags, command=commands, path=dest, dry_run=dry_run)
        except OSError as exc:
            error_exit(f"Could not write {shell} completions: {exc}", json_mode=json_output)
        alias_paths = alias_destinations(shell, commands, written)
        results.append(
            {
                "shell": shell,
                "path": str(written),
                "aliases": [str(p) for p in alias_paths],
                "engine_available": available,
                "written": not dry_run,
            }
        )
        if not json_output:
            verb = "Would write" if dry_run else "Installed"
            out_console.print(f"[green]{verb}[/green] {shell:<8} → {written}")
            for alias_path in alias_paths:
                out_console.print(f"[green]{verb}[/green] {'':<8} → {alias_path}")

    if json_output:
        json_print({"command": commands[0], "flags": len(flags), "results": results})


def main_entry() -> None:
    """Run the register CLI app."""
    app()


if __name__ == "__main__":
    main_entry()
