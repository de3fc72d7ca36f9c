"""generate.py – Print an eza completion script for one shell.

Unlike ``ezacomp register`` nothing is installed: the script goes to stdout
(for ``eval``/``source`` or packaging) or to ``--output``.
"""

from pathlib import Path

import typer

from ezacomp.cli import CommandOption, ConfigOption, check_shell, error_exit, get_config
from ezacomp.flags import FLAGS, select
from ezacomp.generators import render
from ezacomp.utils import atomic_write_text

app = typer.Typer(
    help="Print a completion script for a shell.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

ezacomp generate bash > /etc/bash_completion.d/eza

ezacomp generate fish -o dist/completions/eza.fish

ezacomp generate zsh --command exa

source <(ezacomp generate bash)        Try completions in the current shell""",
)


@app.callback(invoke_without_command=True)
def main(
    shell: str = typer.Argument(..., help="bash, zsh, fish or nushell."),
    command: str | None = CommandOption,
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to a file instead of stdout."),
    config: Path | None = ConfigOption,
) -> None:
    """Render the eza flag table for SHELL."""
    cfg = get_config(config)
    shell = check_shell(shell)
    commands = [command] if command else cfg.commands
    script = render(shell, select(FLAGS, cfg.exclude), commands)

    if output is None:
        typer.echo(script, nl=False)
        return
    try:
        atomic_write_text(output, script)
    except OSError as exc:
        error_exit(f"Could not write {output}: {exc}")
    typer.secho(f"Wrote {shell} completions to {output}", fg=typer.colors.GREEN, err=True)


def main_entry() -> None:
    app()


if __name__ == "__main__":
    main_entry()
