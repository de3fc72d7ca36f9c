"""generators.py – Render the flag table as shell completion scripts.

Each renderer is a pure function ``(flags, commands) -> str`` producing a
script in the dialect of one host completion engine:

* bash     — a ``complete -F`` function using ``compgen``
* zsh      — a ``#compdef`` file driving ``_arguments``
* fish     — one ``complete -c`` line per flag
* nushell  — an ``export extern`` signature block

``commands`` is the primary command name followed by any aliases that should
receive the same completions.
"""

from __future__ import annotations

import re
import shlex
from collections.abc import Callable, Sequence
from pathlib import Path

from ezacomp.flags import FlagDescriptor

SHELLS: tuple[str, ...] = ("bash", "zsh", "fish", "nushell")

_HEADER = "{comment} {shell} completion for {command}, generated by ezacomp. Do not edit."

_GLOB_CHARS_RE = re.compile(r"([?*\[\]])")


def _header(shell: str, command: str, comment: str = "#") -> str:
    return _HEADER.format(comment=comment, shell=shell, command=command)


def _func_name(command: str) -> str:
    return "_" + re.sub(r"\W", "_", command)


# ---------------------------------------------------------------------------
# bash
# ---------------------------------------------------------------------------


def _bash_word(spelling: str) -> str:
    """Escape glob characters so ``compgen -W`` and ``case`` see literals."""
    return _GLOB_CHARS_RE.sub(r"\\\1", spelling)


def _bash_value_cases(flags: Sequence[FlagDescriptor], *, long_only: bool) -> list[tuple[str, str | None]]:
    """Group value-taking flags by their choices into ``case`` patterns."""
    grouped: dict[tuple[str, ...], list[str]] = {}
    for f in flags:
        if not f.takes_value:
            continue
        names = [f"--{f.long_name}"] if long_only else f.spellings()
        grouped.setdefault(f.choices, []).extend(_bash_word(n) for n in names)
    cases: list[tuple[str, str | None]] = []
    for choices, names in grouped.items():
        cases.append(("|".join(names), " ".join(choices) if choices else None))
    return cases


def render_bash(flags: Sequence[FlagDescriptor], commands: Sequence[str]) -> str:
    func = _func_name(commands[0])
    words = " ".join(_bash_word(s) for f in flags for s in f.spellings())
    lines = [
        _header("bash", commands[0]),
        "",
        f"{func}() {{",
        "    local cur prev",
        '    cur="${COMP_WORDS[COMP_CWORD]}"',
        '    prev="${COMP_WORDS[COMP_CWORD-1]}"',
        "",
        '    if [[ "$prev" == "=" ]]; then',
        '        prev="${COMP_WORDS[COMP_CWORD-2]}"',
        '    elif [[ "$cur" == "=" ]]; then',
        '        cur=""',
        "    fi",
        "",
        '    if [[ "$cur" == --*=* ]]; then',
        '        local opt="${cur%%=*}" val="${cur#*=}"',
        '        case "$opt" in',
    ]
    for pattern, choices in _bash_value_cases(flags, long_only=True):
        if choices:
            lines.append(f"            {pattern})")
            lines.append(f'                COMPREPLY=( $(compgen -P "$opt=" -W "{choices}" -- "$val") )')
            lines.append("                ;;")
    lines += [
        "        esac",
        "        return",
        "    fi",
        "",
        '    case "$prev" in',
    ]
    for pattern, choices in _bash_value_cases(flags, long_only=False):
        lines.append(f"        {pattern})")
        if choices:
            lines.append(f'            COMPREPLY=( $(compgen -W "{choices}" -- "$cur") )')
        lines.append("            return")
        lines.append("            ;;")
    lines += [
        "    esac",
        "",
        '    if [[ "$cur" == -* ]]; then',
        f'        COMPREPLY=( $(compgen -W "{words}" -- "$cur") )',
        "        return",
        "    fi",
        "",
        '    COMPREPLY=( $(compgen -f -- "$cur") )',
        "}",
        "",
        f"complete -o filenames -o bashdefault -F {func} {' '.join(commands)}",
        "",
    ]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# zsh
# ---------------------------------------------------------------------------


def _zsh_desc(text: str) -> str:
    text = text.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]").replace(":", "\\:")
    return text.replace("'", "'\\''")


def _zsh_spec(f: FlagDescriptor) -> str:
    desc = _zsh_desc(f.description)
    if f.takes_value:
        action = f"({' '.join(f.choices)})" if f.choices else " "
        value = f":{f.long_name}:{action}"
    else:
        value = ""
    if f.short_name:
        short_suffix = "+" if f.takes_value else ""
        long_suffix = "=" if f.takes_value else ""
        return (
            f"'(-{f.short_name} --{f.long_name})'"
            f"{{'-{f.short_name}{short_suffix}','--{f.long_name}{long_suffix}'}}"
            f"'[{desc}]{value}'"
        )
    long_suffix = "=" if f.takes_value else ""
    return f"'--{f.long_name}{long_suffix}[{desc}]{value}'"


def render_zsh(flags: Sequence[FlagDescriptor], commands: Sequence[str]) -> str:
    lines = [
        f"#compdef {' '.join(commands)}",
        "",
        _header("zsh", commands[0]),
        "",
        "_arguments -s -S \\",
    ]
    for f in flags:
        lines.append(f"  {_zsh_spec(f)} \\")
    lines.append("  '*:file:_files'")
    lines.append("")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# fish
# ---------------------------------------------------------------------------


def _fish_quote(text: str) -> str:
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


def render_fish(flags: Sequence[FlagDescriptor], commands: Sequence[str]) -> str:
    command = commands[0]
    lines = [_header("fish", command), ""]
    for f in flags:
        parts = ["complete", "-c", command]
        if f.short_name:
            short = f.short_name if f.short_name.isalnum() else _fish_quote(f.short_name)
            parts += ["-s", short]
        parts += ["-l", f.long_name, "-d", _fish_quote(f.description)]
        if f.choices:
            parts += ["-x", "-a", _fish_quote(" ".join(f.choices))]
        elif f.takes_value:
            parts.append("-r")
        lines.append(" ".join(parts))
    for alias in commands[1:]:
        lines.append(f"complete -c {alias} -w {command}")
    lines.append("")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# nushell
# ---------------------------------------------------------------------------


def _nu_completer(command: str, f: FlagDescriptor) -> str:
    return f"nu-complete {command} {f.long_name}"


def _nu_extern(flags: Sequence[FlagDescriptor], command: str, target: str) -> list[str]:
    entries: list[tuple[str, str]] = []
    for f in flags:
        sig = f"--{f.long_name}"
        if f.short_name:
            sig += f"(-{f.short_name})"
        if f.takes_value:
            sig += ": string"
            if f.choices:
                sig += f'@"{_nu_completer(command, f)}"'
        entries.append((sig, " ".join(f.description.split())))
    entries.append(("...paths: path", "Files or directories to list"))
    width = max(len(sig) for sig, _ in entries)
    lines = [f'export extern "{target}" [']
    lines += [f"    {sig.ljust(width)}  # {desc}" for sig, desc in entries]
    lines.append("]")
    return lines


def render_nushell(flags: Sequence[FlagDescriptor], commands: Sequence[str]) -> str:
    command = commands[0]
    lines = [_header("nushell", command), ""]
    for f in flags:
        if f.choices:
            words = " ".join(f'"{c}"' for c in f.choices)
            lines.append(f'def "{_nu_completer(command, f)}" [] {{ [{words}] }}')
    lines.append("")
    for target in commands:
        lines += _nu_extern(flags, command, target)
        lines.append("")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Alias loaders
# ---------------------------------------------------------------------------

# Shells whose engines load completions lazily by the name being completed
ALIAS_FILE_SHELLS: tuple[str, ...] = ("bash", "fish")


def render_alias(shell: str, command: str, alias: str, primary: Path) -> str:
    """Render the stub a lazy loader finds for *alias*.

    bash-completion and fish only look up ``completions/<name>`` for the word
    being completed, so each alias needs a file of its own that points back
    at the script installed for *command* at *primary*.
    """
    if shell == "bash":
        func = _func_name(command)
        return "\n".join(
            [
                _header("bash", alias),
                "",
                f"declare -F {func} >/dev/null || . {shlex.quote(str(primary))}",
                f"complete -o filenames -o bashdefault -F {func} {alias}",
                "",
            ]
        )
    if shell == "fish":
        return "\n".join([_header("fish", alias), "", f"complete -c {alias} -w {command}", ""])
    raise ValueError(f"No alias loader for {shell!r}.  Supported: {list(ALIAS_FILE_SHELLS)}")


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

GENERATORS: dict[str, Callable[[Sequence[FlagDescriptor], Sequence[str]], str]] = {
    "bash": render_bash,
    "zsh": render_zsh,
    "fish": render_fish,
    "nushell": render_nushell,
}


def render(shell: str, flags: Sequence[FlagDescriptor], command: str | Sequence[str] = "eza") -> str:
    """Render *flags* as a completion script for *shell*.

    *command* may be a single name or a list whose first entry is the primary
    command and the rest aliases.
    """
    try:
        renderer = GENERATORS[shell]
    except KeyError:
        raise ValueError(f"Unsupported shell {shell!r}.  Supported: {list(SHELLS)}") from None
    commands = [command] if isinstance(command, str) else list(command)
    if not commands:
        raise ValueError("At least one command name is required")
    return renderer(flags, commands)
