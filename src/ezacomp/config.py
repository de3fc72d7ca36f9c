"""Centralised configuration loader for ezacomp.

Reads ``ezacomp.toml`` and exposes every setting as simple attributes so
the commands never hardcode command names, shells or install paths.

Lookup order:

1. ``ezacomp.toml`` in the working directory or any parent (like ``git``
   finds ``.git/``).
2. ``$XDG_CONFIG_HOME/ezacomp/ezacomp.toml``.
3. Built-in defaults when neither exists.

Usage::

    from ezacomp.config import load_config

    cfg = load_config()
    cfg.command          # "eza"
    cfg.shells           # ["bash", "zsh", "fish"]
    cfg.path_for("fish") # Path | None
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from ezacomp.flags import by_long
from ezacomp.generators import SHELLS
from ezacomp.utils import expand_path, xdg_dir

CONFIG_NAME = "ezacomp.toml"

DEFAULT_TOML = """\
# ezacomp configuration
[completion]
command = "eza"
aliases = []
shells = ["bash", "zsh", "fish"]
exclude = []

# Override install locations per shell, e.g.
# [paths]
# fish = "~/.config/fish/completions/eza.fish"
[paths]
"""


@dataclass
class ProjectConfig:
    """Parsed ezacomp configuration."""

    # File the settings came from (None when running on defaults)
    source: Optional[Path] = None

    # --- [completion] ---
    command: str = "eza"
    aliases: List[str] = field(default_factory=list)
    shells: List[str] = field(default_factory=lambda: ["bash", "zsh", "fish"])
    exclude: List[str] = field(default_factory=list)

    # --- [paths] ---
    paths: Dict[str, Path] = field(default_factory=dict)

    @property
    def commands(self) -> List[str]:
        """The primary command followed by its aliases, without duplicates."""
        seen: List[str] = []
        for name in [self.command, *self.aliases]:
            if name not in seen:
                seen.append(name)
        return seen

    def path_for(self, shell: str) -> Optional[Path]:
        """Return the configured install path for *shell*, if any."""
        return self.paths.get(shell)


def _find_config(start: Optional[Path] = None) -> Optional[Path]:
    """Walk up from *start* (or cwd) for ezacomp.toml, then try the XDG location."""
    candidate = (start or Path.cwd()).resolve()
    while True:
        if (candidate / CONFIG_NAME).is_file():
            return candidate / CONFIG_NAME
        if candidate == candidate.parent:
            break
        candidate = candidate.parent
    user_cfg = xdg_dir("XDG_CONFIG_HOME", ".config") / "ezacomp" / CONFIG_NAME
    if user_cfg.is_file():
        return user_cfg
    return None


def _check_shells(names: List[str], where: str) -> None:
    unknown = [s for s in names if s not in SHELLS]
    if unknown:
        raise ValueError(f"Unknown shell(s) in {where}: {unknown}.  Supported: {list(SHELLS)}")


def _string_list(value: object, where: str) -> List[str]:
    """Return *value* if it is a list of strings, else raise ``ValueError``."""
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{where} must be a list of strings, got {value!r}")
    return value


def _check_flags(names: List[str], where: str) -> None:
    unknown = []
    for name in names:
        try:
            by_long(name)
        except KeyError:
            unknown.append(name)
    if unknown:
        raise ValueError(f"Unknown eza flag(s) in {where}: {unknown}")


def load_config(path: Optional[Path] = None, start: Optional[Path] = None) -> ProjectConfig:
    """Load ezacomp.toml.

    Args:
        path: Explicit config file.  Must exist when given.
        start: Directory to begin the upward search from (defaults to cwd).
    """
    if path is None:
        path = _find_config(start)
        if path is None:
            return ProjectConfig()
    elif not path.is_file():
        raise FileNotFoundError(f"Config not found: {path}")

    with open(path, "rb") as f:
        raw = tomllib.load(f)

    completion = raw.get("completion", {})
    raw_paths = raw.get("paths", {})

    shells = _string_list(completion.get("shells", ["bash", "zsh", "fish"]), f"{path} [completion].shells")
    _check_shells(shells, f"{path} [completion].shells")
    _check_shells(list(raw_paths), f"{path} [paths]")
    for shell, value in raw_paths.items():
        if not isinstance(value, str):
            raise ValueError(f"{path}: [paths].{shell} must be a string, got {value!r}")

    aliases = _string_list(completion.get("aliases", []), f"{path} [completion].aliases")
    exclude = _string_list(completion.get("exclude", []), f"{path} [completion].exclude")
    _check_flags(exclude, f"{path} [completion].exclude")

    command = completion.get("command", "eza")
    if not isinstance(command, str) or not command.strip():
        raise ValueError(f"{path}: [completion].command must be a non-empty string")

    return ProjectConfig(
        source=path,
        command=command,
        aliases=aliases,
        shells=shells,
        exclude=exclude,
        paths={shell: expand_path(p) for shell, p in raw_paths.items()},
    )
