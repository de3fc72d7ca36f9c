"""Shared utilities for ezacomp."""

import contextlib
import os
from pathlib import Path


def atomic_write_text(filepath: Path, text: str, encoding: str = "utf-8") -> None:
    """Write text to a file atomically so a shell never sources a half-written script."""
    filepath.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = filepath.with_name(filepath.name + ".tmp")
    try:
        tmp_path.write_text(text, encoding=encoding)
        os.replace(tmp_path, filepath)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        raise


def expand_path(raw: str | Path) -> Path:
    """Expand ``~`` and environment variables in a configured path."""
    return Path(os.path.expandvars(os.path.expanduser(str(raw))))


def xdg_dir(var: str, default: str) -> Path:
    """Return an XDG base directory, honouring the environment override."""
    value = os.environ.get(var)
    if value:
        return Path(value)
    return Path.home() / default
