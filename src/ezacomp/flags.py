"""flags.py – Static flag table for the eza file lister.

Every option eza accepts is described by one immutable ``FlagDescriptor``.
The table is built once at import time and is what every generator,
linter and snapshot in ezacomp reads from.

Usage::

    from ezacomp.flags import FLAGS, by_long, by_short

    long_view = by_long("long")      # FlagDescriptor(long_name="long", ...)
    tree = by_short("T")
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Arity(str, Enum):
    """Whether an option is a bare switch or consumes the next argument."""

    FLAG = "flag"
    VALUE = "value"


@dataclass(frozen=True)
class FlagDescriptor:
    """One row of the flag table."""

    long_name: str
    short_name: str | None
    arity: Arity
    description: str
    choices: tuple[str, ...] = ()
    group: str = "display"

    @property
    def takes_value(self) -> bool:
        return self.arity is Arity.VALUE

    def spellings(self) -> list[str]:
        """Return ``["--long", "-s"]`` (short spelling only when present)."""
        names = [f"--{self.long_name}"]
        if self.short_name:
            names.append(f"-{self.short_name}")
        return names

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "long": self.long_name,
            "short": self.short_name,
            "arity": self.arity.value,
            "description": self.description,
            "choices": list(self.choices),
            "group": self.group,
        }


@dataclass(frozen=True)
class EnvVar:
    """An environment variable eza consults, with its legacy exa spelling."""

    name: str
    description: str
    fallback: str | None = None


def _flag(long: str, short: str | None, desc: str, group: str) -> FlagDescriptor:
    return FlagDescriptor(long, short, Arity.FLAG, desc, (), group)


def _value(
    long: str, short: str | None, desc: str, group: str, choices: tuple[str, ...] = ()
) -> FlagDescriptor:
    return FlagDescriptor(long, short, Arity.VALUE, desc, choices, group)


# ---------------------------------------------------------------------------
# Value vocabularies
# ---------------------------------------------------------------------------

WHEN_CHOICES = ("always", "auto", "never")
# --time also takes the abbreviations mod, ch, acc and cr; only the full
# words are offered as completions.
TIME_FIELDS = ("modified", "changed", "accessed", "created")
TIME_STYLES = ("default", "iso", "long-iso", "full-iso", "relative")
COLOR_SCALE_FIELDS = ("all", "age", "size")
COLOR_SCALE_MODES = ("fixed", "gradient")
SORT_FIELDS = (
    "name",
    "Name",
    "extension",
    "Extension",
    "size",
    "type",
    "modified",
    "accessed",
    "created",
    "changed",
    "inode",
    "none",
)

GROUPS = ("meta", "display", "filtering", "long-view")

# ---------------------------------------------------------------------------
# The table, in eza's --help order
# ---------------------------------------------------------------------------

FLAGS: tuple[FlagDescriptor, ...] = (
    # meta
    _flag("help", "?", "Show list of command-line options", "meta"),
    _flag("version", "v", "Show version of eza", "meta"),
    # display
    _flag("oneline", "1", "Display one entry per line", "display"),
    _flag("long", "l", "Display extended file metadata as a table", "display"),
    _flag("grid", "G", "Display entries as a grid", "display"),
    _flag("across", "x", "Sort the grid across, rather than downwards", "display"),
    _flag("recurse", "R", "Recurse into directories", "display"),
    _flag("tree", "T", "Recurse into directories as a tree", "display"),
    _flag("dereference", "X", "Dereference symbolic links when displaying information", "display"),
    _flag("classify", "F", "Display type indicator by file names", "display"),
    _value("color", None, "When to use terminal colours", "display", WHEN_CHOICES),
    _value("colour", None, "When to use terminal colours", "display", WHEN_CHOICES),
    _value("color-scale", None, "Highlight levels of 'field' distinctly", "display", COLOR_SCALE_FIELDS),
    _value("colour-scale", None, "Highlight levels of 'field' distinctly", "display", COLOR_SCALE_FIELDS),
    _value("color-scale-mode", None, "Use gradient or fixed colors in --color-scale", "display", COLOR_SCALE_MODES),
    _value("colour-scale-mode", None, "Use gradient or fixed colours in --colour-scale", "display", COLOR_SCALE_MODES),
    _value("icons", None, "When to display icons", "display", WHEN_CHOICES),
    _flag("no-quotes", None, "Don't quote file names with spaces", "display"),
    _flag("hyperlink", None, "Display entries as hyperlinks", "display"),
    _flag("absolute", None, "Display entries with their absolute path", "display"),
    _value("width", "w", "Set screen width in columns", "display"),
    # filtering and sorting
    _flag("all", "a", "Show hidden and 'dot' files", "filtering"),
    _flag("almost-all", "A", "Equivalent to --all; included for compatibility with ls -A", "filtering"),
    _flag("treat-dirs-as-files", "d", "List directories like regular files", "filtering"),
    _flag("only-dirs", "D", "List only directories", "filtering"),
    _flag("only-files", "f", "List only files", "filtering"),
    _flag("show-symlinks", None, "Explicitly show symbolic links", "filtering"),
    _flag("no-symlinks", None, "Do not show symbolic links", "filtering"),
    _value("level", "L", "Limit the depth of recursion", "filtering"),
    _flag("reverse", "r", "Reverse the sort order", "filtering"),
    _value("sort", "s", "Which field to sort by", "filtering", SORT_FIELDS),
    _flag("group-directories-first", None, "List directories before other files", "filtering"),
    _flag("group-directories-last", None, "List directories after other files", "filtering"),
    _value("ignore-glob", "I", "Glob patterns (pipe-separated) of files to ignore", "filtering"),
    _flag("git-ignore", None, "Ignore files mentioned in '.gitignore'", "filtering"),
    # long view
    _flag("binary", "b", "List file sizes with binary prefixes", "long-view"),
    _flag("bytes", "B", "List file sizes in bytes, without any prefixes", "long-view"),
    _flag("group", "g", "List each file's group", "long-view"),
    _flag("smart-group", None, "Only show group if it has a different name from owner", "long-view"),
    _flag("header", "h", "Add a header row to each column", "long-view"),
    _flag("links", "H", "List each file's number of hard links", "long-view"),
    _flag("inode", "i", "List each file's inode number", "long-view"),
    _flag("modified", "m", "Use the modified timestamp field", "long-view"),
    _flag("mounts", "M", "Show mount details (Linux and macOS only)", "long-view"),
    _flag("numeric", "n", "List numeric user and group IDs", "long-view"),
    _flag("flags", "O", "List file flags (macOS and BSD only)", "long-view"),
    _flag("blocksize", "S", "Show size of allocated file system blocks", "long-view"),
    _value("time", "t", "Which timestamp field to list", "long-view", TIME_FIELDS),
    _flag("accessed", "u", "Use the accessed timestamp field", "long-view"),
    _flag("created", "U", "Use the created timestamp field", "long-view"),
    _flag("changed", None, "Use the changed timestamp field", "long-view"),
    _value("time-style", None, "How to format timestamps", "long-view", TIME_STYLES),
    _flag("total-size", None, "Show the size of a directory as the size of all files and directories inside", "long-view"),
    _flag("no-permissions", None, "Suppress the permissions field", "long-view"),
    _flag("octal-permissions", "o", "List each file's permission in octal format", "long-view"),
    _flag("no-filesize", None, "Suppress the filesize field", "long-view"),
    _flag("no-user", None, "Suppress the user field", "long-view"),
    _flag("no-time", None, "Suppress the time field", "long-view"),
    _flag("git", None, "List each file's Git status, if tracked or ignored", "long-view"),
    _flag("no-git", None, "Suppress Git status", "long-view"),
    _flag("git-repos", None, "List root of git-tree status", "long-view"),
    _flag("git-repos-no-status", None, "List each git-repos branch name (much faster)", "long-view"),
    _flag("extended", "@", "List each file's extended attributes and sizes", "long-view"),
    _flag("context", "Z", "List each file's security context", "long-view"),
)

ENV_VARS: tuple[EnvVar, ...] = (
    EnvVar("COLUMNS", "Overrides the terminal width used for grid layouts"),
    EnvVar("TIME_STYLE", "Default value for --time-style"),
    EnvVar("EZA_GRID_ROWS", "Minimum rows before --long --grid switches to a grid", "EXA_GRID_ROWS"),
    EnvVar("EZA_MIN_LUMINANCE", "Minimum luminance for --color-scale (-100 to 100, default 40)", "EXA_MIN_LUMINANCE"),
    EnvVar("EZA_OVERRIDE_GIT", "Disables Git integration when set", "EXA_OVERRIDE_GIT"),
)

_BY_LONG: dict[str, FlagDescriptor] = {f.long_name: f for f in FLAGS}
_BY_SHORT: dict[str, FlagDescriptor] = {f.short_name: f for f in FLAGS if f.short_name}


def by_long(name: str) -> FlagDescriptor:
    """Look up a descriptor by long name (``"long"`` or ``"--long"``)."""
    key = name[2:] if name.startswith("--") else name
    try:
        return _BY_LONG[key]
    except KeyError:
        raise KeyError(f"Unknown eza flag: --{key}") from None


def by_short(name: str) -> FlagDescriptor:
    """Look up a descriptor by short alias (``"l"`` or ``"-l"``)."""
    key = name[1:] if name.startswith("-") and len(name) == 2 else name
    try:
        return _BY_SHORT[key]
    except KeyError:
        raise KeyError(f"Unknown eza short flag: -{key}") from None


def select(
    flags: tuple[FlagDescriptor, ...] = FLAGS, exclude: list[str] | None = None
) -> tuple[FlagDescriptor, ...]:
    """Return *flags* minus the long names in *exclude* (order preserved)."""
    if not exclude:
        return flags
    dropped = {name.lstrip("-") for name in exclude}
    return tuple(f for f in flags if f.long_name not in dropped)
