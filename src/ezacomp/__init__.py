"""ezacomp — shell completion tables for the eza file lister.

Holds the static flag table describing eza's command-line surface and
renders it into the completion dialects of bash, zsh, fish and nushell.
"""

__version__ = "0.1.0"
