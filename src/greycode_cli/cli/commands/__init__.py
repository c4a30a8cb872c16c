"""CLI command modules for greycodejs.

Each module exposes a ``register_*`` function that attaches its command to
the root Typer app.
"""

from .help_cmd import register_help_command
from .install_global import register_install_global_command
from .new import register_new_command

__all__ = [
    "register_help_command",
    "register_install_global_command",
    "register_new_command",
]
