"""``greycodejs help`` command."""

from __future__ import annotations

import typer


def register_help_command(app: typer.Typer) -> None:
    """Register the ``help`` command on ``app``."""

    @app.command("help")
    def help_command(ctx: typer.Context) -> None:
        """Display help information."""
        root = ctx.find_root()
        typer.echo(root.get_help())
