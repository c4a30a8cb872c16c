"""
GreyCode.js CLI - project scaffolding for GreyCode.js applications.

Usage:
    greycodejs new <project-name>
    greycodejs new <project-name> --directory <dir> --no-install
    greycodejs install-global
    greycodejs help
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

import typer
from rich.align import Align
from rich.console import Console
from rich.text import Text
from typer.core import TyperGroup

from greycode_cli.cli.commands import (
    register_help_command,
    register_install_global_command,
    register_new_command,
)
from greycode_cli.core.config import BANNER, TAGLINE

try:
    __version__ = version("greycode-cli")
except PackageNotFoundError:
    __version__ = "0.0.0"

console = Console()


class BannerGroup(TyperGroup):
    """Custom group that shows banner before help."""

    def format_help(self, ctx, formatter):
        show_banner()
        super().format_help(ctx, formatter)


app = typer.Typer(
    name="greycodejs",
    help="GreyCode.js Framework installer",
    add_completion=False,
    invoke_without_command=True,
    cls=BannerGroup,
)


def show_banner() -> None:
    """Display the ASCII art banner."""
    banner_lines = BANNER.strip("\n").split("\n")
    colors = ["bright_blue", "blue", "cyan", "bright_cyan", "white", "bright_white"]

    styled_banner = Text()
    for i, line in enumerate(banner_lines):
        styled_banner.append(line + "\n", style=colors[i % len(colors)])

    console.print(Align.center(styled_banner))
    console.print(Align.center(Text(TAGLINE, style="italic bright_yellow")))
    console.print()


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    version_flag: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show the version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Show help when no subcommand is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


register_new_command(app, console=console, show_banner=show_banner)
register_install_global_command(app, console=console)
register_help_command(app)


def main():
    app()


if __name__ == "__main__":
    main()
