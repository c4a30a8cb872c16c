"""``greycodejs install-global`` command."""

from __future__ import annotations

import typer
from rich.console import Console

from greycode_cli.core.config import ScaffoldConfig
from greycode_cli.core.package_manager import PackageManager


def register_install_global_command(app: typer.Typer, *, console: Console) -> None:
    """Register the ``install-global`` command on ``app``."""

    @app.command("install-global")
    def install_global() -> None:
        """Install the project CLI globally on your system."""
        config = ScaffoldConfig.from_env()
        console.print(f"[blue]Installing {config.product_name} CLI globally...[/blue]")

        result = PackageManager(config.package_manager).link()
        if not result.ok:
            console.print(f"[red]Error installing globally:[/red] {result.message}")
            return

        console.print(f"\n[green]✅ {config.product_name} CLI installed globally![/green]")
        console.print("You can now run commands like:")
        console.print(f"[cyan]  {config.tool_name} new my-project[/cyan]")
