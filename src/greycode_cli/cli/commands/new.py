"""``greycodejs new`` command."""

from __future__ import annotations

import contextlib
import logging
import sys
from pathlib import Path
from typing import Callable, ContextManager, Iterator

import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel

from greycode_cli.cli.ui import StepTracker, confirm_overwrite_prompt
from greycode_cli.core.config import ScaffoldConfig
from greycode_cli.core.errors import ScaffoldError
from greycode_cli.core.interview import Prompter, TyperPrompter
from greycode_cli.core.package_manager import PackageManager
from greycode_cli.core.report import build_next_steps
from greycode_cli.core.scaffold import ScaffoldOutcome, ScaffoldPipeline, ScaffoldRequest
from greycode_cli.core.target import resolve_target
from greycode_cli.template.fetcher import GitHubTarballFetcher, build_http_client

logger = logging.getLogger(__name__)


def build_prompter() -> Prompter:
    return TyperPrompter()


def enable_debug_logging() -> None:
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("greycode_cli").setLevel(logging.DEBUG)


def live_activity(console: Console, tracker: StepTracker) -> Callable[[str], ContextManager[object]]:
    """Show the step tree live while a non-interactive stage runs.

    Prompts happen between activities, never inside the live region.
    """

    @contextlib.contextmanager
    def activity(label: str) -> Iterator[Live]:
        logger.debug(label)
        with Live(tracker.render(), console=console, refresh_per_second=8, transient=True) as live:
            tracker.attach_refresh(lambda: live.update(tracker.render()))
            try:
                yield live
            finally:
                tracker.attach_refresh(None)

    return activity


def download_progress(tracker: StepTracker) -> Callable[[int, int], None]:
    """Report archive download progress on the tracker's fetch step."""

    def on_progress(downloaded: int, total: int) -> None:
        if total:
            tracker.start("fetch", f"{downloaded // 1024} / {total // 1024} KiB")
        else:
            tracker.start("fetch", f"{downloaded // 1024} KiB")

    return on_progress


def _print_debug_environment(console: Console) -> None:
    env_pairs = [
        ("Python", sys.version.split()[0]),
        ("Platform", sys.platform),
        ("CWD", str(Path.cwd())),
    ]
    label_width = max(len(k) for k, _ in env_pairs)
    env_lines = [f"{k.ljust(label_width)} → [bright_black]{v}[/bright_black]" for k, v in env_pairs]
    console.print(Panel("\n".join(env_lines), title="Debug Environment", border_style="magenta"))


def print_completion(
    console: Console,
    outcome: ScaffoldOutcome,
    config: ScaffoldConfig,
    target_display: str,
) -> None:
    if outcome.env_seeded:
        console.print(f"[green]Created {config.env_name} file from {config.env_example_name}[/green]")
    if outcome.install_failed:
        console.print(f"[red]Failed to install dependencies:[/red] {outcome.install.message}")

    console.print("\n[bold green]✅ Project created successfully![/bold green]")
    manifest_path = outcome.request.target_directory / config.manifest_name
    steps = build_next_steps(
        target_display,
        manifest_path,
        config,
        skip_install=outcome.request.skip_install,
    )
    console.print()
    console.print(
        Panel(
            "\n".join(f"[cyan]{line}[/cyan]" for line in steps),
            title="Next Steps",
            border_style="cyan",
            padding=(1, 2),
        )
    )
    console.print(f"\nHappy coding with {config.product_name}! 🚀\n")


def register_new_command(
    app: typer.Typer,
    *,
    console: Console,
    show_banner: Callable[[], None] | None = None,
) -> None:
    """Register the ``new`` command on ``app``."""

    @app.command("new")
    def new(
        project_name: str = typer.Argument(..., help="Name for your new project (also the default directory)"),
        directory: str = typer.Option(None, "--directory", "-d", help="Specify installation directory"),
        install: bool = typer.Option(True, "--install/--no-install", help="Install dependencies after scaffolding"),
        template: str = typer.Option(
            None,
            "--template",
            help="Template repository as owner/repo[#ref] (or set GREYCODE_TEMPLATE_REPO)",
        ),
        github_token: str = typer.Option(
            None,
            "--github-token",
            help="GitHub token to use for the download (or set GH_TOKEN or GITHUB_TOKEN environment variable)",
        ),
        skip_tls: bool = typer.Option(False, "--skip-tls", help="Skip SSL/TLS verification (not recommended)"),
        debug: bool = typer.Option(False, "--debug", help="Show verbose diagnostic output"),
    ) -> None:
        """
        Create a new GreyCode.js project.

        This command will:
        1. Prepare the target directory (asking before overwriting a non-empty one)
        2. Download the latest framework template from GitHub
        3. Ask for a project description and author
        4. Update package.json (name, description, author, bin, scripts)
        5. Create .env from .env.example when missing
        6. Install dependencies (unless --no-install)

        Examples:
            greycodejs new my-app
            greycodejs new my-app -d ./apps/my-app
            greycodejs new my-app --no-install
        """
        if show_banner:
            show_banner()
        if debug:
            enable_debug_logging()

        if not project_name.strip():
            console.print("[red]Error:[/red] Project name must not be empty")
            return

        config = ScaffoldConfig.from_env(template)
        target = resolve_target(project_name, directory)
        target_display = directory or project_name
        request = ScaffoldRequest(project_name=project_name, target_directory=target, skip_install=not install)

        console.print(f"[bold blue]\n⚡ Creating a new {config.product_name} project...\n[/bold blue]")
        logger.debug("Scaffolding %s into %s from %s", project_name, target, config.template_source)

        tracker = StepTracker(f"Create {config.product_name} project")
        client = build_http_client(skip_tls=skip_tls)
        pipeline = ScaffoldPipeline(
            config,
            fetcher=GitHubTarballFetcher(client, github_token=github_token, on_progress=download_progress(tracker)),
            prompter=build_prompter(),
            package_manager=PackageManager(config.package_manager),
            confirm_overwrite=confirm_overwrite_prompt(console),
            tracker=tracker,
            activity=live_activity(console, tracker),
        )

        try:
            outcome = pipeline.run(request)
        except ScaffoldError as exc:
            console.print(tracker.render())
            console.print(Panel(str(exc), title=f"{exc.stage} Error", border_style="red"))
            if debug:
                _print_debug_environment(console)
            return
        finally:
            client.close()

        if outcome.cancelled:
            console.print("[red]❌ Operation cancelled[/red]")
            return

        console.print(tracker.render())
        print_completion(console, outcome, config, target_display)
