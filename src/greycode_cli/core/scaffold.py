"""The scaffold-and-configure pipeline behind ``greycodejs new``."""

from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable, ContextManager

from greycode_cli.core.config import ScaffoldConfig
from greycode_cli.core.env_seed import seed_env_file
from greycode_cli.core.errors import ScaffoldError, TemplateFetchError
from greycode_cli.core.interview import InterviewAnswers, Prompter, run_interview
from greycode_cli.core.manifest import BinEntry, rewrite_manifest
from greycode_cli.core.package_manager import CommandResult, PackageManager
from greycode_cli.core.target import ConfirmOverwrite, prepare_destination
from greycode_cli.template.fetcher import TemplateFetcher, parse_template_source

if TYPE_CHECKING:
    from greycode_cli.cli.ui import StepTracker

__all__ = ["ScaffoldRequest", "ScaffoldOutcome", "ScaffoldPipeline", "STEPS"]

logger = logging.getLogger(__name__)

STEPS: list[tuple[str, str]] = [
    ("target", "Prepare destination"),
    ("fetch", "Download template"),
    ("interview", "Collect project details"),
    ("manifest", "Update package.json"),
    ("env", "Create .env"),
    ("install", "Install dependencies"),
]


@dataclass(frozen=True)
class ScaffoldRequest:
    project_name: str
    target_directory: Path
    skip_install: bool = False

    def __post_init__(self) -> None:
        if not self.project_name or not self.project_name.strip():
            raise ValueError("Project name must not be empty")


@dataclass
class ScaffoldOutcome:
    request: ScaffoldRequest
    status: str = "completed"
    answers: InterviewAnswers | None = None
    bin_entry: BinEntry | None = None
    env_seeded: bool = False
    install: CommandResult | None = None

    @property
    def cancelled(self) -> bool:
        return self.status == "cancelled"

    @property
    def install_failed(self) -> bool:
        return self.install is not None and not self.install.ok


def _no_activity(label: str) -> ContextManager[object]:
    return contextlib.nullcontext()


class ScaffoldPipeline:
    """Run the scaffold stages strictly in order for one project.

    Fatal stage failures raise ``ScaffoldError`` after the stage is marked as
    failed in the tracker. Nothing written by earlier stages is rolled back.
    """

    def __init__(
        self,
        config: ScaffoldConfig,
        *,
        fetcher: TemplateFetcher,
        prompter: Prompter,
        package_manager: PackageManager,
        confirm_overwrite: ConfirmOverwrite,
        tracker: "StepTracker | None" = None,
        activity: Callable[[str], ContextManager[object]] = _no_activity,
    ):
        self.config = config
        self.fetcher = fetcher
        self.prompter = prompter
        self.package_manager = package_manager
        self.confirm_overwrite = confirm_overwrite
        self.tracker = tracker
        self.activity = activity
        if tracker is not None:
            for key, label in STEPS:
                tracker.add(key, label)

    def _start(self, key: str, detail: str = "") -> None:
        if self.tracker:
            self.tracker.start(key, detail)

    def _complete(self, key: str, detail: str = "") -> None:
        if self.tracker:
            self.tracker.complete(key, detail)

    def _skip(self, key: str, detail: str = "") -> None:
        if self.tracker:
            self.tracker.skip(key, detail)

    def _error(self, key: str, detail: str = "") -> None:
        if self.tracker:
            self.tracker.error(key, detail)

    @contextlib.contextmanager
    def _stage(self, key: str):
        self._start(key)
        try:
            yield
        except ScaffoldError as exc:
            self._error(key, str(exc))
            logger.debug("Stage %s failed: %s", key, exc)
            raise

    def run(self, request: ScaffoldRequest) -> ScaffoldOutcome:
        outcome = ScaffoldOutcome(request=request)
        destination = request.target_directory

        with self._stage("target"):
            if not prepare_destination(destination, self.confirm_overwrite):
                self._skip("target", "overwrite declined")
                outcome.status = "cancelled"
                return outcome
            self._complete("target", str(destination))

        with self._stage("fetch"):
            try:
                source = parse_template_source(self.config.template_source)
            except ValueError as exc:
                raise TemplateFetchError(str(exc)) from exc
            with self.activity(f"Downloading {self.config.product_name} framework from GitHub..."):
                result = self.fetcher.fetch(source, destination)
            self._complete("fetch", f"{source} ({result.files} files)")

        with self._stage("interview"):
            outcome.answers = run_interview(self.prompter, self.config)
            self._complete("interview")

        with self._stage("manifest"):
            manifest_path = destination / self.config.manifest_name
            outcome.bin_entry = rewrite_manifest(destination, request.project_name, outcome.answers, self.config)
            if not manifest_path.exists():
                self._skip("manifest", f"no {self.config.manifest_name}")
            elif outcome.bin_entry is not None:
                self._complete("manifest", f"bin {outcome.bin_entry.command} -> {outcome.bin_entry.path}")
            else:
                self._complete("manifest")

        with self._stage("env"):
            outcome.env_seeded = seed_env_file(destination, self.config)
            if outcome.env_seeded:
                self._complete("env", f"from {self.config.env_example_name}")
            else:
                self._skip("env", "nothing to do")

        if request.skip_install:
            self._skip("install", "--no-install")
        else:
            self._start("install")
            with self.activity("Installing dependencies..."):
                outcome.install = self.package_manager.install(destination)
            if outcome.install.ok:
                self._complete("install", "dependencies installed")
            else:
                self._error("install", outcome.install.message)
                logger.debug("Install failed: %s", outcome.install.stderr)

        return outcome
