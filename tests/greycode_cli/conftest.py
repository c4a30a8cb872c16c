from __future__ import annotations

import json
from pathlib import Path

import pytest

from greycode_cli.core.config import ScaffoldConfig
from greycode_cli.core.errors import TemplateFetchError
from greycode_cli.core.package_manager import CommandResult
from greycode_cli.template.fetcher import FetchResult, TemplateSource


class FakeFetcher:
    """Writes an in-memory template tree instead of downloading one."""

    def __init__(self, files: dict[str, str] | None = None, error: str | None = None):
        self.files = files or {}
        self.error = error
        self.calls: list[tuple[TemplateSource, Path]] = []

    def fetch(self, source: TemplateSource, destination: Path) -> FetchResult:
        self.calls.append((source, destination))
        if self.error:
            raise TemplateFetchError(self.error)
        for rel_path, content in self.files.items():
            target = destination / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return FetchResult(source=source, destination=destination, files=len(self.files))


class FakePackageManager:
    def __init__(self, returncode: int = 0, stderr: str = ""):
        self.executable = "npm"
        self.returncode = returncode
        self.stderr = stderr
        self.install_calls: list[Path] = []
        self.link_calls: list[Path | None] = []

    def install(self, cwd: Path) -> CommandResult:
        self.install_calls.append(cwd)
        return CommandResult(returncode=self.returncode, stderr=self.stderr)

    def link(self, cwd: Path | None = None) -> CommandResult:
        self.link_calls.append(cwd)
        return CommandResult(returncode=self.returncode, stderr=self.stderr)


def template_files(
    scripts: dict[str, str] | None = None,
    bin_files: list[str] | None = None,
    extra: dict[str, str] | None = None,
) -> dict[str, str]:
    manifest = {"name": "greycodejs", "version": "1.0.0", "scripts": scripts or {"test": "echo ok"}}
    files = {"package.json": json.dumps(manifest, indent=2), "app.js": "console.log('hi');\n"}
    for name in bin_files or []:
        files[f"bin/{name}"] = "#!/usr/bin/env node\n"
    files.update(extra or {})
    return files


@pytest.fixture()
def config() -> ScaffoldConfig:
    return ScaffoldConfig()


@pytest.fixture()
def fake_package_manager() -> FakePackageManager:
    return FakePackageManager()


@pytest.fixture()
def make_fetcher():
    return FakeFetcher


@pytest.fixture()
def make_template():
    return template_files
