from __future__ import annotations

import pytest
from typer.testing import CliRunner

import greycode_cli
from greycode_cli.cli.commands import install_global as install_global_module
from greycode_cli.core.package_manager import CommandResult


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def test_no_arguments_prints_help(runner: CliRunner) -> None:
    result = runner.invoke(greycode_cli.app, [])
    assert result.exit_code == 0
    assert "new" in result.output
    assert "install-global" in result.output


def test_help_command_prints_usage(runner: CliRunner, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(greycode_cli.app, ["help"])
    assert result.exit_code == 0
    assert "Usage" in result.output
    assert "install-global" in result.output
    assert list(tmp_path.iterdir()) == []


def test_version_flag(runner: CliRunner) -> None:
    result = runner.invoke(greycode_cli.app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == greycode_cli.__version__


class RecordingPackageManager:
    instances: list["RecordingPackageManager"] = []

    def __init__(self, executable: str, returncode: int = 0):
        self.executable = executable
        self.returncode = returncode
        self.linked = 0
        RecordingPackageManager.instances.append(self)

    def link(self, cwd=None) -> CommandResult:
        self.linked += 1
        stderr = "" if self.returncode == 0 else "npm ERR! EACCES"
        return CommandResult(returncode=self.returncode, stderr=stderr)


def test_install_global_links_package(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    RecordingPackageManager.instances = []
    monkeypatch.setattr(install_global_module, "PackageManager", RecordingPackageManager)

    result = runner.invoke(greycode_cli.app, ["install-global"])

    assert result.exit_code == 0
    (pm,) = RecordingPackageManager.instances
    assert pm.executable == "npm"
    assert pm.linked == 1


def test_install_global_failure_is_reported(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        install_global_module,
        "PackageManager",
        lambda executable: RecordingPackageManager(executable, returncode=1),
    )

    result = runner.invoke(greycode_cli.app, ["install-global"])

    assert result.exit_code == 0
    assert "Error installing globally" in result.output
    assert "installed globally!" not in result.output
