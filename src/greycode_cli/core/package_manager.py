"""Package-manager subprocess wrapper for install and global link."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

__all__ = ["CommandResult", "PackageManager"]

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Normalized outcome of a package-manager invocation."""

    returncode: int
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def message(self) -> str:
        for line in self.stderr.splitlines():
            if line.strip():
                return line.strip()
        return f"exited with status {self.returncode}"


class PackageManager:
    """Invoke the external package manager (``npm`` by default)."""

    def __init__(self, executable: str = "npm"):
        self.executable = executable

    def _resolve(self) -> str:
        # npm ships as npm.cmd on Windows; which() finds either form.
        return shutil.which(self.executable) or self.executable

    def _run(self, args: list[str], cwd: Path | None, capture: bool) -> CommandResult:
        cmd = [self._resolve(), *args]
        logger.debug("Running %s in %s", cmd, cwd or Path.cwd())
        try:
            if capture:
                completed = subprocess.run(
                    cmd,
                    cwd=str(cwd) if cwd else None,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.PIPE,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                    check=False,
                )
                return CommandResult(returncode=completed.returncode, stderr=completed.stderr or "")
            completed = subprocess.run(cmd, cwd=str(cwd) if cwd else None, check=False)
            return CommandResult(returncode=completed.returncode)
        except FileNotFoundError:
            return CommandResult(returncode=127, stderr=f"{self.executable} executable not found on PATH")
        except OSError as exc:
            return CommandResult(returncode=126, stderr=str(exc))

    def install(self, cwd: Path) -> CommandResult:
        """Run ``<pm> install`` inside ``cwd`` with its normal output suppressed."""
        return self._run(["install"], cwd=cwd, capture=True)

    def link(self, cwd: Path | None = None) -> CommandResult:
        """Run ``<pm> link`` with output passed through to the terminal."""
        return self._run(["link"], cwd=cwd, capture=False)
