"""Project manifest (``package.json``) model and rewrite stage."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from greycode_cli.core.config import ScaffoldConfig
from greycode_cli.core.errors import ManifestError
from greycode_cli.core.interview import InterviewAnswers

__all__ = [
    "BinEntry",
    "ProjectManifest",
    "discover_bin_entry",
    "make_executable",
    "rewrite_manifest",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BinEntry:
    """Executable registered under the manifest's ``bin`` mapping."""

    command: str
    path: str
    file: Path

    @property
    def script_path(self) -> str:
        """Bin path without any leading ``./``."""
        return _strip_relative(self.path)


def _strip_relative(path: str) -> str:
    while path.startswith("./"):
        path = path[2:]
    return path


class ProjectManifest:
    """In-memory view of a manifest file.

    Mutation is additive: keys the rewrite does not touch keep their value
    and position when the file is saved again.
    """

    def __init__(self, path: Path, data: dict[str, Any]):
        self.path = path
        self.data = data

    @classmethod
    def load(cls, path: Path) -> "ProjectManifest":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ManifestError(f"Malformed {path.name}: {exc}") from exc
        except OSError as exc:
            raise ManifestError(f"Cannot read {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ManifestError(f"Malformed {path.name}: expected a JSON object at the top level")
        return cls(path, data)

    def save(self) -> None:
        self.path.write_text(json.dumps(self.data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")

    @property
    def scripts(self) -> dict[str, Any]:
        scripts = self.data.get("scripts")
        return dict(scripts) if isinstance(scripts, dict) else {}

    def merge_scripts(self, updates: dict[str, str]) -> None:
        merged = self.scripts
        merged.update(updates)
        self.data["scripts"] = merged

    def bin_entries(self) -> dict[str, str]:
        """Return ``bin`` as a command -> path mapping.

        A string ``bin`` registers the package name as the command.
        """
        bin_value = self.data.get("bin")
        if isinstance(bin_value, dict):
            return {k: v for k, v in bin_value.items() if isinstance(v, str) and v}
        if isinstance(bin_value, str) and bin_value:
            name = self.data.get("name")
            if isinstance(name, str) and name:
                return {name: bin_value}
        return {}

    def bin_command(self) -> str | None:
        """Return the first registered command name, if any."""
        return next(iter(self.bin_entries()), None)

    def drop_missing_bins(self, root: Path) -> list[str]:
        """Remove ``bin`` entries whose target file does not exist under ``root``.

        Returns the removed command names.
        """
        if "bin" not in self.data:
            return []
        entries = self.bin_entries()
        kept = {command: path for command, path in entries.items() if (root / _strip_relative(path)).is_file()}
        removed = [command for command in entries if command not in kept]
        if not kept:
            del self.data["bin"]
            removed = removed or ["bin"]
        elif removed:
            self.data["bin"] = kept
        return removed


def discover_bin_entry(destination: Path, config: ScaffoldConfig) -> BinEntry | None:
    """Pick the executable to register from ``<destination>/bin``.

    The conventional CLI filename wins; otherwise the first file in listing
    order is used (listing order is whatever the filesystem returns).
    """
    bin_dir = destination / config.bin_dir
    if not bin_dir.is_dir():
        return None

    candidates = [entry.name for entry in os.scandir(bin_dir) if entry.is_file()]
    if not candidates:
        return None

    chosen = config.preferred_bin if config.preferred_bin in candidates else candidates[0]
    logger.debug("Bin candidates %s, chose %s", candidates, chosen)
    return BinEntry(
        command=config.tool_name,
        path=f"./{config.bin_dir}/{chosen}",
        file=bin_dir / chosen,
    )


def make_executable(path: Path) -> None:
    """Add execute bits wherever read bits are set (owner always). No-op on Windows."""
    if os.name == "nt":
        return
    mode = path.stat().st_mode
    new_mode = mode | 0o100
    if mode & 0o040:
        new_mode |= 0o010
    if mode & 0o004:
        new_mode |= 0o001
    if new_mode != mode:
        os.chmod(path, new_mode)


def rewrite_manifest(
    destination: Path,
    project_name: str,
    answers: InterviewAnswers,
    config: ScaffoldConfig,
) -> BinEntry | None:
    """Apply project identity, bin registration and run scripts to the manifest.

    Returns the registered bin entry, or None when nothing was registered
    (including when the template ships no manifest at all).
    """
    manifest_path = destination / config.manifest_name
    if not manifest_path.exists():
        logger.debug("No %s in %s, skipping rewrite", config.manifest_name, destination)
        return None

    manifest = ProjectManifest.load(manifest_path)
    manifest.data["name"] = project_name
    manifest.data["description"] = answers.description
    manifest.data["author"] = answers.author

    bin_entry = discover_bin_entry(destination, config)
    if bin_entry is not None:
        manifest.data["bin"] = {bin_entry.command: bin_entry.path}
        try:
            make_executable(bin_entry.file)
        except OSError as exc:
            raise ManifestError(f"Cannot mark {bin_entry.path} executable: {exc}") from exc
    else:
        removed = manifest.drop_missing_bins(destination)
        if removed:
            logger.debug("Dropped bin entries without a target file: %s", removed)

    scripts = {"start": config.start_script, "dev": config.dev_script}
    command = manifest.bin_command()
    if command is not None:
        scripts["cli"] = f"{config.cli_runtime} ./{_strip_relative(manifest.bin_entries()[command])}"
    manifest.merge_scripts(scripts)

    try:
        manifest.save()
    except OSError as exc:
        raise ManifestError(f"Cannot write {manifest_path}: {exc}") from exc
    logger.debug("Rewrote %s", manifest_path)
    return bin_entry
