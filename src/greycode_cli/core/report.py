"""Next-step guidance printed after a scaffold."""

from __future__ import annotations

import logging
from pathlib import Path

from greycode_cli.core.config import ScaffoldConfig
from greycode_cli.core.errors import ManifestError
from greycode_cli.core.manifest import ProjectManifest

__all__ = ["registered_bin_command", "build_next_steps"]

logger = logging.getLogger(__name__)


def _load_for_report(manifest_path: Path) -> ProjectManifest | None:
    if not manifest_path.is_file():
        return None
    try:
        return ProjectManifest.load(manifest_path)
    except ManifestError as exc:
        logger.debug("Ignoring unreadable manifest for report: %s", exc)
        return None


def registered_bin_command(manifest_path: Path) -> str | None:
    """Read the manifest from disk and return its bin command name, if any."""
    manifest = _load_for_report(manifest_path)
    return manifest.bin_command() if manifest is not None else None


def build_next_steps(
    target_display: str,
    manifest_path: Path,
    config: ScaffoldConfig,
    *,
    skip_install: bool,
) -> list[str]:
    pm = config.package_manager
    lines = [f"cd {target_display}"]
    if skip_install:
        lines.append(f"{pm} install")
    lines.append(f"{pm} run dev    # Start the development server")

    manifest = _load_for_report(manifest_path)
    command = manifest.bin_command() if manifest is not None else None
    if command:
        if "cli" in manifest.scripts:
            lines.append(f"{pm} run cli -- create-model User  # Use CLI to create models")
        lines.append(f"npx {command} create-model User")
    return lines
