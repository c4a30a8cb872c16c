"""Seed the active environment file from the template's example."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from greycode_cli.core.config import ScaffoldConfig
from greycode_cli.core.errors import EnvSeedError

__all__ = ["seed_env_file"]

logger = logging.getLogger(__name__)


def seed_env_file(destination: Path, config: ScaffoldConfig) -> bool:
    """Copy ``.env.example`` to ``.env`` when only the example exists.

    An existing ``.env`` (a dangling symlink included) is never overwritten.
    Returns True when a copy was made.
    """
    example = destination / config.env_example_name
    active = destination / config.env_name
    present = active.exists() or active.is_symlink()
    if not example.is_file() or present:
        logger.debug("Skipping env seed (example=%s, active=%s)", example.is_file(), present)
        return False
    try:
        shutil.copyfile(example, active)
    except OSError as exc:
        raise EnvSeedError(f"Cannot create {config.env_name} from {config.env_example_name}: {exc}") from exc
    return True
