"""Destination resolution and preparation."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable

from greycode_cli.core.errors import DestinationError

__all__ = ["ConfirmOverwrite", "resolve_target", "prepare_destination"]

logger = logging.getLogger(__name__)

ConfirmOverwrite = Callable[[Path], bool]


def resolve_target(project_name: str, directory: str | None = None, cwd: Path | None = None) -> Path:
    """Return the destination for ``project_name``.

    The explicit ``directory`` wins; otherwise the project name itself is the
    directory, relative to ``cwd`` (the process working directory by default).
    """
    base = cwd if cwd is not None else Path.cwd()
    return (base / (directory or project_name)).resolve()


def _clear_directory(path: Path) -> None:
    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


def prepare_destination(path: Path, confirm_overwrite: ConfirmOverwrite) -> bool:
    """Make ``path`` an empty directory owned by the scaffold.

    Returns False when the operator declines to overwrite a non-empty
    directory; nothing on disk is touched in that case.
    """
    try:
        if not path.exists():
            logger.debug("Creating destination %s", path)
            path.mkdir(parents=True)
            return True

        if not path.is_dir():
            raise DestinationError(f"{path} exists and is not a directory")

        if not any(path.iterdir()):
            logger.debug("Destination %s exists and is empty", path)
            return True

        if not confirm_overwrite(path):
            logger.debug("Overwrite of %s declined", path)
            return False

        logger.debug("Clearing destination %s", path)
        _clear_directory(path)
        return True
    except OSError as exc:
        raise DestinationError(f"Cannot prepare {path}: {exc}") from exc
