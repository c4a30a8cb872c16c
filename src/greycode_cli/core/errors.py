"""Fatal scaffold errors.

Each subclass names the stage that failed; the ``new`` command catches the
base class at its boundary and renders the message for the operator.
"""

from __future__ import annotations

__all__ = [
    "ScaffoldError",
    "DestinationError",
    "TemplateFetchError",
    "ManifestError",
    "EnvSeedError",
    "InterviewAborted",
]


class ScaffoldError(Exception):
    """Base exception for pipeline-aborting failures."""

    stage = "Scaffold"


class DestinationError(ScaffoldError):
    """Raised when the destination cannot be created or cleared."""

    stage = "Destination"


class TemplateFetchError(ScaffoldError):
    """Raised when the remote template cannot be downloaded or unpacked."""

    stage = "Download"


class ManifestError(ScaffoldError):
    """Raised when an existing manifest cannot be parsed."""

    stage = "Manifest"


class EnvSeedError(ScaffoldError):
    """Raised when the environment file cannot be written."""

    stage = "Environment"


class InterviewAborted(ScaffoldError):
    """Raised when the operator aborts an interactive prompt."""

    stage = "Interview"
