"""Core scaffold stages for greycodejs."""

from .config import ScaffoldConfig
from .errors import (
    DestinationError,
    EnvSeedError,
    InterviewAborted,
    ManifestError,
    ScaffoldError,
    TemplateFetchError,
)

__all__ = [
    "DestinationError",
    "EnvSeedError",
    "InterviewAborted",
    "ManifestError",
    "ScaffoldConfig",
    "ScaffoldError",
    "TemplateFetchError",
]
