"""CLI helpers exposed for other modules."""

from .ui import StepTracker, confirm_overwrite_prompt

__all__ = ["StepTracker", "confirm_overwrite_prompt"]
