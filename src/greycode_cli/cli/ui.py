"""Reusable UI helpers for greycodejs CLI interactions."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import typer
from rich.console import Console
from rich.tree import Tree

from greycode_cli.core.errors import InterviewAborted

_SYMBOLS = {
    "done": "[green]●[/green]",
    "pending": "[green dim]○[/green dim]",
    "running": "[cyan]○[/cyan]",
    "error": "[red]●[/red]",
    "skipped": "[yellow]○[/yellow]",
}


@dataclass
class Step:
    key: str
    label: str
    status: str = "pending"
    detail: str = ""


class StepTracker:
    """Track scaffold stages and render them as a Rich tree.

    Supports live auto-refresh via an attached refresh callback.
    """

    def __init__(self, title: str):
        self.title = title
        self.steps: list[Step] = []
        self._refresh_cb: Callable[[], None] | None = None

    def attach_refresh(self, cb: Callable[[], None] | None) -> None:
        self._refresh_cb = cb

    def add(self, key: str, label: str) -> None:
        if self.get(key) is None:
            self.steps.append(Step(key, label))
            self._maybe_refresh()

    def get(self, key: str) -> Step | None:
        for step in self.steps:
            if step.key == key:
                return step
        return None

    def start(self, key: str, detail: str = "") -> None:
        self._update(key, "running", detail)

    def complete(self, key: str, detail: str = "") -> None:
        self._update(key, "done", detail)

    def error(self, key: str, detail: str = "") -> None:
        self._update(key, "error", detail)

    def skip(self, key: str, detail: str = "") -> None:
        self._update(key, "skipped", detail)

    def _update(self, key: str, status: str, detail: str) -> None:
        step = self.get(key)
        if step is None:
            step = Step(key, key)
            self.steps.append(step)
        step.status = status
        if detail:
            step.detail = detail
        self._maybe_refresh()

    def _maybe_refresh(self) -> None:
        if self._refresh_cb:
            self._refresh_cb()

    def render(self) -> Tree:
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        for step in self.steps:
            symbol = _SYMBOLS.get(step.status, " ")
            detail_text = step.detail.strip()
            if step.status == "pending":
                suffix = f" ({detail_text})" if detail_text else ""
                line = f"{symbol} [bright_black]{step.label}{suffix}[/bright_black]"
            elif detail_text:
                line = f"{symbol} [white]{step.label}[/white] [bright_black]({detail_text})[/bright_black]"
            else:
                line = f"{symbol} [white]{step.label}[/white]"
            tree.add(line)
        return tree


def confirm_overwrite_prompt(console: Console) -> Callable[[Path], bool]:
    """Build the overwrite confirmation used for non-empty destinations (default: no)."""

    def confirm(path: Path) -> bool:
        console.print(f"[yellow]Warning:[/yellow] Directory [cyan]{path}[/cyan] already exists and is not empty")
        try:
            return typer.confirm("Overwrite?", default=False)
        except (typer.Abort, KeyboardInterrupt, EOFError) as exc:
            raise InterviewAborted("Prompt cancelled by operator") from exc

    return confirm


__all__ = ["Step", "StepTracker", "confirm_overwrite_prompt"]
