"""Operator interview for project metadata."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Protocol, Sequence

import typer

from greycode_cli.core.config import ScaffoldConfig
from greycode_cli.core.errors import InterviewAborted

__all__ = [
    "Question",
    "InterviewAnswers",
    "Prompter",
    "TyperPrompter",
    "StaticPrompter",
    "build_questions",
    "run_interview",
]

logger = logging.getLogger(__name__)

DESCRIPTION_KEY = "projectDescription"
AUTHOR_KEY = "author"


@dataclass(frozen=True)
class Question:
    """Single free-text prompt with the value used for empty input."""

    name: str
    message: str
    default: str = ""


@dataclass(frozen=True)
class InterviewAnswers:
    description: str
    author: str


class Prompter(Protocol):
    """Capability that turns question descriptors into answers."""

    def ask(self, questions: Sequence[Question]) -> dict[str, str]: ...


class TyperPrompter:
    """Interactive prompter backed by ``typer.prompt``."""

    def ask(self, questions: Sequence[Question]) -> dict[str, str]:
        answers: dict[str, str] = {}
        for question in questions:
            try:
                answers[question.name] = typer.prompt(
                    question.message,
                    default=question.default,
                    show_default=bool(question.default),
                )
            except (typer.Abort, KeyboardInterrupt, EOFError) as exc:
                raise InterviewAborted("Prompt cancelled by operator") from exc
        return answers


class StaticPrompter:
    """Non-interactive prompter returning scripted answers.

    Questions without a scripted answer receive an empty string, which the
    interview then replaces with the question's default.
    """

    def __init__(self, answers: Mapping[str, str] | None = None):
        self.answers = dict(answers or {})
        self.asked: list[Question] = []

    def ask(self, questions: Sequence[Question]) -> dict[str, str]:
        self.asked.extend(questions)
        return {question.name: self.answers.get(question.name, "") for question in questions}


def build_questions(config: ScaffoldConfig) -> list[Question]:
    return [
        Question(DESCRIPTION_KEY, "Project description", config.default_description),
        Question(AUTHOR_KEY, "Author name", ""),
    ]


def run_interview(prompter: Prompter, config: ScaffoldConfig) -> InterviewAnswers:
    """Ask the interview questions and apply defaults to empty answers."""
    questions = build_questions(config)
    raw = prompter.ask(questions)

    resolved: dict[str, str] = {}
    for question in questions:
        value = raw.get(question.name)
        if not value:
            value = question.default
        resolved[question.name] = str(value)

    logger.debug("Interview answers: %s", resolved)
    return InterviewAnswers(description=resolved[DESCRIPTION_KEY], author=resolved[AUTHOR_KEY])
