"""Tests for the project-details interview."""

from __future__ import annotations

import pytest
import typer

from greycode_cli.core.errors import InterviewAborted
from greycode_cli.core.interview import (
    InterviewAnswers,
    StaticPrompter,
    TyperPrompter,
    build_questions,
    run_interview,
)


def test_questions_carry_defaults(config) -> None:
    questions = build_questions(config)
    assert [q.name for q in questions] == ["projectDescription", "author"]
    assert questions[0].default == "A new GreyCode.js project"
    assert questions[1].default == ""


def test_run_interview_returns_answers(config) -> None:
    prompter = StaticPrompter({"projectDescription": "demo", "author": "Jane"})
    answers = run_interview(prompter, config)
    assert answers == InterviewAnswers(description="demo", author="Jane")
    assert len(prompter.asked) == 2


def test_empty_answers_fall_back_to_defaults(config) -> None:
    answers = run_interview(StaticPrompter({"projectDescription": "", "author": ""}), config)
    assert answers.description == config.default_description
    assert answers.author == ""


def test_whitespace_answers_are_kept(config) -> None:
    answers = run_interview(StaticPrompter({"projectDescription": "  ", "author": " "}), config)
    assert answers == InterviewAnswers(description="  ", author=" ")


def test_typer_prompter_converts_abort(monkeypatch: pytest.MonkeyPatch, config) -> None:
    def aborting_prompt(*args, **kwargs):
        raise typer.Abort()

    monkeypatch.setattr(typer, "prompt", aborting_prompt)
    with pytest.raises(InterviewAborted):
        TyperPrompter().ask(build_questions(config))


def test_typer_prompter_passes_defaults(monkeypatch: pytest.MonkeyPatch, config) -> None:
    seen: list[tuple[str, str]] = []

    def fake_prompt(message, default=None, show_default=True):
        seen.append((message, default))
        return default

    monkeypatch.setattr(typer, "prompt", fake_prompt)
    answers = TyperPrompter().ask(build_questions(config))
    assert answers == {"projectDescription": config.default_description, "author": ""}
    assert seen[0] == ("Project description", config.default_description)
