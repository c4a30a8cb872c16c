"""Tests for destination resolution and preparation."""

from __future__ import annotations

from pathlib import Path

import pytest

from greycode_cli.core.errors import DestinationError
from greycode_cli.core.target import prepare_destination, resolve_target


def _never_called(path: Path) -> bool:
    raise AssertionError(f"confirmation should not be requested for {path}")


@pytest.mark.parametrize("name", ["my-app", "demo", "nested-name_1"])
def test_resolve_target_defaults_to_project_name(tmp_path: Path, name: str) -> None:
    target = resolve_target(name, cwd=tmp_path)
    assert target == (tmp_path / name).resolve()
    assert target.relative_to(tmp_path.resolve()) == Path(name)


def test_resolve_target_prefers_directory_override(tmp_path: Path) -> None:
    target = resolve_target("my-app", "apps/web", cwd=tmp_path)
    assert target == (tmp_path / "apps" / "web").resolve()


def test_prepare_creates_missing_directory_with_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "my-app"
    assert prepare_destination(target, _never_called) is True
    assert target.is_dir()


def test_prepare_accepts_empty_directory_without_prompt(tmp_path: Path) -> None:
    target = tmp_path / "empty"
    target.mkdir()
    assert prepare_destination(target, _never_called) is True


def test_prepare_declined_leaves_contents_untouched(tmp_path: Path) -> None:
    target = tmp_path / "busy"
    target.mkdir()
    (target / "keep.txt").write_text("important", encoding="utf-8")
    (target / "sub").mkdir()
    (target / "sub" / "deep.txt").write_text("deep", encoding="utf-8")
    asked: list[Path] = []

    def decline(path: Path) -> bool:
        asked.append(path)
        return False

    assert prepare_destination(target, decline) is False
    assert asked == [target]
    assert (target / "keep.txt").read_text(encoding="utf-8") == "important"
    assert (target / "sub" / "deep.txt").exists()


def test_prepare_accepted_clears_contents_but_keeps_directory(tmp_path: Path) -> None:
    target = tmp_path / "busy"
    target.mkdir()
    (target / "old.txt").write_text("old", encoding="utf-8")
    (target / "sub").mkdir()
    (target / "sub" / "deep.txt").write_text("deep", encoding="utf-8")

    assert prepare_destination(target, lambda path: True) is True
    assert target.is_dir()
    assert list(target.iterdir()) == []


def test_prepare_rejects_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "file"
    target.write_text("x", encoding="utf-8")
    with pytest.raises(DestinationError):
        prepare_destination(target, _never_called)


def test_prepare_wraps_os_errors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "blocked"

    def boom(self, *args, **kwargs):
        raise PermissionError("permission denied")

    monkeypatch.setattr(Path, "mkdir", boom)
    with pytest.raises(DestinationError, match="permission denied"):
        prepare_destination(target, _never_called)
