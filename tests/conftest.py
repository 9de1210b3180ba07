"""Shared fixtures for the stencil test suite."""

from __future__ import annotations

import json
import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from rich.console import Console

from stencil.core.types import Answers, Question


class RecordingLogger:
    """Collects log calls instead of printing them."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.records.append(("info", message))

    def success(self, message: str) -> None:
        self.records.append(("success", message))

    def warn(self, message: str) -> None:
        self.records.append(("warn", message))

    def error(self, message: str) -> None:
        self.records.append(("error", message))

    def levels(self) -> list[str]:
        return [level for level, _ in self.records]


class ScriptedAsk:
    """Answers questions from a fixed mapping and remembers what was asked."""

    def __init__(self, answers: Answers) -> None:
        self.answers = answers
        self.calls: list[list[Question]] = []

    def __call__(self, questions: Sequence[Question]) -> Answers:
        self.calls.append(list(questions))
        return {q["name"]: self.answers[q["name"]] for q in questions if q["name"] in self.answers}


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def console() -> Console:
    return Console(record=True, width=120)


@pytest.fixture
def staging_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Make temporary staging directories land inside ``tmp_path``."""
    root = tmp_path / "staging"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def registry_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "stencil-home"
    monkeypatch.setenv("STENCIL_HOME", str(home))
    return home


@pytest.fixture
def make_template(tmp_path: Path) -> Callable[..., Path]:
    """Build a template root: ``template/`` files plus an optional meta file."""

    def _make(
        files: dict[str, str | bytes],
        *,
        name: str = "tpl",
        meta_name: str | None = None,
        meta: str | dict | None = None,
    ) -> Path:
        root = tmp_path / "templates" / name
        for key, content in files.items():
            path = root / "template" / key
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        (root / "template").mkdir(parents=True, exist_ok=True)

        if meta_name is not None:
            text = json.dumps(meta) if isinstance(meta, dict) else (meta or "")
            (root / meta_name).write_text(text, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def make_ask() -> Callable[[Answers], ScriptedAsk]:
    return ScriptedAsk
