"""Data passed between the stages of a build."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from rich.console import Console

Question = Mapping[str, Any]
"""An inquirer-style question: ``type``, ``name``, ``message`` plus optional
``default``, ``choices`` and ``validate``."""

Answers = dict[str, Any]
FileTree = dict[str, bytes]
"""Relative POSIX path -> file content."""
FileModes = dict[str, int]
"""Relative POSIX path -> permission bits."""

QUESTION_TYPES: frozenset[str] = frozenset(
    {"input", "number", "password", "confirm", "list", "rawlist", "checkbox"}
)

AskFn = Callable[[Sequence[Question]], Answers]


class Logger(Protocol):
    """Operator-facing status output."""

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


@dataclass(kw_only=True)
class TemplateInfo:
    """
    A registered template.

    Attributes:
        template_path: Local path or git locator.
        branch: Branch to clone when ``template_path`` is a git locator.
    """

    template_path: str
    branch: str | None = None


@dataclass(kw_only=True)
class ProjectOptions:
    """
    Options of a single build, filled in as the build progresses.

    Attributes:
        template_path: Template reference. Asked for when missing.
        dest_path: Output directory. Defaults to ``cwd / projectName``.
        answers: Answers to the built-in questions.
        staging_path: Local copy of the acquired template.
    """

    template_path: str | None = None
    dest_path: Path | None = None
    answers: Answers | None = None
    staging_path: Path | None = None


@dataclass(kw_only=True)
class BuildMetadata:
    """Mutable context shared by the pipeline stages of one build."""

    dest_path: Path
    answers: Answers = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class Helpers:
    """Bundle handed to a template's completion hook."""

    console: Console
    logger: Logger
    files: FileTree


class CompletionHook(Protocol):
    """Called once a build has been written to disk."""

    def __call__(self, metadata: BuildMetadata, helpers: Helpers) -> None: ...


@dataclass(kw_only=True)
class TemplateConfig:
    """
    Configuration a template declares about itself.

    Attributes:
        questions: Extra questions asked before rendering.
        end_callback: Hook replacing the default success message.
        filepath: File the config was loaded from, if any.
    """

    questions: list[Question] = field(default_factory=list)
    end_callback: CompletionHook | None = None
    filepath: Path | None = None
