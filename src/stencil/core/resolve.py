"""Built-in questions: which template, and what to call the project."""

from __future__ import annotations

import re
from collections.abc import Mapping

from stencil.core.acquire import is_git_url
from stencil.core.types import AskFn, Logger, ProjectOptions, Question, TemplateInfo

# Only requires *some* allowed character, so "foo bar!" passes.
PROJECT_NAME_PATTERN = re.compile(r"[a-zA-Z0-9\-_]+")


def validate_project_name(value: str) -> bool | str:
    """Return ``True`` or the message to show before asking again."""
    if not value:
        return "please input your project name"
    if PROJECT_NAME_PATTERN.search(value):
        return True
    return f"input should match {PROJECT_NAME_PATTERN.pattern}"


def template_question(names: list[str]) -> Question:
    return {
        "type": "list",
        "name": "template",
        "message": "select template which you want",
        "default": names[0],
        "choices": names,
    }


def project_name_question() -> Question:
    return {
        "type": "input",
        "name": "projectName",
        "message": "folder name",
        "validate": validate_project_name,
    }


def template_reference(
    options: ProjectOptions,
    chosen: str | None,
    templates: Mapping[str, TemplateInfo],
) -> str | None:
    """An explicit path wins; otherwise look *chosen* up, adding its ``#branch``."""
    if options.template_path:
        return options.template_path

    info = templates.get(chosen) if chosen is not None else None
    if info is None:
        return None

    ref = info.template_path
    if is_git_url(ref) and info.branch:
        ref += f"#{info.branch}"
    return ref


def resolve_options(
    options: ProjectOptions,
    templates: Mapping[str, TemplateInfo],
    ask: AskFn,
    logger: Logger,
) -> ProjectOptions | None:
    """
    Ask the built-in questions and settle which template to build from.

    The template question (only when no template path was given) comes first.
    Returns ``None`` when no template was given and none are registered; that is
    a warning, not an error.
    """
    questions: list[Question] = [project_name_question()]

    if not options.template_path:
        names = list(templates)
        if not names:
            logger.warn("can not find any template, add one with\n\n    $ stencil add <name> <path>")
            return None
        questions.insert(0, template_question(names))

    answers = ask(questions)
    options.answers = answers
    options.template_path = template_reference(options, answers.get("template"), templates)
    return options
