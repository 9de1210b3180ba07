"""Clack-style interactive prompts using Rich + simple-term-menu."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from getpass import getpass
from typing import Any, TypeVar

from rich.console import Console
from rich.markup import escape
from simple_term_menu import TerminalMenu

from stencil.core.types import Answers, Question

_console = Console()

T = TypeVar("T")

Validator = Callable[[Any], bool | str]


def _print_bar() -> None:
    _console.print("[dim]│[/]")


def _clear_lines(n: int) -> None:
    """Move cursor up *n* lines and clear to end of screen."""
    sys.stdout.write(f"\033[{n}A\033[J")
    sys.stdout.flush()


def _print_answered(question: str, display: str) -> None:
    _console.print(f"[bold green]◇[/]  {question}")
    _console.print(f"[dim]│[/]  {escape(display)}")
    _print_bar()


def _select(question: str, options: list[T], labels: list[str], default: int = 0) -> T:
    """Display a clack-style selection prompt and return the chosen option."""
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()

    menu = TerminalMenu(
        labels,
        cursor_index=default,
        menu_cursor="│  ● ",
        menu_cursor_style=("fg_cyan", "bold"),
        menu_highlight_style=("fg_cyan",),
    )
    raw_index = menu.show()

    if raw_index is None:
        raise SystemExit(1)

    index: int = int(raw_index)
    selected = options[index]

    # Overwrite the ◆ question + │ bar that stayed on screen
    _clear_lines(2)

    _console.print(f"[bold green]◇[/]  {question}")
    for i, lbl in enumerate(labels):
        if i == index:
            _console.print(f"[dim]│[/]  [bold green]●[/] {escape(lbl)}")
        else:
            _console.print(f"[dim]│[/]    [dim s]{escape(lbl)}[/]")
    _print_bar()

    return selected


def _multi_select(
    question: str, options: list[T], labels: list[str], preselected: list[int]
) -> list[T]:
    """Display a clack-style checkbox prompt and return every ticked option."""
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()

    menu = TerminalMenu(
        labels,
        multi_select=True,
        show_multi_select_hint=True,
        multi_select_select_on_accept=False,
        multi_select_empty_ok=True,
        preselected_entries=preselected or None,
        menu_cursor="│  ● ",
        menu_cursor_style=("fg_cyan", "bold"),
        menu_highlight_style=("fg_cyan",),
    )
    raw_indices = menu.show()

    if raw_indices is None:
        raise SystemExit(1)

    indices = [raw_indices] if isinstance(raw_indices, int) else sorted(raw_indices)

    _clear_lines(2)

    _console.print(f"[bold green]◇[/]  {question}")
    for i, lbl in enumerate(labels):
        if i in indices:
            _console.print(f"[dim]│[/]  [bold green]■[/] {escape(lbl)}")
        else:
            _console.print(f"[dim]│[/]  [dim]□ {escape(lbl)}[/]")
    _print_bar()

    return [options[i] for i in indices]


def _confirm(question: str, default: bool = True) -> bool:
    """Display a clack-style yes/no prompt."""
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()

    suffix = " [Y/n] " if default else " [y/N] "
    _console.print("[dim]│[/]  ", end="")
    answer = input(suffix).strip().lower()

    result = default if answer == "" else answer in ("y", "yes")

    # Overwrite the ◆ question + │ bar + │ [Y/n] input line
    _clear_lines(3)

    _print_answered(question, "Yes" if result else "No")
    return result


def _to_number(raw: str) -> int | float:
    try:
        return int(raw)
    except ValueError:
        return float(raw)


def _text(
    question: str,
    default: str | None = None,
    validate: Validator | None = None,
    *,
    secret: bool = False,
    convert: Callable[[str], Any] | None = None,
) -> Any:
    """
    Display a clack-style free-text prompt, asking again until *validate* passes.

    *secret* input is read without echo and masked in the summary; *convert*
    turns the raw text into the answer (a ``ValueError`` asks again).
    """
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()
    lines = 2

    hint = f" ({default}) " if default and not secret else " "
    while True:
        _console.print("[dim]│[/]  ", end="")
        raw = getpass(hint) if secret else input(hint).strip()
        lines += 1
        if not raw and default is not None:
            raw = default

        try:
            value = convert(raw) if convert else raw
        except ValueError:
            verdict: bool | str = "please enter a number"
        else:
            verdict = validate(value) if validate else True
        if verdict is True:
            break
        message = verdict if isinstance(verdict, str) else "invalid input"
        _console.print(f"[dim]│[/]  [yellow]▲ {escape(message)}[/]")
        lines += 1

    _clear_lines(lines)
    _print_answered(question, "•" * 8 if secret else str(value))
    return value


def _choices(question: Question) -> tuple[list[Any], list[str], list[int]]:
    """
    Split inquirer-style choices (plain values or ``{name, value, checked}``)
    into values, labels and the indices marked ``checked``.
    """
    values: list[Any] = []
    labels: list[str] = []
    checked: list[int] = []
    for i, choice in enumerate(question.get("choices") or []):
        if isinstance(choice, dict):
            values.append(choice.get("value", choice.get("name")))
            labels.append(str(choice.get("name", choice.get("value"))))
            if choice.get("checked"):
                checked.append(i)
        else:
            values.append(choice)
            labels.append(str(choice))
    return values, labels, checked


def ask_one(question: Question) -> Any:
    """Prompt for a single inquirer-style question and return the answer."""
    kind = question.get("type", "input")
    message = question.get("message") or question["name"]
    default = question.get("default")
    validate = question.get("validate")

    if kind in ("list", "rawlist", "checkbox"):
        values, labels, checked = _choices(question)
        if not values:
            raise ValueError(f"Question '{question['name']}' has no choices.")
        if kind == "checkbox":
            defaults = default if isinstance(default, list) else []
            preselected = sorted(set(checked) | {values.index(d) for d in defaults if d in values})
            return _multi_select(message, values, labels, preselected)
        index = values.index(default) if default in values else 0
        return _select(message, values, labels, default=index)

    if kind == "confirm":
        return _confirm(message, default=True if default is None else bool(default))

    text_default = None if default is None else str(default)
    if kind == "input":
        return _text(message, default=text_default, validate=validate)
    if kind == "password":
        return _text(message, default=text_default, validate=validate, secret=True)
    if kind == "number":
        return _text(message, default=text_default, validate=validate, convert=_to_number)

    raise ValueError(f"Question '{question['name']}' has unsupported type {kind!r}.")


def ask(questions: Sequence[Question]) -> Answers:
    """Ask *questions* in order and collect the answers by question name."""
    return {q["name"]: ask_one(q) for q in questions}
