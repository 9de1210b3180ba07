"""Clack-style status lines printed through a shared Rich console."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape


class ConsoleLogger:
    """Status output for the operator; also handed to completion hooks."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def info(self, message: str) -> None:
        self.console.print(f"[bold cyan]●[/]  {escape(message)}")

    def success(self, message: str) -> None:
        self.console.print(f"[bold green]✔[/]  {escape(message)}")

    def warn(self, message: str) -> None:
        self.console.print(f"[bold yellow]▲[/]  [yellow]{escape(message)}[/]")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]Error:[/] {escape(message)}")
