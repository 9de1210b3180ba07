"""Typer CLI application for stencil."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

from rich.console import Console
from rich.markup import escape
from typer import Argument, Exit, Option, Typer

import stencil
from stencil.cli._logger import ConsoleLogger
from stencil.cli._prompts import ask
from stencil.core.build import build
from stencil.core.errors import StencilError
from stencil.core.registry import add_template, load_templates, registry_path, remove_template
from stencil.core.resolve import template_reference
from stencil.core.types import ProjectOptions

app = Typer(add_completion=False, context_settings={"help_option_names": ["-h", "--help"]})
_console = Console()
_logger = ConsoleLogger(_console)


def _version_callback(value: bool) -> None:
    if value:
        _console.print(f"stencil {stencil.__version__}")
        raise Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        Option(
            "--version",
            "-V",
            help="Show the version and exit.",
            callback=_version_callback,
            is_eager=True,
            expose_value=False,
        ),
    ] = False,
) -> None:
    """stencil — scaffold projects from reusable templates."""


def _fail(error: StencilError) -> Exit:
    _console.print()
    _logger.error(str(error))
    return Exit(code=1)


@app.command()
def create(
    dest: Annotated[
        Path | None,
        Argument(help="Output directory. Defaults to ./<project name>.", show_default=False),
    ] = None,
    template: Annotated[
        str | None,
        Option(
            "--template",
            "-t",
            help="Registered template name, local path, or git URL (url.git#branch).",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Create a new project from a template."""
    try:
        templates = load_templates()
    except StencilError as e:
        raise _fail(e) from None

    # A registered name is only used when no such path exists locally.
    if template and template in templates and not Path(template).exists():
        template = template_reference(ProjectOptions(), template, templates)

    options = ProjectOptions(
        template_path=template,
        dest_path=dest.resolve() if dest else None,
    )

    _console.print()
    _console.print(f"[bold cyan]●[/]  stencil v{stencil.__version__}")
    _console.print("[dim]│[/]")

    try:
        result = asyncio.run(
            build(options, ask=ask, logger=_logger, console=_console, templates=templates)
        )
    except StencilError as e:
        raise _fail(e) from None

    if result is not None:
        _console.print(f"[dim]│[/]  {escape(str(result.metadata.dest_path))}")
    _console.print()


@app.command()
def add(
    name: Annotated[str, Argument(help="Name to register the template under")],
    path: Annotated[str, Argument(help="Local directory or git URL")],
    branch: Annotated[
        str | None,
        Option("--branch", "-b", help="Branch to clone for git templates", show_default=False),
    ] = None,
) -> None:
    """Register a template."""
    try:
        info = add_template(name, path, branch)
    except StencilError as e:
        raise _fail(e) from None

    suffix = f" [dim]({escape(info.branch)})[/]" if info.branch else ""
    _console.print(f"[bold green]◇[/]  Added [bold]{escape(name)}[/] → {escape(info.template_path)}{suffix}")


@app.command()
def remove(name: Annotated[str, Argument(help="Registered template name")]) -> None:
    """Unregister a template."""
    try:
        remove_template(name)
    except StencilError as e:
        raise _fail(e) from None

    _console.print(f"[bold green]◇[/]  Removed [bold]{escape(name)}[/]")


@app.command("list")
def list_templates() -> None:
    """List registered templates."""
    try:
        templates = load_templates()
    except StencilError as e:
        raise _fail(e) from None

    _console.print()
    if not templates:
        _logger.warn(f"no templates registered in {registry_path()}")
        _console.print()
        return

    _console.print("[bold cyan]◆[/]  Available templates")
    _console.print("[dim]│[/]")
    for name, info in templates.items():
        branch = f" [dim]#{escape(info.branch)}[/]" if info.branch else ""
        _console.print(
            f"[dim]│[/]  [bold cyan]{escape(name):<22}[/] {escape(info.template_path)}{branch}"
        )
    _console.print()


app.command("ls", hidden=True)(list_templates)
