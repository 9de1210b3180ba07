"""The three build stages: ask, merge, render; then write."""

from __future__ import annotations

from pathlib import Path, PurePath

from stencil.core.errors import TemplateNotFoundError
from stencil.core.render import read_modes, read_tree, render_files, write_tree
from stencil.core.types import (
    AskFn,
    BuildMetadata,
    FileTree,
    ProjectOptions,
    TemplateConfig,
)

TEMPLATE_DIR = "template"


def resolve_dest_path(options: ProjectOptions) -> Path:
    """Explicit destination, else ``cwd / projectName``.

    An absolute project name is still placed below the working directory, and
    ``..`` segments are dropped.
    """
    if options.dest_path:
        return options.dest_path
    answers = options.answers or {}
    name = PurePath(answers.get("projectName") or "")
    parts = [p for p in (name.parts[1:] if name.anchor else name.parts) if p != ".."]
    return Path.cwd().joinpath(*parts)


def ask_questions(metadata: BuildMetadata, config: TemplateConfig, ask: AskFn) -> None:
    if not config.questions:
        metadata.answers = {}
        return
    metadata.answers = ask(config.questions)


def merge_answers(metadata: BuildMetadata, options: ProjectOptions) -> None:
    """Built-in answers override template answers with the same name."""
    metadata.answers.update(options.answers or {})


async def run_pipeline(
    options: ProjectOptions,
    config: TemplateConfig,
    ask: AskFn,
) -> tuple[BuildMetadata, FileTree]:
    """
    Render the staged template and write it to the destination.

    Files come from the ``template/`` directory of the staging path. Nothing is
    written unless every file rendered; existing files at the destination that
    the template does not produce are left alone.
    """
    if options.staging_path is None:
        raise ValueError("run_pipeline() needs an acquired template (staging_path is unset).")
    source = options.staging_path / TEMPLATE_DIR
    if not source.is_dir():
        raise TemplateNotFoundError(f"Template directory not found: {source}")

    metadata = BuildMetadata(dest_path=resolve_dest_path(options))
    files = read_tree(source)
    modes = read_modes(source)

    ask_questions(metadata, config, ask)
    merge_answers(metadata, options)
    await render_files(files, metadata.answers)

    write_tree(files, metadata.dest_path, modes)
    return metadata, files
