"""Wire the build stages together."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from stencil.core.acquire import acquire
from stencil.core.config import discover
from stencil.core.errors import TemplateNotFoundError
from stencil.core.pipeline import run_pipeline
from stencil.core.registry import load_templates
from stencil.core.resolve import resolve_options
from stencil.core.types import (
    AskFn,
    BuildMetadata,
    FileTree,
    Helpers,
    Logger,
    ProjectOptions,
    TemplateConfig,
    TemplateInfo,
)


@dataclass(frozen=True, kw_only=True)
class BuildResult:
    metadata: BuildMetadata
    files: FileTree
    config: TemplateConfig


async def build(
    options: ProjectOptions,
    *,
    ask: AskFn,
    logger: Logger,
    console: Console,
    templates: Mapping[str, TemplateInfo] | None = None,
    stop_dir: Path | None = None,
) -> BuildResult | None:
    """
    Scaffold a project: resolve, acquire, discover config, render, write.

    Returns ``None`` without touching the filesystem when there is no template
    to build from. Every other failure propagates.

    Args:
        options: Build options; filled in along the way.
        ask: Interactive prompt capability.
        logger: Status output, also handed to the completion hook.
        console: Console handed to the completion hook.
        templates: Known templates; read from the registry when omitted.
        stop_dir: Upper bound of the config file search.
    """
    if templates is None:
        templates = load_templates()

    resolved = resolve_options(options, templates, ask, logger)
    if resolved is None:
        return None
    if not resolved.template_path:
        raise TemplateNotFoundError(f"unknown template: {(resolved.answers or {}).get('template')}")

    resolved.staging_path = acquire(resolved.template_path)
    config = discover(resolved.staging_path, stop_dir)

    metadata, files = await run_pipeline(resolved, config, ask)

    if config.end_callback is not None:
        config.end_callback(metadata, Helpers(console=console, logger=logger, files=files))
    else:
        logger.success("init success")

    return BuildResult(metadata=metadata, files=files, config=config)
