"""Template resolution, configuration and rendering pipeline."""

from stencil.core.acquire import acquire, is_git_url
from stencil.core.build import BuildResult, build
from stencil.core.config import SEARCH_PLACES, discover
from stencil.core.errors import (
    AcquisitionError,
    ConfigError,
    RenderError,
    StencilError,
    TemplateNotFoundError,
)
from stencil.core.pipeline import run_pipeline
from stencil.core.registry import add_template, load_templates, remove_template
from stencil.core.render import render_text
from stencil.core.resolve import resolve_options
from stencil.core.types import (
    Answers,
    BuildMetadata,
    CompletionHook,
    FileTree,
    Helpers,
    ProjectOptions,
    Question,
    TemplateConfig,
    TemplateInfo,
)

__all__ = [
    "SEARCH_PLACES",
    "AcquisitionError",
    "Answers",
    "BuildMetadata",
    "BuildResult",
    "CompletionHook",
    "ConfigError",
    "FileTree",
    "Helpers",
    "ProjectOptions",
    "Question",
    "RenderError",
    "StencilError",
    "TemplateConfig",
    "TemplateInfo",
    "TemplateNotFoundError",
    "acquire",
    "add_template",
    "build",
    "discover",
    "is_git_url",
    "load_templates",
    "remove_template",
    "render_text",
    "resolve_options",
    "run_pipeline",
]
