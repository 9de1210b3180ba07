"""Exceptions raised by the build pipeline."""

from __future__ import annotations


class StencilError(Exception):
    """Base class for every error the CLI reports without a traceback."""


class TemplateNotFoundError(StencilError):
    """The template reference is neither a git locator nor an existing path."""


class AcquisitionError(StencilError):
    """Cloning or copying a template into its staging directory failed."""


class ConfigError(StencilError):
    """A template config or the template registry could not be loaded."""


class RenderError(StencilError):
    """A template file failed to render. The message starts with ``[<path>] ``."""
