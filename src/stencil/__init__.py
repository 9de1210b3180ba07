"""Stencil: scaffold projects from reusable templates."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("stencil")
except PackageNotFoundError:
    __version__ = "0.0.0"
