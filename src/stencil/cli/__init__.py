"""Command-line interface."""

from stencil.cli.app import app

__all__ = ["app"]
