"""
File tree I/O and template rendering.

Templates use Jinja2 with EJS-style delimiters so that ``{{ }}`` in the
generated sources (Vue, Go templates, GitHub Actions, ...) stays untouched:

- ``<%= expr %>`` prints an expression
- ``<% stmt %>`` wraps control flow (``<% if x %>...<% endif %>``)
- ``<%# comment %>`` is dropped

Undefined names are errors rather than empty strings.
"""

from __future__ import annotations

import asyncio
import os
import stat
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined

from stencil.core.errors import RenderError
from stencil.core.types import FileModes, FileTree

_env = Environment(
    block_start_string="<%",
    block_end_string="%>",
    variable_start_string="<%=",
    variable_end_string="%>",
    comment_start_string="<%#",
    comment_end_string="%>",
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


def render_text(text: str, data: Mapping[str, Any]) -> str:
    """Render a template string against *data*."""
    return _env.from_string(text).render(data)


def render_file(key: str, content: bytes, data: Mapping[str, Any]) -> bytes:
    """
    Render one file of a tree.

    Content that is not UTF-8 (images, archives) is returned unchanged.

    Raises:
        RenderError: Rendering failed; the message is prefixed with ``[key] ``.
    """
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        return content

    try:
        return render_text(text, data).encode("utf-8")
    except Exception as e:  # noqa: BLE001 - template expressions may raise anything
        raise RenderError(f"[{key}] {e}") from e


def read_tree(root: Path) -> FileTree:
    """Load every file below *root*, keyed by POSIX relative path."""
    files: FileTree = {}
    for dirpath, _dirs, filenames in os.walk(root):
        for name in filenames:
            path = Path(dirpath) / name
            files[path.relative_to(root).as_posix()] = path.read_bytes()
    return files


def read_modes(root: Path) -> FileModes:
    """Permission bits of every file below *root*, keyed like :func:`read_tree`."""
    modes: FileModes = {}
    for dirpath, _dirs, filenames in os.walk(root):
        for name in filenames:
            path = Path(dirpath) / name
            modes[path.relative_to(root).as_posix()] = stat.S_IMODE(path.stat().st_mode)
    return modes


def write_tree(files: FileTree, dest: Path, modes: FileModes | None = None) -> None:
    """
    Write *files* below *dest*, overwriting collisions and keeping anything else.

    Files listed in *modes* get those permission bits (executable scripts stay
    executable); the rest keep the umask default.
    """
    modes = modes or {}
    for key, content in files.items():
        target = dest / key
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        if key in modes:
            target.chmod(modes[key])


async def render_files(files: FileTree, data: Mapping[str, Any]) -> FileTree:
    """
    Render every file of *files* in place, concurrently.

    The first failure is raised; renders already running are left to finish,
    their output is discarded since nothing is written on failure.
    """
    keys = list(files)
    results = await asyncio.gather(
        *(asyncio.to_thread(render_file, key, files[key], data) for key in keys)
    )
    for key, content in zip(keys, results, strict=True):
        files[key] = content
    return files
