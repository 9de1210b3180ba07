"""Fetch a template into a fresh staging directory."""

from __future__ import annotations

import re
import shutil
import subprocess
import tempfile
from pathlib import Path

from stencil.core.errors import AcquisitionError, TemplateNotFoundError

_GIT_URL = re.compile(r"(?:git|ssh|https?|git@[-\w.]+):(//)?(.*?)(\.git)(/?|#[-\d\w._]+?)$")


def is_git_url(ref: str) -> bool:
    """Whether *ref* looks like a git repository locator."""
    return _GIT_URL.search(ref) is not None


def split_branch(ref: str) -> tuple[str, str | None]:
    """Split ``url#branch`` into ``(url, branch)``."""
    url, sep, branch = ref.partition("#")
    return url, (branch if sep and branch else None)


def _clone(ref: str, dest: Path) -> None:
    url, branch = split_branch(ref)
    cmd = ["git", "clone", "--depth", "1"]
    if branch:
        cmd += ["--branch", branch]
    cmd += [url, str(dest)]

    try:
        subprocess.run(cmd, check=True, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True)
    except FileNotFoundError as e:
        raise AcquisitionError("git executable not found; install git to use remote templates") from e
    except subprocess.CalledProcessError as e:
        raise AcquisitionError(f"Failed to clone {ref}\n\n{e.stdout}") from e


def acquire(ref: str) -> Path:
    """
    Materialize a template into a newly allocated temporary directory.

    Git locators are shallow-cloned (a ``#branch`` suffix picks the branch),
    existing local paths are copied. The staging directory is never reused and
    is left behind after the build.

    Raises:
        TemplateNotFoundError: *ref* is neither a git locator nor an existing path.
        AcquisitionError: Cloning or copying failed.
    """
    if is_git_url(ref):
        dest = Path(tempfile.mkdtemp(prefix="stencil-"))
        _clone(ref, dest)
        return dest

    src = Path(ref).expanduser()
    if src.exists():
        dest = Path(tempfile.mkdtemp(prefix="stencil-"))
        try:
            shutil.copytree(src, dest, dirs_exist_ok=True)
        except (OSError, shutil.Error) as e:
            raise AcquisitionError(f"Failed to copy template {src}: {e}") from e
        return dest

    raise TemplateNotFoundError(f"unknown template path: {ref}")
