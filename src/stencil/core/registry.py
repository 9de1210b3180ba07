"""Persistent name -> template records managed by ``stencil add``/``remove``."""

from __future__ import annotations

import json
import os
from pathlib import Path

from stencil.core.acquire import is_git_url
from stencil.core.errors import ConfigError, TemplateNotFoundError
from stencil.core.types import TemplateInfo

HOME_ENV = "STENCIL_HOME"
REGISTRY_FILE = "templates.json"


def registry_path() -> Path:
    """``$STENCIL_HOME/templates.json``, defaulting to ``~/.stencil``."""
    home = os.environ.get(HOME_ENV)
    base = Path(home) if home else Path.home() / ".stencil"
    return base / REGISTRY_FILE


def load_templates(path: Path | None = None) -> dict[str, TemplateInfo]:
    """Read the registry. A missing file means no templates."""
    path = path or registry_path()
    if not path.exists():
        return {}

    try:
        raw = json.loads(path.read_text(encoding="utf-8") or "{}")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Malformed template registry {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Template registry {path} must contain an object")

    templates: dict[str, TemplateInfo] = {}
    for name, record in raw.items():
        if not isinstance(record, dict) or "templatePath" not in record:
            raise ConfigError(f"Template '{name}' in {path} has no templatePath")
        templates[name] = TemplateInfo(
            template_path=record["templatePath"],
            branch=record.get("branch"),
        )
    return templates


def save_templates(templates: dict[str, TemplateInfo], path: Path | None = None) -> None:
    path = path or registry_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, dict[str, str]] = {}
    for name, info in templates.items():
        record = {"templatePath": info.template_path}
        if info.branch:
            record["branch"] = info.branch
        data[name] = record

    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def add_template(
    name: str,
    template_path: str,
    branch: str | None = None,
    path: Path | None = None,
) -> TemplateInfo:
    """Register (or replace) a template. Local paths are stored absolute."""
    if not is_git_url(template_path):
        local = Path(template_path).expanduser()
        if not local.exists():
            raise TemplateNotFoundError(f"unknown template path: {template_path}")
        template_path = str(local.resolve())

    templates = load_templates(path)
    info = TemplateInfo(template_path=template_path, branch=branch)
    templates[name] = info
    save_templates(templates, path)
    return info


def remove_template(name: str, path: Path | None = None) -> TemplateInfo:
    templates = load_templates(path)
    if name not in templates:
        raise TemplateNotFoundError(f"no template named '{name}'")
    info = templates.pop(name)
    save_templates(templates, path)
    return info
