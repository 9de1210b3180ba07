"""Discovery and loading of a template's own configuration file."""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path
from typing import Any

import yaml

from stencil.core.errors import ConfigError
from stencil.core.types import QUESTION_TYPES, TemplateConfig

MODULE_NAME = "meta"

SEARCH_PLACES: tuple[str, ...] = (
    f".{MODULE_NAME}rc",
    f".{MODULE_NAME}.json",
    f".{MODULE_NAME}.yaml",
    f".{MODULE_NAME}.yml",
    f".{MODULE_NAME}.py",
    f"{MODULE_NAME}.py",
)


def _load_python(path: Path) -> dict[str, Any]:
    spec = importlib.util.spec_from_file_location(f"_stencil_{MODULE_NAME}_config", path)
    if spec is None or spec.loader is None:
        raise ConfigError(f"Cannot import config file {path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise ConfigError(f"Error while executing {path}: {e}") from e

    return {
        key: getattr(module, key) for key in ("questions", "end_callback") if hasattr(module, key)
    }


def _load_data(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        if path.suffix == ".json":
            return json.loads(text)
        # .metarc may hold either JSON or YAML; YAML parses both.
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Malformed config file {path}: {e}") from e


def load_config(path: Path) -> TemplateConfig:
    """Load a single config file into a :class:`TemplateConfig`."""
    raw = _load_python(path) if path.suffix == ".py" else _load_data(path)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(raw).__name__}")

    questions = raw.get("questions") or []
    if not isinstance(questions, list) or not all(isinstance(q, dict) for q in questions):
        raise ConfigError(f"'questions' in {path} must be a list of mappings")
    for q in questions:
        if "name" not in q:
            raise ConfigError(f"Every question in {path} needs a 'name'")
        if not isinstance(q["name"], str):
            raise ConfigError(f"Question name {q['name']!r} in {path} must be a string")
        kind = q.get("type", "input")
        if kind not in QUESTION_TYPES:
            known = ", ".join(sorted(QUESTION_TYPES))
            raise ConfigError(f"Question '{q['name']}' in {path} has unknown type {kind!r} ({known})")

    end_callback = raw.get("end_callback")
    if end_callback is not None and not callable(end_callback):
        raise ConfigError(f"'end_callback' in {path} must be callable")

    return TemplateConfig(questions=questions, end_callback=end_callback, filepath=path)


def find_config(start_dir: Path, stop_dir: Path | None = None) -> Path | None:
    """
    Find the first config file in *start_dir* or any of its parents.

    Within a directory, ``SEARCH_PLACES`` order decides. The search stops after
    *stop_dir* (the home directory by default) or at the filesystem root.
    """
    stop = (stop_dir if stop_dir is not None else Path.home()).resolve()
    directory = start_dir.resolve()

    while True:
        for name in SEARCH_PLACES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
        if directory == stop or directory.parent == directory:
            return None
        directory = directory.parent


def discover(staging_path: Path, stop_dir: Path | None = None) -> TemplateConfig:
    """Return the template's config, or an empty one when it declares none."""
    path = find_config(staging_path, stop_dir)
    if path is None:
        return TemplateConfig()
    return load_config(path)
