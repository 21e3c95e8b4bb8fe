"""YAML prompt loader for skills.

A skill may keep its system prompt in a ``prompts.yaml`` next to its
``handler.py``. Files are read once and cached for the process lifetime;
``validate_all_prompts`` runs at API startup.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("system_prompt",)

_cache: dict[Path, dict[str, Any]] = {}


def _read(yaml_path: Path) -> dict[str, Any]:
    data = yaml.safe_load(yaml_path.read_text(encoding="utf-8"))
    return data if isinstance(data, dict) else {}


def load_prompt(skill_dir: Path) -> dict[str, Any]:
    """Parsed ``prompts.yaml`` for ``skill_dir``, or ``{}`` if absent or broken."""
    if skill_dir not in _cache:
        yaml_path = skill_dir / "prompts.yaml"
        prompts: dict[str, Any] = {}
        if yaml_path.exists():
            try:
                prompts = _read(yaml_path)
            except yaml.YAMLError as exc:
                logger.error("Failed to parse %s: %s", yaml_path, exc)
        _cache[skill_dir] = prompts
    return _cache[skill_dir]


def validate_all_prompts(skills_dir: Path) -> list[str]:
    """Human-readable problems with every ``prompts.yaml`` under ``skills_dir``."""
    errors: list[str] = []
    for yaml_path in sorted(skills_dir.rglob("prompts.yaml")):
        try:
            data = yaml.safe_load(yaml_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            errors.append(f"{yaml_path}: {exc}")
            continue
        if not isinstance(data, dict):
            errors.append(f"{yaml_path}: expected a YAML mapping, got {type(data).__name__}")
            continue
        errors.extend(f"{yaml_path}: missing '{key}'" for key in REQUIRED_KEYS if key not in data)
    return errors


def clear_cache() -> None:
    _cache.clear()
