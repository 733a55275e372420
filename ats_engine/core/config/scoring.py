from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .settings import settings

logger = logging.getLogger(__name__)

_SCORING_CONFIG_CACHE: dict[str, Any] | None = None
_DEFAULT_SCORING_CONFIG_PATH = Path(__file__).resolve().parent / "scoring.yaml"


def _scoring_config_path() -> Path:
    if settings.scoring_config_path:
        return Path(settings.scoring_config_path)
    return _DEFAULT_SCORING_CONFIG_PATH


def _load_scoring_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise RuntimeError(
            f"Scoring config not found at '{path}'. "
            "Set SCORING_CONFIG_PATH or restore ats_engine/core/config/scoring.yaml"
        )

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RuntimeError(f"Failed to read scoring config '{path}': {exc}") from exc

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in scoring config '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid scoring config '{path}': expected a top-level mapping.")
    return parsed


def get_scoring_config() -> dict[str, Any]:
    """Load scoring config from scoring.yaml (or SCORING_CONFIG_PATH) and cache it."""
    global _SCORING_CONFIG_CACHE

    if _SCORING_CONFIG_CACHE is not None:
        return _SCORING_CONFIG_CACHE

    _SCORING_CONFIG_CACHE = _load_scoring_config(_scoring_config_path())
    return _SCORING_CONFIG_CACHE


def reload_scoring_config(path: str | Path | None = None) -> dict[str, Any]:
    """Re-read the scoring config and swap it in with a single assignment.

    Concurrent readers holding the previous mapping keep a consistent view;
    new lookups see the complete new table.
    """
    global _SCORING_CONFIG_CACHE

    target = Path(path) if path is not None else _scoring_config_path()
    fresh = _load_scoring_config(target)
    _SCORING_CONFIG_CACHE = fresh
    logger.info("scoring_config_reloaded path=%s keys=%s", target, len(fresh))
    return fresh


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Get nested config value using dot path notation, e.g. 'aggregate.weights.keyword_alignment'."""
    if not path:
        return default

    current: Any = get_scoring_config()
    for key in path.split("."):
        if not isinstance(current, dict):
            return default
        if key not in current:
            return default
        current = current[key]
    return current
