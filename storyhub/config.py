"""Helpers to load global story parameters from YAML."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping

import yaml


class ConfigError(RuntimeError):
    """Raised when the parameters file cannot be loaded."""


def load_parameters(path: Path) -> Dict[str, Any]:
    """Load the global parameters mapping stored at *path*."""

    if not path.exists():
        raise ConfigError(f"Parameters file not found at {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse parameters file {path}: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ConfigError(f"Parameters file {path} must contain a mapping at the top level")
    return {str(key): value for key, value in payload.items()}


__all__ = ["ConfigError", "load_parameters"]
