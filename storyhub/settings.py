"""Environment-driven configuration for storyhub."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional


def _parse_env_line(line: str) -> Optional[tuple[str, str]]:
    line = line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, _, value = line.partition("=")
    return key.strip(), value.strip().strip('"')


def load_environment(candidates: Iterable[Path] | None = None) -> Dict[str, str]:
    """Populate ``os.environ`` from dotenv files without overriding set values.

    By default ``$ENV_FILE`` is read first, then ``.env`` in the working
    directory. Returns the variables that were applied.
    """

    if candidates is None:
        candidates = [Path(path) for path in (os.getenv("ENV_FILE"), ".env") if path]
    applied: Dict[str, str] = {}
    for path in candidates:
        if not path.exists():
            continue
        for raw_line in path.read_text(encoding="utf-8").splitlines():
            parsed = _parse_env_line(raw_line)
            if parsed is None or parsed[0] in os.environ:
                continue
            key, value = parsed
            os.environ[key] = value
            applied[key] = value
    return applied


@dataclass(slots=True)
class Settings:
    """Runtime settings loaded from environment variables."""

    stories_dir: Path
    story_pattern: str
    parameters_file: Path
    log_level: str

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment variables with sensible defaults."""

        return cls(
            stories_dir=Path(os.getenv("STORYHUB_STORIES_DIR", "stories")),
            story_pattern=os.getenv("STORYHUB_STORY_PATTERN", "*_stories.py"),
            parameters_file=Path(
                os.getenv("STORYHUB_PARAMETERS", "config/parameters.yaml")
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
