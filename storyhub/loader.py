"""Discovery and reloading of story modules."""
from __future__ import annotations

import hashlib
import importlib.util
import logging
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Callable, Dict, List

from storyhub.core.api import ClientApi
from storyhub.settings import Settings

logger = logging.getLogger(__name__)

_NAME_CHARS = re.compile(r"\W")


class LoaderError(RuntimeError):
    """Raised when a story module cannot be registered."""


@dataclass(slots=True)
class HotContext:
    """Dispose hooks run before a story module is executed again."""

    callbacks: List[Callable[[], None]] = field(default_factory=list, repr=False)

    def dispose(self, callback: Callable[[], None]) -> None:
        self.callbacks.append(callback)

    def run_dispose(self) -> None:
        callbacks, self.callbacks = self.callbacks, []
        for callback in callbacks:
            callback()


@dataclass(slots=True)
class ModuleRef:
    """Reference to a story module passed to :meth:`ClientApi.stories_of`."""

    id: str
    hot: HotContext = field(default_factory=HotContext)


def _module_name(stories_dir: Path, path: Path) -> str:
    """Return a ``sys.modules`` key unique to the story file at *path*."""

    try:
        relative = path.relative_to(stories_dir).with_suffix("").as_posix()
    except ValueError:
        relative = path.stem
    digest = hashlib.sha1(str(path.resolve()).encode("utf-8")).hexdigest()[:8]
    name = _NAME_CHARS.sub("_", relative)
    return f"storyhub_stories_{name}_{digest}"


class StoryLoader:
    """Executes story files and re-executes them on reload.

    Each story file must define ``register(api, module)`` which declares its
    kinds through ``api.stories_of(kind, module)``.
    """

    def __init__(self, api: ClientApi, settings: Settings) -> None:
        self._api = api
        self._settings = settings
        self._modules: Dict[Path, ModuleRef] = {}

    def discover(self) -> List[Path]:
        """Return story files under the configured directory in sorted order."""

        stories_dir = self._settings.stories_dir
        if not stories_dir.exists():
            logger.warning("Stories directory not found: %s", stories_dir)
            return []
        return sorted(stories_dir.rglob(self._settings.story_pattern))

    def load(self) -> List[ModuleRef]:
        """Execute every discovered story file not loaded yet."""

        loaded = []
        for path in self.discover():
            if path in self._modules:
                continue
            loaded.append(self.load_file(path))
        logger.info("Loaded %d story module(s) from %s", len(loaded), self._settings.stories_dir)
        return loaded

    def load_file(self, path: Path) -> ModuleRef:
        """Execute *path* and register its stories."""

        module = self._execute(path)
        register = getattr(module, "register", None)
        if not callable(register):
            raise LoaderError(f"Story module {path} does not define register(api, module)")
        ref = ModuleRef(id=str(path))
        register(self._api, ref)
        self._modules[path] = ref
        logger.debug("Registered stories from %s", path)
        return ref

    def reload(self) -> List[ModuleRef]:
        """Dispose every loaded module and execute the story files again."""

        for path, ref in list(self._modules.items()):
            ref.hot.run_dispose()
            del self._modules[path]
        return self.load()

    def modules(self) -> List[ModuleRef]:
        return list(self._modules.values())

    def _execute(self, path: Path) -> ModuleType:
        name = _module_name(self._settings.stories_dir, path)
        spec = importlib.util.spec_from_file_location(name, path)
        if spec is None or spec.loader is None:
            raise LoaderError(f"Cannot import story module from {path}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            spec.loader.exec_module(module)
        except Exception:
            sys.modules.pop(name, None)
            logger.exception("Failed to import story module %s", path)
            raise
        return module


__all__ = ["HotContext", "LoaderError", "ModuleRef", "StoryLoader"]
