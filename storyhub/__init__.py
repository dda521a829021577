"""storyhub - registration and composition engine for component story catalogs."""
from __future__ import annotations

import logging
from importlib import metadata
from typing import Tuple

from storyhub.channel import Channel, Events, addons
from storyhub.config import load_parameters
from storyhub.core import ClientApi, InvalidArgument, StoryBuilder
from storyhub.loader import ModuleRef, StoryLoader
from storyhub.settings import Settings
from storyhub.store import StoryContext, StoryStore

logger = logging.getLogger(__name__)

__all__ = [
    "__version__",
    "Channel",
    "ClientApi",
    "Events",
    "InvalidArgument",
    "ModuleRef",
    "Settings",
    "StoryBuilder",
    "StoryContext",
    "StoryLoader",
    "StoryStore",
    "addons",
    "create_default_api",
]


def __getattr__(name: str):  # pragma: no cover - passthrough to package metadata
    if name == "__version__":
        try:
            return metadata.version("storyhub")
        except metadata.PackageNotFoundError:
            return "0.0.0"
    raise AttributeError(name)


def create_default_api(settings: Settings | None = None) -> Tuple[ClientApi, StoryLoader]:
    """Build a :class:`ClientApi` and load the configured story modules."""

    settings = settings or Settings.load()
    api = ClientApi()
    if settings.parameters_file.exists():
        api.add_parameters(load_parameters(settings.parameters_file))
        logger.info("Loaded global parameters from %s", settings.parameters_file)
    loader = StoryLoader(api, settings)
    loader.load()
    return api, loader
