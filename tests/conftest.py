from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from storyhub.channel import AddonsHub, Channel
from storyhub.core.api import ClientApi
from storyhub.core.subscriptions import SubscriptionStore, subscriptions_store
from storyhub.loader import ModuleRef
from storyhub.settings import Settings
from storyhub.store import StoryStore


class RecordingStore(StoryStore):
    """Story store that records every write."""

    def __init__(self) -> None:
        super().__init__()
        self.writes: list[tuple[str, str]] = []

    def add_story(self, kind, name, story_fn, parameters) -> None:  # type: ignore[override]
        self.writes.append((kind, name))
        super().add_story(kind, name, story_fn, parameters)


@pytest.fixture
def story_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def channel() -> Channel:
    return Channel()


@pytest.fixture
def subscriptions() -> SubscriptionStore:
    return SubscriptionStore()


@pytest.fixture
def shared_subscriptions() -> Iterator[SubscriptionStore]:
    """Process-wide subscription store, emptied after the test."""

    yield subscriptions_store
    subscriptions_store.mark_all_as_unused()
    subscriptions_store.clear_unused()


@pytest.fixture
def api(story_store: RecordingStore, subscriptions: SubscriptionStore) -> ClientApi:
    """Client API without a channel."""

    return ClientApi(story_store=story_store, addons=AddonsHub(), subscriptions=subscriptions)


@pytest.fixture
def channel_api(
    story_store: RecordingStore, channel: Channel, subscriptions: SubscriptionStore
) -> ClientApi:
    """Client API whose stories track subscriptions over *channel*."""

    return ClientApi(
        story_store=story_store,
        addons=AddonsHub(channel),
        subscriptions=subscriptions,
    )


@pytest.fixture
def module() -> ModuleRef:
    return ModuleRef(id="stories/button_stories.py")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Create temporary settings pointing at an empty stories directory."""

    stories_dir = tmp_path / "stories"
    stories_dir.mkdir()
    return Settings(
        stories_dir=stories_dir,
        story_pattern="*_stories.py",
        parameters_file=tmp_path / "parameters.yaml",
        log_level="INFO",
    )
