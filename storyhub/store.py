"""In-memory story catalog keyed by kind and story name."""
from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Parameters = Dict[str, Any]

_ID_SEPARATORS = re.compile(r"[^a-z0-9]+")


def _sanitize(value: str) -> str:
    return _ID_SEPARATORS.sub("-", value.lower()).strip("-")


def story_id(kind: str, name: str) -> str:
    """Return the stable identifier used for *name* within *kind*."""

    return f"{_sanitize(kind)}--{_sanitize(name)}"


@dataclass(slots=True)
class StoryContext:
    """Context handed to render functions and decorators."""

    kind: str
    story: str
    parameters: Parameters = field(default_factory=dict)


@dataclass(slots=True)
class StoryEntry:
    """A fully decorated story stored in the catalog."""

    kind: str
    name: str
    story_fn: Callable[[StoryContext], Any]
    parameters: Parameters


@dataclass(slots=True)
class _KindEntry:
    file_name: Optional[str]
    stories: Dict[str, StoryEntry] = field(default_factory=dict)


class StoryStore:
    """Ordered catalog of kinds and the stories registered under them."""

    def __init__(self) -> None:
        self._kinds: Dict[str, _KindEntry] = {}
        self._revision = 0

    @property
    def revision(self) -> int:
        return self._revision

    def increment_revision(self) -> None:
        self._revision += 1

    def has_story(self, kind: str, name: str) -> bool:
        entry = self._kinds.get(kind)
        return entry is not None and name in entry.stories

    def add_story(
        self,
        kind: str,
        name: str,
        story_fn: Callable[[StoryContext], Any],
        parameters: Parameters,
    ) -> None:
        """Store *story_fn* under *kind*/*name*, replacing any previous story."""

        entry = self._kinds.get(kind)
        if entry is None:
            entry = self._kinds[kind] = _KindEntry(file_name=parameters.get("file_name"))
        entry.stories[name] = StoryEntry(
            kind=kind,
            name=name,
            story_fn=story_fn,
            parameters=parameters,
        )

    def remove_story_kind(self, kind: str) -> None:
        if self._kinds.pop(kind, None) is not None:
            logger.debug("Removed story kind '%s'", kind)

    def get_story_kinds(self) -> List[str]:
        return list(self._kinds.keys())

    def get_stories(self, kind: str) -> List[str]:
        entry = self._kinds.get(kind)
        return list(entry.stories.keys()) if entry else []

    def get_story_file_name(self, kind: str) -> Optional[str]:
        entry = self._kinds.get(kind)
        return entry.file_name if entry else None

    def get_story(self, kind: str, name: str) -> StoryEntry:
        """Return the stored story for *kind*/*name*."""

        try:
            return self._kinds[kind].stories[name]
        except KeyError as exc:
            raise KeyError(f"Story '{name}' of kind '{kind}' is not registered") from exc

    def get_story_with_context(self, kind: str, name: str) -> "BoundStory":
        return BoundStory(store=self, kind=kind, name=name)

    def extract(self) -> Dict[str, Dict[str, Any]]:
        """Return a serializable index of every story keyed by story id."""

        index: Dict[str, Dict[str, Any]] = {}
        for kind, entry in self._kinds.items():
            for name, story in entry.stories.items():
                identifier = story_id(kind, name)
                if identifier in index:
                    previous = index[identifier]
                    logger.warning(
                        "Story id '%s' of '%s' / '%s' collides with '%s' / '%s'; keeping the later story",
                        identifier,
                        kind,
                        name,
                        previous["kind"],
                        previous["name"],
                    )
                index[identifier] = {
                    "id": identifier,
                    "kind": kind,
                    "name": name,
                    "parameters": copy.deepcopy(
                        {
                            key: value
                            for key, value in story.parameters.items()
                            if not callable(value)
                        }
                    ),
                }
        return index


@dataclass(slots=True, frozen=True)
class BoundStory:
    """Callable handle rendering one catalog story."""

    store: StoryStore = field(compare=False, repr=False)
    kind: str
    name: str

    def __call__(self, context: Optional[StoryContext] = None) -> Any:
        story = self.store.get_story(self.kind, self.name)
        if context is None:
            context = StoryContext(
                kind=self.kind,
                story=self.name,
                parameters=dict(story.parameters),
            )
        return story.story_fn(context)


__all__ = [
    "BoundStory",
    "StoryContext",
    "StoryEntry",
    "StoryStore",
    "story_id",
]
