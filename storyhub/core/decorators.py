"""Decorator composition for story render functions."""
from __future__ import annotations

from typing import Any, Callable, Protocol, Sequence

StoryFn = Callable[[Any], Any]


class Decorator(Protocol):
    """Callable protocol for a story decorator."""

    def __call__(self, get_story: Callable[[], Any], context: Any) -> Any:
        """Wrap the next-inner render, returning a renderable value."""


DecorateStory = Callable[[StoryFn, Sequence[Decorator]], StoryFn]


def _wrap(decorated: StoryFn, decorator: Decorator) -> StoryFn:
    def wrapper(context: Any) -> Any:
        return decorator(lambda: decorated(context), context)

    return wrapper


def default_decorate_story(get_story: StoryFn, decorators: Sequence[Decorator]) -> StoryFn:
    """Fold *decorators* around *get_story*.

    The first decorator wraps the story function, the second wraps the first
    and so on, so the last decorator in the list ends up outermost.
    """

    decorated = get_story
    for decorator in decorators:
        decorated = _wrap(decorated, decorator)
    return decorated


__all__ = ["DecorateStory", "Decorator", "StoryFn", "default_decorate_story"]
