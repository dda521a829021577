"""Story registration and composition core."""
from __future__ import annotations

from .api import (
    Addon,
    ClientApi,
    FunctionAddon,
    InvalidArgument,
    StoryBuilder,
    StorybookKind,
    StorybookStory,
)
from .decorators import Decorator, default_decorate_story
from .parameters import merge_parameters
from .subscriptions import SubscriptionStore, subscriptions_store

__all__ = [
    "Addon",
    "ClientApi",
    "Decorator",
    "FunctionAddon",
    "InvalidArgument",
    "StoryBuilder",
    "StorybookKind",
    "StorybookStory",
    "SubscriptionStore",
    "default_decorate_story",
    "merge_parameters",
    "subscriptions_store",
]
