"""Registration API for story kinds, decorators, parameters and addons."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Union

from storyhub.channel import AddonsHub, Events, addons as default_addons
from storyhub.store import BoundStory, StoryStore

from .decorators import DecorateStory, Decorator, StoryFn, default_decorate_story
from .parameters import Parameters, merge_parameters
from .subscriptions import SubscriptionStore, Teardown, subscriptions_store

logger = logging.getLogger(__name__)


class InvalidArgument(ValueError):
    """Raised when a kind or story name cannot be registered."""


class Addon(Protocol):
    """Capability exposed on every story builder under its registered name."""

    def apply(self, builder: "StoryBuilder", args: tuple) -> None:
        """Run the addon against *builder*."""


@dataclass(slots=True, frozen=True)
class FunctionAddon:
    """Adapts a plain function into an :class:`Addon`."""

    func: Callable[..., Any]

    def apply(self, builder: "StoryBuilder", args: tuple) -> None:
        self.func(builder, *args)


@dataclass(frozen=True)
class _MetaSubscription:
    """Forwards subscriptions declared over the channel into *store*.

    Instances compare equal for the same hub and store, so APIs sharing both
    keep a single listener attached.
    """

    hub: AddonsHub
    store: SubscriptionStore

    def __call__(self) -> Teardown:
        channel = self.hub.get_channel()
        channel.on(Events.REGISTER_SUBSCRIPTION, self.store.register)

        def teardown() -> None:
            channel.remove_listener(Events.REGISTER_SUBSCRIPTION, self.store.register)

        return teardown


class ModuleLike(Protocol):
    id: str


@dataclass(slots=True)
class StorybookStory:
    name: str
    render: BoundStory


@dataclass(slots=True)
class StorybookKind:
    kind: str
    file_name: Optional[str]
    stories: List[StorybookStory] = field(default_factory=list)


class StoryBuilder:
    """Adds stories to a single kind.

    Decorators and parameters added here only apply to stories added through
    this builder. Every method returns the builder so calls can be chained.
    Addon names registered on the API before the builder was created are
    available as methods.
    """

    def __init__(
        self,
        api: "ClientApi",
        kind: str,
        module: Optional[ModuleLike],
        addons: Mapping[str, Addon],
    ) -> None:
        self._api = api
        self._kind = kind
        self._module = module
        self._addons = dict(addons)
        self._local_decorators: List[Decorator] = []
        self._local_parameters: Parameters = {}

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def parameters(self) -> Parameters:
        return dict(self._local_parameters)

    def add(
        self,
        story_name: str,
        get_story: StoryFn,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> "StoryBuilder":
        """Register *get_story* as *story_name* with all decorators applied."""

        self._api._add_story(
            self._kind,
            self._module,
            self._local_decorators,
            self._local_parameters,
            story_name,
            get_story,
            parameters,
        )
        return self

    def add_decorator(self, decorator: Decorator) -> "StoryBuilder":
        self._local_decorators.append(decorator)
        return self

    def add_parameters(self, parameters: Mapping[str, Any]) -> "StoryBuilder":
        self._local_parameters = {**self._local_parameters, **parameters}
        return self

    def apply_addon(self, name: str, *args: Any) -> "StoryBuilder":
        """Run the addon registered as *name* with *args*."""

        try:
            addon = self._addons[name]
        except KeyError as exc:
            raise AttributeError(
                f"No addon named '{name}' is available for kind '{self._kind}'"
            ) from exc
        addon.apply(self, args)
        return self

    def __getattr__(self, name: str) -> Callable[..., "StoryBuilder"]:
        if name.startswith("_"):
            raise AttributeError(name)
        if name not in self._addons:
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute or addon '{name}'"
            )

        def method(*args: Any) -> "StoryBuilder":
            return self.apply_addon(name, *args)

        return method

    def __repr__(self) -> str:
        return f"StoryBuilder(kind={self._kind!r})"


class ClientApi:
    """Entry point story files use to declare kinds and stories."""

    def __init__(
        self,
        story_store: Optional[StoryStore] = None,
        decorate_story: DecorateStory = default_decorate_story,
        addons: Optional[AddonsHub] = None,
        subscriptions: Optional[SubscriptionStore] = None,
    ) -> None:
        self._story_store = story_store if story_store is not None else StoryStore()
        self._decorate_story = decorate_story
        self._addons_hub = addons if addons is not None else default_addons
        self._subscriptions = subscriptions if subscriptions is not None else subscriptions_store
        self._addons: Dict[str, Addon] = {}
        self._global_decorators: List[Decorator] = []
        self._global_parameters: Parameters = {}

    @property
    def story_store(self) -> StoryStore:
        return self._story_store

    @property
    def subscriptions(self) -> SubscriptionStore:
        return self._subscriptions

    @property
    def global_parameters(self) -> Parameters:
        return self._global_parameters

    @property
    def global_decorators(self) -> List[Decorator]:
        return list(self._global_decorators)

    def set_addon(self, addon: Mapping[str, Union[Addon, Callable[..., Any]]]) -> None:
        """Register addon methods, replacing any previously registered names."""

        for name, value in addon.items():
            self._addons[name] = value if hasattr(value, "apply") else FunctionAddon(value)
            logger.debug("Registered addon '%s'", name)

    def add_decorator(self, decorator: Decorator) -> None:
        self._global_decorators.append(decorator)

    def add_parameters(self, parameters: Mapping[str, Any]) -> None:
        """Replace the global parameters with *parameters*."""

        self._global_parameters = dict(parameters)

    def clear_decorators(self) -> None:
        self._global_decorators = []

    def stories_of(self, kind: str, module: Optional[ModuleLike] = None) -> StoryBuilder:
        """Return a builder adding stories under *kind*.

        When *module* exposes a reload hook, the kind is removed from the
        catalog as the module is disposed so that re-running the module does
        not register the kind twice.
        """

        if not isinstance(kind, str) or not kind:
            raise InvalidArgument(
                "Invalid or missing kind provided for stories, should be a string"
            )

        if module is None:
            logger.warning(
                "Missing 'module' parameter for story with a kind of '%s'. "
                "Reloading it will register duplicate stories.",
                kind,
            )
        else:
            hot = getattr(module, "hot", None)
            if hot is not None and hasattr(hot, "dispose"):
                hot.dispose(lambda: self._dispose_kind(kind))

        return StoryBuilder(self, kind, module, self._addons)

    def get_storybook(self) -> List[StorybookKind]:
        """Return every kind in the catalog with callable story renders."""

        store = self._story_store
        return [
            StorybookKind(
                kind=kind,
                file_name=store.get_story_file_name(kind),
                stories=[
                    StorybookStory(name=name, render=store.get_story_with_context(kind, name))
                    for name in store.get_stories(kind)
                ],
            )
            for kind in store.get_story_kinds()
        ]

    def _dispose_kind(self, kind: str) -> None:
        self._story_store.remove_story_kind(kind)
        self._story_store.increment_revision()

    def _add_story(
        self,
        kind: str,
        module: Optional[ModuleLike],
        local_decorators: List[Decorator],
        local_parameters: Parameters,
        story_name: str,
        get_story: StoryFn,
        parameters: Optional[Mapping[str, Any]],
    ) -> None:
        if not isinstance(story_name, str):
            raise InvalidArgument(
                f'Invalid or missing story name provided for a "{kind}" story.'
            )

        if self._story_store.has_story(kind, story_name):
            logger.warning('Story of "%s" named "%s" already exists', kind, story_name)

        decorators = [
            *local_decorators,
            *self._global_decorators,
            self._with_subscription_tracking,
        ]
        file_name = getattr(module, "id", None)
        merged = merge_parameters(
            {"file_name": file_name},
            self._global_parameters,
            local_parameters,
            parameters,
        )

        self._story_store.add_story(
            kind,
            story_name,
            self._decorate_story(get_story, decorators),
            merged,
        )
        logger.debug("Added story '%s' to kind '%s'", story_name, kind)

    def _with_subscription_tracking(self, get_story: Callable[[], Any], context: Any) -> Any:
        if not self._addons_hub.has_channel():
            return get_story()
        self._subscriptions.mark_all_as_unused()
        self._subscriptions.register(_MetaSubscription(self._addons_hub, self._subscriptions))
        result = get_story()
        self._subscriptions.clear_unused()
        return result


__all__ = [
    "Addon",
    "ClientApi",
    "FunctionAddon",
    "InvalidArgument",
    "ModuleLike",
    "StoryBuilder",
    "StorybookKind",
    "StorybookStory",
]
