"""Liveness tracking for subscriptions attached while a story renders."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Optional

logger = logging.getLogger(__name__)

Teardown = Callable[[], None]
SubscriptionFactory = Callable[[], Optional[Teardown]]


@dataclass(slots=True)
class _Subscription:
    teardown: Optional[Teardown]
    used: bool = True


class SubscriptionStore:
    """Keeps subscriptions alive only while the renders that declare them do.

    Every story invocation marks all entries unused, re-registers the
    factories it still needs and then clears whatever was not revived.
    Factories are identified by equality, so callers must pass the same
    factory object on every render.
    """

    def __init__(self) -> None:
        self._subscriptions: Dict[Hashable, _Subscription] = {}

    def register(self, factory: SubscriptionFactory) -> None:
        """Track *factory*, invoking it only on first registration."""

        entry = self._subscriptions.get(factory)
        if entry is not None:
            entry.used = True
            return
        self._subscriptions[factory] = _Subscription(teardown=factory())
        logger.debug("Registered subscription %r", factory)

    def mark_all_as_unused(self) -> None:
        for entry in self._subscriptions.values():
            entry.used = False

    def clear_unused(self) -> None:
        """Tear down and forget every entry not revived since the last mark.

        An entry whose teardown raises stays tracked and unused, so the next
        call retries it.
        """

        stale = [key for key, entry in self._subscriptions.items() if not entry.used]
        for key in stale:
            teardown = self._subscriptions[key].teardown
            if teardown is not None:
                teardown()
            del self._subscriptions[key]
            logger.debug("Cleared unused subscription %r", key)

    def __contains__(self, factory: object) -> bool:
        return factory in self._subscriptions

    def __len__(self) -> int:
        return len(self._subscriptions)


subscriptions_store = SubscriptionStore()

__all__ = ["SubscriptionFactory", "SubscriptionStore", "Teardown", "subscriptions_store"]
