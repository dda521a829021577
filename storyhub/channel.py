"""In-process event channel shared between stories and addons."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


class Events:
    """Well-known channel event names."""

    REGISTER_SUBSCRIPTION = "registerSubscription"


class Channel:
    """Minimal synchronous event emitter."""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = {}

    def on(self, event: str, listener: Listener) -> None:
        self._listeners.setdefault(event, []).append(listener)

    def remove_listener(self, event: str, listener: Listener) -> None:
        """Remove the first registration of *listener* for *event*, if any."""

        listeners = self._listeners.get(event)
        if not listeners:
            return
        try:
            listeners.remove(listener)
        except ValueError:
            logger.debug("Listener %r was not registered for '%s'", listener, event)
            return
        if not listeners:
            del self._listeners[event]

    def emit(self, event: str, *args: Any) -> None:
        """Call every listener registered for *event* with *args*."""

        for listener in list(self._listeners.get(event, ())):
            listener(*args)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))


class AddonsHub:
    """Holds the channel addons talk over, when one has been provided."""

    def __init__(self, channel: Optional[Channel] = None) -> None:
        self._channel = channel

    def has_channel(self) -> bool:
        return self._channel is not None

    def get_channel(self) -> Channel:
        if self._channel is None:
            raise RuntimeError("No channel has been set for addons")
        return self._channel

    def set_channel(self, channel: Optional[Channel]) -> None:
        self._channel = channel


addons = AddonsHub()

__all__ = ["AddonsHub", "Channel", "Events", "Listener", "addons"]
