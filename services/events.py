"""
In-process event hooks emitted after mutations commit.
"""

import logging
from collections import defaultdict
from collections.abc import Callable

logger = logging.getLogger("ttclub.services.events")

DATA_LOADED = "data_loaded"
DATA_CHANGED = "data_changed"
PLAYER_CREATED = "player_created"


class EventBus:
    """
    Synchronous publish/subscribe.

    A failing subscriber is logged and skipped; it never affects the
    operation that emitted the event or the other subscribers.
    """

    def __init__(self):
        self._subscribers: dict[str, list[Callable]] = defaultdict(list)

    def subscribe(self, event: str, callback: Callable) -> Callable[[], None]:
        """Register a callback and return a function that unregisters it."""
        self._subscribers[event].append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers[event]:
                self._subscribers[event].remove(callback)

        return unsubscribe

    def emit(self, event: str, **payload) -> int:
        """Call every subscriber of an event; returns how many succeeded."""
        delivered = 0
        for callback in list(self._subscribers.get(event, ())):
            try:
                callback(**payload)
                delivered += 1
            except Exception as e:
                logger.error(f"Subscriber {callback!r} failed on '{event}': {e}", exc_info=True)
        return delivered
