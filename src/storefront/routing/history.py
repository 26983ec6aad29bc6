"""Hash-style location history with explicit change subscriptions.

Stands in for the browser's `#` location: it holds the current path and
tells subscribers when navigation moves it somewhere else.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager

import structlog

logger = structlog.get_logger(__name__)

LocationListener = Callable[[str], None]


def normalize_location(location: str | None) -> str:
    """`#/cart` → `/cart`, `cart` → `/cart`, empty → `/`."""
    path = (location or "").strip()
    if path.startswith("#"):
        path = path[1:]
    if not path:
        return "/"
    if not path.startswith("/"):
        path = "/" + path
    return path


def href(path: str) -> str:
    """Link target for an in-app path."""
    return "#" + normalize_location(path)


class Subscription:
    """Handle for one registered listener; cancelling twice is harmless."""

    def __init__(self, history: "History", listener: LocationListener) -> None:
        self._history = history
        self.listener = listener
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self._history._subscriptions.remove(self)
            self.active = False


class History:
    def __init__(self, location: str = "/") -> None:
        self._location = normalize_location(location)
        self._subscriptions: list[Subscription] = []

    @property
    def location(self) -> str:
        return self._location

    @property
    def listener_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, listener: LocationListener) -> Subscription:
        subscription = Subscription(self, listener)
        self._subscriptions.append(subscription)
        return subscription

    @contextmanager
    def listen(self, listener: LocationListener) -> Iterator[Subscription]:
        """Subscribe for the duration of the block; always released on exit."""
        subscription = self.subscribe(listener)
        try:
            yield subscription
        finally:
            subscription.cancel()

    def navigate(self, location: str) -> None:
        """Move to `location` and notify listeners, in subscription order."""
        new_location = normalize_location(location)
        if new_location == self._location:
            return

        logger.debug("Location changed", previous=self._location, location=new_location)
        self._location = new_location

        # Listeners may unsubscribe (or subscribe) while being notified
        for subscription in list(self._subscriptions):
            if subscription.active:
                subscription.listener(new_location)
