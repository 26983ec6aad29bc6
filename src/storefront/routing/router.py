"""Client-side router — picks the active view for a location.

Routes are tried in registration order and the first full match wins.
Patterns are `/`-separated segments; a segment written `:name` matches one
non-empty segment and binds it under `name`, every other segment must match
literally. A location nothing matches resolves to None: the page renders
nothing, it is not an error.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

import structlog

from storefront.routing.history import History, LocationListener, Subscription, normalize_location

logger = structlog.get_logger(__name__)

_PARAM_PREFIX = ":"


def compile_pattern(pattern: str) -> re.Pattern:
    """Compile a route pattern into an anchored regular expression.

    Raises:
        ValueError: A parameter name is not a valid identifier or is repeated.
    """
    parts = []
    seen: set[str] = set()
    for segment in normalize_location(pattern).split("/"):
        if segment.startswith(_PARAM_PREFIX):
            name = segment[len(_PARAM_PREFIX) :]
            if not name.isidentifier():
                raise ValueError(f"Invalid route parameter {segment!r} in {pattern!r}")
            if name in seen:
                raise ValueError(f"Duplicate route parameter {name!r} in {pattern!r}")
            seen.add(name)
            parts.append(f"(?P<{name}>[^/]+)")
        else:
            parts.append(re.escape(segment))
    return re.compile("/".join(parts))


@dataclass(frozen=True)
class Route:
    pattern: str
    view_id: str
    regex: re.Pattern = field(repr=False, compare=False)

    def match(self, location: str) -> RouteMatch | None:
        found = self.regex.fullmatch(location)
        if found is None:
            return None
        return RouteMatch(pattern=self.pattern, view_id=self.view_id, params=found.groupdict())


@dataclass(frozen=True)
class RouteMatch:
    pattern: str
    view_id: str
    params: dict[str, str] = field(default_factory=dict)


class Router:
    """Ordered route table bound to a location history."""

    def __init__(self, history: History | None = None) -> None:
        self.history = history if history is not None else History()
        self._routes: list[Route] = []

    @property
    def routes(self) -> list[Route]:
        return list(self._routes)

    def register_route(self, pattern: str, view_id: str) -> Route:
        """Declare a route. Overlapping patterns are kept; the earliest wins."""
        route = Route(pattern=normalize_location(pattern), view_id=view_id, regex=compile_pattern(pattern))
        self._routes.append(route)
        return route

    def resolve(self, location: str | None) -> RouteMatch | None:
        path = normalize_location(location)
        for route in self._routes:
            match = route.match(path)
            if match is not None:
                return match

        logger.debug("No route matches location", location=path)
        return None

    def current(self) -> RouteMatch | None:
        """Resolve the history's current location."""
        return self.resolve(self.history.location)

    @contextmanager
    def on_location_change(self, callback: LocationListener) -> Iterator[Subscription]:
        """Receive every new location while the block runs."""
        with self.history.listen(callback) as subscription:
            yield subscription
