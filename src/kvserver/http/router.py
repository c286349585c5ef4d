"""
=============================================================================
PREFIX ROUTER
=============================================================================

Routes are matched by plain prefix, first match wins:

    /set?a=1?b=2        → set handler,  suffix "?a=1?b=2"
    /get?key=a          → get handler,  suffix "?key=a"
    /settings           → set handler,  suffix "tings"   (no valid pairs)
    /anything/else      → default handler, suffix ""

The suffix handed to a handler is the route with the prefix sliced off.
The default handler never looks at it.

=============================================================================
WHY NOT REGEX ROUTES?
=============================================================================

The protocol has two verbs encoded as path prefixes and a catch-all help
page. A list of (prefix, handler) pairs checked in registration order is
all the dispatch this needs.

=============================================================================
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from ..store import Store
from .request import Request
from .response import Response


Handler = Callable[[Store, str], Response]


@dataclass
class Route:
    """
    A registered route.

        Route(prefix="/set", handler=handle_set, name="set")
    """

    prefix: str
    handler: Handler
    name: Optional[str] = None

    def matches(self, route: str) -> bool:
        return route.startswith(self.prefix)


@dataclass
class RouteMatch:
    """Result of resolving a route: the handler to call and its suffix."""

    handler: Handler
    suffix: str
    route: Optional[Route] = None


class Router:
    """
    Dispatches request routes to handlers by prefix.

    Usage:
        router = Router(default=handle_help)

        @router.route("/set")
        def handle_set(store, suffix):
            ...

        response = router.handle(store, request)
    """

    def __init__(self, default: Optional[Handler] = None):
        self._routes: List[Route] = []
        self._default = default

    def add_route(self, prefix: str, handler: Handler, name: Optional[str] = None) -> Route:
        """Register ``handler`` for routes starting with ``prefix``."""
        if not prefix:
            raise ValueError("Route prefix must not be empty")

        route = Route(prefix=prefix, handler=handler, name=name)
        self._routes.append(route)
        return route

    def route(self, prefix: str, name: Optional[str] = None):
        """Decorator form of add_route()."""
        def decorator(handler: Handler) -> Handler:
            self.add_route(prefix, handler, name=name)
            return handler
        return decorator

    @property
    def routes(self) -> List[Route]:
        return list(self._routes)

    def match(self, route: str) -> Optional[RouteMatch]:
        """
        Resolve ``route`` to a handler.

        Returns:
            A RouteMatch, or None when nothing matches and no default
            handler is configured.
        """
        for candidate in self._routes:
            if candidate.matches(route):
                return RouteMatch(
                    handler=candidate.handler,
                    suffix=route[len(candidate.prefix):],
                    route=candidate,
                )

        if self._default is not None:
            return RouteMatch(handler=self._default, suffix="")

        return None

    def handle(self, store: Store, request: Request) -> Response:
        """Run the handler matching ``request.route`` against ``store``."""
        match = self.match(request.route)
        if match is None:
            raise LookupError(f"No handler for route {request.route!r}")
        return match.handler(store, match.suffix)
