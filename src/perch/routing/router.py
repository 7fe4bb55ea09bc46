"""Compiled router with ordered template matching.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes. Order matters: the first
matching route wins, so ``/photos/new`` must be added before
``/photos/:photo``.
"""

import logging
from dataclasses import dataclass

from perch.errors import MethodNotAllowed, NotFound
from perch.routing.params import CompiledPath, compile_path
from perch.routing.route import Route, RouteMatch

logger = logging.getLogger("perch.routing")


@dataclass(frozen=True, slots=True)
class _Entry:
    """A route paired with its compiled path."""

    route: Route
    compiled: CompiledPath


class Router:
    """Compiled router with ordered, regex-based path matching.

    Usage::

        router = Router()
        router.add(Route("/photos.:format?", handler, frozenset({"GET"})))
        router.add(Route("/photos/:photo.:format?", handler, frozenset({"GET"})))
        router.compile()
        match = router.match("GET", "/photos/42.json")

    Catch-all routes (method ``*``) are consulted only after every
    method-specific route has failed to match.
    """

    __slots__ = ("_compiled", "_entries")

    def __init__(self) -> None:
        self._entries: list[_Entry] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        self._entries.append(_Entry(route=route, compiled=compile_path(route.path)))
        logger.debug("added %s %s", ",".join(sorted(route.methods)), route.path)

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes in registration order."""
        return [entry.route for entry in self._entries]

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method against compiled routes.

        Returns a ``RouteMatch`` on success. ``HEAD`` requests are served
        by ``GET`` routes.
        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        method = method.upper()
        allowed: set[str] = set()
        fallback: RouteMatch | None = None

        for entry in self._entries:
            params = entry.compiled.match(path)
            if params is None:
                continue

            route = entry.route
            if route.is_catch_all:
                if fallback is None:
                    fallback = RouteMatch(route=route, path_params=params)
                continue

            if method in route.methods or (method == "HEAD" and "GET" in route.methods):
                return RouteMatch(route=route, path_params=params)
            allowed |= route.methods

        if fallback is not None:
            return fallback

        if allowed:
            raise MethodNotAllowed(frozenset(allowed))

        raise NotFound(f"No route matches {method} {path!r}")
