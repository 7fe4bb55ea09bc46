"""Perch application class.

Mutable during setup (route and resource registration).
Frozen on the first ``match()``; the route table cannot change afterwards.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from perch.config import AppConfig
from perch.resources.protocol import Handler
from perch.routing.route import ANY_METHOD, Route, RouteMatch
from perch.routing.router import Router

if TYPE_CHECKING:
    from perch.resources.manager import ResourceManager
    from perch.resources.resource import ControllerDefinition, Resource

logger = logging.getLogger("perch.app")


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    path: str
    handler: Handler
    methods: list[str] | None
    name: str | None


class App:
    """The perch application.

    Implements the host router contract (``get``, ``post``, ``put``,
    ``delete``, ``all``) that resources register through, and carries the
    ``resources`` registry.

    Thread safety:
        The setup phase is single-threaded. The freeze transition uses a
        Lock + double-check so exactly one thread compiles the route table.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_pending_routes",
        # Compiled state (populated by _freeze)
        "_router",
        "config",
        "resources",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self.resources: dict[str, Resource] = {}
        self._pending_routes: list[_PendingRoute] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._router: Router | None = None

    # -- Route registration --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: URL path template. Use ``:param`` for path parameters
                and ``:param?`` for optional ones.
            methods: HTTP methods. Defaults to ``["GET"]``. ``["*"]``
                registers a catch-all.
            name: Optional route name.
        """

        def decorator(func: Handler) -> Handler:
            self._add_route(path, func, methods, name)
            return func

        return decorator

    def _add_route(
        self,
        path: str,
        handler: Handler,
        methods: list[str] | None,
        name: str | None = None,
    ) -> None:
        self._check_not_frozen()
        self._pending_routes.append(_PendingRoute(path, handler, methods, name))

    def get(self, path: str, handler: Handler) -> None:
        self._add_route(path, handler, ["GET"])

    def post(self, path: str, handler: Handler) -> None:
        self._add_route(path, handler, ["POST"])

    def put(self, path: str, handler: Handler) -> None:
        self._add_route(path, handler, ["PUT"])

    def delete(self, path: str, handler: Handler) -> None:
        self._add_route(path, handler, ["DELETE"])

    def all(self, path: str, handler: Handler) -> None:
        """Register *handler* for every HTTP method on *path*."""
        self._add_route(path, handler, [ANY_METHOD])

    # -- Resources --

    async def load_resources(self, directory: str | Path | None = None) -> ResourceManager:
        """Discover controllers in *directory* and register their resources.

        The directory defaults to ``config.controllers_path``. Listing and
        importing run in a worker thread; the coroutine returns the
        manager once every route is registered, so await it before
        serving::

            app = App()
            await app.load_resources()
        """
        from perch.resources.manager import ResourceManager

        self._check_not_frozen()
        if directory is None:
            directory = self.config.controllers_path

        manager = ResourceManager(directory)
        await manager.load(self)
        return manager

    def resource(self, name: str, actions: ControllerDefinition) -> Resource:
        """Register a single resource from an in-memory action mapping.

        Usage::

            app.resource("photos", {"index": list_photos, "show": get_photo})

        If *name* is already registered, the existing resource is returned
        and *actions* registers nothing.
        """
        from perch.resources.manager import is_registered
        from perch.resources.resource import Resource

        self._check_not_frozen()
        if is_registered(name, self.resources):
            return self.resources[name]
        resource = Resource(name, actions, self)
        self.resources[name] = resource
        return resource

    # -- Matching --

    @property
    def routes(self) -> list[Route]:
        """All routes, in registration order. Freezes the app."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.routes

    def match(self, method: str, path: str) -> RouteMatch:
        """Resolve *method* and *path* to a route. Freezes the app.

        Raises ``NotFound`` or ``MethodNotAllowed`` when nothing matches.
        """
        self._ensure_frozen()
        assert self._router is not None
        return self._router.match(method, path)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the route table.

        MUST only be called while holding _freeze_lock.
        """
        router = Router()
        for pending in self._pending_routes:
            methods = frozenset(m.upper() for m in (pending.methods or ["GET"]))
            router.add(
                Route(
                    path=pending.path,
                    handler=pending.handler,
                    methods=methods,
                    name=pending.name,
                )
            )
        router.compile()
        self._router = router
        self._frozen = True

        logger.debug(
            "compiled %d route(s) across %d resource(s)",
            len(self._pending_routes),
            len(self.resources),
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after its route table has been compiled. "
                "Register routes and resources before matching requests."
            )
            raise RuntimeError(msg)
