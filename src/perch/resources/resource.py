"""Resource: one controller bound to one noun.

Computes a path template per action, registers each with the host
router in a fixed order, and keeps an audit trail of what it mapped::

    photos = Resource("photos", {"index": list_photos, "show": get_photo}, app)
    print(photos)
    # GET	index	/photos.:format?
    # GET	show	/photos/:photo.:format?
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from perch.errors import ConfigurationError
from perch.resources.actions import (
    FORM_ACTIONS,
    MEMBER_ACTIONS,
    OVERRIDE_KEYS,
    VERBS,
    Action,
    parse_action,
)
from perch.resources.naming import singularize
from perch.resources.protocol import HOST_METHODS, HostRouter

logger = logging.getLogger("perch.resources")

# Action name -> handler, plus the optional "name", "id" and "root" keys
ControllerDefinition: TypeAlias = Mapping[str, Any]

# Appended to every path except the catch-all
FORMAT_SUFFIX = ".:format?"

# Appended to the catch-all path: optional member id, optional sub-operation
CATCH_ALL_SUFFIX = "?/:op?"


@dataclass(frozen=True, slots=True)
class RegisteredRoute:
    """One (action, method, path) triple a resource handed to its host."""

    action: Action
    method: str
    path: str

    def __str__(self) -> str:
        return f"{self.method}\t{self.action}\t{self.path}"


def default_id(name: str, root: bool = False) -> str:
    """Member id parameter used when a controller does not set ``id``."""
    if root:
        return "id"
    return singularize(name)


def resource_path(name: str, action: Action | str, id: str, root: bool = False) -> str:  # noqa: A002
    """Build the path template for *action* on resource *name*.

    Pure: the same arguments always give the same template.

    Examples::

        resource_path("photos", "index", "photo")      -> "/photos.:format?"
        resource_path("photos", "new", "photo")        -> "/photos/new.:format?"
        resource_path("photos", "show", "photo")       -> "/photos/:photo.:format?"
        resource_path("photos", "all", "photo")        -> "/photos/:photo?/:op?"
        resource_path("session", "show", "id", True)   -> "/:id.:format?"
    """
    action = Action(action)
    path = "" if root else f"/{name}"

    if action in MEMBER_ACTIONS:
        path += f"/:{id}"

    if action is Action.ALL:
        path += CATCH_ALL_SUFFIX
    elif action in FORM_ACTIONS:
        path += f"/{action}"

    if action is not Action.ALL:
        path += FORMAT_SUFFIX

    return path


class Resource:
    """A named collection of actions registered with a host router.

    Args:
        name: Resource name, plural by convention (``"photos"``).
        controller: Mapping of action name to handler. May also carry
            ``name``, ``id`` and ``root`` overrides. Other keys are ignored.
        host: The router the routes are registered with.

    The catch-all ``all`` action is registered with ``host.all()`` but is
    not part of :attr:`routes`; its template is kept in :attr:`catch_all`.
    """

    __slots__ = ("_routes", "catch_all", "controller", "id", "name", "root")

    def __init__(self, name: str, controller: ControllerDefinition, host: HostRouter) -> None:
        self.name: str = controller.get("name") or name
        if not self.name:
            msg = "Resource name must be a non-empty string."
            raise ConfigurationError(msg)

        self.root: bool = bool(controller.get("root", False))
        self.id: str = controller.get("id") or default_id(self.name, self.root)
        self.controller = controller
        self.catch_all: str | None = None
        self._routes: tuple[RegisteredRoute, ...] = tuple(self._register(host))

    def _register(self, host: HostRouter) -> list[RegisteredRoute]:
        for key in self.controller:
            if key not in OVERRIDE_KEYS and parse_action(key) is None:
                logger.debug("%s: ignoring unknown controller key %r", self.name, key)

        # Validate every handler before the host sees any of them
        handlers = [
            (action, self.controller[action]) for action in Action if action in self.controller
        ]
        for action, handler in handlers:
            if not callable(handler):
                msg = (
                    f"Handler for {self.name}.{action} must be callable, "
                    f"got {type(handler).__name__}."
                )
                raise ConfigurationError(msg)

        routes: list[RegisteredRoute] = []
        for action, handler in handlers:
            path = self.path(action)
            method = VERBS[action]
            getattr(host, HOST_METHODS[method])(path, handler)
            logger.debug("%s: %s %s -> %s", self.name, method, path, action)

            if action is Action.ALL:
                self.catch_all = path
            else:
                routes.append(RegisteredRoute(action=action, method=method, path=path))
        return routes

    def path(self, action: Action | str) -> str:
        """Path template for *action* on this resource."""
        return resource_path(self.name, action, self.id, self.root)

    @property
    def routes(self) -> tuple[RegisteredRoute, ...]:
        """Registered routes in registration order."""
        return self._routes

    def __str__(self) -> str:
        return "\n".join(str(route) for route in self._routes)

    def __repr__(self) -> str:
        return f"Resource(name={self.name!r}, id={self.id!r}, root={self.root!r}, routes={len(self._routes)})"
