"""Route and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

# Method marker for catch-all routes registered through ``all()``
ANY_METHOD = "*"


@dataclass(frozen=True, slots=True)
class PathParam:
    """A named parameter parsed out of a path template.

    Required:  ``/:photo``     (optional=False)
    Optional:  ``/:op?``       (optional=True)
    Format:    ``.:format?``   (optional=True, dotted=True)
    """

    name: str
    optional: bool = False
    dotted: bool = False


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created during app setup, compiled into the router at freeze time.
    """

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None

    @property
    def is_catch_all(self) -> bool:
        return ANY_METHOD in self.methods


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
