"""Host router protocol.

A host router is any object with verb-specific registration methods::

    host.get(path, handler)
    host.post(path, handler)
    host.put(path, handler)
    host.delete(path, handler)
    host.all(path, handler)     # catch-all, every method

No base class required. The resource layer checks the shape, not the
lineage. :class:`perch.app.App` satisfies it.
"""

from collections.abc import Callable
from typing import Any, Protocol, TypeAlias, runtime_checkable

from perch.routing.route import ANY_METHOD

# Anything a route can dispatch to
Handler: TypeAlias = Callable[..., Any]


@runtime_checkable
class HostRouter(Protocol):
    """Protocol for the router a resource registers its routes with."""

    def get(self, path: str, handler: Handler) -> Any: ...

    def post(self, path: str, handler: Handler) -> Any: ...

    def put(self, path: str, handler: Handler) -> Any: ...

    def delete(self, path: str, handler: Handler) -> Any: ...

    def all(self, path: str, handler: Handler) -> Any: ...


# HTTP verb -> name of the registration method on a HostRouter
HOST_METHODS: dict[str, str] = {
    ANY_METHOD: "all",
    "GET": "get",
    "POST": "post",
    "PUT": "put",
    "DELETE": "delete",
}
