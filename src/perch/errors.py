"""Perch exception hierarchy.

Shared across the router, the app and the resource layer so every module
raises and catches the same types.
"""

from dataclasses import dataclass
from pathlib import Path


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when a resource or route declaration is invalid.

    Surfaces at registration time, before the app serves anything.
    """


class ControllerLoadError(PerchError):
    """A controller module could not be loaded.

    Always raised ``from`` the original import error. Discovery stops at
    the first failure, so no partial resource set is registered.
    """

    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = Path(path)
        message = f"Failed to load controller {str(self.path)!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """An error that maps directly to an HTTP status code.

    Raised by the router when a request cannot be matched.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
