"""Shared fixtures for perch tests."""

from typing import Any

import pytest


class RecordingHost:
    """A host router that records every registration call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Any]] = []

    def get(self, path: str, handler: Any) -> None:
        self.calls.append(("get", path, handler))

    def post(self, path: str, handler: Any) -> None:
        self.calls.append(("post", path, handler))

    def put(self, path: str, handler: Any) -> None:
        self.calls.append(("put", path, handler))

    def delete(self, path: str, handler: Any) -> None:
        self.calls.append(("delete", path, handler))

    def all(self, path: str, handler: Any) -> None:
        self.calls.append(("all", path, handler))


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()


def _handler() -> str:
    return "ok"


@pytest.fixture
def full_controller() -> dict[str, Any]:
    """A controller defining every action, listed in reverse order."""
    return {
        "destroy": _handler,
        "update": _handler,
        "edit": _handler,
        "show": _handler,
        "create": _handler,
        "new": _handler,
        "index": _handler,
        "all": _handler,
    }
