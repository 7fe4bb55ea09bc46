"""Tests for perch.routing.router: ordered template router."""

import pytest

from perch.errors import MethodNotAllowed, NotFound
from perch.routing.route import ANY_METHOD, Route
from perch.routing.router import Router


def _handler() -> str:
    return "ok"


def _other() -> str:
    return "other"


def _route(path: str, methods: frozenset[str] | None = None, handler=_handler) -> Route:
    return Route(path=path, handler=handler, methods=methods or frozenset({"GET"}))


class TestRouterStaticRoutes:
    def test_simple_path(self) -> None:
        r = Router()
        r.add(_route("/photos"))
        r.compile()

        match = r.match("GET", "/photos")
        assert match.route.path == "/photos"
        assert match.path_params == {}

    def test_trailing_slash_ignored(self) -> None:
        r = Router()
        r.add(_route("/photos"))
        r.compile()

        assert r.match("GET", "/photos/").route.path == "/photos"

    def test_lowercase_method_accepted(self) -> None:
        r = Router()
        r.add(_route("/photos"))
        r.compile()

        assert r.match("get", "/photos").route.path == "/photos"


class TestRouterOrdering:
    def test_first_match_wins(self) -> None:
        r = Router()
        r.add(_route("/photos/new.:format?", handler=_other))
        r.add(_route("/photos/:photo.:format?"))
        r.compile()

        assert r.match("GET", "/photos/new").route.handler is _other
        match = r.match("GET", "/photos/12")
        assert match.route.handler is _handler
        assert match.path_params == {"photo": "12"}

    def test_same_path_different_methods(self) -> None:
        r = Router()
        r.add(_route("/photos/:photo.:format?", frozenset({"GET"})))
        r.add(_route("/photos/:photo.:format?", frozenset({"PUT"}), handler=_other))
        r.compile()

        assert r.match("PUT", "/photos/1").route.handler is _other
        assert r.match("GET", "/photos/1").route.handler is _handler

    def test_routes_in_registration_order(self) -> None:
        r = Router()
        r.add(_route("/b"))
        r.add(_route("/a"))
        assert [route.path for route in r.routes] == ["/b", "/a"]


class TestRouterCatchAll:
    def test_specific_route_preferred(self) -> None:
        r = Router()
        r.add(_route("/photos/:photo?/:op?", frozenset({ANY_METHOD}), handler=_other))
        r.add(_route("/photos.:format?"))
        r.compile()

        assert r.match("GET", "/photos").route.handler is _handler

    def test_falls_back_to_catch_all(self) -> None:
        r = Router()
        r.add(_route("/photos/:photo?/:op?", frozenset({ANY_METHOD}), handler=_other))
        r.add(_route("/photos.:format?"))
        r.compile()

        match = r.match("PATCH", "/photos/3/rotate")
        assert match.route.handler is _other
        assert match.path_params == {"photo": "3", "op": "rotate"}

    def test_catch_all_beats_method_not_allowed(self) -> None:
        r = Router()
        r.add(_route("/photos/:photo?/:op?", frozenset({ANY_METHOD}), handler=_other))
        r.add(_route("/photos.:format?"))
        r.compile()

        assert r.match("DELETE", "/photos").route.handler is _other


class TestRouterErrors:
    def test_not_found(self) -> None:
        r = Router()
        r.add(_route("/photos"))
        r.compile()

        with pytest.raises(NotFound):
            r.match("GET", "/users")

    def test_method_not_allowed(self) -> None:
        r = Router()
        r.add(_route("/photos.:format?", frozenset({"GET"})))
        r.add(_route("/photos.:format?", frozenset({"POST"})))
        r.compile()

        with pytest.raises(MethodNotAllowed) as exc_info:
            r.match("DELETE", "/photos")
        assert exc_info.value.headers == (("Allow", "GET, POST"),)

    def test_head_served_by_get(self) -> None:
        r = Router()
        r.add(_route("/photos"))
        r.compile()

        assert r.match("HEAD", "/photos").route.path == "/photos"

    def test_add_after_compile_raises(self) -> None:
        r = Router()
        r.compile()

        with pytest.raises(RuntimeError, match="after compilation"):
            r.add(_route("/photos"))
