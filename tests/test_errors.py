"""Tests for perch.errors: exception hierarchy and error messages."""

from pathlib import Path

import pytest

from perch.errors import (
    ConfigurationError,
    ControllerLoadError,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    PerchError,
)


class TestHierarchy:
    def test_http_error_is_perch_error(self) -> None:
        assert issubclass(HTTPError, PerchError)

    def test_not_found_is_http_error(self) -> None:
        assert issubclass(NotFound, HTTPError)

    def test_method_not_allowed_is_http_error(self) -> None:
        assert issubclass(MethodNotAllowed, HTTPError)

    def test_configuration_error_is_perch_error(self) -> None:
        assert issubclass(ConfigurationError, PerchError)

    def test_controller_load_error_is_perch_error(self) -> None:
        assert issubclass(ControllerLoadError, PerchError)


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        err = HTTPError(status=400, detail="Bad request body")
        assert str(err) == "400: Bad request body"

    def test_str_without_detail(self) -> None:
        err = HTTPError(status=500)
        assert str(err) == "500"

    def test_frozen(self) -> None:
        err = HTTPError(status=400)
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]


class TestNotFound:
    def test_defaults(self) -> None:
        err = NotFound()
        assert err.status == 404
        assert err.detail == "Not Found"


class TestMethodNotAllowed:
    def test_allow_header_sorted(self) -> None:
        err = MethodNotAllowed(frozenset({"PUT", "GET", "DELETE"}))
        assert err.status == 405
        assert err.headers == (("Allow", "DELETE, GET, PUT"),)
        assert "DELETE, GET, PUT" in err.detail

    def test_custom_detail(self) -> None:
        err = MethodNotAllowed(frozenset({"GET"}), detail="nope")
        assert err.detail == "nope"


class TestControllerLoadError:
    def test_message_includes_path_and_reason(self) -> None:
        err = ControllerLoadError("controllers/photos_controller.py", "SyntaxError: bad")
        assert err.path == Path("controllers/photos_controller.py")
        assert "photos_controller.py" in str(err)
        assert "SyntaxError: bad" in str(err)

    def test_message_without_reason(self) -> None:
        err = ControllerLoadError("x.py")
        assert str(err) == "Failed to load controller 'x.py'"
