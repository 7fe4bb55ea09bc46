"""Tests for perch.resources.naming: singular forms and file names."""

from pathlib import Path

from perch.resources.naming import resource_name_from_filename, singularize


class TestSingularize:
    def test_regular_plural(self) -> None:
        assert singularize("photos") == "photo"
        assert singularize("users") == "user"

    def test_ies_plural(self) -> None:
        assert singularize("categories") == "category"

    def test_already_singular(self) -> None:
        assert singularize("session") == "session"

    def test_empty(self) -> None:
        assert singularize("") == ""


class TestResourceNameFromFilename:
    def test_leading_run_before_underscore(self) -> None:
        assert resource_name_from_filename("photos_controller.py") == "photos"

    def test_only_first_underscore_counts(self) -> None:
        assert resource_name_from_filename("users_admin_controller.py") == "users"

    def test_no_underscore(self) -> None:
        assert resource_name_from_filename("users.py") == "users"

    def test_leading_underscore(self) -> None:
        assert resource_name_from_filename("_helpers.py") == ""

    def test_path_object(self) -> None:
        assert resource_name_from_filename(Path("controllers/photos_controller.py")) == "photos"
