"""
Tests for path and query normalization.
"""

import pytest

from fabricator.utils.request_helper import parse_fields, resolve_resource_name


@pytest.mark.parametrize(
    "path",
    ["/api/users", "/api/users/42", "/api/blog/posts", "/weather", "", "/api", "/"],
)
def test_trailing_slash_does_not_change_resource(path):
    assert resolve_resource_name(path) == resolve_resource_name(path + "/")


def test_prefix_is_stripped():
    assert resolve_resource_name("/api/users/42") == "users/42"


def test_path_without_prefix_keeps_everything_after_the_slash():
    assert resolve_resource_name("/weather/today") == "weather/today"


@pytest.mark.parametrize("path", ["", "/", "/api", "/api/", "/api//"])
def test_empty_resource_falls_back_to_default(path):
    assert resolve_resource_name(path) == "default"


def test_custom_prefix():
    assert resolve_resource_name("/v2/things/", prefix="/v2/") == "things"


def test_fields_are_trimmed_in_order():
    assert parse_fields("a, b ,c") == ["a", "b", "c"]


def test_fields_keep_duplicates():
    assert parse_fields("name,age,name") == ["name", "age", "name"]


def test_blank_field_entries_are_dropped():
    assert parse_fields("name,, ,age") == ["name", "age"]


@pytest.mark.parametrize("raw", [None, "", " , "])
def test_missing_fields(raw):
    assert parse_fields(raw) is None
