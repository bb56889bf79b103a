"""Tests for ramlobject.tree.segments."""

from __future__ import annotations

import pytest

from ramlobject.tree.segments import (
    extract_parameters,
    fill_template,
    param_name,
    split_path,
    to_resource_name,
)


# ---------------------------------------------------------------------------
# split_path
# ---------------------------------------------------------------------------


class TestSplitPath:
    def test_splits_before_each_slash(self) -> None:
        assert split_path("/users/{id}") == ["/users", "/{id}"]

    def test_segments_rejoin_to_original(self) -> None:
        path = "/a/b{c}/d.json"
        assert "".join(split_path(path)) == path

    def test_bare_slash_is_single_segment(self) -> None:
        assert split_path("/") == ["/"]

    def test_empty_path_has_no_segments(self) -> None:
        assert split_path("") == []

    def test_consecutive_slashes_keep_every_segment(self) -> None:
        assert split_path("//x") == ["/", "/x"]

    def test_custom_pattern(self) -> None:
        assert split_path("/a.b", r"(?=[/.])") == ["/a", ".b"]


# ---------------------------------------------------------------------------
# extract_parameters
# ---------------------------------------------------------------------------


class TestExtractParameters:
    def test_defaults_to_string_type(self) -> None:
        assert extract_parameters("/{userId}") == {"userId": {"type": "string"}}

    def test_uses_declared_definition_verbatim(self) -> None:
        declared = {"userId": {"type": "integer", "minimum": 1}}
        params = extract_parameters("/{userId}", declared)
        assert params["userId"] is declared["userId"]

    def test_none_declaration_falls_back_to_string(self) -> None:
        assert extract_parameters("/{id}", {"id": None}) == {"id": {"type": "string"}}

    def test_declarations_for_absent_tokens_are_ignored(self) -> None:
        assert extract_parameters("/static", {"id": {"type": "integer"}}) == {}

    def test_order_of_first_appearance_and_duplicates_collapsed(self) -> None:
        params = extract_parameters("/{b}-{a}-{b}")
        assert list(params) == ["b", "a"]

    def test_nested_braces_are_not_tokens(self) -> None:
        assert list(extract_parameters("/{{x}}")) == ["x"]

    def test_base_uri_template(self) -> None:
        params = extract_parameters("http://{host}.example.com/{version}")
        assert list(params) == ["host", "version"]


# ---------------------------------------------------------------------------
# fill_template
# ---------------------------------------------------------------------------


class TestFillTemplate:
    def test_caller_value_wins(self) -> None:
        defs = {"id": {"type": "string", "default": "d"}}
        assert fill_template("/users/{id}", {"id": "42"}, defs) == "/users/42"

    def test_default_used_when_value_missing(self) -> None:
        defs = {"id": {"type": "string", "default": "d"}}
        assert fill_template("/users/{id}", {}, defs) == "/users/d"

    def test_none_value_treated_as_missing(self) -> None:
        defs = {"id": {"default": "d"}}
        assert fill_template("/users/{id}", {"id": None}, defs) == "/users/d"

    def test_unresolved_parameter_becomes_empty_string(self) -> None:
        assert fill_template("/users/{id}") == "/users/"

    def test_non_string_values_are_stringified(self) -> None:
        assert fill_template("/page/{n}", {"n": 3}) == "/page/3"

    def test_falsy_default_is_used(self) -> None:
        assert fill_template("/{n}", None, {"n": {"default": 0}}) == "/0"


# ---------------------------------------------------------------------------
# Resource names
# ---------------------------------------------------------------------------


class TestResourceName:
    @pytest.mark.parametrize(
        ("relative_uri", "expected"),
        [
            ("/users", "users"),
            ("/{userId}", "userId"),
            ("/file{id}", "file"),
            (".json", "json"),
            ("", ""),
        ],
    )
    def test_to_resource_name(self, relative_uri: str, expected: str) -> None:
        assert to_resource_name(relative_uri) == expected

    def test_param_name(self) -> None:
        assert param_name("{userId}") == "userId"
