"""Tests for ramlobject.tree.builder."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from ramlobject.models import RamlObjectOptions, ResourceNode
from ramlobject.tree.builder import ROOT, build_base_uri_parameters, build_resource_tree


def _build(resources: dict[str, Any], **description: Any) -> dict[str, ResourceNode]:
    return build_resource_tree({"resources": resources, **description})


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class TestRoot:
    @pytest.mark.parametrize("description", [{}, {"resources": {}}, {"title": "x"}])
    def test_root_always_present(self, description: dict[str, Any]) -> None:
        nodes = build_resource_tree(description)
        assert list(nodes) == [ROOT]

    def test_root_has_empty_parameter_maps(self) -> None:
        root = build_resource_tree({})[ROOT]
        assert root.parent is None
        assert root.relative_uri == ""
        assert root.relative_uri_parameters == {}
        assert root.absolute_uri_parameters == {}

    def test_methods_on_bare_slash_attach_to_root(self) -> None:
        nodes = _build({"/": {"get": {}}})
        assert list(nodes) == [ROOT]
        assert list(nodes[ROOT].methods) == ["get"]


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------


class TestTreeStructure:
    def test_end_to_end_nested_declaration(self) -> None:
        nodes = _build({"/users": {"/{userId}": {"get": {}}}})

        assert list(nodes) == ["/", "/users", "/users/{userId}"]
        assert nodes["/users/{userId}"].parent == "/users"
        assert list(nodes["/users/{userId}"].methods) == ["get"]

    def test_first_level_parent_is_root(self) -> None:
        nodes = _build({"/users": {}})
        assert nodes["/users"].parent == ROOT
        assert nodes[ROOT].children == {"/users": "/users"}

    def test_multi_segment_declaration_creates_intermediate_nodes(self) -> None:
        nodes = _build({"/a/b/c": {"get": {}}})
        assert list(nodes) == ["/", "/a", "/a/b", "/a/b/c"]
        assert nodes["/a"].methods == {}
        assert nodes["/a/b"].relative_uri == "/b"

    def test_same_path_from_two_declarations_is_not_duplicated(self) -> None:
        nodes = _build({
            "/users": {"get": {}, "/{id}": {"get": {}}},
            "/users/{id}": {"delete": {}},
        })
        assert list(nodes) == ["/", "/users", "/users/{id}"]
        assert list(nodes["/users/{id}"].methods) == ["get", "delete"]
        assert nodes["/users"].children == {"/{id}": "/users/{id}"}

    def test_parent_child_bijection(self) -> None:
        nodes = _build({
            "/a": {"/b": {"/c": {}}, "/d": {}},
            "/e/f": {},
        })
        for path, node in nodes.items():
            for child in node.children.values():
                assert nodes[child].parent == path
            if node.parent is not None:
                assert path in nodes[node.parent].children.values()

    def test_children_keyed_by_segment(self) -> None:
        nodes = _build({"/users": {"/{id}": {}, "/me": {}}})
        assert nodes["/users"].children == {"/{id}": "/users/{id}", "/me": "/users/me"}

    def test_null_resource_definition(self) -> None:
        nodes = _build({"/users": None})
        assert list(nodes) == ["/", "/users"]
        assert nodes["/users"].methods == {}

    def test_custom_split_pattern(self) -> None:
        nodes = build_resource_tree(
            {"resources": {"/a.json": {}}}, RamlObjectOptions(split_uri=r"(?=[/.])")
        )
        assert list(nodes) == ["/", "/a", "/a.json"]


# ---------------------------------------------------------------------------
# URI parameters
# ---------------------------------------------------------------------------


class TestUriParameters:
    def test_relative_parameter_defaults_to_string(self) -> None:
        nodes = _build({"/users": {"/{userId}": {}}})
        assert nodes["/users/{userId}"].relative_uri_parameters == {
            "userId": {"type": "string"}
        }

    def test_declared_uri_parameters_are_used(self) -> None:
        nodes = _build({
            "/users/{userId}": {"uriParameters": {"userId": {"type": "integer"}}},
        })
        assert nodes["/users/{userId}"].relative_uri_parameters == {
            "userId": {"type": "integer"}
        }

    def test_absolute_parameters_accumulate(self) -> None:
        nodes = _build({"/{org}": {"/repos": {"/{repo}": {}}}})
        assert list(nodes["/{org}/repos/{repo}"].absolute_uri_parameters) == ["org", "repo"]
        assert nodes["/{org}/repos"].relative_uri_parameters == {}
        assert list(nodes["/{org}/repos"].absolute_uri_parameters) == ["org"]

    def test_child_definition_overrides_ancestor(self) -> None:
        nodes = _build({
            "/{id}": {
                "uriParameters": {"id": {"type": "string"}},
                "/x/{id}": {"uriParameters": {"id": {"type": "integer"}}},
            },
        })
        assert nodes["/{id}/x/{id}"].absolute_uri_parameters == {"id": {"type": "integer"}}
        assert nodes["/{id}"].absolute_uri_parameters == {"id": {"type": "string"}}

    def test_absolute_parameter_monotonicity(self) -> None:
        nodes = _build({"/{a}": {"/{b}": {"/c": {"/{a}": {}}}}})
        for node in nodes.values():
            if node.parent is None:
                continue
            parent = nodes[node.parent]
            for name in parent.absolute_uri_parameters:
                assert name in node.absolute_uri_parameters
                if name not in node.relative_uri_parameters:
                    assert (
                        node.absolute_uri_parameters[name]
                        == parent.absolute_uri_parameters[name]
                    )

    def test_uri_parameters_key_is_not_a_method(self) -> None:
        nodes = _build({"/{id}": {"uriParameters": {"id": {}}, "get": {}}})
        assert list(nodes["/{id}"].methods) == ["get"]


# ---------------------------------------------------------------------------
# Media type extension
# ---------------------------------------------------------------------------


class TestMediaTypeExtension:
    def test_expands_with_media_type(self) -> None:
        nodes = _build(
            {"/api{mediaTypeExtension}": {"get": None}}, mediaType="application/json"
        )
        assert list(nodes) == ["/", "/api.json"]
        assert "/api{mediaTypeExtension}" not in nodes

    def test_expands_with_enum(self) -> None:
        nodes = _build({
            "/api{mediaTypeExtension}": {
                "uriParameters": {"mediaTypeExtension": {"enum": [".json", ".xml"]}},
                "get": None,
            },
        })
        assert list(nodes) == ["/", "/api.json", "/api.xml"]
        assert list(nodes["/api.json"].methods) == ["get"]
        assert list(nodes["/api.xml"].methods) == ["get"]

    def test_remaining_segments_follow_each_expansion(self) -> None:
        nodes = _build({
            "/api{mediaTypeExtension}/items": {
                "uriParameters": {"mediaTypeExtension": {"enum": ["json", "xml"]}},
                "get": {},
            },
        })
        assert list(nodes) == ["/", "/api.json", "/api.json/items", "/api.xml", "/api.xml/items"]

    def test_nested_resources_follow_each_expansion(self) -> None:
        nodes = _build(
            {"/api{mediaTypeExtension}": {"/{id}": {"get": {}}}}, mediaType="text/xml"
        )
        assert list(nodes) == ["/", "/api.xml", "/api.xml/{id}"]

    def test_no_expansion_keeps_placeholder_as_parameter(self) -> None:
        nodes = _build({"/api{mediaTypeExtension}": {"get": {}}})
        node = nodes["/api{mediaTypeExtension}"]
        assert node.relative_uri_parameters == {"mediaTypeExtension": {"type": "string"}}


# ---------------------------------------------------------------------------
# Methods
# ---------------------------------------------------------------------------


class TestMethods:
    def test_method_fields_are_passed_through(self) -> None:
        body = {"application/json": {"schema": "..."}}
        nodes = _build({
            "/users": {
                "post": {
                    "description": "Create",
                    "headers": {"X-Trace": {"type": "string"}},
                    "queryParameters": {"dry": {"type": "boolean"}},
                    "body": body,
                    "responses": {"201": {}},
                },
            },
        })
        method = nodes["/users"].methods["post"]
        assert method.verb == "post"
        assert method.resource == "/users"
        assert method.headers == {"X-Trace": {"type": "string"}}
        assert method.query_parameters == {"dry": {"type": "boolean"}}
        assert method.body == body
        assert method.responses == {"201": {}}
        assert method.model_extra == {"description": "Create"}

    def test_null_method_definition(self) -> None:
        method = _build({"/a": {"get": None}})["/a"].methods["get"]
        assert method.headers is None
        assert method.query_parameters is None
        assert method.secured_by == {}

    def test_method_secured_by_overrides_default(self) -> None:
        nodes = build_resource_tree({
            "securitySchemes": {"a": {"type": "A"}, "b": {"type": "B"}},
            "securedBy": ["a"],
            "resources": {"/x": {"get": {}, "post": {"securedBy": [None, "b"]}}},
        })
        methods = nodes["/x"].methods
        assert methods["get"].secured_by == {"a": {"type": "A"}}
        assert methods["post"].secured_by == {"null": None, "b": {"type": "B"}}

    def test_annotations_are_not_methods(self) -> None:
        nodes = _build({"/a": {"(deprecated)": True, "get": {}}})
        assert list(nodes["/a"].methods) == ["get"]

    def test_type_and_traits_are_not_applied(self, caplog: pytest.LogCaptureFixture) -> None:
        description = {
            "traits": {"paged": {"queryParameters": {"limit": {}}}},
            "resourceTypes": {"collection": {"post": {}}},
            "resources": {
                "/users": {"type": "collection", "is": ["paged"], "get": {}},
            },
        }
        with caplog.at_level(logging.DEBUG, logger="ramlobject.tree.builder"):
            nodes = build_resource_tree(description)

        users = nodes["/users"]
        assert list(users.methods) == ["get"]
        assert users.methods["get"].query_parameters is None
        assert "Not applying 'type' on /users" in caplog.text


# ---------------------------------------------------------------------------
# Base URI parameters
# ---------------------------------------------------------------------------


class TestBaseUriParameters:
    def test_version_defaults_to_description_version(self) -> None:
        params = build_base_uri_parameters(
            {"version": "1.0", "baseUri": "http://{version}.example.com"}
        )
        assert params["version"] == {"type": "string", "default": "1.0"}

    def test_explicit_default_is_kept(self) -> None:
        params = build_base_uri_parameters({
            "version": "1.0",
            "baseUri": "http://{version}.example.com",
            "baseUriParameters": {"version": {"type": "string", "default": "beta"}},
        })
        assert params["version"]["default"] == "beta"

    def test_declared_version_definition_gets_default(self) -> None:
        declared = {"version": {"enum": ["v1", "v2"]}}
        params = build_base_uri_parameters({
            "version": "v1",
            "baseUri": "https://{version}.example.com",
            "baseUriParameters": declared,
        })
        assert params["version"] == {"type": "string", "enum": ["v1", "v2"], "default": "v1"}
        assert declared == {"version": {"enum": ["v1", "v2"]}}

    def test_other_parameters_default_to_string(self) -> None:
        params = build_base_uri_parameters({"baseUri": "https://{host}/api"})
        assert params == {"host": {"type": "string"}}

    def test_no_base_uri(self) -> None:
        assert build_base_uri_parameters({}) == {}
