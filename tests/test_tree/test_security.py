"""Tests for ramlobject.tree.security."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from ramlobject.tree.security import ANONYMOUS, resolve_secured_by


@pytest.fixture
def schemes() -> dict[str, Any]:
    return {
        "oauth_2_0": {
            "type": "OAuth 2.0",
            "settings": {"accessTokenUri": "https://a/token", "scopes": ["read"]},
            "describedBy": {"headers": {"Authorization": None}},
        },
        "basic": {"type": "Basic Authentication"},
    }


class TestResolveSecuredBy:
    def test_null_and_name(self, schemes: dict[str, Any]) -> None:
        resolved = resolve_secured_by([None, "oauth_2_0"], schemes)
        assert list(resolved) == [ANONYMOUS, "oauth_2_0"]
        assert resolved["null"] is None
        assert resolved["oauth_2_0"] == schemes["oauth_2_0"]

    def test_named_scheme_is_a_copy(self, schemes: dict[str, Any]) -> None:
        resolved = resolve_secured_by(["oauth_2_0"], schemes)
        assert resolved["oauth_2_0"] is not schemes["oauth_2_0"]

        schemes["oauth_2_0"]["settings"]["scopes"].append("write")
        assert resolved["oauth_2_0"]["settings"]["scopes"] == ["read"]

    def test_settings_overrides_are_merged(self, schemes: dict[str, Any]) -> None:
        resolved = resolve_secured_by([{"oauth_2_0": {"scopes": ["admin"]}}], schemes)
        scheme = resolved["oauth_2_0"]
        assert scheme["type"] == "OAuth 2.0"
        assert scheme["settings"] == {
            "accessTokenUri": "https://a/token",
            "scopes": ["admin"],
        }

    def test_overrides_never_mutate_registry(self, schemes: dict[str, Any]) -> None:
        original = copy.deepcopy(schemes)
        resolve_secured_by([{"oauth_2_0": {"scopes": ["admin"]}}], schemes)
        assert schemes == original

    def test_overrides_on_scheme_without_settings(self, schemes: dict[str, Any]) -> None:
        resolved = resolve_secured_by([{"basic": {"realm": "x"}}], schemes)
        assert resolved["basic"] == {"type": "Basic Authentication", "settings": {"realm": "x"}}

    def test_unknown_name_resolves_to_none(self, schemes: dict[str, Any]) -> None:
        assert resolve_secured_by(["missing"], schemes) == {"missing": None}

    def test_unknown_parameterised_name_holds_only_settings(self) -> None:
        assert resolve_secured_by([{"missing": {"a": 1}}], {}) == {
            "missing": {"settings": {"a": 1}}
        }

    @pytest.mark.parametrize("secured_by", [None, []])
    def test_absent_declaration(self, secured_by: Any, schemes: dict[str, Any]) -> None:
        assert resolve_secured_by(secured_by, schemes) == {}

    def test_missing_registry(self) -> None:
        assert resolve_secured_by(["x"], None) == {"x": None}
