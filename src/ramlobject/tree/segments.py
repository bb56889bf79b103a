"""Path segmentation and ``{name}`` URI-template handling.

Resource paths are split with a look-ahead on ``/`` so that every segment
keeps its leading slash (``/users/{id}`` -> ``["/users", "/{id}"]``) and the
original path is the plain concatenation of its segments.

Template tokens are non-nested ``{...}`` substrings. The same token
pattern is used for extraction (building parameter maps), for filling
(building request URLs) and for deriving human-readable resource names.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

TEMPLATE_REGEXP = re.compile(r"\{[^{}]+\}")
"""Matches a single, non-nested URI-template token such as ``{userId}``."""

DEFAULT_SPLIT_URI = r"(?=/)"

_SINGLE_PARAMETER = re.compile(r"^\{[^{}]+\}$")
_TRAILING_PARAMETER = re.compile(r"\{.+\}$")


def split_path(path: str, pattern: str = DEFAULT_SPLIT_URI) -> list[str]:
    """Split a resource path into segments that each start with ``/``.

    Args:
        path: A resource path such as ``/users/{userId}``.
        pattern: Split expression; the default splits immediately before
            every ``/``.

    Returns:
        The ordered, non-empty segments. ``"/"`` yields ``["/"]`` and the
        empty string yields ``[]``.
    """
    return [part for part in re.split(pattern, path) if part]


def param_name(token: str) -> str:
    """Strip the braces from a ``{name}`` token."""
    return token[1:-1]


def extract_parameters(
    segment: str,
    declared: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Build the parameter map for every ``{name}`` token in *segment*.

    Declared definitions are used verbatim; tokens without one (or with a
    ``None`` one) default to ``{"type": "string"}``.

    Args:
        segment: A path segment or full URI template.
        declared: Parameter definitions keyed by name, typically the
            resource's ``uriParameters`` or the description's
            ``baseUriParameters``.

    Returns:
        Parameter name -> definition, in order of first appearance.

    Example::

        >>> extract_parameters("/{userId}")
        {'userId': {'type': 'string'}}
    """
    declared = declared or {}
    params: dict[str, Any] = {}

    for token in TEMPLATE_REGEXP.findall(segment):
        name = param_name(token)
        if name in params:
            continue
        if declared.get(name) is not None:
            params[name] = declared[name]
        else:
            params[name] = {"type": "string"}

    return params


def fill_template(
    template: str,
    values: Optional[Mapping[str, Any]] = None,
    definitions: Optional[Mapping[str, Any]] = None,
) -> str:
    """Replace every ``{name}`` token in *template*.

    Each token resolves, in order, to the caller-supplied value, the
    definition's ``default``, or the empty string.

    .. warning::
       An unresolved token silently becomes ``""``; no error is raised for a
       missing required parameter. ``fill_template("/users/{id}")`` returns
       ``"/users/"``.

    Args:
        template: A URI template (base URI or resource path).
        values: Caller-supplied parameter values. ``None`` values are
            treated as absent.
        definitions: Stored parameter definitions used for defaults.

    Returns:
        The filled string.
    """
    values = values or {}
    definitions = definitions or {}

    def _replace(match: re.Match[str]) -> str:
        name = param_name(match.group(0))

        if values.get(name) is not None:
            return str(values[name])

        definition = definitions.get(name)
        if isinstance(definition, Mapping) and definition.get("default") is not None:
            return str(definition["default"])

        return ""

    return TEMPLATE_REGEXP.sub(_replace, template)


def to_resource_name(relative_uri: str) -> str:
    """Derive a display name from a resource's relative URI.

    ``/users`` -> ``users``, ``/{userId}`` -> ``userId``,
    ``/file{id}`` -> ``file``, ``.json`` -> ``json``.
    """
    name = relative_uri[1:] if relative_uri[:1] in (".", "/") else relative_uri

    if _SINGLE_PARAMETER.match(name):
        return param_name(name)

    return _TRAILING_PARAMETER.sub("", name)
