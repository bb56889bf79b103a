"""Build the resource tree from a deserialized API description.

:func:`build_resource_tree` walks the nested ``resources`` mapping of a
description and produces a flat mapping of absolute URI ->
:class:`~ramlobject.models.ResourceNode`. Each declared path is split into
segments; every segment becomes (or reuses) one node, so
``{"/users": {"/{userId}": {...}}}`` and ``{"/users/{userId}": {...}}``
produce the same nodes.

While walking, the builder:

* merges URI-parameter scopes (a node's absolute parameters are its
  parent's absolute parameters overridden by its own relative ones);
* expands ``{mediaTypeExtension}`` segments into literal alternatives
  (see :mod:`ramlobject.tree.media_type`);
* compiles every HTTP method, resolving its ``securedBy`` against the
  description's security schemes (see :mod:`ramlobject.tree.security`).

Resource types (``type``) and traits (``is``) are kept on the description
but are not applied to methods.

:func:`build_base_uri_parameters` computes the parameters of the
description's ``baseUri`` template, which live outside the tree.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ramlobject.models import MethodDefinition, RamlObjectOptions, ResourceNode
from ramlobject.tree.media_type import expand_media_type_extension
from ramlobject.tree.security import resolve_secured_by
from ramlobject.tree.segments import extract_parameters, split_path

logger = logging.getLogger(__name__)

ROOT = "/"

# Inheritance declarations, stored on the description but never applied.
_INHERITANCE_KEYS = frozenset({"type", "is"})

# Resource-level properties that are neither nested resources nor verbs.
_RESOURCE_PROPERTIES = frozenset(
    {"uriParameters", "baseUriParameters", "displayName", "description", "securedBy"}
)


def build_resource_tree(
    description: Mapping[str, Any],
    options: Optional[RamlObjectOptions] = None,
) -> dict[str, ResourceNode]:
    """Build the flat resource tree for *description*.

    Args:
        description: The deserialized API description. Only ``resources``,
            ``mediaType``, ``securitySchemes`` and ``securedBy`` are read.
        options: Construction options; ``split_uri`` controls how paths
            are segmented.

    Returns:
        Absolute URI -> node, in discovery order. The root node is always
        present under ``"/"``, even for an empty description.

    Example::

        nodes = build_resource_tree({"resources": {"/users": {"/{userId}": {"get": {}}}}})
        list(nodes)                          # ['/', '/users', '/users/{userId}']
        nodes["/users/{userId}"].parent      # '/users'
    """
    return _TreeBuilder(description, options or RamlObjectOptions()).build()


def build_base_uri_parameters(description: Mapping[str, Any]) -> dict[str, Any]:
    """Return the parameters of the description's ``baseUri`` template.

    Declared ``baseUriParameters`` are used where present. A ``version``
    parameter without an explicit ``default`` defaults to the description's
    ``version``.

    Example::

        >>> build_base_uri_parameters({"version": "1.0", "baseUri": "http://{version}.example.com"})
        {'version': {'type': 'string', 'default': '1.0'}}
    """
    params = extract_parameters(
        description.get("baseUri") or "", description.get("baseUriParameters")
    )

    if "version" in params:
        declared = params["version"]
        version_param: dict[str, Any] = {"type": "string"}
        if isinstance(declared, Mapping):
            version_param.update(declared)
        if version_param.get("default") is None and description.get("version") is not None:
            version_param["default"] = description["version"]
        params["version"] = version_param

    return params


class _TreeBuilder:
    """Single-use recursive walker that fills the node mapping."""

    def __init__(self, description: Mapping[str, Any], options: RamlObjectOptions) -> None:
        self._description = description
        self._split_uri = options.split_uri
        self._media_type = description.get("mediaType")
        self._security_schemes = description.get("securitySchemes") or {}
        self._secured_by = description.get("securedBy")
        self.nodes: dict[str, ResourceNode] = {ROOT: ResourceNode(absolute_uri=ROOT)}

    def build(self) -> dict[str, ResourceNode]:
        resources = self._description.get("resources")
        if isinstance(resources, Mapping):
            self._compile(ROOT, resources)
        logger.debug("Built resource tree with %d nodes", len(self.nodes))
        return self.nodes

    def _attach_resource(self, parent: str, path: str, definition: Any) -> None:
        self._extract(parent, split_path(path, self._split_uri), definition)

    def _extract(self, current: str, parts: list[str], definition: Any) -> None:
        """Descend through *parts* starting at *current*, then compile *definition*."""
        if not parts:
            self._compile(current, definition)
            return

        part = parts[0]

        if part != ROOT:
            node = self.nodes[current]

            if part in node.children:
                current = node.children[part]
            else:
                uri_parameters = _uri_parameters(definition)
                expansions = expand_media_type_extension(
                    part, uri_parameters, self._media_type
                )
                if expansions:
                    logger.debug("Expanded %s into %s", part, ", ".join(expansions))
                    for expanded in expansions:
                        self._extract(current, [expanded, *parts[1:]], definition)
                    return

                current = self._create_node(node, part, uri_parameters)

        if len(parts) > 1:
            self._extract(current, parts[1:], definition)
            return

        self._compile(current, definition)

    def _create_node(
        self,
        parent: ResourceNode,
        segment: str,
        uri_parameters: Optional[Mapping[str, Any]],
    ) -> str:
        prefix = "" if parent.absolute_uri == ROOT else parent.absolute_uri
        absolute_uri = prefix + segment

        if absolute_uri in self.nodes:
            return absolute_uri

        relative = extract_parameters(segment, uri_parameters)
        self.nodes[absolute_uri] = ResourceNode(
            absolute_uri=absolute_uri,
            relative_uri=segment,
            parent=parent.absolute_uri,
            relative_uri_parameters=relative,
            absolute_uri_parameters={**parent.absolute_uri_parameters, **relative},
        )
        parent.children[segment] = absolute_uri
        logger.debug("Created resource %s", absolute_uri)
        return absolute_uri

    def _compile(self, current: str, definition: Any) -> None:
        if not isinstance(definition, Mapping):
            return

        for key, value in definition.items():
            if not isinstance(key, str):
                continue
            if key.startswith("/"):
                self._attach_resource(current, key, value)
            elif key in _INHERITANCE_KEYS:
                logger.debug("Not applying %r on %s", key, current)
            elif key.startswith("("):
                continue  # annotation
            elif key not in _RESOURCE_PROPERTIES:
                self._attach_method(current, key, value)

    def _attach_method(self, current: str, verb: str, method: Any) -> None:
        fields = dict(method) if isinstance(method, Mapping) else {}
        secured_by = fields.get("securedBy") or self._secured_by

        fields.update(
            verb=verb,
            resource=current,
            securedBy=resolve_secured_by(secured_by, self._security_schemes),
        )
        self.nodes[current].methods[verb] = MethodDefinition.model_validate(fields)


def _uri_parameters(definition: Any) -> Optional[Mapping[str, Any]]:
    if isinstance(definition, Mapping):
        params = definition.get("uriParameters")
        if isinstance(params, Mapping):
            return params
    return None
