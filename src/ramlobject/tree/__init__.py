"""Resource tree construction -- the core of ramlobject.

This sub-package turns the ``resources`` section of a deserialized API
description into a flat, path-addressable tree of
:class:`~ramlobject.models.ResourceNode` objects.

Typical usage::

    from ramlobject.tree import build_resource_tree

    nodes = build_resource_tree(description)
    nodes["/users/{userId}"].methods["get"].secured_by

Sub-modules:

* :mod:`~ramlobject.tree.segments` -- path splitting, ``{name}`` parameter
  extraction, template filling and resource names.
* :mod:`~ramlobject.tree.media_type` -- ``{mediaTypeExtension}`` expansion.
* :mod:`~ramlobject.tree.security` -- ``securedBy`` resolution.
* :mod:`~ramlobject.tree.builder` -- the recursive tree walk.
"""

from ramlobject.tree.builder import ROOT, build_base_uri_parameters, build_resource_tree
from ramlobject.tree.media_type import expand_media_type_extension
from ramlobject.tree.security import resolve_secured_by
from ramlobject.tree.segments import (
    extract_parameters,
    fill_template,
    split_path,
    to_resource_name,
)

__all__ = [
    "ROOT",
    "build_base_uri_parameters",
    "build_resource_tree",
    "expand_media_type_extension",
    "extract_parameters",
    "fill_template",
    "resolve_secured_by",
    "split_path",
    "to_resource_name",
]
