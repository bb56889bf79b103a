"""Normalise ``securedBy`` declarations against the security scheme registry.

A ``securedBy`` declaration is a list whose entries are each one of:

* ``None`` -- anonymous access is an accepted option.
* ``"name"`` -- the named scheme applies as declared.
* ``{"name": {...}}`` -- the named scheme applies with its ``settings``
  overridden by the given mapping.

:func:`resolve_secured_by` turns such a list into a mapping keyed by scheme
name. The reserved key ``"null"`` stands for the anonymous option. Resolved
values are always copies, so later changes to the caller's registry are
never reflected in an already-built resource tree (and vice versa).
"""

from __future__ import annotations

import copy
from typing import Any, Mapping, Optional, Sequence

ANONYMOUS = "null"
"""Key used for the anonymous / no-authentication option."""


def resolve_secured_by(
    secured_by: Optional[Sequence[Any]],
    security_schemes: Optional[Mapping[str, Any]] = None,
) -> dict[str, Optional[dict[str, Any]]]:
    """Resolve a ``securedBy`` list into scheme name -> scheme definition.

    Unknown scheme names are not an error: a plain name resolves to
    ``None`` and a parameterised one to a scheme holding only the
    overriding ``settings``.

    Args:
        secured_by: The declaration, or ``None`` when absent.
        security_schemes: The description's ``securitySchemes`` registry.

    Returns:
        A new mapping in declaration order. Empty when *secured_by* is
        empty or ``None``.

    Example::

        >>> resolve_secured_by([None, "oauth_2_0"], {"oauth_2_0": {"type": "OAuth 2.0"}})
        {'null': None, 'oauth_2_0': {'type': 'OAuth 2.0'}}
    """
    schemes = security_schemes or {}
    resolved: dict[str, Optional[dict[str, Any]]] = {}

    if not secured_by:
        return resolved

    for entry in secured_by:
        if entry is None:
            resolved[ANONYMOUS] = None
        elif isinstance(entry, str):
            scheme = schemes.get(entry)
            resolved[entry] = copy.deepcopy(scheme) if scheme is not None else None
        elif isinstance(entry, Mapping):
            for name, overrides in entry.items():
                resolved[name] = _with_settings(schemes.get(name), overrides)

    return resolved


def _with_settings(scheme: Any, overrides: Any) -> dict[str, Any]:
    """Shallow-copy *scheme* with its ``settings`` merged with *overrides*."""
    base = dict(scheme) if isinstance(scheme, Mapping) else {}
    settings = base.get("settings")

    merged = dict(settings) if isinstance(settings, Mapping) else {}
    if isinstance(overrides, Mapping):
        merged.update(overrides)

    base["settings"] = merged
    return base
