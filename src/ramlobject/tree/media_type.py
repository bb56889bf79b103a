"""Expansion of the ``{mediaTypeExtension}`` placeholder.

A segment ending in ``{mediaTypeExtension}`` stands for a family of literal
resources, one per supported file extension. The extensions come from the
resource's own ``uriParameters.mediaTypeExtension.enum`` when declared, or
else from the description's default ``mediaType``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

MEDIA_TYPE_EXTENSION = "{mediaTypeExtension}"

MEDIA_TYPE_TO_EXT: dict[str, str] = {
    "application/json": "json",
    "text/xml": "xml",
}


def has_media_type_extension(segment: str) -> bool:
    """Return ``True`` when *segment* ends with the placeholder token."""
    return segment.endswith(MEDIA_TYPE_EXTENSION)


def media_type_extensions(
    uri_parameters: Optional[Mapping[str, Any]],
    media_type: Optional[str],
) -> list[str]:
    """Return the extensions (without leading dot) a placeholder expands to.

    Args:
        uri_parameters: The resource's declared ``uriParameters``.
        media_type: The description's default ``mediaType``.

    Returns:
        Distinct extensions in declaration order. An empty list means the
        placeholder must be left as an ordinary template parameter.
    """
    declared = (uri_parameters or {}).get("mediaTypeExtension")
    enum = declared.get("enum") if isinstance(declared, Mapping) else None

    if isinstance(enum, (list, tuple)) and enum:
        extensions: list[str] = []
        for value in enum:
            extension = str(value)
            if extension.startswith("."):
                extension = extension[1:]
            if extension not in extensions:
                extensions.append(extension)
        return extensions

    if isinstance(media_type, str) and media_type in MEDIA_TYPE_TO_EXT:
        return [MEDIA_TYPE_TO_EXT[media_type]]

    return []


def expand_media_type_extension(
    segment: str,
    uri_parameters: Optional[Mapping[str, Any]] = None,
    media_type: Optional[str] = None,
) -> list[str]:
    """Expand a ``...{mediaTypeExtension}`` segment into literal segments.

    Args:
        segment: A single path segment, e.g. ``/api{mediaTypeExtension}``.
        uri_parameters: The resource's declared ``uriParameters``.
        media_type: The description's default ``mediaType``.

    Returns:
        One segment per extension (``/api.json``, ``/api.xml``). Returns an
        empty list when *segment* has no placeholder or no extension can be
        determined.

    Example::

        >>> expand_media_type_extension("/api{mediaTypeExtension}", None, "application/json")
        ['/api.json']
    """
    if not has_media_type_extension(segment):
        return []

    stem = segment[: -len(MEDIA_TYPE_EXTENSION)]
    return [
        f"{stem}.{extension}"
        for extension in media_type_extensions(uri_parameters, media_type)
    ]
