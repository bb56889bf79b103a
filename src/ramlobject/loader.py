"""Read an already-deserialized API description from a URL, local file, or stdin.

:class:`~ramlobject.interface.RamlObject` consumes a plain nested mapping.
This module produces one from JSON or YAML text, for example the JSON dump
of a RAML parser. RAML-specific syntax (``!include`` tags, resource-type
parameters and so on) is not interpreted.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional

import httpx
import yaml

from ramlobject.exceptions import DescriptionLoadError

# File suffix or content-type fragment -> document format.
_FORMAT_HINTS = {".json": "json", ".yaml": "yaml", ".yml": "yaml", "json": "json", "yaml": "yaml"}


def load_description(source: str) -> dict[str, Any]:
    """Load a description from *source*.

    Args:
        source: An ``http(s)://`` URL, a file path, or ``-`` for stdin.

    Returns:
        The description mapping.

    Raises:
        DescriptionLoadError: If the source cannot be read, cannot be
            parsed as JSON or YAML, or does not hold a mapping.
    """
    if source == "-":
        text, fmt = sys.stdin.read(), None
        if not text.strip():
            raise DescriptionLoadError("No input received from stdin")
    elif source.startswith(("http://", "https://")):
        text, fmt = _fetch(source)
    else:
        text, fmt = _read(Path(source))

    return _decode(text, fmt)


def _fetch(url: str) -> tuple[str, Optional[str]]:
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise DescriptionLoadError(
            f"HTTP {exc.response.status_code} fetching description from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise DescriptionLoadError(f"Failed to fetch description from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    fmt = next((v for k, v in _FORMAT_HINTS.items() if k.isalpha() and k in content_type), None)
    return response.text, fmt


def _read(path: Path) -> tuple[str, Optional[str]]:
    if not path.is_file():
        raise DescriptionLoadError(f"Description file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DescriptionLoadError(f"Failed to read description file {path}: {exc}") from exc
    if not text.strip():
        raise DescriptionLoadError(f"Description file is empty: {path}")
    return text, _FORMAT_HINTS.get(path.suffix.lower())


def _decode(text: str, fmt: Optional[str] = None) -> dict[str, Any]:
    """Decode *text* as JSON or YAML and check that it is a mapping.

    JSON is tried first unless *fmt* is ``"yaml"``; a ``"json"`` *fmt* is
    strict, otherwise YAML is the fallback.
    """
    if fmt == "json":
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DescriptionLoadError(f"Invalid JSON: {exc}") from exc
    elif fmt == "yaml":
        document = _load_yaml(text)
    else:
        try:
            document = json.loads(text)
        except json.JSONDecodeError:
            document = _load_yaml(text)

    if not isinstance(document, dict):
        kind = "empty document" if document is None else type(document).__name__
        raise DescriptionLoadError(f"Description must be a JSON/YAML object (got {kind})")
    return document


def _load_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DescriptionLoadError(f"Failed to parse description as JSON or YAML: {exc}") from exc
