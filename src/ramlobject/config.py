"""Construction options resolved from defaults, environment, and explicit overrides.

:class:`~ramlobject.models.RamlObjectOptions` is normally built directly and
passed to :class:`~ramlobject.interface.RamlObject`. :func:`resolve_options`
is a convenience for callers (including the CLI) that want environment
variables to take part.

Precedence (highest first):

1. Explicit keyword overrides passed to :func:`resolve_options`.
2. Environment variables (``RAMLOBJECT_TIMEOUT``, ``RAMLOBJECT_VERIFY_SSL``,
   ``RAMLOBJECT_MAX_RETRIES``).
3. Model defaults.
"""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from ramlobject.exceptions import InvalidUsageError
from ramlobject.models import RamlObjectOptions, RequestConfig

ENV_PREFIX = "RAMLOBJECT_"

_ENV_REQUEST_FIELDS = {
    "TIMEOUT": "timeout",
    "VERIFY_SSL": "verify_ssl",
    "MAX_RETRIES": "max_retries",
}


def _env_request_settings(environ: Mapping[str, str]) -> dict[str, str]:
    """Collect request settings from ``RAMLOBJECT_*`` environment variables."""
    settings: dict[str, str] = {}
    for suffix, field_name in _ENV_REQUEST_FIELDS.items():
        value = environ.get(ENV_PREFIX + suffix)
        if value is not None and value != "":
            settings[field_name] = value
    return settings


def resolve_options(
    environ: Optional[Mapping[str, str]] = None,
    split_uri: Optional[str] = None,
    **request_overrides: Any,
) -> RamlObjectOptions:
    """Build :class:`~ramlobject.models.RamlObjectOptions` from all sources.

    Args:
        environ: Environment mapping; defaults to :data:`os.environ`.
        split_uri: Optional path-splitting expression override.
        **request_overrides: :class:`~ramlobject.models.RequestConfig` fields
            (``timeout``, ``verify_ssl``, ``max_retries``,
            ``follow_redirects``). ``None`` values are ignored.

    Returns:
        The resolved options.

    Raises:
        InvalidUsageError: If a value cannot be converted to the field's type.

    Example::

        options = resolve_options(timeout=5)
    """
    settings: dict[str, Any] = _env_request_settings(
        os.environ if environ is None else environ
    )
    settings.update({k: v for k, v in request_overrides.items() if v is not None})

    try:
        request = RequestConfig.model_validate(settings)
    except ValidationError as exc:
        raise InvalidUsageError(f"Invalid request configuration: {exc}") from exc

    if split_uri is None:
        return RamlObjectOptions(request=request)
    return RamlObjectOptions(split_uri=split_uri, request=request)
