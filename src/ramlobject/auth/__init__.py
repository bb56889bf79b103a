"""Authentication objects for the security schemes of an API description.

Exports:
    :func:`create_security_authentication` -- build one client per
        ``OAuth 2.0`` scheme.
    :class:`~ramlobject.auth.oauth2.OAuth2Client` -- client for one scheme.
    :class:`~ramlobject.auth.oauth2.OAuth2Token` -- an issued token that can
        sign requests.
    :class:`~ramlobject.auth.oauth2.OAuth2Settings` -- parsed scheme settings.

Typical usage::

    from ramlobject.auth import create_security_authentication

    clients = create_security_authentication(description["securitySchemes"])
    token = clients["oauth_2_0"].credentials_grant()
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from ramlobject.auth.oauth2 import OAuth2Client, OAuth2Settings, OAuth2Token

logger = logging.getLogger(__name__)

OAUTH2_SCHEME_TYPE = "OAuth 2.0"


def create_security_authentication(
    security_schemes: Optional[Mapping[str, Any]],
) -> dict[str, OAuth2Client]:
    """Create an :class:`OAuth2Client` for every ``OAuth 2.0`` scheme.

    Schemes of any other type are skipped, as are OAuth 2.0 schemes whose
    settings cannot be read (logged at WARNING).

    Args:
        security_schemes: The description's ``securitySchemes`` registry.

    Returns:
        Scheme name -> client.
    """
    authentication: dict[str, OAuth2Client] = {}

    for name, scheme in (security_schemes or {}).items():
        if not isinstance(scheme, Mapping) or scheme.get("type") != OAUTH2_SCHEME_TYPE:
            continue

        settings = scheme.get("settings")
        try:
            authentication[name] = OAuth2Client(
                settings if isinstance(settings, Mapping) else None
            )
        except ValidationError as exc:
            logger.warning("Skipping OAuth 2.0 client for scheme %s: %s", name, exc)

    return authentication


__all__ = [
    "OAUTH2_SCHEME_TYPE",
    "OAuth2Client",
    "OAuth2Settings",
    "OAuth2Token",
    "create_security_authentication",
]
