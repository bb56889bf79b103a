"""OAuth 2.0 client built from a security scheme's ``settings``.

For every ``securitySchemes`` entry whose ``type`` is ``"OAuth 2.0"``,
:func:`~ramlobject.auth.create_security_authentication` builds an
:class:`OAuth2Client` from the scheme's settings. The client knows the
authorization and token endpoints declared in the description and can run
the non-interactive grants against them:

* Client Credentials (:rfc:`6749` section 4.4) -- :meth:`OAuth2Client.credentials_grant`
* Resource Owner Password (section 4.3) -- :meth:`OAuth2Client.owner_grant`
* Authorization Code exchange (section 4.1.3) -- :meth:`OAuth2Client.code_grant`

Each grant returns an :class:`OAuth2Token`, which can be passed as the
``user`` of :meth:`RamlObject.request <ramlobject.interface.RamlObject.request>`
to sign outgoing requests with an ``Authorization: Bearer`` header.
"""

from __future__ import annotations

import time
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ramlobject.exceptions import AuthError
from ramlobject.models import PreparedRequest

# Tokens this close to expiry are treated as expired.
EXPIRY_MARGIN_SECONDS = 30.0


class OAuth2Settings(BaseModel):
    """The ``settings`` block of an ``OAuth 2.0`` security scheme.

    Field aliases follow the description's camelCase names; unknown
    settings are kept in ``model_extra``.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    client_id: Optional[str] = Field(default=None, alias="clientId")
    client_secret: Optional[str] = Field(default=None, alias="clientSecret")
    access_token_uri: Optional[str] = Field(default=None, alias="accessTokenUri")
    authorization_uri: Optional[str] = Field(default=None, alias="authorizationUri")
    redirect_uri: Optional[str] = Field(default=None, alias="redirectUri")
    authorization_grants: list[str] = Field(
        default_factory=list, alias="authorizationGrants"
    )
    scopes: list[str] = Field(default_factory=list)

    @field_validator(
        "client_id", "client_secret", "access_token_uri", "authorization_uri", "redirect_uri",
        mode="before",
    )
    @classmethod
    def scalar_to_str(cls, value: Any) -> Any:
        # YAML reads `clientId: 12345` as an int.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("authorization_grants", "scopes", mode="before")
    @classmethod
    def to_str_list(cls, value: Any) -> Any:
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            value = [value]
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        return value


class OAuth2Token:
    """An access token issued by an :class:`OAuth2Client`.

    Args:
        client: The client that issued the token (used by :meth:`refresh`).
        access_token: The bearer credential.
        token_type: Token type reported by the server; only ``bearer`` can
            sign requests.
        refresh_token: Optional refresh token.
        expires_in: Lifetime in seconds, or ``None`` when unknown.
        data: The raw token response.
    """

    def __init__(
        self,
        client: OAuth2Client,
        access_token: str,
        token_type: str = "bearer",
        refresh_token: Optional[str] = None,
        expires_in: Optional[float] = None,
        data: Optional[dict[str, Any]] = None,
    ) -> None:
        self.client = client
        self.access_token = access_token
        self.token_type = token_type
        self.refresh_token = refresh_token
        self.expires_at = time.time() + float(expires_in) if expires_in is not None else None
        self.data = data or {}

    def is_expired(self) -> bool:
        """Return ``True`` once the token is within 30 seconds of expiry."""
        if self.expires_at is None:
            return False
        return time.time() >= self.expires_at - EXPIRY_MARGIN_SECONDS

    def sign(self, request: PreparedRequest) -> PreparedRequest:
        """Add an ``Authorization`` header to *request* in place.

        Raises:
            AuthError: If the token type is not ``bearer``.
        """
        if self.token_type.lower() != "bearer":
            raise AuthError(f"Unsupported token type: {self.token_type}")
        request.headers["Authorization"] = f"Bearer {self.access_token}"
        return request

    def refresh(self) -> OAuth2Token:
        """Exchange the refresh token for a new :class:`OAuth2Token`.

        Raises:
            AuthError: If no refresh token is available or the request fails.
        """
        if not self.refresh_token:
            raise AuthError("No refresh token available")
        return self.client.request_token(
            {"grant_type": "refresh_token", "refresh_token": self.refresh_token}
        )


class OAuth2Client:
    """OAuth 2.0 client for one security scheme.

    Args:
        settings: The scheme's ``settings`` mapping (camelCase keys) or an
            :class:`OAuth2Settings` instance.

    Example::

        client = OAuth2Client({
            "clientId": "abc",
            "clientSecret": "xyz",
            "accessTokenUri": "https://auth.example.com/token",
        })
        token = client.credentials_grant()
        await api.request("/users", "get", user=token)
    """

    def __init__(self, settings: Any = None) -> None:
        if isinstance(settings, OAuth2Settings):
            self.settings = settings
        else:
            # Null settings are treated as absent.
            declared = {k: v for k, v in (settings or {}).items() if v is not None}
            self.settings = OAuth2Settings.model_validate(declared)

    def create_token(
        self,
        access_token: str,
        refresh_token: Optional[str] = None,
        token_type: str = "bearer",
        expires_in: Optional[float] = None,
    ) -> OAuth2Token:
        """Wrap an existing access token (e.g. one obtained out of band)."""
        return OAuth2Token(
            self,
            access_token,
            token_type=token_type,
            refresh_token=refresh_token,
            expires_in=expires_in,
        )

    def get_authorization_uri(
        self,
        state: Optional[str] = None,
        response_type: str = "code",
    ) -> str:
        """Build the URI a user visits to authorise this client.

        Args:
            state: Opaque value echoed back to the redirect URI.
            response_type: ``"code"`` or ``"token"`` (implicit grant).

        Raises:
            AuthError: If the scheme declares no ``authorizationUri``.
        """
        if not self.settings.authorization_uri:
            raise AuthError("authorizationUri is required to build an authorization URI")

        params: dict[str, str] = {"response_type": response_type}
        if self.settings.client_id:
            params["client_id"] = self.settings.client_id
        if self.settings.redirect_uri:
            params["redirect_uri"] = self.settings.redirect_uri
        if self.settings.scopes:
            params["scope"] = " ".join(self.settings.scopes)
        if state is not None:
            params["state"] = state

        return str(httpx.URL(self.settings.authorization_uri).copy_merge_params(params))

    def credentials_grant(self, scopes: Optional[list[str]] = None) -> OAuth2Token:
        """Run the Client Credentials grant."""
        return self.request_token(self._with_scope({"grant_type": "client_credentials"}, scopes))

    def owner_grant(
        self,
        username: str,
        password: str,
        scopes: Optional[list[str]] = None,
    ) -> OAuth2Token:
        """Run the Resource Owner Password Credentials grant."""
        data = {"grant_type": "password", "username": username, "password": password}
        return self.request_token(self._with_scope(data, scopes))

    def code_grant(self, code: str) -> OAuth2Token:
        """Exchange an authorization code for a token."""
        data = {"grant_type": "authorization_code", "code": code}
        if self.settings.redirect_uri:
            data["redirect_uri"] = self.settings.redirect_uri
        return self.request_token(data)

    def request_token(self, data: dict[str, str]) -> OAuth2Token:
        """POST *data* to the token endpoint and wrap the response.

        ``client_id`` and ``client_secret`` are added to the form body when
        configured.

        Raises:
            AuthError: If ``accessTokenUri`` is missing, the HTTP request
                fails, or ``access_token`` is absent from the response.
        """
        if not self.settings.access_token_uri:
            raise AuthError("accessTokenUri is required to request a token")

        form = dict(data)
        if self.settings.client_id:
            form["client_id"] = self.settings.client_id
        if self.settings.client_secret:
            form["client_secret"] = self.settings.client_secret

        try:
            response = httpx.post(
                self.settings.access_token_uri,
                data=form,
                headers={"Accept": "application/json"},
                timeout=30.0,
            )
            response.raise_for_status()
            token_data: dict[str, Any] = response.json()
        except httpx.HTTPStatusError as exc:
            raise AuthError(
                f"Token request failed with status {exc.response.status_code}: "
                f"{exc.response.text}"
            ) from exc
        except httpx.HTTPError as exc:
            raise AuthError(f"Token request failed: {exc}") from exc

        if "access_token" not in token_data:
            raise AuthError("Token response missing 'access_token' field")

        return OAuth2Token(
            self,
            token_data["access_token"],
            token_type=token_data.get("token_type") or "bearer",
            refresh_token=token_data.get("refresh_token"),
            expires_in=token_data.get("expires_in"),
            data=token_data,
        )

    def _with_scope(self, data: dict[str, str], scopes: Optional[list[str]]) -> dict[str, str]:
        scopes = scopes if scopes is not None else self.settings.scopes
        if scopes:
            data["scope"] = " ".join(scopes)
        return data
