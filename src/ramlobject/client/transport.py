"""Pluggable request dispatch for :meth:`RamlObject.request <ramlobject.interface.RamlObject.request>`.

:class:`~ramlobject.interface.RamlObject` never talks to the network itself.
It builds a :class:`~ramlobject.models.PreparedRequest` and hands it to a
:class:`Transport` supplied at construction time. Anything with an
``async send(request)`` method qualifies; the result is returned to the
caller unmodified.

:class:`HttpxTransport` is the default implementation. It wraps
:class:`httpx.AsyncClient` and retries 5xx responses and connection errors
with exponential backoff. HTTP error statuses are *not* turned into
exceptions -- the :class:`httpx.Response` is returned as-is.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from ramlobject.exceptions import ConnectionError_
from ramlobject.models import PreparedRequest, RequestConfig

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Anything that can dispatch a :class:`~ramlobject.models.PreparedRequest`."""

    async def send(self, request: PreparedRequest) -> Any:
        ...


@runtime_checkable
class Signer(Protocol):
    """Anything that can authenticate a request in place (e.g. an OAuth 2.0 token)."""

    def sign(self, request: PreparedRequest) -> Any:
        ...


class HttpxTransport:
    """Send prepared requests with :class:`httpx.AsyncClient`.

    Args:
        config: Timeout, SSL, redirect and retry settings.
        client: Optional long-lived client to reuse. When ``None``, a
            client is opened and closed around every call.

    Example::

        transport = HttpxTransport(RequestConfig(timeout=5, max_retries=2))
        api = RamlObject(description, transport=transport)
        response = await api.request("/users", "get")
    """

    def __init__(
        self,
        config: Optional[RequestConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config or RequestConfig()
        self._client = client

    async def send(self, request: PreparedRequest) -> httpx.Response:
        """Dispatch *request* and return the :class:`httpx.Response`.

        Raises:
            ConnectionError_: On network / timeout errors after all retries.
        """
        if self._client is not None:
            return await self._execute_with_retry(self._client, request)

        async with httpx.AsyncClient(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=self._config.follow_redirects,
        ) as client:
            return await self._execute_with_retry(client, request)

    async def _execute_with_retry(
        self,
        client: httpx.AsyncClient,
        request: PreparedRequest,
    ) -> httpx.Response:
        """Execute the HTTP request with exponential-backoff retry.

        Retries on 5xx status codes and connection / timeout errors up to
        ``max_retries`` times. The delay doubles each attempt: 1 s, 2 s, 4 s, ...
        """
        max_retries = self._config.max_retries
        method = request.method.upper()

        for attempt in range(max_retries + 1):
            try:
                response = await client.request(**_request_kwargs(method, request))
            except (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError) as exc:
                if attempt < max_retries:
                    delay = 2 ** attempt
                    logger.debug(
                        "Connection error: %s, retrying in %ss (attempt %d/%d)",
                        exc, delay, attempt + 1, max_retries,
                    )
                    await asyncio.sleep(delay)
                    continue
                raise ConnectionError_(
                    f"Connection failed after {max_retries + 1} attempts: {exc}"
                ) from exc

            if response.status_code >= 500 and attempt < max_retries:
                delay = 2 ** attempt
                logger.debug(
                    "Server error %d, retrying in %ss (attempt %d/%d)",
                    response.status_code, delay, attempt + 1, max_retries,
                )
                await asyncio.sleep(delay)
                continue

            return response

        raise ConnectionError_("Request failed after all retries")  # pragma: no cover


def _request_kwargs(method: str, request: PreparedRequest) -> dict[str, Any]:
    """Map a prepared request onto :meth:`httpx.AsyncClient.request` arguments."""
    kwargs: dict[str, Any] = {
        "method": method,
        "url": request.url,
        "headers": {key: str(value) for key, value in request.headers.items()},
        "params": request.query,
    }
    body = request.body
    if isinstance(body, (dict, list)):
        kwargs["json"] = body
    elif isinstance(body, (str, bytes)):
        kwargs["content"] = body
    elif body is not None:
        kwargs["content"] = str(body)
    return kwargs
