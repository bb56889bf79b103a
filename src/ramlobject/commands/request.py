"""The ``ramlobject request`` command -- build and send one API call.

Parameters are given as repeatable ``name=value`` options (``name:value``
for headers). With ``--dry-run`` the fully resolved request is printed
instead of being sent.
"""

from __future__ import annotations

import asyncio
import json
import re
from typing import Any, Optional

import typer

from ramlobject.auth import OAuth2Client
from ramlobject.commands import load_api
from ramlobject.exceptions import InvalidUsageError, RamlObjectError
from ramlobject.models import PreparedRequest
from ramlobject.output import error, get_output, info, warning

_SENSITIVE_KEYS = re.compile(r"(authorization|token|secret|api[_-]?key|password)", re.IGNORECASE)


def request_command(
    source: str = typer.Argument(..., help="Description file, URL, or '-' for stdin."),
    path: str = typer.Argument(..., help="Resource path, e.g. /users/{userId}."),
    verb: str = typer.Argument("get", help="HTTP method declared on the resource."),
    uri_param: list[str] = typer.Option(
        [], "--uri-param", "-u", help="URI parameter as name=value (repeatable)."
    ),
    base_param: list[str] = typer.Option(
        [], "--base-param", "-b", help="Base URI parameter as name=value (repeatable)."
    ),
    header: list[str] = typer.Option(
        [], "--header", "-H", help="Header as name:value (repeatable)."
    ),
    query: list[str] = typer.Option(
        [], "--query", help="Query parameter as name=value (repeatable)."
    ),
    data: Optional[str] = typer.Option(
        None, "--data", "-d", help="Request body; parsed as JSON when possible."
    ),
    token: Optional[str] = typer.Option(
        None, "--token", help="Bearer access token used to sign the request."
    ),
    scheme: Optional[str] = typer.Option(
        None, "--scheme", help="OAuth 2.0 security scheme the token belongs to."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Request timeout in seconds."
    ),
    max_retries: Optional[int] = typer.Option(
        None, "--max-retries", help="Retries on 5xx and connection errors."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print the request instead of sending it."
    ),
) -> None:
    """Build a request for PATH and VERB and send it (or print it with --dry-run).

    Example::

        ramlobject request api.json /users/{userId} get -u userId=42 --dry-run
    """
    api = load_api(source, timeout=timeout, max_retries=max_retries)

    if path not in api.get_resources():
        warning(f"Resource {path} is not declared in the description")
    elif verb not in (api.get_resource_methods(path) or []):
        warning(f"Method {verb} is not declared on {path}")

    try:
        signer = _make_signer(api.get_security_authentication(scheme) if scheme else None, token)
        kwargs: dict[str, Any] = {
            "uri_parameters": _parse_pairs(uri_param, "="),
            "base_uri_parameters": _parse_pairs(base_param, "="),
            "headers": _parse_pairs(header, ":"),
            "query_parameters": _parse_pairs(query, "="),
            "body": _parse_body(data),
            "user": signer,
        }

        if dry_run:
            _print_request(api.prepare_request(path, verb, **kwargs))
            return

        response = asyncio.run(api.request(path, verb, **kwargs))
    except RamlObjectError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(f"HTTP {response.status_code} {response.reason_phrase or ''}")
    if response.content:
        try:
            get_output().format_response(response.json())
        except ValueError:
            get_output().format_response(response.text)


def _make_signer(client: Optional[OAuth2Client], token: Optional[str]) -> Any:
    if token is None:
        return None
    return (client or OAuth2Client()).create_token(token)


def _parse_pairs(items: list[str], separator: str) -> dict[str, str]:
    """Split ``name<sep>value`` strings into a dict.

    Raises:
        InvalidUsageError: If an item has no separator or an empty name.
    """
    pairs: dict[str, str] = {}
    for item in items:
        name, sep, value = item.partition(separator)
        name = name.strip()
        if not sep or not name:
            raise InvalidUsageError(f"Expected name{separator}value, got {item!r}")
        pairs[name] = value.strip() if separator == ":" else value
    return pairs


def _parse_body(body: Optional[str]) -> Any:  # noqa: ANN401
    """Parse *body* as JSON if possible, returning the raw string on failure."""
    if body is None:
        return None
    try:
        return json.loads(body)
    except (json.JSONDecodeError, TypeError):
        return body


def _redact(values: dict[str, Any]) -> dict[str, Any]:
    return {
        key: "***REDACTED***" if _SENSITIVE_KEYS.search(key) else value
        for key, value in values.items()
    }


def _print_request(request: PreparedRequest) -> None:
    get_output().format_response({
        "method": request.method.upper(),
        "url": request.url,
        "headers": _redact(request.headers),
        "query": request.query,
        "body": request.body,
    })
