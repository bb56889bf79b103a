"""Queryable object model over a deserialized API description.

:class:`RamlObject` is the package's main entry point. It is constructed
once from a plain nested ``dict`` (for example the JSON output of a RAML
parser, or a document loaded with :func:`~ramlobject.loader.load_description`)
and eagerly builds the resource tree. After construction it is read-only:
every getter is a pure lookup and is safe to call from any thread or task.

Lookups on unknown paths, verbs, or scheme names return ``None`` rather than
raising.
"""

from __future__ import annotations

import copy
from typing import Any, Mapping, Optional

from ramlobject.auth import OAuth2Client, create_security_authentication
from ramlobject.client import HttpxTransport, Transport
from ramlobject.models import MethodDefinition, PreparedRequest, RamlObjectOptions, ResourceNode
from ramlobject.tree import (
    build_base_uri_parameters,
    build_resource_tree,
    fill_template,
    resolve_secured_by,
    to_resource_name,
)


class RamlObject:
    """Object model over an API description.

    Args:
        description: The deserialized description. All fields are optional;
            ``{}`` yields a tree holding only the root resource ``"/"``.
        options: Construction options. Defaults to
            :class:`~ramlobject.models.RamlObjectOptions` defaults.
        transport: Dispatches requests built by :meth:`request`. Defaults to
            an :class:`~ramlobject.client.HttpxTransport` configured from
            ``options.request``.

    Example::

        api = RamlObject({
            "baseUri": "https://api.example.com",
            "resources": {"/users": {"/{userId}": {"get": {}}}},
        })
        api.get_resources()                    # ['/', '/users', '/users/{userId}']
        api.get_resource_parent("/users/{userId}")   # '/users'
    """

    def __init__(
        self,
        description: Optional[Mapping[str, Any]] = None,
        options: Optional[RamlObjectOptions] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        description = description or {}
        self._options = options or RamlObjectOptions()
        self._transport = transport or HttpxTransport(self._options.request)

        self._title: Optional[str] = description.get("title")
        self._version: Optional[str] = description.get("version")
        self._base_uri: str = (description.get("baseUri") or "").removesuffix("/")
        self._media_type: Optional[str] = description.get("mediaType")
        self._protocols: Optional[list[str]] = description.get("protocols")
        self._security_schemes: dict[str, Any] = copy.deepcopy(
            dict(description.get("securitySchemes") or {})
        )
        self._security_authentication = create_security_authentication(
            self._security_schemes
        )
        self._secured_by = resolve_secured_by(
            description.get("securedBy"), self._security_schemes
        )
        self._documentation: list[Any] = list(description.get("documentation") or [])
        self._resource_types: dict[str, Any] = dict(description.get("resourceTypes") or {})
        self._traits: dict[str, Any] = dict(description.get("traits") or {})
        self._resources = build_resource_tree(description, self._options)
        self._base_uri_parameters = build_base_uri_parameters(description)

    # ------------------------------------------------------------------ #
    # Description properties
    # ------------------------------------------------------------------ #

    def get_title(self) -> Optional[str]:
        return self._title

    def get_version(self) -> Optional[str]:
        return self._version

    def get_base_uri(self) -> str:
        """Return the base URI template without its trailing slash."""
        return self._base_uri

    def get_media_type(self) -> Optional[str]:
        return self._media_type

    def get_protocols(self) -> Optional[list[str]]:
        return self._protocols

    def get_secured_by(self) -> dict[str, Optional[dict[str, Any]]]:
        """Return the resolved description-wide ``securedBy`` default."""
        return self._secured_by

    def get_documentation(self) -> list[Any]:
        return self._documentation

    def get_base_uri_parameters(self) -> dict[str, Any]:
        return self._base_uri_parameters

    def get_traits(self) -> dict[str, Any]:
        return self._traits

    def get_resource_types(self) -> dict[str, Any]:
        return self._resource_types

    def get_security_schemes(self) -> dict[str, Any]:
        return self._security_schemes

    def get_security_authentication(self, name: str) -> Optional[OAuth2Client]:
        """Return the OAuth 2.0 client for scheme *name*, if it is one."""
        return self._security_authentication.get(name)

    # ------------------------------------------------------------------ #
    # Resources
    # ------------------------------------------------------------------ #

    def get_resources(self) -> list[str]:
        """Return every absolute resource path in discovery order, root first."""
        return list(self._resources)

    def get_resource(self, path: str) -> Optional[ResourceNode]:
        return self._resources.get(path)

    def get_resource_children(self, path: str) -> list[str]:
        """Return the absolute paths of *path*'s direct children (``[]`` if unknown)."""
        resource = self._resources.get(path)
        return list(resource.children.values()) if resource else []

    def get_resource_parent(self, path: str) -> Optional[str]:
        """Return the parent's absolute path; ``None`` for the root or unknown paths."""
        resource = self._resources.get(path)
        return resource.parent if resource else None

    def get_relative_uri(self, path: str) -> Optional[str]:
        resource = self._resources.get(path)
        return resource.relative_uri if resource else None

    def get_resource_methods(self, path: str) -> Optional[list[str]]:
        resource = self._resources.get(path)
        return list(resource.methods) if resource else None

    def get_resource_name(self, path: str) -> Optional[str]:
        """Return a display name derived from the last segment of *path*.

        ``/users`` -> ``users``; ``/users/{userId}`` -> ``userId``.
        """
        resource = self._resources.get(path)
        return to_resource_name(resource.relative_uri) if resource else None

    def get_resource_parameters(self, path: str) -> Optional[dict[str, Any]]:
        """Return the merged URI parameters in scope at *path*."""
        resource = self._resources.get(path)
        return resource.absolute_uri_parameters if resource else None

    def get_relative_parameters(self, path: str) -> Optional[dict[str, Any]]:
        """Return the URI parameters declared by *path*'s own segment."""
        resource = self._resources.get(path)
        return resource.relative_uri_parameters if resource else None

    # ------------------------------------------------------------------ #
    # Methods
    # ------------------------------------------------------------------ #

    def _get_method(self, path: str, verb: Optional[str]) -> Optional[MethodDefinition]:
        resource = self._resources.get(path)
        if resource is None or verb is None:
            return None
        return resource.methods.get(verb)

    def get_method_headers(self, path: str, verb: Optional[str] = None) -> Any:
        method = self._get_method(path, verb)
        return method.headers if method else None

    def get_method_query_parameters(self, path: str, verb: Optional[str] = None) -> Any:
        method = self._get_method(path, verb)
        return method.query_parameters if method else None

    def get_method_body(self, path: str, verb: Optional[str] = None) -> Any:
        method = self._get_method(path, verb)
        return method.body if method else None

    def get_method_responses(self, path: str, verb: Optional[str] = None) -> Any:
        method = self._get_method(path, verb)
        return method.responses if method else None

    def get_method_secured_by(
        self, path: str, verb: Optional[str] = None
    ) -> Optional[dict[str, Optional[dict[str, Any]]]]:
        method = self._get_method(path, verb)
        return method.secured_by if method else None

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #

    def prepare_request(
        self,
        path: str,
        verb: str,
        *,
        headers: Optional[Mapping[str, Any]] = None,
        query_parameters: Optional[Mapping[str, Any]] = None,
        uri_parameters: Optional[Mapping[str, Any]] = None,
        base_uri_parameters: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        user: Any = None,
    ) -> PreparedRequest:
        """Build (and optionally sign) the request for *path* and *verb*.

        The URL is the filled base URI followed by the filled resource path.
        Each ``{name}`` token takes the caller's value, else the stored
        parameter ``default``, else ``""`` -- a missing value is never an
        error, so ``/users/{userId}`` without ``userId`` becomes ``/users/``.

        Args:
            path: Absolute resource path as returned by :meth:`get_resources`.
            verb: HTTP verb, passed through as the request method.
            headers: Request headers (copied).
            query_parameters: Query-string parameters (copied).
            uri_parameters: Values for the resource path's tokens.
            base_uri_parameters: Values for the base URI's tokens.
            body: Request body, passed through unchanged.
            user: Optional signer; its ``sign(request)`` is called when
                callable, e.g. an :class:`~ramlobject.auth.OAuth2Token`.

        Returns:
            The prepared request.
        """
        url = fill_template(
            self._base_uri, base_uri_parameters, self._base_uri_parameters
        ) + fill_template(path, uri_parameters, self.get_resource_parameters(path))

        request = PreparedRequest(
            url=url,
            method=verb,
            headers=dict(headers or {}),
            query=dict(query_parameters or {}),
            body=body,
        )

        sign = getattr(user, "sign", None)
        if callable(sign):
            sign(request)

        return request

    async def request(
        self,
        path: str,
        verb: str,
        *,
        headers: Optional[Mapping[str, Any]] = None,
        query_parameters: Optional[Mapping[str, Any]] = None,
        uri_parameters: Optional[Mapping[str, Any]] = None,
        base_uri_parameters: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        user: Any = None,
    ) -> Any:
        """Prepare a request and send it through the configured transport.

        Accepts the same arguments as :meth:`prepare_request`. The
        transport's result is returned unmodified; cancellation and timeouts
        are the transport's concern.
        """
        request = self.prepare_request(
            path,
            verb,
            headers=headers,
            query_parameters=query_parameters,
            uri_parameters=uri_parameters,
            base_uri_parameters=base_uri_parameters,
            body=body,
            user=user,
        )
        return await self._transport.send(request)
