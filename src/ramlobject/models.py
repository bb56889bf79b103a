"""Canonical data shapes shared across ramlobject modules.

The models fall into three groups:

**Configuration models** -- passed explicitly to
:class:`~ramlobject.interface.RamlObject` at construction time:
    :class:`RequestConfig` and :class:`RamlObjectOptions`.

**Resource tree models** -- produced by
:func:`~ramlobject.tree.builder.build_resource_tree` and read by the query
surface: :class:`ResourceNode` and :class:`MethodDefinition`.

**Request models** -- :class:`PreparedRequest`, the mutable description of
an outgoing call handed to signers and transports.

Parameter definitions and security schemes are deliberately *not* modelled:
they are opaque ``dict`` objects taken from the caller's description and
passed through untouched (only ``default``, ``enum`` and ``settings`` are
ever read).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Configuration ---


class RequestConfig(BaseModel):
    """Default HTTP settings used by :class:`~ramlobject.client.HttpxTransport`."""

    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    max_retries: int = Field(default=0, ge=0, description="Max retry attempts")
    follow_redirects: bool = Field(default=True, description="Follow 3xx redirects")


class RamlObjectOptions(BaseModel):
    """Construction-time options for :class:`~ramlobject.interface.RamlObject`.

    Replaces any process-wide default configuration: every instance receives
    its own value, and nothing mutates it after construction.

    Example::

        options = RamlObjectOptions(request=RequestConfig(timeout=5))
        api = RamlObject(description, options=options)
    """

    model_config = ConfigDict(frozen=True)

    split_uri: str = Field(
        default=r"(?=/)",
        description="Regular expression used to split resource paths into segments",
    )
    request: RequestConfig = Field(default_factory=RequestConfig)


# --- Resource tree ---


class MethodDefinition(BaseModel):
    """One HTTP method compiled onto a :class:`ResourceNode`.

    ``headers``, ``query_parameters``, ``body`` and ``responses`` are copied
    verbatim from the description. Any other method fields (``description``,
    ``is``, ...) are preserved and available through ``model_extra``.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    verb: str
    resource: str = Field(description="Absolute URI of the owning resource")
    headers: Any = None
    query_parameters: Any = Field(default=None, alias="queryParameters")
    body: Any = None
    responses: Any = None
    secured_by: dict[str, Optional[dict[str, Any]]] = Field(
        default_factory=dict, alias="securedBy"
    )


class ResourceNode(BaseModel):
    """A single resource in the tree, addressed by its absolute URI.

    Nodes are stored in a flat ``dict`` keyed by absolute URI (see
    :func:`~ramlobject.tree.builder.build_resource_tree`). ``parent`` and the
    values of ``children`` are keys into that mapping rather than nested
    node objects.
    """

    absolute_uri: str
    relative_uri: str = ""
    parent: Optional[str] = None
    children: dict[str, str] = Field(
        default_factory=dict, description="Relative segment -> child absolute URI"
    )
    methods: dict[str, MethodDefinition] = Field(default_factory=dict)
    relative_uri_parameters: dict[str, Any] = Field(default_factory=dict)
    absolute_uri_parameters: dict[str, Any] = Field(default_factory=dict)


# --- Requests ---


@dataclass
class PreparedRequest:
    """Mutable description of an outgoing API call.

    Built by :meth:`~ramlobject.interface.RamlObject.prepare_request`, then
    passed to an optional signer (which may add headers or query
    parameters in place) and finally to the transport.

    Attributes:
        url: Fully resolved absolute URL.
        method: HTTP verb as declared in the description (e.g. ``"get"``).
        headers: Request headers (mutable).
        query: Query-string parameters (mutable).
        body: Optional request body.
    """

    url: str
    method: str
    headers: dict[str, Any] = field(default_factory=dict)
    query: dict[str, Any] = field(default_factory=dict)
    body: Any = None
