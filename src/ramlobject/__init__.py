"""ramlobject -- a queryable object model over deserialized RAML API descriptions.

The package takes an API description that has already been parsed into
plain dicts and lists, builds a tree of resources from it, and answers
questions about that tree: which paths exist, how they nest, which URI
parameters are in scope, which methods each resource supports, and which
security schemes protect them. It can also build and send requests against
the described API.

Typical usage::

    from ramlobject import RamlObject

    api = RamlObject(description)
    api.get_resources()
    await api.request("/users/{userId}", "get", uri_parameters={"userId": 42})

Modules:
    interface: :class:`RamlObject`, the query surface and request builder.
    tree: Resource tree construction.
    models: Pydantic models shared across the package.
    client: Request transports.
    auth: OAuth 2.0 clients for security schemes.
    loader: JSON/YAML description loading.
    config: Option resolution from environment and overrides.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer CLI.
"""

__version__ = "0.1.0"

from ramlobject.interface import RamlObject  # noqa: E402
from ramlobject.models import PreparedRequest, RamlObjectOptions, RequestConfig  # noqa: E402

__all__ = ["RamlObject", "RamlObjectOptions", "RequestConfig", "PreparedRequest", "__version__"]
