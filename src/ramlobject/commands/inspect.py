"""Inspect commands -- examine an API description's resource tree.

Provides the ``ramlobject inspect`` sub-command group with read-only
commands for viewing resources, general API info, and security schemes.
"""

from __future__ import annotations

import json

import typer

from ramlobject.commands import load_api
from ramlobject.output import get_output


inspect_app = typer.Typer(no_args_is_help=True)


@inspect_app.command("resources")
def inspect_resources(
    source: str = typer.Argument(..., help="Description file, URL, or '-' for stdin."),
) -> None:
    """List every resource with its methods and URI parameters.

    Example::

        ramlobject inspect resources api.json
    """
    api = load_api(source)

    rows: list[list[str]] = []
    for path in api.get_resources():
        methods = api.get_resource_methods(path) or []
        params = api.get_resource_parameters(path) or {}
        rows.append([
            path,
            api.get_resource_name(path) or "-",
            ", ".join(m.upper() for m in methods) or "-",
            ", ".join(params) or "-",
        ])

    get_output().print_table(
        ["Path", "Name", "Methods", "Parameters"],
        rows,
        title=f"{api.get_title() or 'API'} -- Resources ({len(rows)})",
    )


@inspect_app.command("info")
def inspect_info(
    source: str = typer.Argument(..., help="Description file, URL, or '-' for stdin."),
) -> None:
    """Show title, version, base URI and other top-level properties.

    Example::

        ramlobject inspect info api.yaml
    """
    api = load_api(source)

    get_output().format_response({
        "title": api.get_title(),
        "version": api.get_version(),
        "baseUri": api.get_base_uri(),
        "mediaType": api.get_media_type(),
        "protocols": api.get_protocols(),
        "baseUriParameters": api.get_base_uri_parameters(),
        "securedBy": list(api.get_secured_by()),
        "resourceTypes": list(api.get_resource_types()),
        "traits": list(api.get_traits()),
    })


@inspect_app.command("security")
def inspect_security(
    source: str = typer.Argument(..., help="Description file, URL, or '-' for stdin."),
) -> None:
    """List security schemes and whether an OAuth 2.0 client is available.

    Example::

        ramlobject inspect security api.json
    """
    api = load_api(source)

    rows: list[list[str]] = []
    for name, scheme in api.get_security_schemes().items():
        scheme_type = scheme.get("type", "-") if isinstance(scheme, dict) else "-"
        settings = scheme.get("settings") if isinstance(scheme, dict) else None
        rows.append([
            name,
            str(scheme_type),
            "Yes" if api.get_security_authentication(name) else "",
            json.dumps(settings, sort_keys=True) if settings else "-",
        ])

    get_output().print_table(
        ["Scheme", "Type", "OAuth2 Client", "Settings"],
        rows,
        title=f"Security Schemes ({len(rows)})",
    )
