"""Built-in ``ramlobject`` sub-commands.

Every command takes the description source (file path, URL or ``-``) as its
first argument and builds a :class:`~ramlobject.interface.RamlObject` from
it with :func:`load_api`.
"""

from __future__ import annotations

from typing import Any

import typer

from ramlobject.config import resolve_options
from ramlobject.exceptions import RamlObjectError
from ramlobject.interface import RamlObject
from ramlobject.loader import load_description
from ramlobject.output import debug, error


def load_api(source: str, **request_overrides: Any) -> RamlObject:
    """Load *source* and build a :class:`RamlObject`, exiting cleanly on failure.

    Args:
        source: File path, URL, or ``-`` for stdin.
        **request_overrides: Forwarded to :func:`~ramlobject.config.resolve_options`.

    Raises:
        typer.Exit: With the error's exit code when loading or configuration fails.
    """
    try:
        options = resolve_options(**request_overrides)
        debug(f"Loading description from {source}")
        description = load_description(source)
    except RamlObjectError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    return RamlObject(description, options=options)
