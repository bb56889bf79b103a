"""Typer application and CLI entry point for ramlobject.

The ``ramlobject`` command loads a deserialized API description (JSON or
YAML) and lets you inspect the resource tree or build and send a request
against it::

    ramlobject inspect resources api.json
    ramlobject request api.json /users/{userId} get -u userId=42 --dry-run

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any

import typer

from ramlobject import __version__
from ramlobject.commands.inspect import inspect_app
from ramlobject.commands.request import request_command
from ramlobject.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="ramlobject",
    help="Inspect and call APIs described by a deserialized RAML document.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(inspect_app, name="inspect", help="Inspect the resource tree.")
app.command("request")(request_command)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"ramlobject {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~ramlobject.output.OutputManager` from the
    CLI flags and, with ``--verbose``, routes library debug logging to stderr.
    """
    from ramlobject.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    )

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
            stream=sys.stderr,
        )


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``ramlobject`` console script.

    :class:`~ramlobject.exceptions.RamlObjectError` instances cause a clean
    exit with the error's ``exit_code``; anything else exits with
    :data:`~ramlobject.exit_codes.EXIT_GENERIC_FAILURE`.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from ramlobject.exceptions import RamlObjectError
        from ramlobject.output import error

        if isinstance(exc, RamlObjectError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
