"""Exception hierarchy for ramlobject.

The resource tree itself never raises: unknown paths, verbs and scheme
names are reported as ``None``. Exceptions only come from the collaborators
around it (loading a description, talking to a token endpoint, sending a
request) and from invalid configuration.

All exceptions inherit from :class:`RamlObjectError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`ramlobject.exit_codes`.
The CLI entry point in :func:`ramlobject.app.main` catches ``RamlObjectError``
and exits with the appropriate code.

Subclass hierarchy::

    RamlObjectError (exit 1)
    +-- InvalidUsageError     (exit 2)
    +-- AuthError             (exit 3)
    +-- ConnectionError_      (exit 6)
    +-- DescriptionLoadError  (exit 7)
"""

from ramlobject.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_LOAD_ERROR,
)


class RamlObjectError(Exception):
    """Base exception for all ramlobject errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(RamlObjectError):
    """Raised for invalid CLI arguments or unusable configuration values."""

    exit_code = EXIT_INVALID_USAGE


class AuthError(RamlObjectError):
    """Raised when an OAuth 2.0 flow fails (missing settings, rejected grant, bad token response)."""

    exit_code = EXIT_AUTH_FAILURE


class ConnectionError_(RamlObjectError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class DescriptionLoadError(RamlObjectError):
    """Raised when an API description cannot be read or is not a mapping."""

    exit_code = EXIT_LOAD_ERROR
