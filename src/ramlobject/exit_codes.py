"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~ramlobject.exceptions.RamlObjectError` subclass.
Shell wrappers can inspect the exit code of the ``ramlobject`` command to
determine the failure class without parsing stderr.

Example::

    $ ramlobject inspect resources missing.yaml
    $ echo $?
    7   # EXIT_LOAD_ERROR -- the description could not be read
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or configuration."""

EXIT_AUTH_FAILURE = 3
"""An OAuth 2.0 token could not be obtained."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_LOAD_ERROR = 7
"""The API description could not be loaded or decoded."""
