"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~oasmodel.exceptions.OasModelError` subclass.
Shell scripts and CI jobs can branch on the exit code of ``oasmodel check``
without parsing stderr.

Example::

    $ oasmodel check openapi.yaml
    $ echo $?
    7   # EXIT_DECODE_ERROR -- the document does not match the model
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or options."""

EXIT_LOAD_ERROR = 6
"""The document source could not be read (missing file, network failure)."""

EXIT_DECODE_ERROR = 7
"""The document could not be parsed or decoded into the typed model."""
