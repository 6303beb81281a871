"""Helpers shared by the document commands."""

from __future__ import annotations

from typing import Any

import typer

from oasmodel.config import resolve_config
from oasmodel.document import OpenAPI
from oasmodel.exceptions import DecodeError, OasModelError
from oasmodel.models import CodecConfig
from oasmodel.output import OutputFormat, debug, error, get_output
from oasmodel.parser import decode, load_text


def failure_record(exc: DecodeError) -> dict[str, Any]:
    """The ``--json`` report for a document that failed to decode."""
    return {
        "valid": False,
        "kind": type(exc).__name__,
        "pointer": exc.pointer,
        "detail": exc.detail,
        "error_count": exc.error_count,
    }


def read_document(source: str, max_depth: int) -> tuple[OpenAPI, str]:
    """Load and decode *source*, returning the document and its format hint.

    In ``--json`` mode a decode failure is also reported on stdout as a
    :func:`failure_record`.

    Raises:
        typer.Exit: With the error's exit code after printing it to stderr.
    """
    output = get_output()
    try:
        text, hint = load_text(source)
        debug(f"Loaded {len(text)} characters from {source} (format: {hint or 'unknown'})")
        return decode(text, max_depth=max_depth, hint=hint), hint
    except DecodeError as exc:
        if output.format == OutputFormat.JSON:
            output.print_record(failure_record(exc))
        output.decode_error(exc)
        raise typer.Exit(code=exc.exit_code) from None
    except OasModelError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def resolve_or_exit(**cli_values: object) -> CodecConfig:
    """Resolve the codec config, turning a :class:`ConfigError` into an exit."""
    try:
        return resolve_config(**cli_values)
    except OasModelError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
