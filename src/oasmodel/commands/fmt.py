"""Fmt command -- decode a document and re-encode it canonically.

The canonical form keeps declared field order, omits empty optional fields,
drops vendor extensions and ends with a newline. Formatting an already
canonical document is a no-op.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from oasmodel.commands.common import read_document, resolve_or_exit
from oasmodel.config import atomic_write
from oasmodel.exceptions import InvalidUsageError
from oasmodel.models import DocumentFormat
from oasmodel.output import error, get_output, info, success
from oasmodel.parser import encode


def _writable_path(source: str) -> Path:
    """Return *source* as a local path for ``--write``."""
    if source == "-" or source.startswith(("http://", "https://")):
        raise InvalidUsageError("--write needs a local file as SOURCE")
    return Path(source)


def fmt_command(
    source: str = typer.Argument(..., help="File path, URL, or '-' for stdin."),
    to: Optional[DocumentFormat] = typer.Option(
        None, "--to", help="Output format (defaults to the input's format)."
    ),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", min=1, help="Maximum nesting depth accepted."
    ),
    indent: Optional[int] = typer.Option(
        None, "--indent", min=1, max=9, help="Spaces per nesting level."
    ),
    write: bool = typer.Option(
        False, "--write", "-w", help="Rewrite SOURCE in place instead of printing."
    ),
) -> None:
    """Decode a document and print its canonical encoding.

    Example::

        oasmodel fmt openapi.yaml
        oasmodel fmt openapi.json --to yaml --indent 4
        oasmodel fmt openapi.yaml --write
    """
    config = resolve_or_exit(
        cli_max_depth=max_depth,
        cli_indent=indent,
        cli_format=to.value if to is not None else None,
    )
    path: Optional[Path] = None
    if write:
        try:
            path = _writable_path(source)
        except InvalidUsageError as exc:
            error(str(exc))
            raise typer.Exit(code=exc.exit_code) from None

    doc, hint = read_document(source, config.max_depth)

    target = config.format or (DocumentFormat(hint) if hint else DocumentFormat.JSON)
    text = encode(doc, format=target.value, indent=config.indent).decode("utf-8")

    if path is not None:
        if path.read_text(encoding="utf-8") == text:
            info(f"{source} is already formatted")
            return
        atomic_write(path, text)
        success(f"Formatted {source}")
        return

    get_output().print_document(text, syntax=target.value)
