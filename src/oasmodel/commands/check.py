"""Check command -- decode a document and report the first structural error.

``oasmodel check`` loads a document, decodes it into the typed model and
reports either a short summary or the typed decode error with its JSON
Pointer. In ``--json`` mode the report is also written to stdout so that
scripts can consume it.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from oasmodel.commands.common import read_document, resolve_or_exit
from oasmodel.output import OutputFormat, get_output, success


def _summary(doc: Any) -> dict[str, Any]:
    operations = sum(1 for item in doc.paths.values() for _ in item.operations())
    schemas = len(doc.components.schemas) if doc.components is not None else 0
    return {
        "valid": True,
        "openapi": doc.openapi,
        "title": doc.info.title,
        "version": doc.info.version,
        "paths": len(doc.paths),
        "operations": operations,
        "schemas": schemas,
    }


def check_command(
    source: str = typer.Argument(..., help="File path, URL, or '-' for stdin."),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", min=1, help="Maximum nesting depth accepted."
    ),
) -> None:
    """Decode a document and report whether it is structurally valid.

    Example::

        oasmodel check openapi.yaml
        oasmodel --json check https://example.com/openapi.json
    """
    config = resolve_or_exit(cli_max_depth=max_depth)
    doc, _ = read_document(source, config.max_depth)
    output = get_output()

    report = _summary(doc)
    if output.format == OutputFormat.JSON:
        output.print_record(report)
    success(
        f"{source}: valid OpenAPI {report['openapi']} document "
        f"({report['paths']} paths, {report['operations']} operations, "
        f"{report['schemas']} schemas)"
    )
