"""Refs command -- list the schema components a document references.

This is a read-only traversal of ``$ref`` positions that point at
``#/components/schemas/...``; references are counted, never followed. A name
that is referenced but not defined under ``components.schemas`` is flagged.
"""

from __future__ import annotations

from typing import Optional

import typer

from oasmodel.commands.common import read_document, resolve_or_exit
from oasmodel.document import count_component_references
from oasmodel.output import get_output, info, warning


def refs_command(
    source: str = typer.Argument(..., help="File path, URL, or '-' for stdin."),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", min=1, help="Maximum nesting depth accepted."
    ),
) -> None:
    """List every referenced schema component with a reference count.

    Example::

        oasmodel refs openapi.yaml
        oasmodel --json refs openapi.yaml
    """
    config = resolve_or_exit(cli_max_depth=max_depth)
    doc, _ = read_document(source, config.max_depth)

    counts = count_component_references(doc)
    if not counts:
        info("No schema component references found.")
        return

    defined = set(doc.components.schemas) if doc.components is not None else set()
    rows = [
        [name, str(count), "yes" if name in defined else "no"]
        for name, count in sorted(counts.items())
    ]
    get_output().print_table(
        ["Component", "References", "Defined"],
        rows,
        title=f"Schema references ({sum(counts.values())})",
    )

    missing = sorted(name for name in counts if name not in defined)
    if missing:
        warning(f"Referenced but not defined: {', '.join(missing)}")
