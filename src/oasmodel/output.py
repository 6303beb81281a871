"""Terminal output for the oasmodel commands.

Encoded documents, check reports and reference tables are primary data and
go to stdout (or to the ``-o`` file), byte-for-byte when the output is not
an interactive terminal so that ``oasmodel fmt doc.yaml > out.yaml`` is
exact. Everything else is a diagnostic and goes to stderr.

The resolved :class:`OutputFormat` decides how data is rendered:

* ``RICH`` -- highlighted documents and styled tables (TTY, colour enabled).
* ``PLAIN`` -- raw documents, ``key<TAB>value`` records, TSV tables.
* ``JSON`` -- raw documents, JSON objects and arrays for records and tables.

Colour follows ``--no-color``, ``NO_COLOR`` and ``TERM=dumb``. Diagnostic text
is escaped before Rich sees it: JSON Pointers and messages such as
``expected [a, b]`` must print literally.

One :class:`OutputManager` is installed per invocation by
:func:`~oasmodel.app.main_callback`; the module-level diagnostic helpers
delegate to it.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from oasmodel.exceptions import DecodeError


class OutputFormat(str, Enum):
    """How primary data is rendered. ``AUTO`` picks RICH on a colour TTY, else PLAIN."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


# level -> (plain prefix, rich markup template, hidden by --quiet)
_LEVELS: dict[str, tuple[str, str, bool]] = {
    "info": ("", "{}", True),
    "success": ("", "[green]{}[/green]", True),
    "warning": ("Warning: ", "[yellow]Warning:[/yellow] {}", False),
    "error": ("Error: ", "[bold red]Error:[/bold red] {}", False),
    "suggest": ("→ ", "[dim]→ {}[/dim]", True),
    "debug": ("[debug] ", "[dim]\\[debug] {}[/dim]", False),
}


class OutputManager:
    """Routes data to stdout and diagnostics to stderr in the chosen format.

    Args:
        format: Requested format; ``AUTO`` is resolved at construction.
        no_color: Disable colour and markup on both streams.
        quiet: Hide info, success and suggestion messages.
        verbose: Show debug messages.
        output_file: Append primary data to this path instead of stdout.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        output_file: Optional[str] = None,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._output_file = output_file

        if format == OutputFormat.AUTO:
            rich = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format == OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        """The resolved output format (never ``AUTO``)."""
        return self._format

    # ------------------------------------------------------------------ #
    # Primary data
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        """Write *text* to stdout or the output file, ending it with one newline."""
        if not text.endswith("\n"):
            text += "\n"
        if self._output_file:
            with open(self._output_file, "a", encoding="utf-8") as f:
                f.write(text)
        else:
            sys.stdout.write(text)
            sys.stdout.flush()

    def print_document(self, text: str, syntax: str = "json") -> None:
        """Print an encoded document; only RICH mode on a terminal highlights it."""
        if self._format == OutputFormat.RICH and not self._output_file:
            self._stdout.print(Syntax(text.rstrip("\n"), syntax, theme="monokai", word_wrap=True))
        else:
            self.print_data(text)

    def print_record(self, data: dict[str, Any]) -> None:
        """Print a flat report such as the ``check`` summary."""
        if self._format == OutputFormat.JSON:
            self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str))
            return
        for key, value in data.items():
            self.print_data(f"{key}\t{value}")

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows as a Rich table, a JSON array of objects, or TSV."""
        if self._format == OutputFormat.JSON:
            records = [dict(zip(headers, row)) for row in rows]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
        elif self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
        else:
            table = Table(title=title, show_header=True, header_style="bold cyan")
            for header in headers:
                table.add_column(header)
            for row in rows:
                table.add_row(*(escape(cell) for cell in row))
            self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics
    # ------------------------------------------------------------------ #

    def _emit(self, level: str, message: str) -> None:
        prefix, markup, quietable = _LEVELS[level]
        if quietable and self._quiet:
            return
        if level == "debug" and not self._verbose:
            return
        if self._no_color:
            print(prefix + message, file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup.format(escape(message)))

    def info(self, message: str) -> None:
        self._emit("info", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def suggest(self, message: str) -> None:
        self._emit("suggest", message)

    def debug(self, message: str) -> None:
        self._emit("debug", message)

    def decode_error(self, exc: DecodeError) -> None:
        """Report a decode failure: its kind and pointer, then how many problems follow."""
        self.error(f"{type(exc).__name__} at {exc}")
        if exc.error_count > 1:
            self.suggest(f"{exc.error_count - 1} more problem(s) were found after this one")


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (to anything) or ``TERM=dumb``."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Drop the installed manager so the next :func:`get_output` builds a fresh one."""
    global _output
    _output = None


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def debug(message: str) -> None:
    get_output().debug(message)
