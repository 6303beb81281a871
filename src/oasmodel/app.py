"""The ``oasmodel`` command line.

Three commands sit on top of the library:

* ``oasmodel check SOURCE`` -- decode and report the first structural error.
* ``oasmodel fmt SOURCE`` -- print (or ``--write``) the canonical encoding.
* ``oasmodel refs SOURCE`` -- count ``#/components/schemas`` references.

The root callback turns the global flags into an
:class:`~oasmodel.output.OutputManager`. Without ``--json`` or ``--plain`` the
format comes from the user config (``output.format``), falling back to TTY
detection. :func:`main` is the console-script entry point.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from oasmodel import __version__
from oasmodel.commands.check import check_command
from oasmodel.commands.fmt import fmt_command
from oasmodel.commands.refs import refs_command
from oasmodel.exceptions import OasModelError
from oasmodel.exit_codes import EXIT_GENERIC_FAILURE
from oasmodel.output import OutputFormat, OutputManager, error, set_output

app = typer.Typer(
    name="oasmodel",
    help="Decode, check, and canonically re-encode OpenAPI 3.0 documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("check")(check_command)
app.command("fmt")(fmt_command)
app.command("refs")(refs_command)

_log_handler: Optional[logging.Handler] = None


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"oasmodel {__version__}")
        raise typer.Exit()


def _output_format(json_output: bool, plain_output: bool) -> OutputFormat:
    """Pick the output format: flags first, then the user config default."""
    if json_output:
        return OutputFormat.JSON
    if plain_output:
        return OutputFormat.PLAIN

    from oasmodel.config import load_global_config

    configured = load_global_config().output.format
    try:
        return OutputFormat(configured)
    except ValueError:
        return OutputFormat.AUTO


def _configure_logging(verbose: bool) -> None:
    """Send the library's debug records to stderr when ``--verbose`` is set."""
    global _log_handler
    logger = logging.getLogger("oasmodel")
    if _log_handler is not None:
        logger.removeHandler(_log_handler)
        _log_handler = None
    if not verbose:
        return
    _log_handler = logging.StreamHandler(sys.stderr)
    _log_handler.setFormatter(logging.Formatter("[debug] %(name)s: %(message)s"))
    logger.addHandler(_log_handler)
    logger.setLevel(logging.DEBUG)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON reports and tables."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text, no highlighting."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write primary output to this file."
    ),
) -> None:
    """Install the output manager for this invocation.

    Args:
        ctx: Typer invocation context.
        version: Print the version and exit.
        json_output: Render reports and tables as JSON.
        plain_output: Render plain text.
        no_color: Disable all colour and Rich markup.
        quiet: Hide info, success and suggestion messages.
        verbose: Show debug messages and library log records.
        output_file: Redirect primary output to a file.
    """
    try:
        fmt = _output_format(json_output, plain_output)
    except OasModelError as exc:
        set_output(OutputManager(no_color=no_color))
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )
    _configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log() -> str:
    """Save the current traceback under the data directory and return its path."""
    from oasmodel.config import get_data_dir

    log_path = get_data_dir() / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_path.write_text(traceback.format_exc(), encoding="utf-8")
    return str(log_path)


def main() -> None:
    """Console-script entry point.

    An :class:`~oasmodel.exceptions.OasModelError` that escapes a command exits
    with its ``exit_code``; any other exception is written to a crash log.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except OasModelError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception:
        error(f"Unexpected error. Debug log: {_write_crash_log()}")
        sys.exit(EXIT_GENERIC_FAILURE)
