"""Read OpenAPI document text from a URL, local file, or stdin.

This module does all of the I/O for the CLI and leaves decoding to
:mod:`oasmodel.parser.codec`. Each loader returns the raw text together with
a format hint (``"json"``, ``"yaml"`` or ``""`` when unknown) derived from
the file extension or the response ``content-type``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import httpx

from oasmodel.exceptions import LoadError
from oasmodel.exit_codes import EXIT_GENERIC_FAILURE

logger = logging.getLogger(__name__)

URL_TIMEOUT = 30.0


def load_text(source: str) -> tuple[str, str]:
    """Load document text from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        ``(text, hint)`` where *hint* is ``"json"``, ``"yaml"`` or ``""``.

    Raises:
        LoadError: If the source cannot be read. Network failures exit with
            the load error code; local file problems with the generic one.
    """
    if source == "-":
        return _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        return _load_from_url(source)
    else:
        return _load_from_file(source)


def hint_from_suffix(path: str) -> str:
    """Guess the format from a file name's extension."""
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"
    return ""


def _load_from_stdin() -> tuple[str, str]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise LoadError(
            f"Failed to read from stdin: {exc}", exit_code=EXIT_GENERIC_FAILURE
        ) from exc

    if not content.strip():
        raise LoadError("No input received from stdin", exit_code=EXIT_GENERIC_FAILURE)

    return content, ""


def _load_from_url(url: str) -> tuple[str, str]:
    """Fetch a document over HTTP(S), following redirects."""
    logger.debug("Fetching %s", url)
    try:
        response = httpx.get(url, timeout=URL_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise LoadError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise LoadError(f"Failed to fetch document from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"
    return response.text, hint


def _load_from_file(path: str) -> tuple[str, str]:
    """Read a local file as UTF-8."""
    file_path = Path(path)
    if not file_path.is_file():
        raise LoadError(f"File not found: {path}", exit_code=EXIT_GENERIC_FAILURE)

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(
            f"Failed to read {path}: {exc}", exit_code=EXIT_GENERIC_FAILURE
        ) from exc

    if not content.strip():
        raise LoadError(f"File is empty: {path}", exit_code=EXIT_GENERIC_FAILURE)

    return content, hint_from_suffix(path)
