"""Exception hierarchy for oasmodel.

All exceptions inherit from :class:`OasModelError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`oasmodel.exit_codes`.
The CLI catches ``OasModelError`` and exits with the appropriate code.

Decoding failures share the :class:`DecodeError` base. Each one records the
``path`` from the document root to the failing node (a tuple of mapping keys
and list indices) so that diagnostics can point at the exact location::

    OasModelError (exit 1)
    +-- InvalidUsageError          (exit 2)
    +-- ConfigError                (exit 1)
    +-- LoadError                  (exit 6)
    +-- DecodeError                (exit 7)
        +-- MalformedInput
        +-- TypeMismatch
        +-- MissingRequiredField
        +-- AmbiguousOrMissingVariant
        +-- InvalidReferenceFormat
        +-- UnknownDiscriminant
        +-- MaxDepthExceeded

Encoding never raises: a well-formed tree always has a textual shape.
"""

from __future__ import annotations

from typing import Sequence, Union

from oasmodel.exit_codes import (
    EXIT_DECODE_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_LOAD_ERROR,
)

PathSegment = Union[str, int]


class OasModelError(Exception):
    """Base exception for all oasmodel errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(OasModelError):
    """Raised for invalid CLI arguments or option combinations."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(OasModelError):
    """Raised for configuration problems (invalid JSON, out-of-range values)."""

    exit_code = EXIT_GENERIC_FAILURE


class LoadError(OasModelError):
    """Raised when a document source cannot be read (file, stdin or URL)."""

    exit_code = EXIT_LOAD_ERROR


def format_pointer(path: Sequence[PathSegment]) -> str:
    """Render *path* as an RFC 6901 JSON Pointer fragment (``#/a/b~1c/0``)."""
    escaped = (str(seg).replace("~", "~0").replace("/", "~1") for seg in path)
    return "#" + "".join(f"/{seg}" for seg in escaped)


class DecodeError(OasModelError):
    """Base class for every structural decoding failure.

    Args:
        detail: Description of the failure, without location.
        path: Key/index chain from the document root to the failing node.

    Attributes:
        error_count: Total number of problems the validator reported for
            the document. Only the first is described; decoding is
            all-or-nothing.
    """

    exit_code = EXIT_DECODE_ERROR

    def __init__(self, detail: str, path: Sequence[PathSegment] = ()):
        self.detail = detail
        self.path: tuple[PathSegment, ...] = tuple(path)
        self.error_count = 1
        super().__init__(f"{self.pointer}: {detail}")

    @property
    def pointer(self) -> str:
        """The failing location as a JSON Pointer fragment."""
        return format_pointer(self.path)


class MalformedInput(DecodeError):
    """The source is not parseable as JSON or YAML, or is not a mapping."""


class TypeMismatch(DecodeError):
    """A value has the wrong JSON type (or violates a scalar bound)."""

    def __init__(
        self,
        field: str,
        expected: str,
        found: str,
        path: Sequence[PathSegment] = (),
    ):
        self.field = field
        self.expected = expected
        self.found = found
        super().__init__(f"'{field}' expected {expected}, found {found}", path)


class MissingRequiredField(DecodeError):
    """A required key is absent."""

    def __init__(self, field: str, path: Sequence[PathSegment] = ()):
        self.field = field
        super().__init__(f"missing required field '{field}'", path)


class AmbiguousOrMissingVariant(DecodeError):
    """No variant of an untagged union has its keys present."""

    def __init__(
        self,
        candidates: Sequence[str],
        keys_seen: Sequence[str],
        path: Sequence[PathSegment] = (),
    ):
        self.candidates = tuple(candidates)
        self.keys_seen = tuple(keys_seen)
        expected = " | ".join(self.candidates) or "a known variant"
        seen = ", ".join(self.keys_seen) or "no keys"
        super().__init__(f"expected one of {expected}; found {seen}", path)


class InvalidReferenceFormat(DecodeError):
    """A ``$ref`` string does not have the required component prefix."""

    def __init__(self, reference: str, path: Sequence[PathSegment] = ()):
        self.reference = reference
        super().__init__(
            f"'{reference}' is not a schema component reference", path
        )


class UnknownDiscriminant(DecodeError):
    """An explicit ``type`` tag is not one of the closed set."""

    def __init__(
        self,
        tag: str,
        expected: Sequence[str] = (),
        path: Sequence[PathSegment] = (),
    ):
        self.tag = tag
        self.expected = tuple(expected)
        detail = f"unknown discriminant '{tag}'"
        if self.expected:
            detail += f" (expected one of: {', '.join(self.expected)})"
        super().__init__(detail, path)


class MaxDepthExceeded(DecodeError):
    """The input nests deeper than the configured limit."""

    def __init__(self, limit: int, path: Sequence[PathSegment] = ()):
        self.limit = limit
        super().__init__(f"nesting exceeds the maximum depth of {limit}", path)
