"""Decode OpenAPI text into the typed tree and encode it back.

Decoding runs in three stages:

1. :func:`parse_text` turns JSON or YAML text into plain Python data.
2. :func:`normalize` stringifies the non-string mapping keys YAML produces
   (unquoted ``200:`` response codes, ``true:``, ``null:``) and enforces the
   nesting limit before any model is built.
3. A cached pydantic ``TypeAdapter`` validates the data into the requested
   node type. Any ``ValidationError`` is translated into exactly one typed
   :class:`~oasmodel.exceptions.DecodeError` describing the first failure.

Encoding is the inverse: ``model_dump(mode="json", by_alias=True)`` followed
by a canonical JSON or YAML rendering. It never raises for a tree built from
these models.

Example::

    doc = decode(Path("petstore.yaml").read_text())
    doc.info.title                   # 'Swagger Petstore'
    encode(doc, format="yaml")       # b'openapi: 3.0.0\\ninfo:\\n  ...'
"""

from __future__ import annotations

import datetime
import functools
import json
import logging
from typing import Any, Sequence, TypeVar, Union

import yaml
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import ErrorDetails

from oasmodel.document.objects import OpenAPI
from oasmodel.document.reference import INVALID_REFERENCE_FORMAT
from oasmodel.document.variants import AMBIGUOUS_OR_MISSING_VARIANT, candidates_for_message
from oasmodel.exceptions import (
    AmbiguousOrMissingVariant,
    DecodeError,
    InvalidReferenceFormat,
    MalformedInput,
    MaxDepthExceeded,
    MissingRequiredField,
    PathSegment,
    TypeMismatch,
    UnknownDiscriminant,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100
"""Default cap on container nesting (mappings and sequences) in the input."""

MAX_DEPTH_LIMIT = 500
"""Largest accepted ``max_depth``; deeper limits would outgrow the call stack."""

DEFAULT_INDENT = 2

FORMATS = ("json", "yaml")

N = TypeVar("N")

# pydantic error type -> what the field expected, in JSON vocabulary.
_EXPECTED = {
    "string_type": "string",
    "int_type": "integer",
    "float_type": "number",
    "bool_type": "boolean",
    "dict_type": "object",
    "model_type": "object",
    "model_attributes_type": "object",
    "list_type": "array",
    "none_required": "null",
}


# ---------------------------------------------------------------------------
# Text -> data
# ---------------------------------------------------------------------------


def parse_text(
    source: Union[str, bytes], hint: str = "", max_depth: int = DEFAULT_MAX_DEPTH
) -> Any:
    """Parse *source* as JSON, falling back to YAML.

    Every JSON document is also YAML, but the JSON parser is stricter and
    faster, so it goes first unless *hint* says ``"yaml"``.

    Args:
        source: Document text, or UTF-8 bytes (a BOM is tolerated).
        hint: ``"json"``, ``"yaml"`` or ``""`` to auto-detect. With ``"json"``
            a JSON syntax error is final.
        max_depth: Limit reported when the text nests too deeply for either
            parser to finish.

    Returns:
        The parsed data, not yet checked for shape.

    Raises:
        MalformedInput: If the text is empty, not UTF-8, or parses as
            neither format.
        MaxDepthExceeded: If the parser runs out of stack on deep nesting.
    """
    if isinstance(source, bytes):
        try:
            source = source.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise MalformedInput(f"input is not valid UTF-8: {exc}") from exc

    if not source.strip():
        raise MalformedInput("empty document")

    json_error: Exception | None = None
    if hint != "yaml":
        try:
            return json.loads(source)
        except RecursionError as exc:
            raise MaxDepthExceeded(max_depth) from exc
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise MalformedInput(f"invalid JSON: {exc}") from exc
            json_error = exc

    try:
        return yaml.safe_load(source)
    except RecursionError as exc:
        raise MaxDepthExceeded(max_depth) from exc
    except yaml.YAMLError as exc:
        msg = "not parseable as JSON or YAML"
        if json_error is not None:
            msg += f"; JSON error: {json_error}"
        msg += f"; YAML error: {exc}"
        raise MalformedInput(msg) from exc


def _normalize_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    if isinstance(key, (datetime.date, datetime.datetime)):
        return key.isoformat()
    return str(key)


def normalize(
    value: Any,
    max_depth: int = DEFAULT_MAX_DEPTH,
    path: tuple[PathSegment, ...] = (),
) -> Any:
    """Return a copy of *value* with string keys and bounded nesting.

    YAML timestamps are rendered back to ISO strings so they can land in
    string fields.

    Raises:
        MaxDepthExceeded: If a mapping or sequence sits deeper than
            *max_depth* container levels (the root is level 1). A YAML alias
            cycle always trips this.
    """
    if isinstance(value, (dict, list)) and len(path) >= max_depth:
        raise MaxDepthExceeded(max_depth, path)
    if isinstance(value, dict):
        result: dict[str, Any] = {}
        for key, item in value.items():
            name = _normalize_key(key)
            if name is not key:
                logger.debug("Normalised mapping key %r to %r", key, name)
            result[name] = normalize(item, max_depth, path + (name,))
        return result
    if isinstance(value, list):
        return [normalize(item, max_depth, path + (i,)) for i, item in enumerate(value)]
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return value


# ---------------------------------------------------------------------------
# Validation errors -> typed decode errors
# ---------------------------------------------------------------------------


def json_type_name(value: Any) -> str:
    """Name the JSON type of a parsed value (``"object"``, ``"null"``, ...)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def locate(raw: Any, loc: Sequence[Union[str, int]]) -> tuple[PathSegment, ...]:
    """Map a pydantic error location onto a path through the raw input.

    pydantic locations also contain union tags and the names of flattened
    union fields, neither of which exists in the input. Only segments that
    lead somewhere in *raw* are kept, so the result is a real key/index
    chain from the document root.
    """
    path: list[PathSegment] = []
    node = raw
    for segment in loc:
        if isinstance(node, dict) and segment in node:
            node = node[segment]
        elif (
            isinstance(node, list)
            and isinstance(segment, int)
            and 0 <= segment < len(node)
        ):
            node = node[segment]
        else:
            continue
        path.append(segment)
    return tuple(path)


def _field_name(path: Sequence[PathSegment], loc: Sequence[Union[str, int]]) -> str:
    for segment in reversed(path):
        if isinstance(segment, str):
            return segment
    for segment in reversed(loc):
        if isinstance(segment, str):
            return segment
    return ""


def _expected(error: ErrorDetails) -> str:
    ctx = error.get("ctx") or {}
    kind = error["type"]
    if kind in _EXPECTED:
        return _EXPECTED[kind]
    if kind in ("literal_error", "enum"):
        return f"one of {ctx.get('expected', '?')}"
    if kind in ("greater_than_equal", "greater_than", "less_than_equal", "less_than"):
        bound = next(iter(ctx.values()), "?")
        op = {
            "greater_than_equal": ">=",
            "greater_than": ">",
            "less_than_equal": "<=",
            "less_than": "<",
        }[kind]
        return f"a value {op} {bound}"
    return error["msg"]


def _split_tags(expected: Any) -> tuple[str, ...]:
    if isinstance(expected, str):
        return tuple(tag.strip().strip("'") for tag in expected.split(",") if tag.strip())
    return tuple(expected or ())


def translate_validation_error(exc: ValidationError, raw: Any) -> DecodeError:
    """Turn a pydantic ``ValidationError`` into one typed decode error.

    The first reported error decides the kind; ``error_count`` on the result
    records how many the validator found in total.

    Args:
        exc: The error raised while validating *raw*.
        raw: The normalised input that was validated.

    Returns:
        The :class:`DecodeError` subclass that describes the first failure.
    """
    errors = exc.errors(include_url=False)
    first = errors[0]
    kind = first["type"]
    loc = first["loc"]
    ctx = first.get("ctx") or {}
    path = locate(raw, loc)

    error: DecodeError
    if kind == INVALID_REFERENCE_FORMAT:
        error = InvalidReferenceFormat(str(ctx.get("reference", first["input"])), path)
    elif kind == AMBIGUOUS_OR_MISSING_VARIANT:
        keys_seen = ctx.get("keys_seen")
        if keys_seen is None:
            keys_seen = tuple(first["input"]) if isinstance(first["input"], dict) else ()
        candidates = ctx.get("candidates") or candidates_for_message(first["msg"])
        error = AmbiguousOrMissingVariant(candidates, keys_seen, path)
    elif kind == "union_tag_invalid":
        error = UnknownDiscriminant(
            str(ctx.get("tag", "")), _split_tags(ctx.get("expected_tags")), path
        )
    elif kind == "union_tag_not_found":
        discriminator = str(ctx.get("discriminator", "type")).strip("'")
        error = MissingRequiredField(discriminator, path + (discriminator,))
    elif kind == "missing":
        field = str(loc[-1])
        error = MissingRequiredField(field, path + (field,))
    else:
        # A smart union reports one error per member at the same spot.
        expected: list[str] = []
        for other in errors:
            if locate(raw, other["loc"]) == path:
                name = _expected(other)
                if name not in expected:
                    expected.append(name)
        error = TypeMismatch(
            _field_name(path, loc),
            " or ".join(expected),
            json_type_name(first["input"]),
            path,
        )

    error.error_count = len(errors)
    logger.debug("Decode failed with %d error(s); first: %s", len(errors), error)
    return error


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def _adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


def decode_value(type_: type[N], raw: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> N:
    """Decode already-parsed data into any node type.

    *type_* may be a model class or a typing construct, e.g. ``Schema``,
    ``ObjectOrReference[Parameter]`` or ``ExampleValue``.

    Raises:
        DecodeError: The typed error for the first structural failure.
            A *max_depth* above :data:`MAX_DEPTH_LIMIT` that lets the input
            exhaust the call stack still ends in :class:`MaxDepthExceeded`.
    """
    try:
        data = normalize(raw, max_depth)
        try:
            return _adapter(type_).validate_python(data)
        except ValidationError as exc:
            raise translate_validation_error(exc, data) from exc
    except RecursionError as exc:
        raise MaxDepthExceeded(max_depth) from exc


def decode(
    source: Union[str, bytes],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    hint: str = "",
) -> OpenAPI:
    """Decode a complete OpenAPI document from JSON or YAML text.

    Args:
        source: Document text or UTF-8 bytes.
        max_depth: Maximum container nesting accepted.
        hint: Optional format hint passed to :func:`parse_text`.

    Returns:
        The immutable document tree.

    Raises:
        MalformedInput: If the text does not parse or is not a mapping.
        DecodeError: Any other structural failure (see the subclasses).
    """
    logger.debug("Decoding %d characters (hint=%r, max_depth=%d)", len(source), hint, max_depth)
    raw = parse_text(source, hint, max_depth)
    if not isinstance(raw, dict):
        raise MalformedInput(f"document must be a mapping, found {json_type_name(raw)}")
    return decode_value(OpenAPI, raw, max_depth)


def encode_value(value: Any) -> Any:
    """Return the JSON-compatible data for any node (or container of nodes)."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    return _adapter(Any).dump_python(value, mode="json", by_alias=True)


def dump_text(data: Any, format: str = "json", indent: int = DEFAULT_INDENT) -> str:
    """Render plain data canonically: declared order, trailing newline."""
    if format == "json":
        return json.dumps(data, indent=indent, ensure_ascii=False) + "\n"
    if format == "yaml":
        return yaml.safe_dump(
            data,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
            indent=indent,
        )
    raise ValueError(f"unknown format {format!r}; expected one of {', '.join(FORMATS)}")


def encode(value: Any, format: str = "json", indent: int = DEFAULT_INDENT) -> bytes:
    """Encode a document (or any node) as UTF-8 JSON or YAML.

    Args:
        value: The tree to encode, usually an :class:`OpenAPI` root.
        format: ``"json"`` or ``"yaml"``.
        indent: Spaces per nesting level.

    Returns:
        The encoded bytes, ending in a newline.
    """
    format = str(getattr(format, "value", format))
    logger.debug("Encoding %s as %s", type(value).__name__, format)
    return dump_text(encode_value(value), format, indent).encode("utf-8")
