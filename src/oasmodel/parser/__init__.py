"""Text codec and source loading for OpenAPI documents."""

from oasmodel.parser.codec import (
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
    decode,
    decode_value,
    encode,
    encode_value,
    parse_text,
)
from oasmodel.parser.loader import load_text

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_LIMIT",
    "decode",
    "decode_value",
    "encode",
    "encode_value",
    "load_text",
    "parse_text",
]
