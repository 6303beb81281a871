"""Configuration models for the oasmodel command line.

The document model itself lives in :mod:`oasmodel.document`; the models here
only describe tool settings, serialised as JSON in the user's config
directory or in a project-local ``oasmodel.json``:
:class:`DocumentFormat`, :class:`CodecConfig`, :class:`OutputConfig` and
:class:`GlobalConfig`.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, Field

from oasmodel.parser.codec import DEFAULT_INDENT, DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT


class DocumentFormat(str, enum.Enum):
    """Textual encodings a document can be written in."""

    JSON = "json"
    YAML = "yaml"


class CodecConfig(BaseModel):
    """Decode and encode settings.

    ``format`` is the output format for ``fmt``; when unset the input's own
    format is kept.
    """

    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        le=MAX_DEPTH_LIMIT,
        description="Maximum container nesting",
    )
    indent: int = Field(
        default=DEFAULT_INDENT, ge=1, le=9, description="Spaces per nesting level"
    )
    format: Optional[DocumentFormat] = Field(
        default=None, description="Output format: json or yaml"
    )


class OutputConfig(BaseModel):
    """Default output mode preferences stored in :class:`GlobalConfig`."""

    format: str = Field(default="auto", description="Output format: auto, json, plain, rich")


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/oasmodel/config.json``.

    Fields here have the lowest precedence and can be overridden by project
    config, environment variables, or CLI flags. See
    :func:`~oasmodel.config.resolve_config` for the full chain.
    """

    codec: CodecConfig = Field(default_factory=CodecConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
