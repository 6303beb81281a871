"""Operation-level objects and the document root.

Everything that can live in the ``components`` registry is wrapped in
:data:`~oasmodel.document.reference.ObjectOrReference` wherever OpenAPI allows
a ``$ref``, and every schema position uses
:data:`~oasmodel.document.schema.ComponentOrInlineSchema`.

Five unions have no tag and are told apart by which keys are present. Their
keys sit directly on the parent object, so the parent lists them in
``flattened``:

=================  ========================  ===============================
Parent             Field                     Variants (priority order)
=================  ========================  ===============================
Example            ``payload``               ``value`` | ``externalValue``
MediaType          ``example_set``           ``example`` | ``examples``
Parameter          ``representation``        ``schema`` | ``content``
Parameter          ``example_set``           ``example`` | ``examples``
Link               ``operation`` (required)  ``operationId`` | ``operationRef``
=================  ========================  ===============================
"""

from __future__ import annotations

import enum
from typing import Any, ClassVar, Iterator, Optional

from pydantic import Field

from oasmodel.document.base import OpenAPIObject
from oasmodel.document.info import ExternalDoc, Info, Server, Tag
from oasmodel.document.reference import ObjectOrReference
from oasmodel.document.schema import ComponentOrInlineSchema, Schema, SchemaType
from oasmodel.document.security import SecurityScheme
from oasmodel.document.variants import VariantSelector

Callback = dict[str, Any]
"""A callback: runtime expression -> Path Item, kept as opaque JSON."""

SecurityRequirement = dict[str, list[str]]
"""Security scheme name -> required scopes."""


# --- Examples ---


class EmbeddedExample(OpenAPIObject):
    value: Any


class ExternalExample(OpenAPIObject):
    external_value: str


EXAMPLE_VALUE = VariantSelector("ExampleValue", EmbeddedExample, ExternalExample)
ExampleValue = EXAMPLE_VALUE.annotation


class Example(OpenAPIObject):
    """An Example Object: a literal ``value`` or an ``externalValue`` URL."""

    flattened: ClassVar[dict[str, VariantSelector]] = {"payload": EXAMPLE_VALUE}

    summary: str = ""
    description: str = ""
    payload: Optional[ExampleValue] = None


class SingleExample(OpenAPIObject):
    example: Any


class MultipleExamples(OpenAPIObject):
    examples: dict[str, ObjectOrReference[Example]]


# --- Headers and media types ---


class Header(OpenAPIObject):
    """A Header Object (a Parameter without ``name`` and ``in``)."""

    required: Optional[bool] = None
    schema_: Optional[ComponentOrInlineSchema] = Field(default=None, alias="schema")
    unique_items: Optional[bool] = None
    param_type: Optional[SchemaType] = Field(default=None, alias="type", strict=False)
    format: str = ""
    description: str = ""


class Encoding(OpenAPIObject):
    """Serialization rules for one property of a multipart or form body."""

    content_type: str = ""
    headers: dict[str, ObjectOrReference[Header]] = Field(default_factory=dict)
    style: str = ""
    explode: Optional[bool] = None
    allow_reserved: Optional[bool] = None


MEDIA_TYPE_EXAMPLE = VariantSelector("MediaTypeExample", SingleExample, MultipleExamples)
MediaTypeExample = MEDIA_TYPE_EXAMPLE.annotation


class MediaType(OpenAPIObject):
    flattened: ClassVar[dict[str, VariantSelector]] = {"example_set": MEDIA_TYPE_EXAMPLE}

    schema_: Optional[ComponentOrInlineSchema] = Field(default=None, alias="schema")
    example_set: Optional[MediaTypeExample] = None
    encoding: dict[str, Encoding] = Field(default_factory=dict)


# --- Parameters ---


class ParameterLocation(str, enum.Enum):
    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"
    FORM_DATA = "formData"


class ParameterStyle(str, enum.Enum):
    MATRIX = "matrix"
    LABEL = "label"
    FORM = "form"
    SIMPLE = "simple"
    SPACE_DELIMITED = "spaceDelimited"
    PIPE_DELIMITED = "pipeDelimited"
    DEEP_OBJECT = "deepObject"


class SchemaRepresentation(OpenAPIObject):
    schema_: ComponentOrInlineSchema = Field(alias="schema")


class ContentRepresentation(OpenAPIObject):
    content: dict[str, MediaType]


PARAMETER_REPRESENTATION = VariantSelector(
    "ParameterRepresentation", SchemaRepresentation, ContentRepresentation
)
ParameterRepresentation = PARAMETER_REPRESENTATION.annotation

PARAMETER_EXAMPLES = VariantSelector("ParameterExamples", SingleExample, MultipleExamples)
ParameterExamples = PARAMETER_EXAMPLES.annotation


class Parameter(OpenAPIObject):
    """A Parameter Object.

    ``representation`` holds either the ``schema`` or the ``content`` key of
    the wire form, and ``example_set`` either ``example`` or ``examples``.
    """

    flattened: ClassVar[dict[str, VariantSelector]] = {
        "representation": PARAMETER_REPRESENTATION,
        "example_set": PARAMETER_EXAMPLES,
    }

    name: str
    location: ParameterLocation = Field(alias="in", strict=False)
    description: str = ""
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    style: Optional[ParameterStyle] = Field(default=None, strict=False)
    explode: Optional[bool] = None
    allow_reserved: Optional[bool] = None
    representation: Optional[ParameterRepresentation] = None
    example_set: Optional[ParameterExamples] = None


class RequestBody(OpenAPIObject):
    description: str = ""
    content: dict[str, MediaType]
    required: Optional[bool] = None


# --- Links ---


class OperationId(OpenAPIObject):
    operation_id: str


class OperationRef(OpenAPIObject):
    operation_ref: str


LINK_OPERATION = VariantSelector("LinkOperation", OperationId, OperationRef)
LinkOperation = LINK_OPERATION.annotation


class Link(OpenAPIObject):
    """A design-time link to another operation.

    ``parameters`` values and ``request_body`` are runtime expressions or
    literal JSON, kept as written.
    """

    flattened: ClassVar[dict[str, VariantSelector]] = {"operation": LINK_OPERATION}

    operation: LinkOperation
    parameters: dict[str, Any] = Field(default_factory=dict)
    request_body: Any = None
    description: str = ""
    server: Optional[Server] = None


# --- Responses, operations, paths ---


class Response(OpenAPIObject):
    description: str
    headers: dict[str, ObjectOrReference[Header]] = Field(default_factory=dict)
    content: dict[str, MediaType] = Field(default_factory=dict)
    links: dict[str, ObjectOrReference[Link]] = Field(default_factory=dict)


class Operation(OpenAPIObject):
    tags: list[str] = Field(default_factory=list)
    summary: str = ""
    description: str = ""
    external_docs: Optional[ExternalDoc] = None
    operation_id: str = ""
    parameters: list[ObjectOrReference[Parameter]] = Field(default_factory=list)
    request_body: Optional[ObjectOrReference[RequestBody]] = None
    responses: dict[str, ObjectOrReference[Response]]
    callbacks: dict[str, Callback] = Field(default_factory=dict)
    deprecated: Optional[bool] = None
    security: list[SecurityRequirement] = Field(default_factory=list)
    servers: list[Server] = Field(default_factory=list)


HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


class PathItem(OpenAPIObject):
    """The operations available on a single path.

    ``ref_path`` is the Path Item's own ``$ref`` string and is stored verbatim;
    it is not an indirection.
    """

    ref_path: str = Field(default="", alias="$ref")
    summary: str = ""
    description: str = ""
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    trace: Optional[Operation] = None
    servers: list[Server] = Field(default_factory=list)
    parameters: list[ObjectOrReference[Parameter]] = Field(default_factory=list)

    def operations(self) -> Iterator[tuple[str, Operation]]:
        """Yield ``(method, operation)`` pairs for the methods that are set."""
        for method in HTTP_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                yield method, operation


# --- Components and root ---


class Components(OpenAPIObject):
    """The registry of reusable objects addressed elsewhere by ``$ref``."""

    schemas: dict[str, ObjectOrReference[Schema]] = Field(default_factory=dict)
    responses: dict[str, ObjectOrReference[Response]] = Field(default_factory=dict)
    parameters: dict[str, ObjectOrReference[Parameter]] = Field(default_factory=dict)
    examples: dict[str, ObjectOrReference[Example]] = Field(default_factory=dict)
    request_bodies: dict[str, ObjectOrReference[RequestBody]] = Field(default_factory=dict)
    headers: dict[str, ObjectOrReference[Header]] = Field(default_factory=dict)
    security_schemes: dict[str, ObjectOrReference[SecurityScheme]] = Field(
        default_factory=dict
    )
    links: dict[str, ObjectOrReference[Link]] = Field(default_factory=dict)
    callbacks: dict[str, ObjectOrReference[Callback]] = Field(default_factory=dict)


class OpenAPI(OpenAPIObject):
    """The root of an OpenAPI 3.0 document."""

    openapi: str
    info: Info
    servers: list[Server] = Field(default_factory=list)
    paths: dict[str, PathItem]
    components: Optional[Components] = None
    security: list[SecurityRequirement] = Field(default_factory=list)
    tags: list[Tag] = Field(default_factory=list)
    external_docs: Optional[ExternalDoc] = None


for _model in (MultipleExamples, Example, MediaType, ContentRepresentation, Parameter):
    _model.model_rebuild()
