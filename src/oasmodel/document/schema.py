"""The recursive Schema Object.

:class:`Schema` models the JSON-Schema-like vocabulary subset used by
OpenAPI 3.0. Every nested schema position -- ``items``, each entry of
``properties``, ``additionalProperties``, ``not`` and the members of
``allOf``/``oneOf``/``anyOf`` -- holds a :data:`ComponentOrInlineSchema`, so a
tree can nest to any depth while mixing inline subschemas with references to
``#/components/schemas/...``. A schema can only contain itself by way of a
component reference; cycles through references are the consumer's concern.

``properties`` and ``dependentRequired`` are plain dicts and keep the order
in which they were declared; encoding reproduces that order.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any, Iterator, Optional, Union

from pydantic import Discriminator, Field, Tag

from oasmodel.document.base import OpenAPIObject
from oasmodel.document.reference import ComponentReference, is_reference

Number = Union[int, float]


class SchemaType(str, enum.Enum):
    """Primitive type tags accepted by the ``type`` keyword."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    FILE = "file"


def _component_or_inline(value: Any) -> str:
    if isinstance(value, ComponentReference) or is_reference(value):
        return "component"
    return "inline"


ComponentOrInlineSchema = Annotated[
    Union[
        Annotated[ComponentReference, Tag("component")],
        Annotated["Schema", Tag("inline")],
    ],
    Discriminator(_component_or_inline),
]
"""A schema position: a :class:`ComponentReference` or an inline :class:`Schema`."""


class Schema(OpenAPIObject):
    """A Schema Object.

    Only the keywords listed here are modelled; anything else on the input is
    ignored. Validation keywords are stored, not enforced.

    Example::

        Schema(
            schema_type=SchemaType.OBJECT,
            required=["name"],
            properties={
                "name": Schema(schema_type=SchemaType.STRING),
                "owner": ComponentReference(name="Person"),
            },
        )
    """

    schema_type: Optional[SchemaType] = Field(default=None, alias="type", strict=False)
    format: str = ""
    title: str = ""
    description: str = ""
    nullable: Optional[bool] = None
    read_only: Optional[bool] = None
    write_only: Optional[bool] = None

    enum_values: list[Any] = Field(default_factory=list, alias="enum")
    const_value: Any = Field(default=None, alias="const")
    default: Any = None
    example: Any = None

    items: Optional[ComponentOrInlineSchema] = None
    properties: dict[str, ComponentOrInlineSchema] = Field(default_factory=dict)
    additional_properties: Optional[ComponentOrInlineSchema] = None
    required: list[str] = Field(default_factory=list)
    dependent_required: dict[str, list[str]] = Field(default_factory=dict)

    all_of: list[ComponentOrInlineSchema] = Field(default_factory=list)
    one_of: list[ComponentOrInlineSchema] = Field(default_factory=list)
    any_of: list[ComponentOrInlineSchema] = Field(default_factory=list)
    not_: Optional[ComponentOrInlineSchema] = Field(default=None, alias="not")

    # Numbers. exclusiveMinimum/exclusiveMaximum are booleans in 3.0 and
    # numbers in later drafts; both are kept as written.
    multiple_of: Optional[Number] = None
    minimum: Optional[Number] = None
    exclusive_minimum: Optional[Union[bool, Number]] = None
    maximum: Optional[Number] = None
    exclusive_maximum: Optional[Union[bool, Number]] = None

    # Strings
    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    pattern: str = ""

    # Arrays
    min_items: Optional[int] = Field(default=None, ge=0)
    max_items: Optional[int] = Field(default=None, ge=0)
    unique_items: Optional[bool] = None

    # Objects
    min_properties: Optional[int] = Field(default=None, ge=0)
    max_properties: Optional[int] = Field(default=None, ge=0)

    def children(self) -> Iterator[tuple[tuple[Union[str, int], ...], ComponentOrInlineSchema]]:
        """Yield every direct subschema with its key path relative to this node.

        Paths use wire names, e.g. ``("properties", "name")`` or
        ``("allOf", 0)``.
        """
        if self.items is not None:
            yield ("items",), self.items
        for name, child in self.properties.items():
            yield ("properties", name), child
        if self.additional_properties is not None:
            yield ("additionalProperties",), self.additional_properties
        for key, members in (("allOf", self.all_of), ("oneOf", self.one_of), ("anyOf", self.any_of)):
            for index, child in enumerate(members):
                yield (key, index), child
        if self.not_ is not None:
            yield ("not",), self.not_


Schema.model_rebuild()


def inline_schema(value: ComponentOrInlineSchema) -> Optional[Schema]:
    """Return the inline :class:`Schema` behind *value*, or ``None`` for a reference."""
    return value if isinstance(value, Schema) else None


def schema_depth(value: ComponentOrInlineSchema) -> int:
    """Number of inline schema levels in the deepest branch below *value*.

    A component reference counts as zero: it is not followed. Walks with an
    explicit stack, so arbitrarily deep trees do not exhaust the interpreter
    stack.
    """
    deepest = 0
    stack: list[tuple[ComponentOrInlineSchema, int]] = [(value, 1)]
    while stack:
        node, level = stack.pop()
        schema = inline_schema(node)
        if schema is None:
            continue
        deepest = max(deepest, level)
        stack.extend((child, level + 1) for _, child in schema.children())
    return deepest
