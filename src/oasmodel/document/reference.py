"""Indirection: a position that holds either an inline object or a ``$ref``.

Any nested position of an OpenAPI document may independently be an inline
definition or a pointer into the ``components`` registry. Two flavours are
modelled:

* :data:`ObjectOrReference` -- generic. ``ObjectOrReference[Parameter]``
  decodes to a :class:`Reference` whenever ``$ref`` holds a string
  (sibling keys are discarded silently) and to an inline ``Parameter``
  otherwise. The ``$ref`` check happens before ``Parameter`` is attempted, so
  an object carrying both ``$ref`` and a complete inline field set is always
  a reference.
* :class:`ComponentReference` -- restricted to schema components. Only the
  bare component name is stored; the wire form always carries the
  ``#/components/schemas/`` prefix and decoding rejects any other pointer.

References are modelled, never followed: resolving them (and guarding
against reference cycles) is the consumer's job.
"""

from __future__ import annotations

from typing import Annotated, Any, TypeVar, Union

from pydantic import Discriminator, Field, Tag, field_serializer, model_validator
from pydantic_core import PydanticCustomError

from oasmodel.document.base import OpenAPIObject

REF_KEY = "$ref"
"""The reserved key that marks a reference object."""

SCHEMA_COMPONENT_PREFIX = "#/components/schemas/"
"""Pointer prefix for same-document schema components."""

INVALID_REFERENCE_FORMAT = "invalid_reference_format"

T = TypeVar("T")


def is_reference(value: Any) -> bool:
    """Return ``True`` when *value* is a raw mapping whose ``$ref`` is a string."""
    return isinstance(value, dict) and isinstance(value.get(REF_KEY), str)


class Reference(OpenAPIObject):
    """A pointer to a reusable object, e.g. ``#/components/parameters/limit``."""

    ref_path: str = Field(alias=REF_KEY)


def _reference_or_inline(value: Any) -> str:
    if isinstance(value, Reference) or is_reference(value):
        return "reference"
    return "inline"


ObjectOrReference = Annotated[
    Union[Annotated[Reference, Tag("reference")], Annotated[T, Tag("inline")]],
    Discriminator(_reference_or_inline),
]
"""Generic indirection: ``ObjectOrReference[T]`` is ``T`` or a :class:`Reference`."""


class ComponentReference(OpenAPIObject):
    """A reference to ``#/components/schemas/<name>``, storing only ``name``.

    Example::

        ref = ComponentReference(name="Pet")
        ref.pointer                  # '#/components/schemas/Pet'
        ref.model_dump(by_alias=True)  # {'$ref': '#/components/schemas/Pet'}
    """

    name: str = Field(alias=REF_KEY)

    @model_validator(mode="before")
    @classmethod
    def _strip_prefix(cls, data: Any) -> Any:
        if not is_reference(data):
            return data
        pointer = data[REF_KEY]
        if not pointer.startswith(SCHEMA_COMPONENT_PREFIX):
            raise PydanticCustomError(
                INVALID_REFERENCE_FORMAT,
                "'{reference}' does not start with '{prefix}'",
                {"reference": pointer, "prefix": SCHEMA_COMPONENT_PREFIX},
            )
        return {REF_KEY: pointer[len(SCHEMA_COMPONENT_PREFIX):]}

    @field_serializer("name")
    def _add_prefix(self, name: str) -> str:
        return SCHEMA_COMPONENT_PREFIX + name

    @property
    def pointer(self) -> str:
        """The canonical pointer string for this component."""
        return SCHEMA_COMPONENT_PREFIX + self.name
