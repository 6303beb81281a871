"""Common base class for every OpenAPI document object.

:class:`OpenAPIObject` fixes the conventions shared by all nodes of the tree:

* **Field names** -- snake_case in Python, camelCase on the wire via the
  pydantic alias generator. Reserved keys (``$ref``, ``in``, ``type``,
  ``enum``, ``const``, ``not``, ``schema``) use explicit aliases.
* **Immutability** -- instances are frozen; a decoded tree is a value.
* **Vendor extensions** -- unknown keys (including ``x-*``) are ignored on
  decode and therefore never emitted. This is a known lossy boundary.
* **Strict types** -- no silent coercion (``"5"`` is not an integer), so a
  decoded tree re-encodes to the same JSON types it was read from.
* **Omission** -- an optional field is left out of the encoded form exactly
  when it equals its own default, and every optional default is that field's
  empty value (``None``, ``""``, ``[]`` or ``{}``). ``nullable=False`` is
  therefore emitted while an unset ``nullable`` is not.
* **Flattened unions** -- a subclass lists its key-presence union fields in
  :attr:`OpenAPIObject.flattened`. On decode the union's keys are gathered
  from the object itself into the field; on encode they are spliced back in
  at the field's position.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from oasmodel.document.variants import AMBIGUOUS_OR_MISSING_VARIANT, VariantSelector


class OpenAPIObject(BaseModel):
    """Base for all document nodes; see the module docstring for conventions."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        strict=True,
    )

    flattened: ClassVar[dict[str, VariantSelector]] = {}
    """Field name -> selector for unions whose keys live on this object."""

    @model_validator(mode="before")
    @classmethod
    def _gather_flattened_keys(cls, data: Any) -> Any:
        if not cls.flattened or not isinstance(data, dict):
            return data

        data = dict(data)
        keys_seen = list(data)
        for name, selector in cls.flattened.items():
            field = cls.model_fields[name]
            alias = field.alias or to_camel(name)
            current = data.pop(name, None)
            if current is None:
                current = data.pop(alias, None)
            if isinstance(current, (dict, *selector.variants)):
                # Built programmatically with the variant already chosen.
                data[alias] = current
                continue

            present = {
                key: data.pop(key)
                for key in keys_seen
                if key in selector.keys and key in data
            }
            if not present and not field.is_required():
                continue
            if selector.select(present) is None:
                raise PydanticCustomError(
                    AMBIGUOUS_OR_MISSING_VARIANT,
                    "expected the keys of one of {expected}",
                    {
                        "expected": " | ".join(selector.candidates),
                        "candidates": selector.candidates,
                        "keys_seen": tuple(keys_seen),
                    },
                )
            data[alias] = present
        return data

    @model_serializer(mode="wrap")
    def _omit_empty_fields(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> dict[str, Any]:
        data = handler(self)
        fields = type(self).model_fields
        by_alias = bool(info.by_alias)
        names = {
            ((field.alias or to_camel(name)) if by_alias else name): name
            for name, field in fields.items()
        }

        result: dict[str, Any] = {}
        for key, value in data.items():
            name = names.get(key)
            if name is None:
                result[key] = value
                continue
            field = fields[name]
            if not field.is_required() and getattr(self, name) == field.get_default(
                call_default_factory=True
            ):
                continue
            if name in self.flattened and isinstance(value, dict):
                result.update(value)
            else:
                result[key] = value
        return result
