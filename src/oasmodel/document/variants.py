"""Key-presence dispatch for untagged two-variant unions.

Several OpenAPI objects carry "exactly one of" key pairs with no explicit tag
saying which one is in use: ``value`` vs ``externalValue`` on an Example,
``example`` vs ``examples`` on a Media Type or Parameter, ``schema`` vs
``content`` on a Parameter and ``operationId`` vs ``operationRef`` on a Link.

A :class:`VariantSelector` owns one such closed set of variants. It peeks at
the keys that are present and commits to the first declared variant whose
required keys are all there; declaration order breaks ties when an input
satisfies more than one candidate. Its ``discriminate`` method is the pydantic
callable discriminator for the union, so the decision is made once, before
any field is validated, and never by trying each variant in turn.
"""

from __future__ import annotations

from typing import Annotated, Any, Iterable, Optional, Union

from pydantic import BaseModel, Discriminator, Tag
from pydantic.alias_generators import to_camel

AMBIGUOUS_OR_MISSING_VARIANT = "ambiguous_or_missing_variant"
"""Pydantic error type raised when no variant's keys are present."""


_BY_MESSAGE: dict[str, "VariantSelector"] = {}


def _field_key(name: str, alias: Optional[str]) -> str:
    return alias or to_camel(name)


def candidates_for_message(message: str) -> tuple[str, ...]:
    """Recover the candidate names from a discriminator error message.

    The discriminator itself reports no context, only the message it was
    built with, so selectors are looked up by that message.
    """
    selector = _BY_MESSAGE.get(message)
    return selector.candidates if selector is not None else ()


class VariantSelector:
    """A closed, ordered set of key-presence variants.

    Args:
        name: Union name used in diagnostics (e.g. ``"ExampleValue"``).
        *variants: Variant model classes in declaration (priority) order.

    Attributes:
        annotation: The ``Annotated`` union type to use on model fields.
    """

    def __init__(self, name: str, *variants: type[BaseModel]) -> None:
        self.name = name
        self.variants = variants
        self._required: Optional[list[tuple[type[BaseModel], frozenset[str]]]] = None
        self._keys: Optional[frozenset[str]] = None
        self.error_message = f"expected the keys of one of {' | '.join(self.candidates)}"
        self.annotation: Any = Annotated[
            Union[tuple(Annotated[v, Tag(v.__name__)] for v in variants)],
            Discriminator(
                self.discriminate,
                custom_error_type=AMBIGUOUS_OR_MISSING_VARIANT,
                custom_error_message=self.error_message,
            ),
        ]
        _BY_MESSAGE[self.error_message] = self

    def __repr__(self) -> str:
        return f"VariantSelector({self.name!r}, {', '.join(self.candidates)})"

    @property
    def candidates(self) -> tuple[str, ...]:
        """Variant class names, in declaration order."""
        return tuple(v.__name__ for v in self.variants)

    def required_keys(self) -> list[tuple[type[BaseModel], frozenset[str]]]:
        """Each variant paired with the set of keys it requires."""
        # Computed lazily: aliases are only final once every model is built.
        if self._required is None:
            self._required = [
                (
                    variant,
                    frozenset(
                        _field_key(name, field.alias)
                        for name, field in variant.model_fields.items()
                        if field.is_required()
                    ),
                )
                for variant in self.variants
            ]
        return self._required

    @property
    def keys(self) -> frozenset[str]:
        """Every key that belongs to any variant of this union."""
        if self._keys is None:
            self._keys = frozenset(
                _field_key(name, field.alias)
                for variant in self.variants
                for name, field in variant.model_fields.items()
            )
        return self._keys

    def select(self, present: Iterable[str]) -> Optional[type[BaseModel]]:
        """Return the first variant whose required keys are all in *present*.

        Args:
            present: Keys found on the untagged input.

        Returns:
            The winning variant class, or ``None`` when no variant matches.
        """
        seen = frozenset(present)
        for variant, required in self.required_keys():
            if required <= seen:
                return variant
        return None

    def discriminate(self, value: Any) -> Optional[str]:
        """Pydantic discriminator: map an input to its variant tag."""
        if isinstance(value, self.variants):
            return type(value).__name__
        if isinstance(value, dict):
            variant = self.select(value.keys())
            if variant is not None:
                return variant.__name__
        return None
