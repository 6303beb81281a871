"""Read-only traversal of a decoded document tree.

References are never followed here; the walk only reports where they sit.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Iterator

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from oasmodel.document.base import OpenAPIObject
from oasmodel.document.reference import ComponentReference
from oasmodel.exceptions import PathSegment

Located = tuple[tuple[PathSegment, ...], Any]


def iter_nodes(node: Any, path: tuple[PathSegment, ...] = ()) -> Iterator[Located]:
    """Yield ``(path, node)`` for *node* and everything below it, depth first.

    Paths use wire keys, so they match the JSON Pointer of the encoded
    document. A flattened union field contributes no segment of its own: its
    variant's keys live on the parent object.
    """
    stack: list[Located] = [(path, node)]
    while stack:
        where, current = stack.pop()
        yield where, current
        children: list[Located] = []
        if isinstance(current, BaseModel):
            flattened = getattr(type(current), "flattened", {})
            for name, field in type(current).model_fields.items():
                value = getattr(current, name)
                if value is None:
                    continue
                if name in flattened:
                    # Step straight into the variant's own fields.
                    for sub_name, sub_field in type(value).model_fields.items():
                        key = sub_field.alias or to_camel(sub_name)
                        children.append((where + (key,), getattr(value, sub_name)))
                    continue
                children.append((where + (field.alias or to_camel(name),), value))
        elif isinstance(current, dict):
            children = [(where + (key,), value) for key, value in current.items()]
        elif isinstance(current, list):
            children = [(where + (index,), value) for index, value in enumerate(current)]
        stack.extend(reversed(children))


def iter_component_references(
    node: OpenAPIObject, path: tuple[PathSegment, ...] = ()
) -> Iterator[tuple[tuple[PathSegment, ...], ComponentReference]]:
    """Yield every :class:`ComponentReference` below *node* with its path.

    Example::

        for path, ref in iter_component_references(doc):
            print(format_pointer(path), "->", ref.name)
    """
    for where, value in iter_nodes(node, path):
        if isinstance(value, ComponentReference):
            yield where, value


def count_component_references(node: OpenAPIObject) -> Counter[str]:
    """Count references to each schema component name, in first-seen order."""
    counts: Counter[str] = Counter()
    for _, ref in iter_component_references(node):
        counts[ref.name] += 1
    return counts
