# jsonmapping/schema.py

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from jsonmapping.errors import FormatError
from jsonmapping.types import ConditionRef, ContainerNode, LeafNode, SchemaNode


def parse_condition_ref(raw: Any) -> ConditionRef:
    if not isinstance(raw, dict):
        raise FormatError(f"Conditions should be a mapping: {raw}")
    if "name" not in raw:
        raise FormatError(f"Condition reference needs a name: {raw}")

    field = raw.get("field")
    if field is not None and not isinstance(field, str):
        raise FormatError(f"Condition field must be a string: {raw}")

    return ConditionRef(
        name=str(raw["name"]),
        field=field,
        output=raw.get("output"),
    )


def parse_node(raw: Any) -> SchemaNode:
    """
    Structural validation of one schema node (and, for containers, its
    attributes).

    A raw mapping with an ``attributes`` key is a ContainerNode; anything
    else is a LeafNode.
    """

    # -------------------------
    # Shared fields
    # -------------------------
    if not isinstance(raw, dict):
        raise FormatError(f"Object should be a mapping: {raw}")
    if "name" not in raw:
        raise FormatError(f"Object needs a name: {raw}")

    path = raw.get("path")
    if path is not None and not isinstance(path, str):
        raise FormatError(f"Object path must be a string: {raw}")

    # -------------------------
    # Container
    # -------------------------
    if "attributes" in raw:
        attributes = raw["attributes"]
        if not isinstance(attributes, list):
            raise FormatError(f"Object attributes must be a list: {raw}")
        return ContainerNode(
            name=raw["name"],
            path=path,
            default=raw.get("default"),
            attributes=tuple(parse_node(a) for a in attributes),
        )

    # -------------------------
    # Leaf
    # -------------------------
    conditions = raw.get("conditions")
    refs = None
    if conditions is not None:
        if not isinstance(conditions, list):
            raise FormatError(f"Object conditions must be a list: {raw}")
        refs = tuple(parse_condition_ref(c) for c in conditions)

    transform = raw.get("transform")
    if transform is not None and not isinstance(transform, str):
        raise FormatError(f"Object transform must be a name: {raw}")

    return LeafNode(
        name=raw["name"],
        path=path,
        default=raw.get("default"),
        conditions=refs,
        transform=transform,
    )


def parse_objects(objects: Any) -> Tuple[SchemaNode, ...]:
    if objects is None:
        raise FormatError("Must define objects under the 'objects' name")
    if not isinstance(objects, list):
        raise FormatError(f"'objects' must be a list, not {type(objects).__name__}")
    return tuple(parse_node(o) for o in objects)


def split_schema(schema: Any) -> Tuple[Dict[str, Any], Any]:
    """Return the raw ``conditions`` section and the raw ``objects`` section."""
    if schema is None:
        schema = {}
    if not isinstance(schema, dict):
        raise FormatError(f"Schema must be a mapping, not {type(schema).__name__}")
    return schema.get("conditions") or {}, schema.get("objects")


def node_names(nodes: Tuple[SchemaNode, ...]) -> List[str]:
    return [n.name for n in nodes]
