"""
jsonmapping | mapper.py

Applies a declarative schema to a JSON document:

  objects:
    - name: id
      path: .user.id
      default: 0
    - name: tags
      path: .tags[]
      attributes:
        - { name: label, path: .name, transform: upper }

Every intermediate step works on JSON text because jq is text-in.
"""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import yaml

from jsonmapping.conditions import build_conditions, filter_value, json_equal
from jsonmapping.errors import FormatError, TransformError
from jsonmapping.paths import PathResolver, should_be_array
from jsonmapping.schema import parse_objects, split_schema
from jsonmapping.types import ContainerNode, LeafNode, SchemaNode


def _load_schema_text(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise FormatError(f"invalid YAML schema: {e}") from e


class JsonMapping:
    """
    Stores a schema and applies it to JSON input.

    ``schema`` is either a mapping or YAML/JSON text. ``transforms`` maps
    transform names used in the schema to callables. Neither is mutated
    after construction, so one instance can be shared between callers.
    """

    def __init__(
        self,
        schema: Any,
        transforms: Optional[Mapping[str, Callable[[Any], Any]]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if isinstance(schema, str):
            schema = _load_schema_text(schema)

        self.logger = logger or logging.getLogger("jsonmapping")
        conditions, objects = split_schema(schema)

        # unknown condition kinds fail here, not at apply time
        self.conditions = build_conditions(conditions)
        self.object_schemas = objects
        self.transforms: Dict[str, Any] = dict(transforms or {})
        self.resolver = PathResolver(self.logger)

        self.logger.debug(
            "Loaded schema: %d condition(s), %s object(s)",
            len(self.conditions),
            len(objects) if isinstance(objects, list) else "no",
        )

    @classmethod
    def from_yaml(cls, text: str, transforms=None, logger=None) -> "JsonMapping":
        return cls(_load_schema_text(text), transforms=transforms, logger=logger)

    @classmethod
    def from_yaml_path(cls, path: str | Path, transforms=None, logger=None) -> "JsonMapping":
        from jsonmapping.load import load_schema

        return cls(load_schema(path), transforms=transforms, logger=logger)

    # -----------------------------------------------------
    # Public API
    # -----------------------------------------------------
    def apply(self, data: Any) -> Dict[str, Any]:
        """
        Map ``data`` (JSON text or an equivalent structured value).

        Returns one dict holding the outputs of all top-level objects;
        on a key collision the later object wins.
        """
        nodes = parse_objects(self.object_schemas)

        input_json = data if isinstance(data, str) else json.dumps(data)
        output: Dict[str, Any] = {}
        for node in nodes:
            output.update(self.map_node(input_json, node))
        return output

    # -----------------------------------------------------
    # Recursive core
    # -----------------------------------------------------
    def map_node(self, input_json: str, node: SchemaNode) -> Dict[str, Any]:
        if isinstance(node, ContainerNode):
            return self._map_object(input_json, node)
        if isinstance(node, LeafNode):
            return self.map_value(input_json, node)
        raise FormatError(f"Object should be a schema node: {node}")

    def _map_object(self, input_json: str, node: ContainerNode) -> Dict[str, Any]:
        output = {node.name: deepcopy(node.default)}

        path = node.path if node.path is not None else "."
        found = self.resolver.resolve(input_json, path)
        if found is None:
            return output

        attrs = []
        for obj in found if isinstance(found, list) else [found]:
            obj_json = json.dumps(obj)
            merged: Dict[str, Any] = {}
            for attribute in node.attributes:
                merged.update(self.map_node(obj_json, attribute))
            attrs.append(merged)

        output[node.name] = attrs if should_be_array(node.path, attrs) else next(iter(attrs), None)
        return output

    def map_value(self, input_json: str, node: LeafNode) -> Dict[str, Any]:
        """Map one leaf field; unresolved values keep the configured default."""
        output = {node.name: deepcopy(node.default)}
        if node.path is None:
            return output

        value = self.resolver.resolve(input_json, node.path)
        if value is None:
            return output

        if node.conditions is not None:
            value = filter_value(value, node.conditions, self.conditions, self.resolver)
            if value is None:
                value = deepcopy(node.default)

        if node.transform is not None and not json_equal(value, node.default):
            value = self._transform(node.transform, value)

        output[node.name] = value
        return output

    def _transform(self, name: str, value: Any) -> Any:
        if name not in self.transforms:
            raise TransformError(f"Undefined transform named {name}")
        fn = self.transforms[name]
        if not callable(fn):
            raise TransformError(f"Transform {name} is not callable")
        return fn(value)
