import pytest

from jsonmapping.errors import FormatError
from jsonmapping.schema import parse_node, parse_objects, split_schema
from jsonmapping.types import ConditionRef, ContainerNode, LeafNode


def test_leaf_node():
    node = parse_node({
        "name": "status",
        "path": ".status",
        "default": "unknown",
        "conditions": [{"name": "active", "field": ".state", "output": True}],
        "transform": "upper",
    })
    assert node == LeafNode(
        name="status",
        path=".status",
        default="unknown",
        conditions=(ConditionRef("active", ".state", True),),
        transform="upper",
    )


def test_attributes_make_a_container():
    node = parse_node({
        "name": "tags",
        "path": ".tags[]",
        "attributes": [{"name": "label", "path": ".name"}],
    })
    assert isinstance(node, ContainerNode)
    assert node.attributes == (LeafNode(name="label", path=".name"),)


def test_nested_containers():
    node = parse_node({
        "name": "orders",
        "path": ".orders[]",
        "attributes": [
            {"name": "id", "path": ".id"},
            {"name": "lines", "path": ".lines[]", "attributes": [{"name": "sku", "path": ".sku"}]},
        ],
    })
    assert isinstance(node.attributes[1], ContainerNode)
    assert node.attributes[1].attributes[0].name == "sku"


@pytest.mark.parametrize(
    "raw, match",
    [
        ("id", "Object should be a mapping: id"),
        ({"path": ".id"}, "Object needs a name"),
        ({"name": "id", "path": 5}, "path must be a string"),
        ({"name": "tags", "attributes": {"name": "x"}}, "attributes must be a list"),
        ({"name": "id", "conditions": {"name": "c"}}, "conditions must be a list"),
        ({"name": "id", "conditions": ["c"]}, "Conditions should be a mapping"),
        ({"name": "id", "conditions": [{"field": ".x"}]}, "Condition reference needs a name"),
        ({"name": "id", "transform": ["a"]}, "transform must be a name"),
        ({"name": "tags", "attributes": [{"path": ".x"}]}, "Object needs a name"),
    ],
)
def test_malformed_nodes(raw, match):
    with pytest.raises(FormatError, match=match):
        parse_node(raw)


def test_error_message_carries_the_node():
    with pytest.raises(FormatError, match="'path': '.user.id'"):
        parse_node({"path": ".user.id"})


def test_missing_objects():
    with pytest.raises(FormatError, match="Must define objects"):
        parse_objects(None)


def test_objects_must_be_a_list():
    with pytest.raises(FormatError, match="'objects' must be a list"):
        parse_objects({"name": "id"})


def test_split_schema():
    conditions, objects = split_schema({"objects": [{"name": "id"}]})
    assert conditions == {}
    assert objects == [{"name": "id"}]


def test_schema_must_be_a_mapping():
    with pytest.raises(FormatError, match="Schema must be a mapping"):
        split_schema(["objects"])
