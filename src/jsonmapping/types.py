from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class ConditionRef:
    name: str
    field: Optional[str] = None      # jq sub-path tested instead of the element itself
    output: Any = None               # literal emitted in place of the survivors


@dataclass(frozen=True)
class LeafNode:
    """A single output field."""

    name: str
    path: Optional[str] = None
    default: Any = None
    conditions: Optional[Tuple[ConditionRef, ...]] = None
    transform: Optional[str] = None


@dataclass(frozen=True)
class ContainerNode:
    """
    An object (or array of objects) in the output.

    ``attributes`` are evaluated against every sub-document matched by
    ``path``; without a path they are evaluated against the current document.
    """

    name: str
    path: Optional[str] = None
    default: Any = None
    attributes: Tuple["SchemaNode", ...] = field(default_factory=tuple)


SchemaNode = Union[ContainerNode, LeafNode]
