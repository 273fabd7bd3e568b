from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from numbers import Number
from typing import Any, Dict, List, Optional, Sequence

from jsonmapping.errors import ConditionError, FormatError
from jsonmapping.types import ConditionRef


def _comparable(a: Any, b: Any) -> bool:
    if isinstance(a, bool) or isinstance(b, bool):
        return False
    if isinstance(a, Number) and isinstance(b, Number):
        return True
    return isinstance(a, str) and isinstance(b, str)


def json_equal(a: Any, b: Any) -> bool:
    """Equality as JSON sees it: booleans never equal numbers, containers compare element-wise."""
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(json_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(json_equal(a[k], b[k]) for k in a)
    return a == b


def json_in(value: Any, items: List[Any]) -> bool:
    return any(json_equal(value, x) for x in items)


# ------------------------
# Condition kinds
# ------------------------

@dataclass(frozen=True)
class Condition:
    predicate: Any = None

    def apply(self, value: Any) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class Equal(Condition):
    def apply(self, value: Any) -> bool:
        return json_equal(value, self.predicate)


@dataclass(frozen=True)
class NotEqual(Condition):
    def apply(self, value: Any) -> bool:
        return not json_equal(value, self.predicate)


@dataclass(frozen=True)
class In(Condition):
    """Value is one of the predicate list."""

    def __post_init__(self):
        if not isinstance(self.predicate, list):
            raise ConditionError(f"{type(self).__name__} predicate must be a list, got {self.predicate!r}")

    def apply(self, value: Any) -> bool:
        return json_in(value, self.predicate)


@dataclass(frozen=True)
class NotIn(In):
    def apply(self, value: Any) -> bool:
        return not json_in(value, self.predicate)


@dataclass(frozen=True)
class Contains(Condition):
    """Predicate is a substring of a string value or an element of a list value."""

    def apply(self, value: Any) -> bool:
        if isinstance(value, str):
            return isinstance(self.predicate, str) and self.predicate in value
        if isinstance(value, list):
            return json_in(self.predicate, value)
        return False


@dataclass(frozen=True)
class Regex(Condition):
    pattern: Optional[re.Pattern] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.predicate, str):
            raise ConditionError(f"Regex predicate must be a string, got {self.predicate!r}")
        try:
            compiled = re.compile(self.predicate)
        except re.error as e:
            raise ConditionError(f"Invalid regex {self.predicate!r}: {e}") from e
        object.__setattr__(self, "pattern", compiled)

    def apply(self, value: Any) -> bool:
        return isinstance(value, str) and self.pattern.search(value) is not None


@dataclass(frozen=True)
class GreaterThan(Condition):
    def apply(self, value: Any) -> bool:
        return _comparable(value, self.predicate) and value > self.predicate


@dataclass(frozen=True)
class GreaterThanOrEqual(Condition):
    def apply(self, value: Any) -> bool:
        return _comparable(value, self.predicate) and value >= self.predicate


@dataclass(frozen=True)
class LessThan(Condition):
    def apply(self, value: Any) -> bool:
        return _comparable(value, self.predicate) and value < self.predicate


@dataclass(frozen=True)
class LessThanOrEqual(Condition):
    def apply(self, value: Any) -> bool:
        return _comparable(value, self.predicate) and value <= self.predicate


@dataclass(frozen=True)
class Present(Condition):
    """Predicate true (the default) keeps non-empty values; false keeps empty ones."""

    predicate: Any = True

    def apply(self, value: Any) -> bool:
        present = value is not None and value != "" and value != [] and value != {}
        return present if self.predicate else not present


CONDITION_REGISTRY: Dict[str, type] = {
    # equality
    "Equal": Equal,
    "NotEqual": NotEqual,

    # membership
    "In": In,
    "NotIn": NotIn,
    "Contains": Contains,
    "Regex": Regex,

    # ordering
    "GreaterThan": GreaterThan,
    "GreaterThanOrEqual": GreaterThanOrEqual,
    "LessThan": LessThan,
    "LessThanOrEqual": LessThanOrEqual,

    # emptiness
    "Present": Present,
}


# ------------------------
# Registry construction
# ------------------------

def build_condition(kind: str, predicate: Any) -> Condition:
    cls = CONDITION_REGISTRY.get(kind)
    if cls is None:
        raise ConditionError(
            f"Unknown condition class '{kind}'. Expected one of: {', '.join(CONDITION_REGISTRY)}"
        )
    if predicate is None and cls is Present:
        return cls()
    return cls(predicate)


def build_conditions(section: Any) -> Dict[str, Condition]:
    """Resolve a schema's ``conditions`` section into named Condition instances."""
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise FormatError(f"'conditions' must be a mapping, not {type(section).__name__}")

    out: Dict[str, Condition] = {}
    for name, definition in section.items():
        if not isinstance(definition, dict):
            raise FormatError(f"Condition '{name}' should be a mapping: {definition}")
        if "class" not in definition:
            raise FormatError(f"Condition '{name}' needs a class: {definition}")
        out[str(name)] = build_condition(str(definition["class"]), definition.get("predicate"))
    return out


# ------------------------
# Evaluation
# ------------------------

def filter_value(
    value: Any,
    refs: Sequence[ConditionRef],
    conditions: Dict[str, Condition],
    resolver,
) -> Any:
    """
    Filter ``value`` through every condition reference in order.

    Returns the single surviving entry, a list of entries when several
    references matched, or None when nothing matched.
    """
    output: List[Any] = []
    for ref in refs:
        if ref.name not in conditions:
            raise ConditionError(f"Unknown condition named {ref.name}")
        condition = conditions[ref.name]

        candidates = value if isinstance(value, list) else [value]
        kept = []
        for x in candidates:
            tested = resolver.resolve(json.dumps(x), ref.field) if ref.field is not None else x
            if condition.apply(tested):
                kept.append(x)

        if not kept:
            continue

        # keep the original shape (list vs single element)
        survivors = kept[0] if len(kept) == 1 and not isinstance(value, list) else kept
        output.append(ref.output if ref.output is not None else survivors)

    if not output:
        return None
    return output[0] if len(output) == 1 else output
