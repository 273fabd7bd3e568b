from __future__ import annotations


class MappingError(Exception):
    """Base class for every error raised while building or applying a mapping."""


class FormatError(MappingError):
    """The schema, or one of its nodes, is structurally invalid."""


class PathError(MappingError):
    """jq rejected a path expression."""


class TransformError(MappingError):
    """A named transform is unregistered, not callable or not importable."""


class ConditionError(MappingError):
    """Unknown condition name/kind, or a condition built from a bad predicate."""
