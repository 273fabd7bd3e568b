from .errors import (
    MappingError,
    FormatError,
    PathError,
    TransformError,
    ConditionError,
)
from .mapper import JsonMapping
from .conditions import CONDITION_REGISTRY
from .transforms import BUILTIN_TRANSFORMS

__all__ = [
    "JsonMapping",
    "MappingError",
    "FormatError",
    "PathError",
    "TransformError",
    "ConditionError",
    "CONDITION_REGISTRY",
    "BUILTIN_TRANSFORMS",
]
