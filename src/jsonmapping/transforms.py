from __future__ import annotations

import json
import re
from functools import wraps
from typing import Any, Callable, Dict


def _each(fn: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Apply ``fn`` element-wise to lists, skipping None."""
    @wraps(fn)
    def wrapper(v: Any) -> Any:
        if isinstance(v, list):
            return [wrapper(x) for x in v]
        if v is None:
            return None
        return fn(v)
    return wrapper


def _to_bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    return str(v).strip().lower() in {"1", "true", "t", "yes", "y", "on"}


@_each
def strip(v: Any) -> Any:
    return v.strip() if isinstance(v, str) else v


@_each
def lower(v: Any) -> Any:
    return v.lower() if isinstance(v, str) else v


@_each
def upper(v: Any) -> Any:
    return v.upper() if isinstance(v, str) else v


@_each
def slug(v: Any) -> Any:
    """'Hello, World' -> 'hello-world'"""
    if not isinstance(v, str):
        return v
    s = v.strip().lower()
    return re.sub(r"[^a-z0-9]+", "-", s).strip("-")


@_each
def parse_json(v: Any) -> Any:
    return json.loads(v) if isinstance(v, str) else v


@_each
def to_int(v: Any) -> int:
    return int(v)


@_each
def to_float(v: Any) -> float:
    return float(v)


@_each
def to_bool(v: Any) -> bool:
    return _to_bool(v)


@_each
def to_str(v: Any) -> str:
    return v if isinstance(v, str) else json.dumps(v)


BUILTIN_TRANSFORMS: Dict[str, Callable[[Any], Any]] = {
    "strip": strip,
    "lower": lower,
    "upper": upper,
    "slug": slug,
    "json": parse_json,
    "int": to_int,
    "float": to_float,
    "bool": to_bool,
    "str": to_str,
}
