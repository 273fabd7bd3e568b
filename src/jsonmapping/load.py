from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Callable, Dict, Iterable

import yaml

from jsonmapping.errors import FormatError, TransformError


def load_schema(path: str | Path) -> Dict[str, Any]:
    """
    Load a mapping schema from a YAML file (JSON is valid YAML, so .json works too).

    The expected document shape:

    conditions:
      is_admin: { class: Equal, predicate: admin }
    objects:
      - { name: id, path: .user.id, default: 0 }
    """
    path = Path(path).expanduser().resolve()
    if not path.is_file():
        raise FileNotFoundError(path)

    with path.open("r", encoding="utf-8") as f:
        try:
            schema = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise FormatError(f"{path}: invalid YAML: {e}") from e

    if not isinstance(schema, dict):
        raise FormatError(f"{path}: schema must be a mapping, not {type(schema).__name__}")
    return schema


def import_callable(target: str) -> Callable[[Any], Any]:
    """Resolve 'package.module:attr' (or 'package.module.attr') to an object."""
    if ":" in target:
        module_name, _, attr = target.partition(":")
    else:
        module_name, _, attr = target.rpartition(".")
    if not module_name or not attr:
        raise TransformError(f"Cannot import transform from '{target}'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise TransformError(f"Cannot import module '{module_name}': {e}") from e

    fn = module
    for part in attr.split("."):
        fn = getattr(fn, part, None)
        if fn is None:
            raise TransformError(f"Module '{module_name}' has no attribute '{attr}'")
    return fn


def load_transforms(specs: Iterable[str]) -> Dict[str, Callable[[Any], Any]]:
    """Build a transform registry from 'name=package.module:attr' strings."""
    out: Dict[str, Callable[[Any], Any]] = {}
    for spec in specs or []:
        name, sep, target = spec.partition("=")
        name, target = name.strip(), target.strip()
        if not sep or not name or not target:
            raise TransformError(f"Transform spec must look like name=module:attr, got '{spec}'")
        out[name] = import_callable(target)
    return out
