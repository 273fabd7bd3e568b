from __future__ import annotations

import logging
from typing import Any, List, Optional

import jq

from jsonmapping.errors import PathError

ARRAY_SUFFIX = "[]"


def should_be_array(path: Optional[str], matches: List[Any]) -> bool:
    """A result is a list when the path ends in '[]' or more than one thing matched."""
    return (path or "").endswith(ARRAY_SUFFIX) or len(matches) > 1


def search(document: str, path: str) -> List[Any]:
    """All jq matches of ``path`` in the JSON text ``document``."""
    try:
        return jq.compile(path).input_text(document).all()
    except ValueError as e:
        raise PathError(str(e)) from e


class PathResolver:
    """jq search plus cardinality normalisation."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("jsonmapping")

    def resolve(self, document: str, path: str) -> Any:
        if not isinstance(document, str):
            raise TypeError(f"document must be str, not {type(document).__name__}")
        if not isinstance(path, str):
            raise TypeError(f"path must be str, not {type(path).__name__}")

        matches = search(document, path)
        value = matches if should_be_array(path, matches) else next(iter(matches), None)

        if value is None:
            self.logger.warning("Could not find %s in %s", path, document)

        return value
