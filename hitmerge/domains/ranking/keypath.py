"""
Key Paths - Dotted-path lookup into decoded JSON documents.

``resolve_keypath(hit, "stats.sales.0")`` walks mappings by key and sequences
by integer index, one segment at a time.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any, Final

__all__ = ["MISSING", "resolve_keypath", "numeric_value"]


class _Missing:
    """Sentinel for a path that does not resolve."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def resolve_keypath(document: Any, path: str) -> Any:
    """
    Resolve a dotted path against a document.

    Args:
        document: Mapping, sequence or scalar
        path: Dot-separated segments, e.g. ``"price.amount"``

    Returns:
        The value at the path, or MISSING if any segment does not resolve
    """
    return _descend(document, path.split("."))


def _descend(node: Any, segments: list[str]) -> Any:
    if not segments:
        return node

    head, rest = segments[0], segments[1:]

    if isinstance(node, Mapping):
        if head not in node:
            return MISSING
        return _descend(node[head], rest)

    if isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
        try:
            index = int(head)
        except ValueError:
            return MISSING
        if not 0 <= index < len(node):
            return MISSING
        return _descend(node[index], rest)

    # Scalars have no children
    return MISSING


def numeric_value(document: Any, path: str) -> int:
    """
    Integer value at a path, for custom ranking.

    Missing paths and non-integer values (strings, booleans, null,
    containers, fractional or non-finite floats) count as 0. Integral
    floats such as ``3.0`` count as their integer.
    """
    value = resolve_keypath(document, path)
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return 0
