"""Deep structural equality over JSON values."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def _as_mapping(value: Any) -> Mapping[str, Any] | None:
    """View a composite value as a key -> value mapping.

    Sequences are keyed by their index so that they compare position by
    position, while mappings compare by key set regardless of insertion
    order.
    """
    if isinstance(value, Mapping):
        return value
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return {str(index): item for index, item in enumerate(value)}
    return None


def deep_equal(a: Any, b: Any) -> bool:
    """Compare two values structurally.

    Args:
        a: First value.
        b: Second value.

    Returns:
        True when both values are the same primitive, or composites with
        identical key sets whose values are recursively equal.

    Inputs are assumed acyclic.
    """
    if a is b:
        return True
    if a is None or b is None:
        return False

    left = _as_mapping(a)
    right = _as_mapping(b)
    if left is None or right is None:
        if left is not None or right is not None:
            return False
        # bool is an int subclass; keep True distinct from 1
        if isinstance(a, bool) != isinstance(b, bool):
            return False
        return bool(a == b)

    if len(left) != len(right):
        return False

    for key, value in left.items():
        if key not in right:
            return False
        if not deep_equal(value, right[key]):
            return False

    return True
