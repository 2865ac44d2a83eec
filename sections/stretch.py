"""Sequence stretching by sentinel insertion.

``insert_sentinel_after`` inserts a single hole after every flagged position
of a sequence. The section engine uses it to split label runs at timing
gaps; it is equally handy for breaking plotted lines at gaps.

Example:
    >>> insert_sentinel_after([1, 2, 3, 4, 5, 6, 7], [0, 1, 1, 0, 1, 0, 1])
    [1, 2, None, 3, None, 4, 5, None, 6, 7, None]
"""

from typing import Any, Sequence, TypeVar

import numpy as np

from .errors import SectionRuntimeError


T = TypeVar("T")


def _is_sentinel(value: Any, sentinel: Any) -> bool:
    if value is sentinel:
        return True
    try:
        return bool(value == sentinel)
    except (TypeError, ValueError):
        return False


def insert_sentinel_after(
    values: Sequence[T] | np.ndarray,
    mask: Sequence[bool] | np.ndarray,
    sentinel: Any = None,
) -> list[T | Any]:
    """Insert ``sentinel`` immediately after each position flagged in mask.

    Args:
        values: Input sequence of any element type.
        mask: Boolean flags, one per element of values.
        sentinel: The hole marker. Must not already occur in values.

    Returns:
        New list of length ``len(values) + sum(mask)``. An empty input
        gives an empty list.

    Raises:
        SectionRuntimeError: LENGTH_MISMATCH if mask and values differ in
            length; SENTINEL_COLLISION if values already holds the sentinel.
    """
    items = list(values)
    if not items:
        return items

    flags = [bool(f) for f in mask]
    if len(flags) != len(items):
        raise SectionRuntimeError(
            message="values and mask must have the same number of elements",
            code="LENGTH_MISMATCH",
            details={"num_values": len(items), "num_mask": len(flags)},
        )

    if any(_is_sentinel(item, sentinel) for item in items):
        raise SectionRuntimeError(
            message=f"values already contain the sentinel {sentinel!r}",
            code="SENTINEL_COLLISION",
            details={"sentinel": repr(sentinel)},
        )

    stretched: list[T | Any] = []
    for item, flag in zip(items, flags):
        stretched.append(item)
        if flag:
            stretched.append(sentinel)

    return stretched
