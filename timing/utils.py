"""Shared helpers for timestamp vectors."""

from typing import Any

import numpy as np

from .errors import TimestampValidationError


def as_time_vector(t_ms: Any, name: str = "t_ms") -> np.ndarray:
    """Convert input to a 1-D float64 array.

    A single-column 2-D input of shape ``(n, 1)`` is flattened; any other
    multi-dimensional input is rejected. ``None`` entries become NaN.

    Args:
        t_ms: Sequence or array of timestamps in milliseconds.
        name: Parameter name used in error messages.

    Returns:
        1-D float64 numpy array.

    Raises:
        TimestampValidationError: INVALID_SHAPE if the input is not a
            single column.

    Examples:
        >>> as_time_vector([[0.0], [1.0]]).shape
        (2,)
    """
    try:
        arr = np.asarray(t_ms, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise TimestampValidationError(
            message=f"{name} must be numeric: {e}",
            code="INVALID_SHAPE",
            details={"parameter": name},
        ) from e

    if arr.ndim == 2 and arr.shape[1] == 1:
        arr = arr[:, 0]

    if arr.ndim != 1:
        raise TimestampValidationError(
            message=f"{name} must be a 1 column vector, got shape {list(arr.shape)}",
            code="INVALID_SHAPE",
            details={"parameter": name, "shape": list(arr.shape)},
        )

    return arr


def validate_strictly_increasing(t_ms: np.ndarray, name: str = "t_ms") -> None:
    """Check that every consecutive difference is strictly positive.

    NaN entries fail the check, as do repeated timestamps.

    Args:
        t_ms: 1-D float array.
        name: Parameter name used in error messages.

    Raises:
        TimestampValidationError: NOT_STRICTLY_INCREASING on the first
            offending position.
    """
    diffs = np.diff(t_ms)
    bad = ~(diffs > 0)
    if bad.any():
        first_bad = int(np.argmax(bad)) + 1
        raise TimestampValidationError(
            message=f"{name} must be strictly monotonically increasing",
            code="NOT_STRICTLY_INCREASING",
            details={
                "parameter": name,
                "index": first_bad,
                "previous": float(t_ms[first_bad - 1]),
                "value": float(t_ms[first_bad]),
            },
        )
