"""Timestamp utilities for noisy, approximately regular recordings.

This module provides:
- Sampling rate estimation from the median sample spacing, with optional
  per-sample timing diagnostics
- Repair of disordered timestamp vectors (sort, deduplicate, drop NaN)
  with a selection index for realigning companion columns

Example:
    >>> from timing import estimate_fs, make_strictly_increasing
    >>> repaired = make_strictly_increasing(raw_t_ms)
    >>> labels = repaired.take(raw_labels)
    >>> est = estimate_fs(repaired.t_new, include_diagnostics=True)
    >>> print(est.fs, est.percent_off_by_more_than_half_dt)
"""

from .errors import TimestampValidationError, TimingError
from .monotonic import MonotonicRepairResult, make_strictly_increasing
from .rate import FsEstimate, estimate_fs, expected_spacing_error
from .utils import as_time_vector, validate_strictly_increasing


__all__ = [
    # Estimation
    "FsEstimate",
    "estimate_fs",
    "expected_spacing_error",
    # Repair
    "MonotonicRepairResult",
    "make_strictly_increasing",
    # Errors
    "TimingError",
    "TimestampValidationError",
    # Utils
    "as_time_vector",
    "validate_strictly_increasing",
]
