"""Sampling rate estimation from irregular timestamps.

Recording devices rarely deliver perfectly spaced samples: most differences
sit close to the nominal period while a few are far off (dropped samples,
pauses). The nominal period is therefore taken as the median of the
consecutive differences, which ignores rare large gaps where the mean would
not.

Example:
    >>> from timing.rate import estimate_fs
    >>> est = estimate_fs([0.0, 16.7, 33.3, 50.0, 66.7], include_diagnostics=True)
    >>> est.fs
    59.88
"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from .errors import TimestampValidationError
from .utils import as_time_vector, validate_strictly_increasing


@dataclass(frozen=True)
class FsEstimate:
    """Result of sampling rate estimation.

    Attributes:
        fs: Estimated sampling frequency in Hz, rounded to 2 decimals.
        dt_ms: Median spacing between samples in ms (unrounded).
        dt_error_ms: Per-sample deviation from an ideal series in which
            each sample follows the previous actual sample by dt_ms.
            The first element is 0. None unless diagnostics were requested.
        off_by_more_than_half_dt: Per-sample flag, True where the absolute
            deviation exceeds half of dt_ms.
        percent_off_by_more_than_half_dt: Share of flagged samples (0-100).
    """

    fs: float
    dt_ms: float
    dt_error_ms: np.ndarray | None = None
    off_by_more_than_half_dt: np.ndarray | None = None
    percent_off_by_more_than_half_dt: float | None = None

    def to_dict(self, include_arrays: bool = False) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Args:
            include_arrays: Whether to include the per-sample arrays.

        Returns:
            Dictionary representation.
        """
        result: dict[str, Any] = {
            "fs": self.fs,
            "dt_ms": self.dt_ms,
        }
        if self.percent_off_by_more_than_half_dt is not None:
            result["percent_off_by_more_than_half_dt"] = self.percent_off_by_more_than_half_dt
        if include_arrays and self.dt_error_ms is not None:
            result["dt_error_ms"] = self.dt_error_ms.tolist()
            result["off_by_more_than_half_dt"] = self.off_by_more_than_half_dt.tolist()
        return result


def expected_spacing_error(t_ms: np.ndarray, dt_ms: float) -> np.ndarray:
    """Deviation of each timestamp from the previous one plus dt_ms.

    Args:
        t_ms: 1-D float array of timestamps.
        dt_ms: Nominal sample period in ms.

    Returns:
        Float array of the same length; element 0 is always 0.
    """
    expected = t_ms.copy()
    expected[1:] = t_ms[:-1] + dt_ms
    return t_ms - expected


def estimate_fs(t_ms: Any, include_diagnostics: bool = False) -> FsEstimate:
    """Estimate the sampling frequency of a timestamp vector.

    Args:
        t_ms: Strictly increasing timestamps in milliseconds, at least
            two samples, single column.
        include_diagnostics: Whether to compute per-sample timing errors.

    Returns:
        FsEstimate with fs, dt_ms and (optionally) diagnostics.

    Raises:
        TimestampValidationError: If t_ms is not a single column, has
            fewer than two samples, or is not strictly increasing.
    """
    t = as_time_vector(t_ms)

    if t.size < 2:
        raise TimestampValidationError(
            message=f"t_ms needs at least 2 samples to estimate fs, got {t.size}",
            code="TOO_SHORT",
            details={"num_samples": int(t.size)},
        )

    validate_strictly_increasing(t)

    dt_ms = float(np.median(np.diff(t)))
    fs = round(1000.0 / dt_ms, 2)

    if not include_diagnostics:
        return FsEstimate(fs=fs, dt_ms=dt_ms)

    dt_error_ms = expected_spacing_error(t, dt_ms)
    off_by_half = np.abs(dt_error_ms) > 0.5 * dt_ms
    percent = 100.0 * float(off_by_half.sum()) / t.size

    return FsEstimate(
        fs=fs,
        dt_ms=dt_ms,
        dt_error_ms=dt_error_ms,
        off_by_more_than_half_dt=off_by_half,
        percent_off_by_more_than_half_dt=percent,
    )
