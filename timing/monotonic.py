"""Repair of disordered timestamp vectors.

Exported recordings occasionally contain rows out of order, repeated
timestamps, or rows without a timestamp. ``make_strictly_increasing`` turns
such a vector into one the estimator and the section engine accept, and
returns the selection index needed to realign every other column of the
recording with the repaired time axis.

Example:
    >>> from timing.monotonic import make_strictly_increasing
    >>> res = make_strictly_increasing([3.0, 1.0, 1.0, float("nan"), 2.0])
    >>> res.t_new.tolist(), res.new_index.tolist()
    ([1.0, 2.0, 3.0], [1, 4, 0])
"""

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from .utils import as_time_vector


@dataclass(frozen=True)
class MonotonicRepairResult:
    """Outcome of ``make_strictly_increasing``.

    Attributes:
        was_sorted: Whether the input was already in ascending order
            (NaN entries at the end count as sorted).
        had_dupes: Whether repeated timestamps were dropped.
        had_nans: Whether missing timestamps were dropped.
        t_new: The repaired, strictly increasing timestamps.
        new_index: Original positions of the surviving samples, in the
            order they appear in t_new.
        input_size: Number of samples in the original vector.
    """

    was_sorted: bool
    had_dupes: bool
    had_nans: bool
    t_new: np.ndarray
    new_index: np.ndarray
    input_size: int

    @property
    def num_dropped(self) -> int:
        """Number of input samples that did not survive the repair."""
        return self.input_size - int(self.t_new.size)

    def take(self, values: Sequence[Any] | np.ndarray) -> Any:
        """Realign a companion column with the repaired time axis.

        Args:
            values: Column with one entry per original sample.

        Returns:
            numpy arrays are indexed directly; other sequences come back
            as a list.

        Raises:
            ValueError: If values does not have one entry per input sample.
        """
        if len(values) != self.input_size:
            raise ValueError(
                f"Column has {len(values)} rows, expected {self.input_size}"
            )
        if isinstance(values, np.ndarray):
            return values[self.new_index]
        return [values[i] for i in self.new_index]

    def to_dict(self) -> dict[str, Any]:
        """Convert the summary flags to a dictionary."""
        return {
            "was_sorted": self.was_sorted,
            "had_dupes": self.had_dupes,
            "had_nans": self.had_nans,
            "num_dropped": self.num_dropped,
        }


def make_strictly_increasing(t_in: Any) -> MonotonicRepairResult:
    """Sort, deduplicate and strip missing values from a timestamp vector.

    The sort is stable, so among equal timestamps the earliest row comes
    first and is the one kept. A sample counts as a duplicate when its
    difference to the preceding sorted sample is exactly zero; differences
    involving NaN are never duplicates, so missing values are handled only
    by the NaN removal step.

    Args:
        t_in: Timestamps in any order; may contain repeats and NaN/None.

    Returns:
        MonotonicRepairResult.

    Raises:
        TimestampValidationError: INVALID_SHAPE if t_in is not a vector.
    """
    t = as_time_vector(t_in, name="t_in")

    sort_index = np.argsort(t, kind="stable")
    t_sort = t[sort_index]
    was_sorted = bool(np.array_equal(t_sort, t, equal_nan=True))

    # NaN differences compare False, so only exact repeats are flagged.
    is_dupe = np.zeros(t.size, dtype=bool)
    is_dupe[1:] = np.diff(t_sort) == 0
    had_dupes = bool(is_dupe.any())

    t_new = t_sort[~is_dupe]
    new_index = sort_index[~is_dupe]

    is_nan = np.isnan(t_new)
    had_nans = bool(is_nan.any())

    return MonotonicRepairResult(
        was_sorted=was_sorted,
        had_dupes=had_dupes,
        had_nans=had_nans,
        t_new=t_new[~is_nan],
        new_index=new_index[~is_nan].astype(np.intp),
        input_size=int(t.size),
    )
