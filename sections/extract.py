"""Section extraction orchestration for raw recordings.

Exported recordings cannot be fed to the section engine directly: their
time column may be out of order, repeat itself or have blanks. This module
runs the full sequence a recording converter needs:
1. Repair the time column (sort, deduplicate, drop missing)
2. Realign the label column with the repaired time axis
3. Optionally shift the time axis so the first sample is at 0 ms
4. Extract sections

Example:
    >>> from sections.extract import extract_sections
    >>> result = extract_sections(raw_t_ms, raw_stimulus_names)
    >>> result.repair.had_dupes
    False
    >>> result.sections.to_dict()
"""

import logging
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from timing.monotonic import MonotonicRepairResult, make_strictly_increasing

from .errors import SectionRuntimeError
from .schema import SectionResult
from .segment import SectionConfig, analyze_list


logger = logging.getLogger(__name__)


@dataclass
class RecordingSections:
    """Sections of a recording together with how its time axis was repaired.

    Attributes:
        sections: Result of section extraction on the repaired data.
        repair: Outcome of the time column repair.
        zero_time_ms: Original timestamp subtracted from the time axis,
            or 0.0 when the axis was not shifted.
        t_ms: The repaired (and possibly shifted) time axis.
    """

    sections: SectionResult
    repair: MonotonicRepairResult
    zero_time_ms: float
    t_ms: np.ndarray

    def to_dict(self, include_runs: bool = False) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "repair": self.repair.to_dict(),
            "zero_time_ms": self.zero_time_ms,
            "num_samples": int(self.t_ms.size),
            **self.sections.to_dict(include_runs=include_runs),
        }


def extract_sections(
    t_ms_raw: Sequence[float] | np.ndarray,
    labels_raw: Sequence[Any] | np.ndarray,
    config: SectionConfig | None = None,
    zero_time: bool = True,
) -> RecordingSections:
    """Repair a raw time column and extract the sections of its labels.

    Args:
        t_ms_raw: Raw timestamps in milliseconds, possibly disordered,
            repeated or missing.
        labels_raw: Raw label column, one entry per raw timestamp.
        config: Extraction configuration. If None, uses SectionConfig().
        zero_time: Whether to subtract the first repaired timestamp.

    Returns:
        RecordingSections.

    Raises:
        TimestampValidationError: If the time column is not a vector.
        SectionRuntimeError: If the columns differ in length.
        SectionConfigError: If the configuration is invalid.
    """
    if config is None:
        config = SectionConfig()

    repair = make_strictly_increasing(t_ms_raw)

    if len(labels_raw) != repair.input_size:
        raise SectionRuntimeError(
            message="labels and t_ms must have the same number of rows",
            code="LENGTH_MISMATCH",
            details={"num_labels": len(labels_raw), "num_timestamps": repair.input_size},
        )

    labels = repair.take(labels_raw)
    t_ms = repair.t_new

    if not (repair.was_sorted and not repair.had_dupes and not repair.had_nans):
        logger.info(
            "Time column repaired: was_sorted=%s had_dupes=%s had_nans=%s dropped=%d",
            repair.was_sorted,
            repair.had_dupes,
            repair.had_nans,
            repair.num_dropped,
        )

    zero_time_ms = 0.0
    if zero_time and t_ms.size > 0:
        zero_time_ms = float(t_ms[0])
        t_ms = t_ms - zero_time_ms

    return RecordingSections(
        sections=analyze_list(t_ms, labels, config),
        repair=repair,
        zero_time_ms=zero_time_ms,
        t_ms=t_ms,
    )
