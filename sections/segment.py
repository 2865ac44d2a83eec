"""Section extraction from timestamped categorical data.

A section is a maximal run of samples sharing one label. Runs are split not
only where the label changes but also at timing gaps: wherever a timestamp
lands further than ``gap_n_dt`` sample periods past where the nominal rate
would put it. The sample period comes from the median timestamp spacing
unless a rate is supplied.

Each section starts at the timestamp of its first sample and ends at the
timestamp of the row following its last sample. When a gap follows the
section there is no usable next row, so the end is the last sample plus one
sample period. The final section of the series is likewise extended by one
sample period past the last timestamp, which keeps a single-sample final
section from having zero duration.

Example:
    >>> from sections.segment import SectionConfig, analyze_list
    >>> result = analyze_list(
    ...     [0, 1, 2, 10, 11, 12],
    ...     ["A", "A", "A", "A", "A", "A"],
    ...     SectionConfig(gap_n_dt=2),
    ... )
    >>> [(run.onset_ms, run.offset_ms) for run in result.runs]
    [(0.0, 3.0), (10.0, 13.0)]
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from timing.rate import estimate_fs, expected_spacing_error
from timing.utils import as_time_vector, validate_strictly_increasing

from .debug import format_debug_trace
from .errors import SectionConfigError, SectionRuntimeError
from .labels import LabelCoding, normalize_labels
from .schema import Event, HitSectionGroup, Section, SectionResult
from .stretch import insert_sentinel_after


logger = logging.getLogger(__name__)


DEFAULT_GAP_N_DT = 2.0
DEFAULT_DESCRIPTION_TEMPLATE = 'Section demarked by "{name}".'


@dataclass
class SectionConfig:
    """Configuration for section extraction.

    Attributes:
        fs: Sampling rate in Hz. If None, it is estimated from the
            timestamps. Must be positive when given.
        gap_n_dt: Gap threshold in multiples of the sample period.
            Default 2.
        is_debug: Whether to build and log a per-sample trace.
            Default False.
        description_template: Template for each group's description;
            ``{name}`` is replaced by the label.
        skip_empty_labels: If True, empty (and missing) labels never start
            a section and get no group; they only serve as the next-row
            end timestamp of the section before them. Default False.
    """

    fs: float | None = None
    gap_n_dt: float = DEFAULT_GAP_N_DT
    is_debug: bool = False
    description_template: str = DEFAULT_DESCRIPTION_TEMPLATE
    skip_empty_labels: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on initialization."""
        self.validate()

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            SectionConfigError: If any parameter is invalid.
        """
        if self.gap_n_dt is None or math.isnan(self.gap_n_dt) or self.gap_n_dt < 0:
            raise SectionConfigError(
                message=f"gap_n_dt must be >= 0, got {self.gap_n_dt}",
                details={"parameter": "gap_n_dt", "value": self.gap_n_dt},
            )

        if self.fs is not None and not (math.isfinite(self.fs) and self.fs > 0):
            raise SectionConfigError(
                message=f"fs must be a positive number, got {self.fs}",
                details={"parameter": "fs", "value": self.fs},
            )

    def describe(self, name: str) -> str:
        """Return the description for the group of label ``name``."""
        return self.description_template.format(name=name)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "fs": self.fs,
            "gap_n_dt": self.gap_n_dt,
            "is_debug": self.is_debug,
            "skip_empty_labels": self.skip_empty_labels,
        }


def analyze_list(
    t_ms: Sequence[float] | np.ndarray,
    labels: Sequence[Any] | np.ndarray,
    config: SectionConfig | None = None,
) -> SectionResult:
    """Find the contiguous sections of a timestamped label column.

    Args:
        t_ms: Strictly increasing timestamps in milliseconds, single column.
        labels: One label per timestamp. Strings, numbers and missing
            values (None/NaN, which become the empty label) are accepted.
        config: Extraction configuration. If None, uses SectionConfig().

    Returns:
        SectionResult with events, per-label groups and the individual
        sections. Empty input gives an empty result.

    Raises:
        TimestampValidationError: If t_ms is not a single column, is not
            strictly increasing, or is too short to estimate a rate.
        SectionRuntimeError: If labels are not a single column or do not
            match t_ms in length.
    """
    if config is None:
        config = SectionConfig()

    if np.size(t_ms) == 0 or len(labels) == 0:
        return SectionResult(
            fs=config.fs,
            dt_ms=1000.0 / config.fs if config.fs else None,
        )

    label_strings = normalize_labels(labels)
    t = as_time_vector(t_ms)

    if len(label_strings) != t.size:
        raise SectionRuntimeError(
            message="labels and t_ms must have the same number of rows",
            code="LENGTH_MISMATCH",
            details={"num_labels": len(label_strings), "num_timestamps": int(t.size)},
        )

    fs, dt_ms = _resolve_rate(t, config.fs)

    is_gap_end = expected_spacing_error(t, dt_ms) > config.gap_n_dt * dt_ms

    # A hole after sample i splits the run when sample i + 1 ends a gap.
    insert_after = np.zeros(t.size, dtype=bool)
    insert_after[:-1] = is_gap_end[1:]

    coding = LabelCoding.from_labels(label_strings, skip_empty=config.skip_empty_labels)
    codes = coding.encode(insert_sentinel_after(label_strings, insert_after))
    t_split = insert_sentinel_after(t.tolist(), insert_after)

    starts, ends = _find_run_bounds(codes)
    onsets = [t_split[k] for k in starts]
    offsets = [_offset_at(t_split, k, dt_ms) for k in ends]

    if not len(starts) == len(ends) == len(onsets) == len(offsets):
        raise SectionRuntimeError(
            message="Onset/offset detection error",
            code="INCONSISTENT_BOUNDARIES",
            details={
                "num_starts": len(starts),
                "num_ends": len(ends),
                "num_onsets": len(onsets),
                "num_offsets": len(offsets),
            },
        )

    runs = [
        Section(
            label=coding.decode(codes[start]),
            onset_ms=float(onset),
            offset_ms=float(offset),
        )
        for start, onset, offset in zip(starts, onsets, offsets)
    ]

    events: list[Event] = []
    for run in runs:
        events.extend(run.events)

    groups = []
    for name in coding.categories:
        hits = [(run.onset_ms, run.offset_ms) for run in runs if run.label == name]
        if hits:
            groups.append(
                HitSectionGroup(name=name, hits=hits, desc=config.describe(name), fs=fs)
            )

    logger.debug(
        "Sections extracted: samples=%d gaps=%d runs=%d labels=%d fs=%.2f",
        t.size,
        int(is_gap_end.sum()),
        len(runs),
        len(groups),
        fs,
    )

    result = SectionResult(
        events=events,
        sections=groups,
        runs=runs,
        fs=fs,
        dt_ms=dt_ms,
    )

    if config.is_debug:
        result.debug_trace = _build_trace(
            t_split, label_strings, is_gap_end, starts, ends, onsets, offsets
        )
        logger.info("Section trace:\n%s", result.debug_trace)

    return result


def _resolve_rate(t: np.ndarray, fs: float | None) -> tuple[float, float]:
    """Return (fs, dt_ms), estimating both when fs is not supplied."""
    if fs is None:
        estimate = estimate_fs(t)
        return estimate.fs, estimate.dt_ms

    # Same checks the estimator would run.
    validate_strictly_increasing(t)
    return float(fs), 1000.0 / fs


def _find_run_bounds(codes: list[int | None]) -> tuple[list[int], list[int]]:
    """Return the first and last index of every run of equal codes.

    Holes (None) never belong to a run.
    """
    last = len(codes) - 1
    starts: list[int] = []
    ends: list[int] = []
    for k, code in enumerate(codes):
        if code is None:
            continue
        if k == 0 or codes[k - 1] != code:
            starts.append(k)
        if k == last or codes[k + 1] != code:
            ends.append(k)
    return starts, ends


def _offset_at(t_split: list[float | None], end: int, dt_ms: float) -> float:
    """End timestamp of the run whose last sample is at ``end``.

    At most one sample period is ever added: a hole can only follow a
    sample that is not the last of the series.
    """
    last = len(t_split) - 1
    next_row = min(end + 1, last)
    offset = t_split[next_row]
    if offset is None:
        offset = t_split[end] + dt_ms
    elif end == last:
        offset = offset + dt_ms
    return offset


def _build_trace(
    t_split: list[float | None],
    label_strings: list[str],
    is_gap_end: np.ndarray,
    starts: list[int],
    ends: list[int],
    onsets: list[float],
    offsets: list[float],
) -> str:
    # Map positions in the stretched series back to real samples.
    real_index = {}
    for k, t in enumerate(t_split):
        if t is not None:
            real_index[k] = len(real_index)

    n = len(real_index)
    is_start = [False] * n
    is_last = [False] * n
    spans = {}
    for start, onset, offset in zip(starts, onsets, offsets):
        is_start[real_index[start]] = True
        spans[real_index[start]] = (onset, offset)
    for end in ends:
        is_last[real_index[end]] = True

    return format_debug_trace(
        t_ms=[t for t in t_split if t is not None],
        labels=label_strings,
        is_start=is_start,
        is_last=is_last,
        is_gap_end=is_gap_end.tolist(),
        spans=spans,
    )
