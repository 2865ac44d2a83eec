"""Schema definitions for section extraction output.

This module defines the data structures produced by the section engine:
start/end events, individual sections, per-label section groups, and the
overall result.

Example:
    >>> from sections.schema import Event, HitSectionGroup, Section, SectionResult
    >>> run = Section(label="A", onset_ms=0.0, offset_ms=3.0)
    >>> group = HitSectionGroup(
    ...     name="A",
    ...     hits=[(0.0, 3.0)],
    ...     desc='Section demarked by "A".',
    ...     fs=1000.0,
    ... )
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Event:
    """A named point in time, e.g. ``Start_A`` or ``End_A``.

    Attributes:
        name: Event name.
        t_ms: Event timestamp in milliseconds.
    """

    name: str
    t_ms: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"name": self.name, "t_ms": self.t_ms}


@dataclass(frozen=True)
class Section:
    """A maximal run of one label, undivided by a timing gap.

    Attributes:
        label: Canonical label string.
        onset_ms: Timestamp of the first sample of the run.
        offset_ms: Exclusive end of the run: the timestamp of the next
            row, or the last sample plus one sample period when a gap or
            the end of the series follows.
    """

    label: str
    onset_ms: float
    offset_ms: float

    @property
    def duration_ms(self) -> float:
        """Return section duration in milliseconds."""
        return self.offset_ms - self.onset_ms

    @property
    def events(self) -> tuple[Event, Event]:
        """Return the start and end events of this section."""
        return (
            Event(name=f"Start_{self.label}", t_ms=self.onset_ms),
            Event(name=f"End_{self.label}", t_ms=self.offset_ms),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "label": self.label,
            "onset_ms": self.onset_ms,
            "offset_ms": self.offset_ms,
        }


@dataclass(frozen=True)
class HitSectionGroup:
    """All sections of one label.

    Attributes:
        name: Canonical label string.
        hits: (onset_ms, offset_ms) pairs in chronological order.
        desc: Human-readable description of the group.
        fs: Sampling rate the sections were computed with.
    """

    name: str
    hits: list[tuple[float, float]]
    desc: str
    fs: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "hit": [[onset, offset] for onset, offset in self.hits],
            "desc": self.desc,
            "fs": self.fs,
        }


@dataclass
class SectionResult:
    """Complete result of one section extraction call.

    Attributes:
        events: Start/End events in chronological order, two per section.
        sections: One group per label, in sorted label order.
        runs: The individual sections in chronological order.
        fs: Resolved sampling rate (estimated or supplied). None when
            the input was empty and no rate was supplied.
        dt_ms: Sample period used for gap detection and offset extension.
        debug_trace: Per-sample trace, only when debugging was requested.
    """

    events: list[Event] = field(default_factory=list)
    sections: list[HitSectionGroup] = field(default_factory=list)
    runs: list[Section] = field(default_factory=list)
    fs: float | None = None
    dt_ms: float | None = None
    debug_trace: str | None = None

    @property
    def event_names(self) -> list[str]:
        """Return event names in order."""
        return [event.name for event in self.events]

    @property
    def event_times_ms(self) -> list[float]:
        """Return event timestamps in order."""
        return [event.t_ms for event in self.events]

    @property
    def run_count(self) -> int:
        """Return number of sections."""
        return len(self.runs)

    def group(self, name: str) -> HitSectionGroup | None:
        """Return the group for a label, or None if it never occurred."""
        for group in self.sections:
            if group.name == name:
                return group
        return None

    def to_dict(self, include_runs: bool = False) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Args:
            include_runs: Whether to include the flat list of sections.

        Returns:
            Dictionary representation suitable for JSON serialization.
        """
        result: dict[str, Any] = {
            "fs": self.fs,
            "dt_ms": self.dt_ms,
            "labels": {
                "name": self.event_names,
                "t_ms": self.event_times_ms,
            },
            "sections": [group.to_dict() for group in self.sections],
        }
        if include_runs:
            result["runs"] = [run.to_dict() for run in self.runs]
        return result
