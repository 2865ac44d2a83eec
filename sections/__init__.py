"""Section extraction from timestamped categorical data.

This module provides:
- Sentinel insertion for splitting sequences at flagged positions
- Label normalization and deterministic category coding
- Gap-aware segmentation of a label column into start/end events and
  per-label section groups
- Repair-then-segment orchestration for raw recordings

Example:
    >>> from sections import SectionConfig, analyze_list
    >>> t_ms = [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10]
    >>> names = ["A", "A", "A", "B", "B", "B", "B", "A", "A", "A", "A"]
    >>> result = analyze_list(t_ms, names, SectionConfig())
    >>> for group in result.sections:
    ...     print(group.name, group.hits)
    A [(0.0, 3.0), (7.0, 11.0)]
    B [(3.0, 7.0)]
"""

from .debug import format_debug_trace
from .errors import SectionConfigError, SectionError, SectionRuntimeError
from .extract import RecordingSections, extract_sections
from .labels import LabelCoding, normalize_label, normalize_labels
from .schema import Event, HitSectionGroup, Section, SectionResult
from .segment import (
    DEFAULT_DESCRIPTION_TEMPLATE,
    DEFAULT_GAP_N_DT,
    SectionConfig,
    analyze_list,
)
from .stretch import insert_sentinel_after


__all__ = [
    # Main API
    "SectionConfig",
    "analyze_list",
    "extract_sections",
    "RecordingSections",
    "DEFAULT_GAP_N_DT",
    "DEFAULT_DESCRIPTION_TEMPLATE",
    # Schema
    "Event",
    "Section",
    "HitSectionGroup",
    "SectionResult",
    # Building blocks
    "insert_sentinel_after",
    "LabelCoding",
    "normalize_label",
    "normalize_labels",
    "format_debug_trace",
    # Errors
    "SectionError",
    "SectionConfigError",
    "SectionRuntimeError",
]
