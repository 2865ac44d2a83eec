"""Pydantic schemas for API request/response models.

This module defines all the request and response schemas used by the
API endpoints, ensuring consistent serialization and validation.

Example:
    >>> from src.api.schemas import SectionsRequest
    >>> request = SectionsRequest(t_ms=[0, 1, 2], labels=["A", "A", "B"])
"""

from typing import Any

from pydantic import BaseModel, Field


Label = str | int | float | bool | None


# =============================================================================
# Health Endpoint
# =============================================================================


class HealthResponse(BaseModel):
    """Response schema for /health endpoint."""

    status: str = Field(
        default="ok",
        description="Service status",
        examples=["ok"],
    )
    version: str = Field(
        description="Service version",
        examples=["1.0.0"],
    )


# =============================================================================
# Sampling Rate Endpoint
# =============================================================================


class SamplingRateRequest(BaseModel):
    """Request schema for /sampling-rate."""

    t_ms: list[float] = Field(
        description="Strictly increasing timestamps in milliseconds",
        examples=[[0.0, 16.7, 33.3, 50.0]],
    )
    include_arrays: bool = Field(
        default=False,
        description="Include per-sample timing errors and flags",
    )


class SamplingRateResponse(BaseModel):
    """Response schema for /sampling-rate."""

    fs: float = Field(
        gt=0.0,
        description="Estimated sampling rate in Hz (2 decimals)",
        examples=[60.0],
    )
    dt_ms: float = Field(
        gt=0.0,
        description="Median sample spacing in milliseconds",
        examples=[16.67],
    )
    percent_off_by_more_than_half_dt: float = Field(
        ge=0.0,
        le=100.0,
        description="Share of samples off by more than half a sample period",
        examples=[0.5],
    )
    dt_error_ms: list[float] | None = Field(
        default=None,
        description="Per-sample deviation from the nominal spacing",
    )
    off_by_more_than_half_dt: list[bool] | None = Field(
        default=None,
        description="Per-sample flag for deviations above half a sample period",
    )


# =============================================================================
# Timestamp Repair Endpoint
# =============================================================================


class RepairRequest(BaseModel):
    """Request schema for /timestamps/repair."""

    t_ms: list[float | None] = Field(
        description="Raw timestamps; null marks a missing value",
        examples=[[3.0, 1.0, 1.0, None, 2.0]],
    )


class RepairSummary(BaseModel):
    """Flags describing what a time column repair changed."""

    was_sorted: bool = Field(description="Input was already in order")
    had_dupes: bool = Field(description="Repeated timestamps were dropped")
    had_nans: bool = Field(description="Missing timestamps were dropped")
    num_dropped: int = Field(ge=0, description="Number of dropped samples")


class RepairResponse(RepairSummary):
    """Response schema for /timestamps/repair."""

    t_new: list[float] = Field(
        description="Repaired, strictly increasing timestamps",
        examples=[[1.0, 2.0, 3.0]],
    )
    new_index: list[int] = Field(
        description="Original positions of the surviving samples",
        examples=[[1, 4, 0]],
    )


# =============================================================================
# Sections Endpoint
# =============================================================================


class SectionsRequest(BaseModel):
    """Request schema for /sections."""

    t_ms: list[float | None] = Field(
        description="Timestamps in milliseconds, one per label",
        examples=[[0, 1, 2, 10, 11, 12]],
    )
    labels: list[Label] = Field(
        description="Label per timestamp; null becomes the empty label",
        examples=[["A", "A", "A", "A", "A", "A"]],
    )
    fs: float | None = Field(
        default=None,
        description="Sampling rate in Hz; estimated when omitted",
    )
    gap_n_dt: float | None = Field(
        default=None,
        description="Gap threshold in sample periods; service default when omitted",
    )
    repair_timestamps: bool = Field(
        default=False,
        description="Sort, deduplicate and drop missing timestamps first",
    )
    zero_time: bool = Field(
        default=False,
        description="Shift repaired timestamps so the first is 0 (with repair_timestamps)",
    )
    debug: bool = Field(
        default=False,
        description="Return the per-sample trace",
    )


class EventSchema(BaseModel):
    """A Start_/End_ event."""

    name: str = Field(description="Event name", examples=["Start_A"])
    t_ms: float = Field(description="Event timestamp in milliseconds", examples=[0.0])


class HitSectionSchema(BaseModel):
    """All sections of one label."""

    name: str = Field(description="Label", examples=["A"])
    hits: list[tuple[float, float]] = Field(
        description="(onset_ms, offset_ms) pairs in chronological order",
        examples=[[[0.0, 3.0], [10.0, 13.0]]],
    )
    desc: str = Field(description="Group description", examples=['Section demarked by "A".'])
    fs: float = Field(description="Sampling rate used", examples=[1000.0])


class SectionsResponse(BaseModel):
    """Response schema for /sections."""

    fs: float | None = Field(
        description="Resolved sampling rate in Hz (null for empty input)",
        examples=[1000.0],
    )
    dt_ms: float | None = Field(
        description="Sample period used in milliseconds",
        examples=[1.0],
    )
    events: list[EventSchema] = Field(description="Start/End events in order")
    sections: list[HitSectionSchema] = Field(description="Per-label section groups")
    repair: RepairSummary | None = Field(
        default=None,
        description="Repair summary (if repair_timestamps=true)",
    )
    zero_time_ms: float | None = Field(
        default=None,
        description="Timestamp subtracted from the time axis (if zero_time=true)",
    )
    debug_trace: str | None = Field(
        default=None,
        description="Per-sample trace (if debug=true)",
    )


# =============================================================================
# Error Response
# =============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(
        description="Error code for programmatic handling",
        examples=["INVALID_TIMESTAMPS", "INVALID_CONFIG"],
    )
    message: str = Field(
        description="Human-readable error message",
        examples=["t_ms must be strictly monotonically increasing"],
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error context",
    )


class ApiErrorResponse(BaseModel):
    """Standard error response wrapper."""

    error: ErrorDetail = Field(
        description="Error details",
    )
