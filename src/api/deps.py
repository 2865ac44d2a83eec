"""FastAPI dependencies for the section extraction API.

This module provides dependency helpers for:
- Settings access
- Building section configurations from request parameters

Example:
    >>> from fastapi import Depends
    >>> from src.api.deps import get_settings

    >>> @app.get("/")
    >>> async def endpoint(settings = Depends(get_settings)):
    ...     return {"gap_n_dt": settings.default_gap_n_dt}
"""

from sections import SectionConfig

from .config import Settings, get_settings as _get_settings


# Re-export get_settings for dependency injection
get_settings = _get_settings


def get_section_config(
    settings: Settings | None = None,
    fs: float | None = None,
    gap_n_dt: float | None = None,
    is_debug: bool = False,
) -> SectionConfig:
    """Build a section configuration from settings and request overrides.

    Args:
        settings: Application settings. If None, uses get_settings().
        fs: Sampling rate override; estimated from data when None.
        gap_n_dt: Gap threshold override; settings default when None.
        is_debug: Whether to build the per-sample trace.

    Returns:
        SectionConfig with settings applied.

    Raises:
        SectionConfigError: If an override is out of range.
    """
    if settings is None:
        settings = get_settings()

    return SectionConfig(
        fs=fs,
        gap_n_dt=settings.default_gap_n_dt if gap_n_dt is None else gap_n_dt,
        is_debug=is_debug,
        description_template=settings.section_description_template,
        skip_empty_labels=settings.skip_empty_labels,
    )
