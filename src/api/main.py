"""FastAPI application for stimulus section extraction.

This module provides the main FastAPI application with endpoints for:
- GET /health: Service health check
- POST /sampling-rate: Sampling rate estimation with timing diagnostics
- POST /timestamps/repair: Time column repair (sort, deduplicate, drop NaN)
- POST /sections: Section extraction from a timestamped label column

Example:
    Run with uvicorn:

    $ uvicorn src.api.main:app --host 0.0.0.0 --port 8000
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from sections import analyze_list, extract_sections
from timing import estimate_fs, make_strictly_increasing

from .config import Settings, get_settings
from .deps import get_section_config
from .errors import InvalidInputError, register_exception_handlers
from .logging import add_middleware, setup_logging
from .schemas import (
    EventSchema,
    HealthResponse,
    HitSectionSchema,
    RepairRequest,
    RepairResponse,
    RepairSummary,
    SamplingRateRequest,
    SamplingRateResponse,
    SectionsRequest,
    SectionsResponse,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Application Lifecycle
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler: set up logging on startup."""
    settings: Settings = app.state.settings

    setup_logging(settings.log_level)
    logger.info(
        "Starting %s v%s",
        settings.app_name,
        settings.app_version,
    )

    yield

    logger.info("Application shutdown")


# =============================================================================
# Application Factory
# =============================================================================


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Extract labeled sections from timestamped stimulus columns.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_middleware(app)
    register_exception_handlers(app)
    register_routes(app)

    return app


def _check_size(settings: Settings, num_samples: int) -> None:
    if num_samples > settings.max_samples:
        raise InvalidInputError(
            message=f"Too many samples: {num_samples} > {settings.max_samples}",
            details={"num_samples": num_samples, "max_samples": settings.max_samples},
        )


def register_routes(app: FastAPI) -> None:
    """Register all API routes on the application.

    Args:
        app: The FastAPI application.
    """

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    def health(request: Request) -> HealthResponse:
        settings: Settings = request.app.state.settings
        return HealthResponse(status="ok", version=settings.app_version)

    @app.post(
        "/sampling-rate",
        response_model=SamplingRateResponse,
        tags=["Timing"],
        summary="Estimate sampling rate",
        description="Estimate the nominal sampling rate from the median sample spacing.",
    )
    def sampling_rate(body: SamplingRateRequest, request: Request) -> SamplingRateResponse:
        _check_size(request.app.state.settings, len(body.t_ms))

        estimate = estimate_fs(body.t_ms, include_diagnostics=True)
        logger.info(
            "Sampling rate estimated: samples=%d fs=%.2f off_pct=%.2f",
            len(body.t_ms),
            estimate.fs,
            estimate.percent_off_by_more_than_half_dt,
        )

        return SamplingRateResponse(
            fs=estimate.fs,
            dt_ms=estimate.dt_ms,
            percent_off_by_more_than_half_dt=estimate.percent_off_by_more_than_half_dt,
            dt_error_ms=estimate.dt_error_ms.tolist() if body.include_arrays else None,
            off_by_more_than_half_dt=(
                estimate.off_by_more_than_half_dt.tolist() if body.include_arrays else None
            ),
        )

    @app.post(
        "/timestamps/repair",
        response_model=RepairResponse,
        tags=["Timing"],
        summary="Repair a time column",
        description="Sort, deduplicate and drop missing timestamps.",
    )
    def repair_timestamps(body: RepairRequest, request: Request) -> RepairResponse:
        _check_size(request.app.state.settings, len(body.t_ms))

        repair = make_strictly_increasing(body.t_ms)

        return RepairResponse(
            **repair.to_dict(),
            t_new=repair.t_new.tolist(),
            new_index=repair.new_index.tolist(),
        )

    @app.post(
        "/sections",
        response_model=SectionsResponse,
        tags=["Sections"],
        summary="Extract sections",
        description="Segment a timestamped label column into Start/End events and per-label sections.",
    )
    def sections(body: SectionsRequest, request: Request) -> SectionsResponse:
        settings: Settings = request.app.state.settings
        _check_size(settings, max(len(body.t_ms), len(body.labels)))

        config = get_section_config(
            settings,
            fs=body.fs,
            gap_n_dt=body.gap_n_dt,
            is_debug=body.debug,
        )

        start_time = time.perf_counter()

        repair = None
        zero_time_ms = None
        if body.repair_timestamps:
            recording = extract_sections(
                body.t_ms, body.labels, config, zero_time=body.zero_time
            )
            result = recording.sections
            repair = RepairSummary(**recording.repair.to_dict())
            if body.zero_time:
                zero_time_ms = recording.zero_time_ms
        else:
            result = analyze_list(body.t_ms, body.labels, config)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Sections extracted: samples=%d runs=%d labels=%d elapsed_ms=%.2f",
            len(body.t_ms),
            result.run_count,
            len(result.sections),
            elapsed_ms,
        )

        return SectionsResponse(
            fs=result.fs,
            dt_ms=result.dt_ms,
            events=[EventSchema(name=e.name, t_ms=e.t_ms) for e in result.events],
            sections=[
                HitSectionSchema(name=g.name, hits=g.hits, desc=g.desc, fs=g.fs)
                for g in result.sections
            ],
            repair=repair,
            zero_time_ms=zero_time_ms,
            debug_trace=result.debug_trace,
        )


# =============================================================================
# Application Instance
# =============================================================================


app = create_app()
