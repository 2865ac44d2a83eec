"""FastAPI application for stimulus section extraction.

This module provides a REST API with endpoints for:
- /health: Service health check
- /sampling-rate: Sampling rate estimation
- /timestamps/repair: Time column repair
- /sections: Section extraction

Example:
    To run the API server:

    $ uvicorn src.api.main:app --host 0.0.0.0 --port 8000
"""

from .main import app

__all__ = ["app"]
