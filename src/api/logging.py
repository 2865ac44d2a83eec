"""Log formatting and per-request context for the section service.

Every log line is a single ``key=value`` record tagged with the ID of the
request being served, so a request's section trace and its timing line can
be grepped together.

Example:
    >>> from src.api.logging import setup_logging
    >>> setup_logging("DEBUG")
"""

import logging
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


request_id_var: ContextVar[str] = ContextVar("request_id", default="")

access_logger = logging.getLogger("api.access")


class StructuredFormatter(logging.Formatter):
    """``timestamp=... level=... logger=... request_id=... message="..."``.

    Newlines in messages and tracebacks are folded to `` | ``.
    """

    @staticmethod
    def _quote(text: str) -> str:
        return '"' + text.replace('"', '\\"').replace("\n", " | ") + '"'

    def format(self, record: logging.LogRecord) -> str:
        line = (
            f"timestamp={self.formatTime(record, self.datefmt)} "
            f"level={record.levelname} logger={record.name} "
            f"request_id={request_id_var.get() or '-'} "
            f"message={self._quote(record.getMessage())}"
        )
        if record.exc_info:
            line += f" exception={self._quote(self.formatException(record.exc_info))}"
        return line


def setup_logging(log_level: str = "INFO") -> None:
    """Send all records to stdout through StructuredFormatter."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter(datefmt="%Y-%m-%dT%H:%M:%S%z"))

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level.upper())

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and time it.

    The ID is taken from an incoming X-Request-ID header or generated, kept
    on ``request.state.request_id`` and in ``request_id_var`` while the
    request runs, and echoed back with an X-Response-Time header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - start) * 1000
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"
            access_logger.info(
                "%s %s -> %d in %.2fms",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )
            return response
        finally:
            request_id_var.reset(token)


def add_middleware(app: FastAPI) -> None:
    """Install RequestContextMiddleware on the application."""
    app.add_middleware(RequestContextMiddleware)
