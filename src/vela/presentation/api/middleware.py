"""HTTP middleware."""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, status

logger = logging.getLogger(__name__)


def register_middleware(app: FastAPI) -> None:
    """Attach app-level middleware."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        # unhandled errors escape call_next and are answered by the 500 handler
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Process-Time"] = f"{time.perf_counter() - start:.4f}"
            return response
        finally:
            logger.info(
                "%s %s -> %d (%.3fs)",
                request.method,
                request.url.path,
                status_code,
                time.perf_counter() - start,
            )
