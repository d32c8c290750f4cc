"""
Request Logging

One access-log line per request, at a level that follows the outcome:
server failures (5xx: exhausted code space, unavailable storage) at ERROR,
everything else at INFO. A request that raises instead of returning a
response is logged with its traceback before the error propagates.
"""

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger("tinyurl.http")

RESPONSE_TIME_HEADER = "X-Response-Time-Ms"


def level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    return logging.INFO


def add_logging_middleware(app: FastAPI) -> None:
    """Register the access-log middleware on app."""

    @app.middleware("http")
    async def log_request(request: Request, call_next):
        started = time.perf_counter()
        client = request.client.host if request.client else "-"

        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.exception(
                f"{request.method} {request.url.path} failed after {elapsed_ms:.1f}ms client={client}"
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.log(
            level_for_status(response.status_code),
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"{elapsed_ms:.1f}ms client={client}",
        )
        response.headers[RESPONSE_TIME_HEADER] = f"{elapsed_ms:.1f}"
        return response
