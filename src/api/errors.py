"""
Application-wide exception handlers.

Storage faults are reported to clients without internal detail; the
repository adapter has already logged the underlying error.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.domain.exceptions import PersistenceFailure

logger = logging.getLogger(__name__)


async def persistence_failure_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Persistence failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Service temporarily unavailable"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the handlers above to an application."""
    app.add_exception_handler(PersistenceFailure, persistence_failure_handler)
