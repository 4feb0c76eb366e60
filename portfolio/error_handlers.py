"""Global exception handlers.

Portfolio errors become ``{"detail": message, "kind": kind}`` with the
error's status code. Anything unexpected is logged and answered with a
generic 500 that leaks no internals.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .errors import PortfolioError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(PortfolioError)
    async def portfolio_error_handler(request: Request, exc: PortfolioError):
        log = logger.error if exc.status_code >= 500 else logger.info
        log("%s on %s: %s", exc.kind, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "An unexpected error occurred", "kind": "internal_error"},
        )
