"""
Exception handlers that render application errors as JSON.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from feedback_hub.errors import FeedbackHubError, ValidationError

logger = logging.getLogger(__name__)


async def feedback_hub_error_handler(request: Request, exc: FeedbackHubError) -> JSONResponse:
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = ValidationError.from_errors(exc.errors())
    return JSONResponse(status_code=error.http_status, content=error.to_dict())


def register_error_handlers(app: FastAPI, environment: str = "production") -> None:
    """Install the structured and catch-all error handlers.

    Args:
        app: Application to configure
        environment: Exception text is exposed only in "development"
    """
    app.add_exception_handler(FeedbackHubError, feedback_hub_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "message": "Something went wrong!",
                "error": str(exc) if environment == "development" else "Internal server error",
            },
        )
