"""Error handling for the submission API"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import logging

from formrelay.errors import BotCheckFailed, DeliveryFailed, MissingField, SubmissionError

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Global error handler middleware"""

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            logger.exception(f"Unhandled error on {request.url.path}: {type(exc).__name__}")

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Internal server error"}
            )


def setup_error_handlers(app: FastAPI, expose_bot_score: bool = False):
    """
    Map pipeline errors to HTTP responses

    Args:
        app: FastAPI application instance
        expose_bot_score: Include score/action in 403 bodies
    """

    @app.exception_handler(SubmissionError)
    async def submission_error_handler(request: Request, exc: SubmissionError):
        # Class and status only; exception text may echo submitter input
        if isinstance(exc, DeliveryFailed):
            logger.error(f"{type(exc).__name__} ({exc.status_code}): {exc.provider_error}")
        elif exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} ({exc.status_code}): {exc.detail or ''}")
        else:
            logger.warning(f"Submission rejected: {type(exc).__name__} ({exc.status_code})")

        content = {"error": exc.public_message}
        if isinstance(exc, MissingField):
            content["missing"] = exc.fields
        if isinstance(exc, BotCheckFailed) and expose_bot_score:
            content["score"] = exc.result.score
            content["action"] = exc.result.action

        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("Submission rejected: malformed request body (400)")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Request body must be a JSON object"}
        )
