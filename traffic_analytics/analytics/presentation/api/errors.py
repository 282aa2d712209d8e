"""
Translation of analytics errors into HTTP error envelopes.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ....common.exceptions import (
    TrafficAnalyticsError, InvalidInputError, DuplicateTimestampError,
    MalformedLineError, InsufficientHistoryError, StoreUnavailableError
)
from ....common.schemas import ErrorDetails
from ....common.logging import setup_logger

logger = setup_logger(__name__)

STATUS_CODES = {
    InvalidInputError: 400,
    MalformedLineError: 400,
    DuplicateTimestampError: 409,
    InsufficientHistoryError: 404,
    StoreUnavailableError: 503,
}

def status_for(error: TrafficAnalyticsError) -> int:
    for error_type, status in STATUS_CODES.items():
        if isinstance(error, error_type):
            return status
    return 500

def error_response(status_code: int, message: str, details: str, error_code: str) -> JSONResponse:
    body = ErrorDetails(message=message, details=details, error_code=error_code)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True)
    )

def register_error_handlers(app: FastAPI):
    @app.exception_handler(TrafficAnalyticsError)
    async def handle_analytics_error(request: Request, exc: TrafficAnalyticsError):
        status = status_for(exc)
        if status >= 500:
            logger.error(f"{exc.error_code} on {request.url.path}: {exc}")
        return error_response(status, str(exc), f"uri={request.url.path}", exc.error_code)
