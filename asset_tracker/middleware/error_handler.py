import logging
import traceback
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from asset_tracker.schemas.common import error_body
from asset_tracker.utils.exceptions import AppException, ErrorCode

logger = logging.getLogger(__name__)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle all AppException subclasses (our custom exceptions)."""
    detail = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(
            detail.get("message", "An error occurred"),
            detail.get("code", ErrorCode.INTERNAL_SERVER_ERROR),
            detail.get("details"),
        ),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle Pydantic validation errors.
    Converts FastAPI's default 422 format into our standardized 400 response.
    """
    details = []
    for error in exc.errors():
        # loc is a tuple like ("body", "issue")
        loc = error.get("loc", [])
        field = ".".join(str(l) for l in loc if l != "body") if loc else "unknown"
        details.append({
            "field": field,
            "message": error.get("msg", "Invalid value"),
        })

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation error. Please check your input.", ErrorCode.VALIDATION_ERROR, details),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """
    Handle SQLAlchemy IntegrityError (foreign key and unique violations).
    Prevents raw DB errors from leaking to the client.
    """
    logger.warning(f"IntegrityError on {request.method} {request.url}: {exc.orig}")
    if "foreign key" in str(exc.orig).lower():
        message, code = "Referenced record does not exist or is still in use.", ErrorCode.REFERENCE_ERROR
    else:
        message, code = "A record with this data already exists.", ErrorCode.DUPLICATE_ENTRY
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=error_body(message, code))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all handler for unexpected exceptions (store, filesystem).
    Logs the full traceback, returns a safe 500 response.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url}\n"
        f"{traceback.format_exc()}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("An unexpected error occurred. Please try again later.",
                           ErrorCode.INTERNAL_SERVER_ERROR),
    )
