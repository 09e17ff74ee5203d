"""
Error handling middleware.
"""

import traceback

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from job_allocation.api.schemas.common import ErrorResponse
from job_allocation.config.logging import get_logger
from job_allocation.domain.exceptions.allocation_error import (
    AllocationError,
    AssignmentNotFoundError,
    ConsultantNotFoundError,
    JobNotFoundError,
    JobRegionMissingError,
    NoEligibleConsultantError,
    ReassignmentReasonRequiredError,
)
from job_allocation.domain.exceptions.transaction_error import (
    TransactionError,
    TransactionTimeoutError,
)
from job_allocation.domain.exceptions.validation_error import ValidationError
from job_allocation.infrastructure.monitoring.metrics import record_error

logger = get_logger(__name__)

ALLOCATION_ERROR_STATUS = {
    JobNotFoundError: (404, "not_found"),
    ConsultantNotFoundError: (404, "not_found"),
    AssignmentNotFoundError: (404, "not_found"),
    NoEligibleConsultantError: (404, "no_eligible_consultant"),
    JobRegionMissingError: (400, "region_missing"),
    ReassignmentReasonRequiredError: (422, "reason_required"),
}


class ErrorHandlerMiddleware:
    """Error handling middleware for FastAPI."""

    def __init__(self, app: FastAPI):
        self.app = app
        self.add_error_handlers()

    def add_error_handlers(self) -> None:
        """Add custom error handlers to FastAPI app."""
        add_error_handlers(self.app)


def _error_response(status_code: int, error: str, message: str, error_type: str):
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error, message=message, type=error_type
        ).model_dump(exclude_none=True),
    )


def add_error_handlers(app: FastAPI) -> None:
    """Add custom error handlers to FastAPI app."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.warning("Validation error", error=str(exc), path=request.url.path)
        return _error_response(400, "Validation Error", str(exc), "validation_error")

    @app.exception_handler(AllocationError)
    async def allocation_error_handler(request: Request, exc: AllocationError):
        status_code, error_type = ALLOCATION_ERROR_STATUS.get(
            type(exc), (409, "allocation_error")
        )
        logger.warning(
            "Allocation error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return _error_response(status_code, "Allocation Error", str(exc), error_type)

    @app.exception_handler(TransactionError)
    async def transaction_error_handler(request: Request, exc: TransactionError):
        record_error(type(exc).__name__, "unit_of_work")
        logger.error(
            "Transaction error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        error_type = (
            "transaction_timeout"
            if isinstance(exc, TransactionTimeoutError)
            else "transaction_error"
        )
        return _error_response(
            503,
            "Service Unavailable",
            "The allocation could not be completed, please retry",
            error_type,
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        record_error(type(exc).__name__, "database")
        logger.error("Database error", error=str(exc), path=request.url.path)
        return _error_response(
            500, "Database Error", "A database error occurred", "database_error"
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return _error_response(
            exc.status_code, "HTTP Error", str(exc.detail), "http_error"
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        record_error(type(exc).__name__, "api")
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            traceback=traceback.format_exc(),
        )
        return _error_response(
            500,
            "Internal Server Error",
            "An unexpected error occurred",
            "internal_error",
        )
