"""
Turns exceptions into the API's error envelope and logs them.
Every error leaves the API as {"error": {code, message, timestamp, request_id, details?}}.
"""

from typing import Dict, Any, Optional, List
from datetime import datetime, timezone
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from app.utils.exceptions import APIException, ValidationError
import logging
import uuid

logger = logging.getLogger(__name__)

# Substring of the driver message -> client-facing reason
CONSTRAINT_MESSAGES = (
    ("unique", "Duplicate value for unique field"),
    ("foreign key", "Referenced record does not exist"),
    ("not null", "Required field cannot be empty"),
)


class ErrorHandlerService:
    """Builds error responses for the exception handlers registered in app.main."""

    @staticmethod
    def format_error_response(
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build the error envelope.

        Args:
            error_code: Machine-readable code such as NOT_FOUND
            message: Text shown to the client
            details: Per-field problems; left out when empty
            request_id: ID echoed in the X-Request-ID header

        Returns:
            Dictionary with a single "error" key
        """
        error = {
            "code": error_code,
            "message": message,
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
        }
        if details:
            error["details"] = details
        if request_id:
            error["request_id"] = request_id
        return {"error": error}

    @staticmethod
    def _respond(
        status_code: int,
        error_code: str,
        message: str,
        request: Optional[Request],
        details: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
        log_detail: Optional[str] = None,
        exc_info: bool = False,
    ) -> JSONResponse:
        request_id = ErrorHandlerService._request_id(request)
        path = request.url.path if request else None

        log = logger.error if status_code >= 500 else logger.warning
        log(
            f"{status_code} {error_code} [{request_id}] {path}: {log_detail or message}",
            exc_info=exc_info
        )

        content = ErrorHandlerService.format_error_response(error_code, message, details, request_id)
        return JSONResponse(status_code=status_code, content=jsonable_encoder(content), headers=headers)

    @staticmethod
    def handle_api_exception(exception: APIException, request: Optional[Request] = None) -> JSONResponse:
        details = exception.field_errors if isinstance(exception, ValidationError) else None
        return ErrorHandlerService._respond(
            exception.status_code,
            exception.error_code or "API_ERROR",
            exception.detail,
            request,
            details=details,
            headers=exception.headers,
        )

    @staticmethod
    def handle_validation_error(exception, request: Optional[Request] = None) -> JSONResponse:
        """
        Report request or pydantic validation failures as 400.

        Each entry in details names the offending location, e.g. "body -> name".
        """
        details = [
            {
                "field": " -> ".join(str(part) for part in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
                "input": error.get("input"),
            }
            for error in exception.errors()
        ]
        return ErrorHandlerService._respond(
            400,
            "VALIDATION_ERROR",
            "Request validation failed",
            request,
            details=details,
            log_detail=f"{len(details)} field errors",
        )

    @staticmethod
    def handle_database_error(exception: SQLAlchemyError, request: Optional[Request] = None) -> JSONResponse:
        """
        Integrity errors become 409 with a short reason; anything else is a 500.
        Driver messages are only logged, never returned.
        """
        if not isinstance(exception, IntegrityError):
            return ErrorHandlerService._respond(
                500, "DATABASE_ERROR", "Database operation failed", request,
                log_detail=str(exception), exc_info=True
            )

        driver_message = str(exception.orig).lower()
        message = "Data integrity constraint violation"
        for needle, reason in CONSTRAINT_MESSAGES:
            if needle in driver_message:
                message = f"Constraint violation: {reason}"
                break

        return ErrorHandlerService._respond(
            409, "INTEGRITY_ERROR", message, request, log_detail=str(exception.orig)
        )

    @staticmethod
    def handle_http_exception(exception: HTTPException, request: Optional[Request] = None) -> JSONResponse:
        return ErrorHandlerService._respond(
            exception.status_code,
            f"HTTP_{exception.status_code}",
            str(exception.detail),
            request,
            headers=getattr(exception, "headers", None),
        )

    @staticmethod
    def handle_unexpected_error(exception: Exception, request: Optional[Request] = None) -> JSONResponse:
        return ErrorHandlerService._respond(
            500,
            "INTERNAL_SERVER_ERROR",
            "An unexpected error occurred. Please try again later.",
            request,
            log_detail=f"{type(exception).__name__}: {exception}",
            exc_info=True,
        )

    @staticmethod
    def _request_id(request: Optional[Request]) -> str:
        """The ID set by the request logging middleware, or a fresh short one."""
        request_id = getattr(request.state, "request_id", None) if request is not None else None
        return request_id or str(uuid.uuid4())[:8]
