from typing import Any, Dict, Optional, Union

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class AppException(Exception):
    def __init__(self, message: str,
                 error_code: Optional[str] = None,
                 status_code: int = HTTP_400_BAD_REQUEST,
                 details: Optional[Union[str, Dict[str, Any]]] = None,):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', status_code={self.status_code})"


class ValidationException(AppException):
    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        details: Optional[Union[str, Dict[str, Any]]] = None,
    ):
        self.field = field

        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=details,
            status_code=HTTP_400_BAD_REQUEST,
        )


class BadRequestError(AppException):
    """Exception raised for bad requests."""

    def __init__(
        self,
        message: str = "Bad request",
        details: Optional[Union[str, Dict[str, Any]]] = None,
    ):
        super().__init__(
            message=message,
            error_code="BAD_REQUEST",
            details=details,
            status_code=HTTP_400_BAD_REQUEST,
        )


class NotFoundError(AppException):
    """Exception raised when a resource is not found."""

    def __init__(
        self,
        resource: str = "Record",
        resource_id: Optional[Union[str, int]] = None,
        message: Optional[str] = None,
        details: Optional[Union[str, Dict[str, Any]]] = None,
    ):
        self.resource = resource
        self.resource_id = resource_id

        super().__init__(
            message=message or f"{resource} not found",
            error_code="NOT_FOUND",
            details=details,
            status_code=HTTP_404_NOT_FOUND,
        )


class DatabaseError(AppException):
    """Exception raised for failures reported by the database engine."""

    def __init__(
        self,
        message: str = "Database error occurred",
        operation: Optional[str] = None,
        details: Optional[Union[str, Dict[str, Any]]] = None,
        error_code: str = "DATABASE_ERROR",
    ):
        self.operation = operation

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        )


class ConstraintViolationError(DatabaseError):
    """Raised when the engine rejects a write because of a constraint."""

    def __init__(
        self,
        message: str = "Constraint violation",
        operation: Optional[str] = None,
        details: Optional[Union[str, Dict[str, Any]]] = None,
    ):
        super().__init__(
            message=message,
            operation=operation,
            details=details,
            error_code="CONSTRAINT_VIOLATION",
        )


class DatabaseConnectionError(DatabaseError):
    """Raised when no connection could be acquired or the connection broke."""

    def __init__(
        self,
        message: str = "Database connection failed",
        operation: Optional[str] = None,
        details: Optional[Union[str, Dict[str, Any]]] = None,
    ):
        super().__init__(
            message=message,
            operation=operation,
            details=details,
            error_code="CONNECTION_ERROR",
        )


class UpstreamServiceError(AppException):
    """Exception raised when an external API call fails."""

    def __init__(
        self,
        service: str,
        message: Optional[str] = None,
        details: Optional[Union[str, Dict[str, Any]]] = None,
    ):
        self.service = service

        super().__init__(
            message=message or f"Service '{service}' request failed",
            error_code="UPSTREAM_SERVICE_ERROR",
            details=details,
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        )


def error_content(exc: AppException) -> Dict[str, Any]:
    content: Dict[str, Any] = {"error": exc.message}
    if exc.details:
        content["details"] = exc.details
    return content


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_content(exc),
    )
