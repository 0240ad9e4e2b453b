"""
Service layer custom exceptions.

Report assembly raises these instead of bare exceptions so the HTTP surface can
map every failure to exactly one status code and one human-readable message.
"""

from typing import Any, Dict, Optional


class ServiceException(Exception):
    """Base exception for all service layer errors."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.service = service
        self.operation = operation
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        if self.service and self.operation:
            return f"[{self.service}.{self.operation}] {self.message}"
        return self.message


class PlayerReportError(ServiceException):
    """Raised by PlayerReportService when a report cannot be produced."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            service="PlayerReportService",
            operation=operation,
            context=context,
            original_error=original_error,
        )
        self.status_code = status_code


class InvalidReportQueryError(PlayerReportError):
    """Raised for malformed caller input (bad Riot ID, unknown region)."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=400,
            operation="validate_query",
            context=context,
        )
