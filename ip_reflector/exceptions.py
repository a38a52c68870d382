"""Custom exceptions for IP Reflector with proper HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error logging."""

    # Generic errors
    REFLECTOR_ERROR = "REFLECTOR_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Address errors
    ADDRESS_PARSE_ERROR = "ADDRESS_PARSE_ERROR"

    # Template errors
    TEMPLATE_COMPILE_ERROR = "TEMPLATE_COMPILE_ERROR"
    TEMPLATE_RENDER_ERROR = "TEMPLATE_RENDER_ERROR"

    # Server errors
    LISTEN_ERROR = "LISTEN_ERROR"


class ReflectorException(Exception):
    """Base exception for reflector errors with HTTP status code support.

    All custom exceptions should inherit from this class to ensure
    consistent error handling across the application.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.REFLECTOR_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize reflector exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class AddressParseException(ReflectorException):
    """A peer address could not be split into host and port."""

    def __init__(self, address: str, reason: str):
        self.address = address
        self.reason = reason
        super().__init__(
            f"address {address}: {reason}",
            code=ErrorCode.ADDRESS_PARSE_ERROR,
            status_code=400,
            details={"address": address, "reason": reason},
        )


class TemplateCompileException(ReflectorException):
    """Page template could not be loaded or compiled."""

    def __init__(self, message: str = "Failed to compile page template", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.TEMPLATE_COMPILE_ERROR,
            status_code=500,
            details=details,
        )


class TemplateRenderException(ReflectorException):
    """Page template failed while rendering a response."""

    def __init__(self, message: str = "Failed to render page template", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.TEMPLATE_RENDER_ERROR,
            status_code=500,
            details=details,
        )


class ListenException(ReflectorException):
    """Listening socket could not be created or bound."""

    def __init__(self, message: str = "Failed to bind listening socket", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.LISTEN_ERROR,
            status_code=500,
            details=details,
        )
