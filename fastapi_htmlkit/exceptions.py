"""Exceptions raised while registering and rendering views."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    HTMLKIT_ERROR = "HTMLKIT_ERROR"
    FORMULA_NOT_FOUND = "FORMULA_NOT_FOUND"
    REGISTRATION_ERROR = "REGISTRATION_ERROR"
    EVALUATION_ERROR = "EVALUATION_ERROR"
    LOCALIZATION_ERROR = "LOCALIZATION_ERROR"


class HTMLKitException(Exception):
    """Base exception for view rendering errors with HTTP status code support.

    All rendering exceptions inherit from this class so a single exception
    handler can turn them into structured error responses.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.HTMLKIT_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize the exception.

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

    @property
    def identifier(self) -> str:
        """Stable identifier of the error kind."""
        return f"HTMLKit.{type(self).__name__}"

    @property
    def reason(self) -> str:
        """Human-readable reason, including the chained cause if any."""
        if self.__cause__ is not None:
            return f"{self.message}: {self.__cause__}"
        return self.message


class FormulaNotFoundError(HTMLKitException):
    """No formula has been registered for the view type."""

    def __init__(self, view_id: str):
        super().__init__(
            f"Unable to find a formula for view '{view_id}'",
            code=ErrorCode.FORMULA_NOT_FOUND,
            status_code=404,
            details={"view_id": view_id},
        )
        self.view_id = view_id


class RegistrationError(HTMLKitException):
    """The view could not be compiled into a formula."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.REGISTRATION_ERROR, status_code=500, details=details)


class EvaluationError(HTMLKitException):
    """A registered formula failed while rendering."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.EVALUATION_ERROR, status_code=500, details=details)


class LocalizationError(HTMLKitException):
    """The localization tables could not be loaded."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.LOCALIZATION_ERROR, status_code=500, details=details)
