"""Error handling for the Khelaghor terminal portal.

Failures are sorted into a few kinds (transport, backend response,
configuration, validation). `ErrorHandlingService` turns any exception into
one of them, logs it, and remembers the most recent ones.

Components never show these errors directly: a failed fetch is reported here
and the component falls back to its empty rendering.
"""

import json
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
import structlog

log = structlog.stdlib.get_logger()


class ErrorCategory(Enum):
    """What kind of failure occurred."""
    NETWORK = "network"
    API_RESPONSE = "api_response"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    UNEXPECTED = "unexpected"


class ErrorSeverity(Enum):
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ErrorContext:
    """Where an unexpected error happened."""
    operation: str
    component: str
    details: dict[str, Any]


@dataclass(frozen=True)
class UserFriendlyError:
    """An error as it may be shown to the user."""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    technical_details: str | None = None
    recoverable: bool = True


def _details(*lines: str | None) -> str | None:
    """Join the non-empty detail lines, or None when there are none."""
    present = [line for line in lines if line]
    return "\n".join(present) if present else None


class AppError(Exception):
    """Base class for every error the portal reports."""

    category: ErrorCategory = ErrorCategory.UNEXPECTED
    severity: ErrorSeverity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        technical_details: str | None = None,
        recoverable: bool = True,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if category is not None:
            self.category = category
        if severity is not None:
            self.severity = severity
        self.technical_details = technical_details
        self.recoverable = recoverable
        self.context = context

    def to_user_friendly(self) -> UserFriendlyError:
        return UserFriendlyError(
            message=self.message,
            category=self.category,
            severity=self.severity,
            technical_details=self.technical_details,
            recoverable=self.recoverable,
        )


class NetworkError(AppError):
    """Transport failure or non-success HTTP status from the backend."""

    category = ErrorCategory.NETWORK

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(
            message,
            technical_details=_details(
                f"Status: {status_code}" if status_code else None,
                f"URL: {url}" if url else None,
                f"{type(original_error).__name__}: {original_error}" if original_error else None,
            ),
        )
        self.original_error = original_error
        self.url = url
        self.status_code = status_code


class ApiResponseError(AppError):
    """The backend answered, but with `success: false` or an unusable body."""

    category = ErrorCategory.API_RESPONSE
    severity = ErrorSeverity.WARNING

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(
            message,
            technical_details=_details(
                f"Endpoint: {endpoint}" if endpoint else None,
                f"Payload: {str(payload)[:200]}" if payload is not None else None,
            ),
        )
        self.endpoint = endpoint
        self.payload = payload


class ValidationError(AppError):
    """A value from the backend or the user was not acceptable."""

    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.WARNING

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        super().__init__(
            message,
            technical_details=_details(
                f"Field: {field}" if field else None,
                f"Value: {str(value)[:100]}" if value is not None else None,
            ),
        )
        self.field = field
        self.value = value


class ConfigurationError(AppError):
    """The configuration cannot be used or saved."""

    category = ErrorCategory.CONFIGURATION

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        current_value: Any = None,
        expected: str | None = None,
    ) -> None:
        super().__init__(
            message,
            technical_details=_details(
                f"Setting: {setting}" if setting else None,
                f"Current: {current_value}" if current_value is not None else None,
                f"Expected: {expected}" if expected else None,
            ),
        )
        self.setting = setting
        self.current_value = current_value
        self.expected = expected


HTTP_STATUS_MESSAGES: dict[int, str] = {
    400: "The portal rejected the request.",
    401: "Authentication required.",
    403: "Access to this resource is not allowed.",
    404: "The requested resource was not found.",
    429: "Too many requests. Please wait before trying again.",
    500: "The portal server encountered an error.",
    502: "The portal server is temporarily unavailable.",
    503: "The portal service is temporarily unavailable.",
    504: "The portal server took too long to respond.",
}


class ErrorHandlingService:
    """Classifies, logs and records errors.

    The history is bounded; the oldest entry is dropped once it is full.
    """

    def __init__(self, max_history_size: int = 100) -> None:
        self._history: list[tuple[float, AppError]] = []
        self._max_history_size = max_history_size
        log.info("Error handling service initialized", max_history_size=max_history_size)

    def handle_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> UserFriendlyError:
        """Classify and log an error, returning what the user may be told.

        Args:
            error: The exception that occurred
            operation: What was being done, e.g. "fetch_games"
            component: Which component was doing it
            context: Extra key/value details; "url", "field" and "value"
                are copied onto the converted error

        Returns:
            User-friendly error representation
        """
        app_error = self.classify(error, operation, component, context or {})
        self._log_error(app_error, operation, component, context)

        self._history.append((time.time(), app_error))
        overflow = len(self._history) - self._max_history_size
        if overflow > 0:
            del self._history[:overflow]

        return app_error.to_user_friendly()

    def classify(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any],
    ) -> AppError:
        """Map an arbitrary exception onto the portal's error kinds."""
        if isinstance(error, AppError):
            return error

        url = context.get("url")
        match error:
            case httpx.ConnectError():
                return NetworkError("Unable to connect to the portal server.", error, url)
            case httpx.TimeoutException():
                return NetworkError("The portal server did not respond in time.", error, url)
            case httpx.HTTPStatusError():
                status_code = error.response.status_code
                return NetworkError(
                    self._get_http_error_message(status_code),
                    error,
                    str(error.request.url),
                    status_code,
                )
            case httpx.RequestError():
                return NetworkError("A network error occurred while contacting the portal.", error, url)
            # Before ValueError: a decode error is a bad payload, not bad input
            case json.JSONDecodeError():
                return ApiResponseError("The portal returned a body that is not valid JSON.", endpoint=url)
            case KeyError() | TypeError():
                return ApiResponseError(f"The portal returned an unexpected payload: {error}", endpoint=url)
            case ValueError():
                return ValidationError(str(error), field=context.get("field"), value=context.get("value"))

        return AppError(
            "An unexpected error occurred.",
            technical_details=f"{type(error).__name__}: {error}",
            context=ErrorContext(operation=operation, component=component, details=context),
        )

    @staticmethod
    def _get_http_error_message(status_code: int) -> str:
        return HTTP_STATUS_MESSAGES.get(status_code, f"HTTP error {status_code} occurred.")

    def _log_error(
        self,
        error: AppError,
        operation: str,
        component: str,
        context: dict[str, Any] | None,
    ) -> None:
        emit = log.warning if error.severity == ErrorSeverity.WARNING else log.error
        emit(
            "Error occurred",
            error_message=error.message,
            category=error.category.value,
            severity=error.severity.value,
            operation=operation,
            component=component,
            technical_details=error.technical_details,
            context=context,
        )

    def get_recent_errors(self, count: int = 10) -> list[AppError]:
        """Most recent errors, oldest first."""
        return [error for _, error in self._history[-count:]]

    def get_error_count_by_category(self) -> dict[ErrorCategory, int]:
        counts: dict[ErrorCategory, int] = {}
        for _, error in self._history:
            counts[error.category] = counts.get(error.category, 0) + 1
        return counts

    def clear_history(self) -> None:
        self._history.clear()


_error_service: ErrorHandlingService | None = None


def get_error_service() -> ErrorHandlingService:
    """Shared error service, created on first use."""
    global _error_service
    if _error_service is None:
        _error_service = ErrorHandlingService()
    return _error_service


def handle_error(
    error: Exception,
    operation: str,
    component: str,
    context: dict[str, Any] | None = None,
) -> UserFriendlyError:
    """Report an error through the shared service."""
    return get_error_service().handle_error(error, operation, component, context)
