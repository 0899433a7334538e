"""Property-based tests for error conversion and the error handling service."""

import json
from unittest.mock import patch

import httpx
import pytest
from hypothesis import given, settings, strategies as st

from src.services import (
    ApiResponseError,
    AppError,
    ConfigurationError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    NetworkError,
    ValidationError,
)


def make_status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "http://portal.test/api/games?category=c1")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(f"status {status_code}", request=request, response=response)


class TestErrorConversion:
    """Tests for mapping raw exceptions onto application errors."""

    @given(
        error_type=st.sampled_from(["connect", "timeout", "request"]),
        error_message=st.text(min_size=1, max_size=80),
    )
    @settings(deadline=2000)
    def test_transport_errors_become_network_errors(self, error_type: str, error_message: str) -> None:
        """
        **Property: every httpx transport failure is reported as a network error**

        The user-facing message is fixed text; the raw message only appears in
        the technical details.
        """
        if error_type == "connect":
            error: Exception = httpx.ConnectError(error_message)
        elif error_type == "timeout":
            error = httpx.ReadTimeout(error_message)
        else:
            error = httpx.RequestError(error_message)

        service = ErrorHandlingService()
        user_error = service.handle_error(error, operation="fetch_games", component="game_list")

        assert user_error.category == ErrorCategory.NETWORK
        assert user_error.recoverable
        assert user_error.technical_details is not None
        assert type(error).__name__ in user_error.technical_details

    @given(st.sampled_from([400, 401, 403, 404, 418, 429, 500, 502, 503, 504]))
    @settings(deadline=2000)
    def test_http_status_errors_keep_status(self, status_code: int) -> None:
        """
        **Property: HTTP status failures carry their status code and URL**
        """
        service = ErrorHandlingService()
        user_error = service.handle_error(
            make_status_error(status_code), operation="fetch_games", component="game_list"
        )

        recorded = service.get_recent_errors(1)[0]
        assert isinstance(recorded, NetworkError)
        assert recorded.status_code == status_code
        assert recorded.url == "http://portal.test/api/games?category=c1"
        assert user_error.message

    def test_unknown_status_message(self) -> None:
        assert ErrorHandlingService._get_http_error_message(418) == "HTTP error 418 occurred."

    def test_json_decode_error_is_api_response_error(self) -> None:
        """Decode errors are ValueErrors but describe a bad backend payload."""
        error = json.JSONDecodeError("Expecting value", "<html>", 0)
        service = ErrorHandlingService()

        user_error = service.handle_error(error, operation="fetch", component="favourites")

        assert user_error.category == ErrorCategory.API_RESPONSE
        assert user_error.severity == ErrorSeverity.WARNING

    @pytest.mark.parametrize("error", [KeyError("_id"), TypeError("unhashable type")])
    def test_malformed_payload_is_api_response_error(self, error: Exception) -> None:
        user_error = ErrorHandlingService().handle_error(error, operation="fetch", component="c")
        assert user_error.category == ErrorCategory.API_RESPONSE

    def test_value_error_is_validation_error(self) -> None:
        service = ErrorHandlingService()
        user_error = service.handle_error(
            ValueError("'popup' is not a valid FavouriteAction"),
            operation="fetch",
            component="favourites",
            context={"field": "actionType", "value": "popup"},
        )

        recorded = service.get_recent_errors(1)[0]
        assert isinstance(recorded, ValidationError)
        assert recorded.field == "actionType"
        assert user_error.category == ErrorCategory.VALIDATION

    def test_app_errors_pass_through(self) -> None:
        original = ApiResponseError("Backend reported failure", endpoint="/api/favourites")
        service = ErrorHandlingService()

        service.handle_error(original, operation="fetch", component="favourites")

        assert service.get_recent_errors(1)[0] is original

    def test_unexpected_errors_keep_context(self) -> None:
        service = ErrorHandlingService()
        user_error = service.handle_error(
            RuntimeError("boom"),
            operation="render",
            component="home",
            context={"screen": "home"},
        )

        recorded = service.get_recent_errors(1)[0]
        assert user_error.category == ErrorCategory.UNEXPECTED
        assert recorded.context is not None
        assert recorded.context.component == "home"
        assert recorded.context.details == {"screen": "home"}
        assert "RuntimeError: boom" in (user_error.technical_details or "")


class TestErrorLogging:
    """Tests for how handled errors are logged."""

    def test_warnings_logged_as_warning(self) -> None:
        service = ErrorHandlingService()
        with patch("src.services.errors.log") as mock_logger:
            service.handle_error(
                ApiResponseError("Backend reported failure"), operation="fetch", component="tabs"
            )

        assert mock_logger.warning.called
        assert not mock_logger.error.called
        kwargs = mock_logger.warning.call_args.kwargs
        assert kwargs["category"] == "api_response"
        assert kwargs["component"] == "tabs"

    def test_errors_logged_with_technical_details(self) -> None:
        service = ErrorHandlingService()
        with patch("src.services.errors.log") as mock_logger:
            service.handle_error(
                httpx.ConnectError("connection refused"),
                operation="fetch_categories",
                component="category_provider",
                context={"url": "http://portal.test/api/game-categories"},
            )

        assert mock_logger.error.called
        kwargs = mock_logger.error.call_args.kwargs
        assert kwargs["operation"] == "fetch_categories"
        assert "connection refused" in kwargs["technical_details"]
        assert "http://portal.test/api/game-categories" in kwargs["technical_details"]


class TestErrorHistory:
    """Tests for the bounded error history."""

    @given(st.integers(min_value=0, max_value=30), st.integers(min_value=1, max_value=10))
    @settings(deadline=2000)
    def test_history_is_bounded(self, error_count: int, max_size: int) -> None:
        """
        **Property: history never exceeds its size and keeps the newest errors**
        """
        service = ErrorHandlingService(max_history_size=max_size)
        for index in range(error_count):
            service.handle_error(ValueError(f"error {index}"), operation="op", component="c")

        recent = service.get_recent_errors(max_size + 5)
        assert len(recent) == min(error_count, max_size)
        if recent:
            assert recent[-1].message == f"error {error_count - 1}"

    def test_zero_size_history_keeps_nothing(self) -> None:
        service = ErrorHandlingService(max_history_size=0)
        for index in range(3):
            _ = service.handle_error(ValueError(f"error {index}"), operation="op", component="c")

        assert service.get_recent_errors() == []

    def test_counts_by_category(self) -> None:
        service = ErrorHandlingService()
        service.handle_error(httpx.ConnectError("down"), operation="op", component="c")
        service.handle_error(httpx.ConnectError("down"), operation="op", component="c")
        service.handle_error(KeyError("games"), operation="op", component="c")

        assert service.get_error_count_by_category() == {
            ErrorCategory.NETWORK: 2,
            ErrorCategory.API_RESPONSE: 1,
        }

        service.clear_history()
        assert service.get_recent_errors() == []


class TestErrorTypes:
    """Tests for the exception classes themselves."""

    def test_network_error_details(self) -> None:
        error = NetworkError(
            "Request failed",
            original_error=httpx.ConnectError("refused"),
            url="http://portal.test/api/favourites",
            status_code=502,
        )
        assert error.category == ErrorCategory.NETWORK
        assert error.technical_details is not None
        assert error.technical_details.startswith("Status: 502")
        assert "URL: http://portal.test/api/favourites" in error.technical_details

    def test_configuration_error_details(self) -> None:
        error = ConfigurationError(
            "Invalid log level",
            setting="log_level",
            current_value="LOUD",
            expected="DEBUG, INFO, WARNING, ERROR or CRITICAL",
        )
        friendly = error.to_user_friendly()
        assert friendly.category == ErrorCategory.CONFIGURATION
        assert friendly.severity == ErrorSeverity.ERROR
        assert "Setting: log_level" in (friendly.technical_details or "")

    def test_app_error_is_exception(self) -> None:
        with pytest.raises(AppError):
            raise ApiResponseError("bad payload")
