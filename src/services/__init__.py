"""Service layer for backend access and view state."""

from .catalog import Carousel, CategoryProvider, GameListView, LoadState, PromoFeed
from .config import ConfigurationService, ValidationResult
from .errors import (
    ApiResponseError,
    AppError,
    ConfigurationError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    NetworkError,
    UserFriendlyError,
    ValidationError,
    get_error_service,
    handle_error,
)
from .http_client import HttpClientService
from .i18n import Language, LanguageService, parse_language
from .portal_api import PortalApiService

__all__ = [
    "ApiResponseError",
    "AppError",
    "Carousel",
    "CategoryProvider",
    "ConfigurationError",
    "ConfigurationService",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "GameListView",
    "HttpClientService",
    "Language",
    "LanguageService",
    "LoadState",
    "NetworkError",
    "PortalApiService",
    "PromoFeed",
    "UserFriendlyError",
    "ValidationError",
    "ValidationResult",
    "get_error_service",
    "handle_error",
    "parse_language",
]
