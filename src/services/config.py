"""Configuration service for managing application settings."""

import json
from pathlib import Path
from urllib.parse import urlparse

import structlog

from ..models import AppConfig
from .errors import ConfigurationError
from .i18n import Language

log = structlog.stdlib.get_logger()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ConfigValue = str | int | float | bool | None


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for loading, validating and saving the portal configuration."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or Path.home() / ".config" / "khelaghor-tui" / "config.json"
        log.info("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> AppConfig:
        """Load configuration from file or return default configuration."""
        if not self.config_path.exists():
            log.info("Configuration file not found, using defaults")
            return self._get_default_config()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data: dict[str, ConfigValue] = json.load(f)

            config = self._dict_to_config(data)
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return self._get_default_config()

            log.info("Configuration loaded successfully")
            return config

        except (OSError, json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return self._get_default_config()

    def save_config(self, config: AppConfig) -> None:
        """Save configuration to file.

        Raises:
            ConfigurationError: If the configuration does not validate
        """
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ConfigurationError(
                f"Invalid configuration: {', '.join(validation_result.errors)}",
                expected="a configuration that passes validation",
            )

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self._config_to_dict(config), f, indent=2, ensure_ascii=False)

            log.info("Configuration saved successfully")

        except OSError as e:
            log.error("Failed to save configuration", error=str(e))
            raise

    def validate_config(self, config: AppConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        # api_base_url: absolute http(s) URL, no trailing slash (assets are concatenated)
        parsed = urlparse(config.api_base_url) if isinstance(config.api_base_url, str) else None
        if parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append("api_base_url must be an absolute http or https URL")
        elif config.api_base_url.endswith("/"):
            errors.append("api_base_url must not end with a slash")

        if config.request_timeout is not None:
            if isinstance(config.request_timeout, bool) or not isinstance(config.request_timeout, (int, float)):
                errors.append("request_timeout must be a number or None")
            elif config.request_timeout <= 0:
                errors.append("request_timeout must be positive")

        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}")

        valid_languages = [lang.value for lang in Language]
        if config.language not in valid_languages:
            errors.append(f"language must be one of: {', '.join(valid_languages)}")

        return ValidationResult(len(errors) == 0, errors)

    def with_overrides(
        self,
        config: AppConfig,
        api_base_url: str | None = None,
        log_level: str | None = None,
    ) -> AppConfig:
        """Apply command-line overrides on top of a loaded configuration.

        Raises:
            ConfigurationError: If an override makes the configuration invalid
        """
        overridden = AppConfig(
            api_base_url=(api_base_url.rstrip("/") if api_base_url else config.api_base_url),
            request_timeout=config.request_timeout,
            log_level=(log_level.upper() if log_level else config.log_level),
            language=config.language,
        )
        validation_result = self.validate_config(overridden)
        if not validation_result.is_valid:
            raise ConfigurationError(
                f"Invalid command-line override: {', '.join(validation_result.errors)}",
                setting="api_base_url" if api_base_url else "log_level",
                current_value=api_base_url or log_level,
                expected="an absolute http or https URL and a known log level",
            )
        return overridden

    def _get_default_config(self) -> AppConfig:
        """Get default configuration."""
        return AppConfig()

    def _config_to_dict(self, config: AppConfig) -> dict[str, ConfigValue]:
        """Convert AppConfig to dictionary for JSON serialization."""
        return {
            "api_base_url": config.api_base_url,
            "request_timeout": config.request_timeout,
            "log_level": config.log_level,
            "language": config.language,
        }

    def _dict_to_config(self, data: dict[str, ConfigValue]) -> AppConfig:
        """Convert dictionary to AppConfig, defaulting missing keys."""
        defaults = self._get_default_config()

        timeout_raw = data.get("request_timeout", defaults.request_timeout)
        request_timeout: float | None = None
        if timeout_raw is not None and timeout_raw != "":
            request_timeout = float(timeout_raw)

        return AppConfig(
            api_base_url=str(data.get("api_base_url", defaults.api_base_url)),
            request_timeout=request_timeout,
            log_level=str(data.get("log_level", defaults.log_level)).upper(),
            language=str(data.get("language", defaults.language)).lower(),
        )
