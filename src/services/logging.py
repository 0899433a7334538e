"""Logging configuration for the Khelaghor terminal portal.

structlog renders every event; standard library handlers decide where the
rendered line goes. In TUI mode nothing is written to the console, since
Textual owns the terminal.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

APP_LOG_NAME = "portal.log"
ERROR_LOG_NAME = "portal-error.log"


class LoggingService:
    """Configures structlog and the stdlib handlers behind it."""

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Path | None = None,
        tui_mode: bool = False,
    ) -> None:
        """
        Args:
            log_level: Level name, any case; unknown names mean INFO
            log_dir: Where rotating log files go, None for no files
            tui_mode: Suppress the console handler while Textual owns the terminal
        """
        self.log_level = log_level.upper()
        self.log_dir = log_dir
        self.tui_mode = tui_mode
        self.is_development = os.getenv("ENVIRONMENT", "development") == "development"

    @property
    def numeric_level(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)

    def configure(self) -> None:
        """Install handlers and the structlog processor chain."""
        self._configure_handlers()

        structlog.configure(
            processors=self._get_processors(),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def _configure_handlers(self) -> None:
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(self.numeric_level)

        if not self.tui_mode:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(self.numeric_level)
            if self.is_development:
                console_handler.setFormatter(logging.Formatter(
                    fmt="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
                    datefmt="%H:%M:%S",
                ))
            else:
                console_handler.setFormatter(logging.Formatter("%(message)s"))
            root_logger.addHandler(console_handler)

        if self.log_dir:
            self._add_file_handlers(root_logger, self.log_dir)

        # httpx logs every request at INFO; the HTTP client service already does
        logging.getLogger("httpx").setLevel(max(self.numeric_level, logging.WARNING))

    def _add_file_handlers(self, root_logger: logging.Logger, log_dir: Path) -> None:
        """Everything at the configured level goes to the app log, errors also to their own file."""
        log_dir.mkdir(parents=True, exist_ok=True)
        targets = (
            (APP_LOG_NAME, self.numeric_level, 5 * 1024 * 1024, 3),
            (ERROR_LOG_NAME, logging.ERROR, 1024 * 1024, 2),
        )
        for filename, level, max_bytes, backups in targets:
            handler = logging.handlers.RotatingFileHandler(
                filename=log_dir / filename,
                maxBytes=max_bytes,
                backupCount=backups,
                encoding="utf-8",
            )
            handler.setLevel(level)
            handler.setFormatter(logging.Formatter("%(message)s"))
            root_logger.addHandler(handler)

    def _get_processors(self) -> list[Any]:
        processors: list[Any] = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        # Colourised output only makes sense on an interactive console
        if self.is_development and not self.log_dir and not self.tui_mode:
            processors.append(structlog.dev.ConsoleRenderer(colors=True))
        else:
            processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
        return processors

    def get_logger(self, name: str | None = None) -> structlog.stdlib.BoundLogger:
        """Get a configured logger instance."""
        return structlog.stdlib.get_logger(name)


def setup_logging(
    log_level: str = "INFO",
    log_dir: Path | None = None,
    environment: str | None = None,
    tui_mode: bool = False,
) -> LoggingService:
    """Configure logging for the whole process and return the service used.

    `environment` ("development" or "production") is exported as ENVIRONMENT
    before the service reads it.
    """
    if environment:
        os.environ["ENVIRONMENT"] = environment

    service = LoggingService(log_level=log_level, log_dir=log_dir, tui_mode=tui_mode)
    service.configure()
    return service
