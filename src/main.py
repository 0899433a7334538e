"""Command-line entry point for the Khelaghor terminal portal.

Parses arguments, configures logging, wires the backend services together
and hands them to the Textual application.
"""

import argparse
import asyncio
import signal
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from src.models import DEFAULT_THEME, AppConfig, ThemeConfig
from src.services.config import ConfigurationService
from src.services.errors import ConfigurationError, handle_error
from src.services.http_client import HttpClientService
from src.services.i18n import LanguageService, parse_language
from src.services.logging import setup_logging
from src.services.portal_api import PortalApiService

if TYPE_CHECKING:
    from src.ui.app import PortalApp

VERSION = "0.1.0"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "INFO"

log = structlog.stdlib.get_logger()


class ApplicationContext:
    """Owns the services shared by every screen.

    Each service is built on first access from the loaded configuration,
    so a context can be created cheaply and only pays for what is used.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        log_level: str | None = None,
        api_url: str | None = None,
    ) -> None:
        """
        Args:
            config_path: Configuration file; the per-user default when None
            log_level: Level from the command line, taking precedence over the configuration
            api_url: Backend base URL taking precedence over the configuration
        """
        self._config_path = config_path
        self._log_level = log_level
        self._api_url = api_url

        self._config_service: ConfigurationService | None = None
        self._config: AppConfig | None = None
        self._http_client: HttpClientService | None = None
        self._api: PortalApiService | None = None
        self._language: LanguageService | None = None
        self._theme: ThemeConfig | None = None
        self._app: "PortalApp | None" = None

        self._shutdown_requested = False

    @property
    def config_service(self) -> ConfigurationService:
        if self._config_service is None:
            self._config_service = ConfigurationService(config_path=self._config_path)
        return self._config_service

    @property
    def config(self) -> AppConfig:
        """Loaded configuration with the command-line overrides applied.

        Raises:
            ConfigurationError: If an override is not a usable value
        """
        if self._config is None:
            loaded = self.config_service.load_config()
            self._config = self.config_service.with_overrides(
                loaded, api_base_url=self._api_url, log_level=self._log_level
            )
        return self._config

    @property
    def http_client(self) -> HttpClientService:
        if self._http_client is None:
            self._http_client = HttpClientService(
                base_url=self.config.api_base_url,
                timeout=self.config.request_timeout,
            )
        return self._http_client

    @property
    def api(self) -> PortalApiService:
        if self._api is None:
            self._api = PortalApiService(self.http_client, self.config.api_base_url)
        return self._api

    @property
    def language(self) -> LanguageService:
        if self._language is None:
            self._language = LanguageService(parse_language(self.config.language))
        return self._language

    @property
    def theme(self) -> ThemeConfig:
        """Theme loaded by `load_theme`, or the built-in default before that."""
        return self._theme or DEFAULT_THEME

    async def load_theme(self) -> ThemeConfig:
        """Fetch the theme once; any failure falls back to the default theme."""
        if self._theme is not None:
            return self._theme

        try:
            self._theme = await self.api.fetch_theme_config()
            log.info("Theme configuration loaded", site_name=self._theme.site_name)
        except Exception as e:
            _ = handle_error(e, operation="fetch_theme_config", component="application")
            log.warning("Using default theme")
            self._theme = DEFAULT_THEME
        return self._theme

    def attach_app(self, app: "PortalApp | None") -> None:
        """Remember the running app so a shutdown request can stop it."""
        self._app = app

    def request_shutdown(self) -> None:
        """Stop the running app, if any; later requests are ignored."""
        if self._shutdown_requested:
            return
        self._shutdown_requested = True
        log.info("Shutdown requested")
        if self._app is not None:
            self._app.exit()

    @property
    def shutdown_requested(self) -> bool:
        return self._shutdown_requested

    async def cleanup(self) -> None:
        """Close the HTTP connection pool if one was opened."""
        if self._http_client is not None:
            await self._http_client.close()
        log.info("Application resources released")


@dataclass(frozen=True)
class ParsedArgs:
    config: Path | None
    log_level: str | None
    log_dir: Path | None
    api_url: str | None
    no_tui: bool


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="khelaghor-tui",
        description="Terminal front-end for the Khelaghor gaming portal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  khelaghor-tui\n"
            "  khelaghor-tui --api-url https://portal.example.com\n"
            "  khelaghor-tui --config ./portal.json --log-level DEBUG\n"
        ),
    )
    _ = parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    _ = parser.add_argument(
        "--config",
        type=Path,
        help="configuration file (default: ~/.config/khelaghor-tui/config.json)",
    )
    _ = parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        help="logging level (default: the configured level, INFO when unset)",
    )
    _ = parser.add_argument(
        "--log-dir",
        type=Path,
        help="directory for log files (default: ./logs when the TUI runs)",
    )
    _ = parser.add_argument("--api-url", help="backend base URL, overriding the configuration")
    _ = parser.add_argument(
        "--no-tui",
        action="store_true",
        help="print the effective configuration and exit",
    )
    return parser


def parse_arguments(argv: list[str] | None = None) -> ParsedArgs:
    """Parse `argv`, or the process arguments when it is None."""
    ns = build_parser().parse_args(argv)
    return ParsedArgs(
        config=ns.config,
        log_level=ns.log_level,
        log_dir=ns.log_dir,
        api_url=ns.api_url,
        no_tui=bool(ns.no_tui),
    )


def setup_signal_handlers(context: ApplicationContext) -> None:
    """Route SIGINT and SIGTERM to `context.request_shutdown` on the running loop."""
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, context.request_shutdown)
        except NotImplementedError:
            # Event loops without signal support (Windows) keep the default handling
            log.debug("Signal handlers unavailable on this platform")
            return


def remove_signal_handlers() -> None:
    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            _ = loop.remove_signal_handler(signum)
        except NotImplementedError:
            return


async def run_tui(context: ApplicationContext) -> int:
    """Run the portal app until it exits and return the process exit code."""
    from src.ui.app import PortalApp

    log.info("Starting TUI application", api_base_url=context.config.api_base_url)
    try:
        app = PortalApp(
            api=context.api,
            language=context.language,
            portal_theme=await context.load_theme(),
        )
        context.attach_app(app)
        setup_signal_handlers(context)
        await app.run_async()
    except Exception as e:
        log.error("TUI application error", error=str(e), exc_info=True)
        return 1
    finally:
        remove_signal_handlers()
        context.attach_app(None)
        await context.cleanup()

    if context.shutdown_requested:
        log.info("TUI application stopped by signal")
    return 0


def print_summary(context: ApplicationContext) -> None:
    print(f"Khelaghor TUI {VERSION}")
    print(f"Configuration file: {context.config_service.config_path}")
    print(f"API base URL: {context.config.api_base_url}")
    print(f"Language: {context.config.language}")
    print(f"Log level: {context.config.log_level}")


def main() -> None:
    args = parse_arguments()

    log_dir = args.log_dir
    if log_dir is None and not args.no_tui:
        log_dir = Path("logs")
    tui_mode = not args.no_tui

    bootstrap_level = args.log_level or DEFAULT_LOG_LEVEL
    _ = setup_logging(log_level=bootstrap_level, log_dir=log_dir, tui_mode=tui_mode)

    log.info(
        "Starting Khelaghor TUI",
        version=VERSION,
        config_path=str(args.config) if args.config else "default",
    )

    context = ApplicationContext(
        config_path=args.config,
        log_level=args.log_level,
        api_url=args.api_url,
    )

    try:
        # Without --log-level the configuration file decides
        if context.config.log_level != bootstrap_level:
            _ = setup_logging(log_level=context.config.log_level, log_dir=log_dir, tui_mode=tui_mode)
            log.info("Log level taken from configuration", log_level=context.config.log_level)

        if args.no_tui:
            print_summary(context)
            exit_code = 0
        else:
            exit_code = asyncio.run(run_tui(context))
    except ConfigurationError as e:
        log.error("Invalid configuration", error=e.message, details=e.technical_details)
        print(f"Configuration error: {e.message}", file=sys.stderr)
        exit_code = 2
    except KeyboardInterrupt:
        log.info("Application interrupted by user")
        exit_code = 130
    except Exception as e:
        log.error("Unhandled exception", error=str(e), exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        exit_code = 1

    log.info("Application exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
