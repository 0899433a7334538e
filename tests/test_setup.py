"""Test to verify the project setup is working correctly."""

import asyncio

import pytest
from hypothesis import given, strategies as st

from src.main import VERSION, parse_arguments


def test_package_imports() -> None:
    """The UI package imports alongside the services it depends on."""
    from src.ui import PortalApp

    assert PortalApp.__name__ == "PortalApp"


@given(st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]))
def test_log_level_argument(level: str) -> None:
    """Any standard log level is accepted on the command line."""
    args = parse_arguments(["--log-level", level])
    assert args.log_level == level


def test_default_arguments() -> None:
    args = parse_arguments([])
    assert args.config is None
    assert args.api_url is None
    assert args.log_level is None
    assert args.no_tui is False


def test_api_url_argument() -> None:
    args = parse_arguments(["--api-url", "https://portal.example.com", "--no-tui"])
    assert args.api_url == "https://portal.example.com"
    assert args.no_tui is True


def test_version_argument(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        _ = parse_arguments(["--version"])
    assert VERSION in capsys.readouterr().out


def test_async_setup() -> None:
    """Test that async testing setup works."""
    async def async_function() -> str:
        return "test"

    assert asyncio.run(async_function()) == "test"
