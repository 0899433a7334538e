"""HTTP client service for talking to the portal backend."""

from typing import Any

import httpx
import structlog

from .errors import NetworkError

log = structlog.stdlib.get_logger()


class HttpClientService:
    """Thin async HTTP client bound to the portal's base URL.

    Requests are sent once: there is no retry, backoff or rate limiting,
    and with the default `timeout=None` a request waits indefinitely.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client service.

        Args:
            base_url: Backend base URL, e.g. http://localhost:8000
            timeout: Request timeout in seconds, None to disable
            transport: Optional custom transport (used by tests)
        """
        self.base_url = base_url
        self.timeout = timeout

        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            headers={
                "Accept": "application/json",
                "User-Agent": "Khelaghor-TUI/0.1",
            },
            follow_redirects=True,
            transport=transport,
        )

        log.info("HTTP client service initialized", base_url=base_url, timeout=timeout)

    async def get_json(
        self,
        path: str,
        params: dict[str, str] | None = None,
    ) -> Any:
        """Issue a single GET request and decode the JSON body.

        Args:
            path: Path relative to the base URL, e.g. /api/games
            params: Optional query parameters

        Returns:
            The decoded JSON document

        Raises:
            NetworkError: On transport failure or a non-2xx status
            json.JSONDecodeError: If the body is not valid JSON
        """
        log.debug("Making HTTP GET request", path=path, params=params)

        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            log.warning(
                "HTTP GET request returned error status",
                path=path,
                status_code=e.response.status_code,
            )
            raise NetworkError(
                message=f"Request to {path} failed with status {e.response.status_code}",
                original_error=e,
                url=str(e.request.url),
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            log.warning(
                "HTTP GET request failed",
                path=path,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise NetworkError(
                message=f"Request to {path} could not be completed",
                original_error=e,
                url=f"{self.base_url}{path}",
            ) from e

        log.info(
            "HTTP GET request successful",
            path=path,
            status_code=response.status_code,
            content_length=len(response.content),
        )
        return response.json()

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._client.aclose()
        log.info("HTTP client closed")

    async def __aenter__(self) -> "HttpClientService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
