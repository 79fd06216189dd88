"""Request manager for fetching the target page.

SyncRequestManager owns the httpx.Client and turns httpx outcomes into
Response objects or the package's exception types. It performs exactly one
request per fetch() call and never retries.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from coursescraper.common.exceptions import (
    HTMLResponseAssumptionException,
    NetworkError,
    RequestTimeoutException,
)
from coursescraper.data_types import DEFAULT_TIMEOUT, Response

logger = logging.getLogger(__name__)


class SyncRequestManager:
    """Manages HTTP requests for the synchronous driver.

    Example::

        with SyncRequestManager(timeout=10.0) as manager:
            response = manager.fetch("https://example.com/")
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        follow_redirects: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the request manager.

        Args:
            timeout: Connect/read timeout in seconds.
            follow_redirects: Whether redirects are followed to the final page.
            transport: Optional httpx transport, mainly for tests.
        """
        self.timeout = timeout
        self.follow_redirects = follow_redirects
        self._client = httpx.Client(
            timeout=timeout,
            follow_redirects=follow_redirects,
            default_encoding="utf-8",
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> SyncRequestManager:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()

    def fetch(self, url: str) -> Response:
        """GET a URL and return the Response.

        The body is decoded with the charset declared by the server, or
        UTF-8 when none is declared.

        Args:
            url: Absolute URL to fetch.

        Returns:
            Response containing the HTTP response data.

        Raises:
            RequestTimeoutException: If connecting or reading times out.
            HTMLResponseAssumptionException: If the final status is not 2xx.
            NetworkError: If the host cannot be resolved or reached.
        """
        logger.info(f"GET {url}")
        try:
            http_response = self._client.get(url)
        except httpx.TimeoutException as e:
            raise RequestTimeoutException(
                url=url, timeout_seconds=self.timeout
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(
                f"Failed to fetch {url}: {type(e).__name__}: {e}", url
            ) from e

        final_url = str(http_response.url)
        if not http_response.is_success:
            raise HTMLResponseAssumptionException(
                status_code=http_response.status_code,
                expected_codes=[200],
                url=final_url,
            )

        logger.debug(
            f"{http_response.status_code} from {final_url} "
            f"({len(http_response.content)} bytes, "
            f"encoding={http_response.encoding})"
        )

        return Response(
            status_code=http_response.status_code,
            headers=dict(http_response.headers),
            content=http_response.content,
            text=http_response.text,
            url=final_url,
            encoding=http_response.encoding or "utf-8",
        )
