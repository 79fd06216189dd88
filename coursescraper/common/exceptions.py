"""Exception types for scraper errors.

The pipeline is fail-fast: nothing is retried or recovered locally. Every
error raised by the fetcher or the extractor derives from ScraperException so
the CLI can turn it into a diagnostic and a non-zero exit status.
"""

from __future__ import annotations

from typing import Any


class ScraperException(Exception):
    """Base class for fetch and parse failures.

    Attributes:
        message: Human-readable description of the failure.
        url: The URL being scraped when the failure happened.
        context: Additional details (status code, selector, etc).
    """

    def __init__(
        self,
        message: str,
        url: str = "",
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable description of the failure.
            url: The URL being scraped when the failure happened.
            context: Optional dict of additional context.
        """
        self.message = message
        self.url = url
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context.

        Returns:
            Formatted error message string.
        """
        parts = [self.message]
        if self.url:
            parts.append(f"URL: {self.url}")

        if self.context:
            parts.append("Context:")
            for key, value in self.context.items():
                parts.append(f"  {key}: {value}")

        return "\n".join(parts)


class NetworkError(ScraperException):
    """Raised when the page cannot be retrieved.

    Covers DNS resolution failures, refused or reset connections and other
    transport errors. Non-success HTTP statuses use the
    HTMLResponseAssumptionException subclass.
    """


class HTMLResponseAssumptionException(NetworkError):
    """Raised when the server answers with a non-success status code.

    Attributes:
        status_code: The actual HTTP status code received.
        expected_codes: Status codes that would have been accepted.
    """

    def __init__(
        self,
        status_code: int,
        expected_codes: list[int],
        url: str,
    ) -> None:
        """Initialize the exception.

        Args:
            status_code: The actual status code received.
            expected_codes: List of expected status codes.
            url: The URL of the request.
        """
        self.status_code = status_code
        self.expected_codes = expected_codes

        expected_str = ", ".join(str(code) for code in expected_codes)
        super().__init__(
            f"HTTP {status_code} from {url} (expected one of: {expected_str})",
            url,
            {"status_code": status_code},
        )


class RequestTimeoutException(ScraperException):
    """Raised when the request exceeds the configured timeout.

    Attributes:
        timeout_seconds: The timeout duration in seconds.
    """

    def __init__(self, url: str, timeout_seconds: float) -> None:
        """Initialize the exception.

        Args:
            url: The URL that timed out.
            timeout_seconds: The timeout duration in seconds.
        """
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Request to {url} timed out after {timeout_seconds}s", url
        )


class ParseError(ScraperException):
    """Raised when the fetched document cannot be interpreted as HTML.

    Malformed but recoverable markup never raises this; the parser repairs
    it the way browsers do.
    """
