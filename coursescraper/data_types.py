"""Core data types for the scraper.

This module contains:

- The default target (URL and compound class tokens) of the course listing.
- ScrapeParams, the validated run configuration.
- Response, the fetched page handed from the fetcher to the extractor.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_URL = "https://flatironschool.com/"

# Both classes must be present on an element for it to be a course entry.
DEFAULT_CLASS_TOKENS: tuple[str, str] = (
    "inlineMobileLeft-2Yo002",
    "imageTextBlockGrid2-3jXtmC",
)

DEFAULT_TIMEOUT = 30.0

_WHITESPACE = re.compile(r"\s")


class ScrapeParams(BaseModel):
    """Configuration for a single fetch-extract-report run.

    Every field defaults to the values of the Flatiron School course listing
    scraper, so ``ScrapeParams()`` reproduces it exactly.

    Attributes:
        url: Absolute http(s) URL of the page to fetch.
        class_tokens: The two class names an element must carry.
        timeout: Connect/read timeout in seconds.
        follow_redirects: Whether HTTP redirects are followed.
    """

    model_config = ConfigDict(frozen=True)

    url: str = DEFAULT_URL
    class_tokens: tuple[str, str] = DEFAULT_CLASS_TOKENS
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    follow_redirects: bool = True

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"expected an absolute http(s) URL, got {value!r}")
        return value

    @field_validator("class_tokens")
    @classmethod
    def _check_class_tokens(
        cls, value: tuple[str, str]
    ) -> tuple[str, str]:
        for token in value:
            if not token or _WHITESPACE.search(token):
                raise ValueError(
                    f"class token must be non-empty without whitespace, "
                    f"got {token!r}"
                )
        return value


@dataclass
class Response:
    """HTTP response from fetching a page.

    Modeled after httpx.Response to provide a familiar interface.

    Attributes:
        status_code: HTTP status code (200, 404, etc.).
        headers: Response headers.
        content: Raw response bytes.
        text: Decoded response text.
        url: Final URL after any redirects.
        encoding: Character encoding used to decode ``content``.
    """

    status_code: int
    headers: dict[str, str]
    content: bytes
    text: str
    url: str
    encoding: str
