"""Synchronous driver implementation.

The driver runs one fetch-extract-report cycle:

1. Fetch the configured URL through a SyncRequestManager.
2. Parse the body and select the compound class matches.
3. Write one line per match.

Nothing is written until both the fetch and the parse have succeeded, and
every error propagates to the caller unchanged.
"""

from __future__ import annotations

import logging
from typing import TextIO

from coursescraper.common.request_manager import (
    SyncRequestManager,
)
from coursescraper.data_types import ScrapeParams
from coursescraper.extractor import extract
from coursescraper.reporter import report

logger = logging.getLogger(__name__)


class SyncDriver:
    """Runs the scraper pipeline once.

    Example::

        driver = SyncDriver(ScrapeParams(url="https://example.com/"))
        lines = driver.run()

    Attributes:
        params: The run configuration.
        request_manager: Manager used for the single HTTP request.
        out: Stream the lines are written to (None means standard output).
    """

    def __init__(
        self,
        params: ScrapeParams | None = None,
        request_manager: SyncRequestManager | None = None,
        out: TextIO | None = None,
    ) -> None:
        """Initialize the driver.

        Args:
            params: Run configuration. Defaults to ScrapeParams().
            request_manager: Optional pre-built request manager. When omitted
                the driver creates one from ``params`` and closes it after
                the run; a manager passed in is left open.
            out: Stream to write lines to. Defaults to standard output.
        """
        self.params = params or ScrapeParams()
        self._owns_request_manager = request_manager is None
        self.request_manager = request_manager or SyncRequestManager(
            timeout=self.params.timeout,
            follow_redirects=self.params.follow_redirects,
        )
        self.out = out

    def run(self) -> list[str]:
        """Fetch, extract and report.

        Returns:
            The lines written, one per matched element.

        Raises:
            NetworkError: If the page cannot be fetched.
            RequestTimeoutException: If the request times out.
            ParseError: If the page cannot be parsed.
        """
        try:
            response = self.request_manager.fetch(self.params.url)
        finally:
            if self._owns_request_manager:
                self.request_manager.close()

        matches = extract(
            response.text, self.params.class_tokens, url=response.url
        )
        lines = report(matches, self.out)
        logger.debug(f"Wrote {len(lines)} line(s)")
        return lines
