"""Shared fixtures for the coursescraper tests."""

import asyncio
import socket
import threading
from collections.abc import Generator
from contextlib import closing

import pytest
from aiohttp import web

from tests.mock_server import (
    COURSES,
    create_app,
    generate_courses_html,
)


@pytest.fixture
def courses_html() -> str:
    """Generate the course listing HTML.

    Returns:
        HTML string containing every course in COURSES.
    """
    return generate_courses_html()


@pytest.fixture
def expected_courses() -> list[str]:
    """The course names the listing should produce, in page order."""
    return list(COURSES)


# =============================================================================
# aiohttp course site fixtures
# =============================================================================


def find_free_port() -> int:
    """Find a port on localhost that nothing is listening on."""
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


class CourseSiteServer:
    """Serve an aiohttp app from a background thread.

    The listening socket is bound before the thread starts, so the URL is
    valid as soon as start() returns.
    """

    def __init__(self, app: web.Application) -> None:
        self.app = app
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.bind(("127.0.0.1", 0))
        self._loop = asyncio.new_event_loop()
        self._runner: web.AppRunner | None = None
        self._ready = threading.Event()
        self._thread = threading.Thread(target=self._serve, daemon=True)

    @property
    def url(self) -> str:
        host, port = self._sock.getsockname()
        return f"http://{host}:{port}"

    def start(self) -> None:
        self._thread.start()
        if not self._ready.wait(timeout=5.0):
            raise RuntimeError("course site did not start")

    def _serve(self) -> None:
        asyncio.set_event_loop(self._loop)

        async def listen() -> None:
            self._runner = web.AppRunner(self.app, shutdown_timeout=1.0)
            await self._runner.setup()
            await web.SockSite(self._runner, self._sock).start()

        self._loop.run_until_complete(listen())
        self._ready.set()
        self._loop.run_forever()
        if self._runner is not None:
            self._loop.run_until_complete(self._runner.cleanup())
        self._loop.close()

    def stop(self) -> None:
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=5.0)
        self._sock.close()


@pytest.fixture
def course_server() -> Generator[CourseSiteServer, None, None]:
    """Start the mock course site.

    Yields:
        CourseSiteServer with the site listening.
    """
    server = CourseSiteServer(create_app())
    server.start()
    yield server
    server.stop()


@pytest.fixture
def server_url(course_server: CourseSiteServer) -> str:
    """Base URL of the mock course site (e.g., "http://127.0.0.1:8080")."""
    return course_server.url


@pytest.fixture
def refused_url() -> str:
    """A URL on a local port nothing listens on."""
    return f"http://127.0.0.1:{find_free_port()}/courses"
