"""coursescraper CLI: fetch a page and print its compound class matches.

Usage:
    coursescraper run                               # Default course listing
    coursescraper run --url URL -c first -c second  # Another page/selector
    coursescraper extract page.html -c first -c second
    coursescraper extract - < page.html             # Read HTML from stdin
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TextIO

import click
from pydantic import ValidationError

from coursescraper.common.exceptions import ScraperException
from coursescraper.data_types import (
    DEFAULT_CLASS_TOKENS,
    DEFAULT_TIMEOUT,
    DEFAULT_URL,
    ScrapeParams,
)
from coursescraper.driver.sync_driver import SyncDriver
from coursescraper.extractor import extract as extract_matches
from coursescraper.reporter import report

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    # Log records go to stderr; stdout carries only the matched text.
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("coursescraper").setLevel(log_level)


def build_params(**kwargs: Any) -> ScrapeParams:
    """Build ScrapeParams from CLI values.

    Raises:
        click.BadParameter: If any value fails validation.
    """
    try:
        return ScrapeParams(**kwargs)
    except ValidationError as e:
        summary = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise click.BadParameter(summary) from e


def class_token_option(func: Callable[..., Any]) -> Callable[..., Any]:
    """Shared ``--class-token`` option for the commands."""
    return click.option(
        "-c",
        "--class-token",
        "class_tokens",
        multiple=True,
        default=DEFAULT_CLASS_TOKENS,
        show_default=True,
        envvar="COURSESCRAPER_CLASS_TOKENS",
        help=(
            "Class name an element must carry. Give it twice; both must be "
            "present. The environment variable takes both, space separated."
        ),
    )(func)


@click.group()
@click.version_option(package_name="coursescraper")
def cli() -> None:
    """Print the text of elements carrying two CSS classes."""


@cli.command()
@click.option(
    "--url",
    default=DEFAULT_URL,
    show_default=True,
    envvar="COURSESCRAPER_URL",
    help="Page to fetch.",
)
@class_token_option
@click.option(
    "--timeout",
    type=float,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    envvar="COURSESCRAPER_TIMEOUT",
    help="Connect/read timeout in seconds.",
)
@click.option(
    "--follow-redirects/--no-follow-redirects",
    default=True,
    show_default=True,
    help="Follow HTTP redirects to the final page.",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
def run(
    url: str,
    class_tokens: tuple[str, ...],
    timeout: float,
    follow_redirects: bool,
    verbose: bool,
) -> None:
    """Fetch a page and print each matching element's text.

    \b
    Examples:
        coursescraper run
        coursescraper run --url https://example.com/ -c card -c featured
    """
    _configure_logging(verbose)
    params = build_params(
        url=url,
        class_tokens=class_tokens,
        timeout=timeout,
        follow_redirects=follow_redirects,
    )

    try:
        SyncDriver(params).run()
    except ScraperException as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@click.argument(
    "source",
    type=click.File("r", encoding="utf-8", errors="replace"),
)
@class_token_option
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
def extract(
    source: TextIO, class_tokens: tuple[str, ...], verbose: bool
) -> None:
    """Print the matching elements of a local HTML file.

    SOURCE is a path to an HTML file, or ``-`` to read standard input.
    """
    _configure_logging(verbose)
    params = build_params(class_tokens=class_tokens)

    name = getattr(source, "name", "<stdin>")
    logger.info(f"Reading {name}")
    try:
        matches = extract_matches(
            source.read(), params.class_tokens, url=str(name)
        )
    except ScraperException as e:
        raise click.ClickException(str(e)) from e

    report(matches)


def main() -> None:
    """Entry point for the ``coursescraper`` console script."""
    cli()
