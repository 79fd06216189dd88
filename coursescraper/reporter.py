"""Plain-text output of matched elements.

One line per match, in match order: the element's descendant text with
leading and trailing whitespace removed. No header, no summary.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TextIO

import click

from coursescraper.common.element import Element


def format_lines(matches: Iterable[Element]) -> list[str]:
    """Render each match as its stripped text content.

    A match with no text, or only whitespace, renders as an empty string
    rather than being skipped.
    """
    return [element.text_content().strip() for element in matches]


def report(matches: Iterable[Element], out: TextIO | None = None) -> list[str]:
    """Write one line per match.

    Args:
        matches: Matched elements in document order.
        out: Stream to write to. Defaults to standard output.

    Returns:
        The lines that were written, without newlines.
    """
    lines = format_lines(matches)
    for line in lines:
        click.echo(line, file=out)
    return lines
