"""HTML parsing and compound class selection.

An element matches when its class attribute, split on whitespace, contains
every required token. This is CSS compound class selection (``.a.b``): token
order and additional classes do not matter, and substrings never match.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from lxml import etree, html

from coursescraper.common.element import Element, from_lxml
from coursescraper.common.exceptions import ParseError

logger = logging.getLogger(__name__)

# lxml's message for input that holds no element at all, such as a bare
# doctype or a lone comment.
_EMPTY_DOCUMENT = "Document is empty"

# libxml2 stops building the tree past its nesting limit and only logs it.
_DEPTH_LIMIT = "Excessive depth"


def parse_document(text: str, url: str = "") -> Element:
    """Parse an HTML document into an Element tree.

    Broken markup (unclosed tags, unquoted attributes, stray end tags) is
    repaired by libxml2's HTML parser rather than rejected. A document
    without any element (empty, whitespace, a doctype or comments only)
    parses to an empty ``html`` element.

    Args:
        text: The decoded HTML document.
        url: URL the document came from, for error context.

    Returns:
        The root ``html`` Element.

    Raises:
        ParseError: If no tree can be built from the input, or if the
            parser had to drop part of a too deeply nested document.
    """
    if not text.strip():
        return Element(tag="html")

    # The text is already decoded; parsing UTF-8 bytes keeps a stale
    # <meta charset> or XML declaration from re-decoding it.
    parser = html.HTMLParser(encoding="utf-8")
    try:
        root = html.document_fromstring(text.encode("utf-8"), parser=parser)
    except (etree.ParserError, etree.XMLSyntaxError, ValueError) as e:
        if _EMPTY_DOCUMENT in str(e):
            logger.debug(f"No elements in document from {url or '<text>'}")
            return Element(tag="html")
        raise ParseError(
            f"Could not parse document as HTML: {e}", url
        ) from e

    truncated = [
        entry.message
        for entry in parser.error_log
        if _DEPTH_LIMIT in entry.message
    ]
    if truncated:
        raise ParseError(
            "Document is nested too deeply to parse completely",
            url,
            context={"parser": truncated[0].strip()},
        )

    return from_lxml(root)


def has_compound_class(element: Element, tokens: Sequence[str]) -> bool:
    """Check whether an element carries every class in ``tokens``."""
    present = set(element.class_tokens())
    return all(token in present for token in tokens)


def select_compound_class(
    root: Element, tokens: Sequence[str]
) -> list[Element]:
    """Select the elements matching a compound class selector.

    Args:
        root: Root of the tree to search. The root itself is a candidate.
        tokens: Class names that must all be present.

    Returns:
        Matching elements in document order. Empty if nothing matches.

    Raises:
        ValueError: If ``tokens`` is empty.
    """
    if not tokens:
        raise ValueError("at least one class token is required")
    return [
        element
        for element in root.iter()
        if has_compound_class(element, tokens)
    ]


def extract(
    text: str, tokens: Sequence[str], url: str = ""
) -> list[Element]:
    """Parse a document and select its compound class matches.

    Args:
        text: The decoded HTML document.
        tokens: Class names that must all be present.
        url: URL the document came from, for error context.

    Returns:
        Matching elements in document order.

    Raises:
        ParseError: If the document cannot be parsed.
    """
    root = parse_document(text, url)
    matches = select_compound_class(root, tokens)

    selector = "".join(f".{token}" for token in tokens)
    logger.info(f"{len(matches)} element(s) match {selector}")
    if logger.isEnabledFor(logging.DEBUG):
        for element in matches:
            logger.debug(f"  {element!r}")

    return matches
