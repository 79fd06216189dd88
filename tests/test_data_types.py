"""Tests for ScrapeParams validation."""

import pytest
from pydantic import ValidationError

from coursescraper.data_types import (
    DEFAULT_CLASS_TOKENS,
    DEFAULT_TIMEOUT,
    DEFAULT_URL,
    ScrapeParams,
)


def test_defaults():
    """Defaults shall be the Flatiron School course listing."""
    params = ScrapeParams()

    assert params.url == DEFAULT_URL
    assert params.class_tokens == DEFAULT_CLASS_TOKENS
    assert params.timeout == DEFAULT_TIMEOUT
    assert params.follow_redirects is True


def test_accepts_list_of_two_tokens():
    """Tokens given as a list shall be stored as a tuple."""
    params = ScrapeParams(class_tokens=["a", "b"])

    assert params.class_tokens == ("a", "b")


@pytest.mark.parametrize(
    "tokens",
    [("only",), ("a", "b", "c"), ("a", ""), ("a b", "c"), ("a", "b\t")],
)
def test_rejects_bad_tokens(tokens):
    """Exactly two non-empty, whitespace-free tokens shall be required."""
    with pytest.raises(ValidationError):
        ScrapeParams(class_tokens=tokens)


@pytest.mark.parametrize(
    "url", ["flatironschool.com", "ftp://example.com/", "https://", ""]
)
def test_rejects_non_http_urls(url):
    """Only absolute http(s) URLs shall be accepted."""
    with pytest.raises(ValidationError):
        ScrapeParams(url=url)


@pytest.mark.parametrize("timeout", [0, -1.5])
def test_rejects_non_positive_timeout(timeout):
    """The timeout shall be bounded and positive."""
    with pytest.raises(ValidationError):
        ScrapeParams(timeout=timeout)


def test_is_frozen():
    """Parameters shall not change once built."""
    params = ScrapeParams()

    with pytest.raises(ValidationError):
        params.url = "https://example.com/"  # type: ignore[misc]
