"""Unit tests for core/validate.py"""

from datetime import date, datetime

from mdblog.core.models import PostStatus
from mdblog.core.validate import SLUG_FORMAT_MESSAGE, validate_metadata


def _fields(result) -> dict[str, str]:
    return {v.field: v.message for v in result.violations}


def test_validate_ok():
    result = validate_metadata({"title": "T", "slug": "t-1", "status": "PUBLISHED"})
    assert result.ok
    assert result.violations == []
    assert result.meta.status == PostStatus.PUBLISHED


def test_validate_does_not_raise_on_bad_input():
    """Failures come back as a result, never as an exception."""
    result = validate_metadata({})
    assert not result.ok
    assert result.meta is None
    assert _fields(result) == {"title": "Title is required", "slug": "Slug is required"}


def test_validate_empty_title():
    assert _fields(validate_metadata({"title": "", "slug": "ok"})) == {"title": "Title is required"}


def test_validate_slug_format_message():
    assert _fields(validate_metadata({"title": "T", "slug": "a--b"})) == {"slug": SLUG_FORMAT_MESSAGE}


def test_validate_slug_trailing_newline_rejected():
    assert not validate_metadata({"title": "T", "slug": "ok\n"}).ok


def test_validate_reports_every_field():
    """All failing fields are listed together."""
    result = validate_metadata({"title": 5, "slug": "Bad Slug", "status": "ARCHIVED"})
    assert set(_fields(result)) == {"title", "slug", "status"}


def test_validate_keyword_items_must_be_strings():
    """Non-string list items are reported with their index."""
    result = validate_metadata({"title": "T", "slug": "t", "keywords": ["ok", 3]})
    assert "keywords.1" in _fields(result)


def test_validate_keywords_other_shapes_default_to_empty():
    assert validate_metadata({"title": "T", "slug": "t", "keywords": 42}).meta.keywords == []
    assert validate_metadata({"title": "T", "slug": "t", "keywords": None}).meta.keywords == []


def test_validate_published_at_dates_are_stringified():
    assert validate_metadata(
        {"title": "T", "slug": "t", "publishedAt": date(2025, 1, 2)}
    ).meta.published_at == "2025-01-02"
    assert validate_metadata(
        {"title": "T", "slug": "t", "publishedAt": datetime(2025, 1, 2, 3, 4, 5)}
    ).meta.published_at == "2025-01-02T03:04:05"


def test_validate_does_not_mutate_input():
    data = {"title": "T", "slug": "t", "keywords": "a,b"}
    validate_metadata(data)
    assert data["keywords"] == "a,b"
