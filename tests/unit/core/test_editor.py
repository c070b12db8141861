"""Unit tests for core/editor.py"""

from types import SimpleNamespace

from mdblog.core.editor import editable_source
from mdblog.core.parse import parse_post


def _post(**kwargs):
    fields = {
        "title": "Old Post", "slug": "old-post", "description": "From 2019",
        "keywords": ["legacy"], "cover_image": None, "content": "Old body.",
    }
    fields.update(kwargs)
    return SimpleNamespace(**fields)


def test_editable_source_synthesizes_block_for_legacy():
    """Legacy content gets a block built from the stored columns."""
    text = editable_source(_post())
    parsed = parse_post(text)
    assert parsed.meta.title == "Old Post"
    assert parsed.meta.slug == "old-post"
    assert parsed.meta.description == "From 2019"
    assert parsed.meta.keywords == ["legacy"]
    assert parsed.meta.cover_image is None
    assert parsed.content == "Old body."


def test_editable_source_includes_cover_image():
    text = editable_source(_post(cover_image="https://x.io/c.png"))
    assert parse_post(text).meta.cover_image == "https://x.io/c.png"


def test_editable_source_handles_missing_optionals():
    text = editable_source(_post(description=None, keywords=None))
    meta = parse_post(text).meta
    assert meta.description == ""
    assert meta.keywords == []


def test_editable_source_keeps_canonical_content_untouched():
    """Content already starting with the delimiter is returned byte for byte."""
    content = "---\ntitle:   Hand   Written\nslug: hand-written\n# comment kept\n---\nbody"
    assert editable_source(_post(content=content)) is content
