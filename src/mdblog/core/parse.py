"""Frontmatter extraction and post parsing"""

import re
from typing import Any, Optional

import yaml

from mdblog.core.models import FieldViolation, ParsedPost, PostMetadata
from mdblog.core.validate import validate_metadata
from mdblog.errors import FrontmatterParseError


DELIMITER = "---"
FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)


def has_frontmatter(text: str) -> bool:
    """True when text opens with a frontmatter block at position 0."""
    return FRONTMATTER_RE.match(text) is not None


def split_frontmatter(text: str) -> tuple[Optional[dict[str, Any]], str]:
    """Return (frontmatter_dict, body); frontmatter is None when no block opens the text.

    An empty block yields {}. Malformed YAML or a non-mapping block raises
    FrontmatterParseError on the 'frontmatter' field.
    """
    m = FRONTMATTER_RE.match(text)
    if not m:
        return None, text
    try:
        fm = yaml.safe_load(m.group(1))
    except yaml.YAMLError as e:
        raise FrontmatterParseError.from_violations(
            [FieldViolation("frontmatter", f"Invalid YAML: {e}")]
        ) from e
    if fm is None:
        fm = {}
    if not isinstance(fm, dict):
        raise FrontmatterParseError.from_violations(
            [FieldViolation("frontmatter", f"Expected a mapping, got {type(fm).__name__}")]
        )
    return fm, text[m.end():]


def parse_post(raw: str) -> ParsedPost:
    """Parse a raw post document into typed metadata and a trimmed body.

    Documents without a frontmatter block are legacy content: they parse to
    empty default metadata with the whole text as body. Documents with a
    block are validated strictly and raise FrontmatterParseError listing
    every failing field.
    """
    data, body = split_frontmatter(raw)

    if data is None:
        return ParsedPost(meta=PostMetadata.empty(), content=raw.strip())

    result = validate_metadata(data)
    if not result.ok:
        raise FrontmatterParseError.from_violations(result.violations)
    return ParsedPost(meta=result.meta, content=body.strip())
