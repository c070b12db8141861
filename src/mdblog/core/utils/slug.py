"""Slug pattern and slug generation for post identifiers"""

import re


SLUG_PATTERN = r'^[a-z0-9]+(?:-[a-z0-9]+)*$'
SLUG_RE = re.compile(SLUG_PATTERN)


def is_valid_slug(slug: str) -> bool:
    """True when slug is lowercase alphanumeric segments joined by single hyphens."""
    return bool(SLUG_RE.fullmatch(slug))


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^a-z0-9\s_-]', '', text)
    text = re.sub(r'[\s_-]+', '-', text)
    return text.strip('-')
