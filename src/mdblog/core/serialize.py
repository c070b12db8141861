"""Serialize post metadata and a markdown body into a raw frontmatter document"""

import json
import re
from typing import Any, Mapping, Union

from mdblog.core.models import PostMetadata


# Code points json.dumps leaves raw but YAML folds as line breaks or rejects as non-printable.
_YAML_UNSAFE_RE = re.compile(r'[\x7f-\x9f\u2028\u2029\ufeff\ufffe\uffff\ud800-\udfff]')


def quote(value: str) -> str:
    """Quote value as a JSON string literal that also reads back verbatim as a YAML scalar."""
    return _YAML_UNSAFE_RE.sub(
        lambda m: f"\\u{ord(m.group()):04x}",
        json.dumps(value, ensure_ascii=False),
    )


def _field(meta: Union[PostMetadata, Mapping[str, Any]], name: str, alias: str = None) -> Any:
    if isinstance(meta, PostMetadata):
        return getattr(meta, name)
    if alias and alias in meta:
        return meta[alias]
    return meta.get(name)


def serialize_post(meta: Union[PostMetadata, Mapping[str, Any]], body: str) -> str:
    """Build a raw document: frontmatter block, blank line, then body verbatim.

    meta needs title and slug; description defaults to "", keywords to [],
    and coverImage is written only when present. Accepts a PostMetadata or a
    mapping with camelCase or snake_case keys.
    """
    keywords = _field(meta, "keywords") or []
    cover_image = _field(meta, "cover_image", "coverImage")

    lines = [
        "---",
        f"title: {quote(_field(meta, 'title'))}",
        f"slug: {quote(_field(meta, 'slug'))}",
        f"description: {quote(_field(meta, 'description') or '')}",
        f"keywords: [{', '.join(quote(k) for k in keywords)}]",
    ]
    if cover_image:
        lines.append(f"coverImage: {quote(cover_image)}")
    lines += ["---", "", body]
    return "\n".join(lines)
