"""Editable source reconstruction for stored posts"""

from typing import Any

from mdblog.core.parse import DELIMITER
from mdblog.core.serialize import serialize_post


def editable_source(post: Any) -> str:
    """Return the raw document an editor should load for a stored post.

    Content already starting with a frontmatter block is returned untouched.
    Legacy content (body only) gets a block synthesized from the post's
    stored title, slug, description, keywords and cover_image.
    """
    if post.content.startswith(DELIMITER):
        return post.content
    meta = {
        "title": post.title,
        "slug": post.slug,
        "description": post.description,
        "keywords": list(post.keywords or []),
        "coverImage": post.cover_image,
    }
    return serialize_post(meta, post.content)
