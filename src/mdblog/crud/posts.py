"""Post persistence: create/update from raw documents, lookup, listing, deletion"""

import logging
import math
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from pydantic import AnyUrl, TypeAdapter, ValidationError
from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from mdblog.core.models import PostMetadata, PostStatus
from mdblog.core.parse import has_frontmatter, parse_post
from mdblog.core.validate import validate_metadata
from mdblog.crud.models import SORT_FIELDS, PageMeta, Post, PostFilters
from mdblog.errors import (
    FrontmatterParseError,
    PostNotFoundError,
    PostValidationError,
    SlugConflictError,
)


logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200
MAX_SLUG_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 500

_URL = TypeAdapter(AnyUrl)


def _as_uuid(post_id) -> UUID:
    if isinstance(post_id, UUID):
        return post_id
    try:
        return UUID(str(post_id))
    except ValueError:
        raise PostNotFoundError(post_id) from None


def _parse(raw: str) -> tuple[PostMetadata, bool]:
    """Parse raw text into metadata; returns (meta, has_block). Parse errors become PostValidationError."""
    try:
        parsed = parse_post(raw)
    except FrontmatterParseError as e:
        raise PostValidationError.from_parse_error(e) from e
    return parsed.meta, has_frontmatter(raw)


def _published_at(meta: PostMetadata) -> Optional[datetime]:
    """Explicit publishedAt as a naive UTC datetime, or None when not given."""
    if not meta.published_at:
        return None
    try:
        dt = datetime.fromisoformat(meta.published_at)
    except ValueError:
        raise PostValidationError.for_field("publishedAt", "Must be an ISO-8601 date or datetime") from None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def _check_limits(meta: PostMetadata) -> None:
    """Enforce the stored column limits; every failing field is reported together."""
    details: dict[str, list[str]] = {}
    for field, value, limit in (
        ("title", meta.title, MAX_TITLE_LENGTH),
        ("slug", meta.slug, MAX_SLUG_LENGTH),
        ("description", meta.description, MAX_DESCRIPTION_LENGTH),
    ):
        if len(value) > limit:
            details[field] = [f"Must be at most {limit} characters"]
    if meta.cover_image:
        try:
            _URL.validate_python(meta.cover_image)
        except ValidationError:
            details["coverImage"] = ["Must be a valid URL"]
    if details:
        fields = ", ".join(f"{f}: {m[0]}" for f, m in details.items())
        raise PostValidationError(f"Validation failed: {fields}", details)


def _apply(post: Post, meta: PostMetadata, raw: str) -> None:
    post.title = meta.title
    post.slug = meta.slug
    post.description = meta.description
    post.keywords = list(meta.keywords)
    post.cover_image = meta.cover_image
    post.status = meta.status
    post.content = raw


def get_post(session: Session, post_id) -> Post:
    """Return the Post with the given id; raises PostNotFoundError."""
    post = session.get(Post, _as_uuid(post_id))
    if post is None:
        raise PostNotFoundError(post_id)
    return post


def get_by_slug(session: Session, slug: str) -> Post | None:
    """Return the Post with the given slug, or None if not found."""
    return session.exec(select(Post).where(Post.slug == slug)).first()


def create_post(session: Session, raw: str, author: Optional[str] = None) -> Post:
    """Create a post from a raw frontmatter document.

    The raw document is stored as content; parsed fields are stored alongside
    it. A new post needs a frontmatter block, and its slug must be unused.
    Flushes but does not commit.
    """
    meta, has_block = _parse(raw)
    if not has_block:
        raise PostValidationError.from_parse_error(
            FrontmatterParseError.from_violations(validate_metadata({}).violations)
        )
    _check_limits(meta)

    if get_by_slug(session, meta.slug) is not None:
        raise SlugConflictError(meta.slug)

    published_at = _published_at(meta)
    if meta.status == PostStatus.PUBLISHED:
        published_at = published_at or datetime.now()
    else:
        published_at = None

    post = Post(title=meta.title, slug=meta.slug, content=raw, author=author, published_at=published_at)
    _apply(post, meta, raw)
    session.add(post)
    session.flush()
    logger.info("Created post %s (%s)", post.slug, post.id)
    return post


def update_post(session: Session, post_id, raw: str) -> Post:
    """Replace a post's document and re-derive its fields.

    A body without a frontmatter block keeps the stored metadata and only
    replaces content. A changed slug must be unused. publishedAt in the
    document always applies; otherwise the first transition to PUBLISHED
    stamps the current time. Flushes but does not commit.
    """
    post = get_post(session, post_id)
    meta, has_block = _parse(raw)

    if not has_block:
        post.content = raw
    else:
        _check_limits(meta)
        if meta.slug != post.slug and get_by_slug(session, meta.slug) is not None:
            raise SlugConflictError(meta.slug)
        published_at = _published_at(meta)
        _apply(post, meta, raw)
        if published_at is not None:
            post.published_at = published_at
        elif meta.status == PostStatus.PUBLISHED and post.published_at is None:
            post.published_at = datetime.now()

    post.updated_at = datetime.now()
    session.add(post)
    session.flush()
    logger.info("Updated post %s (%s)", post.slug, post.id)
    return post


def delete_post(session: Session, post_id) -> None:
    """Delete a post; raises PostNotFoundError. Flushes but does not commit."""
    post = get_post(session, post_id)
    logger.info("Deleting post %s (%s)", post.slug, post.id)
    session.delete(post)
    session.flush()


def _where(filters: PostFilters) -> list:
    clauses = []
    if filters.search:
        pattern = f"%{filters.search}%"
        clauses.append(or_(
            col(Post.title).ilike(pattern),
            col(Post.description).ilike(pattern),
            col(Post.slug).ilike(pattern),
        ))
    if filters.status:
        clauses.append(Post.status == filters.status)
    if filters.author:
        clauses.append(Post.author == filters.author)
    return clauses


def list_posts(
    session: Session,
    filters: Optional[PostFilters] = None,
    page: int = 1,
    per_page: int = 20,
    max_per_page: int = 100,
    ) -> tuple[list[Post], PageMeta]:
    """Return one page of posts matching filters plus pagination metadata.

    page is at least 1; per_page is clamped to [1, max_per_page].
    """
    filters = filters or PostFilters()
    page = max(page, 1)
    per_page = min(max(per_page, 1), max_per_page)
    clauses = _where(filters)

    sort_by = filters.sort_by if filters.sort_by in SORT_FIELDS else "created_at"
    column = col(getattr(Post, sort_by))
    order = column.asc() if filters.sort_order == "asc" else column.desc()

    total = session.exec(select(func.count()).select_from(Post).where(*clauses)).one()
    posts = session.exec(
        select(Post).where(*clauses).order_by(order).offset((page - 1) * per_page).limit(per_page)
    ).all()

    meta = PageMeta(
        page=page,
        per_page=per_page,
        total=total,
        total_pages=math.ceil(total / per_page) if total else 0,
    )
    return list(posts), meta
