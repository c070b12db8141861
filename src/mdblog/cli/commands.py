"""CLI command implementations"""

from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlmodel import Session

from mdblog.config import Settings, configure_logging, load_config
from mdblog.core.editor import editable_source
from mdblog.core.models import PostStatus
from mdblog.core.parse import parse_post
from mdblog.core.render import public_body, render_markdown
from mdblog.core.serialize import serialize_post
from mdblog.core.utils.slug import is_valid_slug, slugify
from mdblog.crud.database import init_db, make_engine, reset_db
from mdblog.crud.models import Post, PostFilters
from mdblog.crud.posts import create_post, delete_post, get_post, list_posts, update_post
from mdblog.errors import FrontmatterParseError, PostError


def _fail(msg: str, details: dict = None, code: str = None) -> None:
    """Print a user-friendly error (and every field problem) to stderr and exit 1."""
    prefix = f"Error [{code}]" if code else "Error"
    typer.echo(f"{prefix}: {msg}", err=True)
    for field, messages in (details or {}).items():
        for m in messages:
            typer.echo(f"  {field}: {m}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    configure_logging(settings)
    return settings


@contextmanager
def _session(settings: Settings):
    """Open a session on an initialized database; commits on success, maps PostError to exit 1."""
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as session:
        try:
            yield session
            session.commit()
        except PostError as e:
            session.rollback()
            _fail(e.message, e.details, e.code)


def _read(file: Path) -> str:
    try:
        return file.read_text(encoding="utf-8-sig")
    except OSError as e:
        _fail(f"Cannot read {file}: {e.strerror}")


def _echo_post(post: Post) -> None:
    published = post.published_at.isoformat() if post.published_at else "-"
    typer.echo(f"{post.id}  {post.status.value:<9}  {published:<19}  {post.slug}  {post.title}")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing posts."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")


def check_cmd(
    file: Annotated[Path, typer.Argument(help="Raw post document to validate")],
    ):
    """Parse a post document and print its metadata, or every frontmatter problem."""
    _settings()
    try:
        parsed = parse_post(_read(file))
    except FrontmatterParseError as e:
        _fail("Invalid frontmatter", e.details())
    meta = parsed.meta
    if not meta.slug:
        typer.echo("No frontmatter block: legacy document (body only).")
    for key, value in meta.to_frontmatter().items():
        typer.echo(f"{key}: {value}")
    typer.echo(f"body: {len(parsed.content)} characters")


def new_cmd(
    title: Annotated[str, typer.Argument(help="Post title")],
    slug: Annotated[Optional[str], typer.Option("--slug", help="Slug; derived from the title when omitted")] = None,
    description: Annotated[str, typer.Option("--description", help="Short description")] = "",
    keywords: Annotated[Optional[str], typer.Option("--keywords", help="Comma-separated keywords")] = None,
    out: Annotated[Optional[Path], typer.Option("--out", help="Write to this file instead of stdout")] = None,
    ):
    """Scaffold a new post document with a frontmatter block."""
    slug = slug or slugify(title)
    if not is_valid_slug(slug):
        _fail(f"Cannot use slug '{slug}'; pass --slug with lowercase letters, digits and hyphens")
    meta = {
        "title": title,
        "slug": slug,
        "description": description,
        "keywords": [k.strip() for k in (keywords or "").split(",") if k.strip()],
    }
    text = serialize_post(meta, f"# {title}\n")
    if out is None:
        typer.echo(text, nl=False)
        return
    out.write_text(text, encoding="utf-8")
    typer.echo(f"Wrote {out}")


def create_cmd(
    file: Annotated[Path, typer.Argument(help="Raw post document with frontmatter")],
    author: Annotated[Optional[str], typer.Option("--author", help="Author recorded on the post")] = None,
    ):
    """Create a post from a raw document."""
    settings = _settings()
    raw = _read(file)
    with _session(settings) as session:
        post = create_post(session, raw, author=author)
        typer.echo(f"Created {post.slug} ({post.id})")


def update_cmd(
    post_id: Annotated[str, typer.Argument(help="Post id")],
    file: Annotated[Path, typer.Argument(help="Raw post document")],
    ):
    """Replace a post's document and re-derive its fields."""
    settings = _settings()
    raw = _read(file)
    with _session(settings) as session:
        post = update_post(session, post_id, raw)
        typer.echo(f"Updated {post.slug} ({post.id})")


def edit_cmd(
    post_id: Annotated[str, typer.Argument(help="Post id")],
    out: Annotated[Optional[Path], typer.Option("--out", help="Write to this file instead of stdout")] = None,
    ):
    """Print the editable raw document of a post (legacy posts get a synthesized block)."""
    settings = _settings()
    with _session(settings) as session:
        text = editable_source(get_post(session, post_id))
    if out is None:
        typer.echo(text)
        return
    out.write_text(text, encoding="utf-8")
    typer.echo(f"Wrote {out}")


def show_cmd(
    post_id: Annotated[str, typer.Argument(help="Post id")],
    html: Annotated[bool, typer.Option("--html", help="Render the body to HTML")] = False,
    ):
    """Print a post's publishable body as markdown or HTML."""
    settings = _settings()
    with _session(settings) as session:
        post = get_post(session, post_id)
        title, body = post.title, public_body(post.content)
    if html:
        typer.echo(render_markdown(body, settings.parser_config), nl=False)
        return
    typer.echo(f"# {title}\n\n{body}")


def list_cmd(
    status: Annotated[Optional[PostStatus], typer.Option("--status", help="Filter by status")] = None,
    search: Annotated[Optional[str], typer.Option("--search", help="Match title, description or slug")] = None,
    author: Annotated[Optional[str], typer.Option("--author", help="Filter by author")] = None,
    page: Annotated[int, typer.Option("--page", help="Page number (1-based)")] = 1,
    per_page: Annotated[Optional[int], typer.Option("--per-page", help="Posts per page")] = None,
    sort_by: Annotated[str, typer.Option("--sort-by", help="title, slug, status, published_at or created_at")] = "created_at",
    order: Annotated[str, typer.Option("--order", help="asc or desc")] = "desc",
    ):
    """List posts with filters and pagination."""
    settings = _settings(overrides={"per_page": per_page})
    try:
        filters = PostFilters(status=status, search=search, author=author, sort_by=sort_by, sort_order=order)
    except ValueError as e:
        _fail(f"Invalid listing options: {e}")
    with _session(settings) as session:
        posts, meta = list_posts(session, filters, page, settings.per_page, settings.max_per_page)
        if not posts:
            typer.echo("No posts found.")
        for post in posts:
            _echo_post(post)
    typer.echo(f"Page {meta.page}/{max(meta.total_pages, 1)} - {meta.total} post(s)")


def delete_cmd(
    post_id: Annotated[str, typer.Argument(help="Post id")],
    ):
    """Delete a post."""
    settings = _settings()
    with _session(settings) as session:
        delete_post(session, post_id)
    typer.echo(f"Deleted {post_id}")
