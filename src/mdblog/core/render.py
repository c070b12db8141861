"""Markdown to HTML rendering for post bodies"""

import logging
from functools import lru_cache

from markdown_it import MarkdownIt

from mdblog.core.parse import parse_post
from mdblog.errors import FrontmatterParseError


logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset; raw HTML is escaped, not passed through."""
    return MarkdownIt(preset, options_update={"linkify": False, "html": False})


def render_markdown(body: str, preset: str = 'gfm-like') -> str:
    """Render a markdown body (no frontmatter) to HTML."""
    return _make_parser(preset).render(body)


def public_body(content: str) -> str:
    """Return the markdown body to publish for a stored post document.

    Stored documents whose frontmatter no longer validates are shown as-is.
    """
    try:
        return parse_post(content).content
    except FrontmatterParseError as e:
        logger.warning("Publishing stored content unparsed: %s", e)
        return content
