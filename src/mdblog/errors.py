"""Exception types raised by the parser and the post store"""

from typing import Iterable, Optional

from mdblog.core.models import FieldViolation


def _group(fields: Iterable[FieldViolation]) -> dict[str, list[str]]:
    details: dict[str, list[str]] = {}
    for f in fields:
        details.setdefault(f.field, []).append(f.message)
    return details


class FrontmatterParseError(ValueError):
    """A frontmatter block is present but fails validation; carries every violation."""

    def __init__(self, message: str, fields: Iterable[FieldViolation]):
        super().__init__(message)
        self.message = message
        self.fields = list(fields)

    @classmethod
    def from_violations(cls, fields: Iterable[FieldViolation]) -> "FrontmatterParseError":
        fields = list(fields)
        return cls(f"Invalid frontmatter: {', '.join(str(f) for f in fields)}", fields)

    def details(self) -> dict[str, list[str]]:
        """Violations grouped as {field: [messages]}."""
        return _group(self.fields)


class PostError(Exception):
    """Base class for post store errors; code mirrors an API error code."""
    code = "POST_ERROR"

    def __init__(self, message: str, details: Optional[dict[str, list[str]]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class PostNotFoundError(PostError):
    code = "NOT_FOUND"

    def __init__(self, post_id):
        super().__init__(f"Post {post_id} not found")
        self.post_id = post_id


class SlugConflictError(PostError):
    code = "CONFLICT"

    def __init__(self, slug: str):
        super().__init__(f"A post with slug '{slug}' already exists", {"slug": ["Slug already in use"]})
        self.slug = slug


class PostValidationError(PostError):
    code = "VALIDATION_ERROR"

    @classmethod
    def from_parse_error(cls, err: FrontmatterParseError) -> "PostValidationError":
        return cls(err.message, err.details())

    @classmethod
    def for_field(cls, field: str, message: str) -> "PostValidationError":
        return cls(f"Validation failed: {field}: {message}", {field: [message]})
