"""Frontmatter schema validation returning a tagged result instead of raising"""

from datetime import date, datetime
from typing import Any

from pydantic import ValidationError

from mdblog.core.models import FieldViolation, PostMetadata, ValidationResult
from mdblog.core.utils.keywords import normalize_keywords


SLUG_FORMAT_MESSAGE = "Slug must be lowercase with hyphens (e.g. my-post-title)"

# (field, pydantic error type) -> message shown to authors
_MESSAGES = {
    ("title", "missing"):                 "Title is required",
    ("title", "string_too_short"):        "Title is required",
    ("slug", "missing"):                  "Slug is required",
    ("slug", "string_too_short"):         "Slug is required",
    ("slug", "string_pattern_mismatch"):  SLUG_FORMAT_MESSAGE,
}


def _coerce(data: dict[str, Any]) -> dict[str, Any]:
    """Apply the pre-validation coercions: keyword shapes and YAML date scalars."""
    out = dict(data)
    if "keywords" in out:
        out["keywords"] = normalize_keywords(out["keywords"])
    published = out.get("publishedAt")
    if isinstance(published, (date, datetime)):
        out["publishedAt"] = published.isoformat()
    return out


def _violations(err: ValidationError) -> list[FieldViolation]:
    violations = []
    for e in err.errors():
        field = ".".join(str(part) for part in e["loc"]) or "frontmatter"
        message = _MESSAGES.get((field, e["type"]), e["msg"])
        violations.append(FieldViolation(field=field, message=message))
    return violations


def validate_metadata(data: dict[str, Any]) -> ValidationResult:
    """Validate a raw frontmatter mapping; every failing field is reported."""
    try:
        meta = PostMetadata.model_validate(_coerce(data))
    except ValidationError as e:
        return ValidationResult.failure(_violations(e))
    return ValidationResult.success(meta)
