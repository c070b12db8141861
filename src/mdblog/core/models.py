"""Post metadata schema and parse/validation result types"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from mdblog.core.utils.slug import SLUG_PATTERN


class PostStatus(str, Enum):
    """Publication state of a post"""
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


class PostMetadata(BaseModel):
    """Typed frontmatter of a blog post; camelCase aliases match the document keys."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title:        str = Field(..., min_length=1)
    slug:         str = Field(..., min_length=1, pattern=SLUG_PATTERN)
    description:  str = ""
    keywords:     list[str] = Field(default_factory=list)
    cover_image:  Optional[str] = Field(default=None, alias="coverImage")
    status:       PostStatus = PostStatus.DRAFT
    published_at: Optional[str] = Field(default=None, alias="publishedAt")

    @classmethod
    def empty(cls) -> "PostMetadata":
        """Default metadata for documents without a frontmatter block (bypasses validation)."""
        return cls.model_construct(
            title="", slug="", description="", keywords=[],
            cover_image=None, status=PostStatus.DRAFT, published_at=None,
        )

    def to_frontmatter(self) -> dict:
        """Document-facing dict (camelCase keys), absent optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass(frozen=True)
class FieldViolation:
    field:   str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    """Either a validated PostMetadata (ok) or the list of violations (error)."""
    meta:       Optional[PostMetadata] = None
    violations: list[FieldViolation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.meta is not None and not self.violations

    @classmethod
    def success(cls, meta: PostMetadata) -> "ValidationResult":
        return cls(meta=meta)

    @classmethod
    def failure(cls, violations: list[FieldViolation]) -> "ValidationResult":
        return cls(violations=list(violations))


@dataclass(frozen=True)
class ParsedPost:
    """Parse result: typed metadata plus trimmed markdown body; not persisted."""
    meta:    PostMetadata
    content: str
