"""Database table for blog posts plus listing filter and pagination models"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID, uuid4

from pydantic import BaseModel, Field as PydanticField
from sqlalchemy import Column, DateTime, JSON, String, Text
from sqlmodel import SQLModel, Field

from mdblog.core.models import PostStatus


class Post(SQLModel, table=True):
    """A blog post; content holds the raw document (frontmatter included) as source of truth"""
    __tablename__ = "posts"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    slug: str = Field(..., sa_column=Column(String(200), nullable=False, unique=True, index=True))
    title: str = Field(..., sa_column=Column(String(200), nullable=False))
    description: str = Field(default="", sa_column=Column(Text, nullable=False))
    keywords: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    content: str = Field(..., sa_column=Column(Text, nullable=False))
    cover_image: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    status: PostStatus = Field(default=PostStatus.DRAFT, nullable=False)
    published_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=False), nullable=True))
    author: Optional[str] = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))


SORT_FIELDS = ("title", "slug", "status", "published_at", "created_at")


class PostFilters(BaseModel):
    """Listing filters; unknown sort fields fall back to created_at."""
    status:     Optional[PostStatus] = None
    search:     Optional[str] = None
    author:     Optional[str] = None
    sort_by:    str = "created_at"
    sort_order: str = PydanticField(default="desc", pattern="^(asc|desc)$")


class PageMeta(BaseModel):
    page:        int
    per_page:    int
    total:       int
    total_pages: int
