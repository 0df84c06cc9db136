from __future__ import annotations

import json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from blog_porter.utils.tags import dedupe_labels

EXCERPT_STORE_LIMIT = 300


class PostStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"

    @classmethod
    def from_source(cls, value: Optional[str]) -> "PostStatus":
        """Map a source status (``publish``, ``published``, ``draft``...) to ours."""
        if value and value.strip().lower() in ("publish", "published"):
            return cls.PUBLISHED
        return cls.DRAFT

    @property
    def wxr_value(self) -> str:
        return "publish" if self is PostStatus.PUBLISHED else "draft"


class DraftRecord(BaseModel):
    """A parsed, not yet enriched candidate post."""

    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)

    title: str = Field(..., min_length=1)
    title_localized: Optional[str] = None
    content: str = Field(..., min_length=1)
    content_localized: Optional[str] = None
    excerpt: str = ""
    excerpt_localized: Optional[str] = None
    slug_hint: str = ""
    publish_date: str
    author: str
    category: str
    tags: list[str] = Field(default_factory=list)
    status: PostStatus = PostStatus.DRAFT
    featured_image_url: Optional[str] = None

    @field_validator("title_localized", "content_localized", "excerpt_localized", "featured_image_url", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("status", mode="before")
    @classmethod
    def _map_status(cls, v: Any):
        if isinstance(v, PostStatus):
            return v
        return PostStatus.from_source(v)

    @field_validator("tags", mode="before")
    @classmethod
    def _clean_tags(cls, v: Any):
        if not v:
            return []
        return dedupe_labels(v)


class EnrichedRecord(DraftRecord):
    """Draft plus the fields derived by the content enricher."""

    reading_time_minutes: int = Field(1, ge=1)
    resolved_featured_image: Optional[str] = None


class CanonicalRecord(EnrichedRecord):
    """Fully enriched, slug-assigned record, as persisted in the store."""

    # rows created outside the importer may carry no body
    content: str = ""
    slug: str = Field(..., min_length=1)
    id: Optional[str] = None

    def to_row(self) -> dict[str, Any]:
        """Column layout of the storefront ``blog_posts`` table."""
        return {
            "title": self.title,
            "title_ar": self.title_localized,
            "slug": self.slug,
            "excerpt": self.excerpt[:EXCERPT_STORE_LIMIT],
            "excerpt_ar": self.excerpt_localized[:EXCERPT_STORE_LIMIT] if self.excerpt_localized else None,
            "content": self.content,
            "content_ar": self.content_localized,
            "featured_image": self.resolved_featured_image,
            "author_name": self.author,
            "category": self.category,
            "tags": json.dumps(self.tags, ensure_ascii=False),
            "status": self.status.value,
            "reading_time": self.reading_time_minutes,
            "published_at": self.publish_date,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "CanonicalRecord":
        tags = row.get("tags") or []
        if isinstance(tags, str):
            tags = json.loads(tags or "[]")
        published = row.get("published_at")
        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            title=row["title"],
            title_localized=row.get("title_ar"),
            slug=row["slug"],
            excerpt=row.get("excerpt") or "",
            excerpt_localized=row.get("excerpt_ar"),
            content=row["content"],
            content_localized=row.get("content_ar"),
            featured_image_url=row.get("featured_image"),
            resolved_featured_image=row.get("featured_image"),
            author=row.get("author_name") or "",
            category=row.get("category") or "",
            tags=tags,
            status=row.get("status"),
            reading_time_minutes=max(1, int(row.get("reading_time") or 1)),
            publish_date=published.isoformat() if hasattr(published, "isoformat") else str(published or ""),
        )


class ImportState(str, Enum):
    IDLE = "idle"
    PARSED = "parsed"
    IMPORTING = "importing"
    FINISHED = "finished"
    CANCELLED = "cancelled"


class ImportResult(BaseModel):
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    errors: list[str] = Field(default_factory=list)
    processed: int = 0
    state: ImportState = ImportState.IDLE

    @property
    def progress(self) -> int:
        if not self.total:
            return 0
        return round(100 * self.processed / self.total)
