"""
Column synonym tables for the CSV formats.

Each format declares, per draft-record field, the header names that may
carry it, in order of preference.  Header rows are resolved once against the
table; columns that match no synonym are reported and never read.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple


@dataclass(frozen=True)
class HeaderSchema:
    name: str
    synonyms: Dict[str, Tuple[str, ...]]

    def resolve(self, headers: Sequence[str]) -> "ColumnMap":
        """Map each known field to the column indexes that may carry it."""
        normalized = [normalize_header(h) for h in headers]
        columns: Dict[str, List[int]] = {}
        used = set()
        for field_name, names in self.synonyms.items():
            for name in names:
                for index, header in enumerate(normalized):
                    if header == name:
                        columns.setdefault(field_name, []).append(index)
                        used.add(index)
        ignored = [headers[i].strip() for i, h in enumerate(normalized) if h and i not in used]
        return ColumnMap(columns=columns, ignored=ignored)


@dataclass
class ColumnMap:
    columns: Dict[str, List[int]]
    ignored: List[str] = field(default_factory=list)

    def value(self, row: Sequence[str], field_name: str) -> str:
        """First non-empty value among the synonym columns of ``field_name``."""
        for index in self.columns.get(field_name, ()):
            if index < len(row):
                value = row[index].strip()
                if value:
                    return value
        return ""


def normalize_header(header: str) -> str:
    text = header.replace("\ufeff", "").strip().lower()
    return re.sub(r"\s+", "_", text)


WORDPRESS_CSV_SCHEMA = HeaderSchema(
    name="wordpress-csv",
    synonyms={
        "title": ("post_title", "title"),
        "content": ("post_content", "content"),
        "excerpt": ("post_excerpt", "excerpt"),
        "slug_hint": ("post_name", "slug"),
        "publish_date": ("post_date", "date"),
        "author": ("post_author", "author"),
        "status": ("post_status", "status"),
        "category": ("category", "categories"),
        "tags": ("tags", "post_tag"),
        "featured_image_url": ("featured_image", "image"),
    },
)

STANDARD_CSV_SCHEMA = HeaderSchema(
    name="standard-csv",
    synonyms={
        "title": ("title",),
        "title_localized": ("title_ar", "arabic_title"),
        "content": ("content", "body"),
        "content_localized": ("content_ar", "arabic_content"),
        "excerpt": ("excerpt", "summary"),
        "excerpt_localized": ("excerpt_ar", "arabic_excerpt"),
        "slug_hint": ("slug", "handle"),
        "publish_date": ("date", "published_at"),
        "author": ("author", "author_name"),
        "category": ("category", "categories"),
        "tags": ("tags",),
        "status": ("status",),
        "featured_image_url": ("featured_image", "image"),
    },
)
