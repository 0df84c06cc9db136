"""
Parser for the generic blog CSV schema.

Besides the usual post columns this schema carries localized (Arabic)
variants of title, content and excerpt.  Multi-value tag cells are split on
``|`` when the cell contains one, otherwise on commas.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

from blog_porter.models.blog_post import DraftRecord
from blog_porter.utils.categories import parse_categories_field, split_primary_category
from blog_porter.utils.tags import parse_tags_field
from .base import ParserDefaults, collect, iter_csv_rows
from .header_schema import STANDARD_CSV_SCHEMA, ColumnMap


def _standard_row(columns: ColumnMap, row: Sequence[str], defaults: ParserDefaults) -> Optional[dict]:
    title = columns.value(row, "title")
    if not title:
        return None
    category, tags = split_primary_category(
        parse_categories_field(columns.value(row, "category")),
        parse_tags_field(columns.value(row, "tags")),
        defaults.category,
    )
    return {
        "title": title,
        "title_localized": columns.value(row, "title_localized"),
        "content": columns.value(row, "content"),
        "content_localized": columns.value(row, "content_localized"),
        "excerpt": columns.value(row, "excerpt"),
        "excerpt_localized": columns.value(row, "excerpt_localized"),
        "slug_hint": columns.value(row, "slug_hint"),
        "publish_date": columns.value(row, "publish_date"),
        "author": columns.value(row, "author") or defaults.author,
        "category": category,
        "tags": tags,
        "status": columns.value(row, "status"),
        "featured_image_url": columns.value(row, "featured_image_url"),
    }


def _rows(text: str, defaults: ParserDefaults) -> Iterator[Optional[dict]]:
    columns, rows = iter_csv_rows(text, STANDARD_CSV_SCHEMA)
    for row in rows:
        yield _standard_row(columns, row, defaults)


def parse_standard_csv(text: str, defaults: ParserDefaults = ParserDefaults()) -> List[DraftRecord]:
    return collect(_rows(text, defaults))
