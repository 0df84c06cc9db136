"""
Parsers for WordPress exports.

Two flavours are handled: the WXR XML file produced by *Tools → Export* and
the CSV produced by export plugins, whose headers use WordPress column names
(``post_title``, ``post_content``...).  Both return normalized
:class:`DraftRecord` values; items that are not posts and rows without a
title or content are skipped.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

from blog_porter.enrichers.content_enricher import derive_excerpt
from blog_porter.models.blog_post import DraftRecord
from blog_porter.utils.categories import parse_categories_field, split_primary_category
from blog_porter.utils.tags import parse_tags_field
from .base import ParserDefaults, collect, iter_csv_rows
from .header_schema import WORDPRESS_CSV_SCHEMA, ColumnMap
from .wxr_reader import WxrItem, list_post_items, load_document

# wp:postmeta keys written by the exporter for fields WXR has no element for
LOCALIZED_META = {
    "title_localized": "title_ar",
    "content_localized": "content_ar",
    "excerpt_localized": "excerpt_ar",
}

# excerpt length taken from <description> when an item has no excerpt
DESCRIPTION_EXCERPT_LENGTH = 160


def _wxr_fields(item: WxrItem, defaults: ParserDefaults) -> dict:
    category, tags = split_primary_category(
        item.terms("category"), item.terms("post_tag"), defaults.category
    )
    content = item.content or item.description
    fields = {
        "title": item.title,
        "content": content,
        "excerpt": (
            item.excerpt
            or derive_excerpt(item.description, DESCRIPTION_EXCERPT_LENGTH)
            or derive_excerpt(content)
        ),
        "slug_hint": item.post_name,
        "publish_date": item.post_date or item.pub_date,
        "author": item.creator or defaults.author,
        "category": category,
        "tags": tags,
        "status": item.status,
        "featured_image_url": item.attachment_url,
    }
    for field_name, meta_key in LOCALIZED_META.items():
        fields[field_name] = item.postmeta.get(meta_key)
    return fields


def parse_wxr(text: str, defaults: ParserDefaults = ParserDefaults()) -> List[DraftRecord]:
    """Extract draft records from a WordPress WXR export.

    Only ``<item>`` elements whose ``wp:post_type`` is ``post`` are read.  The
    first ``category`` term becomes the record category, any further ones are
    appended to the tags after the ``post_tag`` terms.  Items without
    ``content:encoded`` fall back to their RSS ``description``.

    Raises
    ------
    ParseError
        If the text is not well-formed XML.
    """
    doc = load_document(text)
    return collect(_wxr_fields(item, defaults) for item in list_post_items(doc))


def _wordpress_row(columns: ColumnMap, row: Sequence[str], defaults: ParserDefaults) -> Optional[dict]:
    title = columns.value(row, "title")
    if not title:
        return None
    category, tags = split_primary_category(
        parse_categories_field(columns.value(row, "category")),
        parse_tags_field(columns.value(row, "tags"), separator=","),
        defaults.category,
    )
    return {
        "title": title,
        "content": columns.value(row, "content"),
        "excerpt": columns.value(row, "excerpt"),
        "slug_hint": columns.value(row, "slug_hint"),
        "publish_date": columns.value(row, "publish_date"),
        "author": columns.value(row, "author") or defaults.author,
        "category": category,
        "tags": tags,
        "status": columns.value(row, "status"),
        "featured_image_url": columns.value(row, "featured_image_url"),
    }


def _rows(text: str, defaults: ParserDefaults) -> Iterator[Optional[dict]]:
    columns, rows = iter_csv_rows(text, WORDPRESS_CSV_SCHEMA)
    for row in rows:
        yield _wordpress_row(columns, row, defaults)


def parse_wordpress_csv(text: str, defaults: ParserDefaults = ParserDefaults()) -> List[DraftRecord]:
    """Extract draft records from a WordPress-style CSV export.

    ``publish`` and ``published`` statuses map to published, anything else
    to draft.  The tags column is comma-separated.
    """
    return collect(_rows(text, defaults))
