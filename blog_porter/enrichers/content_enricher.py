"""
Derived fields for draft records.

The enricher is pure: it never touches the network or the store.  Content
is treated as opaque markup; BeautifulSoup is only used to get at the text
for counting words and building excerpts.
"""

from __future__ import annotations

import math
import re
from typing import Optional

from bs4 import BeautifulSoup

from blog_porter.models.blog_post import DraftRecord, EnrichedRecord
from .images import extract_first_image_url, normalize_image_url

WORDS_PER_MINUTE = 200
EXCERPT_LENGTH = 200


def strip_markup(content: Optional[str]) -> str:
    """Plain text of ``content`` with whitespace collapsed."""
    if not content:
        return ""
    if "<" not in content and "&" not in content:
        text = content
    else:
        text = BeautifulSoup(content, "html.parser").get_text(" ")
    return re.sub(r"\s+", " ", text).strip()


def word_count(content: Optional[str]) -> int:
    text = strip_markup(content)
    return len(text.split()) if text else 0


def reading_time(content: Optional[str]) -> int:
    """Minutes to read ``content`` at 200 words per minute, never less than 1."""
    return max(1, math.ceil(word_count(content) / WORDS_PER_MINUTE))


def derive_excerpt(content: Optional[str], limit: int = EXCERPT_LENGTH) -> str:
    """Markup-free summary of ``content``, cut on a word boundary when possible."""
    text = strip_markup(content)
    if len(text) <= limit:
        return text
    cut = text[:limit]
    space = cut.rfind(" ")
    if space > limit // 2:
        cut = cut[:space]
    return cut.rstrip(" ,.;:") + "…"


def resolve_featured_image(featured_image_url: Optional[str], content: Optional[str]) -> Optional[str]:
    resolved = normalize_image_url(featured_image_url)
    if resolved:
        return resolved
    return normalize_image_url(extract_first_image_url(content))


def enrich(draft: DraftRecord) -> EnrichedRecord:
    """Compute reading time, featured image and missing excerpts for ``draft``."""
    data = draft.model_dump()
    if not data["excerpt"]:
        data["excerpt"] = derive_excerpt(draft.content)
    if not data["excerpt_localized"] and draft.content_localized:
        data["excerpt_localized"] = derive_excerpt(draft.content_localized)
    return EnrichedRecord(
        **data,
        reading_time_minutes=reading_time(draft.content),
        resolved_featured_image=resolve_featured_image(draft.featured_image_url, draft.content),
    )
