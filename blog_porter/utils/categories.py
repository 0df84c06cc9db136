from __future__ import annotations

from typing import List, Optional, Tuple

from .tags import dedupe_labels, normalize_label, parse_tags_field


def parse_categories_field(field: Optional[str]) -> List[str]:
    """
    Parse and normalize a categories field from the CSV.

    - Splits primarily on '|', falling back to ',' if needed
    - Fixes HTML entities (e.g., '&amp;' -> '&')
    - Deduplicates, order preserved
    """
    return parse_tags_field(field)


def split_primary_category(
    categories: List[str], tags: List[str], default: str
) -> Tuple[str, List[str]]:
    """Pick the first category as the primary one and fold the rest into tags.

    Returns ``(category, tags)``.  ``default`` is used when no category is
    given at all.
    """
    cleaned = [normalize_label(c) for c in categories if normalize_label(c)]
    if not cleaned:
        return default, dedupe_labels(tags)
    primary, extra = cleaned[0], cleaned[1:]
    return primary, dedupe_labels(list(tags) + extra)
