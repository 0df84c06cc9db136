from __future__ import annotations

from html import unescape
import re
from typing import Iterable, List, Optional


def normalize_label(value: str) -> str:
    """Unescape HTML entities and collapse inner whitespace.

    Preserves original casing but trims leading/trailing spaces
    and converts sequences of whitespace to a single space.
    """
    if not value:
        return ""
    text = unescape(value).strip()
    # Collapse multiple whitespace to single space
    text = re.sub(r"\s+", " ", text)
    return text


def dedupe_labels(labels: Iterable[str]) -> List[str]:
    """Drop empty and repeated labels, case-insensitively, keeping first-seen casing."""
    seen_lower = set()
    result: List[str] = []
    for raw in labels:
        label = normalize_label(raw)
        key = label.lower()
        if label and key not in seen_lower:
            seen_lower.add(key)
            result.append(label)
    return result


def parse_tags_field(field: Optional[str], *, separator: Optional[str] = None) -> List[str]:
    """
    Parse and normalize a tags field from a CSV export.

    - With an explicit ``separator`` splits on that character only
    - Otherwise splits on '|' when present, with ',' as a fallback
    - Unescapes HTML entities (e.g., '&amp;' -> '&')
    - Trims spaces, collapses inner whitespace
    - Deduplicates case-insensitively while preserving first-seen casing
    """
    if not field:
        return []

    text = field.strip()
    if separator is None:
        separator = "|" if "|" in text else ","
    return dedupe_labels(text.split(separator))
