"""
Content enrichment applied to each draft record before it is persisted.
"""

from .content_enricher import derive_excerpt, enrich, reading_time, strip_markup
from .images import extract_first_image_url, normalize_image_url

__all__ = [
    "derive_excerpt",
    "enrich",
    "reading_time",
    "strip_markup",
    "extract_first_image_url",
    "normalize_image_url",
]
