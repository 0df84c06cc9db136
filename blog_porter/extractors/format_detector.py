"""
Source format sniffing.

Detection is an ordered list of ``(predicate, format)`` rules evaluated
against the raw file text; the first matching rule wins and the last rule
always matches.  New formats are added by inserting a rule.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional, Tuple


class SourceFormat(str, Enum):
    WXR = "wordpress-xml"
    WORDPRESS_CSV = "wordpress-csv"
    STANDARD_CSV = "standard-csv"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    SourceFormat.WXR: "WordPress XML",
    SourceFormat.WORDPRESS_CSV: "WordPress CSV",
    SourceFormat.STANDARD_CSV: "Standard CSV",
}

WXR_MARKERS = ("<rss", "<wp:", "wordpress.org/export/")
WORDPRESS_CSV_HEADERS = ("post_title", "post_content", "post_status")

Predicate = Callable[[str, Optional[str]], bool]


def _head(text: str) -> str:
    return text.lstrip("\ufeff").lstrip()


def _first_line(text: str) -> str:
    return _head(text).split("\n", 1)[0].lower()


def looks_like_wxr(text: str, filename: Optional[str] = None) -> bool:
    if _head(text).startswith("<?xml"):
        return True
    if any(marker in text for marker in WXR_MARKERS):
        return True
    return bool(filename) and filename.lower().endswith(".xml")


def looks_like_wordpress_csv(text: str, filename: Optional[str] = None) -> bool:
    header = _first_line(text)
    return any(name in header for name in WORDPRESS_CSV_HEADERS)


def _always(text: str, filename: Optional[str] = None) -> bool:
    return True


DETECTION_RULES: List[Tuple[Predicate, SourceFormat]] = [
    (looks_like_wxr, SourceFormat.WXR),
    (looks_like_wordpress_csv, SourceFormat.WORDPRESS_CSV),
    (_always, SourceFormat.STANDARD_CSV),
]


def detect_format(text: str, filename: Optional[str] = None) -> SourceFormat:
    """Pick the parser strategy for ``text`` (``filename`` is an optional hint)."""
    for predicate, source_format in DETECTION_RULES:
        if predicate(text, filename):
            return source_format
    return SourceFormat.STANDARD_CSV
