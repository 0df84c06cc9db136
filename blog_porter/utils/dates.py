"""
Publish date normalization.

Every source format carries its own date flavour: ``2024-01-15 10:00:00``
from ``wp:post_date``, RFC 2822 strings from RSS ``pubDate`` and bare dates
in hand-written CSV files.  They are all coerced to a naive UTC ISO-8601
string; anything unparseable becomes "now".
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import pandas as pd


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0, tzinfo=None)


def to_iso(value: Optional[str], *, now: Optional[datetime] = None) -> str:
    fallback = (now or utc_now()).isoformat()
    if not value or not value.strip():
        return fallback
    stamp = pd.to_datetime(value.strip(), utc=True, errors="coerce")
    if pd.isna(stamp):
        return fallback
    return stamp.tz_convert(None).to_pydatetime().replace(microsecond=0).isoformat()


def parse_iso(value: str) -> datetime:
    """Inverse of :func:`to_iso` for values the pipeline produced itself."""
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return utc_now()
