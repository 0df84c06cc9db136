from __future__ import annotations

import re
from typing import Optional

_IMG_SRC = re.compile(r"""<img[^>]+src=["']([^"']+)["'][^>]*>""", re.IGNORECASE)


def normalize_image_url(url: Optional[str]) -> Optional[str]:
    """Validate an image reference, or return ``None`` when it is unusable.

    Absolute http(s) URLs and root-relative paths pass unchanged.  A bare
    domain-like value (``cdn.example.com/a.jpg``) is coerced to https.
    """
    if not url or not url.strip():
        return None
    candidate = url.strip()
    if candidate.startswith(("http://", "https://")):
        return candidate
    if candidate.startswith("/"):
        return candidate
    if "." in candidate and not any(ch.isspace() for ch in candidate):
        return f"https://{candidate}"
    return None


def extract_first_image_url(content: Optional[str]) -> Optional[str]:
    """First ``src`` of an ``<img>`` tag in ``content``, or ``None``."""
    if not content:
        return None
    match = _IMG_SRC.search(content)
    return match.group(1) if match else None
