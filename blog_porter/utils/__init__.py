"""
Utility helpers used by the import tool.

This subpackage exposes the error taxonomy, structured logging, taxonomy
label normalization, date coercion and slug remap generation.
"""

from .errors import (
    EVENTS,
    BlogImportError,
    DuplicateSlugError,
    NoValidPostsError,
    ParseError,
    SlugExhausted,
    StoreError,
    ValidationError,
    report_error,
    report_ok,
)
from .redirects import generate_slug_map_csv

__all__ = [
    "EVENTS",
    "BlogImportError",
    "DuplicateSlugError",
    "NoValidPostsError",
    "ParseError",
    "SlugExhausted",
    "StoreError",
    "ValidationError",
    "report_error",
    "report_ok",
    "generate_slug_map_csv",
]
