"""
Error taxonomy and structured logging helpers for blog imports.

The :mod:`blog_porter.utils.errors` module defines the exceptions raised by
the pipeline and centralizes the writing of log entries for both failed and
successful records.  Each entry is appended to a JSON Lines file under the
configured reports directory so that the information can be reviewed or
parsed after a run.

Two public functions are provided:

``report_error``
    Record an error that occurred for a record.  An optional exception can be
    supplied and will be serialized to the log.

``report_ok``
    Record a successful step for a record.  Additional key/value information
    can be attached to the entry via the ``extra`` parameter.

The ``EVENTS`` dictionary maps error or event codes to human readable
messages.  Codes not present in the dictionary fall back to the code itself.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional


class BlogImportError(Exception):
    """Base class for every error raised by the import/export pipeline."""


class ParseError(BlogImportError):
    """The whole file could not be interpreted in its detected format."""


class NoValidPostsError(ParseError):
    """The file parsed, but produced zero draft records."""

    def __init__(self, message: str = "No valid posts found") -> None:
        super().__init__(message)


class ValidationError(BlogImportError):
    """A single row lacks a required field and is dropped at parse time."""


class DuplicateSlugError(BlogImportError):
    """The slug is already taken in the store."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"slug '{slug}' already exists")
        self.slug = slug


class StoreError(BlogImportError):
    """The persistence call itself failed."""


class SlugExhausted(StoreError):
    """No free slug was found within the allowed number of attempts."""

    def __init__(self, base: str, attempts: int) -> None:
        super().__init__(f"no free slug for '{base}' after {attempts} attempts")
        self.base = base
        self.attempts = attempts


# Mapping of event codes used throughout the import to descriptive messages.
# The keys include both error and success codes as the same lookup is used by
# :func:`report_error` and :func:`report_ok`.
EVENTS: Dict[str, str] = {
    "IMPORTED": "Post imported successfully",
    "DUPLICATE_SLUG": "Post skipped, slug already exists",
    "STORE_ERROR": "Failed to persist post",
    "SLUG_EXHAUSTED": "Could not allocate a unique slug",
}

DEFAULT_REPORT_DIR = os.path.join("reports", "import")
_ERROR_LOG = "errors.jsonl"
_OK_LOG = "success.jsonl"


def _write_jsonl(report_dir: str, filename: str, data: Dict[str, Any]) -> None:
    """Append ``data`` as a JSON object followed by a newline."""
    os.makedirs(report_dir, exist_ok=True)
    with open(os.path.join(report_dir, filename), "a", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
        f.write("\n")


def _record_fields(record: Any) -> Dict[str, Any]:
    return {
        "slug": getattr(record, "slug", None) or getattr(record, "slug_hint", None),
        "title": getattr(record, "title", None),
    }


def report_error(
    code: str,
    record: Any,
    exc: Optional[Exception] = None,
    *,
    report_dir: str = DEFAULT_REPORT_DIR,
) -> None:
    """Log an error event for ``record``.

    Parameters
    ----------
    code:
        A key identifying the type of error.  If ``code`` is present in
        :data:`EVENTS` its value will be used as the message.
    record:
        The draft or canonical record associated with the error.  Only the
        slug and title are referenced.
    exc:
        Optional exception instance that triggered the error.  The string
        representation of the exception will be included in the log entry.
    report_dir:
        Directory holding the JSON Lines files.
    """
    entry: Dict[str, Any] = {"code": code, "message": EVENTS.get(code, code)}
    entry.update(_record_fields(record))
    if exc is not None:
        entry["error"] = str(exc)
    _write_jsonl(report_dir, _ERROR_LOG, entry)


def report_ok(
    code: str,
    record: Any,
    extra: Optional[Dict[str, Any]] = None,
    *,
    report_dir: str = DEFAULT_REPORT_DIR,
) -> None:
    """Log a successful event for ``record``.

    ``extra`` is merged into the log entry when given.
    """
    entry: Dict[str, Any] = {"code": code, "message": EVENTS.get(code, code)}
    entry.update(_record_fields(record))
    if extra:
        entry.update(extra)
    _write_jsonl(report_dir, _OK_LOG, entry)
