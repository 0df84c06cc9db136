"""
Sequential, partial-failure import of draft records into a post store.

Each record goes through enrichment, a duplicate check on its title-derived
slug, slug allocation and insertion, in file order.  A failing record is
counted and described in the :class:`ImportResult` but never stops the rest
of the batch.  A throttle spaces records out so the store is not flooded.
"""

from __future__ import annotations

import time
from typing import Callable, List, Optional, Protocol, Sequence, Set

from blog_porter.enrichers.content_enricher import enrich
from blog_porter.models.blog_post import CanonicalRecord, DraftRecord, ImportResult, ImportState
from blog_porter.utils.errors import (
    DuplicateSlugError,
    NoValidPostsError,
    SlugExhausted,
    StoreError,
    report_error,
    report_ok,
)
from .post_store import PostStore
from .slug_allocator import SlugAllocator, slug_base

ProgressFn = Callable[[int, int, int], None]
LogFn = Callable[[str, str], None]


class CancelSignal(Protocol):
    def is_set(self) -> bool: ...


class RecordThrottle:
    """
    Simple time-based throttle.  Ensures at least ``delay_seconds`` pass
    between two records so the downstream store is not hit in a burst.
    """

    def __init__(self, delay_seconds: float = 0.1) -> None:
        self.interval = max(0.0, float(delay_seconds))
        self._last = 0.0

    def wait(self, time_fn: Callable[[], float] = time.monotonic, sleep_fn: Callable[[float], None] = time.sleep) -> None:
        if self.interval <= 0:
            return
        now = time_fn()
        dt = now - self._last
        if dt < self.interval:
            sleep_fn(self.interval - dt)
        self._last = time_fn()


class ImportBatch:
    """Draft records of one parsed file plus the running result of importing them."""

    def __init__(self, records: Sequence[DraftRecord]) -> None:
        if not records:
            raise NoValidPostsError()
        self.records: List[DraftRecord] = list(records)
        self.state = ImportState.PARSED
        self.result = ImportResult(total=len(self.records), state=ImportState.PARSED)

    @property
    def done(self) -> bool:
        return self.state in (ImportState.FINISHED, ImportState.CANCELLED)


class BatchImporter:
    """
    Runs :class:`ImportBatch` objects against a store.

    Duplicate policy: a record is skipped when the slug derived from its
    title already exists in the store, unless that slug was allocated by an
    earlier record of the same batch, in which case the record gets the next
    numeric suffix.  Re-running a batch therefore skips every record, while
    identical titles inside one file still all get imported.
    """

    def __init__(
        self,
        store: PostStore,
        allocator: Optional[SlugAllocator] = None,
        *,
        delay_seconds: float = 0.1,
        on_progress: Optional[ProgressFn] = None,
        log_fn: Optional[LogFn] = None,
        report_dir: Optional[str] = None,
    ) -> None:
        self.store = store
        self.allocator = allocator or SlugAllocator(store)
        self.throttle = RecordThrottle(delay_seconds)
        self.on_progress = on_progress
        self.log_fn = log_fn
        self.report_dir = report_dir
        self.imported: List[CanonicalRecord] = []

    def _log(self, message: str, level: str = "INFO") -> None:
        if self.log_fn is not None:
            self.log_fn(message, level)

    def _report_error(self, code: str, record: object, exc: Exception) -> None:
        if self.report_dir:
            report_error(code, record, exc, report_dir=self.report_dir)

    def _fail(self, result: ImportResult, message: str, level: str = "ERROR") -> None:
        result.failed += 1
        result.errors.append(message)
        self._log(message, level)

    def _import_one(self, draft: DraftRecord, result: ImportResult, claimed: Set[str]) -> None:
        record = enrich(draft)
        base = slug_base(record.title)
        inserted: List[CanonicalRecord] = []

        def claim(slug: str) -> None:
            canonical = CanonicalRecord(**record.model_dump(), slug=slug)
            canonical.id = self.store.insert(canonical)
            inserted.append(canonical)

        try:
            if base not in claimed and self.store.exists_by_slug(base):
                raise DuplicateSlugError(base)
            self.allocator.allocate(record.title, claim=claim)
        except DuplicateSlugError as e:
            self._fail(result, f"Duplicate: {record.title} ({e}), skipped", "WARNING")
            self._report_error("DUPLICATE_SLUG", record, e)
        except SlugExhausted as e:
            self._fail(result, f"Failed: {record.title} - {e}")
            self._report_error("SLUG_EXHAUSTED", record, e)
        except StoreError as e:
            self._fail(result, f"Failed: {record.title} - {e}")
            self._report_error("STORE_ERROR", record, e)
        except Exception as e:
            self._fail(result, f"Failed: {record.title} - {str(e) or 'Unknown error'}")
            self._report_error("STORE_ERROR", record, e)
        else:
            canonical = inserted[-1]
            claimed.add(canonical.slug)
            result.succeeded += 1
            self.imported.append(canonical)
            self._log(f"Imported '{canonical.title}' as '{canonical.slug}'")
            if self.report_dir:
                report_ok("IMPORTED", canonical, {"id": canonical.id}, report_dir=self.report_dir)

    def run(self, batch: ImportBatch, cancel_event: Optional[CancelSignal] = None) -> ImportResult:
        """Import every record of ``batch`` in order and return the final result.

        ``cancel_event`` (anything with ``is_set()``, e.g. ``threading.Event``)
        is checked before each record; once set, the batch stops and ends in
        the ``cancelled`` state with the counts reached so far.
        """
        if batch.state is not ImportState.PARSED:
            raise RuntimeError(f"Batch cannot be run in state '{batch.state.value}'")
        batch.state = ImportState.IMPORTING
        result = batch.result
        result.state = ImportState.IMPORTING
        claimed: Set[str] = set()

        for index, draft in enumerate(batch.records):
            if cancel_event is not None and cancel_event.is_set():
                batch.state = ImportState.CANCELLED
                self._log(f"Import cancelled after {result.processed} of {result.total} posts", "WARNING")
                break
            if index:
                self.throttle.wait()
            self._import_one(draft, result, claimed)
            result.processed += 1
            if self.on_progress is not None:
                self.on_progress(result.progress, result.processed, result.total)
        else:
            batch.state = ImportState.FINISHED

        result.state = batch.state
        batch.result = result.model_copy(deep=True)
        return batch.result
