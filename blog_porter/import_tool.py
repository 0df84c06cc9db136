"""
High-level orchestration of blog imports and exports.

This module defines a :class:`BlogImportTool` class that ties together the
extractors, the enricher, the store and the exporter into the operator
workflow: load a file, show a preview, import it with progress reporting,
and export the store back to WXR.

Configuration is supplied via a JSON file path or directly as a dictionary.
The ``store`` section selects the backend (``duckdb`` or ``http``), the
``import`` section holds fallbacks and pacing, and the ``export`` section
describes the channel written into WXR files.
"""

from __future__ import annotations

import json
import os
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from blog_porter.exporters.wxr_exporter import WxrExporter
from blog_porter.extractors import ParsedSource, ParserDefaults, parse_source
from blog_porter.migrators.batch_importer import BatchImporter, CancelSignal, ImportBatch, ProgressFn
from blog_porter.migrators.post_store import PostStore, open_store
from blog_porter.migrators.slug_allocator import SlugAllocator
from blog_porter.models.blog_post import DraftRecord, ImportResult, ImportState
from blog_porter.utils.errors import DEFAULT_REPORT_DIR, NoValidPostsError, ParseError
from blog_porter.utils.redirects import generate_slug_map_csv

PREVIEW_COLUMNS = ["Title", "Author", "Category", "Status"]


def preview_table(records: Sequence[DraftRecord], limit: int = 10) -> pd.DataFrame:
    """Tabulate the first ``limit`` records the way the upload preview shows them."""
    rows = [
        {
            "Title": r.title,
            "Author": r.author,
            "Category": r.category or "-",
            "Status": r.status.value,
        }
        for r in records[:limit]
    ]
    return pd.DataFrame(rows, columns=PREVIEW_COLUMNS)


class BlogImportTool:
    """
    Encapsulates all state and behavior required to import blog exports into
    a post store and to export the store again.  Per-record outcomes are
    recorded using the :mod:`blog_porter.utils.errors` module.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, *, config_file: Optional[str] = None) -> None:
        if config_file and os.path.exists(config_file):
            with open(config_file, "r", encoding="utf-8") as f:
                config = json.load(f)
        elif config is None:
            # Default configuration
            config = {}

        # Ensure essential keys exist to prevent KeyErrors
        config.setdefault("store", {})
        config["store"].setdefault("backend", os.getenv("BLOG_STORE_BACKEND", "duckdb"))
        config["store"].setdefault("database", os.getenv("BLOG_DATABASE", "data/blog.duckdb"))
        config["store"].setdefault("api_url", os.getenv("BLOG_API_URL", ""))
        config["store"].setdefault("api_token", os.getenv("BLOG_API_TOKEN", ""))
        config["store"].setdefault("timeout", 10)

        config.setdefault("import", {})
        config["import"].setdefault("default_author", "Admin")
        config["import"].setdefault("default_category", "General")
        config["import"].setdefault("record_delay_seconds", 0.1)
        config["import"].setdefault("max_slug_attempts", 1000)
        config["import"].setdefault("preview_rows", 10)
        config["import"].setdefault("reports_dir", DEFAULT_REPORT_DIR)

        config.setdefault("export", {})
        config["export"].setdefault("site_title", "Blog")
        config["export"].setdefault("base_url", "https://example.com")
        config["export"].setdefault("language", "en-US")

        self.config = config
        self.state = ImportState.IDLE
        self._store: Optional[PostStore] = None

    @property
    def reports_dir(self) -> str:
        return self.config["import"]["reports_dir"]

    @property
    def store(self) -> PostStore:
        if self._store is None:
            self._store = open_store(self.config["store"])
        return self._store

    def close(self) -> None:
        close = getattr(self._store, "close", None)
        if close is not None:
            close()
        self._store = None

    def log_message(self, message: str, level: str = "INFO") -> None:
        ts = datetime.now().isoformat(timespec="seconds")
        print(f"[{level}] {message}")
        # Append to log file
        os.makedirs(self.reports_dir, exist_ok=True)
        with open(os.path.join(self.reports_dir, "import.log"), "a", encoding="utf-8") as f:
            f.write(f"{ts} {level}: {message}\n")

    def parser_defaults(self) -> ParserDefaults:
        return ParserDefaults(
            author=self.config["import"]["default_author"],
            category=self.config["import"]["default_category"],
        )

    def load_file(self, path: str) -> ParsedSource:
        """Read and parse an export file.

        :raises ParseError: if the file is not UTF-8 text or cannot be read in
            its detected format.
        """
        try:
            with open(path, "r", encoding="utf-8-sig") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise ParseError(f"Could not read {path}: {e}") from e
        return self.load_text(text, filename=os.path.basename(path))

    def load_text(self, text: str, filename: Optional[str] = None) -> ParsedSource:
        parsed = parse_source(text, filename, self.parser_defaults())
        if parsed.ignored_columns:
            self.log_message(f"Ignoring unrecognized columns: {', '.join(parsed.ignored_columns)}", level="DEBUG")
        if parsed.records:
            self.state = ImportState.PARSED
            self.log_message(f"Found {len(parsed.records)} blog posts ({parsed.format.label} format)")
        else:
            self.log_message("No valid blog posts found", level="ERROR")
        return parsed

    def preview(self, parsed: ParsedSource, limit: Optional[int] = None) -> pd.DataFrame:
        return preview_table(parsed.records, limit or int(self.config["import"]["preview_rows"]))

    def import_records(
        self,
        records: Sequence[DraftRecord],
        *,
        on_progress: Optional[ProgressFn] = None,
        cancel_event: Optional[CancelSignal] = None,
    ) -> ImportResult:
        """
        Import ``records`` into the configured store.  The batch always runs
        to completion (or cancellation); individual failures are collected in
        the returned result.  A slug remap CSV is written for records whose
        allocated slug differs from the slug found in the source file.

        :raises NoValidPostsError: if ``records`` is empty.
        """
        batch = ImportBatch(records)
        importer = BatchImporter(
            self.store,
            SlugAllocator(self.store, int(self.config["import"]["max_slug_attempts"])),
            delay_seconds=float(self.config["import"]["record_delay_seconds"]),
            on_progress=on_progress,
            log_fn=self.log_message,
            report_dir=self.reports_dir,
        )
        self.state = ImportState.IMPORTING
        result = importer.run(batch, cancel_event=cancel_event)
        self.state = result.state

        remapped: List[Dict[str, str]] = [
            {"SourceSlug": r.slug_hint, "NewSlug": r.slug, "Title": r.title} for r in importer.imported
        ]
        try:
            out_path = generate_slug_map_csv(remapped, out_path=os.path.join(self.reports_dir, "slug_map.csv"))
            self.log_message(f"Slug map written to {out_path}", level="DEBUG")
        except OSError as e:
            self.log_message(f"Failed to write slug map: {e}", "ERROR")

        self.log_message(
            f"Import {result.state.value}: {result.succeeded} posts imported successfully, {result.failed} failed."
        )
        return result

    def import_file(
        self,
        path: str,
        *,
        on_progress: Optional[ProgressFn] = None,
        cancel_event: Optional[CancelSignal] = None,
    ) -> ImportResult:
        parsed = self.load_file(path)
        if not parsed.records:
            raise NoValidPostsError()
        return self.import_records(parsed.records, on_progress=on_progress, cancel_event=cancel_event)

    def export_to_file(self, out_path: Optional[str] = None) -> str:
        """Write every stored post to a WXR file and return its path."""
        if not out_path:
            out_path = os.path.join("exports", f"blog-export-{datetime.now():%Y-%m-%d}.xml")
        os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
        export_cfg = self.config["export"]
        exporter = WxrExporter(
            self.store,
            site_title=export_cfg["site_title"],
            base_url=export_cfg["base_url"],
            language=export_cfg["language"],
        )
        count = exporter.export_to_file(out_path)
        self.log_message(f"Exported {count} blog posts to WordPress XML: {out_path}")
        return out_path
