"""
Store-facing side of the import.

This subpackage provides the post store collaborators, slug allocation and
the batch importer that ties enrichment, duplicate detection and persistence
together with partial-failure semantics.
"""

from .batch_importer import BatchImporter, ImportBatch, RecordThrottle
from .post_store import DuckDBPostStore, HttpPostStore, PostStore, open_store
from .slug_allocator import SlugAllocator, slug_base

__all__ = [
    "BatchImporter",
    "ImportBatch",
    "RecordThrottle",
    "DuckDBPostStore",
    "HttpPostStore",
    "PostStore",
    "open_store",
    "SlugAllocator",
    "slug_base",
]
