"""
Persistence collaborators for imported blog posts.

The pipeline only needs three operations from a store: ``exists_by_slug``,
``insert`` and ``list_all``.  Two implementations are provided:

* :class:`DuckDBPostStore` keeps posts in a local DuckDB file (or in memory)
  using the storefront ``blog_posts`` column layout.  ``slug`` carries a
  ``UNIQUE`` constraint, so an insert racing another import fails with
  :class:`DuplicateSlugError` instead of creating a second row.
* :class:`HttpPostStore` talks to the storefront blog REST endpoint.

Neither store retries a failed call; errors surface as :class:`StoreError`.
"""

from __future__ import annotations

import os
import uuid
from typing import Any, Dict, List, Optional, Protocol

import duckdb
import requests

from blog_porter.models.blog_post import CanonicalRecord
from blog_porter.utils.errors import DuplicateSlugError, StoreError


class PostStore(Protocol):
    def exists_by_slug(self, slug: str) -> bool: ...

    def insert(self, record: CanonicalRecord) -> str: ...

    def list_all(self) -> List[CanonicalRecord]: ...


###############################################################################
# DuckDB store
###############################################################################

TABLE_NAME = "blog_posts"

_SCHEMA = [
    f"CREATE SEQUENCE IF NOT EXISTS {TABLE_NAME}_position",
    f"""
    CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
        id VARCHAR PRIMARY KEY,
        position BIGINT DEFAULT nextval('{TABLE_NAME}_position'),
        title VARCHAR NOT NULL,
        title_ar VARCHAR,
        slug VARCHAR NOT NULL UNIQUE,
        excerpt VARCHAR,
        excerpt_ar VARCHAR,
        content VARCHAR,
        content_ar VARCHAR,
        featured_image VARCHAR,
        author_name VARCHAR,
        category VARCHAR,
        tags VARCHAR,
        status VARCHAR,
        reading_time INTEGER,
        published_at VARCHAR,
        created_at TIMESTAMP DEFAULT current_timestamp
    )
    """,
]


class DuckDBPostStore:
    """Blog posts table in a DuckDB database (``":memory:"`` by default)."""

    def __init__(self, database: str = ":memory:") -> None:
        if database != ":memory:":
            os.makedirs(os.path.dirname(database) or ".", exist_ok=True)
        self.database = database
        self.con = duckdb.connect(database=database, read_only=False)
        for statement in _SCHEMA:
            self.con.execute(statement)

    def exists_by_slug(self, slug: str) -> bool:
        try:
            row = self.con.execute(
                f"SELECT 1 FROM {TABLE_NAME} WHERE slug = ? LIMIT 1", [slug]
            ).fetchone()
        except duckdb.Error as e:
            raise StoreError(f"Could not look up slug '{slug}': {e}") from e
        return row is not None

    def insert(self, record: CanonicalRecord) -> str:
        post_id = str(uuid.uuid4())
        row = {"id": post_id, **record.to_row()}
        columns = ", ".join(row)
        placeholders = ", ".join("?" for _ in row)
        try:
            self.con.execute(
                f"INSERT INTO {TABLE_NAME} ({columns}) VALUES ({placeholders})",
                list(row.values()),
            )
        except duckdb.ConstraintException as e:
            if self.exists_by_slug(record.slug):
                raise DuplicateSlugError(record.slug) from e
            raise StoreError(str(e)) from e
        except duckdb.Error as e:
            raise StoreError(str(e)) from e
        return post_id

    def list_all(self) -> List[CanonicalRecord]:
        try:
            cursor = self.con.execute(f"SELECT * FROM {TABLE_NAME} ORDER BY position")
            names = [d[0] for d in cursor.description]
            rows = cursor.fetchall()
        except duckdb.Error as e:
            raise StoreError(f"Could not list posts: {e}") from e
        return [CanonicalRecord.from_row(dict(zip(names, row))) for row in rows]

    def count(self) -> int:
        return self.con.execute(f"SELECT count(*) FROM {TABLE_NAME}").fetchone()[0]

    def close(self) -> None:
        self.con.close()

    def __enter__(self) -> "DuckDBPostStore":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


###############################################################################
# REST store
###############################################################################

def api_headers(token: Optional[str]) -> Dict[str, str]:
    """
    Construct the default headers for blog API requests.

    :param token: Optional bearer token for the admin API.
    :return: A dictionary of headers.
    """
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _describe(resp: requests.Response) -> str:
    return f"HTTP {resp.status_code}: {(resp.text or '').strip()[:200]}"


class HttpPostStore:
    """
    Blog posts behind the storefront REST endpoint (``/api/blog.php``).

    ``GET ?slug=`` answers 200 or 404, ``POST`` creates a post and answers
    ``{"id": ...}``, ``GET ?all=1`` lists every post.  A 409 on insert is
    read as a slug conflict.
    """

    def __init__(self, api_url: str, token: Optional[str] = None, *, timeout: float = 10.0) -> None:
        if not api_url:
            raise StoreError("Blog API URL is not configured.")
        self.api_url = api_url
        self.token = token
        self.timeout = timeout

    def exists_by_slug(self, slug: str) -> bool:
        try:
            resp = requests.get(
                self.api_url,
                params={"slug": slug},
                headers=api_headers(self.token),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise StoreError(f"Network error looking up slug '{slug}': {e}") from e
        if resp.status_code == 404:
            return False
        if resp.status_code == 200:
            return True
        raise StoreError(_describe(resp))

    def insert(self, record: CanonicalRecord) -> str:
        payload = record.to_row()
        payload["tags"] = list(record.tags)
        try:
            resp = requests.post(
                self.api_url,
                json=payload,
                headers={**api_headers(self.token), "Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise StoreError(f"Network error creating post: {e}") from e
        if resp.status_code == 409:
            raise DuplicateSlugError(record.slug)
        if resp.status_code not in (200, 201):
            raise StoreError(_describe(resp))
        try:
            return str(resp.json().get("id", ""))
        except ValueError as e:
            raise StoreError(f"Unexpected response creating post: {e}") from e

    def list_all(self) -> List[CanonicalRecord]:
        try:
            resp = requests.get(
                self.api_url,
                params={"all": 1},
                headers=api_headers(self.token),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise StoreError(f"Network error listing posts: {e}") from e
        if resp.status_code != 200:
            raise StoreError(_describe(resp))
        return [CanonicalRecord.from_row(row) for row in resp.json()]


def open_store(store_cfg: Dict[str, Any]) -> PostStore:
    """Build the store described by the ``store`` configuration section."""
    backend = (store_cfg.get("backend") or "duckdb").lower()
    if backend == "duckdb":
        return DuckDBPostStore(store_cfg.get("database") or ":memory:")
    if backend == "http":
        return HttpPostStore(
            store_cfg.get("api_url", ""),
            store_cfg.get("api_token") or None,
            timeout=float(store_cfg.get("timeout", 10)),
        )
    raise ValueError(f"Unknown store backend: {backend}")
