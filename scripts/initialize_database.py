"""
Creates the local DuckDB blog store so imports and exports have a target.

Usage:
    python scripts/initialize_database.py [--database data/blog.duckdb]
"""

import argparse
import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from blog_porter.migrators.post_store import TABLE_NAME, DuckDBPostStore


def initialize_database(db_path):
    """
    Creates the posts table in ``db_path`` if it does not exist yet and
    reports how many posts it holds.
    """
    existed = os.path.exists(db_path)
    with DuckDBPostStore(db_path) as store:
        count = store.count()
    if existed:
        print(f"Table '{TABLE_NAME}' ready in {db_path} with {count} posts.")
    else:
        print(f"Created {db_path} with an empty '{TABLE_NAME}' table.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--database", default="data/blog.duckdb")
    args = parser.parse_args()
    initialize_database(args.database)
