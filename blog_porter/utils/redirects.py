"""
Generation of slug remap CSV files.

The :func:`generate_slug_map_csv` helper writes a CSV file containing the
slug each imported post had in its source export next to the slug it was
given in the store.  The resulting file is used to configure redirects so
that existing links keep working after an import renamed a post.
"""

from __future__ import annotations

import csv
import os
from typing import Dict, Iterable


def generate_slug_map_csv(
    entries: Iterable[Dict[str, str]], *, out_path: str = "reports/slug_map.csv"
) -> str:
    """Generate a CSV mapping source slugs to the slugs allocated on import.

    Parameters
    ----------
    entries:
        Iterable of dictionaries with ``SourceSlug``, ``NewSlug`` and
        ``Title`` keys.  Entries whose source slug is empty or equal to the
        new slug are skipped.
    out_path:
        Location of the CSV file to be written.  The parent directory is
        created automatically.

    Returns
    -------
    str
        The path of the generated CSV file.
    """
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["SourceSlug", "NewSlug", "Title"])
        for entry in entries:
            source = (entry.get("SourceSlug") or "").strip()
            new = entry.get("NewSlug") or ""
            if not source or source == new:
                continue
            writer.writerow([source, new, entry.get("Title", "")])
    return out_path
