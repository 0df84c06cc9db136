"""
Shared plumbing for the format parsers.

Parsers turn raw text into :class:`DraftRecord` values and never raise for a
single bad row: anything that fails record validation is dropped here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from pydantic import ValidationError as SchemaError

from blog_porter.models.blog_post import DraftRecord
from blog_porter.utils.dates import to_iso
from blog_porter.utils.errors import ValidationError
from .csv_tokenizer import split_records, tokenize_line
from .header_schema import ColumnMap, HeaderSchema

DEFAULT_AUTHOR = "Admin"
DEFAULT_CATEGORY = "General"


@dataclass(frozen=True)
class ParserDefaults:
    author: str = DEFAULT_AUTHOR
    category: str = DEFAULT_CATEGORY


def build_draft(**fields: Any) -> DraftRecord:
    """Validate ``fields`` into a draft, raising :class:`ValidationError`."""
    fields["publish_date"] = to_iso(fields.get("publish_date"))
    try:
        return DraftRecord(**fields)
    except SchemaError as exc:
        missing = ", ".join(str(err["loc"][0]) for err in exc.errors() if err.get("loc"))
        raise ValidationError(f"invalid row ({missing})") from exc


def collect(rows: Iterable[Optional[dict]]) -> List[DraftRecord]:
    """Build drafts from field dictionaries, skipping rows that do not validate."""
    drafts: List[DraftRecord] = []
    for fields in rows:
        if fields is None:
            continue
        try:
            drafts.append(build_draft(**fields))
        except ValidationError:
            continue
    return drafts


def iter_csv_rows(text: str, schema: HeaderSchema) -> Tuple[ColumnMap, List[Sequence[str]]]:
    """Resolve the header row of ``text`` and tokenize the data rows."""
    records = split_records(text)
    if not records:
        return ColumnMap(columns={}), []
    columns = schema.resolve(tokenize_line(records[0]))
    return columns, [tokenize_line(record) for record in records[1:]]
