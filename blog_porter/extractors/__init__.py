"""
Extractors for blog export files.

This subpackage detects the format of an uploaded export and parses it into
:class:`~blog_porter.models.blog_post.DraftRecord` values.  Three formats are
understood: WordPress WXR XML, WordPress-style CSV and the generic blog CSV
schema.  Parsers are pure functions of the file text; they never touch the
store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from blog_porter.models.blog_post import DraftRecord
from .base import ParserDefaults
from .csv_tokenizer import split_records, tokenize_line
from .format_detector import SourceFormat, detect_format
from .header_schema import STANDARD_CSV_SCHEMA, WORDPRESS_CSV_SCHEMA
from .standard_extractor import parse_standard_csv
from .wordpress_extractor import parse_wordpress_csv, parse_wxr

Parser = Callable[[str, ParserDefaults], List[DraftRecord]]

PARSERS: Dict[SourceFormat, Parser] = {
    SourceFormat.WXR: parse_wxr,
    SourceFormat.WORDPRESS_CSV: parse_wordpress_csv,
    SourceFormat.STANDARD_CSV: parse_standard_csv,
}

_SCHEMAS = {
    SourceFormat.WORDPRESS_CSV: WORDPRESS_CSV_SCHEMA,
    SourceFormat.STANDARD_CSV: STANDARD_CSV_SCHEMA,
}


@dataclass
class ParsedSource:
    format: SourceFormat
    records: List[DraftRecord]
    ignored_columns: List[str] = field(default_factory=list)


def parse_source(
    text: str,
    filename: Optional[str] = None,
    defaults: ParserDefaults = ParserDefaults(),
) -> ParsedSource:
    """Detect the format of ``text`` and parse it with the matching parser.

    Raises
    ------
    ParseError
        If the file cannot be read in its detected format at all.
    """
    source_format = detect_format(text, filename)
    records = PARSERS[source_format](text, defaults)
    ignored: List[str] = []
    schema = _SCHEMAS.get(source_format)
    if schema is not None:
        header = split_records(text)[:1]
        if header:
            ignored = schema.resolve(tokenize_line(header[0])).ignored
    return ParsedSource(format=source_format, records=records, ignored_columns=ignored)


__all__ = [
    "PARSERS",
    "ParsedSource",
    "ParserDefaults",
    "SourceFormat",
    "detect_format",
    "parse_source",
    "parse_standard_csv",
    "parse_wordpress_csv",
    "parse_wxr",
    "split_records",
    "tokenize_line",
]
