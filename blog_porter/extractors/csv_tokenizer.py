"""
Quoted-field tokenizer for delimited text.

The CSV files handled here come from spreadsheet exports and plugin
exporters of varying quality, so the tokenizer never raises: malformed
quoting degrades to a best-effort split of the line.
"""

from __future__ import annotations

from typing import List

QUOTE = '"'


def tokenize_line(line: str, delimiter: str = ",") -> List[str]:
    """Split one line of delimited text into its field values.

    Fields enclosed in double quotes may contain the delimiter, and a doubled
    quote inside them stands for a literal quote::

        >>> tokenize_line('x,"a,b""c",y')
        ['x', 'a,b"c', 'y']

    An unterminated quote swallows the rest of the line into one field.
    """
    line = line.rstrip("\r\n")
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == QUOTE:
            if in_quotes and line[i + 1:i + 2] == QUOTE:
                current.append(QUOTE)
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1
    fields.append("".join(current))
    return fields


def _quote_open_after(line: str, in_quotes: bool, delimiter: str = ",") -> bool:
    """Return the quote state after scanning ``line`` starting from ``in_quotes``.

    Only a quote at the start of a field opens a quoted field; a stray quote
    in the middle of a bare value is literal text and never carries over to
    the next line.
    """
    at_field_start = not in_quotes
    i = 0
    while i < len(line):
        char = line[i]
        if in_quotes:
            if char == QUOTE:
                if line[i + 1:i + 2] == QUOTE:
                    i += 1
                else:
                    in_quotes = False
        elif char == QUOTE and at_field_start:
            in_quotes = True
        at_field_start = not in_quotes and char == delimiter
        i += 1
    return in_quotes


def split_records(text: str) -> List[str]:
    """Split file text into logical records.

    Physical lines are joined back together while a quoted field is open, so
    multi-line HTML content inside quotes stays in a single record.  A quote
    that is still open at the end of the file is treated as malformed: the
    lines it would have swallowed are kept as records of their own.  Blank
    records are dropped.
    """
    records: List[str] = []
    pending: List[str] = []
    in_quotes = False
    for line in text.splitlines():
        pending.append(line)
        in_quotes = _quote_open_after(line, in_quotes)
        if not in_quotes:
            record = "\n".join(pending)
            pending = []
            if record.strip():
                records.append(record)
    records.extend(line for line in pending if line.strip())
    return records
