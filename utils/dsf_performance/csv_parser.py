# utils/dsf_performance/csv_parser.py
"""
Semicolon CSV Parser for DSF Data Files

The DSF export uses a quoted CSV dialect:
- ';' as field delimiter
- '"' quoting, with '""' as an escaped quote inside quoted fields
- Quoted fields may contain delimiters and newlines literally
- LF or CRLF line endings

Parsing never raises. An unterminated quote consumes the rest of the
input as quoted content.
"""

import logging
from typing import Dict, Iterable, List, Sequence

from .constants import CSV_DELIMITER

logger = logging.getLogger(__name__)


def parse_csv_rows(text: str, delimiter: str = CSV_DELIMITER) -> List[List[str]]:
    """
    Split raw text into rows of cell strings.

    A row consisting of exactly one blank cell (an empty line) is dropped.
    Cells are returned untrimmed.

    Args:
        text: Raw file content
        delimiter: Field delimiter (default ';')

    Returns:
        List of rows, each a list of cell strings
    """
    rows: List[List[str]] = []
    row: List[str] = []
    cell: List[str] = []
    in_quotes = False

    def push_cell():
        row.append(''.join(cell))
        cell.clear()

    def push_row():
        if len(row) == 1 and not row[0].strip():
            row.clear()
            return
        rows.append(list(row))
        row.clear()

    i = 0
    length = len(text or '')
    while i < length:
        ch = text[i]

        if ch == '"':
            if in_quotes and i + 1 < length and text[i + 1] == '"':
                cell.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif not in_quotes and ch == delimiter:
            push_cell()
        elif not in_quotes and ch == '\n':
            push_cell()
            push_row()
        elif not in_quotes and ch == '\r':
            pass
        else:
            cell.append(ch)
        i += 1

    if in_quotes:
        logger.debug("Unterminated quote in CSV input, remainder read as quoted content")

    push_cell()
    push_row()

    return rows


def rows_to_dicts(rows: Sequence[Sequence[str]]) -> List[Dict[str, str]]:
    """
    Zip data rows against the header row.

    - Header cells are trimmed
    - Missing trailing cells become ''
    - Extra trailing cells are ignored
    - Rows where every cell is blank are dropped

    Returns:
        List of header-keyed dicts with trimmed values
    """
    if not rows:
        return []

    headers = [str(h or '').strip() for h in rows[0]]
    records = []

    for raw in rows[1:]:
        if not any(str(x or '').strip() for x in raw):
            continue
        records.append({
            header: str(raw[idx] if idx < len(raw) else '').strip()
            for idx, header in enumerate(headers)
        })

    return records


def parse_csv(text: str, delimiter: str = CSV_DELIMITER) -> List[Dict[str, str]]:
    """Parse raw CSV text straight into header-keyed dicts."""
    return rows_to_dicts(parse_csv_rows(text, delimiter))


def _quote_cell(value, delimiter: str) -> str:
    s = '' if value is None else str(value)
    if any(c in s for c in (delimiter, '"', '\n', '\r')):
        return '"' + s.replace('"', '""') + '"'
    return s


def to_csv_text(rows: Iterable[Sequence], delimiter: str = CSV_DELIMITER) -> str:
    """
    Serialize rows into the same dialect parse_csv_rows() reads.

    Cells containing the delimiter, quotes or line breaks are quoted and
    embedded quotes are doubled.
    """
    return '\n'.join(
        delimiter.join(_quote_cell(cell, delimiter) for cell in row)
        for row in rows
    ) + '\n'
