# utils/dsf_performance/records.py
"""
Record Normalization for DSF Performance

Maps raw header-keyed CSV rows into typed SalesRecord objects:
- Currency-like strings coerced to numbers (never raises)
- Missing string fields replaced with placeholders
- Records without an ID_DSF dropped from the working set
- Reference "as-of" dates extracted from the first data row
"""

import logging
import math
import re
from collections import Counter
from dataclasses import dataclass, asdict, fields
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pandas as pd

from .constants import (
    COL_BRAND, COL_ID_DSF, COL_NAMA_DSF, COL_MC, COL_BRANCH, COL_REGION,
    COL_ID_TL, COL_NAMA_TL, COL_TOTAL_FWA, COL_REV_REBUY,
    REFERENCE_DATE_COLUMNS, MISSING_PLACEHOLDER,
)

logger = logging.getLogger(__name__)

Number = Union[int, float]

_CURRENCY_TOKENS = ('Rp', 'IDR', '.', ',')
_YYYYMMDD = re.compile(r'^\d{8}$')


# =============================================================================
# NUMBER COERCION
# =============================================================================

def to_number_safe(value) -> Number:
    """
    Coerce a currency-like value to a number.

    Strips 'Rp' / 'IDR' markers, '.' thousands separators and ',' characters.
    Anything unparsable or non-finite becomes 0.

    Examples:
        >>> to_number_safe("Rp 1.250.000")
        1250000
        >>> to_number_safe("abc")
        0
    """
    if value is None:
        return 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        n = float(value)
    else:
        s = str(value)
        for token in _CURRENCY_TOKENS:
            s = s.replace(token, '')
        s = s.strip()
        if not s:
            return 0
        if '_' in s:
            return 0
        try:
            n = float(s)
        except ValueError:
            return 0

    if not math.isfinite(n):
        return 0
    return int(n) if n.is_integer() else n


# =============================================================================
# SALES RECORD
# =============================================================================

@dataclass(frozen=True)
class SalesRecord:
    """One DSF row of the monthly performance file."""
    brand: str
    id_dsf: str
    nama_dsf: str
    mc: str
    branch: str
    region: str
    id_tl: str
    nama_tl: str
    fwa_units: Number = 0
    rebuy_revenue: Number = 0
    data_fwa_im3: str = ''
    data_fwa_3id: str = ''
    data_rebuy_im3: str = ''
    data_rebuy_3id: str = ''

    def to_dict(self) -> Dict:
        return asdict(self)


RECORD_COLUMNS = [f.name for f in fields(SalesRecord)]


def map_row_to_record(row: Dict[str, str]) -> SalesRecord:
    """
    Map a raw CSV row to a SalesRecord.

    The normalizer always returns a record; dropping rows without an
    ID_DSF is the caller's job (see normalize_rows).
    """
    def text(key: str, default: str = MISSING_PLACEHOLDER) -> str:
        return row.get(key) or default

    return SalesRecord(
        brand=text(COL_BRAND),
        id_dsf=str(row.get(COL_ID_DSF) or '').strip(),
        nama_dsf=text(COL_NAMA_DSF),
        mc=text(COL_MC),
        branch=text(COL_BRANCH),
        region=text(COL_REGION),
        id_tl=str(row.get(COL_ID_TL) or '').strip(),
        nama_tl=text(COL_NAMA_TL),
        fwa_units=to_number_safe(row.get(COL_TOTAL_FWA)),
        rebuy_revenue=to_number_safe(row.get(COL_REV_REBUY)),
        data_fwa_im3=text(REFERENCE_DATE_COLUMNS[0], ''),
        data_fwa_3id=text(REFERENCE_DATE_COLUMNS[1], ''),
        data_rebuy_im3=text(REFERENCE_DATE_COLUMNS[2], ''),
        data_rebuy_3id=text(REFERENCE_DATE_COLUMNS[3], ''),
    )


def find_duplicate_ids(records: Sequence[SalesRecord]) -> List[str]:
    """Return ID_DSF values occurring more than once, in first-seen order."""
    counts = Counter(r.id_dsf for r in records)
    return [id_dsf for id_dsf, n in counts.items() if n > 1]


def normalize_rows(rows: Sequence[Dict[str, str]]) -> List[SalesRecord]:
    """
    Map raw rows and drop records lacking an ID_DSF.

    Duplicate ID_DSF values are kept (aggregation sums them into one
    group) and reported with a warning.
    """
    mapped = [map_row_to_record(row) for row in rows]
    records = [r for r in mapped if r.id_dsf]

    dropped = len(mapped) - len(records)
    if dropped:
        logger.info(f"Dropped {dropped} row(s) without ID_DSF")

    duplicates = find_duplicate_ids(records)
    if duplicates:
        preview = ', '.join(duplicates[:10])
        logger.warning(
            f"{len(duplicates)} duplicate ID_DSF value(s) will be summed in rankings: {preview}"
        )

    return records


def records_to_frame(records: Sequence[SalesRecord]) -> pd.DataFrame:
    """Tabular view of the records, one row per record, input order kept."""
    if not records:
        return pd.DataFrame(columns=RECORD_COLUMNS)
    return pd.DataFrame([r.to_dict() for r in records], columns=RECORD_COLUMNS)


# =============================================================================
# REFERENCE DATES
# =============================================================================

@dataclass(frozen=True)
class ReferenceDates:
    """As-of dates of the FWA and rebuy feeds per brand (YYYY-MM-DD or raw)."""
    fwa_im3: str = ''
    fwa_3id: str = ''
    rebuy_im3: str = ''
    rebuy_3id: str = ''

    def for_brand(self, brand: str) -> Tuple[str, str]:
        """Return (fwa_date, rebuy_date) for a brand. Non-IM3 brands use 3ID."""
        if (brand or '').upper() == 'IM3':
            return self.fwa_im3, self.rebuy_im3
        return self.fwa_3id, self.rebuy_3id

    def as_dict(self) -> Dict[str, str]:
        return dict(zip(
            REFERENCE_DATE_COLUMNS,
            (self.fwa_im3, self.fwa_3id, self.rebuy_im3, self.rebuy_3id)
        ))


def format_reference_date(value: Optional[str]) -> str:
    """'20260215' -> '2026-02-15'. Empty stays empty, anything else unchanged."""
    s = (value or '').strip()
    if _YYYYMMDD.match(s):
        return f"{s[:4]}-{s[4:6]}-{s[6:]}"
    return s


def extract_reference_dates(rows: Sequence[Sequence[str]]) -> ReferenceDates:
    """
    Read the reference dates from the first data row.

    Uses the DATA_* header columns when the file has them, otherwise falls
    back to the last four fields of the first data row in the order
    FWA IM3, FWA 3ID, REBUY IM3, REBUY 3ID.

    Args:
        rows: Parsed rows including the header row (parse_csv_rows output)
    """
    if len(rows) < 2:
        return ReferenceDates()

    headers = [str(h or '').strip() for h in rows[0]]
    first = next((r for r in rows[1:] if any(str(x or '').strip() for x in r)), None)
    if first is None:
        return ReferenceDates()

    if all(col in headers for col in REFERENCE_DATE_COLUMNS):
        values = []
        for col in REFERENCE_DATE_COLUMNS:
            idx = headers.index(col)
            values.append(first[idx] if idx < len(first) else '')
    else:
        logger.debug("DATA_* headers not found, reading reference dates positionally")
        tail = list(first[-4:])
        values = [''] * (4 - len(tail)) + tail

    return ReferenceDates(*(format_reference_date(v) for v in values))
