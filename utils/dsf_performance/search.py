# utils/dsf_performance/search.py
"""
DSF / TL lookup for the search portal

Lookup precedence (case-insensitive, exact):
1. DSF ID
2. DSF name
3. TL ID (returns the whole team)

No match is a normal result, not an exception.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .constants import SUGGESTION_LIMIT, DEMO_ID_LIMIT
from .incentive import TeamGroup, build_team
from .records import SalesRecord

logger = logging.getLogger(__name__)

EMPTY_QUERY_MESSAGE = "Please input DSF ID / DSF Name / TL ID."
NOT_FOUND_MESSAGE = "No matching DSF or TL found. Please check your input."


@dataclass(frozen=True)
class SearchResult:
    """
    kind is 'dsf', 'tl', 'none' (no match) or 'empty' (blank query).
    """
    kind: str
    record: Optional[SalesRecord] = None
    team: Optional[TeamGroup] = None
    message: str = ''

    @property
    def found(self) -> bool:
        return self.kind in ('dsf', 'tl')


def search(records: Sequence[SalesRecord], query: str) -> SearchResult:
    q = (query or '').strip().lower()

    if not q:
        return SearchResult(kind='empty', message=EMPTY_QUERY_MESSAGE)

    for record in records:
        if record.id_dsf.lower() == q:
            return SearchResult(kind='dsf', record=record)

    for record in records:
        if record.nama_dsf.lower() == q:
            return SearchResult(kind='dsf', record=record)

    team = build_team(records, q)
    if team is not None:
        return SearchResult(kind='tl', team=team)

    logger.debug(f"No DSF or TL matches query '{q}'")
    return SearchResult(kind='none', message=NOT_FOUND_MESSAGE)


def suggest(
    records: Sequence[SalesRecord],
    query: str,
    limit: int = SUGGESTION_LIMIT
) -> List[SalesRecord]:
    """Substring matches on DSF ID, DSF name or TL ID, first `limit` in input order."""
    q = (query or '').strip().lower()
    if not q:
        return []

    matches = []
    for record in records:
        if q in record.id_dsf.lower() or q in record.nama_dsf.lower() or q in record.id_tl.lower():
            matches.append(record)
            if len(matches) >= limit:
                break
    return matches


def demo_ids(records: Sequence[SalesRecord], limit: int = DEMO_ID_LIMIT) -> List[str]:
    return [r.id_dsf for r in records[:limit]]
