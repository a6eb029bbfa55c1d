# utils/dsf_performance/ranking.py
"""
Aggregation & Ranking for DSF Performance

Handles the leaderboard:
- Region normalization (NSA / SSA / CSA)
- Multi-select filters (AND across dimensions)
- Grouping by DSF / TL / MC / BRANCH / REGION
- Group targets scaled by member count
- Stable descending sort and dense 1-based rank
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from .constants import (
    FWA_UNIT_VALUE, REVENUE_TARGET, FWA_TIER_HIGH,
    REGION_LABELS, UNKNOWN_REGION,
    GROUP_LEVELS, FILTER_DIMENSIONS, KNOWN_BRANDS,
    SORT_COLUMNS, DEFAULT_SORT,
    ACHIEVEMENT_GOOD, ACHIEVEMENT_WARNING,
    MISSING_PLACEHOLDER,
)
from .records import SalesRecord, records_to_frame

logger = logging.getLogger(__name__)

RANKED_COLUMNS = [
    'rank', 'id', 'name', 'branch', 'member_count',
    'total_fwa', 'target_fwa', 'rebuy_revenue',
    'total_revenue', 'target_revenue', 'achievement',
]


def normalize_region(region: Optional[str]) -> str:
    """
    Map a raw region string to its canonical label.

    'Northern Sumatra' -> 'NSA', 'southern area' -> 'SSA', 'CENTRAL' -> 'CSA'.
    Anything else keeps its text with the first letter upper-cased.
    """
    if not region:
        return UNKNOWN_REGION
    val = region.lower()
    for needle, label in REGION_LABELS:
        if needle in val:
            return label
    return region[0].upper() + region[1:]


# =============================================================================
# FILTERS
# =============================================================================

# Dimension -> function extracting the compared value from a record
_DIMENSION_VALUE = {
    'BRAND': lambda r: r.brand,
    'REGION': lambda r: normalize_region(r.region),
    'BRANCH': lambda r: r.branch,
    'MC': lambda r: r.mc,
    'TL': lambda r: r.nama_tl,
    'DSF': lambda r: r.nama_dsf,
}


@dataclass(frozen=True)
class RankingFilters:
    """
    Allow-lists per dimension. An empty tuple means no restriction.

    REGION values are canonical labels, TL and DSF values are display names.
    """
    brand: Tuple[str, ...] = ()
    region: Tuple[str, ...] = ()
    branch: Tuple[str, ...] = ()
    mc: Tuple[str, ...] = ()
    tl: Tuple[str, ...] = ()
    dsf: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, selections: Dict[str, Iterable[str]]) -> 'RankingFilters':
        """Build from {'BRAND': [...], 'REGION': [...], ...}. Unknown keys raise ValueError."""
        kwargs = {}
        for dimension, values in (selections or {}).items():
            key = dimension.upper()
            if key not in FILTER_DIMENSIONS:
                raise ValueError(f"Unknown filter dimension: {dimension}")
            kwargs[key.lower()] = tuple(values or ())
        return cls(**kwargs)

    def values_for(self, dimension: str) -> Tuple[str, ...]:
        return getattr(self, dimension.lower())

    def active_dimensions(self) -> List[str]:
        return [d for d in FILTER_DIMENSIONS if self.values_for(d)]

    @property
    def is_active(self) -> bool:
        return bool(self.active_dimensions())

    def matches(self, record: SalesRecord) -> bool:
        for dimension in self.active_dimensions():
            if _DIMENSION_VALUE[dimension](record) not in self.values_for(dimension):
                return False
        return True


def filter_records(
    records: Sequence[SalesRecord],
    filters: Optional[RankingFilters] = None
) -> List[SalesRecord]:
    """Keep records matching every active filter. Input order is kept."""
    if filters is None or not filters.is_active:
        return list(records)
    return [r for r in records if filters.matches(r)]


def get_filter_options(records: Sequence[SalesRecord], dimension: str) -> List[str]:
    """
    Distinct option values for a filter dimension, in first-seen order.

    BRAND always offers the known brands first.
    """
    key = dimension.upper()
    if key not in _DIMENSION_VALUE:
        raise ValueError(f"Unknown filter dimension: {dimension}")

    seen = list(KNOWN_BRANDS) if key == 'BRAND' else []
    getter = _DIMENSION_VALUE[key]
    for record in records:
        value = getter(record)
        if value not in seen:
            seen.append(value)
    return seen


def achievement_status(achievement: float) -> str:
    """'good' (>=100%), 'warning' (>=80%) or 'bad'."""
    if achievement >= ACHIEVEMENT_GOOD:
        return 'good'
    if achievement >= ACHIEVEMENT_WARNING:
        return 'warning'
    return 'bad'


# =============================================================================
# RANKING ENGINE
# =============================================================================

# Level -> (key column, name column)
_GROUP_COLUMNS = {
    'DSF': ('id_dsf', 'nama_dsf'),
    'TL': ('id_tl', 'nama_tl'),
    'MC': ('mc', 'mc'),
    'BRANCH': ('branch', 'branch'),
    'REGION': ('region_label', 'region_label'),
}


@dataclass(frozen=True)
class RankedGroup:
    """One leaderboard row."""
    rank: int
    id: str
    name: str
    branch: str
    member_count: int
    total_fwa: float
    target_fwa: int
    rebuy_revenue: float
    total_revenue: float
    target_revenue: float
    achievement: float


class RankingEngine:
    """
    Leaderboard aggregation over a loaded record collection.

    Usage:
        engine = RankingEngine(records)

        groups_df = engine.aggregate('TL', filters)
        ranked_df = engine.rank('BRANCH', sort_by='revenue', filters=filters)
    """

    def __init__(self, records: Sequence[SalesRecord]):
        """
        Initialize with data.

        Args:
            records: Normalized records (ID_DSF already required)
        """
        self.records = list(records)

    # =========================================================================
    # AGGREGATION
    # =========================================================================

    def aggregate(
        self,
        group_by: str = 'DSF',
        filters: Optional[RankingFilters] = None
    ) -> pd.DataFrame:
        """
        Sum metrics per group.

        Groups appear in first-seen order of the filtered input.

        Returns:
            DataFrame with id, name, branch, member_count, total_fwa,
            rebuy_revenue, total_revenue, target_revenue, target_fwa, achievement
        """
        level = self._validate_level(group_by)
        filtered = filter_records(self.records, filters)

        if not filtered:
            return pd.DataFrame(columns=[c for c in RANKED_COLUMNS if c != 'rank'])

        df = records_to_frame(filtered)
        df['region_label'] = df['region'].map(normalize_region)

        key_col, name_col = _GROUP_COLUMNS[level]
        df['_key'] = df[key_col]
        df['_name'] = df[name_col]

        grouped = df.groupby('_key', sort=False).agg(
            name=('_name', 'first'),
            branch=('branch', 'first'),
            member_count=('id_dsf', 'nunique'),
            total_fwa=('fwa_units', 'sum'),
            rebuy_revenue=('rebuy_revenue', 'sum'),
        ).reset_index().rename(columns={'_key': 'id'})

        if level != 'DSF':
            grouped['branch'] = MISSING_PLACEHOLDER

        grouped['total_revenue'] = grouped['total_fwa'] * FWA_UNIT_VALUE + grouped['rebuy_revenue']

        if level == 'DSF':
            grouped['target_revenue'] = REVENUE_TARGET
            grouped['target_fwa'] = FWA_TIER_HIGH
        else:
            grouped['target_revenue'] = REVENUE_TARGET * grouped['member_count']
            grouped['target_fwa'] = FWA_TIER_HIGH * grouped['member_count']

        grouped['achievement'] = grouped['total_revenue'] / grouped['target_revenue'] * 100

        logger.debug(f"Aggregated {len(filtered)} records into {len(grouped)} {level} groups")

        return grouped[[c for c in RANKED_COLUMNS if c != 'rank']]

    def rank(
        self,
        group_by: str = 'DSF',
        sort_by: str = DEFAULT_SORT,
        filters: Optional[RankingFilters] = None
    ) -> pd.DataFrame:
        """
        Aggregate, sort descending (stable) and assign a dense 1-based rank.

        Args:
            group_by: 'DSF', 'TL', 'MC', 'BRANCH' or 'REGION'
            sort_by: 'achievement', 'revenue', 'fwa' or 'rebuy'
            filters: Optional RankingFilters
        """
        sort_col = self._validate_sort(sort_by)
        grouped = self.aggregate(group_by, filters)

        if grouped.empty:
            return pd.DataFrame(columns=RANKED_COLUMNS)

        ranked = grouped.sort_values(sort_col, ascending=False, kind='mergesort')
        ranked = ranked.reset_index(drop=True)
        ranked.insert(0, 'rank', range(1, len(ranked) + 1))
        return ranked

    # =========================================================================
    # VALIDATION
    # =========================================================================

    @staticmethod
    def _validate_level(group_by: str) -> str:
        level = (group_by or '').upper()
        if level not in GROUP_LEVELS:
            raise ValueError(f"Unknown group level: {group_by}. Expected one of {GROUP_LEVELS}")
        return level

    @staticmethod
    def _validate_sort(sort_by: str) -> str:
        key = (sort_by or DEFAULT_SORT).lower()
        if key not in SORT_COLUMNS:
            raise ValueError(f"Unknown sort key: {sort_by}. Expected one of {list(SORT_COLUMNS)}")
        return SORT_COLUMNS[key]


def rank_groups(
    records: Sequence[SalesRecord],
    filters: Optional[RankingFilters] = None,
    group_by: str = 'DSF',
    sort_by: str = DEFAULT_SORT
) -> List[RankedGroup]:
    """Ranked leaderboard as RankedGroup objects."""
    ranked = RankingEngine(records).rank(group_by, sort_by, filters)
    return [
        RankedGroup(
            rank=int(row.rank),
            id=str(row.id),
            name=str(row.name),
            branch=str(row.branch),
            member_count=int(row.member_count),
            total_fwa=float(row.total_fwa),
            target_fwa=int(row.target_fwa),
            rebuy_revenue=float(row.rebuy_revenue),
            total_revenue=float(row.total_revenue),
            target_revenue=float(row.target_revenue),
            achievement=float(row.achievement),
        )
        for row in ranked.itertuples(index=False)
    ]
