# utils/dsf_performance/__init__.py
"""
DSF Performance Module

Core logic and views for the DSF incentive portal.
Core modules have no Streamlit dependency and can be used on their own.

Components:
- csv_parser: Semicolon CSV dialect parser/serializer
- records: SalesRecord normalization and reference dates
- incentive: Tier incentive per DSF and per TL
- tips: Coaching checklist per DSF
- ranking: Filtered, grouped leaderboard
- branch_ranking: Branch summary ranking
- search: DSF / TL lookup
- data_loader: Fetching and stale-load guard
- charts / filters / fragments / export: Streamlit and Excel presentation

Usage:
    from utils.dsf_performance import (
        parse_csv,
        normalize_rows,
        compute_record_incentive,
        build_tips,
        rank_groups,
    )
"""

from .csv_parser import parse_csv, parse_csv_rows, rows_to_dicts, to_csv_text
from .records import (
    SalesRecord,
    ReferenceDates,
    to_number_safe,
    map_row_to_record,
    normalize_rows,
    records_to_frame,
    extract_reference_dates,
)
from .incentive import (
    IncentiveResult,
    TeamGroup,
    compute_incentive,
    compute_record_incentive,
    is_eligible,
    build_team,
)
from .tips import Tip, build_tips
from .ranking import (
    RankingFilters,
    RankingEngine,
    RankedGroup,
    normalize_region,
    filter_records,
    get_filter_options,
    rank_groups,
)
from .branch_ranking import parse_branch_summary, rank_branches
from .search import SearchResult, search, suggest
from .data_loader import DataLoadError, Dataset, DSFDataLoader, LoadSession, build_dataset

# Constants
from .constants import (
    FWA_UNIT_VALUE,
    REVENUE_TARGET,
    FWA_TIER_HIGH,
    FWA_TIER_LOW,
    INCENTIVE_HIGH,
    INCENTIVE_LOW,
    GROUP_LEVELS,
    FILTER_DIMENSIONS,
    SORT_OPTIONS,
)

__all__ = [
    # Parsing
    'parse_csv',
    'parse_csv_rows',
    'rows_to_dicts',
    'to_csv_text',

    # Records
    'SalesRecord',
    'ReferenceDates',
    'to_number_safe',
    'map_row_to_record',
    'normalize_rows',
    'records_to_frame',
    'extract_reference_dates',

    # Incentive
    'IncentiveResult',
    'TeamGroup',
    'compute_incentive',
    'compute_record_incentive',
    'is_eligible',
    'build_team',
    'Tip',
    'build_tips',

    # Ranking
    'RankingFilters',
    'RankingEngine',
    'RankedGroup',
    'normalize_region',
    'filter_records',
    'get_filter_options',
    'rank_groups',
    'parse_branch_summary',
    'rank_branches',

    # Search & loading
    'SearchResult',
    'search',
    'suggest',
    'DataLoadError',
    'Dataset',
    'DSFDataLoader',
    'LoadSession',
    'build_dataset',

    # Constants
    'FWA_UNIT_VALUE',
    'REVENUE_TARGET',
    'FWA_TIER_HIGH',
    'FWA_TIER_LOW',
    'INCENTIVE_HIGH',
    'INCENTIVE_LOW',
    'GROUP_LEVELS',
    'FILTER_DIMENSIONS',
    'SORT_OPTIONS',
]

__version__ = '1.0.0'
