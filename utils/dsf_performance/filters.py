# utils/dsf_performance/filters.py
"""
Filter Components for the DSF Leaderboard

Renders filter UI elements:
- Multi-select allow-list per dimension (BRAND, REGION, BRANCH, MC, TL, DSF)
- Group level selector (DSF / TL / MC / BRANCH / REGION)
- Sort key selector

Selections are turned into an immutable RankingFilters snapshot on every
rerun; nothing is mutated in place.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

import streamlit as st

from .constants import (
    FILTER_DIMENSIONS, GROUP_LEVELS, SORT_OPTIONS, DEFAULT_SORT,
)
from .ranking import RankingFilters, get_filter_options
from .records import SalesRecord

logger = logging.getLogger(__name__)

_DIMENSION_LABELS = {
    'BRAND': 'Brand',
    'REGION': 'Region',
    'BRANCH': 'Branch',
    'MC': 'MC',
    'TL': 'TL',
    'DSF': 'DSF',
}


@dataclass
class FilterResult:
    """
    Result from a multiselect filter.

    Attributes:
        selected: List of selected values
        is_active: True if filter should be applied (has selections)
    """
    selected: List[Any]
    is_active: bool

    def __repr__(self) -> str:
        return f"FilterResult({len(self.selected)} items, active={self.is_active})"


def render_multiselect_filter(
    label: str,
    options: List[Any],
    key: str,
    placeholder: str = "All",
    help_text: str = None,
    container=None
) -> FilterResult:
    """
    Render a multiselect allow-list filter.

    Args:
        label: Filter label (e.g., "Region", "Branch")
        options: List of options to choose from
        key: Unique key for Streamlit widgets
        placeholder: Placeholder text for empty multiselect
        help_text: Optional help tooltip
        container: Optional Streamlit container (default: st)

    Returns:
        FilterResult with selected values and is_active flag
    """
    ctx = container if container else st

    selected = ctx.multiselect(
        label=label,
        options=options,
        default=[],
        key=f"{key}_select",
        placeholder=placeholder,
        help=help_text,
    )

    return FilterResult(selected=list(selected), is_active=len(selected) > 0)


def clear_ranking_filters(key_prefix: str = "rank"):
    """Reset every dimension filter widget."""
    for dimension in FILTER_DIMENSIONS:
        st.session_state[f"{key_prefix}_{dimension.lower()}_select"] = []


def render_ranking_filters(
    records: Sequence[SalesRecord],
    key_prefix: str = "rank",
    num_columns: int = 3
) -> RankingFilters:
    """
    Render the six dimension filters in a grid.

    Returns:
        RankingFilters snapshot of the current selections
    """
    header_col, clear_col = st.columns([4, 1])
    with header_col:
        st.markdown("**Filter:**")
    with clear_col:
        st.button(
            "Clear All Filters",
            key=f"{key_prefix}_clear",
            on_click=clear_ranking_filters,
            args=(key_prefix,),
            use_container_width=True
        )

    selections: Dict[str, List[str]] = {}
    cols = st.columns(num_columns)

    for idx, dimension in enumerate(FILTER_DIMENSIONS):
        with cols[idx % num_columns]:
            result = render_multiselect_filter(
                label=_DIMENSION_LABELS[dimension],
                options=get_filter_options(records, dimension),
                key=f"{key_prefix}_{dimension.lower()}",
            )
        selections[dimension] = result.selected

    filters = RankingFilters.from_dict(selections)
    logger.debug(f"Active filters: {filters.active_dimensions()}")
    return filters


def render_group_selector(key: str = "rank_group") -> str:
    """Group level selector (DSF / TL / MC / BRANCH / REGION)."""
    return st.radio(
        "Ranking level",
        options=GROUP_LEVELS,
        horizontal=True,
        key=key,
    )


def render_sort_selector(key: str = "rank_sort") -> str:
    """Sort key selector. Always descending."""
    keys = list(SORT_OPTIONS)
    return st.radio(
        "Sort By",
        options=keys,
        index=keys.index(DEFAULT_SORT),
        format_func=lambda k: SORT_OPTIONS[k],
        horizontal=True,
        key=key,
    )


def get_filter_summary(filters: RankingFilters) -> str:
    """One-line description of the active filters."""
    parts = []
    for dimension in filters.active_dimensions():
        values = filters.values_for(dimension)
        if len(values) <= 2:
            parts.append(f"{_DIMENSION_LABELS[dimension]}: {', '.join(values)}")
        else:
            parts.append(f"{_DIMENSION_LABELS[dimension]}: {len(values)} selected")
    return " | ".join(parts) if parts else "No filters applied"
