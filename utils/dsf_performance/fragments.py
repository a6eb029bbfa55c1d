# utils/dsf_performance/fragments.py
"""
Streamlit Views for DSF Performance

Data access:
- Cached loaders (st.cache_data) keyed by source
- Session-scoped LoadSession guarding against stale reloads

Views:
- DSF card (profile, rings, tips)
- Team leader dashboard (team rings, member table)
- Leaderboard table
- Branch ranking table
"""

import logging
from typing import Optional, Tuple

import pandas as pd
import streamlit as st

from utils.config import config

from .branch_ranking import medal
from .charts import DSFCharts
from .constants import FWA_TIER_HIGH, COLORS
from .data_loader import DataLoadError, Dataset, DSFDataLoader, LoadSession
from .formatters import format_idr, format_month_year, format_percentage, format_timestamp
from .incentive import TeamGroup, compute_record_incentive
from .ranking import achievement_status
from .records import ReferenceDates, SalesRecord, find_duplicate_ids
from .tips import build_tips

logger = logging.getLogger(__name__)

CACHE_TTL = config.get_app_setting("CACHE_TTL_SECONDS", 300)
_SESSION_KEY = "dsf_load_session"


# =============================================================================
# DATA ACCESS
# =============================================================================

def _loader(timeout: float, dsf_source: str = "", branch_source: str = "") -> DSFDataLoader:
    return DSFDataLoader({
        'dsf_source': dsf_source,
        'branch_source': branch_source,
        'fetch_timeout_seconds': timeout,
    })


@st.cache_data(ttl=CACHE_TTL, show_spinner="Loading DSF data...")
def load_dataset_cached(source: str, timeout: float) -> Dataset:
    """Cached fetch + parse of the DSF file. Failures are not cached."""
    return _loader(timeout, dsf_source=source).load_dataset()


@st.cache_data(ttl=CACHE_TTL, show_spinner="Loading branch summary...")
def load_branch_summary_cached(source: str, timeout: float) -> pd.DataFrame:
    return _loader(timeout, branch_source=source).load_branch_summary()


def _load_session() -> LoadSession:
    if _SESSION_KEY not in st.session_state:
        st.session_state[_SESSION_KEY] = LoadSession()
    return st.session_state[_SESSION_KEY]


def get_dataset() -> Tuple[Optional[Dataset], Optional[DataLoadError]]:
    """
    Load the DSF dataset for this session.

    Returns:
        (dataset, error). dataset is the last committed one, error is set
        when the latest load failed.
    """
    session = _load_session()
    sources = config.get_data_sources()

    token = session.begin()
    try:
        dataset = load_dataset_cached(sources['dsf_source'], sources['fetch_timeout_seconds'])
    except DataLoadError as e:
        logger.error(f"DSF data load failed: {e}")
        session.fail(token, e)
        return session.dataset, session.error

    session.commit(token, dataset)
    return session.dataset, session.error


def get_branch_summary() -> pd.DataFrame:
    """Branch summary. Raises DataLoadError."""
    sources = config.get_data_sources()
    return load_branch_summary_cached(sources['branch_source'], sources['fetch_timeout_seconds'])


def reload_data():
    """Drop cached data and make in-flight loads stale."""
    load_dataset_cached.clear()
    load_branch_summary_cached.clear()
    _load_session().invalidate()
    logger.info("Data cache cleared, reloading")


def render_load_error(error: DataLoadError, key: str = "reload_after_error"):
    st.error(f"⚠️ {error.describe()}")
    st.button("🔄 Reload", key=key, on_click=reload_data)


def loaded_at_text(dataset: Dataset) -> str:
    """Load time of the dataset in the configured timezone."""
    return format_timestamp(dataset.loaded_at, config.get_app_setting("TIMEZONE", "Asia/Jakarta"))


def render_debug_panel(dataset: Dataset):
    """Dataset diagnostics, shown only with ENABLE_DEBUG_MODE."""
    if not config.is_feature_enabled("DEBUG_MODE"):
        return

    with st.expander("🐞 Debug", expanded=False):
        duplicates = find_duplicate_ids(dataset.records)
        st.json({
            "source": dataset.source,
            "loaded_at": loaded_at_text(dataset),
            "records": len(dataset.records),
            "duplicate_ids": duplicates,
            "reference_dates": dataset.reference_dates.as_dict(),
        })


# =============================================================================
# DSF CARD
# =============================================================================

def render_tips(record: SalesRecord, eligible: bool):
    with st.container(border=True):
        st.markdown("**Tips & Progress**")
        st.caption("Target reached 🎉" if eligible else "Still within reach 💪")
        for tip in build_tips(record):
            icon = "✅" if tip.done else "⬜"
            text = f"~~{tip.text}~~" if tip.done else tip.text
            st.markdown(f"{icon} {text}")


def render_dsf_card(record: SalesRecord, reference_dates: Optional[ReferenceDates] = None):
    """Full DSF view: header, profile, rings, tips."""
    calc = compute_record_incentive(record)
    fwa_date, _ = (reference_dates or ReferenceDates()).for_brand(record.brand)

    with st.container(border=True):
        head_col, badge_col = st.columns([3, 1])
        with head_col:
            st.subheader(f"Sales Period {format_month_year(fwa_date)}")
            st.caption("See how far you have come this month.")
        with badge_col:
            st.markdown(f"`{record.brand}`")
            if calc.is_eligible:
                st.success(calc.tier_label)
            else:
                st.error(calc.tier_label)

        col1, col2 = st.columns(2)
        col1.metric("ID DSF", record.id_dsf)
        col2.metric("Nama DSF", record.nama_dsf)

        with st.expander("Profile details"):
            c1, c2 = st.columns(2)
            c1.markdown(f"**Micro Cluster:** {record.mc}")
            c1.markdown(f"**TL ID:** {record.id_tl or '-'}")
            c2.markdown(f"**Region:** {record.region}")
            c2.markdown(f"**TL Name:** {record.nama_tl or '-'}")

        DSFCharts.render_dsf_kpi_cards(record, calc, reference_dates)
        render_tips(record, calc.is_eligible)


# =============================================================================
# TEAM LEADER DASHBOARD
# =============================================================================

def team_member_table(team: TeamGroup) -> pd.DataFrame:
    """Member rows ranked by total revenue."""
    rows = []
    for idx, (member, calc) in enumerate(team.ranked_members(), 1):
        rows.append({
            'Rank': idx,
            'DSF ID': member.id_dsf,
            'DSF Name': member.nama_dsf,
            'Branch': member.branch or '-',
            'FWA Units': member.fwa_units,
            'Target': FWA_TIER_HIGH,
            'Rebuy Revenue': format_idr(member.rebuy_revenue),
            'Total Revenue': format_idr(calc.total_revenue),
            'Status': 'Eligible' if calc.is_eligible else 'Not Eligible',
        })
    return pd.DataFrame(rows)


def render_team_dashboard(team: TeamGroup, reference_dates: Optional[ReferenceDates] = None):
    with st.container(border=True):
        head_col, badge_col = st.columns([3, 1])
        with head_col:
            st.subheader("Team Leader Dashboard")
            st.caption("Performance of the DSFs you coordinate.")
            if reference_dates is not None and reference_dates.fwa_im3:
                st.caption(f"Data based on: **{reference_dates.fwa_im3}**")
        with badge_col:
            st.markdown(f"`TL` `{team.member_count} DSFs`")
            st.caption(f"{team.eligible_count} of {team.member_count} DSFs eligible")

        col1, col2 = st.columns(2)
        col1.metric("TL ID", team.tl_id)
        col2.metric("TL Name", team.tl_name or '-')

        DSFCharts.render_team_kpi_cards(team)

        st.markdown("**DSF List Under This TL**")
        st.dataframe(team_member_table(team), use_container_width=True, hide_index=True)


# =============================================================================
# LEADERBOARD
# =============================================================================

def _achievement_style(value: float) -> str:
    return f"color: {COLORS['achievement_' + achievement_status(value)]}; font-weight: bold"


def ranking_display_frame(ranked_df: pd.DataFrame, group_by: str) -> pd.DataFrame:
    """Rename and select leaderboard columns for display."""
    if group_by == 'DSF':
        columns = {
            'rank': 'Rank', 'id': 'ID DSF', 'name': 'Nama DSF', 'branch': 'Branch',
            'total_fwa': 'FWA', 'rebuy_revenue': 'Rebuy', 'total_revenue': 'Total Revenue',
            'target_revenue': 'Target', 'achievement': 'Achievement',
        }
    else:
        columns = {
            'rank': 'Rank', 'name': group_by.title() if group_by not in ('MC', 'TL') else group_by,
            'target_fwa': 'Target FWA', 'total_fwa': 'FWA', 'rebuy_revenue': 'Rebuy',
            'target_revenue': 'Target Revenue', 'total_revenue': 'Total Revenue',
            'achievement': 'Achievement',
        }
    return ranked_df[list(columns)].rename(columns=columns)


def render_ranking_table(ranked_df: pd.DataFrame, group_by: str, key: str = "ranking_table"):
    """
    Leaderboard table with single-row selection.

    Returns:
        The selected row of ranked_df as a dict, or None
    """
    if ranked_df.empty:
        st.info("No data matches the selected filters")
        return None

    display_df = ranking_display_frame(ranked_df, group_by)
    money_cols = [c for c in ('Rebuy', 'Total Revenue', 'Target', 'Target Revenue') if c in display_df.columns]

    styled = display_df.style.format(
        {**{c: format_idr for c in money_cols}, 'Achievement': format_percentage}
    ).map(_achievement_style, subset=['Achievement'])

    event = st.dataframe(
        styled,
        use_container_width=True,
        hide_index=True,
        on_select="rerun",
        selection_mode="single-row",
        key=key,
    )

    rows = event.selection.rows if event is not None else []
    if not rows:
        return None
    return ranked_df.iloc[rows[0]].to_dict()


# =============================================================================
# BRANCH RANKING
# =============================================================================

def render_branch_table(ranked_branches: pd.DataFrame):
    if ranked_branches.empty:
        st.info("No branch data for this scope")
        return

    display_df = pd.DataFrame({
        'Rank': ranked_branches['rank'].map(medal),
        'Branch': ranked_branches['branch'],
        'Region': ranked_branches['region'],
        'DSF': ranked_branches['qty_dsf'],
        'Sales': ranked_branches['sales'],
        'Target': ranked_branches['target'],
        'Achievement': ranked_branches['achievement'],
    })

    st.dataframe(
        display_df,
        use_container_width=True,
        hide_index=True,
        column_config={
            'Achievement': st.column_config.ProgressColumn(
                'Achievement',
                format='%.1f%%',
                min_value=0,
                max_value=100,
            ),
        },
    )
