# app.py
"""
DSF Incentive Portal - Main Entry Point

Search by DSF ID, DSF name or TL ID to see:
- DSF card: FWA / revenue progress, incentive tier, coaching tips
- TL dashboard: team totals, TL incentive, member ranking

Version: 1.0.0
"""

import streamlit as st
import logging

from utils.config import config
from utils.dsf_performance.fragments import (
    get_dataset,
    reload_data,
    render_load_error,
    render_debug_panel,
    loaded_at_text,
    render_dsf_card,
    render_team_dashboard,
)
from utils.dsf_performance.search import search, suggest, demo_ids

# Configure logging
logging.basicConfig(
    level=config.get_log_level(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ==================== PAGE CONFIGURATION ====================

APP_NAME = "DSF Daily Report Portal"
APP_ICON = "📊"
APP_VERSION = "1.0.0"

st.set_page_config(
    page_title=APP_NAME,
    page_icon=APP_ICON,
    layout="wide",
    initial_sidebar_state="expanded"
)

# ==================== CUSTOM CSS ====================

st.markdown("""
<style>
    .main-header {
        font-size: 2.2rem;
        font-weight: bold;
        margin-bottom: 0.25rem;
        color: #1f77b4;
    }

    .sub-header {
        font-size: 1.05rem;
        color: #666;
        margin-bottom: 1.5rem;
    }

    .footer {
        text-align: center;
        color: #888;
        padding: 1rem;
        margin-top: 3rem;
        border-top: 1px solid #eee;
        font-size: 0.9rem;
    }
</style>
""", unsafe_allow_html=True)

# ==================== SESSION STATE ====================

if 'portal_selection' not in st.session_state:
    st.session_state.portal_selection = None
if 'portal_error' not in st.session_state:
    st.session_state.portal_error = ""
if 'portal_query' not in st.session_state:
    st.session_state.portal_query = ""

# ==================== HEADER ====================

st.markdown(f'<p class="main-header">{APP_ICON} {APP_NAME}</p>', unsafe_allow_html=True)
st.markdown(
    '<p class="sub-header">Search by <b>DSF ID</b>, <b>DSF Name</b>, or <b>TL ID</b>.</p>',
    unsafe_allow_html=True
)

dataset, load_error = get_dataset()
sources = config.get_data_sources()

meta_col1, meta_col2, meta_col3 = st.columns([3, 1, 1])
meta_col1.caption(f"Source: `{sources['dsf_source']}`")
meta_col2.caption(f"Loaded: {loaded_at_text(dataset)}" if dataset is not None else "Status: Unavailable")
with meta_col3:
    st.button("🔄 Reload data", on_click=reload_data, use_container_width=True)

if load_error is not None:
    render_load_error(load_error)
    if dataset is None:
        st.stop()

records = dataset.records
render_debug_panel(dataset)

# ==================== SEARCH ====================


def _select(result):
    st.session_state.portal_selection = result if result.found else None
    st.session_state.portal_error = "" if result.found else result.message


def _run_search():
    _select(search(records, st.session_state.portal_query))


def _clear_search():
    st.session_state.portal_query = ""
    st.session_state.portal_selection = None
    st.session_state.portal_error = ""


def _pick_suggestion(id_dsf: str):
    st.session_state.portal_query = id_dsf
    _select(search(records, id_dsf))


with st.container(border=True):
    st.markdown("#### 🔎 Search")
    st.caption("Input DSF ID / DSF Name / TL ID (case-insensitive)")

    query = st.text_input(
        "Query",
        placeholder="Enter DSF ID / DSF Name / TL ID",
        key="portal_query",
        label_visibility="collapsed"
    )
    col_btn1, col_btn2 = st.columns(2)
    with col_btn1:
        st.button("Search", type="primary", key="portal_search", on_click=_run_search, use_container_width=True)
    with col_btn2:
        st.button("Clear", key="portal_clear", on_click=_clear_search, use_container_width=True)

    # Recomputed from the live query on every rerun
    suggestions = suggest(records, query)
    if suggestions:
        st.markdown("**Suggestions**")
        for idx, s in enumerate(suggestions):
            label = f"{s.nama_dsf} · {s.id_dsf} | TL: {s.id_tl or '-'} • {s.region} • {s.brand}"
            st.button(
                label,
                key=f"suggest_{idx}_{s.id_dsf}",
                on_click=_pick_suggestion,
                args=(s.id_dsf,)
            )

    if st.session_state.portal_error:
        st.error(st.session_state.portal_error)

    st.caption(f"Example DSF IDs: {', '.join(demo_ids(records))}")

# ==================== RESULT ====================

selection = st.session_state.portal_selection

if selection is None:
    with st.container(border=True):
        st.markdown("**No data selected**")
        st.caption("Search DSF or TL ID to view dashboard.")
elif selection.kind == 'tl':
    render_team_dashboard(selection.team, dataset.reference_dates)
else:
    render_dsf_card(selection.record, dataset.reference_dates)

# ==================== FOOTER ====================

st.markdown(
    f'<div class="footer">{APP_NAME} v{APP_VERSION} | {len(records):,} DSF records</div>',
    unsafe_allow_html=True
)
