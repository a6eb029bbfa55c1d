# utils/dsf_performance/charts.py
"""
Altair Chart Builders for DSF Performance

Visualization components:
- KPI cards (using st.metric)
- Progress rings (donut, clamped at 100%)
- Leaderboard bar chart
- Branch achievement chart
"""

import logging
from typing import Optional

import pandas as pd
import altair as alt
import streamlit as st

from .constants import (
    COLORS, CHART_HEIGHT, RING_SIZE, RANKING_CHART_TOP_N,
    REVENUE_TARGET, FWA_TIER_HIGH, FWA_TIER_LOW,
    ACHIEVEMENT_GOOD, ACHIEVEMENT_WARNING,
)
from .formatters import format_idr, format_number, format_full_date
from .incentive import IncentiveResult, TeamGroup, clamp
from .records import ReferenceDates, SalesRecord

logger = logging.getLogger(__name__)

# Sort key -> (column, axis title)
_METRIC_AXES = {
    'achievement': ('achievement', 'Achievement %'),
    'revenue': ('total_revenue', 'Total Revenue (IDR)'),
    'fwa': ('total_fwa', 'FWA Units'),
    'rebuy': ('rebuy_revenue', 'Rebuy Revenue (IDR)'),
}


def _achievement_color_scale() -> alt.Scale:
    return alt.Scale(
        domain=['good', 'warning', 'bad'],
        range=[COLORS['achievement_good'], COLORS['achievement_warning'], COLORS['achievement_bad']]
    )


def _status_expr(field: str) -> str:
    return (
        f"datum.{field} >= {ACHIEVEMENT_GOOD} ? 'good' : "
        f"(datum.{field} >= {ACHIEVEMENT_WARNING} ? 'warning' : 'bad')"
    )


class DSFCharts:
    """
    Chart builders for the DSF incentive dashboard.

    All methods are static.

    Usage:
        ring = DSFCharts.build_progress_ring(calc.fwa_progress, "FWA Units")
        st.altair_chart(ring)
    """

    # =========================================================================
    # PROGRESS RING
    # =========================================================================

    @staticmethod
    def build_progress_ring(
        percent: float,
        title: str = "",
        tone: str = "good",
        size: int = RING_SIZE
    ) -> alt.LayerChart:
        """
        Donut ring. The arc is clamped to 100%, the label shows the raw value.

        Args:
            percent: Raw progress ratio (1.0 = 100%, may exceed 1)
            title: Chart title
            tone: 'good', 'warning' or 'bad'
        """
        filled = clamp(percent)
        df = pd.DataFrame({
            'part': ['done', 'rest'],
            'value': [filled, 1 - filled],
        })
        color = COLORS.get(f'achievement_{tone}', COLORS['achievement_good'])

        arc = alt.Chart(df).mark_arc(innerRadius=size * 0.33).encode(
            theta=alt.Theta('value:Q', stack=True),
            color=alt.Color(
                'part:N',
                scale=alt.Scale(domain=['done', 'rest'], range=[color, COLORS['ring_track']]),
                legend=None
            ),
            order=alt.Order('part:N', sort='ascending'),
            tooltip=alt.value(None)
        )

        label = alt.Chart(pd.DataFrame({'text': [f"{round(percent * 100)}%"]})).mark_text(
            fontSize=20, fontWeight='bold', color=COLORS['text_dark']
        ).encode(text='text:N')

        return alt.layer(arc, label).properties(width=size, height=size, title=title)

    # =========================================================================
    # LEADERBOARD
    # =========================================================================

    @staticmethod
    def build_ranking_chart(
        ranked_df: pd.DataFrame,
        metric: str = 'achievement',
        top_n: int = RANKING_CHART_TOP_N,
        title: str = ""
    ) -> alt.Chart:
        """
        Horizontal bar chart of the top N ranked groups.

        Bars are colored by achievement band (>=100 / >=80 / below).
        """
        if ranked_df.empty:
            return DSFCharts._empty_chart("No data available")

        column, axis_title = _METRIC_AXES.get(metric, _METRIC_AXES['achievement'])
        df = ranked_df.head(top_n).copy()
        df['label'] = df['rank'].astype(str) + '. ' + df['name'].astype(str)

        bars = alt.Chart(df).mark_bar().transform_calculate(
            status=_status_expr('achievement')
        ).encode(
            y=alt.Y('label:N', sort=alt.EncodingSortField('rank', order='ascending'), title=''),
            x=alt.X(f'{column}:Q', title=axis_title),
            color=alt.Color('status:N', scale=_achievement_color_scale(), legend=None),
            tooltip=[
                alt.Tooltip('name:N', title='Name'),
                alt.Tooltip('total_fwa:Q', title='FWA', format=',.0f'),
                alt.Tooltip('rebuy_revenue:Q', title='Rebuy', format=',.0f'),
                alt.Tooltip('total_revenue:Q', title='Total Revenue', format=',.0f'),
                alt.Tooltip('target_revenue:Q', title='Target', format=',.0f'),
                alt.Tooltip('achievement:Q', title='Achievement %', format='.1f'),
            ]
        )

        return bars.properties(
            height=max(200, len(df) * 26),
            title=title
        )

    # =========================================================================
    # BRANCH RANKING
    # =========================================================================

    @staticmethod
    def build_branch_chart(branch_df: pd.DataFrame, title: str = "") -> alt.LayerChart:
        """Branch achievement bars with a 100% rule."""
        if branch_df.empty:
            return DSFCharts._empty_chart("No branch data available")

        df = branch_df.copy()

        bars = alt.Chart(df).mark_bar().transform_calculate(
            status=_status_expr('achievement')
        ).encode(
            y=alt.Y('branch:N', sort=alt.EncodingSortField('rank', order='ascending'), title=''),
            x=alt.X('achievement:Q', title='Achievement %'),
            color=alt.Color('status:N', scale=_achievement_color_scale(), legend=None),
            tooltip=[
                alt.Tooltip('branch:N', title='Branch'),
                alt.Tooltip('region:N', title='Region'),
                alt.Tooltip('qty_dsf:Q', title='DSF'),
                alt.Tooltip('sales:Q', title='Sales'),
                alt.Tooltip('target:Q', title='Target'),
                alt.Tooltip('achievement:Q', title='Achievement %', format='.1f'),
            ]
        )

        rule = alt.Chart(pd.DataFrame({'x': [100]})).mark_rule(
            color=COLORS['target'], strokeDash=[4, 4]
        ).encode(x='x:Q')

        return alt.layer(bars, rule).properties(
            height=max(CHART_HEIGHT // 2, len(df) * 24),
            title=title
        )

    @staticmethod
    def _empty_chart(message: str = "No data available") -> alt.Chart:
        """Create an empty chart with a message."""
        return alt.Chart(pd.DataFrame({'note': [message]})).mark_text(
            text=message,
            fontSize=16,
            color=COLORS['text_light']
        ).properties(height=200)

    # =========================================================================
    # KPI CARDS (Using st.metric)
    # =========================================================================

    @staticmethod
    def render_dsf_kpi_cards(
        record: SalesRecord,
        calc: IncentiveResult,
        reference_dates: Optional[ReferenceDates] = None
    ):
        """Rings for FWA and revenue plus rebuy / incentive metrics for one DSF."""
        fwa_date, rebuy_date = (reference_dates or ReferenceDates()).for_brand(record.brand)

        fwa_tone = 'good' if record.fwa_units >= FWA_TIER_HIGH else (
            'warning' if record.fwa_units >= FWA_TIER_LOW else 'bad'
        )
        rev_tone = 'good' if calc.total_revenue >= REVENUE_TARGET else 'warning'

        with st.container(border=True):
            col1, col2, col3 = st.columns([1, 1, 1])

            with col1:
                st.markdown("**FWA Units**")
                st.caption(f"Last update: {format_full_date(fwa_date)}")
                st.altair_chart(
                    DSFCharts.build_progress_ring(calc.fwa_progress, tone=fwa_tone),
                    use_container_width=False
                )
                st.caption(f"{format_number(record.fwa_units)} / {FWA_TIER_HIGH}")

            with col2:
                st.markdown("**Total Revenue**")
                st.caption(f"Target: {format_idr(REVENUE_TARGET)}")
                st.altair_chart(
                    DSFCharts.build_progress_ring(calc.revenue_progress, tone=rev_tone),
                    use_container_width=False
                )
                st.caption(format_idr(calc.total_revenue))

            with col3:
                st.metric(
                    label="Rebuy Revenue",
                    value=format_idr(record.rebuy_revenue),
                    help=f"Last update: {format_full_date(rebuy_date)}"
                )
                st.metric(
                    label="Incentive Earned",
                    value=format_idr(calc.incentive),
                    help="500K: 20+ FWA & revenue >= target. 200K: 15+ FWA & revenue >= target."
                )

    @staticmethod
    def render_team_kpi_cards(team: TeamGroup):
        """Team totals against targets scaled by team size."""
        with st.container(border=True):
            col1, col2, col3 = st.columns([1, 1, 1])

            with col1:
                st.markdown("**Total FWA Units**")
                st.caption(f"TL target: {format_number(team.target_fwa)} units")
                st.altair_chart(
                    DSFCharts.build_progress_ring(
                        team.fwa_progress,
                        tone='good' if team.total_fwa >= team.target_fwa else 'warning'
                    ),
                    use_container_width=False
                )
                st.caption(f"{format_number(team.total_fwa)} units")

            with col2:
                st.markdown("**Total Revenue**")
                st.caption(f"TL target: {format_idr(team.target_revenue)}")
                st.altair_chart(
                    DSFCharts.build_progress_ring(
                        team.revenue_progress,
                        tone='good' if team.total_revenue >= team.target_revenue else 'warning'
                    ),
                    use_container_width=False
                )
                st.caption(format_idr(team.total_revenue))

            with col3:
                st.metric(label="Total Rebuy Revenue", value=format_idr(team.total_rebuy))
                st.metric(
                    label="Incentive Earned",
                    value=format_idr(team.incentive),
                    help="1M: team FWA >= 20 x DSFs & revenue >= target. "
                         "400K: team FWA >= 15 x DSFs & revenue >= target."
                )
