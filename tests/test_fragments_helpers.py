"""Tests for the table builders behind the Streamlit views."""

from datetime import datetime, timezone

import pytest

from utils.config import config
from utils.dsf_performance.filters import get_filter_summary
from utils.dsf_performance.fragments import (
    _achievement_style,
    loaded_at_text,
    ranking_display_frame,
    team_member_table,
)
from utils.dsf_performance.data_loader import Dataset
from utils.dsf_performance.incentive import build_team
from utils.dsf_performance.ranking import RankingEngine, RankingFilters


@pytest.mark.parametrize("group_by, expected", [
    ("DSF", ["Rank", "ID DSF", "Nama DSF", "Branch", "FWA", "Rebuy",
             "Total Revenue", "Target", "Achievement"]),
    ("TL", ["Rank", "TL", "Target FWA", "FWA", "Rebuy",
            "Target Revenue", "Total Revenue", "Achievement"]),
    ("MC", ["Rank", "MC", "Target FWA", "FWA", "Rebuy",
            "Target Revenue", "Total Revenue", "Achievement"]),
    ("BRANCH", ["Rank", "Branch", "Target FWA", "FWA", "Rebuy",
                "Target Revenue", "Total Revenue", "Achievement"]),
    ("REGION", ["Rank", "Region", "Target FWA", "FWA", "Rebuy",
                "Target Revenue", "Total Revenue", "Achievement"]),
])
def test_ranking_display_columns(records, group_by, expected):
    ranked = RankingEngine(records).rank(group_by)
    display = ranking_display_frame(ranked, group_by)
    assert list(display.columns) == expected
    assert len(display) == len(ranked)


def test_team_member_table_ordered_by_revenue(records):
    table = team_member_table(build_team(records, "TL2"))
    assert table["DSF ID"].tolist() == ["D4", "D3"]
    assert table["Rank"].tolist() == [1, 2]
    assert table["Total Revenue"].tolist() == ["Rp 7.500.000", "Rp 3.500.000"]
    assert table["Status"].tolist() == ["Eligible", "Not Eligible"]


@pytest.mark.parametrize("filters, expected", [
    (RankingFilters(), "No filters applied"),
    (RankingFilters(brand=("IM3",), dsf=("a", "b", "c")), "Brand: IM3 | DSF: 3 selected"),
    (RankingFilters(region=("NSA", "SSA")), "Region: NSA, SSA"),
])
def test_filter_summary(filters, expected):
    assert get_filter_summary(filters) == expected


def test_achievement_style_bands():
    assert "#28a745" in _achievement_style(100)
    assert "#f0ad4e" in _achievement_style(85)
    assert "#dc3545" in _achievement_style(10)


def test_loaded_at_text_uses_configured_timezone(monkeypatch):
    monkeypatch.setitem(config._app_config, "TIMEZONE", "Asia/Jakarta")
    dataset = Dataset(records=(), loaded_at=datetime(2026, 2, 15, 10, 30, tzinfo=timezone.utc))
    assert loaded_at_text(dataset) == "15 Feb 2026 17:30 WIB"
