"""Tests for the DSF coaching checklist."""

from utils.dsf_performance.tips import build_tips

from tests.conftest import make_record


def test_high_tier_reached_returns_single_done_tip():
    tips = build_tips(make_record(fwa_units=22))
    assert len(tips) == 1
    assert tips[0].done
    assert "500K incentive reached" in tips[0].text


def test_high_fwa_without_revenue():
    tips = build_tips(make_record(fwa_units=20))
    assert len(tips) == 1
    assert not tips[0].done
    assert "Rp 500.000" in tips[0].text


def test_low_fwa_gets_three_paths():
    tips = build_tips(make_record(fwa_units=10))
    assert len(tips) == 3
    assert not any(t.done for t in tips)
    assert "add 10 more FWA" in tips[0].text
    assert "Rp 500.000" in tips[0].text
    assert "22 FWA" in tips[1].text
    assert "add 12 more FWA" in tips[1].text
    assert "add 5 more FWA" in tips[2].text
    assert "Rp 2.250.000" in tips[2].text


def test_rebuy_already_enough_skips_fwa_only_alternative():
    tips = build_tips(make_record(fwa_units=12, rebuy_revenue=1_250_000))
    assert len(tips) == 2
    assert "already enough" in tips[0].text
    assert "Rp 1.000.000" in tips[1].text


def test_low_tier_reached():
    tips = build_tips(make_record(fwa_units=16, rebuy_revenue=1_900_000))
    assert len(tips) == 2
    assert not tips[0].done
    assert tips[1].done
    assert "200K incentive reached" in tips[1].text


def test_low_fwa_met_but_revenue_short():
    tips = build_tips(make_record(fwa_units=18, rebuy_revenue=300_000))
    assert len(tips) == 3
    assert "Rp 200.000" in tips[0].text
    assert "add 4 more FWA" in tips[1].text
    assert "Rp 900.000" in tips[2].text
    assert "Rp 7.200.000" not in tips[2].text
    assert "Current rebuy: Rp 300.000" in tips[2].text


def test_tips_are_deterministic():
    record = make_record(fwa_units=7, rebuy_revenue=123_456)
    assert build_tips(record) == build_tips(record)
