# utils/dsf_performance/incentive.py
"""
Incentive Calculations for DSF Performance

Handles:
- Per-DSF revenue, tier eligibility and progress ratios
- Team leader aggregates and TL incentive

Tier rules are an ordered list evaluated top-down, first match wins.
All results are derived on demand from SalesRecord values, nothing is cached.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .constants import (
    FWA_UNIT_VALUE, REVENUE_TARGET,
    FWA_TIER_HIGH, FWA_TIER_LOW,
    INCENTIVE_HIGH, INCENTIVE_LOW,
    TL_INCENTIVE_HIGH, TL_INCENTIVE_LOW,
)
from .records import SalesRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncentiveRule:
    """Pays `incentive` when FWA units >= min_fwa and total revenue >= target."""
    min_fwa: int
    incentive: int
    label: str


# Order matters: high tier first
INCENTIVE_RULES: Tuple[IncentiveRule, ...] = (
    IncentiveRule(min_fwa=FWA_TIER_HIGH, incentive=INCENTIVE_HIGH, label="INCENTIVE 500K"),
    IncentiveRule(min_fwa=FWA_TIER_LOW, incentive=INCENTIVE_LOW, label="INCENTIVE 200K"),
)

NOT_ELIGIBLE_LABEL = "NOT ELIGIBLE"


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp a ratio for bounded displays such as progress rings."""
    return max(low, min(high, value))


@dataclass(frozen=True)
class IncentiveResult:
    """
    Derived incentive state for one DSF.

    Progress ratios are raw and may exceed 1.0.
    """
    fwa_revenue: float
    total_revenue: float
    incentive: int
    remaining_revenue: float
    fwa_progress: float
    revenue_progress: float

    @property
    def is_eligible(self) -> bool:
        return self.incentive > 0

    @property
    def tier_label(self) -> str:
        for rule in INCENTIVE_RULES:
            if rule.incentive == self.incentive:
                return rule.label
        return NOT_ELIGIBLE_LABEL


def match_rule(fwa_units: float, total_revenue: float) -> Optional[IncentiveRule]:
    """Return the first rule satisfied, or None."""
    if total_revenue < REVENUE_TARGET:
        return None
    for rule in INCENTIVE_RULES:
        if fwa_units >= rule.min_fwa:
            return rule
    return None


def compute_incentive(fwa_units: float, rebuy_revenue: float) -> IncentiveResult:
    """
    Compute revenue, tier incentive and progress for one DSF.

    Args:
        fwa_units: FWA units sold
        rebuy_revenue: Rebuy revenue (IDR)

    Returns:
        IncentiveResult
    """
    fwa_revenue = fwa_units * FWA_UNIT_VALUE
    total_revenue = fwa_revenue + rebuy_revenue

    rule = match_rule(fwa_units, total_revenue)

    return IncentiveResult(
        fwa_revenue=fwa_revenue,
        total_revenue=total_revenue,
        incentive=rule.incentive if rule else 0,
        remaining_revenue=max(0, REVENUE_TARGET - total_revenue),
        fwa_progress=fwa_units / FWA_TIER_HIGH,
        revenue_progress=total_revenue / REVENUE_TARGET,
    )


def compute_record_incentive(record: SalesRecord) -> IncentiveResult:
    return compute_incentive(record.fwa_units, record.rebuy_revenue)


def is_eligible(record: SalesRecord) -> bool:
    return compute_record_incentive(record).is_eligible


# =============================================================================
# TEAM LEADER VIEW
# =============================================================================

@dataclass(frozen=True)
class TeamGroup:
    """
    A team leader and the DSFs reporting to them.

    All totals are computed on access.
    """
    tl_id: str
    tl_name: str
    members: Tuple[SalesRecord, ...] = field(default_factory=tuple)

    @property
    def member_count(self) -> int:
        return len(self.members)

    @property
    def total_fwa(self) -> float:
        return sum(m.fwa_units for m in self.members)

    @property
    def total_rebuy(self) -> float:
        return sum(m.rebuy_revenue for m in self.members)

    @property
    def total_revenue(self) -> float:
        return self.total_fwa * FWA_UNIT_VALUE + self.total_rebuy

    @property
    def target_fwa(self) -> int:
        return FWA_TIER_HIGH * self.member_count

    @property
    def min_fwa_low_tier(self) -> int:
        return FWA_TIER_LOW * self.member_count

    @property
    def target_revenue(self) -> float:
        return REVENUE_TARGET * self.member_count

    @property
    def fwa_progress(self) -> float:
        return self.total_fwa / self.target_fwa if self.target_fwa else 0

    @property
    def revenue_progress(self) -> float:
        return self.total_revenue / self.target_revenue if self.target_revenue else 0

    @property
    def incentive(self) -> int:
        """
        TL incentive:
        - 1,000,000 when team FWA >= 20 x members and revenue >= team target
        - 400,000 when team FWA >= 15 x members and revenue >= team target
        """
        if not self.members or self.revenue_progress < 1:
            return 0
        if self.total_fwa >= self.target_fwa:
            return TL_INCENTIVE_HIGH
        if self.total_fwa >= self.min_fwa_low_tier:
            return TL_INCENTIVE_LOW
        return 0

    @property
    def eligible_count(self) -> int:
        return sum(1 for m in self.members if is_eligible(m))

    def ranked_members(self) -> List[Tuple[SalesRecord, IncentiveResult]]:
        """Members with their incentive result, by total revenue descending."""
        scored = [(m, compute_record_incentive(m)) for m in self.members]
        return sorted(scored, key=lambda pair: pair[1].total_revenue, reverse=True)


def build_team(records: Sequence[SalesRecord], tl_id: str) -> Optional[TeamGroup]:
    """
    Collect the DSFs reporting to a TL (case-insensitive ID match).

    Returns:
        TeamGroup, or None when no DSF reports to that TL
    """
    key = (tl_id or '').strip().lower()
    if not key:
        return None

    members = tuple(r for r in records if r.id_tl.lower() == key)
    if not members:
        return None

    first = members[0]
    return TeamGroup(tl_id=first.id_tl, tl_name=first.nama_tl, members=members)
