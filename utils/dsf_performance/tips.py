# utils/dsf_performance/tips.py
"""
Coaching Tips for DSF Performance

Builds the ordered checklist shown on the DSF card:
- 500K tier first. Once the DSF has 20+ FWA only the revenue status of
  that tier is shown.
- Below 20 FWA: path to 20 FWA, the FWA-only alternative (22 FWA), then
  the 200K tier (15 FWA).

Output is deterministic for a given record.
"""

from dataclasses import dataclass
from typing import List

from .constants import (
    FWA_UNIT_VALUE, REVENUE_TARGET,
    FWA_TIER_HIGH, FWA_TIER_LOW, FWA_ONLY_UNITS,
)
from .formatters import format_idr, format_number
from .incentive import compute_record_incentive
from .records import SalesRecord


@dataclass(frozen=True)
class Tip:
    done: bool
    text: str


_TARGET_TEXT = format_idr(REVENUE_TARGET)


def _tier_name(units: int) -> str:
    return "500K" if units == FWA_TIER_HIGH else "200K"


def _path_to_tier(units: int, need_fwa: float, remaining_after: float) -> Tip:
    tier = _tier_name(units)
    if remaining_after <= 0:
        return Tip(False, (
            f"To earn the {tier} incentive, add {format_number(need_fwa)} more FWA to reach "
            f"{units} FWA. Your current rebuy is already enough, so focus on FWA first."
        ))
    return Tip(False, (
        f"To earn the {tier} incentive, add {format_number(need_fwa)} more FWA to reach "
        f"{units} FWA. After that you still need about {format_idr(remaining_after)} "
        f"more rebuy for total revenue to reach {_TARGET_TEXT}."
    ))


def build_tips(record: SalesRecord) -> List[Tip]:
    """
    Build the ordered tip list for one DSF.

    The rebuy-only 200K tip quotes the actual revenue gap
    (remaining_revenue), not target minus rebuy, which ignores FWA revenue.

    Args:
        record: SalesRecord

    Returns:
        List of Tip(done, text)
    """
    calc = compute_record_incentive(record)
    tips: List[Tip] = []

    fwa_now = record.fwa_units
    rebuy_now = record.rebuy_revenue
    total_now = calc.total_revenue

    # ----- 500K tier -----
    need_fwa_high = max(0, FWA_TIER_HIGH - fwa_now)

    if need_fwa_high == 0:
        if total_now >= REVENUE_TARGET:
            tips.append(Tip(True, (
                f"500K incentive reached ({FWA_TIER_HIGH}+ FWA & revenue >= {_TARGET_TEXT})."
            )))
        else:
            tips.append(Tip(False, (
                f"To earn the 500K incentive you still need {format_idr(calc.remaining_revenue)} "
                f"more revenue (achievable through rebuy)."
            )))
        return tips

    total_if_high = FWA_TIER_HIGH * FWA_UNIT_VALUE + rebuy_now
    remaining_if_high = max(0, REVENUE_TARGET - total_if_high)
    tips.append(_path_to_tier(FWA_TIER_HIGH, need_fwa_high, remaining_if_high))

    need_fwa_only = max(0, FWA_ONLY_UNITS - fwa_now)
    if remaining_if_high > 0 and need_fwa_only > 0:
        tips.append(Tip(False, (
            f"Alternative without rebuy: reach {FWA_ONLY_UNITS} FWA "
            f"(add {format_number(need_fwa_only)} more FWA). {FWA_ONLY_UNITS} FWA alone "
            f"is worth at least {_TARGET_TEXT}."
        )))

    # ----- 200K tier -----
    need_fwa_low = max(0, FWA_TIER_LOW - fwa_now)

    if need_fwa_low > 0:
        total_if_low = max(total_now, FWA_TIER_LOW * FWA_UNIT_VALUE + rebuy_now)
        remaining_if_low = max(0, REVENUE_TARGET - total_if_low)
        tips.append(_path_to_tier(FWA_TIER_LOW, need_fwa_low, remaining_if_low))
    elif total_now >= REVENUE_TARGET:
        tips.append(Tip(True, (
            f"200K incentive reached ({FWA_TIER_LOW}+ FWA & revenue >= {_TARGET_TEXT})."
        )))
    else:
        tips.append(Tip(False, (
            f"To earn the 200K incentive, chase about {format_idr(calc.remaining_revenue)} "
            f"more rebuy so total revenue reaches {_TARGET_TEXT}. "
            f"Current rebuy: {format_idr(rebuy_now)}"
        )))

    return tips
