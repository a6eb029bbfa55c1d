# utils/dsf_performance/branch_ranking.py
"""
Branch Ranking over the pre-aggregated branch summary file

File layout (first line is a header and is discarded):
    REGION;BRANCH;QTY_DSF;FWA_SALES

target = QTY_DSF x 20, achievement = FWA_SALES / target x 100 (0 if no target).
"""

import logging

import numpy as np
import pandas as pd

from .constants import BRANCH_TARGET_PER_DSF
from .csv_parser import parse_csv_rows
from .ranking import normalize_region
from .records import to_number_safe

logger = logging.getLogger(__name__)

BRANCH_COLUMNS = ['region', 'branch', 'qty_dsf', 'sales', 'target', 'achievement']


def parse_branch_summary(text: str) -> pd.DataFrame:
    """
    Parse the branch summary file.

    Returns:
        DataFrame with region, branch, qty_dsf, sales, target, achievement
    """
    rows = parse_csv_rows(text)
    data = [r for r in rows[1:] if any(c.strip() for c in r)]

    if not data:
        return pd.DataFrame(columns=BRANCH_COLUMNS)

    def cell(row, idx):
        return row[idx].strip() if idx < len(row) else ''

    df = pd.DataFrame({
        'region': [cell(r, 0) for r in data],
        'branch': [cell(r, 1) for r in data],
        'qty_dsf': [to_number_safe(cell(r, 2)) for r in data],
        'sales': [to_number_safe(cell(r, 3)) for r in data],
    })

    df['target'] = df['qty_dsf'] * BRANCH_TARGET_PER_DSF
    df['achievement'] = np.where(
        df['target'] > 0,
        df['sales'] / df['target'].where(df['target'] > 0, 1) * 100,
        0.0
    )

    logger.info(f"Parsed branch summary: {len(df)} branches")
    return df[BRANCH_COLUMNS]


def rank_branches(df: pd.DataFrame, scope: str = 'ALL') -> pd.DataFrame:
    """
    Rank branches by achievement, descending, within an optional region scope.

    Args:
        df: parse_branch_summary() output
        scope: 'ALL' or a canonical region label ('NSA', 'CSA', 'SSA')

    Returns:
        DataFrame with a 1-based 'rank' column first
    """
    if df.empty:
        return pd.DataFrame(columns=['rank'] + BRANCH_COLUMNS)

    scoped = df
    if scope and scope.upper() != 'ALL':
        scoped = df[df['region'].map(normalize_region) == scope]

    ranked = scoped.sort_values('achievement', ascending=False, kind='mergesort')
    ranked = ranked.reset_index(drop=True)
    ranked.insert(0, 'rank', range(1, len(ranked) + 1))
    return ranked


def medal(rank: int) -> str:
    """Medal for the top three, '#n' otherwise."""
    return {1: "🥇", 2: "🥈", 3: "🥉"}.get(rank, f"#{rank}")
