# utils/dsf_performance/constants.py
"""
Constants for DSF Performance Module

Centralized configuration for:
- Incentive scheme (unit value, revenue target, tiers)
- Team leader incentive scheme
- Region canonical labels
- Ranking levels, filter dimensions and sort keys
- CSV column names
- Color schemes and chart settings
"""

import math

# =====================================================================
# INCENTIVE SCHEME (per DSF)
# =====================================================================

# Revenue credited per FWA unit sold (IDR)
FWA_UNIT_VALUE = 350_000

# Monthly revenue target per DSF (IDR)
REVENUE_TARGET = 7_500_000

# FWA unit thresholds
FWA_TIER_HIGH = 20
FWA_TIER_LOW = 15

# Incentive amounts (IDR)
INCENTIVE_HIGH = 500_000
INCENTIVE_LOW = 200_000

# FWA units that clear the revenue target with zero rebuy (= 22)
FWA_ONLY_UNITS = math.ceil(REVENUE_TARGET / FWA_UNIT_VALUE)

# =====================================================================
# INCENTIVE SCHEME (per TL)
# =====================================================================

TL_INCENTIVE_HIGH = 1_000_000
TL_INCENTIVE_LOW = 400_000

# =====================================================================
# BRANCH SUMMARY
# =====================================================================

BRANCH_TARGET_PER_DSF = 20

BRANCH_SCOPES = ['ALL', 'NSA', 'CSA', 'SSA']

BRANCH_SCOPE_LABELS = {
    'ALL': 'All Sumatera',
    'NSA': 'NSA',
    'CSA': 'CSA',
    'SSA': 'SSA',
}

# =====================================================================
# REGION NORMALIZATION
# =====================================================================

# Substring (lowercase) -> canonical label. Checked in this order.
REGION_LABELS = (
    ('northern', 'NSA'),
    ('southern', 'SSA'),
    ('central', 'CSA'),
)

UNKNOWN_REGION = 'Unknown'

# =====================================================================
# RANKING
# =====================================================================

GROUP_LEVELS = ['DSF', 'TL', 'MC', 'BRANCH', 'REGION']

FILTER_DIMENSIONS = ['BRAND', 'REGION', 'BRANCH', 'MC', 'TL', 'DSF']

KNOWN_BRANDS = ['IM3', '3ID']

SORT_OPTIONS = {
    'achievement': 'Achievement',
    'revenue': 'Revenue',
    'fwa': 'FWA',
    'rebuy': 'Rebuy',
}

DEFAULT_SORT = 'achievement'

# Sort key -> aggregated column
SORT_COLUMNS = {
    'achievement': 'achievement',
    'revenue': 'total_revenue',
    'fwa': 'total_fwa',
    'rebuy': 'rebuy_revenue',
}

# Achievement color bands (percent)
ACHIEVEMENT_GOOD = 100
ACHIEVEMENT_WARNING = 80

# =====================================================================
# CSV COLUMNS
# =====================================================================

CSV_DELIMITER = ';'

COL_BRAND = 'BRAND'
COL_ID_DSF = 'ID_DSF'
COL_NAMA_DSF = 'NAMA_DSF'
COL_MC = 'MC'
COL_BRANCH = 'BRANCH'
COL_REGION = 'REGION'
COL_ID_TL = 'ID_TL'
COL_NAMA_TL = 'NAMA_TL'
COL_TOTAL_FWA = 'TOTAL_FWA'
COL_REV_REBUY = 'REV_REBUY'

# Trailing reference-date columns, in file order
REFERENCE_DATE_COLUMNS = [
    'DATA_FWA_IM3',
    'DATA_FWA_3ID',
    'DATA_REBUY_IM3',
    'DATA_REBUY_3ID',
]

MISSING_PLACEHOLDER = '-'

# =====================================================================
# SEARCH
# =====================================================================

SUGGESTION_LIMIT = 6
DEMO_ID_LIMIT = 8

# =====================================================================
# COLOR SCHEME
# =====================================================================

COLORS = {
    "target": "#d62728",               # Red

    "achievement_good": "#28a745",     # Green (>=100%)
    "achievement_warning": "#f0ad4e",  # Amber (>=80%)
    "achievement_bad": "#dc3545",      # Red (<80%)

    "ring_track": "#e9ecef",

    "text_dark": "#333333",
    "text_light": "#666666",
}

# =====================================================================
# CHART DIMENSIONS
# =====================================================================

CHART_HEIGHT = 400
RING_SIZE = 160
RANKING_CHART_TOP_N = 20

# =====================================================================
# EXPORT SETTINGS
# =====================================================================

EXCEL_STYLES = {
    "header_fill_color": "1f77b4",
    "header_font_color": "FFFFFF",
    "currency_format": '#,##0',
    "percent_format": '0.0',
    "good_fill_color": "C6EFCE",
    "warning_fill_color": "FFEB9C",
    "bad_fill_color": "FFC7CE",
}
