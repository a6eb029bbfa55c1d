# utils/dsf_performance/export.py
"""
Formatted Excel Export for the DSF Leaderboard

Creates reports with:
- Cover sheet with grouping, sort, active filters and data dates
- Ranking sheet with achievement band colouring

Uses openpyxl for formatting capabilities.
"""

import logging
from datetime import datetime
from io import BytesIO
from typing import Optional

import pandas as pd

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.formatting.rule import CellIsRule

from .constants import (
    EXCEL_STYLES, SORT_OPTIONS, FILTER_DIMENSIONS,
    ACHIEVEMENT_GOOD, ACHIEVEMENT_WARNING,
)
from .csv_parser import to_csv_text
from .ranking import RankingFilters
from .records import ReferenceDates

logger = logging.getLogger(__name__)

_CURRENCY_COLUMNS = {'rebuy_revenue', 'total_revenue', 'target_revenue'}


def _ranking_columns(group_by: str):
    """(column, header, width) per exported column."""
    if group_by == 'DSF':
        return [
            ('rank', 'Rank', 8),
            ('id', 'ID DSF', 16),
            ('name', 'Nama DSF', 28),
            ('branch', 'Branch', 20),
            ('total_fwa', 'FWA', 10),
            ('rebuy_revenue', 'Rebuy (IDR)', 16),
            ('total_revenue', 'Total Revenue (IDR)', 20),
            ('target_revenue', 'Target (IDR)', 16),
            ('achievement', 'Achievement %', 15),
        ]
    return [
        ('rank', 'Rank', 8),
        ('name', group_by.title() if group_by not in ('MC', 'TL') else group_by, 28),
        ('member_count', 'DSF', 8),
        ('target_fwa', 'Target FWA', 12),
        ('total_fwa', 'FWA', 10),
        ('rebuy_revenue', 'Rebuy (IDR)', 16),
        ('target_revenue', 'Target Revenue (IDR)', 20),
        ('total_revenue', 'Total Revenue (IDR)', 20),
        ('achievement', 'Achievement %', 15),
    ]


class RankingExport:
    """
    Excel report generator for the leaderboard.

    Usage:
        exporter = RankingExport()
        excel_bytes = exporter.create_report(ranked_df, 'TL', 'achievement', filters)

        st.download_button(
            label="Download Report",
            data=excel_bytes,
            file_name="dsf_ranking.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
    """

    def __init__(self):
        """Initialize with default styles."""
        self.wb = None
        self._init_styles()

    def _init_styles(self):
        """Initialize reusable styles."""
        self.header_fill = PatternFill(
            start_color=EXCEL_STYLES['header_fill_color'],
            end_color=EXCEL_STYLES['header_fill_color'],
            fill_type='solid'
        )
        self.header_font = Font(
            bold=True,
            color=EXCEL_STYLES['header_font_color'],
            size=11
        )
        self.title_font = Font(bold=True, size=16)
        self.subtitle_font = Font(bold=True, size=12)

        thin_border = Side(style='thin', color='000000')
        self.cell_border = Border(
            left=thin_border,
            right=thin_border,
            top=thin_border,
            bottom=thin_border
        )

        self.center_align = Alignment(horizontal='center', vertical='center')
        self.right_align = Alignment(horizontal='right', vertical='center')

        self.currency_format = EXCEL_STYLES['currency_format']
        self.percent_format = EXCEL_STYLES['percent_format']

    # =========================================================================
    # MAIN EXPORT METHOD
    # =========================================================================

    def create_report(
        self,
        ranked_df: pd.DataFrame,
        group_by: str,
        sort_by: str,
        filters: Optional[RankingFilters] = None,
        reference_dates: Optional[ReferenceDates] = None
    ) -> BytesIO:
        """
        Create the Excel report.

        Args:
            ranked_df: RankingEngine.rank() output
            group_by: Grouping level of ranked_df
            sort_by: Sort key used
            filters: Active filters (for the cover sheet)
            reference_dates: Data as-of dates (for the cover sheet)

        Returns:
            BytesIO containing Excel file
        """
        self.wb = Workbook()

        self._create_cover_sheet(group_by, sort_by, filters or RankingFilters(), reference_dates)
        self._create_ranking_sheet(ranked_df, group_by)

        output = BytesIO()
        self.wb.save(output)
        output.seek(0)

        logger.info(f"Excel ranking report created: {len(ranked_df)} rows ({group_by})")
        return output

    # =========================================================================
    # COVER SHEET
    # =========================================================================

    def _create_cover_sheet(
        self,
        group_by: str,
        sort_by: str,
        filters: RankingFilters,
        reference_dates: Optional[ReferenceDates]
    ):
        ws = self.wb.active
        ws.title = "Summary"

        row = 1
        ws.cell(row=row, column=1, value=f"Performance Leaderboard {group_by}")
        ws.cell(row=row, column=1).font = self.title_font
        ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=4)
        row += 2

        info_rows = [
            ("Group By:", group_by),
            ("Sort By:", SORT_OPTIONS.get(sort_by, sort_by)),
            ("Generated:", datetime.now().strftime('%Y-%m-%d %H:%M')),
        ]
        for label, value in info_rows:
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=value)
            row += 1
        row += 1

        ws.cell(row=row, column=1, value="Filters")
        ws.cell(row=row, column=1).font = self.subtitle_font
        row += 1
        for dimension in FILTER_DIMENSIONS:
            values = filters.values_for(dimension)
            ws.cell(row=row, column=1, value=dimension)
            ws.cell(row=row, column=2, value=', '.join(values) if values else 'All')
            row += 1

        if reference_dates is not None:
            row += 1
            ws.cell(row=row, column=1, value="Data Based On")
            ws.cell(row=row, column=1).font = self.subtitle_font
            row += 1
            for label, value in reference_dates.as_dict().items():
                ws.cell(row=row, column=1, value=label)
                ws.cell(row=row, column=2, value=value or '-')
                row += 1

        ws.column_dimensions['A'].width = 22
        ws.column_dimensions['B'].width = 40

    # =========================================================================
    # RANKING SHEET
    # =========================================================================

    def _create_ranking_sheet(self, df: pd.DataFrame, group_by: str):
        ws = self.wb.create_sheet("Ranking")
        columns = _ranking_columns(group_by)

        for col_idx, (_, header, width) in enumerate(columns, 1):
            cell = ws.cell(row=1, column=col_idx, value=header)
            cell.fill = self.header_fill
            cell.font = self.header_font
            cell.alignment = self.center_align
            cell.border = self.cell_border
            ws.column_dimensions[get_column_letter(col_idx)].width = width

        for row_idx, record in enumerate(df.to_dict('records'), 2):
            for col_idx, (col_name, _, _) in enumerate(columns, 1):
                value = record.get(col_name, '')
                if hasattr(value, 'item'):
                    value = value.item()
                cell = ws.cell(row=row_idx, column=col_idx, value=value)
                cell.border = self.cell_border

                if col_name in _CURRENCY_COLUMNS:
                    cell.number_format = self.currency_format
                    cell.alignment = self.right_align
                elif col_name == 'achievement':
                    cell.number_format = self.percent_format
                    cell.alignment = self.right_align
                elif col_name in ('rank', 'member_count'):
                    cell.alignment = self.center_align

        if not df.empty:
            ach_col = get_column_letter([c[0] for c in columns].index('achievement') + 1)
            cell_range = f'{ach_col}2:{ach_col}{len(df) + 1}'

            def fill(color):
                return PatternFill(start_color=color, end_color=color, fill_type='solid')

            ws.conditional_formatting.add(cell_range, CellIsRule(
                operator='greaterThanOrEqual', formula=[str(ACHIEVEMENT_GOOD)],
                fill=fill(EXCEL_STYLES['good_fill_color'])
            ))
            ws.conditional_formatting.add(cell_range, CellIsRule(
                operator='between', formula=[str(ACHIEVEMENT_WARNING), str(ACHIEVEMENT_GOOD - 0.0001)],
                fill=fill(EXCEL_STYLES['warning_fill_color'])
            ))
            ws.conditional_formatting.add(cell_range, CellIsRule(
                operator='lessThan', formula=[str(ACHIEVEMENT_WARNING)],
                fill=fill(EXCEL_STYLES['bad_fill_color'])
            ))

        ws.freeze_panes = 'A2'


def ranking_to_csv(ranked_df: pd.DataFrame, group_by: str = 'DSF') -> str:
    """Leaderboard as semicolon CSV text (same dialect as the input file)."""
    columns = _ranking_columns(group_by)
    rows = [[header for _, header, _ in columns]]
    for record in ranked_df.to_dict('records'):
        row = []
        for col_name, _, _ in columns:
            value = record.get(col_name, '')
            if col_name == 'achievement':
                value = f"{float(value):.1f}"
            row.append(value)
        rows.append(row)
    return to_csv_text(rows)
