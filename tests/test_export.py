"""Tests for leaderboard export."""

from openpyxl import load_workbook

from utils.dsf_performance.csv_parser import parse_csv_rows
from utils.dsf_performance.export import RankingExport, ranking_to_csv
from utils.dsf_performance.ranking import RankingEngine, RankingFilters
from utils.dsf_performance.records import ReferenceDates


def test_excel_report_sheets(records):
    ranked = RankingEngine(records).rank("TL")
    filters = RankingFilters(brand=("IM3", "3ID"))

    output = RankingExport().create_report(
        ranked, "TL", "achievement", filters, ReferenceDates(fwa_im3="2026-02-15")
    )
    wb = load_workbook(output)

    assert wb.sheetnames == ["Summary", "Ranking"]
    ranking = wb["Ranking"]
    assert ranking.cell(row=1, column=1).value == "Rank"
    assert ranking.cell(row=2, column=2).value == "Budi"
    assert ranking.max_row == len(ranked) + 1

    summary_values = [c.value for row in wb["Summary"].iter_rows() for c in row]
    assert "IM3, 3ID" in summary_values
    assert "2026-02-15" in summary_values


def test_excel_report_empty_ranking(records):
    ranked = RankingEngine(records).rank("DSF", filters=RankingFilters(brand=("XL",)))
    wb = load_workbook(RankingExport().create_report(ranked, "DSF", "fwa"))
    assert wb["Ranking"].max_row == 1


def test_ranking_csv(records):
    ranked = RankingEngine(records).rank("DSF")
    rows = parse_csv_rows(ranking_to_csv(ranked, "DSF"))
    assert rows[0][:3] == ["Rank", "ID DSF", "Nama DSF"]
    assert rows[1][1] == "D1"
    assert rows[1][-1] == "102.7"
    assert len(rows) == len(ranked) + 1
