"""Tests for record normalization and reference dates."""

import logging
import math

import pytest

from utils.dsf_performance.csv_parser import parse_csv_rows
from utils.dsf_performance.records import (
    RECORD_COLUMNS,
    ReferenceDates,
    extract_reference_dates,
    find_duplicate_ids,
    format_reference_date,
    map_row_to_record,
    normalize_rows,
    records_to_frame,
    to_number_safe,
)

from tests.conftest import make_record


class TestToNumberSafe:

    @pytest.mark.parametrize("value, expected", [
        ("Rp 1.250.000", 1250000),
        ("IDR 500,000", 500000),
        ("12", 12),
        ("-3", -3),
        (12.5, 12.5),
        (7, 7),
        ("", 0),
        ("   ", 0),
        (None, 0),
        ("abc", 0),
        ("1_000", 0),
        ("inf", 0),
        (math.nan, 0),
    ])
    def test_coercion(self, value, expected):
        assert to_number_safe(value) == expected

    def test_integral_values_are_int(self):
        assert isinstance(to_number_safe("Rp 7.500.000"), int)


class TestMapRowToRecord:

    def test_full_row(self):
        record = map_row_to_record({
            "BRAND": "IM3", "ID_DSF": " D1 ", "NAMA_DSF": "Andi", "MC": "MC A",
            "BRANCH": "Medan", "REGION": "Northern", "ID_TL": "TL1", "NAMA_TL": "Budi",
            "TOTAL_FWA": "22", "REV_REBUY": "Rp 500.000", "DATA_FWA_IM3": "20260215",
        })
        assert record.id_dsf == "D1"
        assert record.fwa_units == 22
        assert record.rebuy_revenue == 500000
        assert record.data_fwa_im3 == "20260215"
        assert record.data_rebuy_3id == ""

    def test_missing_fields_use_placeholders(self):
        record = map_row_to_record({"ID_DSF": "D9"})
        assert record.brand == "-"
        assert record.nama_dsf == "-"
        assert record.region == "-"
        assert record.id_tl == ""
        assert record.fwa_units == 0
        assert record.rebuy_revenue == 0

    def test_unparsable_numbers_are_zero(self):
        record = map_row_to_record({"ID_DSF": "D9", "TOTAL_FWA": "n/a", "REV_REBUY": "-"})
        assert record.fwa_units == 0
        assert record.rebuy_revenue == 0


class TestNormalizeRows:

    def test_rows_without_id_dropped(self):
        records = normalize_rows([{"ID_DSF": "D1"}, {"ID_DSF": ""}, {"NAMA_DSF": "x"}, {"ID_DSF": "D2"}])
        assert [r.id_dsf for r in records] == ["D1", "D2"]

    def test_duplicates_kept_and_reported(self, caplog):
        with caplog.at_level(logging.WARNING):
            records = normalize_rows([{"ID_DSF": "D1"}, {"ID_DSF": "D1"}])
        assert len(records) == 2
        assert "duplicate ID_DSF" in caplog.text

    def test_find_duplicate_ids(self):
        records = [make_record("A"), make_record("B"), make_record("A"), make_record("B"), make_record("C")]
        assert find_duplicate_ids(records) == ["A", "B"]

    def test_records_to_frame(self, records):
        df = records_to_frame(records)
        assert list(df.columns) == RECORD_COLUMNS
        assert df["id_dsf"].tolist() == ["D1", "D2", "D3", "D4"]

    def test_records_to_frame_empty(self):
        df = records_to_frame([])
        assert df.empty
        assert list(df.columns) == RECORD_COLUMNS


class TestReferenceDates:

    def test_header_keyed(self, dsf_csv_text):
        dates = extract_reference_dates(parse_csv_rows(dsf_csv_text))
        assert dates == ReferenceDates("2026-02-15", "2026-02-14", "2026-02-13", "2026-02-12")

    def test_positional_fallback(self):
        rows = [["A", "B", "C", "D", "E"], ["1", "20260101", "20260102", "x", "y"]]
        dates = extract_reference_dates(rows)
        assert dates == ReferenceDates("2026-01-01", "2026-01-02", "x", "y")

    def test_positional_short_row(self):
        dates = extract_reference_dates([["A", "B"], ["20260101", "20260102"]])
        assert dates == ReferenceDates("", "", "2026-01-01", "2026-01-02")

    def test_no_data_rows(self):
        assert extract_reference_dates([["A"]]) == ReferenceDates()
        assert extract_reference_dates([]) == ReferenceDates()

    def test_for_brand(self):
        dates = ReferenceDates("f-im3", "f-3id", "r-im3", "r-3id")
        assert dates.for_brand("im3") == ("f-im3", "r-im3")
        assert dates.for_brand("3ID") == ("f-3id", "r-3id")
        assert dates.for_brand("OTHER") == ("f-3id", "r-3id")

    def test_as_dict_keys(self):
        assert list(ReferenceDates().as_dict()) == [
            "DATA_FWA_IM3", "DATA_FWA_3ID", "DATA_REBUY_IM3", "DATA_REBUY_3ID",
        ]

    @pytest.mark.parametrize("value, expected", [
        ("20260215", "2026-02-15"),
        ("2026-02-15", "2026-02-15"),
        ("", ""),
        (None, ""),
    ])
    def test_format_reference_date(self, value, expected):
        assert format_reference_date(value) == expected
