"""Tests for the semicolon CSV dialect."""

import random

from utils.dsf_performance.csv_parser import (
    parse_csv,
    parse_csv_rows,
    rows_to_dicts,
    to_csv_text,
)


class TestParseCsvRows:

    def test_simple_rows(self):
        assert parse_csv_rows("a;b\n1;2\n") == [["a", "b"], ["1", "2"]]

    def test_crlf_line_endings(self):
        assert parse_csv_rows("a;b\r\n1;2\r\n") == [["a", "b"], ["1", "2"]]

    def test_quoted_delimiter_and_escaped_quote(self):
        rows = parse_csv_rows('a;b\n"x;y";"he said ""hi"""\n')
        assert rows[1] == ["x;y", 'he said "hi"']

    def test_newline_inside_quotes(self):
        assert parse_csv_rows('"line1\nline2";z') == [["line1\nline2", "z"]]

    def test_blank_lines_dropped(self):
        assert parse_csv_rows("a\n\n\nb\n") == [["a"], ["b"]]

    def test_cells_not_trimmed(self):
        assert parse_csv_rows(" a ; b ") == [[" a ", " b "]]

    def test_unterminated_quote_consumes_rest(self):
        assert parse_csv_rows('a;"bc\nd') == [["a", "bc\nd"]]

    def test_empty_input(self):
        assert parse_csv_rows("") == []
        assert parse_csv_rows(None) == []

    def test_custom_delimiter(self):
        assert parse_csv_rows("a,b\n", delimiter=",") == [["a", "b"]]


class TestRowsToDicts:

    def test_headers_and_values_trimmed(self):
        assert rows_to_dicts([[" ID ", "NAME"], [" 1 ", " Andi "]]) == [{"ID": "1", "NAME": "Andi"}]

    def test_missing_cells_become_empty(self):
        assert rows_to_dicts([["A", "B", "C"], ["1"]]) == [{"A": "1", "B": "", "C": ""}]

    def test_extra_cells_ignored(self):
        assert rows_to_dicts([["A"], ["1", "2", "3"]]) == [{"A": "1"}]

    def test_all_blank_rows_dropped(self):
        assert rows_to_dicts([["A", "B"], [" ", ""], ["1", "2"]]) == [{"A": "1", "B": "2"}]

    def test_no_rows(self):
        assert rows_to_dicts([]) == []

    def test_header_only(self):
        assert parse_csv("A;B\n") == []


class TestToCsvText:

    def test_quotes_special_cells(self):
        text = to_csv_text([["a;b", 'say "x"', "plain"]])
        assert text == '"a;b";"say ""x""";plain\n'

    def test_parse_reads_serialized_rows(self):
        rows = [["id", "note"], ["1", "a;b"], ["2", 'say "x"\nnext'], ["3", ""]]
        assert parse_csv_rows(to_csv_text(rows)) == rows

    def test_parse_reads_generated_tables(self):
        rng = random.Random(20260215)
        pieces = [";", "\"", "\n", "\r\n", " ", "a", "b", "Rp"]

        for _ in range(500):
            width = rng.randint(2, 5)
            rows = [
                ["".join(rng.choice(pieces) for _ in range(rng.randint(0, 6))) for _ in range(width)]
                for _ in range(rng.randint(1, 6))
            ]
            assert parse_csv_rows(to_csv_text(rows)) == rows

    def test_none_serialized_as_empty(self):
        assert to_csv_text([["a", None]]) == "a;\n"
