"""Tests for fetching, dataset building and the stale-load guard."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from utils.dsf_performance.data_loader import (
    DataLoadError,
    DSFDataLoader,
    LoadSession,
    build_dataset,
    fetch_text,
    is_remote,
)


def test_is_remote():
    assert is_remote("https://example.com/DSF.csv")
    assert is_remote("HTTP://example.com/DSF.csv")
    assert not is_remote("data/DSF.csv")


class TestFetchText:

    def test_local_file_strips_bom(self, tmp_path):
        path = tmp_path / "dsf.csv"
        path.write_bytes("\ufeffA;B\n1;2\n".encode("utf-8"))
        assert fetch_text(str(path)) == "A;B\n1;2\n"

    def test_missing_local_file(self, tmp_path):
        with pytest.raises(DataLoadError) as exc_info:
            fetch_text(str(tmp_path / "missing.csv"))
        assert exc_info.value.status_code is None
        assert "missing.csv" in exc_info.value.describe()

    @patch("utils.dsf_performance.data_loader.requests.get")
    def test_http_success(self, mock_get):
        mock_get.return_value = MagicMock(ok=True, status_code=200, content=b"A;B\n")
        assert fetch_text("https://example.com/dsf.csv", timeout=3) == "A;B\n"

        _, kwargs = mock_get.call_args
        assert kwargs["timeout"] == 3
        assert kwargs["headers"]["Cache-Control"] == "no-cache"
        assert "_" in kwargs["params"]

    @patch("utils.dsf_performance.data_loader.requests.get")
    def test_http_error_status(self, mock_get):
        mock_get.return_value = MagicMock(ok=False, status_code=404)
        with pytest.raises(DataLoadError) as exc_info:
            fetch_text("https://example.com/dsf.csv")
        assert exc_info.value.status_code == 404
        assert "HTTP 404" in exc_info.value.describe()

    @patch("utils.dsf_performance.data_loader.requests.get")
    def test_network_error(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(DataLoadError) as exc_info:
            fetch_text("https://example.com/dsf.csv")
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


def test_build_dataset(dsf_csv_text):
    dataset = build_dataset(dsf_csv_text, "memory")
    assert len(dataset.records) == 4
    assert not dataset.is_empty
    assert dataset.source == "memory"
    assert dataset.reference_dates.fwa_im3 == "2026-02-15"
    assert dataset.loaded_at is not None


def test_build_dataset_empty_text():
    dataset = build_dataset("")
    assert dataset.is_empty


def test_loader_reads_configured_sources(tmp_path, dsf_csv_text, branch_csv_text):
    dsf_path = tmp_path / "DSF.csv"
    branch_path = tmp_path / "REGION.csv"
    dsf_path.write_text(dsf_csv_text, encoding="utf-8")
    branch_path.write_text(branch_csv_text, encoding="utf-8")

    loader = DSFDataLoader({
        "dsf_source": str(dsf_path),
        "branch_source": str(branch_path),
        "fetch_timeout_seconds": 5,
    })

    assert [r.id_dsf for r in loader.load_dataset().records] == ["D1", "D2", "D3", "D4"]
    assert len(loader.load_branch_summary()) == 4


class TestLoadSession:

    def test_latest_load_wins(self, dsf_csv_text):
        session = LoadSession()
        first = session.begin()
        second = session.begin()
        newer = build_dataset(dsf_csv_text, "second")

        assert session.commit(second, newer)
        assert not session.commit(first, build_dataset("", "first"))
        assert session.dataset is newer

    def test_invalidate_discards_in_flight(self):
        session = LoadSession()
        token = session.begin()
        session.invalidate()
        assert not session.is_current(token)
        assert not session.commit(token, build_dataset(""))
        assert session.dataset is None

    def test_fail_then_commit_clears_error(self):
        session = LoadSession()
        token = session.begin()
        assert session.fail(token, DataLoadError("x.csv", "HTTP 500", 500))
        assert session.error.status_code == 500

        token = session.begin()
        assert session.commit(token, build_dataset(""))
        assert session.error is None

    def test_stale_failure_ignored(self):
        session = LoadSession()
        stale = session.begin()
        session.begin()
        assert not session.fail(stale, DataLoadError("x.csv", "boom"))
        assert session.error is None
