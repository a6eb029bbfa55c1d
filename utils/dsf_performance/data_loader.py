# utils/dsf_performance/data_loader.py
"""
Data Loading for DSF Performance

Fetches the monthly DSF file and the branch summary file, then parses them
into the in-memory dataset used by every page.

Sources:
- http(s):// URLs are fetched with requests, bypassing caches
- Anything else is read as a local file path

Only load failures propagate (DataLoadError). Row-level problems are
absorbed by the parser and normalizer.

CHANGELOG:
- v1.1.0: Added LoadSession stale-response guard for reloads
- v1.0.0: Initial implementation
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import pandas as pd
import requests

from .branch_ranking import parse_branch_summary
from .csv_parser import parse_csv_rows, rows_to_dicts
from .records import ReferenceDates, SalesRecord, extract_reference_dates, normalize_rows

logger = logging.getLogger(__name__)

_HEADERS = {
    "User-Agent": "DSF-Incentive-Portal/1.0",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


class DataLoadError(Exception):
    """Raised when a data file cannot be fetched."""

    def __init__(self, source: str, message: str, status_code: Optional[int] = None):
        self.source = source
        self.status_code = status_code
        super().__init__(message)

    def describe(self) -> str:
        """User-facing description."""
        detail = f"HTTP {self.status_code}" if self.status_code else str(self)
        return f"Failed to load data: {self.source}. Make sure the file exists. ({detail})"


def is_remote(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def fetch_text(source: str, timeout: float = 15.0) -> str:
    """
    Fetch a text resource without caching.

    Args:
        source: URL or local file path
        timeout: HTTP timeout in seconds

    Returns:
        Body text

    Raises:
        DataLoadError: non-success status, network error or unreadable file
    """
    if is_remote(source):
        try:
            response = requests.get(
                source,
                headers=_HEADERS,
                params={"_": int(time.time() * 1000)},
                timeout=timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Network error fetching {source}: {e}")
            raise DataLoadError(source, f"Network error: {e}") from e

        if not response.ok:
            logger.error(f"Fetching {source} returned HTTP {response.status_code}")
            raise DataLoadError(source, f"HTTP {response.status_code}", response.status_code)

        return response.content.decode("utf-8-sig", errors="replace")

    path = Path(source)
    try:
        return path.read_text(encoding="utf-8-sig")
    except OSError as e:
        logger.error(f"Cannot read {path}: {e}")
        raise DataLoadError(source, f"Cannot read file: {e}") from e


# =============================================================================
# DATASET
# =============================================================================

@dataclass(frozen=True)
class Dataset:
    """The loaded DSF records plus the file's reference dates."""
    records: Tuple[SalesRecord, ...]
    reference_dates: ReferenceDates = field(default_factory=ReferenceDates)
    source: str = ""
    loaded_at: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return not self.records


def build_dataset(text: str, source: str = "") -> Dataset:
    """Parse, normalize and extract metadata from raw DSF file text."""
    start_time = time.perf_counter()

    rows = parse_csv_rows(text)
    records = normalize_rows(rows_to_dicts(rows))
    reference_dates = extract_reference_dates(rows)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Loaded {len(records):,} DSF records from {source or 'text'} in {elapsed:.3f}s")

    return Dataset(
        records=tuple(records),
        reference_dates=reference_dates,
        source=source,
        loaded_at=datetime.now(timezone.utc),
    )


class DSFDataLoader:
    """
    Loads the DSF dataset and branch summary from configured sources.

    Usage:
        loader = DSFDataLoader(config.get_data_sources())

        dataset = loader.load_dataset()
        branch_df = loader.load_branch_summary()
    """

    def __init__(self, sources: Dict[str, Any]):
        """
        Args:
            sources: dict with dsf_source, branch_source, fetch_timeout_seconds
        """
        self.dsf_source = sources["dsf_source"]
        self.branch_source = sources["branch_source"]
        self.timeout = float(sources.get("fetch_timeout_seconds", 15.0))

    def load_dataset(self) -> Dataset:
        text = fetch_text(self.dsf_source, self.timeout)
        return build_dataset(text, self.dsf_source)

    def load_branch_summary(self) -> pd.DataFrame:
        text = fetch_text(self.branch_source, self.timeout)
        return parse_branch_summary(text)


# =============================================================================
# STALE-RESPONSE GUARD
# =============================================================================

class LoadSession:
    """
    Holds the committed dataset for one view session.

    Each load takes a generation token from begin(). A later begin() or
    invalidate() makes earlier tokens stale, and commit() ignores stale
    tokens regardless of completion order.

    Usage:
        token = session.begin()
        dataset = loader.load_dataset()
        session.commit(token, dataset)
    """

    def __init__(self):
        self._generation = 0
        self.dataset: Optional[Dataset] = None
        self.error: Optional[DataLoadError] = None

    def begin(self) -> int:
        self._generation += 1
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation

    def invalidate(self):
        self._generation += 1

    def commit(self, token: int, dataset: Dataset) -> bool:
        """Store the dataset if the token is current. Returns True when stored."""
        if not self.is_current(token):
            logger.info(f"Discarding stale load (token {token}, current {self._generation})")
            return False
        self.dataset = dataset
        self.error = None
        return True

    def fail(self, token: int, error: DataLoadError) -> bool:
        """Record a load failure if the token is current."""
        if not self.is_current(token):
            return False
        self.error = error
        return True
