"""CSV datasets from the LSGL tracker's GitHub data directory."""

import io
import logging
import os
from typing import Any, Dict, List, Optional

import pandas as pd
import requests

from lsgl_tracker.store.sources.base import Dataset, SourceError

logger = logging.getLogger(__name__)

BASE_URL = "https://raw.githubusercontent.com/loz-airport/LSGL_tracker/master/data_raw"
DEFAULT_TIMEOUT = 30

# Code columns kept as text so hex and numeric-looking codes keep leading zeros
CODE_COLUMNS = (
    "ICAO24",
    "icao24",
    "departure_airport_ICAO",
    "destination_airport_ICAO",
    "icao",
    "ICAO",
    "ident",
    "gps_code",
)


class GitHubCsvSource:
    """Row source reading raw CSV files over HTTP."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (
            base_url or os.environ.get("LSGL_TRACKER_BASE_URL") or BASE_URL
        ).rstrip("/")
        self.timeout = timeout or float(
            os.environ.get("LSGL_TRACKER_TIMEOUT", DEFAULT_TIMEOUT)
        )

    def url_for(self, dataset: Dataset) -> str:
        return f"{self.base_url}/{dataset.filename}"

    def fetch_rows(self, dataset: Dataset) -> List[Dict[str, Any]]:
        """Download and parse one dataset."""
        url = self.url_for(dataset)
        try:
            resp = requests.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise SourceError(f"Failed to fetch {dataset.filename}: {e}") from e

        rows = self.parse_csv(resp.text, dataset)
        logger.debug("Fetched %d rows from %s", len(rows), url)
        return rows

    @staticmethod
    def parse_csv(text: str, dataset: Dataset) -> List[Dict[str, Any]]:
        """Parse CSV text into row dicts with None for empty cells.

        Code columns are read as strings; other columns keep pandas type inference.
        """
        if not text.strip():
            return []
        try:
            header = pd.read_csv(io.StringIO(text), nrows=0).columns
            dtype = {c: str for c in CODE_COLUMNS if c in header}
            df = pd.read_csv(io.StringIO(text), skip_blank_lines=True, dtype=dtype)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as e:
            raise SourceError(f"Failed to parse {dataset.filename}: {e}") from e
        df = df.astype(object).where(df.notna(), None)
        return df.to_dict(orient="records")
