"""CSV ingestion for catalog exports.

Handles the quirks of hand-maintained spreadsheet exports:
- Trailing commas that add empty columns
- Quoted values and stray whitespace
- Blank rows between sections
- Comma-formatted numbers (e.g., "1,200")
"""

import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd

from src.catalog_pipeline.config import (
    BOUT_COLUMNS,
    COMPETITOR_COLUMNS,
    EVENT_COLUMNS,
    FILE_PATTERNS,
    RECORD_COLUMNS,
    REQUIRED_COLUMNS,
)

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when CSV ingestion fails."""


def _parse_numeric(value):
    """Parse a numeric string that may contain commas or a sign ("+150")."""
    if pd.isna(value):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    s = str(value).replace(",", "").strip().strip('"')
    if s == "" or s.isspace():
        return float("nan")
    try:
        return float(s)
    except ValueError:
        return float("nan")


class CatalogIngester:
    """Reads the catalog CSV exports.

    Each read method returns a pandas DataFrame with:
    - Only known columns (unknown/empty columns dropped)
    - String values stripped of quotes and whitespace
    - Numeric columns parsed as floats
    - Blank rows removed
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _resolve_path(self, file_key: str) -> Path:
        """Build the full file path for a given file key, raising if missing."""
        filepath = self.data_dir / FILE_PATTERNS[file_key]
        if not filepath.exists():
            raise FileNotFoundError(f"Expected file not found: {filepath}")
        return filepath

    # ------------------------------------------------------------------
    # Competitors
    # ------------------------------------------------------------------
    def read_competitors(self) -> pd.DataFrame:
        """Read the competitor roster.

        Returns DataFrame with columns from COMPETITOR_COLUMNS; record
        columns are numeric.
        """
        filepath = self._resolve_path("competitors")
        logger.info("Reading competitors: %s", filepath.name)

        df = self._read_csv(filepath, "competitors", COMPETITOR_COLUMNS)
        numeric_cols = RECORD_COLUMNS + ["ranking", "p4p_ranking"]
        df = self._clean_df(df, key_col="name", numeric_cols=numeric_cols)
        logger.info("Loaded %d competitors", len(df))
        return df

    # ------------------------------------------------------------------
    # Bouts
    # ------------------------------------------------------------------
    def read_bouts(self) -> pd.DataFrame:
        """Read scheduled bouts.

        Betting lines stay as strings here; the cleaner parses them.
        """
        filepath = self._resolve_path("bouts")
        logger.info("Reading bouts: %s", filepath.name)

        df = self._read_csv(filepath, "bouts", BOUT_COLUMNS)
        df = self._clean_df(
            df, key_col="bout_id", numeric_cols=["bout_order", "scheduled_rounds"]
        )
        logger.info("Loaded %d bouts", len(df))
        return df

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def read_events(self) -> pd.DataFrame:
        filepath = self._resolve_path("events")
        logger.info("Reading events: %s", filepath.name)

        df = self._read_csv(filepath, "events", EVENT_COLUMNS)
        df = self._clean_df(df, key_col="event_id", numeric_cols=[])
        logger.info("Loaded %d events", len(df))
        return df

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _read_csv(
        self, filepath: Path, file_key: str, columns: List[str]
    ) -> pd.DataFrame:
        """Read a CSV as strings and keep only the known columns."""
        # index_col=False keeps trailing commas from shifting the columns
        df = pd.read_csv(filepath, quotechar='"', dtype=str, index_col=False)
        df.columns = [str(c).strip().strip('"').lower() for c in df.columns]

        missing = REQUIRED_COLUMNS[file_key] - set(df.columns)
        if missing:
            raise IngestionError(
                f"{filepath.name} is missing required columns: {sorted(missing)}"
            )

        known = [c for c in columns if c in df.columns]
        return df[known].copy()

    def _clean_df(
        self, df: pd.DataFrame, key_col: str, numeric_cols: List[str]
    ) -> pd.DataFrame:
        """Common cleanup.

        - Strips whitespace/quotes from string columns
        - Drops rows with a blank key column
        - Parses numeric columns (handles commas like "1,200")
        """
        # Every column was read as text
        for col in df.columns:
            df[col] = df[col].str.strip('"').str.strip()

        df = df[df[key_col].notna() & (df[key_col] != "")]
        df = df.reset_index(drop=True)

        for col in numeric_cols:
            if col in df.columns:
                df[col] = df[col].apply(_parse_numeric)

        return df

    def read_all(self) -> Dict[str, pd.DataFrame]:
        """Read all three CSV files and return them as a dict.

        Returns:
            dict with keys: 'competitors', 'bouts', 'events'

        Raises:
            IngestionError: if any file cannot be read.
        """
        try:
            return {
                "competitors": self.read_competitors(),
                "bouts": self.read_bouts(),
                "events": self.read_events(),
            }
        except IngestionError:
            raise
        except Exception as e:
            raise IngestionError(f"Failed to read CSV files: {e}") from e
