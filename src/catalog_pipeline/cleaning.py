"""Data cleaning for catalog CSV data.

Handles standardization across the three CSV files:
- Normalize competitor names and derive stable competitor ids
- Parse spreadsheet booleans ("TRUE", "yes", "1")
- Parse American betting lines ("+150", "-200", "EVEN")
- Champion ranking 0 -> no numeric ranking
- Map event types to event categories
"""

import logging
import re
from typing import Dict, Optional

import pandas as pd

from src.catalog_pipeline.config import EVENT_TYPE_TO_CATEGORY, RECORD_COLUMNS
from src.catalog_pipeline.models import BOUT_SCHEDULED, EVENT_STANDARD

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"true", "t", "yes", "y", "1", "1.0", "x"}

# Characters kept in id fragments
_ID_CHARS = re.compile(r"[^a-z0-9-]")

_LINE_PATTERN = re.compile(r"^([+-]?)(\d+)$")


class CatalogCleaner:
    """Cleans and standardizes catalog data before transformation."""

    # ------------------------------------------------------------------
    # Name / id helpers
    # ------------------------------------------------------------------
    @staticmethod
    def normalize_name(name: str) -> Optional[str]:
        """Normalize a competitor name for consistent matching.

        - Strips quotes and extra whitespace
        - Standardizes apostrophes and hyphens
        """
        if pd.isna(name):
            return None

        name = str(name).strip().strip('"')
        if name == "":
            return None

        # Apostrophe variants to ASCII straight quote
        name = name.replace("\u2019", "'")
        name = name.replace("\u2018", "'")
        name = name.replace("\u02BC", "'")

        # Dash variants to ASCII hyphen-minus
        name = name.replace("\u2013", "-")
        name = name.replace("\u2014", "-")

        return " ".join(name.split())

    @classmethod
    def make_competitor_id(cls, name: str) -> Optional[str]:
        """Stable id from a display name.

        Examples:
            "Jon Jones"         -> "fighter_jones_jon"
            "Alexandre Pantoja" -> "fighter_pantoja_alexandre"
            "fighter_jones_jon" -> "fighter_jones_jon"
        """
        normalized = cls.normalize_name(name)
        if normalized is None:
            return None
        if normalized.startswith("fighter_"):
            return normalized

        parts = [_ID_CHARS.sub("", p) for p in normalized.lower().split(" ")]
        parts = [p for p in parts if p]
        if not parts:
            return None
        return f"fighter_{parts[-1]}_{parts[0]}"

    # ------------------------------------------------------------------
    # Value parsers
    # ------------------------------------------------------------------
    @staticmethod
    def parse_bool(value, default: bool = False) -> bool:
        if pd.isna(value):
            return default
        text = str(value).strip().lower()
        if text == "":
            return default
        return text in _TRUE_VALUES

    @staticmethod
    def parse_line(value) -> Optional[int]:
        """Parse an American betting line.

        Examples:
            "+150" -> 150
            "-200" -> -200
            "EVEN" -> 100
            ""     -> None
        """
        if pd.isna(value):
            return None
        if isinstance(value, (int, float)):
            return int(value)

        text = str(value).strip().replace(",", "")
        if text.lower() in ("even", "ev"):
            return 100

        m = _LINE_PATTERN.match(text)
        if not m:
            return None
        line = int(m.group(2))
        return -line if m.group(1) == "-" else line

    @staticmethod
    def parse_ranking(value, is_champion: bool = False) -> Optional[int]:
        """Divisional ranking; 0 or blank means no numeric ranking."""
        if pd.isna(value):
            return None
        ranking = int(value)
        if ranking < 1:
            if ranking == 0 and not is_champion:
                logger.debug("Ranking 0 on a non-champion treated as unranked")
            return None
        return ranking

    @staticmethod
    def _optional_text(value) -> Optional[str]:
        if pd.isna(value):
            return None
        text = str(value).strip()
        return text or None

    # ------------------------------------------------------------------
    # DataFrame-level cleaning
    # ------------------------------------------------------------------
    def clean_competitors(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clean the competitor DataFrame.

        Adds columns:
            competitor_id - derived from the normalized name
        Normalizes name, nickname, flags, rankings and record counts.
        """
        out = df.copy()
        out["name"] = out["name"].apply(self.normalize_name)
        out["competitor_id"] = out["name"].apply(self.make_competitor_id)

        for col in ("nickname", "division"):
            if col not in out.columns:
                out[col] = None
            out[col] = out[col].apply(self._optional_text)

        out["is_champion"] = (
            out["is_champion"].apply(self.parse_bool)
            if "is_champion" in out.columns
            else False
        )
        out["is_active"] = (
            out["is_active"].apply(lambda v: self.parse_bool(v, default=True))
            if "is_active" in out.columns
            else True
        )

        if "ranking" not in out.columns:
            out["ranking"] = None
        out["ranking"] = [
            self.parse_ranking(r, champ)
            for r, champ in zip(out["ranking"], out["is_champion"])
        ]
        if "p4p_ranking" not in out.columns:
            out["p4p_ranking"] = None
        out["p4p_ranking"] = out["p4p_ranking"].apply(self.parse_ranking)

        for col in RECORD_COLUMNS:
            if col not in out.columns:
                out[col] = 0
            out[col] = pd.to_numeric(out[col], errors="coerce").fillna(0).astype(int)

        missing_id = out["competitor_id"].isna()
        if missing_id.any():
            logger.warning(
                "Dropping %d competitors with no usable name", missing_id.sum()
            )
            out = out[~missing_id].reset_index(drop=True)

        logger.info("Cleaned competitors: %d rows", len(out))
        return out

    def clean_bouts(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clean the bout DataFrame.

        Adds columns:
            competitor_a_id, competitor_b_id - ids derived from fighter names
            line_a, line_b - parsed betting lines
        """
        out = df.copy()
        out["competitor_a_id"] = out["fighter_a"].apply(self.make_competitor_id)
        out["competitor_b_id"] = out["fighter_b"].apply(self.make_competitor_id)

        for col in ("is_title_fight", "is_interim_title", "is_main_event", "is_co_main"):
            out[col] = out[col].apply(self.parse_bool) if col in out.columns else False

        for side in ("a", "b"):
            odds_col = f"odds_{side}"
            out[f"line_{side}"] = (
                out[odds_col].apply(self.parse_line) if odds_col in out.columns else None
            )

        if "bout_order" not in out.columns:
            out["bout_order"] = 1
        out["bout_order"] = (
            pd.to_numeric(out["bout_order"], errors="coerce").fillna(1).astype(int)
        )

        # Title fights and headliners are scheduled for five rounds by default
        five_rounds = out["is_title_fight"].astype(bool) | out["is_main_event"].astype(bool)
        default_rounds = five_rounds.map({True: 5, False: 3})
        if "scheduled_rounds" in out.columns:
            rounds = pd.to_numeric(out["scheduled_rounds"], errors="coerce")
            out["scheduled_rounds"] = rounds.fillna(default_rounds).astype(int)
        else:
            out["scheduled_rounds"] = default_rounds.astype(int)

        if "weight_class" not in out.columns:
            out["weight_class"] = ""
        out["weight_class"] = out["weight_class"].fillna("")

        if "status" not in out.columns:
            out["status"] = BOUT_SCHEDULED
        out["status"] = (
            out["status"].fillna(BOUT_SCHEDULED).str.lower().str.replace(" ", "_")
        )
        out.loc[out["status"] == "", "status"] = BOUT_SCHEDULED

        incomplete = out["competitor_a_id"].isna() | out["competitor_b_id"].isna()
        if incomplete.any():
            logger.warning(
                "Dropping %d bouts missing a competitor: %s",
                incomplete.sum(),
                out.loc[incomplete, "bout_id"].tolist(),
            )
            out = out[~incomplete].reset_index(drop=True)

        logger.info("Cleaned bouts: %d rows", len(out))
        return out

    def clean_events(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clean the event DataFrame.

        Adds columns:
            start_time - timezone-aware UTC timestamp
            category   - marquee / standard from the event type
        """
        out = df.copy()
        out["start_time"] = pd.to_datetime(out["date_utc"], utc=True, errors="coerce")

        if "event_type" not in out.columns:
            out["event_type"] = None
        out["category"] = out["event_type"].apply(
            lambda t: EVENT_TYPE_TO_CATEGORY.get(t, EVENT_STANDARD)
            if not pd.isna(t)
            else EVENT_STANDARD
        )

        if "status" not in out.columns:
            out["status"] = "upcoming"
        out["status"] = out["status"].fillna("upcoming").str.lower()

        undated = out["start_time"].isna()
        if undated.any():
            logger.warning(
                "Dropping %d events with no valid date: %s",
                undated.sum(),
                out.loc[undated, "event_id"].tolist(),
            )
            out = out[~undated].reset_index(drop=True)

        logger.info("Cleaned events: %d rows", len(out))
        return out

    def clean_all(self, data: Dict[str, pd.DataFrame]) -> Dict[str, pd.DataFrame]:
        """Clean all three DataFrames returned by CatalogIngester.read_all().

        Expects keys: competitors, bouts, events.
        Returns a dict with the same keys, each cleaned.
        """
        return {
            "competitors": self.clean_competitors(data["competitors"]),
            "bouts": self.clean_bouts(data["bouts"]),
            "events": self.clean_events(data["events"]),
        }
