"""Data transformation for catalog data.

Turns the three cleaned DataFrames into typed catalog records:
- One Competitor per unique competitor id
- Bouts with both competitor ids, flags and betting lines
- Events with their card order (top of the card first)
"""

import logging
import math
from typing import Dict, List, Optional

import pandas as pd

from src.catalog_pipeline.catalog_store import CatalogStore
from src.catalog_pipeline.models import (
    Bout,
    Competitor,
    CompetitorRecord,
    Event,
    FinishBreakdown,
)

logger = logging.getLogger(__name__)

# Keys expected in the cleaned data dict passed to transform()
_REQUIRED_KEYS = {"competitors", "bouts", "events"}


def _safe(val, default=None):
    """Return *default* when *val* is NaN/None/pd.NA, else the value."""
    if val is None or val is pd.NA:
        return default
    if isinstance(val, float) and math.isnan(val):
        return default
    return val


def _safe_int(val, default: Optional[int] = None) -> Optional[int]:
    """Convert *val* to int, returning *default* for non-numeric values."""
    val = _safe(val)
    if val is None:
        return default
    try:
        return int(float(val))
    except (ValueError, TypeError):
        return default


class CatalogTransformer:
    """Builds catalog records from cleaned catalog data."""

    # ------------------------------------------------------------------
    # Competitors
    # ------------------------------------------------------------------
    def to_competitors(self, df: pd.DataFrame) -> List[Competitor]:
        """One Competitor per row; later duplicates of an id are dropped."""
        competitors: Dict[str, Competitor] = {}
        for _, row in df.iterrows():
            competitor_id = row["competitor_id"]
            if competitor_id in competitors:
                logger.warning(
                    "Duplicate competitor id %s (%s); keeping first",
                    competitor_id,
                    row["name"],
                )
                continue

            competitors[competitor_id] = Competitor(
                competitor_id=competitor_id,
                name=row["name"],
                division=_safe(row.get("division"), ""),
                record=CompetitorRecord(
                    wins=_safe_int(row.get("wins"), 0),
                    losses=_safe_int(row.get("losses"), 0),
                    draws=_safe_int(row.get("draws"), 0),
                    no_contests=_safe_int(row.get("no_contests"), 0),
                ),
                finishes=FinishBreakdown(
                    stoppages=_safe_int(row.get("ko_tko"), 0),
                    submissions=_safe_int(row.get("submissions"), 0),
                    decisions=_safe_int(row.get("decisions"), 0),
                ),
                nickname=_safe(row.get("nickname")),
                is_champion=bool(_safe(row.get("is_champion"), False)),
                ranking=_safe_int(row.get("ranking")),
                p4p_ranking=_safe_int(row.get("p4p_ranking")),
                is_active=bool(_safe(row.get("is_active"), True)),
            )
        return list(competitors.values())

    # ------------------------------------------------------------------
    # Bouts
    # ------------------------------------------------------------------
    def to_bouts(self, df: pd.DataFrame) -> List[Bout]:
        bouts = []
        for _, row in df.iterrows():
            bouts.append(
                Bout(
                    bout_id=row["bout_id"],
                    event_id=row["event_id"],
                    competitor_a_id=row["competitor_a_id"],
                    competitor_b_id=row["competitor_b_id"],
                    weight_class=_safe(row.get("weight_class"), ""),
                    is_title_fight=bool(row.get("is_title_fight", False)),
                    is_interim_title=bool(row.get("is_interim_title", False)),
                    is_main_event=bool(row.get("is_main_event", False)),
                    is_co_main=bool(row.get("is_co_main", False)),
                    bout_order=_safe_int(row.get("bout_order"), 1),
                    scheduled_rounds=_safe_int(row.get("scheduled_rounds"), 3),
                    line_a=_safe_int(row.get("line_a")),
                    line_b=_safe_int(row.get("line_b")),
                    status=row.get("status"),
                )
            )
        return bouts

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def to_events(self, df: pd.DataFrame, bouts: List[Bout]) -> List[Event]:
        """Events with bout ids ordered top of the card first."""
        events = []
        for _, row in df.iterrows():
            event_id = row["event_id"]
            card = sorted(
                (b for b in bouts if b.event_id == event_id),
                key=lambda b: (not b.is_main_event, not b.is_co_main, -b.bout_order),
            )
            events.append(
                Event(
                    event_id=event_id,
                    name=row["name"],
                    start_time=row["start_time"].to_pydatetime(),
                    category=row["category"],
                    bout_ids=tuple(b.bout_id for b in card),
                    status=row.get("status", "upcoming"),
                )
            )
        return events

    # ------------------------------------------------------------------
    # Full pipeline
    # ------------------------------------------------------------------
    def transform(self, cleaned: Dict[str, pd.DataFrame]) -> CatalogStore:
        """Build a CatalogStore from the output of CatalogCleaner.clean_all().

        Bouts for unknown events are dropped; bouts naming unknown
        competitors are kept (pricing and scoring skip those sides).
        """
        missing = _REQUIRED_KEYS - set(cleaned)
        if missing:
            raise ValueError(f"Missing cleaned data for: {sorted(missing)}")

        competitors = self.to_competitors(cleaned["competitors"])
        bouts = self.to_bouts(cleaned["bouts"])

        event_ids = set(cleaned["events"]["event_id"])
        orphaned = [b.bout_id for b in bouts if b.event_id not in event_ids]
        if orphaned:
            logger.warning(
                "Dropping %d bouts with unknown events: %s", len(orphaned), orphaned
            )
            bouts = [b for b in bouts if b.event_id in event_ids]

        known_ids = {c.competitor_id for c in competitors}
        for bout in bouts:
            for competitor_id in bout.competitor_ids:
                if competitor_id not in known_ids:
                    logger.warning(
                        "Bout %s references unknown competitor %s",
                        bout.bout_id,
                        competitor_id,
                    )

        events = self.to_events(cleaned["events"], bouts)
        logger.info(
            "Transformed catalog: %d competitors, %d bouts, %d events",
            len(competitors),
            len(bouts),
            len(events),
        )
        return CatalogStore(competitors, bouts, events)
