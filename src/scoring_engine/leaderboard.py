"""Event leaderboard - ranks roster scores."""

import dataclasses
import logging
from typing import Dict, Iterable, List

import pandas as pd

from src.scoring_engine.models import RosterScore

logger = logging.getLogger(__name__)

LEADERBOARD_COLUMNS = [
    "rank",
    "tied",
    "roster_id",
    "roster_name",
    "user_id",
    "final_total",
    "raw_total",
    "event_multiplier",
    "submitted_at",
]


def rank_rosters(roster_scores: Iterable[RosterScore]) -> List[RosterScore]:
    """Order roster scores and assign ranks.

    Higher final totals rank first. Equal totals are broken by earlier
    submission; rosters that were never submitted come last. Entries equal
    on both share a rank (1, 1, 3) and are flagged ``tied``.

    Returns:
        New RosterScore objects; the inputs are not modified.
    """
    ordered = sorted(roster_scores, key=lambda s: (s.sort_key, s.roster_id))

    ranked: List[RosterScore] = []
    position = 0
    while position < len(ordered):
        group_end = position + 1
        while (
            group_end < len(ordered)
            and ordered[group_end].sort_key == ordered[position].sort_key
        ):
            group_end += 1

        tied = group_end - position > 1
        for score in ordered[position:group_end]:
            ranked.append(dataclasses.replace(score, rank=position + 1, tied=tied))
        if tied:
            logger.info(
                "Unresolved tie at rank %d between %d rosters",
                position + 1,
                group_end - position,
            )
        position = group_end

    return ranked


def to_records(roster_scores: Iterable[RosterScore]) -> List[Dict]:
    """Flat leaderboard rows (without per-fighter detail)."""
    records = []
    for score in roster_scores:
        row = score.to_dict()
        row.pop("fighter_scores")
        records.append(row)
    return records


def leaderboard_to_dataframe(roster_scores: Iterable[RosterScore]) -> pd.DataFrame:
    """Leaderboard as a DataFrame in the given order."""
    df = pd.DataFrame(to_records(roster_scores), columns=LEADERBOARD_COLUMNS)
    if not df.empty:
        df["submitted_at"] = pd.to_datetime(df["submitted_at"], utc=True)
    return df
