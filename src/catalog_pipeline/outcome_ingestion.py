"""Outcome ingestion - validates and parses administrator result uploads.

A batch is accepted or rejected as a whole: if any record is malformed,
nothing in the batch is parsed, so a partial upload can never be scored.

Accepted record shape (upload keys from the admin results form are
accepted as aliases)::

    {
        "bout_id": "bout_1",            # alias: "fight_id"
        "winner_id": "fighter_a",       # null for Draw / No Contest
        "loser_id": "fighter_b",
        "method": "KO/TKO",
        "round": 2,
        "time_seconds": 145,
        "is_title_fight": false,
        "fight_of_the_night": false,
        "performance_bonuses": ["fighter_a"],
        "stats": {                      # alias: "fighter_stats"
            "fighter_a": {"significant_strikes": 45, "knockdowns": 1}
        }
    }
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from src.catalog_pipeline.models import (
    DRAW,
    NO_CONTEST,
    FightStats,
    Outcome,
    categorize_method,
)

logger = logging.getLogger(__name__)

# Upload stat keys -> FightStats field names
STAT_ALIASES = {
    "sig_strikes_landed": "significant_strikes",
    "sig_strikes_attempted": "significant_strikes_attempted",
    "takedowns_landed": "takedowns",
}

_NUMERIC_STATS = {
    "knockdowns",
    "significant_strikes",
    "significant_strikes_attempted",
    "takedowns",
    "takedowns_attempted",
    "control_time_seconds",
    "submission_attempts",
    "point_deductions",
}

_BOOL_FIELDS = ("is_title_fight", "fight_of_the_night")


class MalformedOutcomeError(ValueError):
    """Raised when an outcome batch fails structural validation."""

    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__(
            f"Rejected outcome batch with {len(problems)} problem(s): "
            + "; ".join(problems)
        )


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _bout_id_of(record: Dict) -> Optional[str]:
    return record.get("bout_id", record.get("fight_id"))


def _stats_of(record: Dict):
    return record.get("stats", record.get("fighter_stats"))


def _normalize_stat_key(key: str) -> str:
    return STAT_ALIASES.get(key, key)


def _check_stats(label: str, stats) -> List[str]:
    problems = []
    if not isinstance(stats, dict):
        return [f"{label}: stats must be a mapping of competitor id to stats"]

    for competitor_id, values in stats.items():
        if not isinstance(values, dict):
            problems.append(f"{label}: stats for {competitor_id} must be a mapping")
            continue
        for key, value in values.items():
            field_name = _normalize_stat_key(key)
            if field_name == "missed_weight":
                if not isinstance(value, bool):
                    problems.append(
                        f"{label}: missed_weight for {competitor_id} must be true/false"
                    )
            elif field_name in _NUMERIC_STATS:
                if not _is_number(value) or value < 0:
                    problems.append(
                        f"{label}: {key} for {competitor_id} must be a "
                        f"non-negative number (got {value!r})"
                    )
    return problems


def _check_record(index: int, record) -> List[str]:
    label = f"Record {index}"
    if not isinstance(record, dict):
        return [f"{label}: expected an object, got {type(record).__name__}"]

    problems = []

    bout_id = _bout_id_of(record)
    if not isinstance(bout_id, str) or not bout_id.strip():
        problems.append(f"{label}: missing bout_id")
    else:
        label = f"Record {index} ({bout_id})"

    method = record.get("method")
    category = categorize_method(method) if isinstance(method, str) else None
    if category is None:
        problems.append(f"{label}: unrecognized method {method!r}")

    round_ = record.get("round")
    if not isinstance(round_, int) or isinstance(round_, bool) or round_ < 1:
        problems.append(f"{label}: round must be a positive integer (got {round_!r})")

    winner_id = record.get("winner_id")
    loser_id = record.get("loser_id")
    no_winner = category in (DRAW, NO_CONTEST)
    if no_winner:
        for key, value in (("winner_id", winner_id), ("loser_id", loser_id)):
            if value is not None and not isinstance(value, str):
                problems.append(f"{label}: {key} must be a string or null")
    else:
        if not isinstance(winner_id, str) or not winner_id:
            problems.append(f"{label}: missing winner_id")
        if not isinstance(loser_id, str) or not loser_id:
            problems.append(f"{label}: missing loser_id")
        if winner_id and winner_id == loser_id:
            problems.append(f"{label}: winner_id and loser_id are the same")

    time_seconds = record.get("time_seconds")
    if time_seconds is not None and (not _is_number(time_seconds) or time_seconds < 0):
        problems.append(f"{label}: time_seconds must be a non-negative number")

    for key in _BOOL_FIELDS:
        if key in record and not isinstance(record[key], bool):
            problems.append(f"{label}: {key} must be true/false")

    bonuses = record.get("performance_bonuses")
    if bonuses is not None and (
        not isinstance(bonuses, list) or not all(isinstance(b, str) for b in bonuses)
    ):
        problems.append(f"{label}: performance_bonuses must be a list of ids")

    stats = _stats_of(record)
    if stats is not None:
        problems.extend(_check_stats(label, stats))

    return problems


def find_problems(records) -> List[str]:
    """Return every structural problem in an outcome batch (empty if valid)."""
    if not isinstance(records, list):
        return ["Outcome batch must be a list of records"]

    problems: List[str] = []
    seen: Dict[str, int] = {}
    for index, record in enumerate(records):
        problems.extend(_check_record(index, record))

        bout_id = _bout_id_of(record) if isinstance(record, dict) else None
        if isinstance(bout_id, str) and bout_id:
            if bout_id in seen:
                problems.append(
                    f"Record {index} ({bout_id}): duplicate of record {seen[bout_id]}"
                )
            else:
                seen[bout_id] = index

    return problems


def is_well_formed(records) -> bool:
    """Whether an outcome batch can be scored as-is."""
    return not find_problems(records)


def _parse_stats(raw_stats: Optional[Dict]) -> Dict[str, FightStats]:
    if not raw_stats:
        return {}
    return {
        competitor_id: FightStats.from_dict(
            {_normalize_stat_key(k): v for k, v in values.items()}
        )
        for competitor_id, values in raw_stats.items()
    }


def _parse_record(record: Dict, event_id: Optional[str]) -> Outcome:
    method = record["method"]
    no_winner = categorize_method(method) in (DRAW, NO_CONTEST)
    return Outcome(
        bout_id=_bout_id_of(record),
        method=method,
        round=record["round"],
        winner_id=None if no_winner else record["winner_id"],
        loser_id=None if no_winner else record["loser_id"],
        time_seconds=record.get("time_seconds"),
        stats=_parse_stats(_stats_of(record)),
        is_title_fight=record.get("is_title_fight", False),
        fight_of_the_night=record.get("fight_of_the_night", False),
        performance_bonuses=tuple(record.get("performance_bonuses") or ()),
        event_id=record.get("event_id", event_id),
    )


def parse_outcomes(records, event_id: Optional[str] = None) -> List[Outcome]:
    """Parse a full outcome batch.

    Raises:
        MalformedOutcomeError: if any record is malformed. No outcomes are
            returned in that case.
    """
    problems = find_problems(records)
    if problems:
        logger.warning("Rejected outcome batch: %d problem(s)", len(problems))
        raise MalformedOutcomeError(problems)

    outcomes = [_parse_record(record, event_id) for record in records]
    logger.info("Parsed %d outcome record(s)", len(outcomes))
    return outcomes


def load_outcome_file(filepath: Path, event_id: Optional[str] = None) -> List[Outcome]:
    """Read an outcome batch from a JSON file and parse it."""
    with open(filepath, "r", encoding="utf-8") as f:
        try:
            records = json.load(f)
        except json.JSONDecodeError as e:
            raise MalformedOutcomeError([f"Invalid JSON in {filepath}: {e}"]) from e
    return parse_outcomes(records, event_id=event_id)
