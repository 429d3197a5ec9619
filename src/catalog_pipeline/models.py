"""Catalog records - competitors, bouts, events and bout outcomes.

These are plain typed records supplied by the catalog collaborator. The
engine reads them but never mutates them.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

# Bout lifecycle
BOUT_SCHEDULED = "scheduled"
BOUT_COMPLETED = "completed"
BOUT_CANCELLED = "cancelled"
BOUT_NO_RESULT = "no_result"
VALID_BOUT_STATUSES = {BOUT_SCHEDULED, BOUT_COMPLETED, BOUT_CANCELLED, BOUT_NO_RESULT}

# Event categories
EVENT_MARQUEE = "marquee"
EVENT_STANDARD = "standard"
VALID_EVENT_CATEGORIES = {EVENT_MARQUEE, EVENT_STANDARD}

# Outcome methods as they appear in result uploads
METHOD_KO_TKO = "KO/TKO"
METHOD_SUBMISSION = "Submission"
METHOD_DECISION_UNANIMOUS = "Decision - Unanimous"
METHOD_DECISION_SPLIT = "Decision - Split"
METHOD_DECISION_MAJORITY = "Decision - Majority"
METHOD_DQ = "DQ"
METHOD_DRAW = "Draw"
METHOD_NO_CONTEST = "No Contest"
VALID_METHODS = {
    METHOD_KO_TKO,
    METHOD_SUBMISSION,
    METHOD_DECISION_UNANIMOUS,
    METHOD_DECISION_SPLIT,
    METHOD_DECISION_MAJORITY,
    METHOD_DQ,
    METHOD_DRAW,
    METHOD_NO_CONTEST,
}

# Method categories used by scoring
STOPPAGE = "stoppage"
SUBMISSION = "submission"
DECISION = "decision"
DISQUALIFICATION = "disqualification"
DRAW = "draw"
NO_CONTEST = "no_contest"

_METHOD_CATEGORIES = {
    METHOD_KO_TKO: STOPPAGE,
    METHOD_SUBMISSION: SUBMISSION,
    METHOD_DECISION_UNANIMOUS: DECISION,
    METHOD_DECISION_SPLIT: DECISION,
    METHOD_DECISION_MAJORITY: DECISION,
    METHOD_DQ: DISQUALIFICATION,
    METHOD_DRAW: DRAW,
    METHOD_NO_CONTEST: NO_CONTEST,
}


def categorize_method(method: str) -> Optional[str]:
    """Map an upload method label to its scoring category.

    Exact labels are matched first; free-form labels such as ``"TKO
    (punches)"`` or ``"Decision"`` fall back to keyword matching.
    """
    if method in _METHOD_CATEGORIES:
        return _METHOD_CATEGORIES[method]

    label = str(method).strip().lower()
    if not label:
        return None
    if "no contest" in label:
        return NO_CONTEST
    if "draw" in label:
        return DRAW
    if "dq" in label or "disqualif" in label:
        return DISQUALIFICATION
    if "sub" in label:
        return SUBMISSION
    if "ko" in label:
        return STOPPAGE
    if "decision" in label:
        return DECISION
    return None


def _parse_datetime(value) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class CompetitorRecord:
    """Professional record."""

    wins: int = 0
    losses: int = 0
    draws: int = 0
    no_contests: int = 0


@dataclass(frozen=True)
class FinishBreakdown:
    """How a competitor's wins were earned."""

    stoppages: int = 0
    submissions: int = 0
    decisions: int = 0


@dataclass(frozen=True)
class Competitor:
    """A single fighter in the catalog."""

    competitor_id: str
    name: str
    division: str
    record: CompetitorRecord = field(default_factory=CompetitorRecord)
    finishes: FinishBreakdown = field(default_factory=FinishBreakdown)
    nickname: Optional[str] = None
    is_champion: bool = False
    ranking: Optional[int] = None  # None when champion or unranked
    p4p_ranking: Optional[int] = None
    is_active: bool = True

    @property
    def total_bouts(self) -> int:
        """Competitive bouts used for form (wins + losses)."""
        return self.record.wins + self.record.losses

    @property
    def win_rate(self) -> Optional[float]:
        if self.total_bouts == 0:
            return None
        return self.record.wins / self.total_bouts

    @property
    def finish_rate(self) -> float:
        if self.record.wins == 0:
            return 0.0
        finishes = self.finishes.stoppages + self.finishes.submissions
        return finishes / self.record.wins

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "Competitor":
        return cls(
            competitor_id=data["competitor_id"],
            name=data["name"],
            division=data.get("division", ""),
            record=CompetitorRecord(**data.get("record", {})),
            finishes=FinishBreakdown(**data.get("finishes", {})),
            nickname=data.get("nickname"),
            is_champion=data.get("is_champion", False),
            ranking=data.get("ranking"),
            p4p_ranking=data.get("p4p_ranking"),
            is_active=data.get("is_active", True),
        )


@dataclass(frozen=True)
class Bout:
    """A scheduled matchup between two competitors."""

    bout_id: str
    event_id: str
    competitor_a_id: str
    competitor_b_id: str
    weight_class: str = ""
    is_title_fight: bool = False
    is_interim_title: bool = False
    is_main_event: bool = False
    is_co_main: bool = False
    bout_order: int = 1  # Higher number = higher on the card
    scheduled_rounds: int = 3
    line_a: Optional[int] = None  # American odds for competitor A
    line_b: Optional[int] = None
    status: str = BOUT_SCHEDULED

    @property
    def competitor_ids(self) -> Tuple[str, str]:
        return (self.competitor_a_id, self.competitor_b_id)

    def involves(self, competitor_id: str) -> bool:
        return competitor_id in self.competitor_ids

    def opponent_of(self, competitor_id: str) -> Optional[str]:
        """Return the opposing competitor id, or None if not in this bout."""
        if competitor_id == self.competitor_a_id:
            return self.competitor_b_id
        if competitor_id == self.competitor_b_id:
            return self.competitor_a_id
        return None

    def line_for(self, competitor_id: str) -> Optional[int]:
        """Betting line for one side of the bout (None when unavailable)."""
        if competitor_id == self.competitor_a_id:
            return self.line_a
        if competitor_id == self.competitor_b_id:
            return self.line_b
        return None

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "Bout":
        return cls(**data)


@dataclass(frozen=True)
class Event:
    """A scheduled card holding an ordered collection of bouts."""

    event_id: str
    name: str
    start_time: datetime
    category: str = EVENT_STANDARD
    bout_ids: Tuple[str, ...] = ()
    status: str = "upcoming"

    @property
    def is_marquee(self) -> bool:
        return self.category == EVENT_MARQUEE

    def to_dict(self) -> Dict:
        return {
            "event_id": self.event_id,
            "name": self.name,
            "start_time": self.start_time.isoformat(),
            "category": self.category,
            "bout_ids": list(self.bout_ids),
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Event":
        return cls(
            event_id=data["event_id"],
            name=data["name"],
            start_time=_parse_datetime(data["start_time"]),
            category=data.get("category", EVENT_STANDARD),
            bout_ids=tuple(data.get("bout_ids", ())),
            status=data.get("status", "upcoming"),
        )


@dataclass(frozen=True)
class FightStats:
    """Per-competitor performance statistics for one bout."""

    knockdowns: int = 0
    significant_strikes: int = 0
    significant_strikes_attempted: int = 0
    takedowns: int = 0
    takedowns_attempted: int = 0
    control_time_seconds: float = 0.0
    submission_attempts: int = 0
    point_deductions: int = 0
    missed_weight: bool = False

    @property
    def strike_accuracy(self) -> Optional[float]:
        """Clean-hit rate (landed / attempted)."""
        if not self.significant_strikes_attempted:
            return None
        return self.significant_strikes / self.significant_strikes_attempted

    @property
    def takedown_accuracy(self) -> Optional[float]:
        if not self.takedowns_attempted:
            return None
        return self.takedowns / self.takedowns_attempted

    @classmethod
    def from_dict(cls, data: Dict) -> "FightStats":
        known = cls.__dataclass_fields__.keys()
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass(frozen=True)
class Outcome:
    """Authoritative result of a completed bout - the sole scoring input."""

    bout_id: str
    method: str
    round: int
    winner_id: Optional[str] = None  # None for draw / no contest
    loser_id: Optional[str] = None
    time_seconds: Optional[int] = None
    stats: Dict[str, FightStats] = field(default_factory=dict)
    is_title_fight: bool = False
    fight_of_the_night: bool = False
    performance_bonuses: Tuple[str, ...] = ()
    event_id: Optional[str] = None

    @property
    def method_category(self) -> Optional[str]:
        return categorize_method(self.method)

    @property
    def has_winner(self) -> bool:
        return self.winner_id is not None and self.method_category not in (
            DRAW,
            NO_CONTEST,
        )

    @property
    def participant_ids(self) -> List[str]:
        """Competitor ids named by the outcome itself (winner/loser/stats)."""
        ids = [cid for cid in (self.winner_id, self.loser_id) if cid]
        ids.extend(cid for cid in self.stats if cid not in ids)
        return ids

    def stats_for(self, competitor_id: str) -> FightStats:
        return self.stats.get(competitor_id, FightStats())
