"""Roster state data models - league settings, picks and rosters."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
import uuid

from src.catalog_pipeline.models import Event
from src.roster_manager.config import (
    DEFAULT_ALLOW_BOOST,
    DEFAULT_BOOST_MULTIPLIER,
    DEFAULT_BUDGET,
    DEFAULT_EVENT_MULTIPLIER,
    DEFAULT_LOCK_LEAD_MINUTES,
    DEFAULT_MAX_FROM_SAME_BOUT,
    DEFAULT_ROSTER_SIZE,
    STATUS_DRAFT,
    STATUS_LOCKED,
    STATUS_SCORED,
    VALID_STATUSES,
)


@dataclass(frozen=True)
class LeagueSettings:
    """League rules that a roster is built and scored under."""

    league_id: str
    budget: int = DEFAULT_BUDGET
    roster_size: int = DEFAULT_ROSTER_SIZE
    max_from_same_bout: int = DEFAULT_MAX_FROM_SAME_BOUT
    lock_lead_minutes: int = DEFAULT_LOCK_LEAD_MINUTES
    allow_boost: bool = DEFAULT_ALLOW_BOOST
    boost_multiplier: float = DEFAULT_BOOST_MULTIPLIER
    apply_event_multiplier: bool = True
    event_multiplier: float = DEFAULT_EVENT_MULTIPLIER

    def __post_init__(self):
        if self.budget <= 0:
            raise ValueError(f"budget must be positive (got {self.budget})")
        if self.roster_size < 1:
            raise ValueError(f"roster_size must be at least 1 (got {self.roster_size})")
        if self.max_from_same_bout < 1:
            raise ValueError(
                f"max_from_same_bout must be at least 1 (got {self.max_from_same_bout})"
            )
        if self.lock_lead_minutes < 0:
            raise ValueError(
                f"lock_lead_minutes cannot be negative (got {self.lock_lead_minutes})"
            )
        if self.boost_multiplier < 1 or self.event_multiplier < 1:
            raise ValueError("Multipliers must be at least 1.0")

    @classmethod
    def for_event(cls, event: Event, **overrides) -> "LeagueSettings":
        """Settings for an event's global league.

        The event-category multiplier only applies on marquee events.
        """
        settings = {
            "league_id": f"league_global_{event.event_id}",
            "apply_event_multiplier": event.is_marquee,
        }
        settings.update(overrides)
        return cls(**settings)

    def event_multiplier_for(self, event: Optional[Event]) -> float:
        """Multiplier applied once to a roster total for *event*."""
        if event is None or not self.apply_event_multiplier or not event.is_marquee:
            return 1.0
        return self.event_multiplier


@dataclass(frozen=True)
class RosterPick:
    """A single pick with its salary frozen at pick time."""

    competitor_id: str
    salary: int
    slot: int
    boosted: bool = False


@dataclass
class Roster:
    """A user's roster for one league/event pair."""

    roster_id: str
    user_id: str
    league_id: str
    event_id: str
    name: str = ""
    picks: List[RosterPick] = field(default_factory=list)
    status: str = STATUS_DRAFT
    created_at: Optional[datetime] = None
    submitted_at: Optional[datetime] = None
    locked_at: Optional[datetime] = None
    scored_at: Optional[datetime] = None
    total_points: Optional[float] = None
    rank: Optional[int] = None

    def __post_init__(self):
        if self.status not in VALID_STATUSES:
            raise ValueError(
                f"Invalid roster status '{self.status}'. "
                f"Must be one of: {sorted(VALID_STATUSES)}"
            )

    @classmethod
    def create_new(
        cls,
        user_id: str,
        league_id: str,
        event_id: str,
        name: str = "",
        created_at: Optional[datetime] = None,
    ) -> "Roster":
        """Factory method to create an empty draft roster."""
        return cls(
            roster_id=str(uuid.uuid4()),
            user_id=user_id,
            league_id=league_id,
            event_id=event_id,
            name=name,
            created_at=created_at,
        )

    @property
    def is_draft(self) -> bool:
        return self.status == STATUS_DRAFT

    @property
    def is_locked(self) -> bool:
        """True once the roster has left draft (locked or scored)."""
        return self.status in (STATUS_LOCKED, STATUS_SCORED)

    @property
    def is_submitted(self) -> bool:
        return self.submitted_at is not None

    def competitor_ids(self) -> List[str]:
        return [p.competitor_id for p in self.picks]

    def get_pick(self, competitor_id: str) -> Optional[RosterPick]:
        for pick in self.picks:
            if pick.competitor_id == competitor_id:
                return pick
        return None

    def boosted_pick(self) -> Optional[RosterPick]:
        for pick in self.picks:
            if pick.boosted:
                return pick
        return None

    def total_salary(self) -> int:
        return sum(p.salary for p in self.picks)

    def remaining_budget(self, budget: int) -> int:
        return budget - self.total_salary()

    def next_open_slot(self, roster_size: int) -> Optional[int]:
        """Lowest unused slot index, or None when every slot is taken."""
        used = {p.slot for p in self.picks}
        for slot in range(roster_size):
            if slot not in used:
                return slot
        return None
