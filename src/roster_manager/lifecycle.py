"""Roster lifecycle - draft -> locked -> scored, driven by a single clock.

A roster is editable only in ``draft``. It locks automatically once
``now >= event_start - lock_lead_minutes`` or when the owner submits a valid
roster before that deadline. ``locked -> scored`` happens once the event's
outcomes are processed. No transition ever returns a roster to ``draft``.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional

from src.roster_manager.config import STATUS_DRAFT, STATUS_LOCKED, STATUS_SCORED
from src.roster_manager.roster_state import LeagueSettings, Roster
from src.roster_manager.roster_validator import ValidationResult

logger = logging.getLogger(__name__)


class LifecycleError(Exception):
    """Raised for an illegal roster status transition."""


class RosterLockedError(LifecycleError):
    """Raised when a locked or scored roster is mutated or submitted."""

    def __init__(self, roster_id: str, message: Optional[str] = None):
        self.roster_id = roster_id
        super().__init__(message or f"Roster {roster_id} is locked")


# ------------------------------------------------------------------
# Clocks
# ------------------------------------------------------------------


class Clock(ABC):
    """Source of the current instant."""

    @abstractmethod
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """A clock that only moves when told to."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def set(self, instant: datetime):
        self.instant = instant

    def advance(self, **kwargs):
        """Move forward by ``timedelta(**kwargs)``."""
        self.instant = self.instant + timedelta(**kwargs)


# ------------------------------------------------------------------
# State machine
# ------------------------------------------------------------------


class RosterLifecycle:
    """Applies lock and scoring transitions to rosters.

    Every deadline check reads ``self.clock`` so all call sites within one
    operation agree on "now".
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        league_settings: Optional[LeagueSettings] = None,
    ):
        self.clock = clock or SystemClock()
        self.league_settings = league_settings

    def _lead(self) -> timedelta:
        minutes = self.league_settings.lock_lead_minutes if self.league_settings else 0
        return timedelta(minutes=minutes)

    def lock_deadline(self, event_start: datetime) -> datetime:
        return event_start - self._lead()

    def is_locked_out(self, event_start: datetime) -> bool:
        """True once the lock deadline has been reached."""
        return self.clock.now() >= self.lock_deadline(event_start)

    def time_until_lock(self, event_start: datetime) -> timedelta:
        """Time remaining before lock (zero once locked out)."""
        remaining = self.lock_deadline(event_start) - self.clock.now()
        return max(remaining, timedelta(0))

    def refresh(self, roster: Roster, event_start: datetime) -> bool:
        """Auto-lock a draft roster whose deadline has passed.

        Returns:
            True if the roster's status changed.
        """
        if roster.status != STATUS_DRAFT or not self.is_locked_out(event_start):
            return False
        roster.status = STATUS_LOCKED
        roster.locked_at = self.clock.now()
        logger.info("Roster %s auto-locked at deadline", roster.roster_id)
        return True

    def ensure_mutable(self, roster: Roster, event_start: datetime):
        """Raise RosterLockedError unless the roster may still be edited."""
        self.refresh(roster, event_start)
        if roster.status != STATUS_DRAFT:
            raise RosterLockedError(
                roster.roster_id,
                f"Roster {roster.roster_id} is {roster.status} and can no longer be changed",
            )

    def submit(
        self, roster: Roster, event_start: datetime, validation: ValidationResult
    ) -> ValidationResult:
        """Submit a roster, locking it if valid.

        Args:
            roster: Roster being submitted (updated in place).
            event_start: Start instant of the roster's event.
            validation: Result of validating the roster's current picks.

        Returns:
            The validation result. An invalid roster stays in draft.

        Raises:
            RosterLockedError: The deadline has passed, or the roster locked
                without ever being submitted.
        """
        if roster.is_submitted and roster.status != STATUS_DRAFT:
            logger.info("Roster %s already submitted; nothing to do", roster.roster_id)
            return ValidationResult(True, [])

        self.ensure_mutable(roster, event_start)

        if not validation.valid:
            logger.warning(
                "Roster %s rejected at submission: %d violation(s)",
                roster.roster_id,
                len(validation.violations),
            )
            return validation

        now = self.clock.now()
        roster.status = STATUS_LOCKED
        roster.submitted_at = now
        roster.locked_at = now
        logger.info("Roster %s submitted and locked", roster.roster_id)
        return validation

    def mark_scored(self, roster: Roster) -> Roster:
        """Move a locked roster to scored.

        Repeat calls are allowed and keep the first scoring time.
        """
        if roster.status == STATUS_DRAFT:
            raise LifecycleError(
                f"Roster {roster.roster_id} is still a draft and cannot be scored"
            )
        roster.status = STATUS_SCORED
        roster.scored_at = roster.scored_at or self.clock.now()
        return roster


def format_time_until_lock(remaining: timedelta) -> str:
    """Countdown text for a roster builder, e.g. ``"4h 10m"`` or ``"LOCKED"``."""
    total = int(remaining.total_seconds())
    if total <= 0:
        return "LOCKED"

    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"
