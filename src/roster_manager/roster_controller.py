"""Roster controller - orchestrates pick flow, validation and locking."""

import dataclasses
import logging
from typing import Dict, Iterable, List, Optional

from src.catalog_pipeline.models import BOUT_CANCELLED, Bout, Event
from src.pricing_engine.models import PricedCompetitor
from src.roster_manager.lifecycle import RosterLifecycle
from src.roster_manager.roster_state import LeagueSettings, Roster, RosterPick
from src.roster_manager.roster_validator import RosterValidator, ValidationResult
from src.roster_manager.state_persistence import RosterPersistence

logger = logging.getLogger(__name__)


class PickError(Exception):
    """Raised for an illegal pick operation (the roster is left unchanged)."""


class RosterController:
    """Main controller for building one roster.

    Coordinates the lifecycle (lock checks), RosterValidator (rule checks)
    and the roster itself. Every mutation re-checks the lock first, then
    validates the resulting picks before applying them.
    """

    def __init__(
        self,
        roster: Roster,
        event: Event,
        priced_pool: Iterable[PricedCompetitor],
        bouts: Iterable[Bout],
        league_settings: Optional[LeagueSettings] = None,
        lifecycle: Optional[RosterLifecycle] = None,
        persistence: Optional[RosterPersistence] = None,
    ):
        self.roster = roster
        self.event = event
        self.league_settings = league_settings or LeagueSettings.for_event(event)
        self.lifecycle = lifecycle or RosterLifecycle(league_settings=self.league_settings)
        self.persistence = persistence
        self.validator = RosterValidator(self.league_settings)
        self.bouts = [b for b in bouts if b.event_id == event.event_id]
        self.pool: Dict[str, PricedCompetitor] = {
            p.competitor_id: p for p in priced_pool if p.event_id == event.event_id
        }

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_pick(self, competitor_id: str, boosted: bool = False) -> RosterPick:
        """Add a competitor at their current salary.

        Args:
            competitor_id: Competitor from the event's priced pool.
            boosted: Boost this pick (clears any other boost).

        Returns:
            The new RosterPick with its salary frozen.

        Raises:
            RosterLockedError: If the roster can no longer be edited.
            PickError: If the competitor is unavailable, already picked,
                the roster is full, or the pick breaks a league rule.
        """
        self._ensure_mutable()

        priced = self.pool.get(competitor_id)
        if priced is None:
            raise PickError(f"Competitor {competitor_id} is not available for this event")
        if self._bout_cancelled(priced.bout_id):
            raise PickError(f"Bout {priced.bout_id} has been cancelled")
        if self.roster.get_pick(competitor_id) is not None:
            raise PickError(f"Competitor {competitor_id} is already on the roster")

        slot = self.roster.next_open_slot(self.league_settings.roster_size)
        if slot is None:
            raise PickError("Roster is full")

        pick = RosterPick(
            competitor_id=competitor_id,
            salary=priced.salary,
            slot=slot,
            boosted=boosted,
        )
        others = self.roster.picks
        if boosted:
            others = [dataclasses.replace(p, boosted=False) for p in others]
        self._apply(others + [pick])

        logger.info(
            "Roster %s: slot %d <- %s (%d)%s",
            self.roster.roster_id,
            slot,
            priced.name or competitor_id,
            priced.salary,
            " [boosted]" if boosted else "",
        )
        return pick

    def remove_pick(self, competitor_id: str) -> RosterPick:
        """Remove a competitor, freeing their slot."""
        self._ensure_mutable()

        pick = self.roster.get_pick(competitor_id)
        if pick is None:
            raise PickError(f"Competitor {competitor_id} is not on the roster")

        self._apply([p for p in self.roster.picks if p.competitor_id != competitor_id])
        logger.info("Roster %s: removed %s", self.roster.roster_id, competitor_id)
        return pick

    def set_boost(self, competitor_id: str) -> RosterPick:
        """Boost one pick; any previous boost moves to it."""
        self._ensure_mutable()

        if self.roster.get_pick(competitor_id) is None:
            raise PickError(f"Competitor {competitor_id} is not on the roster")

        picks = [
            dataclasses.replace(p, boosted=p.competitor_id == competitor_id)
            for p in self.roster.picks
        ]
        self._apply(picks)
        return self.roster.get_pick(competitor_id)

    def clear_boost(self):
        self._ensure_mutable()
        self._apply([dataclasses.replace(p, boosted=False) for p in self.roster.picks])

    def submit(self) -> ValidationResult:
        """Validate the full roster and submit it.

        Returns:
            The validation result; the roster is locked only when it is valid.

        Raises:
            RosterLockedError: If the lock deadline has passed.
        """
        if self.lifecycle.refresh(self.roster, self.event.start_time):
            self._save()
        result = self.lifecycle.submit(self.roster, self.event.start_time, self.validate())
        self._save()
        return result

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def validate(self) -> ValidationResult:
        return self.validator.validate(self.roster.picks, self.bouts)

    def get_available_competitors(self) -> List[PricedCompetitor]:
        """Priced competitors not yet picked, most expensive first."""
        picked = set(self.roster.competitor_ids())
        available = [
            p for p in self.pool.values()
            if p.competitor_id not in picked and not self._bout_cancelled(p.bout_id)
        ]
        return sorted(available, key=lambda p: (-p.salary, p.name))

    def get_roster_summary(self) -> Dict:
        summary = self.validator.get_roster_summary(self.roster.picks)
        summary["status"] = self.roster.status
        summary["time_until_lock"] = self.lifecycle.time_until_lock(self.event.start_time)
        return summary

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _ensure_mutable(self):
        if self.lifecycle.refresh(self.roster, self.event.start_time):
            self._save()
        self.lifecycle.ensure_mutable(self.roster, self.event.start_time)

    def _apply(self, picks: List[RosterPick]):
        """Validate candidate picks, then replace the roster's picks."""
        result = self.validator.validate(picks, self.bouts, partial=True)
        if not result.valid:
            logger.warning(
                "Roster %s: rejected change: %s",
                self.roster.roster_id,
                "; ".join(result.violations),
            )
            raise PickError("; ".join(result.violations))

        self.roster.picks = picks
        self._save()

    def _bout_cancelled(self, bout_id: str) -> bool:
        for bout in self.bouts:
            if bout.bout_id == bout_id:
                return bout.status == BOUT_CANCELLED
        return False

    def _save(self):
        if self.persistence is None:
            return
        if not self.persistence.roster_exists(self.roster.roster_id):
            self.persistence.create_roster(self.roster)
        elif self.persistence.load_roster(self.roster.roster_id).is_draft:
            self.persistence.update_roster(self.roster)
