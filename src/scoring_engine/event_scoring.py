"""Event scoring - turns an outcome batch into stored, ranked roster scores."""

import logging
from typing import Dict, Iterable, List, Optional

from src.catalog_pipeline.catalog_store import CatalogStore
from src.catalog_pipeline.models import BOUT_CANCELLED, Event, Outcome
from src.catalog_pipeline.outcome_ingestion import parse_outcomes
from src.roster_manager.lifecycle import Clock, RosterLifecycle, SystemClock
from src.roster_manager.roster_state import LeagueSettings, Roster
from src.roster_manager.state_persistence import RosterPersistence
from src.scoring_engine.leaderboard import rank_rosters
from src.scoring_engine.models import RosterScore, ScoringRules
from src.scoring_engine.roster_scorer import RosterScorer

logger = logging.getLogger(__name__)


class EventScoringService:
    """Scores every roster entered in an event.

    Processing is a full recompute each time, so re-running it over the same
    outcomes overwrites stored scores with identical values.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        persistence: RosterPersistence,
        rules: Optional[ScoringRules] = None,
        clock: Optional[Clock] = None,
        league_settings: Optional[LeagueSettings] = None,
    ):
        self.catalog = catalog
        self.persistence = persistence
        self.rules = rules or ScoringRules()
        self.clock = clock or SystemClock()
        self.league_settings = league_settings

    def process_results(self, event_id: str, records: List[Dict]) -> List[RosterScore]:
        """Validate an uploaded outcome batch and score the event.

        Raises:
            MalformedOutcomeError: If any record is malformed; nothing is scored.
            KeyError: If the event is not in the catalog.
        """
        outcomes = parse_outcomes(records, event_id=event_id)
        return self.score_event(event_id, outcomes)

    def score_event(self, event_id: str, outcomes: Iterable[Outcome]) -> List[RosterScore]:
        """Score all locked rosters of an event and store the results.

        Rosters are marked scored once every non-cancelled bout of the event
        has an outcome; until then scores are stored on locked rosters.

        Returns:
            Ranked roster scores.
        """
        event = self.catalog.get_event(event_id)
        if event is None:
            raise KeyError(f"Event {event_id} not in catalog")

        outcomes = self._outcomes_for_event(event, outcomes)
        complete = self.is_fully_processed(event, outcomes)

        rosters: Dict[str, Roster] = {}
        scores: List[RosterScore] = []
        for roster in self.persistence.list_rosters(event_id=event_id):
            settings = self._settings_for(roster, event)
            lifecycle = RosterLifecycle(self.clock, settings)
            if lifecycle.refresh(roster, event.start_time):
                self.persistence.update_roster(roster)
            if roster.is_draft:
                logger.warning(
                    "Skipping roster %s: still a draft before lock", roster.roster_id
                )
                continue

            scorer = RosterScorer(self.catalog, self.rules, settings)
            scores.append(scorer.score_roster(roster, outcomes, event))
            rosters[roster.roster_id] = roster

        ranked = rank_rosters(scores)
        lifecycle = RosterLifecycle(self.clock)
        for score in ranked:
            roster = rosters[score.roster_id]
            roster.total_points = score.final_total
            roster.rank = score.rank
            if complete:
                lifecycle.mark_scored(roster)
            self.persistence.record_score(roster)

        logger.info(
            "Scored %d roster(s) for event %s from %d outcome(s)%s",
            len(ranked),
            event_id,
            len(outcomes),
            "" if complete else " (partial card)",
        )
        return ranked

    def is_fully_processed(self, event: Event, outcomes: Iterable[Outcome]) -> bool:
        """True when every non-cancelled bout of the event has an outcome."""
        processed = {o.bout_id for o in outcomes}
        return all(
            bout.bout_id in processed
            for bout in self.catalog.get_bouts_for_event(event.event_id)
            if bout.status != BOUT_CANCELLED
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _outcomes_for_event(
        self, event: Event, outcomes: Iterable[Outcome]
    ) -> List[Outcome]:
        kept = []
        for outcome in outcomes:
            bout = self.catalog.get_bout(outcome.bout_id)
            if bout is None:
                logger.warning("Ignoring outcome for unknown bout %s", outcome.bout_id)
                continue
            if bout.event_id != event.event_id:
                logger.warning(
                    "Ignoring outcome for bout %s from event %s",
                    outcome.bout_id,
                    bout.event_id,
                )
                continue
            kept.append(outcome)
        return kept

    def _settings_for(self, roster: Roster, event: Event) -> LeagueSettings:
        if self.league_settings is not None:
            return self.league_settings
        return LeagueSettings.for_event(event, league_id=roster.league_id)
