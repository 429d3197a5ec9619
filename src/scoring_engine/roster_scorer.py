"""Roster totals from per-pick fighter scores."""

import dataclasses
import logging
from typing import Dict, Iterable, List, Optional

from src.catalog_pipeline.catalog_store import CatalogStore
from src.catalog_pipeline.models import Event, Outcome
from src.roster_manager.roster_state import LeagueSettings, Roster
from src.scoring_engine.fighter_scorer import FighterScorer
from src.scoring_engine.models import FighterScore, RosterScore, ScoringRules

logger = logging.getLogger(__name__)


class RosterScorer:
    """Aggregates fighter scores into roster scores for one event.

    Missing data never aborts a batch: a pick whose competitor is not in
    the catalog, or whose bout has no outcome yet, scores zero.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        rules: Optional[ScoringRules] = None,
        league_settings: Optional[LeagueSettings] = None,
    ):
        self.catalog = catalog
        self.rules = rules or ScoringRules()
        self.league_settings = league_settings

    def score_roster(
        self,
        roster: Roster,
        outcomes: Iterable[Outcome],
        event: Optional[Event] = None,
    ) -> RosterScore:
        """Score every pick on a roster and apply the event multiplier once.

        Args:
            roster: Roster to score (not modified).
            outcomes: Outcomes processed so far for the event.
            event: The roster's event; defaults to a catalog lookup.

        Returns:
            RosterScore with one FighterScore per pick, in slot order.
        """
        if event is None:
            event = self.catalog.get_event(roster.event_id)
        settings = self._settings_for(roster, event)
        scorer = FighterScorer(self.rules, settings.boost_multiplier)
        by_competitor = self._outcomes_by_competitor(outcomes)

        fighter_scores: List[FighterScore] = []
        for pick in sorted(roster.picks, key=lambda p: p.slot):
            competitor = self.catalog.get_competitor(pick.competitor_id)
            outcome = by_competitor.get(pick.competitor_id)
            if competitor is None:
                logger.warning(
                    "Roster %s: competitor %s not in catalog; scoring zero",
                    roster.roster_id,
                    pick.competitor_id,
                )
                fighter_scores.append(FighterScore.zero(pick.competitor_id))
                continue
            if outcome is None:
                logger.debug(
                    "Roster %s: no outcome yet for %s",
                    roster.roster_id,
                    pick.competitor_id,
                )
                fighter_scores.append(FighterScore.zero(pick.competitor_id))
                continue

            bout = self.catalog.get_bout(outcome.bout_id)
            line = bout.line_for(pick.competitor_id) if bout else None
            fighter_scores.append(
                scorer.score_fighter(
                    outcome,
                    competitor,
                    is_boosted=pick.boosted and settings.allow_boost,
                    line=line,
                )
            )

        precision = self.rules.precision
        raw_total = round(sum(s.final_total for s in fighter_scores), precision)
        multiplier = settings.event_multiplier_for(event)

        return RosterScore(
            roster_id=roster.roster_id,
            user_id=roster.user_id,
            roster_name=roster.name,
            fighter_scores=fighter_scores,
            raw_total=raw_total,
            event_multiplier=multiplier,
            final_total=round(raw_total * multiplier, precision),
            submitted_at=roster.submitted_at,
        )

    def score_rosters(
        self,
        rosters: Iterable[Roster],
        outcomes: Iterable[Outcome],
        event: Optional[Event] = None,
    ) -> List[RosterScore]:
        """Score many rosters independently (unranked)."""
        outcomes = list(outcomes)
        return [self.score_roster(roster, outcomes, event) for roster in rosters]

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _settings_for(self, roster: Roster, event: Optional[Event]) -> LeagueSettings:
        if self.league_settings is not None:
            return self.league_settings
        if event is not None:
            return LeagueSettings.for_event(event, league_id=roster.league_id)
        return LeagueSettings(league_id=roster.league_id)

    def _outcomes_by_competitor(
        self, outcomes: Iterable[Outcome]
    ) -> Dict[str, Outcome]:
        """Index outcomes by every competitor in the bout.

        Catalog bouts name both sides even when the outcome has no winner,
        and a catalog title bout counts as a title fight.
        """
        index: Dict[str, Outcome] = {}
        for outcome in outcomes:
            bout = self.catalog.get_bout(outcome.bout_id)
            participants = list(outcome.participant_ids)
            if bout is not None:
                participants.extend(bout.competitor_ids)
                if bout.is_title_fight and not outcome.is_title_fight:
                    outcome = dataclasses.replace(outcome, is_title_fight=True)
            else:
                logger.warning("Outcome for unknown bout %s", outcome.bout_id)
            for competitor_id in participants:
                index[competitor_id] = outcome
        return index
