"""Fantasy points for one competitor from one bout outcome.

Points are accumulated in a fixed order:

1. Base - participation, plus the win or loss award (none on a draw or
   no contest).
2. Finish bonus (winners) - by method category.
3. Round bonus (stoppage and submission winners) - by ending round.
4. Title bonus (winners of a title fight).
5. Performance points (both competitors) - from fight stats and awards.
6. Penalties - weight miss, point deductions, disqualification loss.

The sum is the raw total, which is then multiplied by the underdog
multiplier (winners with a positive line only) and the boost multiplier.
"""

import logging
from typing import Dict, Optional

from src.catalog_pipeline.models import (
    DECISION,
    DISQUALIFICATION,
    STOPPAGE,
    SUBMISSION,
    Competitor,
    FightStats,
    Outcome,
)
from src.roster_manager.config import DEFAULT_BOOST_MULTIPLIER
from src.scoring_engine.models import FighterScore, ScoringRules

logger = logging.getLogger(__name__)


class FighterScorer:
    """Scores competitors against outcomes.

    Scores are always recomputed from the outcome; scoring the same inputs
    twice yields identical results.
    """

    def __init__(
        self,
        rules: Optional[ScoringRules] = None,
        boost_multiplier: float = DEFAULT_BOOST_MULTIPLIER,
    ):
        self.rules = rules or ScoringRules()
        self.boost_multiplier = boost_multiplier

    def score_fighter(
        self,
        outcome: Outcome,
        competitor: Competitor,
        stats: Optional[FightStats] = None,
        is_boosted: bool = False,
        line: Optional[int] = None,
    ) -> FighterScore:
        """Score one competitor for one outcome.

        Args:
            outcome: Result of the competitor's bout.
            competitor: The competitor being scored.
            stats: Performance stats; defaults to the outcome's stats for
                this competitor.
            is_boosted: Whether the pick is boosted on the roster.
            line: The competitor's betting line, for the underdog multiplier.

        Returns:
            FighterScore with every component and an itemised breakdown.
        """
        rules = self.rules
        competitor_id = competitor.competitor_id
        if stats is None:
            stats = outcome.stats_for(competitor_id)

        category = outcome.method_category
        is_winner = outcome.has_winner and outcome.winner_id == competitor_id
        is_loser = outcome.has_winner and not is_winner

        breakdown: Dict[str, float] = {"participation": rules.participation}
        base = rules.participation
        if is_winner:
            breakdown["win"] = rules.win
            base += rules.win
        elif is_loser:
            breakdown["loss"] = rules.loss
            base += rules.loss

        finish_bonus = 0.0
        round_bonus = 0.0
        title_bonus = 0.0
        if is_winner:
            finish_bonus = self._finish_bonus(category, breakdown)
            if category is not None and category != DECISION:
                round_bonus = rules.round_bonus_for(outcome.round)
                if round_bonus:
                    breakdown["round_finish"] = round_bonus
            if outcome.is_title_fight:
                title_bonus = rules.title_fight_win_bonus
                breakdown["title_fight_bonus"] = title_bonus

        performance = self._performance_points(outcome, competitor_id, stats, breakdown)
        dq_loss = is_loser and category == DISQUALIFICATION
        penalties = self._penalties(stats, dq_loss, breakdown)

        raw_total = (
            base + finish_bonus + round_bonus + title_bonus + performance + penalties
        )
        underdog = rules.underdog_multiplier_for(line) if is_winner else 1.0
        boost = self.boost_multiplier if is_boosted else 1.0
        final_total = raw_total * underdog * boost

        precision = rules.precision
        score = FighterScore(
            competitor_id=competitor_id,
            bout_id=outcome.bout_id,
            base_points=round(base, precision),
            finish_bonus=round(finish_bonus, precision),
            round_bonus=round(round_bonus, precision),
            title_bonus=round(title_bonus, precision),
            performance_points=round(performance, precision),
            penalties=round(penalties, precision),
            underdog_multiplier=underdog,
            boost_multiplier=boost,
            raw_total=round(raw_total, precision),
            final_total=round(final_total, precision),
            breakdown={k: round(v, precision) for k, v in breakdown.items()},
        )
        logger.debug(
            "Scored %s in bout %s: raw %.2f x %.2f x %.2f = %.2f",
            competitor_id,
            outcome.bout_id,
            score.raw_total,
            underdog,
            boost,
            score.final_total,
        )
        return score

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _finish_bonus(
        self, category: Optional[str], breakdown: Dict[str, float]
    ) -> float:
        rules = self.rules
        if category == STOPPAGE:
            breakdown["ko_tko"] = rules.ko_tko_bonus
            return rules.ko_tko_bonus
        if category == SUBMISSION:
            breakdown["submission"] = rules.submission_bonus
            return rules.submission_bonus
        if category == DECISION:
            breakdown["decision"] = rules.decision_bonus
            return rules.decision_bonus
        return 0.0

    def _performance_points(
        self,
        outcome: Outcome,
        competitor_id: str,
        stats: FightStats,
        breakdown: Dict[str, float],
    ) -> float:
        rules = self.rules
        items: Dict[str, float] = {}

        if stats.knockdowns:
            items["knockdowns"] = stats.knockdowns * rules.knockdown
        if stats.significant_strikes:
            items["significant_strikes"] = min(
                stats.significant_strikes * rules.sig_strike, rules.sig_strike_cap
            )
        if stats.takedowns:
            items["takedowns"] = stats.takedowns * rules.takedown
        if stats.control_time_seconds:
            items["control_time"] = (
                stats.control_time_seconds / 60 * rules.control_per_minute
            )
        if stats.submission_attempts:
            items["submission_attempts"] = min(
                stats.submission_attempts * rules.submission_attempt,
                rules.submission_attempt_cap,
            )
        if competitor_id in outcome.performance_bonuses:
            items["performance_bonus"] = rules.performance_bonus
        if outcome.fight_of_the_night:
            items["fight_of_the_night"] = rules.fight_of_the_night

        breakdown.update(items)
        return sum(items.values())

    def _penalties(
        self, stats: FightStats, dq_loss: bool, breakdown: Dict[str, float]
    ) -> float:
        rules = self.rules
        items: Dict[str, float] = {}

        if stats.missed_weight:
            items["missed_weight"] = rules.missed_weight_penalty
        if stats.point_deductions:
            items["point_deductions"] = (
                stats.point_deductions * rules.point_deduction_penalty
            )
        if dq_loss:
            items["dq_loss"] = rules.dq_loss_penalty

        breakdown.update(items)
        return sum(items.values())
