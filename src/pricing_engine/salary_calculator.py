"""Salary pricing from a competitor's profile and bout context.

Each competitor's salary is a weighted additive score built from five
factors, rounded to the nearest currency unit and clamped to the league's
salary bounds:

* **Ranking** - champion, then banded by divisional ranking.
* **Card position** - headliner, title bout, co-headliner, then card order.
* **Market line** - favorites price up, underdogs price down.
* **Form** - win rate with a finishing-rate bonus.
* **Recognition** - champions, pound-for-pound entrants and known names.
"""

import logging
import math
from typing import Optional

from src.catalog_pipeline.models import Bout, Competitor
from src.pricing_engine.models import PricedCompetitor, PricingRules, SalaryFactors

logger = logging.getLogger(__name__)


def _valid_rank(ranking: Optional[int]) -> Optional[int]:
    """A ranking below 1 counts as unranked."""
    if ranking is None or ranking < 1:
        return None
    return ranking


class SalaryCalculator:
    """Prices competitors for an event.

    The calculator is stateless and pure: identical inputs always produce
    the identical salary, so salaries frozen into earlier picks can be
    reproduced later.
    """

    def __init__(self, rules: Optional[PricingRules] = None):
        self.rules = rules or PricingRules()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def price(
        self,
        competitor: Competitor,
        bout: Bout,
        min_salary: Optional[int] = None,
        max_salary: Optional[int] = None,
    ) -> int:
        """Salary for *competitor* entered in *bout*.

        Args:
            competitor: Catalog competitor being priced.
            bout: The bout the competitor is entered in.
            min_salary: Lower bound override (defaults to the rules).
            max_salary: Upper bound override (defaults to the rules).

        Returns:
            Salary rounded to the rounding unit and clamped to the bounds.
        """
        factors = self.calculate_factors(competitor, bout)
        return self._finalize(factors, min_salary, max_salary)

    def price_competitor(
        self, competitor: Competitor, bout: Bout, event_id: Optional[str] = None
    ) -> PricedCompetitor:
        """Price a competitor and keep the per-factor breakdown."""
        factors = self.calculate_factors(competitor, bout)
        salary = self._finalize(factors)

        logger.debug(
            "Priced %s (%s) at %d: %s",
            competitor.name,
            competitor.competitor_id,
            salary,
            factors,
        )

        return PricedCompetitor(
            competitor_id=competitor.competitor_id,
            event_id=event_id or bout.event_id,
            bout_id=bout.bout_id,
            name=competitor.name,
            salary=salary,
            factors=factors,
        )

    def calculate_factors(self, competitor: Competitor, bout: Bout) -> SalaryFactors:
        return SalaryFactors(
            ranking=self._ranking_award(competitor),
            card_position=self._card_position_award(bout),
            market_line=self._market_line_award(bout.line_for(competitor.competitor_id)),
            form=self._form_award(competitor),
            recognition=self._recognition_award(competitor),
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _finalize(
        self,
        factors: SalaryFactors,
        min_salary: Optional[int] = None,
        max_salary: Optional[int] = None,
    ) -> int:
        """Add factors to the base, round half-up, then clamp."""
        rules = self.rules
        low = rules.min_salary if min_salary is None else min_salary
        high = rules.max_salary if max_salary is None else max_salary

        raw = rules.base_salary + factors.total
        unit = rules.rounding_unit
        rounded = int(math.floor(raw / unit + 0.5)) * unit
        return max(low, min(high, rounded))

    def _ranking_award(self, competitor: Competitor) -> int:
        rules = self.rules
        if competitor.is_champion:
            return rules.champion_award
        ranking = _valid_rank(competitor.ranking)
        if ranking is None:
            return rules.unranked_award
        for max_rank, award in rules.ranking_bands:
            if ranking <= max_rank:
                return award
        return rules.ranked_floor_award

    def _card_position_award(self, bout: Bout) -> int:
        rules = self.rules
        if bout.is_main_event:
            return rules.headliner_award
        if bout.is_title_fight:
            return rules.title_bout_award
        if bout.is_co_main:
            return rules.co_headliner_award

        position = bout.bout_order or 1
        for min_position, award in rules.card_position_bands:
            if position >= min_position:
                return award
        return rules.undercard_floor_award

    def _market_line_award(self, line: Optional[int]) -> int:
        """Favorites (negative lines) price up; underdogs price down."""
        rules = self.rules
        if line is None:
            return rules.neutral_line_award

        for threshold, award in rules.favorite_line_bands:
            if line <= threshold:
                return award
        for threshold, award in rules.underdog_line_bands:
            if line < threshold:
                return award
        return rules.longshot_award

    def _form_award(self, competitor: Competitor) -> int:
        """Win-rate band plus finishing bonus; no award without a record."""
        rules = self.rules
        win_rate = competitor.win_rate
        if win_rate is None:
            return 0

        award = rules.poor_form_award
        for min_rate, band_award in rules.win_rate_bands:
            if win_rate >= min_rate:
                award = band_award
                break

        finish_rate = competitor.finish_rate
        for min_rate, bonus in rules.finish_rate_bands:
            if finish_rate >= min_rate:
                award += bonus
                break

        return award

    def _recognition_award(self, competitor: Competitor) -> int:
        rules = self.rules
        ranking = _valid_rank(competitor.ranking)
        if competitor.is_champion or _valid_rank(competitor.p4p_ranking) is not None:
            return rules.star_award
        if ranking is not None and ranking <= rules.contender_ranking:
            return rules.contender_award
        if competitor.nickname and competitor.record.wins >= rules.name_value_min_wins:
            return rules.name_value_award
        return rules.baseline_recognition_award
