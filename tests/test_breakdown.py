"""Tests for labelled score breakdowns."""

from src.catalog_pipeline.models import Competitor, FightStats, Outcome
from src.scoring_engine.breakdown import generate_scoring_breakdown
from src.scoring_engine.fighter_scorer import FighterScorer
from src.scoring_engine.models import FighterScore


def _score(**kwargs):
    outcome = Outcome(
        "bout_1",
        "KO/TKO",
        1,
        winner_id="fighter_w",
        loser_id="fighter_l",
        is_title_fight=True,
        stats={"fighter_w": FightStats(knockdowns=1)},
    )
    return FighterScorer().score_fighter(
        outcome, Competitor("fighter_w", "Winner", "Welterweight"), **kwargs
    )


class TestGenerateScoringBreakdown:
    def test_items_in_display_order(self):
        breakdown = generate_scoring_breakdown(_score(), "Winner")
        labels = [item.label for item in breakdown.items]
        assert labels == [
            "Participation",
            "Win",
            "KO/TKO Finish",
            "Early Finish Bonus",
            "Knockdowns",
            "Title Fight Win",
        ]
        assert breakdown.total_points == 40
        assert breakdown.fighter_name == "Winner"

    def test_multiplier_rows(self):
        breakdown = generate_scoring_breakdown(_score(is_boosted=True, line=250), "Winner")
        multipliers = [item for item in breakdown.items if item.is_multiplier]
        assert [m.label for m in multipliers] == [
            "Underdog Multiplier (1.2x)",
            "Boost Multiplier (1.5x)",
        ]
        assert all(m.points == 0 for m in multipliers)
        assert breakdown.total_points == 72

    def test_pending_pick_has_no_items(self):
        breakdown = generate_scoring_breakdown(FighterScore.zero("fighter_w"), "Winner")
        assert breakdown.items == []
        assert breakdown.total_points == 0
