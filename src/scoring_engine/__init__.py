from src.scoring_engine.breakdown import (
    BreakdownItem,
    ScoringBreakdown,
    generate_scoring_breakdown,
)
from src.scoring_engine.event_scoring import EventScoringService
from src.scoring_engine.fighter_scorer import FighterScorer
from src.scoring_engine.leaderboard import leaderboard_to_dataframe, rank_rosters
from src.scoring_engine.models import FighterScore, RosterScore, ScoringRules
from src.scoring_engine.roster_scorer import RosterScorer

__all__ = [
    "BreakdownItem",
    "EventScoringService",
    "FighterScore",
    "FighterScorer",
    "RosterScore",
    "RosterScorer",
    "ScoringBreakdown",
    "ScoringRules",
    "generate_scoring_breakdown",
    "leaderboard_to_dataframe",
    "rank_rosters",
]
