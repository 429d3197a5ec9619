"""Data models for the scoring engine."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from src.scoring_engine import config


@dataclass(frozen=True)
class ScoringRules:
    """Fantasy point rule set.

    Defaults come from :mod:`src.scoring_engine.config`; pass a custom
    instance to score a league or season differently.
    """

    participation: float = config.PARTICIPATION_POINTS
    win: float = config.WIN_POINTS
    loss: float = config.LOSS_POINTS

    ko_tko_bonus: float = config.KO_TKO_BONUS
    submission_bonus: float = config.SUBMISSION_BONUS
    decision_bonus: float = config.DECISION_BONUS
    round_bonuses: Tuple[Tuple[int, float], ...] = config.ROUND_BONUSES
    title_fight_win_bonus: float = config.TITLE_FIGHT_WIN_BONUS

    knockdown: float = config.KNOCKDOWN_POINTS
    sig_strike: float = config.SIG_STRIKE_POINTS
    sig_strike_cap: float = config.SIG_STRIKE_CAP
    takedown: float = config.TAKEDOWN_POINTS
    control_per_minute: float = config.CONTROL_POINTS_PER_MINUTE
    submission_attempt: float = config.SUBMISSION_ATTEMPT_POINTS
    submission_attempt_cap: float = config.SUBMISSION_ATTEMPT_CAP
    performance_bonus: float = config.PERFORMANCE_BONUS_POINTS
    fight_of_the_night: float = config.FIGHT_OF_THE_NIGHT_POINTS

    missed_weight_penalty: float = config.MISSED_WEIGHT_PENALTY
    point_deduction_penalty: float = config.POINT_DEDUCTION_PENALTY
    dq_loss_penalty: float = config.DQ_LOSS_PENALTY

    underdog_multipliers: Tuple[Tuple[int, float], ...] = config.UNDERDOG_MULTIPLIERS
    precision: int = config.SCORE_PRECISION

    def round_bonus_for(self, round_number: int) -> float:
        """Early-finish award for a round (0 beyond the table)."""
        return dict(self.round_bonuses).get(round_number, 0)

    def underdog_multiplier_for(self, line: Optional[int]) -> float:
        """Highest tier whose threshold the line meets; 1.0 for favorites."""
        if line is None or line <= 0:
            return 1.0
        multiplier = 1.0
        for threshold, tier_multiplier in sorted(self.underdog_multipliers):
            if line >= threshold:
                multiplier = tier_multiplier
        return multiplier

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class FighterScore:
    """Point decomposition for one pick in one roster."""

    competitor_id: str
    bout_id: Optional[str] = None
    base_points: float = 0.0
    finish_bonus: float = 0.0
    round_bonus: float = 0.0
    title_bonus: float = 0.0
    performance_points: float = 0.0
    penalties: float = 0.0
    underdog_multiplier: float = 1.0
    boost_multiplier: float = 1.0
    raw_total: float = 0.0
    final_total: float = 0.0
    breakdown: Dict[str, float] = field(default_factory=dict)
    has_outcome: bool = True

    @classmethod
    def zero(cls, competitor_id: str, bout_id: Optional[str] = None) -> "FighterScore":
        """Score for a pick whose bout has not been processed."""
        return cls(competitor_id=competitor_id, bout_id=bout_id, has_outcome=False)

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class RosterScore:
    """A roster's total for one event, with its leaderboard position."""

    roster_id: str
    user_id: str
    fighter_scores: List[FighterScore] = field(default_factory=list)
    raw_total: float = 0.0
    event_multiplier: float = 1.0
    final_total: float = 0.0
    submitted_at: Optional[datetime] = None
    rank: Optional[int] = None
    tied: bool = False
    roster_name: str = ""

    @property
    def sort_key(self) -> Tuple:
        """Higher total first, then earlier submission; unsubmitted last."""
        if self.submitted_at is None:
            return (-self.final_total, 1, 0.0)
        return (-self.final_total, 0, self.submitted_at.timestamp())

    def to_dict(self) -> Dict:
        return {
            "roster_id": self.roster_id,
            "user_id": self.user_id,
            "roster_name": self.roster_name,
            "fighter_scores": [s.to_dict() for s in self.fighter_scores],
            "raw_total": self.raw_total,
            "event_multiplier": self.event_multiplier,
            "final_total": self.final_total,
            "submitted_at": self.submitted_at.isoformat() if self.submitted_at else None,
            "rank": self.rank,
            "tied": self.tied,
        }
