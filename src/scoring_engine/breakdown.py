"""Labelled score breakdowns for display."""

from dataclasses import dataclass, field
from typing import List

from src.scoring_engine.models import FighterScore

# (breakdown key, display label) in display order
BREAKDOWN_LABELS = [
    ("participation", "Participation"),
    ("win", "Win"),
    ("loss", "Loss"),
    ("ko_tko", "KO/TKO Finish"),
    ("submission", "Submission Finish"),
    ("decision", "Decision Win"),
    ("round_finish", "Early Finish Bonus"),
    ("knockdowns", "Knockdowns"),
    ("significant_strikes", "Significant Strikes"),
    ("takedowns", "Takedowns"),
    ("control_time", "Control Time"),
    ("submission_attempts", "Submission Attempts"),
    ("performance_bonus", "Performance of the Night"),
    ("fight_of_the_night", "Fight of the Night"),
    ("title_fight_bonus", "Title Fight Win"),
    ("missed_weight", "Missed Weight"),
    ("point_deductions", "Point Deductions"),
    ("dq_loss", "DQ Loss"),
]


@dataclass(frozen=True)
class BreakdownItem:
    label: str
    points: float
    is_multiplier: bool = False


@dataclass(frozen=True)
class ScoringBreakdown:
    fighter_name: str
    total_points: float
    items: List[BreakdownItem] = field(default_factory=list)


def generate_scoring_breakdown(
    fighter_score: FighterScore, fighter_name: str
) -> ScoringBreakdown:
    """Line items for every non-zero award, then any multipliers above 1."""
    items = []
    for key, label in BREAKDOWN_LABELS:
        points = fighter_score.breakdown.get(key)
        if points:
            items.append(BreakdownItem(label, points))

    if fighter_score.underdog_multiplier > 1:
        items.append(
            BreakdownItem(
                f"Underdog Multiplier ({fighter_score.underdog_multiplier}x)",
                0,
                is_multiplier=True,
            )
        )
    if fighter_score.boost_multiplier > 1:
        items.append(
            BreakdownItem(
                f"Boost Multiplier ({fighter_score.boost_multiplier}x)",
                0,
                is_multiplier=True,
            )
        )

    return ScoringBreakdown(
        fighter_name=fighter_name,
        total_points=fighter_score.final_total,
        items=items,
    )
