"""Data models for the salary pricing engine."""

from dataclasses import asdict, dataclass, field
from typing import Dict, Tuple

from src.pricing_engine import config


@dataclass(frozen=True)
class PricingRules:
    """Salary pricing rule set.

    Defaults come from :mod:`src.pricing_engine.config`; pass a custom
    instance to price a league or season with different bands.
    """

    base_salary: int = config.BASE_SALARY
    min_salary: int = config.MIN_SALARY
    max_salary: int = config.MAX_SALARY
    rounding_unit: int = config.SALARY_ROUNDING_UNIT

    champion_award: int = config.CHAMPION_AWARD
    ranking_bands: Tuple[Tuple[int, int], ...] = config.RANKING_BANDS
    ranked_floor_award: int = config.RANKED_FLOOR_AWARD
    unranked_award: int = config.UNRANKED_AWARD

    headliner_award: int = config.HEADLINER_AWARD
    title_bout_award: int = config.TITLE_BOUT_AWARD
    co_headliner_award: int = config.CO_HEADLINER_AWARD
    card_position_bands: Tuple[Tuple[int, int], ...] = config.CARD_POSITION_BANDS
    undercard_floor_award: int = config.UNDERCARD_FLOOR_AWARD

    favorite_line_bands: Tuple[Tuple[int, int], ...] = config.FAVORITE_LINE_BANDS
    underdog_line_bands: Tuple[Tuple[int, int], ...] = config.UNDERDOG_LINE_BANDS
    longshot_award: int = config.LONGSHOT_AWARD
    neutral_line_award: int = config.NEUTRAL_LINE_AWARD

    win_rate_bands: Tuple[Tuple[float, int], ...] = config.WIN_RATE_BANDS
    poor_form_award: int = config.POOR_FORM_AWARD
    finish_rate_bands: Tuple[Tuple[float, int], ...] = config.FINISH_RATE_BANDS

    star_award: int = config.STAR_AWARD
    contender_award: int = config.CONTENDER_AWARD
    contender_ranking: int = config.CONTENDER_RANKING
    name_value_award: int = config.NAME_VALUE_AWARD
    name_value_min_wins: int = config.NAME_VALUE_MIN_WINS
    baseline_recognition_award: int = config.BASELINE_RECOGNITION_AWARD

    def __post_init__(self):
        if self.min_salary > self.max_salary:
            raise ValueError(
                f"min_salary ({self.min_salary}) must not exceed "
                f"max_salary ({self.max_salary})"
            )
        if self.rounding_unit <= 0:
            raise ValueError("rounding_unit must be positive")

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class SalaryFactors:
    """Award contributed by each pricing factor (before rounding/clamping)."""

    ranking: int = 0
    card_position: int = 0
    market_line: int = 0
    form: int = 0
    recognition: int = 0

    @property
    def total(self) -> int:
        return (
            self.ranking
            + self.card_position
            + self.market_line
            + self.form
            + self.recognition
        )


@dataclass(frozen=True)
class PricedCompetitor:
    """A competitor annotated with a salary for one event."""

    competitor_id: str
    event_id: str
    bout_id: str
    name: str
    salary: int
    factors: SalaryFactors = field(default_factory=SalaryFactors)

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "PricedCompetitor":
        return cls(
            competitor_id=data["competitor_id"],
            event_id=data["event_id"],
            bout_id=data["bout_id"],
            name=data.get("name", ""),
            salary=data["salary"],
            factors=SalaryFactors(**data.get("factors", {})),
        )
