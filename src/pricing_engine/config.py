from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.parent
SALARIES_DIR = PROJECT_ROOT / "data" / "salaries"

# Salary bounds and rounding
BASE_SALARY = 5000
MIN_SALARY = 3500
MAX_SALARY = 12000
SALARY_ROUNDING_UNIT = 100

# 1. Ranking (champion > ranked bands > ranked outside bands > unranked)
CHAMPION_AWARD = 3500
RANKING_BANDS = (  # (ranking at or better than, award)
    (1, 3000),
    (3, 2500),
    (5, 2000),
    (10, 1200),
    (15, 700),
)
RANKED_FLOOR_AWARD = 300
UNRANKED_AWARD = 0

# 2. Card position
HEADLINER_AWARD = 1500
TITLE_BOUT_AWARD = 1300
CO_HEADLINER_AWARD = 1000
CARD_POSITION_BANDS = (  # (bout_order at or above, award)
    (10, 600),
    (5, 300),
)
UNDERCARD_FLOOR_AWARD = 100

# 3. Market line (American odds)
FAVORITE_LINE_BANDS = (  # (line at or below, award)
    (-300, 1500),
    (-200, 1000),
    (-150, 600),
    (-100, 300),
)
UNDERDOG_LINE_BANDS = (  # (line strictly below, award)
    (100, 0),
    (150, -300),
    (200, -600),
    (300, -1000),
)
LONGSHOT_AWARD = -1500
NEUTRAL_LINE_AWARD = 0

# 4. Form
WIN_RATE_BANDS = (  # (win rate at or above, award)
    (0.85, 800),
    (0.75, 600),
    (0.65, 400),
    (0.50, 200),
    (0.35, 0),
)
POOR_FORM_AWARD = -300
FINISH_RATE_BANDS = (
    (0.70, 500),
    (0.50, 250),
)

# 5. Recognition
STAR_AWARD = 500
CONTENDER_AWARD = 300
CONTENDER_RANKING = 5
NAME_VALUE_AWARD = 200
NAME_VALUE_MIN_WINS = 10
BASELINE_RECOGNITION_AWARD = 50
