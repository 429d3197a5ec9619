# Base points
PARTICIPATION_POINTS = 2
WIN_POINTS = 10
LOSS_POINTS = -5

# Finish bonuses (winners only)
KO_TKO_BONUS = 12
SUBMISSION_BONUS = 12
DECISION_BONUS = 6

# Early finish bonus by ending round (stoppage and submission wins only)
ROUND_BONUSES = (
    (1, 8),
    (2, 6),
    (3, 4),
    (4, 3),
    (5, 2),
)

TITLE_FIGHT_WIN_BONUS = 5

# Performance points (both competitors)
KNOCKDOWN_POINTS = 3
SIG_STRIKE_POINTS = 0.1
SIG_STRIKE_CAP = 10
TAKEDOWN_POINTS = 2
CONTROL_POINTS_PER_MINUTE = 1
SUBMISSION_ATTEMPT_POINTS = 2
SUBMISSION_ATTEMPT_CAP = 6
PERFORMANCE_BONUS_POINTS = 7.5
FIGHT_OF_THE_NIGHT_POINTS = 5

# Penalties
MISSED_WEIGHT_PENALTY = -3
POINT_DEDUCTION_PENALTY = -2
DQ_LOSS_PENALTY = -10

# Underdog multiplier tiers: (line at or above, multiplier)
UNDERDOG_MULTIPLIERS = (
    (200, 1.2),
    (400, 1.5),
)

# Decimal places kept on point totals
SCORE_PRECISION = 2
