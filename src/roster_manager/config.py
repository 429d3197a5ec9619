from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
ROSTERS_DIR = PROJECT_ROOT / "data" / "rosters"

# Default league settings (global league for an event)
DEFAULT_BUDGET = 10000
DEFAULT_ROSTER_SIZE = 5
DEFAULT_MAX_FROM_SAME_BOUT = 1
DEFAULT_LOCK_LEAD_MINUTES = 15
DEFAULT_ALLOW_BOOST = True
DEFAULT_BOOST_MULTIPLIER = 1.5
DEFAULT_EVENT_MULTIPLIER = 1.5

# Roster lifecycle
STATUS_DRAFT = "draft"
STATUS_LOCKED = "locked"
STATUS_SCORED = "scored"
VALID_STATUSES = {STATUS_DRAFT, STATUS_LOCKED, STATUS_SCORED}
