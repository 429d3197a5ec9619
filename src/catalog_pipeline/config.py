from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
PROCESSED_DATA_DIR = DATA_DIR / "processed"

CATALOG_FILENAME = "catalog.json"

# Raw CSV exports expected in the data directory
FILE_PATTERNS = {
    "competitors": "competitors.csv",
    "bouts": "bouts.csv",
    "events": "events.csv",
}

COMPETITOR_COLUMNS = [
    "name", "nickname", "division", "ranking", "is_champion", "p4p_ranking",
    "wins", "losses", "draws", "no_contests",
    "ko_tko", "submissions", "decisions", "is_active",
]

BOUT_COLUMNS = [
    "bout_id", "event_id", "fighter_a", "fighter_b", "weight_class",
    "is_title_fight", "is_interim_title", "is_main_event", "is_co_main",
    "bout_order", "scheduled_rounds", "odds_a", "odds_b", "status",
]

EVENT_COLUMNS = ["event_id", "name", "event_type", "date_utc", "status"]

# Required columns per file; everything else is optional
REQUIRED_COLUMNS = {
    "competitors": {"name", "division", "wins", "losses"},
    "bouts": {"bout_id", "event_id", "fighter_a", "fighter_b"},
    "events": {"event_id", "name", "date_utc"},
}

# Integer record columns that default to 0 when blank
RECORD_COLUMNS = [
    "wins", "losses", "draws", "no_contests",
    "ko_tko", "submissions", "decisions",
]

# Event type labels -> event category
EVENT_TYPE_TO_CATEGORY = {
    "PPV": "marquee",
    "Special": "marquee",
    "Fight Night": "standard",
}
