from src.roster_manager.lifecycle import (
    Clock,
    FixedClock,
    LifecycleError,
    RosterLifecycle,
    RosterLockedError,
    SystemClock,
    format_time_until_lock,
)
from src.roster_manager.roster_controller import PickError, RosterController
from src.roster_manager.roster_state import LeagueSettings, Roster, RosterPick
from src.roster_manager.roster_validator import (
    RosterValidator,
    ValidationResult,
    validate_roster,
)
from src.roster_manager.state_persistence import RosterPersistence

__all__ = [
    "Clock",
    "FixedClock",
    "LeagueSettings",
    "LifecycleError",
    "PickError",
    "Roster",
    "RosterController",
    "RosterLifecycle",
    "RosterLockedError",
    "RosterPersistence",
    "RosterPick",
    "RosterValidator",
    "SystemClock",
    "ValidationResult",
    "format_time_until_lock",
    "validate_roster",
]
