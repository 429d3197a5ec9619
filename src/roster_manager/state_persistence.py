"""Roster persistence - save and load rosters to/from JSON files."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from src.roster_manager.config import ROSTERS_DIR, STATUS_DRAFT
from src.roster_manager.lifecycle import LifecycleError, RosterLockedError
from src.roster_manager.roster_state import Roster, RosterPick

logger = logging.getLogger(__name__)


def _to_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _from_iso(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


class RosterPersistence:
    """Stores one JSON file per roster.

    The store enforces the lock rule itself: once a roster has left draft on
    disk, user updates and deletes are rejected. Only scoring results can
    still be written to it.
    """

    def __init__(self, storage_dir: Optional[Path] = None):
        self.storage_dir = storage_dir or ROSTERS_DIR
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def create_roster(self, roster: Roster) -> Path:
        """Persist a new roster.

        Raises:
            ValueError: If a roster with the same id already exists.
        """
        filepath = self._path(roster.roster_id)
        if filepath.exists():
            raise ValueError(f"Roster {roster.roster_id} already exists")

        self._write(roster)
        logger.info(
            "Created roster %s for user %s (event %s)",
            roster.roster_id,
            roster.user_id,
            roster.event_id,
        )
        return filepath

    def roster_exists(self, roster_id: str) -> bool:
        return self._path(roster_id).exists()

    def load_roster(self, roster_id: str) -> Optional[Roster]:
        """Load a roster by id.

        Returns:
            Roster if found, None otherwise.
        """
        filepath = self._path(roster_id)
        if not filepath.exists():
            logger.warning("Roster file not found: %s", filepath)
            return None

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt roster file %s: %s", filepath, e)
            return None

        return self._dict_to_roster(data)

    def update_roster(self, roster: Roster) -> Path:
        """Overwrite a draft roster.

        The write that moves a stored draft to locked goes through here too.

        Raises:
            KeyError: If the roster has never been created.
            RosterLockedError: If the stored roster is no longer a draft.
        """
        stored = self._require(roster.roster_id)
        if stored.status != STATUS_DRAFT:
            logger.warning(
                "Rejected update to %s roster %s", stored.status, roster.roster_id
            )
            raise RosterLockedError(
                roster.roster_id,
                f"Roster {roster.roster_id} is {stored.status} and can no longer be changed",
            )
        return self._write(roster)

    def record_score(self, roster: Roster) -> Path:
        """Write scoring fields (status, points, rank) onto a stored roster.

        Picks are always kept from the stored copy.

        Raises:
            KeyError: If the roster has never been created.
            LifecycleError: If the stored roster is still a draft.
        """
        stored = self._require(roster.roster_id)
        if stored.status == STATUS_DRAFT:
            raise LifecycleError(
                f"Cannot record a score for draft roster {roster.roster_id}"
            )

        stored.status = roster.status
        stored.locked_at = roster.locked_at or stored.locked_at
        stored.scored_at = roster.scored_at
        stored.total_points = roster.total_points
        stored.rank = roster.rank
        return self._write(stored)

    def list_rosters(
        self,
        event_id: Optional[str] = None,
        league_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> List[Roster]:
        """All stored rosters matching the given filters, oldest first."""
        rosters = []
        for filepath in self.storage_dir.glob("roster_*.json"):
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    roster = self._dict_to_roster(json.load(f))
            except (json.JSONDecodeError, OSError, KeyError, ValueError) as e:
                logger.warning("Skipping corrupt roster file %s: %s", filepath, e)
                continue

            if event_id is not None and roster.event_id != event_id:
                continue
            if league_id is not None and roster.league_id != league_id:
                continue
            if user_id is not None and roster.user_id != user_id:
                continue
            rosters.append(roster)

        return sorted(
            rosters,
            key=lambda r: (r.created_at.isoformat() if r.created_at else "", r.roster_id),
        )

    def delete_roster(self, roster_id: str) -> bool:
        """Delete a draft roster.

        Returns:
            True if deleted, False if not found.

        Raises:
            RosterLockedError: If the roster is locked or scored.
        """
        stored = self.load_roster(roster_id)
        if stored is None:
            return False
        if stored.status != STATUS_DRAFT:
            raise RosterLockedError(roster_id)

        self._path(roster_id).unlink()
        logger.info("Deleted roster %s", roster_id)
        return True

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _path(self, roster_id: str) -> Path:
        return self.storage_dir / f"roster_{roster_id}.json"

    def _require(self, roster_id: str) -> Roster:
        stored = self.load_roster(roster_id)
        if stored is None:
            raise KeyError(f"Roster {roster_id} not found")
        return stored

    def _write(self, roster: Roster) -> Path:
        filepath = self._path(roster.roster_id)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self._roster_to_dict(roster), f, indent=2)
        logger.debug("Saved roster %s (%s) to %s", roster.roster_id, roster.status, filepath)
        return filepath

    def _roster_to_dict(self, roster: Roster) -> Dict:
        """Convert Roster to JSON-serializable dict."""
        return {
            "roster_id": roster.roster_id,
            "user_id": roster.user_id,
            "league_id": roster.league_id,
            "event_id": roster.event_id,
            "name": roster.name,
            "picks": [
                {
                    "competitor_id": pick.competitor_id,
                    "salary": pick.salary,
                    "slot": pick.slot,
                    "boosted": pick.boosted,
                }
                for pick in roster.picks
            ],
            "status": roster.status,
            "created_at": _to_iso(roster.created_at),
            "submitted_at": _to_iso(roster.submitted_at),
            "locked_at": _to_iso(roster.locked_at),
            "scored_at": _to_iso(roster.scored_at),
            "total_points": roster.total_points,
            "rank": roster.rank,
        }

    def _dict_to_roster(self, data: Dict) -> Roster:
        """Reconstruct Roster from dict."""
        picks = [
            RosterPick(
                competitor_id=pd["competitor_id"],
                salary=pd["salary"],
                slot=pd["slot"],
                boosted=pd.get("boosted", False),
            )
            for pd in data.get("picks", [])
        ]

        return Roster(
            roster_id=data["roster_id"],
            user_id=data["user_id"],
            league_id=data["league_id"],
            event_id=data["event_id"],
            name=data.get("name", ""),
            picks=picks,
            status=data.get("status", STATUS_DRAFT),
            created_at=_from_iso(data.get("created_at")),
            submitted_at=_from_iso(data.get("submitted_at")),
            locked_at=_from_iso(data.get("locked_at")),
            scored_at=_from_iso(data.get("scored_at")),
            total_points=data.get("total_points"),
            rank=data.get("rank"),
        )
