"""Read-only catalog store - competitors, bouts and events by id."""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from src.catalog_pipeline.models import Bout, Competitor, Event

logger = logging.getLogger(__name__)


class CatalogStore:
    """In-memory catalog keyed by id.

    Lookups return ``None`` for unknown ids so callers can degrade instead
    of aborting a whole batch.
    """

    def __init__(
        self,
        competitors: Iterable[Competitor] = (),
        bouts: Iterable[Bout] = (),
        events: Iterable[Event] = (),
    ):
        self.competitors: Dict[str, Competitor] = {
            c.competitor_id: c for c in competitors
        }
        self.bouts: Dict[str, Bout] = {b.bout_id: b for b in bouts}
        self.events: Dict[str, Event] = {e.event_id: e for e in events}

    def get_competitor(self, competitor_id: str) -> Optional[Competitor]:
        return self.competitors.get(competitor_id)

    def get_bout(self, bout_id: str) -> Optional[Bout]:
        return self.bouts.get(bout_id)

    def get_event(self, event_id: str) -> Optional[Event]:
        return self.events.get(event_id)

    def get_bouts_for_event(self, event_id: str) -> List[Bout]:
        """Bouts for an event, in card order when the event lists one."""
        event = self.events.get(event_id)
        if event and event.bout_ids:
            ordered = [self.bouts[bid] for bid in event.bout_ids if bid in self.bouts]
            listed = set(event.bout_ids)
            extras = [
                b for b in self.bouts.values()
                if b.event_id == event_id and b.bout_id not in listed
            ]
            return ordered + extras
        return [b for b in self.bouts.values() if b.event_id == event_id]

    def get_competitors_for_event(self, event_id: str) -> List[Competitor]:
        """Catalog competitors entered in any bout of the event."""
        competitors = []
        for bout in self.get_bouts_for_event(event_id):
            for cid in bout.competitor_ids:
                competitor = self.competitors.get(cid)
                if competitor is None:
                    logger.warning(
                        "Bout %s references unknown competitor %s", bout.bout_id, cid
                    )
                    continue
                competitors.append(competitor)
        return competitors

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict:
        return {
            "competitors": [c.to_dict() for c in self.competitors.values()],
            "bouts": [b.to_dict() for b in self.bouts.values()],
            "events": [e.to_dict() for e in self.events.values()],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "CatalogStore":
        return cls(
            competitors=[Competitor.from_dict(c) for c in data.get("competitors", [])],
            bouts=[Bout.from_dict(b) for b in data.get("bouts", [])],
            events=[Event.from_dict(e) for e in data.get("events", [])],
        )

    @classmethod
    def from_json_file(cls, filepath: Path) -> "CatalogStore":
        """Load a catalog written by the catalog pipeline."""
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)

        store = cls.from_dict(data.get("catalog", data))
        logger.info(
            "Loaded catalog from %s: %d competitors, %d bouts, %d events",
            filepath,
            len(store.competitors),
            len(store.bouts),
            len(store.events),
        )
        return store
