"""Per-event salary generation and storage.

Salaries are generated once per event and stored as JSON. They are only
regenerated when the pricing inputs (bouts, competitor profiles or pricing
rules) change, which is detected with a fingerprint of those inputs.
"""

import hashlib
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from src.catalog_pipeline.models import BOUT_CANCELLED, Bout, Competitor
from src.pricing_engine.config import SALARIES_DIR
from src.pricing_engine.models import PricedCompetitor
from src.pricing_engine.salary_calculator import SalaryCalculator

logger = logging.getLogger(__name__)


class SalaryService:
    """Generates, stores and reads priced competitor pools."""

    def __init__(
        self,
        calculator: Optional[SalaryCalculator] = None,
        storage_dir: Optional[Path] = None,
    ):
        self.calculator = calculator or SalaryCalculator()
        self.storage_dir = storage_dir or SALARIES_DIR
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def get_salaries(self, event_id: str) -> List[PricedCompetitor]:
        """Stored salaries for an event (empty list if none generated yet)."""
        data = self._read(event_id)
        if data is None:
            return []
        return [PricedCompetitor.from_dict(s) for s in data["salaries"]]

    def get_salary_map(self, event_id: str) -> Dict[str, int]:
        """Competitor id -> salary for an event."""
        return {p.competitor_id: p.salary for p in self.get_salaries(event_id)}

    def generate_salaries(
        self,
        event_id: str,
        bouts: Iterable[Bout],
        competitors: Iterable[Competitor],
        force: bool = False,
    ) -> List[PricedCompetitor]:
        """Price every competitor on the event's card and store the result.

        Cancelled bouts are skipped. Competitors referenced by a bout but
        missing from *competitors* are logged and skipped.

        Args:
            event_id: Event being priced.
            bouts: Bouts on the event's card.
            competitors: Catalog competitors (may include others).
            force: Regenerate even if stored salaries are current.

        Returns:
            Priced competitors in card order.
        """
        by_id = {c.competitor_id: c for c in competitors}
        card = [
            b for b in bouts
            if b.event_id == event_id and b.status != BOUT_CANCELLED
        ]

        fingerprint = self._fingerprint(card, by_id)
        stored = self._read(event_id)
        current = stored is not None and stored.get("fingerprint") == fingerprint
        if current and not force:
            logger.info("Salaries for event %s are current; reusing stored pool", event_id)
            return [PricedCompetitor.from_dict(s) for s in stored["salaries"]]

        priced: List[PricedCompetitor] = []
        for bout in card:
            for competitor_id in bout.competitor_ids:
                competitor = by_id.get(competitor_id)
                if competitor is None:
                    logger.warning(
                        "Skipping unknown competitor %s in bout %s",
                        competitor_id,
                        bout.bout_id,
                    )
                    continue
                priced.append(
                    self.calculator.price_competitor(competitor, bout, event_id)
                )

        self._write(event_id, fingerprint, priced)
        logger.info(
            "Generated %d salaries for event %s (%d bouts)",
            len(priced),
            event_id,
            len(card),
        )
        return priced

    # ------------------------------------------------------------------
    # Storage helpers
    # ------------------------------------------------------------------

    def _path(self, event_id: str) -> Path:
        return self.storage_dir / f"salaries_{event_id}.json"

    def _read(self, event_id: str) -> Optional[Dict]:
        filepath = self._path(event_id)
        if not filepath.exists():
            return None
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt salary file %s: %s", filepath, e)
            return None

    def _write(
        self, event_id: str, fingerprint: str, priced: List[PricedCompetitor]
    ) -> Path:
        filepath = self._path(event_id)
        payload = {
            "event_id": event_id,
            "fingerprint": fingerprint,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "salaries": [p.to_dict() for p in priced],
        }
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        return filepath

    def _fingerprint(self, card: List[Bout], by_id: Dict[str, Competitor]) -> str:
        """Hash of everything that can change a salary."""
        entered = sorted(
            {cid for bout in card for cid in bout.competitor_ids if cid in by_id}
        )
        inputs = {
            "rules": self.calculator.rules.to_dict(),
            "bouts": [b.to_dict() for b in card],
            "competitors": [by_id[cid].to_dict() for cid in entered],
        }
        encoded = json.dumps(inputs, sort_keys=True, default=str).encode("utf-8")
        return hashlib.sha256(encoded).hexdigest()
