"""Roster validation against league rules.

Validation never raises: every rule is checked independently and all
violations are returned together so a roster builder can show them at once.
"""

from typing import Dict, Iterable, List, NamedTuple, Sequence

from src.catalog_pipeline.models import Bout
from src.roster_manager.roster_state import LeagueSettings, RosterPick


class ValidationResult(NamedTuple):
    """``(valid, violations)`` - unpacks like a tuple."""

    valid: bool
    violations: List[str]


class RosterValidator:
    """Validates candidate picks against a league's settings."""

    def __init__(self, league_settings: LeagueSettings):
        self.league_settings = league_settings

    def validate(
        self,
        picks: Sequence[RosterPick],
        bouts: Iterable[Bout],
        partial: bool = False,
    ) -> ValidationResult:
        """
        Check cardinality, budget, uniqueness, same-bout exclusivity and boosts.

        Args:
            picks: Candidate picks.
            bouts: Bouts of the roster's event.
            partial: Treat the roster as still being built, so only
                exceeding the roster size is a cardinality violation.

        Returns:
            ValidationResult(valid, violations)
        """
        violations: List[str] = []
        violations.extend(self._check_cardinality(picks, partial))
        violations.extend(self._check_budget(picks))
        violations.extend(self._check_uniqueness(picks))
        violations.extend(self._check_same_bout(picks, bouts))
        violations.extend(self._check_boosts(picks))
        return ValidationResult(len(violations) == 0, violations)

    def get_roster_summary(self, picks: Sequence[RosterPick]) -> Dict:
        """Budget and slot usage for a partially built roster."""
        settings = self.league_settings
        total_salary = sum(p.salary for p in picks)
        boosted = [p.competitor_id for p in picks if p.boosted]
        return {
            "picks": len(picks),
            "roster_size": settings.roster_size,
            "open_slots": max(0, settings.roster_size - len(picks)),
            "total_salary": total_salary,
            "budget": settings.budget,
            "remaining_budget": settings.budget - total_salary,
            "boosted": boosted[0] if boosted else None,
        }

    # ------------------------------------------------------------------
    # Individual checks
    # ------------------------------------------------------------------

    def _check_cardinality(
        self, picks: Sequence[RosterPick], partial: bool = False
    ) -> List[str]:
        size = self.league_settings.roster_size
        if partial and len(picks) <= size:
            return []
        if len(picks) != size:
            return [f"Roster must have exactly {size} competitors (has {len(picks)})"]
        return []

    def _check_budget(self, picks: Sequence[RosterPick]) -> List[str]:
        budget = self.league_settings.budget
        total = sum(p.salary for p in picks)
        if total > budget:
            return [
                f"Roster salary {total} exceeds budget of {budget} by {total - budget}"
            ]
        return []

    def _check_uniqueness(self, picks: Sequence[RosterPick]) -> List[str]:
        counts: Dict[str, int] = {}
        for pick in picks:
            counts[pick.competitor_id] = counts.get(pick.competitor_id, 0) + 1
        return [
            f"Competitor {cid} is picked {count} times"
            for cid, count in counts.items()
            if count > 1
        ]

    def _check_same_bout(
        self, picks: Sequence[RosterPick], bouts: Iterable[Bout]
    ) -> List[str]:
        """One violation per bout whose distinct picks exceed the limit."""
        bout_of: Dict[str, str] = {}
        for bout in bouts:
            for cid in bout.competitor_ids:
                bout_of[cid] = bout.bout_id

        picked_by_bout: Dict[str, List[str]] = {}
        for pick in picks:
            bout_id = bout_of.get(pick.competitor_id)
            if bout_id is None:
                continue
            picked = picked_by_bout.setdefault(bout_id, [])
            if pick.competitor_id not in picked:
                picked.append(pick.competitor_id)

        limit = self.league_settings.max_from_same_bout
        violations = []
        for bout_id, picked in picked_by_bout.items():
            if len(picked) > limit:
                violations.append(
                    f"Cannot select both competitors from bout {bout_id} "
                    f"({', '.join(picked)})"
                )
        return violations

    def _check_boosts(self, picks: Sequence[RosterPick]) -> List[str]:
        boosted = sum(1 for p in picks if p.boosted)
        if not self.league_settings.allow_boost:
            if boosted:
                return [f"Boosting is disabled in this league ({boosted} boosted)"]
            return []
        if boosted > 1:
            return [f"Only one pick can be boosted (found {boosted})"]
        return []


def validate_roster(
    picks: Sequence[RosterPick],
    league_settings: LeagueSettings,
    bouts: Iterable[Bout],
) -> ValidationResult:
    """Functional form of :meth:`RosterValidator.validate`."""
    return RosterValidator(league_settings).validate(picks, bouts)
