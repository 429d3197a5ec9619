"""Tests for per-event salary generation and storage."""

import dataclasses
import json

from src.pricing_engine.models import PricingRules
from src.pricing_engine.salary_calculator import SalaryCalculator
from src.pricing_engine.salary_service import SalaryService


def _make_service(tmp_path, rules=None):
    calculator = SalaryCalculator(rules) if rules else None
    return SalaryService(calculator=calculator, storage_dir=tmp_path / "salaries")


class TestGenerateSalaries:
    def test_prices_every_active_competitor(self, tmp_path, sample_bouts, sample_competitors):
        service = _make_service(tmp_path)
        priced = service.generate_salaries("evt_300", sample_bouts, sample_competitors)

        ids = [p.competitor_id for p in priced]
        # Ten competitors across five bouts; the cancelled bout is skipped
        assert len(priced) == 10
        assert "fighter_k" not in ids
        assert "fighter_l" not in ids
        assert ids[:2] == ["fighter_a", "fighter_b"]

    def test_salaries_within_bounds(self, tmp_path, sample_bouts, sample_competitors):
        service = _make_service(tmp_path)
        for p in service.generate_salaries("evt_300", sample_bouts, sample_competitors):
            assert 3500 <= p.salary <= 12000
            assert p.event_id == "evt_300"

    def test_unknown_competitor_skipped(self, tmp_path, sample_bouts, sample_competitors):
        service = _make_service(tmp_path)
        known = [c for c in sample_competitors if c.competitor_id != "fighter_j"]
        priced = service.generate_salaries("evt_300", sample_bouts, known)
        assert len(priced) == 9

    def test_writes_json_file(self, tmp_path, sample_bouts, sample_competitors):
        service = _make_service(tmp_path)
        service.generate_salaries("evt_300", sample_bouts, sample_competitors)

        path = tmp_path / "salaries" / "salaries_evt_300.json"
        assert path.exists()
        data = json.loads(path.read_text())
        assert data["event_id"] == "evt_300"
        assert len(data["salaries"]) == 10
        assert "fingerprint" in data


class TestStoredSalaries:
    def test_get_salaries_round_trip(self, tmp_path, sample_bouts, sample_competitors):
        service = _make_service(tmp_path)
        priced = service.generate_salaries("evt_300", sample_bouts, sample_competitors)
        assert service.get_salaries("evt_300") == priced

    def test_get_salaries_missing_event(self, tmp_path):
        assert _make_service(tmp_path).get_salaries("evt_missing") == []

    def test_salary_map(self, tmp_path, sample_bouts, sample_competitors):
        service = _make_service(tmp_path)
        priced = service.generate_salaries("evt_300", sample_bouts, sample_competitors)
        salary_map = service.get_salary_map("evt_300")
        assert salary_map["fighter_a"] == priced[0].salary

    def test_corrupt_file_treated_as_missing(self, tmp_path):
        service = _make_service(tmp_path)
        (tmp_path / "salaries" / "salaries_evt_300.json").write_text("{not json")
        assert service.get_salaries("evt_300") == []


class TestRegeneration:
    def test_unchanged_inputs_reuse_stored_pool(
        self, tmp_path, sample_bouts, sample_competitors
    ):
        service = _make_service(tmp_path)
        service.generate_salaries("evt_300", sample_bouts, sample_competitors)
        path = tmp_path / "salaries" / "salaries_evt_300.json"
        first = json.loads(path.read_text())["generated_at"]

        service.generate_salaries("evt_300", sample_bouts, sample_competitors)
        assert json.loads(path.read_text())["generated_at"] == first

    def test_changed_profile_regenerates(self, tmp_path, sample_bouts, sample_competitors):
        service = _make_service(tmp_path)
        service.generate_salaries("evt_300", sample_bouts, sample_competitors)
        before = service.get_salary_map("evt_300")

        # Stripping the champion's belt changes their ranking award
        updated = [
            dataclasses.replace(c, is_champion=False) if c.competitor_id == "fighter_a" else c
            for c in sample_competitors
        ]
        service.generate_salaries("evt_300", sample_bouts, updated)
        after = service.get_salary_map("evt_300")
        assert after["fighter_a"] < before["fighter_a"]

    def test_changed_rules_regenerate(self, tmp_path, sample_bouts, sample_competitors):
        _make_service(tmp_path).generate_salaries("evt_300", sample_bouts, sample_competitors)

        cheap = _make_service(tmp_path, PricingRules(max_salary=6000))
        priced = cheap.generate_salaries("evt_300", sample_bouts, sample_competitors)
        assert max(p.salary for p in priced) == 6000

    def test_force_regenerates(self, tmp_path, sample_bouts, sample_competitors):
        service = _make_service(tmp_path)
        service.generate_salaries("evt_300", sample_bouts, sample_competitors)
        path = tmp_path / "salaries" / "salaries_evt_300.json"
        path.write_text(json.dumps({**json.loads(path.read_text()), "generated_at": "x"}))

        service.generate_salaries("evt_300", sample_bouts, sample_competitors, force=True)
        assert json.loads(path.read_text())["generated_at"] != "x"
