"""Tests for catalog records and the catalog store."""

import json

from src.catalog_pipeline.catalog_store import CatalogStore
from src.catalog_pipeline.models import (
    DECISION,
    DISQUALIFICATION,
    NO_CONTEST,
    STOPPAGE,
    SUBMISSION,
    Bout,
    Competitor,
    CompetitorRecord,
    FightStats,
    categorize_method,
)


class TestCategorizeMethod:
    def test_exact_labels(self):
        assert categorize_method("KO/TKO") == STOPPAGE
        assert categorize_method("Decision - Split") == DECISION
        assert categorize_method("DQ") == DISQUALIFICATION

    def test_free_form_labels(self):
        assert categorize_method("TKO (doctor stoppage)") == STOPPAGE
        assert categorize_method("Technical Submission") == SUBMISSION
        assert categorize_method("Unanimous Decision") == DECISION
        assert categorize_method("No Contest (overturned)") == NO_CONTEST

    def test_unknown(self):
        assert categorize_method("") is None
        assert categorize_method("Forfeit") is None


class TestModels:
    def test_competitor_rates(self):
        c = Competitor("f", "F", "Lightweight", record=CompetitorRecord(wins=3, losses=1, draws=2))
        assert c.total_bouts == 4
        assert c.win_rate == 0.75
        assert Competitor("g", "G", "Lightweight").win_rate is None

    def test_bout_sides(self):
        bout = Bout("b", "e", "f1", "f2", line_a=-200, line_b=170)
        assert bout.opponent_of("f1") == "f2"
        assert bout.opponent_of("zz") is None
        assert bout.line_for("f2") == 170
        assert bout.line_for("zz") is None

    def test_fight_stats_accuracy(self):
        stats = FightStats(significant_strikes=30, significant_strikes_attempted=60)
        assert stats.strike_accuracy == 0.5
        assert FightStats().takedown_accuracy is None

    def test_fight_stats_ignores_unknown_keys(self):
        stats = FightStats.from_dict({"knockdowns": 1, "head_strikes": 20})
        assert stats.knockdowns == 1


class TestCatalogStore:
    def test_lookups(self, catalog):
        assert catalog.get_competitor("fighter_a").name == "Alex Champion"
        assert catalog.get_competitor("missing") is None
        assert catalog.get_event("evt_300").is_marquee

    def test_bouts_in_card_order(self, catalog):
        ids = [b.bout_id for b in catalog.get_bouts_for_event("evt_300")]
        assert ids == ["bout_1", "bout_2", "bout_3", "bout_4", "bout_5", "bout_6"]

    def test_competitors_for_event(self, catalog):
        assert len(catalog.get_competitors_for_event("evt_300")) == 12
        assert catalog.get_competitors_for_event("evt_missing") == []

    def test_json_round_trip(self, catalog, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"catalog": catalog.to_dict()}))
        loaded = CatalogStore.from_json_file(path)
        assert loaded.competitors == catalog.competitors
        assert loaded.bouts == catalog.bouts
        assert loaded.events == catalog.events
