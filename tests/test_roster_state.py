"""Tests for league settings and roster records."""

import dataclasses

import pytest

from src.roster_manager.roster_state import LeagueSettings, Roster, RosterPick


class TestLeagueSettings:
    def test_defaults(self):
        settings = LeagueSettings(league_id="lg")
        assert settings.budget == 10000
        assert settings.roster_size == 5
        assert settings.max_from_same_bout == 1
        assert settings.lock_lead_minutes == 15

    @pytest.mark.parametrize(
        "field, value",
        [
            ("budget", 0),
            ("roster_size", 0),
            ("max_from_same_bout", 0),
            ("lock_lead_minutes", -1),
            ("boost_multiplier", 0.5),
        ],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(ValueError):
            LeagueSettings(league_id="lg", **{field: value})

    def test_for_event_marquee(self, sample_event):
        settings = LeagueSettings.for_event(sample_event)
        assert settings.league_id == "league_global_evt_300"
        assert settings.event_multiplier_for(sample_event) == 1.5

    def test_for_event_standard(self, sample_event):
        standard = dataclasses.replace(sample_event, category="standard")
        settings = LeagueSettings.for_event(standard)
        assert settings.event_multiplier_for(standard) == 1.0

    def test_multiplier_disabled(self, sample_event):
        settings = LeagueSettings(league_id="lg", apply_event_multiplier=False)
        assert settings.event_multiplier_for(sample_event) == 1.0
        assert LeagueSettings(league_id="lg").event_multiplier_for(None) == 1.0


class TestRoster:
    def test_create_new(self):
        roster = Roster.create_new("u1", "lg", "evt_300", name="Mine")
        assert roster.is_draft
        assert roster.picks == []
        assert len(roster.roster_id) == 36

    def test_invalid_status(self):
        with pytest.raises(ValueError, match="Invalid roster status"):
            Roster("r1", "u1", "lg", "evt_300", status="pending")

    def test_pick_helpers(self):
        roster = Roster(
            "r1", "u1", "lg", "evt_300",
            picks=[RosterPick("a", 2500, 0), RosterPick("b", 1500, 2, boosted=True)],
        )
        assert roster.total_salary() == 4000
        assert roster.remaining_budget(10000) == 6000
        assert roster.boosted_pick().competitor_id == "b"
        assert roster.get_pick("zz") is None
        assert roster.next_open_slot(5) == 1

    def test_next_open_slot_full(self):
        roster = Roster(
            "r1", "u1", "lg", "evt_300",
            picks=[RosterPick(str(i), 100, i) for i in range(3)],
        )
        assert roster.next_open_slot(3) is None

    def test_locked_flags(self):
        roster = Roster("r1", "u1", "lg", "evt_300", status="scored")
        assert roster.is_locked
        assert not roster.is_submitted
