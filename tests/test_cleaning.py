"""Tests for catalog data cleaning."""

import pandas as pd
import pytest

from src.catalog_pipeline.cleaning import CatalogCleaner
from src.catalog_pipeline.ingestion import CatalogIngester


@pytest.fixture
def cleaner():
    return CatalogCleaner()


@pytest.fixture
def cleaned(csv_dir, cleaner):
    return cleaner.clean_all(CatalogIngester(csv_dir).read_all())


# ---------------------------------------------------------------------------
# Names and ids
# ---------------------------------------------------------------------------

class TestNormalizeName:
    def test_whitespace(self, cleaner):
        assert cleaner.normalize_name("  Jon   Jones ") == "Jon Jones"

    def test_curly_apostrophe(self, cleaner):
        assert cleaner.normalize_name("Sean O\u2019Malley") == "Sean O'Malley"

    def test_en_dash(self, cleaner):
        assert cleaner.normalize_name("Ji\u2013Hoon") == "Ji-Hoon"

    def test_blank(self, cleaner):
        assert cleaner.normalize_name("   ") is None
        assert cleaner.normalize_name(None) is None


class TestMakeCompetitorId:
    def test_last_first(self, cleaner):
        assert cleaner.make_competitor_id("Jon Jones") == "fighter_jones_jon"

    def test_three_part_name(self, cleaner):
        assert cleaner.make_competitor_id("Jose Aldo Junior") == "fighter_junior_jose"

    def test_punctuation_removed(self, cleaner):
        assert cleaner.make_competitor_id("Sean O\u2019Malley") == "fighter_omalley_sean"

    def test_single_name(self, cleaner):
        assert cleaner.make_competitor_id("Shogun") == "fighter_shogun_shogun"

    def test_existing_id_passes_through(self, cleaner):
        assert cleaner.make_competitor_id("fighter_jones_jon") == "fighter_jones_jon"


# ---------------------------------------------------------------------------
# Value parsers
# ---------------------------------------------------------------------------

class TestParsers:
    @pytest.mark.parametrize(
        "value, expected",
        [("TRUE", True), ("yes", True), ("1", True), ("FALSE", False), ("no", False)],
    )
    def test_parse_bool(self, cleaner, value, expected):
        assert cleaner.parse_bool(value) is expected

    def test_parse_bool_default(self, cleaner):
        assert cleaner.parse_bool(float("nan"), default=True) is True

    @pytest.mark.parametrize(
        "value, expected",
        [("+150", 150), ("-200", -200), ("EVEN", 100), ("ev", 100), ("", None), ("abc", None)],
    )
    def test_parse_line(self, cleaner, value, expected):
        assert cleaner.parse_line(value) == expected

    def test_parse_ranking(self, cleaner):
        assert cleaner.parse_ranking(3.0) == 3
        assert cleaner.parse_ranking(0, is_champion=True) is None
        assert cleaner.parse_ranking(float("nan")) is None


# ---------------------------------------------------------------------------
# DataFrame cleaning
# ---------------------------------------------------------------------------

class TestCleanCompetitors:
    def test_ids_and_names(self, cleaned):
        df = cleaned["competitors"]
        assert df["competitor_id"].tolist() == [
            "fighter_champion_alex",
            "fighter_contender_ben",
            "fighter_ocomain_carl",
            "fighter_striker_dan",
            "fighter_grappler_eli",
        ]
        assert df.loc[0, "name"] == "Alex Champion"

    def test_champion_has_no_ranking(self, cleaned):
        alex = cleaned["competitors"].iloc[0]
        assert alex["is_champion"]
        assert pd.isna(alex["ranking"])

    def test_record_blanks_become_zero(self, cleaned):
        ben = cleaned["competitors"].iloc[1]
        assert ben["draws"] == 0
        assert ben["no_contests"] == 0

    def test_flags(self, cleaned):
        df = cleaned["competitors"]
        assert df["is_active"].tolist() == [True, True, True, True, False]


class TestCleanBouts:
    def test_incomplete_bout_dropped(self, cleaned):
        assert "bout_5" not in cleaned["bouts"]["bout_id"].tolist()

    def test_competitor_ids_match_roster(self, cleaned):
        bout_2 = cleaned["bouts"].set_index("bout_id").loc["bout_2"]
        assert bout_2["competitor_a_id"] == "fighter_ocomain_carl"
        assert bout_2["competitor_b_id"] == "fighter_striker_dan"

    def test_lines(self, cleaned):
        bouts = cleaned["bouts"].set_index("bout_id")
        assert bouts.loc["bout_1", "line_a"] == -250
        assert bouts.loc["bout_1", "line_b"] == 210
        assert bouts.loc["bout_2", "line_a"] == 100

    def test_scheduled_rounds_default(self, cleaned):
        bouts = cleaned["bouts"].set_index("bout_id")
        assert bouts.loc["bout_1", "scheduled_rounds"] == 5
        assert bouts.loc["bout_2", "scheduled_rounds"] == 3

    def test_status_normalized(self, cleaned):
        assert set(cleaned["bouts"]["status"]) == {"scheduled"}


class TestCleanEvents:
    def test_undated_event_dropped(self, cleaned):
        assert cleaned["events"]["event_id"].tolist() == ["evt_300"]

    def test_category_and_start(self, cleaned):
        event = cleaned["events"].iloc[0]
        assert event["category"] == "marquee"
        assert event["start_time"] == pd.Timestamp("2026-03-07 22:00", tz="UTC")
        assert event["status"] == "upcoming"
