"""Shared fixtures for the engine test suite.

The sample card is a marquee event with a title main event, a co-main,
three undercard bouts and one cancelled bout.
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.catalog_pipeline.catalog_store import CatalogStore
from src.catalog_pipeline.models import (
    BOUT_CANCELLED,
    EVENT_MARQUEE,
    Bout,
    Competitor,
    CompetitorRecord,
    Event,
    FinishBreakdown,
)
from src.pricing_engine.models import PricedCompetitor
from src.roster_manager.lifecycle import FixedClock
from src.roster_manager.roster_state import LeagueSettings
from src.roster_manager.state_persistence import RosterPersistence

EVENT_ID = "evt_300"
EVENT_START = datetime(2026, 3, 7, 22, 0, tzinfo=timezone.utc)


def _fighter(competitor_id, name, division="Lightweight", wins=10, losses=3, **kwargs):
    return Competitor(
        competitor_id=competitor_id,
        name=name,
        division=division,
        record=CompetitorRecord(wins=wins, losses=losses),
        finishes=FinishBreakdown(stoppages=wins // 2, decisions=wins - wins // 2),
        **kwargs,
    )


# ------------------------------------------------------------------
# Catalog records - cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture
def event_start():
    return EVENT_START


@pytest.fixture
def sample_competitors():
    return [
        _fighter("fighter_a", "Alex Champion", wins=20, losses=1, is_champion=True),
        _fighter("fighter_b", "Ben Contender", wins=18, losses=2, ranking=1),
        _fighter("fighter_c", "Carl Comain", wins=15, losses=4, ranking=4),
        _fighter("fighter_d", "Dan Striker", wins=12, losses=5, ranking=7),
        _fighter("fighter_e", "Eli Grappler", wins=9, losses=3, ranking=12),
        _fighter("fighter_f", "Finn Prospect", wins=6, losses=0),
        _fighter("fighter_g", "Gus Veteran", wins=22, losses=10, nickname="The Rock"),
        _fighter("fighter_h", "Hal Newcomer", wins=4, losses=1),
        _fighter("fighter_i", "Ivan Opener", wins=7, losses=4),
        _fighter("fighter_j", "Jay Debut", wins=5, losses=2),
        _fighter("fighter_k", "Kai Injured", wins=8, losses=2),
        _fighter("fighter_l", "Leo Replaced", wins=8, losses=3),
    ]


@pytest.fixture
def sample_bouts():
    return [
        Bout(
            "bout_1", EVENT_ID, "fighter_a", "fighter_b",
            weight_class="Lightweight", is_title_fight=True, is_main_event=True,
            bout_order=12, scheduled_rounds=5, line_a=-250, line_b=210,
        ),
        Bout(
            "bout_2", EVENT_ID, "fighter_c", "fighter_d",
            is_co_main=True, bout_order=11, line_a=-150, line_b=130,
        ),
        Bout("bout_3", EVENT_ID, "fighter_e", "fighter_f", bout_order=10,
             line_a=120, line_b=-140),
        Bout("bout_4", EVENT_ID, "fighter_g", "fighter_h", bout_order=6,
             line_a=-450, line_b=450),
        Bout("bout_5", EVENT_ID, "fighter_i", "fighter_j", bout_order=2),
        Bout("bout_6", EVENT_ID, "fighter_k", "fighter_l", bout_order=1,
             status=BOUT_CANCELLED),
    ]


@pytest.fixture
def sample_event(sample_bouts):
    return Event(
        event_id=EVENT_ID,
        name="Championship Night 300",
        start_time=EVENT_START,
        category=EVENT_MARQUEE,
        bout_ids=tuple(b.bout_id for b in sample_bouts),
    )


@pytest.fixture
def catalog(sample_competitors, sample_bouts, sample_event):
    return CatalogStore(sample_competitors, sample_bouts, [sample_event])


@pytest.fixture
def priced_pool(sample_bouts):
    """Flat 2,000 salaries so five picks fit the default budget exactly."""
    pool = []
    for bout in sample_bouts:
        for cid in bout.competitor_ids:
            pool.append(
                PricedCompetitor(
                    competitor_id=cid,
                    event_id=EVENT_ID,
                    bout_id=bout.bout_id,
                    name=cid,
                    salary=2000,
                )
            )
    return pool


# ------------------------------------------------------------------
# League, clock and storage
# ------------------------------------------------------------------

@pytest.fixture
def league_settings(sample_event):
    return LeagueSettings.for_event(sample_event)


@pytest.fixture
def clock():
    """Two hours before the sample event starts."""
    return FixedClock(EVENT_START - timedelta(hours=2))


@pytest.fixture
def persistence(tmp_path):
    return RosterPersistence(storage_dir=tmp_path / "rosters")


# ------------------------------------------------------------------
# Raw CSV exports - written to a temp directory per test
# ------------------------------------------------------------------

COMPETITORS_CSV = """\
name,nickname,division,ranking,is_champion,p4p_ranking,wins,losses,draws,no_contests,ko_tko,submissions,decisions,is_active,
"Alex  Champion",The Title,Lightweight,0,TRUE,3,20,1,0,0,12,4,4,yes,
Ben Contender,,Lightweight,1,FALSE,,18,2,,,9,5,4,,
Carl O\u2019Comain,,Welterweight,4,,,15,4,1,0,7,3,5,TRUE,
Dan Striker,,Welterweight,12,,,"1,2",5,0,0,8,1,3,TRUE,
,,,,,,,,,,,,,,
Eli Grappler,,Featherweight,,,,9,3,0,0,1,6,2,no,
"""

BOUTS_CSV = """\
bout_id,event_id,fighter_a,fighter_b,weight_class,is_title_fight,is_interim_title,is_main_event,is_co_main,bout_order,scheduled_rounds,odds_a,odds_b,status,
bout_1,evt_300,Alex Champion,Ben Contender,Lightweight,TRUE,,TRUE,,12,,-250,+210,,
bout_2,evt_300,Carl O'Comain,Dan Striker,Welterweight,,,,TRUE,11,,EVEN,-120,Scheduled,
bout_3,evt_300,Eli Grappler,Finn Prospect,Featherweight,,,,,2,,,,,
bout_4,evt_999,Gus Veteran,Hal Newcomer,Middleweight,,,,,1,3,,,,
bout_5,evt_300,Ivan Opener,,Bantamweight,,,,,1,3,,,,
"""

EVENTS_CSV = """\
event_id,name,event_type,date_utc,status
evt_300,Championship Night 300,PPV,2026-03-07T22:00:00Z,
evt_301,Fight Night Undated,Fight Night,,upcoming
"""


@pytest.fixture
def csv_dir(tmp_path):
    """A data directory holding all three sample CSV exports."""
    data_dir = tmp_path / "raw"
    data_dir.mkdir()
    (data_dir / "competitors.csv").write_text(COMPETITORS_CSV, encoding="utf-8")
    (data_dir / "bouts.csv").write_text(BOUTS_CSV, encoding="utf-8")
    (data_dir / "events.csv").write_text(EVENTS_CSV, encoding="utf-8")
    return data_dir
