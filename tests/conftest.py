import pytest

from fantasy_admin.core.config import get_settings
from fantasy_admin.services import rules_service
from fantasy_engine.rules import RuleCatalog
from fantasy_engine.stats import CricketStats, FootballStats


@pytest.fixture(autouse=True)
def isolated_rules(monkeypatch, tmp_path):
    """Keep every test off the network and away from any local rules file."""
    monkeypatch.setattr(rules_service, "_load_from_store", lambda: None)
    monkeypatch.setattr(get_settings(), "data_dir", tmp_path)
    rules_service.reset_cache()
    yield tmp_path
    rules_service.reset_cache()


@pytest.fixture
def default_catalog():
    return RuleCatalog.defaults("cricket")


@pytest.fixture
def half_century_innings():
    """55 off 40 with five fours and a six."""
    return CricketStats(runs=55, balls_faced=40, fours=5, sixes=1)


@pytest.fixture
def five_wicket_spell():
    """5/15 from 4 overs."""
    return CricketStats(wickets=5, overs_bowled=4, runs_conceded=15)


@pytest.fixture
def sample_cricket_rows():
    return [
        {"stat_id": 1, "player_id": 11, "player_name": "Opener", "team_id": 1, "team_name": "Falcons",
         "runs": 72, "balls_faced": 48, "fours": 8, "sixes": 2},
        {"stat_id": 2, "player_id": 12, "player_name": "Quick", "team_id": 1, "team_name": "Falcons",
         "wickets": 3, "overs": 4, "runs_conceded": 22, "maidens": 1, "is_captain": True},
        {"stat_id": 3, "player_id": 21, "player_name": "Keeper", "team_id": 2, "team_name": "Rhinos",
         "runs": 12, "balls_faced": 15, "catches": 2, "stumpings": 1, "fantasy_points": 60},
        {"stat_id": 4, "player_id": 22, "player_name": "Spinner", "team_id": 2, "team_name": "Rhinos",
         "wickets": 1, "overs": 4, "runs_conceded": 41, "player_of_match": None},
    ]


@pytest.fixture
def goalkeeper():
    return FootballStats(position="Goalkeeper", saves=7, penalty_saves=1, goals_conceded=3, minutes_played=90)
