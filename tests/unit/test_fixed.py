import pytest

from fantasy_engine.fixed import (
    cricket_basic_points,
    cricket_fixed_points,
    fixed_points,
    football_basic_points,
    football_fixed_points,
)
from fantasy_engine.stats import CricketStats, FootballStats


class TestCricketFixed:
    def test_half_century_scenario(self, half_century_innings):
        """62 batting + 8 milestone + 2 strike-rate (137.5)."""
        assert cricket_fixed_points(half_century_innings) == 72

    def test_five_wicket_scenario(self, five_wicket_spell):
        """125 wickets + 16 haul + 6 economy (3.75)."""
        assert cricket_fixed_points(five_wicket_spell) == 147

    def test_century_does_not_stack_lower_milestones(self):
        assert cricket_fixed_points(CricketStats(runs=120, balls_faced=100)) == 136

    def test_strike_rate_penalty(self):
        assert cricket_fixed_points(CricketStats(runs=20, balls_faced=40)) == 16

    def test_strike_rate_needs_ten_balls(self):
        assert cricket_fixed_points(CricketStats(runs=9, balls_faced=9)) == 9
        assert cricket_fixed_points(CricketStats(runs=30, balls_faced=9)) == 34

    def test_maidens_and_four_wicket_haul(self):
        stats = CricketStats(wickets=4, maidens=2, overs_bowled=4, runs_conceded=10)
        assert cricket_fixed_points(stats) == 100 + 8 + 24 + 6

    def test_economy_scored_from_both_derivations(self):
        """Runs conceded per six balls faced (20.0, -6) and per over bowled (5.0, +4) both count."""
        stats = CricketStats(wickets=2, balls_faced=6, runs_conceded=20, overs_bowled=4)
        assert cricket_fixed_points(stats) == 50 - 6 + 4

    def test_supplied_economy_rate_used_for_second_pass(self):
        stats = CricketStats(wickets=2, balls_faced=6, runs_conceded=20, overs_bowled=4, economy_rate=3)
        assert cricket_fixed_points(stats) == 50 - 6 + 6

    def test_expensive_bowling_penalties(self):
        assert cricket_fixed_points(CricketStats(wickets=1, overs_bowled=4, runs_conceded=46)) == 25 - 6
        assert cricket_fixed_points(CricketStats(wickets=1, overs_bowled=4, runs_conceded=38)) == 25 - 2

    def test_fielding_and_cards(self):
        stats = CricketStats(catches=2, run_outs=1, stumpings=1, yellow_cards=1)
        assert cricket_fixed_points(stats) == 16 + 12 + 12 - 1

    def test_never_negative(self):
        stats = CricketStats(runs=0, balls_faced=20, red_cards=2, yellow_cards=3)
        assert cricket_fixed_points(stats) == 0

    def test_role_flags_do_not_change_fixed_points(self, half_century_innings):
        captain = half_century_innings.model_copy(update={"is_captain": True, "player_of_match": True})
        assert cricket_fixed_points(captain) == cricket_fixed_points(half_century_innings)


class TestFootballFixed:
    def test_forward(self):
        assert football_fixed_points(FootballStats(goals=2, assists=1, minutes_played=90)) == 13

    def test_clean_sheet_counts_once(self):
        stats = FootballStats(position="Defender", goals=1, clean_sheets=2, tackles=3, minutes_played=90)
        assert football_fixed_points(stats) == 6 + 4 + 3 + 2

    def test_goalkeeper(self, goalkeeper):
        """floor(7/3)=2, one penalty save 5, three conceded -2, full match 2."""
        assert football_fixed_points(goalkeeper) == 7

    @pytest.mark.parametrize("conceded,expected", [(0, 3), (1, 3), (2, 2), (3, 1), (5, 0)])
    def test_goals_conceded_tiers(self, conceded, expected):
        stats = FootballStats(position="GK", goals_conceded=conceded, minutes_played=90, interceptions=1)
        assert football_fixed_points(stats) == expected

    def test_goalkeeper_aliases_count_saves(self):
        assert football_fixed_points(FootballStats(position="gk", saves=6)) == 2

    def test_saves_only_count_for_goalkeepers(self):
        assert football_fixed_points(FootballStats(position="Defender", saves=9)) == 0

    def test_unknown_position_uses_forward_values(self):
        assert football_fixed_points(FootballStats(position="Sweeper", goals=1, minutes_played=30)) == 5

    def test_midfielder_values(self):
        stats = FootballStats(position="attacking midfielder", goals=1, assists=1, clean_sheets=1, minutes_played=70, yellow_cards=1)
        assert football_fixed_points(stats) == 5 + 3 + 1 + 2 - 1

    def test_never_negative(self):
        assert football_fixed_points(FootballStats(red_cards=2)) == 0


class TestBasicFormulas:
    def test_cricket_basic(self):
        assert cricket_basic_points(CricketStats(runs=30, wickets=1, catches=1, fours=4)) == 63

    def test_football_basic_winger_is_midfield(self):
        assert football_basic_points(FootballStats(position="Winger", goals=1, clean_sheets=1)) == 6

    def test_football_basic_scales_clean_sheets(self):
        assert football_basic_points(FootballStats(position="Defender", clean_sheets=2, assists=1)) == 11


class TestDispatch:
    def test_cricket_from_row(self):
        assert fixed_points("Cricket", {"runs": 55, "balls_faced": 40, "fours": 5, "sixes": 1}) == 72

    def test_football_from_snapshot(self):
        assert fixed_points("football", FootballStats(goals=1)) == 4

    def test_other_sports_use_basic_football(self):
        assert fixed_points("hockey", {"goals": 1, "assists": 1, "minutes_played": 90}) == 7

    def test_identical_inputs_give_identical_results(self, five_wicket_spell):
        assert fixed_points("cricket", five_wicket_spell) == fixed_points("cricket", five_wicket_spell)
