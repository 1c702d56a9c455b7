import logging

import pytest

from fantasy_engine.rules import CRICKET_DEFAULTS, DEFAULT_POINTS, RuleCatalog, ScoringRule, coerce_number


class TestLookup:
    def test_missing_rule_uses_central_default(self, default_catalog):
        assert default_catalog.lookup("points_per_wicket") == 25
        assert default_catalog.lookup("captain_multiplier") == 1.5

    def test_explicit_default_wins_over_table(self, default_catalog):
        assert default_catalog.lookup("points_per_wicket", 30) == 30

    def test_unknown_key_without_default_is_zero(self, default_catalog):
        assert default_catalog.lookup("no_such_action") == 0.0

    def test_configured_value(self):
        catalog = RuleCatalog.from_rules([{"action_type": "points_per_run", "points_per_run": 2}])
        assert catalog.lookup("points_per_run", 1) == 2

    def test_value_from_points_column(self):
        catalog = RuleCatalog.from_rules([{"action_type": "catch_points", "points": 12}])
        assert catalog.lookup("catch_points") == 12

    def test_configured_zero_is_honoured(self):
        catalog = RuleCatalog.from_rules([{"action_type": "duck_points", "duck_points": 0}])
        assert catalog.lookup("duck_points") == 0


class TestIngestion:
    @pytest.mark.parametrize("bad", ["abc", None, float("nan"), "inf", True, [1]])
    def test_malformed_values_fall_back_to_default(self, bad):
        catalog = RuleCatalog.from_rules([{"action_type": "points_per_run", "points_per_run": bad}])
        assert "points_per_run" not in catalog
        assert catalog.lookup("points_per_run", 1) == 1

    def test_numeric_strings_are_accepted(self):
        catalog = RuleCatalog.from_rules([{"action_type": "bowled_bonus", "bowled_bonus": "9"}])
        assert catalog.lookup("bowled_bonus") == 9

    def test_inactive_rules_are_skipped(self):
        catalog = RuleCatalog.from_rules([{"action_type": "points_per_run", "points_per_run": 3, "is_active": False}])
        assert catalog.lookup("points_per_run") == 1

    def test_first_duplicate_wins(self, caplog):
        rows = [
            {"id": 1, "action_type": "points_per_six", "points_per_six": 3},
            {"id": 2, "action_type": "points_per_six", "points_per_six": 4},
        ]
        with caplog.at_level(logging.WARNING, logger="fantasy_engine.rules"):
            catalog = RuleCatalog.from_rules(rows)
        assert catalog.lookup("points_per_six") == 3
        assert "Duplicate" in caplog.text

    def test_sport_scope(self):
        rows = [
            {"action_type": "player_of_match_points", "player_of_match_points": 30, "sport": "Football"},
            {"action_type": "points_per_run", "points_per_run": 2, "sport": "Cricket"},
        ]
        cricket = RuleCatalog.from_rules(rows, sport="cricket")
        assert cricket.lookup("player_of_match_points") == 50
        assert cricket.lookup("points_per_run") == 2

    def test_match_format_scope(self):
        rows = [{"action_type": "century_bonus", "century_bonus": 40, "match_formats": ["Test"]}]
        assert RuleCatalog.from_rules(rows, match_format="T20").lookup("century_bonus") == 25
        assert RuleCatalog.from_rules(rows, match_format="test").lookup("century_bonus") == 40
        assert RuleCatalog.from_rules(rows).lookup("century_bonus") == 40

    def test_rows_without_action_type_are_skipped(self):
        catalog = RuleCatalog.from_rules([{"points": 5}, ScoringRule(action_type="stump_points", points=20)])
        assert len(catalog) == 1
        assert catalog.lookup("stump_points") == 20


class TestSnapshots:
    def test_overrides_return_new_catalog(self):
        base = RuleCatalog.from_rules([{"action_type": "points_per_run", "points_per_run": 2}], sport="cricket")
        changed = base.with_overrides({"points_per_run": 3, "catch_points": "bad"})
        assert base.lookup("points_per_run") == 2
        assert changed.lookup("points_per_run") == 3
        assert changed.lookup("catch_points") == 10

    def test_resolved_covers_every_cricket_key(self):
        resolved = RuleCatalog.defaults("cricket").resolved()
        for key, value in CRICKET_DEFAULTS.items():
            assert resolved[key] == value
        assert resolved["vice_captain_multiplier"] == 1.25
        assert "goal_forward" not in resolved

    def test_equality(self):
        assert RuleCatalog.defaults("cricket") == RuleCatalog.defaults("cricket")


def test_coerce_number():
    assert coerce_number("1.5") == 1.5
    assert coerce_number(False) is None
    assert coerce_number(float("-inf")) is None


def test_default_table_is_complete_for_roles():
    for key in ("captain_multiplier", "vice_captain_multiplier", "player_of_match_points"):
        assert key in DEFAULT_POINTS
