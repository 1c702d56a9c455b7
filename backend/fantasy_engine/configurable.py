"""Rule-driven recomputation used for previews and the points breakdown.

Every point value is resolved through the :class:`RuleCatalog`, falling back
to the central defaults. Totals here are intentionally not clamped at zero.
"""
from __future__ import annotations

from typing import Union

from fantasy_engine.breakdown import (
    AppearancePoints,
    AttackingPoints,
    BattingPoints,
    BowlingPoints,
    DefensivePoints,
    DisciplinePoints,
    FieldingPoints,
    GoalkeepingPoints,
    RoleBonus,
    ScoreResult,
    compose_cricket,
    compose_football,
)
from fantasy_engine.fixed import DEFENSIVE_POSITIONS, FOOTBALL_GOALS_CONCEDED_PENALTY
from fantasy_engine.rules import RuleCatalog
from fantasy_engine.stats import CricketStats, FootballStats, cricket_stats_from_row, football_stats_from_row
from fantasy_engine.tiers import at_least, gated, tier_points

THREE_WICKET_BONUS = 4
POINTS_PER_MAIDEN = 5

_MIDFIELD_KEYS = {"Midfielder", "Defensive Midfielder", "Attacking Midfielder"}


def apply_role_bonuses(raw_total: float, is_captain: bool, is_vice_captain: bool, player_of_match: bool, catalog: RuleCatalog) -> RoleBonus:
    """Captain or vice-captain multiplier first, then the additive player-of-match bonus.

    Captain wins when both role flags are set.
    """
    roles = RoleBonus(total=raw_total)
    if is_captain:
        multiplier = catalog.lookup("captain_multiplier")
        roles.captain_bonus = raw_total * (multiplier - 1)
        roles.total = raw_total * multiplier
    elif is_vice_captain:
        multiplier = catalog.lookup("vice_captain_multiplier")
        roles.vice_captain_bonus = raw_total * (multiplier - 1)
        roles.total = raw_total * multiplier
    if player_of_match:
        roles.player_of_match = catalog.lookup("player_of_match_points")
        roles.total += roles.player_of_match
    return roles


def milestone_bonus(runs: int, catalog: RuleCatalog) -> float:
    tiers = [
        (100, catalog.lookup("century_bonus")),
        (75, catalog.lookup("seventyfive_bonus")),
        (50, catalog.lookup("half_century_bonus")),
        (30, catalog.lookup("thirty_bonus")),
    ]
    return tier_points(runs, tiers, at_least)


def wicket_milestone_bonus(wickets: int, catalog: RuleCatalog) -> float:
    tiers = [
        (5, catalog.lookup("five_wicket_bonus")),
        (4, catalog.lookup("four_wicket_bonus")),
        (3, THREE_WICKET_BONUS),
    ]
    return tier_points(wickets, tiers, at_least)


def strike_rate_points(stats: CricketStats, catalog: RuleCatalog) -> float:
    def score() -> float:
        strike_rate = stats.effective_strike_rate
        if strike_rate > catalog.lookup("strike_rate_bonus_threshold"):
            return catalog.lookup("strike_rate_bonus_points")
        if strike_rate < catalog.lookup("strike_rate_penalty_threshold"):
            return catalog.lookup("strike_rate_penalty_points")
        return 0

    return gated(stats.balls_faced, catalog.lookup("min_balls_for_strike_rate"), score)


def economy_points(stats: CricketStats, catalog: RuleCatalog) -> float:
    def score() -> float:
        economy = stats.effective_economy_rate
        if economy < catalog.lookup("economy_rate_bonus_threshold"):
            return catalog.lookup("economy_rate_bonus_points")
        if economy > catalog.lookup("economy_rate_penalty_threshold"):
            return catalog.lookup("economy_rate_penalty_points")
        return 0

    return gated(stats.overs_bowled, catalog.lookup("min_overs_for_economy"), score)


def evaluate_cricket(stats: CricketStats, catalog: RuleCatalog) -> ScoreResult:
    batting = BattingPoints(
        runs=stats.runs * catalog.lookup("points_per_run"),
        boundaries=stats.fours * catalog.lookup("points_per_four") + stats.sixes * catalog.lookup("points_per_six"),
        milestone=milestone_bonus(stats.runs, catalog),
        duck=catalog.lookup("duck_points") if stats.duck and stats.runs == 0 else 0,
        strike_rate=strike_rate_points(stats, catalog),
    )
    bowling = BowlingPoints(
        wickets=stats.wickets * catalog.lookup("points_per_wicket"),
        wicket_type=stats.bowled_lbw_wickets * catalog.lookup("bowled_bonus"),
        maiden=stats.maidens * POINTS_PER_MAIDEN,
        economy=economy_points(stats, catalog),
        wicket_milestone=wicket_milestone_bonus(stats.wickets, catalog),
    )
    fielding = FieldingPoints(
        catches=stats.catches * catalog.lookup("catch_points"),
        stumpings=stats.stumpings * catalog.lookup("stump_points"),
        runouts=(stats.run_outs + stats.assisted_run_outs) * catalog.lookup("run_out_points"),
    )

    raw_total = batting.subtotal() + bowling.subtotal() + fielding.subtotal()
    roles = apply_role_bonuses(raw_total, stats.is_captain, stats.is_vice_captain, stats.player_of_match, catalog)
    breakdown = compose_cricket(batting, bowling, fielding, roles)
    return ScoreResult(total=roles.total, breakdown=breakdown)


def _position_group(stats: FootballStats) -> str:
    if stats.is_goalkeeper:
        return "goalkeeper"
    position = stats.normalized_position
    if position in DEFENSIVE_POSITIONS:
        return "defender"
    if position in _MIDFIELD_KEYS:
        return "midfielder"
    return "forward"


def evaluate_football(stats: FootballStats, catalog: RuleCatalog) -> ScoreResult:
    group = _position_group(stats)

    attacking = AttackingPoints(
        goals=stats.goals * catalog.lookup(f"goal_{group}"),
        assists=stats.assists * catalog.lookup("assist_points"),
    )
    defensive = DefensivePoints(
        clean_sheet=catalog.lookup(f"clean_sheet_{group}") if stats.clean_sheets > 0 else 0,
        tackles=stats.tackles * catalog.lookup("tackle_points"),
        interceptions=stats.interceptions * catalog.lookup("interception_points"),
        blocks=stats.blocks * catalog.lookup("block_points"),
    )
    goalkeeping = GoalkeepingPoints()
    if group == "goalkeeper":
        per_point = catalog.lookup("saves_per_point")
        goalkeeping = GoalkeepingPoints(
            saves=stats.saves // per_point if per_point > 0 else 0,
            penalty_saves=stats.penalty_saves * catalog.lookup("penalty_save_points"),
            goals_conceded=tier_points(stats.goals_conceded, FOOTBALL_GOALS_CONCEDED_PENALTY, at_least),
        )
    minutes = 0.0
    if stats.minutes_played >= catalog.lookup("full_appearance_minutes"):
        minutes = catalog.lookup("full_appearance_points")
    elif stats.minutes_played > 0:
        minutes = catalog.lookup("partial_appearance_points")
    appearance = AppearancePoints(minutes=minutes)
    discipline = DisciplinePoints(
        yellow_cards=stats.yellow_cards * catalog.lookup("yellow_card_points"),
        red_cards=stats.red_cards * catalog.lookup("red_card_points"),
    )

    raw_total = sum(section.subtotal() for section in (attacking, defensive, goalkeeping, appearance, discipline))
    roles = apply_role_bonuses(raw_total, stats.is_captain, stats.is_vice_captain, stats.player_of_match, catalog)
    breakdown = compose_football(attacking, defensive, goalkeeping, appearance, discipline, roles)
    return ScoreResult(total=roles.total, breakdown=breakdown)


def evaluate(sport: str, stats: Union[CricketStats, FootballStats, dict], catalog: RuleCatalog) -> ScoreResult:
    kind = (sport or "").strip().lower()
    if kind == "cricket":
        snapshot = stats if isinstance(stats, CricketStats) else cricket_stats_from_row(stats)
        return evaluate_cricket(snapshot, catalog)
    if kind == "football":
        snapshot = stats if isinstance(stats, FootballStats) else football_stats_from_row(stats)
        return evaluate_football(snapshot, catalog)
    raise ValueError(f"No configurable scoring for sport '{sport}'")
