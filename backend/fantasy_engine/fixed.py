"""Built-in fantasy formulas.

These produce the authoritative value stored with a match result when it is
first recorded. They never consult the admin rule catalog and are always
clamped at zero.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, NamedTuple, Union

from fantasy_engine.stats import CricketStats, FootballStats, cricket_stats_from_row, football_stats_from_row
from fantasy_engine.tiers import above, at_least, band_points, below, tier_points

logger = logging.getLogger(__name__)


CRICKET_RUN_MILESTONES = [(100, 16), (50, 8), (30, 4)]
CRICKET_STRIKE_RATE_BONUS = [(170, 6), (150, 4), (130, 2)]
CRICKET_STRIKE_RATE_PENALTY = [(50, -6), (60, -4), (70, -2)]
CRICKET_MIN_BALLS_FOR_STRIKE_RATE = 10
CRICKET_WICKET_MILESTONES = [(5, 16), (4, 8)]
CRICKET_ECONOMY_BONUS = [(5, 6), (6, 4), (7, 2)]
CRICKET_ECONOMY_PENALTY = [(11, -6), (10, -4), (9, -2)]


class PositionValues(NamedTuple):
    goal: int
    assist: int
    clean_sheet: int


_DEFENSIVE = PositionValues(goal=6, assist=3, clean_sheet=4)
_MIDFIELD = PositionValues(goal=5, assist=3, clean_sheet=1)
_ATTACKING = PositionValues(goal=4, assist=3, clean_sheet=0)

FOOTBALL_POSITION_VALUES: Dict[str, PositionValues] = {
    "Goalkeeper": _DEFENSIVE,
    "Defender": _DEFENSIVE,
    "Center Back": _DEFENSIVE,
    "Full Back": _DEFENSIVE,
    "Midfielder": _MIDFIELD,
    "Defensive Midfielder": _MIDFIELD,
    "Attacking Midfielder": _MIDFIELD,
    "Forward": _ATTACKING,
    "Striker": _ATTACKING,
    "Winger": _ATTACKING,
}
FOOTBALL_GOALS_CONCEDED_PENALTY = [(4, -3), (3, -2), (2, -1)]

DEFENSIVE_POSITIONS = {"Goalkeeper", "Defender", "Center Back", "Full Back"}
MIDFIELD_POSITIONS = {"Midfielder", "Defensive Midfielder", "Attacking Midfielder", "Winger"}


def position_values(position: str) -> PositionValues:
    return FOOTBALL_POSITION_VALUES.get(position, FOOTBALL_POSITION_VALUES["Forward"])


def _discipline(yellow_cards: int, red_cards: int) -> int:
    return -yellow_cards * 1 - red_cards * 3


def _economy_band(economy: float) -> float:
    return band_points(economy, CRICKET_ECONOMY_BONUS, CRICKET_ECONOMY_PENALTY, below, above)


def cricket_fixed_points(stats: CricketStats) -> float:
    points = 0.0

    # batting
    points += stats.runs * 1 + stats.fours * 1 + stats.sixes * 2
    points += tier_points(stats.runs, CRICKET_RUN_MILESTONES, at_least)
    if stats.balls_faced >= CRICKET_MIN_BALLS_FOR_STRIKE_RATE:
        strike_rate = stats.runs / stats.balls_faced * 100
        points += band_points(strike_rate, CRICKET_STRIKE_RATE_BONUS, CRICKET_STRIKE_RATE_PENALTY, above, below)

    # bowling
    points += stats.wickets * 25
    points += tier_points(stats.wickets, CRICKET_WICKET_MILESTONES, at_least)
    points += stats.maidens * 12

    # Economy is scored from both derivations when both are available.
    passes = 0
    if stats.runs_conceded > 0 and stats.balls_faced > 0:
        points += _economy_band(stats.runs_conceded / (stats.balls_faced / 6))
        passes += 1
    economy = stats.effective_economy_rate
    if economy > 0:
        points += _economy_band(economy)
        passes += 1
    if passes == 2:
        logger.debug("Economy band applied twice (runs_conceded=%s, economy=%.2f)", stats.runs_conceded, economy)

    # fielding
    points += stats.catches * 8 + stats.run_outs * 12 + stats.stumpings * 12

    points += _discipline(stats.yellow_cards, stats.red_cards)
    return max(points, 0.0)


def football_fixed_points(stats: FootballStats) -> float:
    position = stats.normalized_position
    values = position_values(position)
    points = 0.0

    # attacking
    points += stats.goals * values.goal + stats.assists * values.assist

    # defensive
    if stats.clean_sheets > 0:
        points += values.clean_sheet
    points += stats.tackles * 1 + stats.interceptions * 1 + stats.blocks * 1

    if stats.is_goalkeeper:
        points += stats.saves // 3
        points += stats.penalty_saves * 5
        points += tier_points(stats.goals_conceded, FOOTBALL_GOALS_CONCEDED_PENALTY, at_least)

    if stats.minutes_played >= 60:
        points += 2
    elif stats.minutes_played > 0:
        points += 1

    points += _discipline(stats.yellow_cards, stats.red_cards)
    return max(points, 0.0)


def cricket_basic_points(stats: CricketStats) -> float:
    """Reduced formula for results entered with only runs, wickets and catches."""
    points = stats.runs * 1 + stats.wickets * 25 + stats.catches * 8
    points += _discipline(stats.yellow_cards, stats.red_cards)
    return float(max(points, 0))


def football_basic_points(stats: FootballStats) -> float:
    position = stats.normalized_position
    if position in DEFENSIVE_POSITIONS:
        goal, clean_sheet = 6, 4
    elif position in MIDFIELD_POSITIONS:
        goal, clean_sheet = 5, 1
    else:
        goal, clean_sheet = 4, 0
    points = stats.goals * goal + stats.assists * 3 + stats.clean_sheets * clean_sheet
    points += _discipline(stats.yellow_cards, stats.red_cards)
    return float(max(points, 0))


StatsLike = Union[CricketStats, FootballStats, Mapping[str, Any]]


def fixed_points(sport: str, stats: StatsLike) -> float:
    """Authoritative points for ``sport``; sports other than cricket use the basic football formula."""
    kind = (sport or "").strip().lower()
    if kind == "cricket":
        snapshot = stats if isinstance(stats, CricketStats) else cricket_stats_from_row(_as_row(stats))
        return cricket_fixed_points(snapshot)
    snapshot = stats if isinstance(stats, FootballStats) else football_stats_from_row(_as_row(stats))
    if kind == "football":
        return football_fixed_points(snapshot)
    return football_basic_points(snapshot)


def _as_row(stats: StatsLike) -> Mapping[str, Any]:
    if isinstance(stats, Mapping):
        return stats
    return stats.model_dump()
