from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

BALANCE_TOLERANCE = 1e-6


class _Section(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def subtotal(self) -> float:
        return float(sum(getattr(self, name) for name in type(self).model_fields))


class BattingPoints(_Section):
    runs: float = 0
    boundaries: float = 0
    milestone: float = 0
    duck: float = 0
    strike_rate: float = Field(0, alias="strikeRate")


class BowlingPoints(_Section):
    wickets: float = 0
    wicket_type: float = Field(0, alias="wicketType")
    maiden: float = 0
    economy: float = 0
    wicket_milestone: float = Field(0, alias="wicketMilestone")


class FieldingPoints(_Section):
    catches: float = 0
    stumpings: float = 0
    runouts: float = 0


class AttackingPoints(_Section):
    goals: float = 0
    assists: float = 0


class DefensivePoints(_Section):
    clean_sheet: float = Field(0, alias="cleanSheet")
    tackles: float = 0
    interceptions: float = 0
    blocks: float = 0


class GoalkeepingPoints(_Section):
    saves: float = 0
    penalty_saves: float = Field(0, alias="penaltySaves")
    goals_conceded: float = Field(0, alias="goalsConceded")


class AppearancePoints(_Section):
    minutes: float = 0


class DisciplinePoints(_Section):
    yellow_cards: float = Field(0, alias="yellowCards")
    red_cards: float = Field(0, alias="redCards")


class RoleBonus(BaseModel):
    """Outcome of applying captain/vice-captain multipliers and the player-of-match bonus."""

    captain_bonus: float = 0
    vice_captain_bonus: float = 0
    player_of_match: float = 0
    total: float = 0


class _Breakdown(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    captain_bonus: float = Field(0, alias="captainBonus")
    vice_captain_bonus: float = Field(0, alias="viceCaptainBonus")
    player_of_match: float = Field(0, alias="playerOfMatch")
    total: float = 0

    def sections(self) -> Iterator[Tuple[str, _Section]]:
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, _Section):
                yield name, value

    def category_totals(self) -> Dict[str, float]:
        return {name: section.subtotal() for name, section in self.sections()}

    def parts_total(self) -> float:
        return (
            sum(self.category_totals().values())
            + self.captain_bonus
            + self.vice_captain_bonus
            + self.player_of_match
        )

    def is_balanced(self, tolerance: float = BALANCE_TOLERANCE) -> bool:
        return abs(self.parts_total() - self.total) <= tolerance


class CricketBreakdown(_Breakdown):
    batting: BattingPoints = Field(default_factory=BattingPoints)
    bowling: BowlingPoints = Field(default_factory=BowlingPoints)
    fielding: FieldingPoints = Field(default_factory=FieldingPoints)


class FootballBreakdown(_Breakdown):
    attacking: AttackingPoints = Field(default_factory=AttackingPoints)
    defensive: DefensivePoints = Field(default_factory=DefensivePoints)
    goalkeeping: GoalkeepingPoints = Field(default_factory=GoalkeepingPoints)
    appearance: AppearancePoints = Field(default_factory=AppearancePoints)
    discipline: DisciplinePoints = Field(default_factory=DisciplinePoints)


PointsBreakdown = Union[CricketBreakdown, FootballBreakdown]


class ScoreResult(BaseModel):
    total: float
    breakdown: PointsBreakdown

    def to_payload(self) -> Dict[str, Any]:
        return {"total": self.total, "breakdown": self.breakdown.model_dump(by_alias=True)}


def _checked(breakdown: _Breakdown) -> _Breakdown:
    if not breakdown.is_balanced():
        logger.error(
            "Unbalanced points breakdown: parts sum to %.6f but total is %.6f",
            breakdown.parts_total(),
            breakdown.total,
        )
    return breakdown


def compose_cricket(
    batting: BattingPoints,
    bowling: BowlingPoints,
    fielding: FieldingPoints,
    roles: RoleBonus,
) -> CricketBreakdown:
    return _checked(
        CricketBreakdown(
            batting=batting,
            bowling=bowling,
            fielding=fielding,
            captain_bonus=roles.captain_bonus,
            vice_captain_bonus=roles.vice_captain_bonus,
            player_of_match=roles.player_of_match,
            total=roles.total,
        )
    )


def compose_football(
    attacking: AttackingPoints,
    defensive: DefensivePoints,
    goalkeeping: GoalkeepingPoints,
    appearance: AppearancePoints,
    discipline: DisciplinePoints,
    roles: RoleBonus,
) -> FootballBreakdown:
    return _checked(
        FootballBreakdown(
            attacking=attacking,
            defensive=defensive,
            goalkeeping=goalkeeping,
            appearance=appearance,
            discipline=discipline,
            captain_bonus=roles.captain_bonus,
            vice_captain_bonus=roles.vice_captain_bonus,
            player_of_match=roles.player_of_match,
            total=roles.total,
        )
    )
