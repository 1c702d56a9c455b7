from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Canonical football positions keyed by common shorthand
POSITION_ALIASES: Dict[str, str] = {
    "GK": "Goalkeeper",
    "Keeper": "Goalkeeper",
    "Goalie": "Goalkeeper",
    "DEF": "Defender",
    "CB": "Center Back",
    "Centre Back": "Center Back",
    "FB": "Full Back",
    "LB": "Full Back",
    "RB": "Full Back",
    "Fullback": "Full Back",
    "MID": "Midfielder",
    "DM": "Defensive Midfielder",
    "CDM": "Defensive Midfielder",
    "AM": "Attacking Midfielder",
    "CAM": "Attacking Midfielder",
    "FWD": "Forward",
    "CF": "Forward",
    "ST": "Striker",
    "W": "Winger",
    "LW": "Winger",
    "RW": "Winger",
}


def normalize_position(value: Any) -> str:
    text = re.sub(r"[\s_\-]+", " ", str(value or "")).strip()
    if not text:
        return "Forward"
    upper = text.upper()
    for alias, canonical in POSITION_ALIASES.items():
        if alias.upper() == upper:
            return canonical
    return text.title()


class _Snapshot(BaseModel):
    """Shared base: frozen, tolerant of unknown keys, and None-as-default."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    is_captain: bool = False
    is_vice_captain: bool = False
    player_of_match: bool = False

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # Store rows carry NULL for stats nobody entered; those fall back to the field default.
        if isinstance(data, Mapping):
            return {k: v for k, v in data.items() if v is not None}
        return data


class CricketStats(_Snapshot):
    runs: int = Field(0, ge=0)
    balls_faced: int = Field(0, ge=0)
    fours: int = Field(0, ge=0)
    sixes: int = Field(0, ge=0)
    wickets: int = Field(0, ge=0)
    bowled_lbw_wickets: int = Field(0, ge=0)
    maidens: int = Field(0, ge=0)
    runs_conceded: int = Field(0, ge=0)
    overs_bowled: float = Field(0.0, ge=0)
    economy_rate: Optional[float] = None
    strike_rate: Optional[float] = None
    catches: int = Field(0, ge=0)
    stumpings: int = Field(0, ge=0)
    run_outs: int = Field(0, ge=0)
    assisted_run_outs: int = Field(0, ge=0)
    duck: bool = False
    yellow_cards: int = Field(0, ge=0)
    red_cards: int = Field(0, ge=0)

    @property
    def effective_strike_rate(self) -> float:
        if self.strike_rate is not None:
            return float(self.strike_rate)
        if self.balls_faced > 0:
            return self.runs / self.balls_faced * 100
        return 0.0

    @property
    def effective_economy_rate(self) -> float:
        if self.economy_rate is not None:
            return float(self.economy_rate)
        if self.overs_bowled > 0:
            return self.runs_conceded / self.overs_bowled
        return 0.0


class FootballStats(_Snapshot):
    goals: int = Field(0, ge=0)
    assists: int = Field(0, ge=0)
    clean_sheets: int = Field(0, ge=0)
    position: str = "Forward"
    tackles: int = Field(0, ge=0)
    interceptions: int = Field(0, ge=0)
    saves: int = Field(0, ge=0)
    minutes_played: int = Field(0, ge=0)
    blocks: int = Field(0, ge=0)
    penalty_saves: int = Field(0, ge=0)
    goals_conceded: int = Field(0, ge=0)
    yellow_cards: int = Field(0, ge=0)
    red_cards: int = Field(0, ge=0)

    @property
    def normalized_position(self) -> str:
        return normalize_position(self.position)

    @property
    def is_goalkeeper(self) -> bool:
        return self.normalized_position == "Goalkeeper"


def cricket_stats_from_row(row: Mapping[str, Any]) -> CricketStats:
    """Build a snapshot from a loose ``player_match_stats`` row."""
    data = dict(row)
    if data.get("overs_bowled") is None and data.get("overs") is not None:
        data["overs_bowled"] = data["overs"]
    return CricketStats.model_validate(data)


def football_stats_from_row(row: Mapping[str, Any]) -> FootballStats:
    data = dict(row)
    if data.get("clean_sheets") is None and data.get("cleanSheets") is not None:
        data["clean_sheets"] = data["cleanSheets"]
    return FootballStats.model_validate(data)
