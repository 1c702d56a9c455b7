from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


CRICKET_DEFAULTS: Dict[str, float] = {
    # batting
    "points_per_run": 1,
    "points_per_four": 1,
    "points_per_six": 2,
    "thirty_bonus": 4,
    "half_century_bonus": 10,
    "seventyfive_bonus": 12,
    "century_bonus": 25,
    "duck_points": -5,
    "min_balls_for_strike_rate": 10,
    "strike_rate_bonus_threshold": 70,
    "strike_rate_bonus_points": 6,
    "strike_rate_penalty_threshold": 50,
    "strike_rate_penalty_points": -6,
    # bowling
    "points_per_wicket": 25,
    "bowled_bonus": 8,
    "five_wicket_bonus": 25,
    "four_wicket_bonus": 10,
    "min_overs_for_economy": 2,
    "economy_rate_bonus_threshold": 5,
    "economy_rate_bonus_points": 6,
    "economy_rate_penalty_threshold": 9,
    "economy_rate_penalty_points": -6,
    # fielding
    "catch_points": 10,
    "stump_points": 15,
    "run_out_points": 15,
}

FOOTBALL_DEFAULTS: Dict[str, float] = {
    "goal_goalkeeper": 6,
    "goal_defender": 6,
    "goal_midfielder": 5,
    "goal_forward": 4,
    "assist_points": 3,
    "clean_sheet_goalkeeper": 4,
    "clean_sheet_defender": 4,
    "clean_sheet_midfielder": 1,
    "clean_sheet_forward": 0,
    "tackle_points": 1,
    "interception_points": 1,
    "block_points": 1,
    "saves_per_point": 3,
    "penalty_save_points": 5,
    "full_appearance_minutes": 60,
    "full_appearance_points": 2,
    "partial_appearance_points": 1,
    "yellow_card_points": -1,
    "red_card_points": -3,
}

ROLE_DEFAULTS: Dict[str, float] = {
    "captain_multiplier": 1.5,
    "vice_captain_multiplier": 1.25,
    "player_of_match_points": 50,
}

DEFAULT_POINTS: Dict[str, float] = {**CRICKET_DEFAULTS, **FOOTBALL_DEFAULTS, **ROLE_DEFAULTS}

SPORT_DEFAULTS: Dict[str, Dict[str, float]] = {
    "cricket": {**CRICKET_DEFAULTS, **ROLE_DEFAULTS},
    "football": {**FOOTBALL_DEFAULTS, **ROLE_DEFAULTS},
}


class ScoringRule(BaseModel):
    """Admin-configured scoring row; the store keeps many optional columns so extras are kept."""

    model_config = ConfigDict(extra="allow")

    id: Optional[Union[int, str]] = None
    name: Optional[str] = None
    sport: Optional[str] = None
    category: Optional[str] = None
    action_type: str
    points: Optional[Any] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    thresholds: Optional[Any] = None
    multiplier: Optional[float] = None
    match_formats: Optional[List[str]] = None
    is_active: bool = True
    display_order: Optional[int] = None

    def raw_value(self) -> Any:
        extras = self.model_extra or {}
        if self.action_type in extras:
            return extras[self.action_type]
        if self.action_type in type(self).model_fields:
            own = getattr(self, self.action_type)
            if own is not None:
                return own
        return self.points

    def applies_to(self, sport: Optional[str], match_format: Optional[str]) -> bool:
        if not self.is_active:
            return False
        if sport and self.sport and self.sport.strip().lower() != sport.strip().lower():
            return False
        if match_format and self.match_formats:
            wanted = match_format.strip().lower()
            if wanted not in {f.strip().lower() for f in self.match_formats}:
                return False
        return True


def coerce_number(value: Any) -> Optional[float]:
    """Numeric rule value or None when the stored value is unusable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


class RuleCatalog:
    """Read-only action -> points mapping with default fallback.

    Instances are snapshots: reloading rules builds a new catalog, so an
    in-flight evaluation never sees a partially updated rule set.
    """

    def __init__(self, values: Optional[Mapping[str, float]] = None, sport: Optional[str] = None):
        self._values: Dict[str, float] = dict(values or {})
        self.sport = sport

    @classmethod
    def defaults(cls, sport: Optional[str] = None) -> "RuleCatalog":
        return cls({}, sport=sport)

    @classmethod
    def from_rules(
        cls,
        records: Iterable[Union[ScoringRule, Mapping[str, Any]]],
        sport: Optional[str] = None,
        match_format: Optional[str] = None,
    ) -> "RuleCatalog":
        values: Dict[str, float] = {}
        for record in records:
            try:
                rule = record if isinstance(record, ScoringRule) else ScoringRule.model_validate(record)
            except ValueError as exc:
                logger.warning("Skipping malformed scoring rule %r: %s", record, exc)
                continue
            if not rule.applies_to(sport, match_format):
                continue
            value = coerce_number(rule.raw_value())
            if value is None:
                logger.warning("Scoring rule %s has non-numeric value %r; default applies", rule.action_type, rule.raw_value())
                continue
            if rule.action_type in values:
                logger.warning("Duplicate active scoring rule for %s ignored (id=%s)", rule.action_type, rule.id)
                continue
            values[rule.action_type] = value
        return cls(values, sport=sport)

    def lookup(self, action_key: str, default: Optional[float] = None) -> float:
        if action_key in self._values:
            return self._values[action_key]
        if default is not None:
            return default
        return DEFAULT_POINTS.get(action_key, 0.0)

    def with_overrides(self, overrides: Mapping[str, Any]) -> "RuleCatalog":
        values = dict(self._values)
        for key, raw in (overrides or {}).items():
            number = coerce_number(raw)
            if number is not None:
                values[str(key)] = number
        return RuleCatalog(values, sport=self.sport)

    def as_dict(self) -> Dict[str, float]:
        return dict(self._values)

    def resolved(self) -> Dict[str, float]:
        """Every known key for this catalog's sport with the value lookup would return."""
        base = SPORT_DEFAULTS.get((self.sport or "").lower(), DEFAULT_POINTS)
        merged = {key: self.lookup(key) for key in base}
        for key, value in self._values.items():
            merged.setdefault(key, value)
        return merged

    def __contains__(self, action_key: object) -> bool:
        return action_key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RuleCatalog) and self._values == other._values and self.sport == other.sport

    def __repr__(self) -> str:
        return f"RuleCatalog(sport={self.sport!r}, rules={len(self._values)})"
