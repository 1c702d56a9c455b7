from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from fantasy_admin.core.config import get_settings
from fantasy_admin.core.logging import get_logger
from fantasy_admin.services import rules_service, store_client
from fantasy_engine.configurable import evaluate
from fantasy_engine.fixed import fixed_points
from fantasy_engine.rules import RuleCatalog

logger = get_logger(__name__)

CONFIGURABLE_SPORTS = {"cricket", "football"}
IDENTITY_FIELDS = ("stat_id", "player_id", "player_name", "team_id", "team_name", "position")


class StoreUnavailable(RuntimeError):
    pass


class StatRowNotFound(LookupError):
    pass


def normalize_sport(sport: str) -> str:
    kind = (sport or "").strip().lower()
    if not kind:
        raise ValueError("Sport is required")
    return kind


def _catalog(sport: str, match_format: Optional[str], overrides: Optional[Mapping[str, Any]]) -> RuleCatalog:
    catalog = rules_service.load_catalog(sport, match_format)
    if overrides:
        catalog = catalog.with_overrides(overrides)
    return catalog


def fixed_score(sport: str, row: Mapping[str, Any]) -> Dict[str, Any]:
    kind = normalize_sport(sport)
    return {"sport": kind, "points": fixed_points(kind, dict(row))}


def preview(
    sport: str,
    stats: Mapping[str, Any],
    overrides: Optional[Mapping[str, Any]] = None,
    match_format: Optional[str] = None,
) -> Dict[str, Any]:
    """Recompute a player's score under the current (or overridden) rules. Nothing is written."""
    kind = normalize_sport(sport)
    if kind not in CONFIGURABLE_SPORTS:
        raise ValueError(f"Configurable scoring is not available for '{sport}'")
    result = evaluate(kind, dict(stats), _catalog(kind, match_format, overrides))
    payload = result.to_payload()
    payload.update(
        {
            "sport": kind,
            "fixed_points": fixed_points(kind, dict(stats)),
            "stored_points": stats.get("fantasy_points"),
        }
    )
    return payload


def score_players(sport: str, rows: Iterable[Mapping[str, Any]], catalog: RuleCatalog) -> List[Dict[str, Any]]:
    """Score each row independently; row order does not affect any result."""
    kind = normalize_sport(sport)
    scored: List[Dict[str, Any]] = []
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise ValueError(f"Row {index} is not an object")
        record: Dict[str, Any] = {field: row.get(field) for field in IDENTITY_FIELDS if row.get(field) is not None}
        record["stored_points"] = row.get("fantasy_points")
        record["fixed_points"] = fixed_points(kind, dict(row))
        if kind in CONFIGURABLE_SPORTS:
            result = evaluate(kind, dict(row), catalog)
            record["configured_points"] = result.total
            record["breakdown"] = result.breakdown.model_dump(by_alias=True)
        scored.append(record)
    return scored


def _points_column(df: pd.DataFrame) -> pd.Series:
    if "stored_points" in df.columns:
        return pd.to_numeric(df["stored_points"], errors="coerce").fillna(df["fixed_points"])
    return df["fixed_points"]


def team_standings(scored: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not scored:
        return []
    keys = []
    for rec in scored:
        team = rec.get("team_id") if rec.get("team_id") is not None else rec.get("team_name")
        keys.append(str(team) if team is not None else "unassigned")
    df = pd.DataFrame(scored)
    df["points"] = _points_column(df)
    df["team_key"] = keys
    if "team_name" not in df.columns:
        df["team_name"] = None
    df["team_name"] = df["team_name"].where(df["team_name"].notna(), "Team " + df["team_key"])
    grouped = (
        df.groupby("team_key", sort=False)
        .agg(team_name=("team_name", "first"), total_points=("points", "sum"), players=("points", "count"))
        .reset_index()
        .sort_values(["total_points", "team_key"], ascending=[False, True])
    )
    return [
        {
            "team": rec["team_key"],
            "team_name": rec["team_name"],
            "total_points": float(rec["total_points"]),
            "players": int(rec["players"]),
        }
        for rec in grouped.to_dict("records")
    ]


def leaderboard(scored: List[Dict[str, Any]], limit: int = 10) -> List[Dict[str, Any]]:
    def points_of(rec: Dict[str, Any]) -> float:
        stored = rec.get("stored_points")
        try:
            return float(stored) if stored is not None else float(rec["fixed_points"])
        except (TypeError, ValueError):
            return float(rec["fixed_points"])

    ranked = sorted(scored, key=points_of, reverse=True)
    return [{**rec, "rank": idx, "points": points_of(rec)} for idx, rec in enumerate(ranked[:limit], start=1)]


def score_batch(
    sport: str,
    rows: List[Mapping[str, Any]],
    match_format: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    limit: int = 10,
) -> Dict[str, Any]:
    kind = normalize_sport(sport)
    catalog = _catalog(kind, match_format, overrides) if kind in CONFIGURABLE_SPORTS else RuleCatalog.defaults(kind)
    scored = score_players(kind, rows, catalog)
    return {
        "sport": kind,
        "players": scored,
        "teams": team_standings(scored),
        "leaderboard": leaderboard(scored, limit=limit),
    }


def record_result(stat_id: int, sport: str) -> Dict[str, Any]:
    """Compute the authoritative fixed points for a stored stat row and write them back."""
    kind = normalize_sport(sport)
    settings = get_settings()
    rows = store_client.get(settings.stats_table, params={"select": "*", "stat_id": f"eq.{stat_id}"})
    if rows is None:
        raise StoreUnavailable("Could not read player stats from the store")
    if not rows:
        raise StatRowNotFound(f"stat_id {stat_id} not found")

    points = fixed_points(kind, rows[0])
    ok, status, detail = store_client.patch(
        settings.stats_table,
        match={"stat_id": stat_id},
        data={"fantasy_points": points, "last_calculated_at": datetime.now(timezone.utc).isoformat()},
    )
    if not ok:
        raise RuntimeError(f"Failed to persist fantasy points (status {status}): {detail}")
    logger.info("Recorded %.1f fantasy points for stat_id %s", points, stat_id)
    return {"stat_id": stat_id, "sport": kind, "fantasy_points": points}
