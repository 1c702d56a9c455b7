from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from fantasy_admin.core.config import get_settings
from fantasy_admin.core.logging import get_logger
from fantasy_admin.services import store_client
from fantasy_engine.rules import RuleCatalog

logger = get_logger(__name__)

RULES_FILENAME = "scoring_rules.json"


def _load_from_store() -> Optional[List[Dict[str, Any]]]:
    rows = store_client.get(
        get_settings().rules_table,
        params={"select": "*", "is_active": "eq.true", "order": "display_order"},
    )
    if isinstance(rows, list):
        return rows
    return None


def _load_from_file() -> List[Dict[str, Any]]:
    path = Path(get_settings().data_dir) / RULES_FILENAME
    if not path.exists():
        return []
    with path.open(encoding="utf-8") as handle:
        raw = json.load(handle)
    if isinstance(raw, dict):
        raw = raw.get("rules", [])
    if not isinstance(raw, list):
        raise ValueError(f"{RULES_FILENAME} must hold a list of rules")
    return [row for row in raw if isinstance(row, dict)]


@lru_cache(maxsize=1)
def _load_raw_rules() -> Tuple[Tuple[Dict[str, Any], ...], str]:
    # First try the remote store (preferred)
    rows = _load_from_store()
    if rows is not None:
        logger.info("Loaded %d scoring rules from store", len(rows))
        return tuple(rows), "store"

    rows = _load_from_file()
    logger.info("Loaded %d scoring rules from %s", len(rows), RULES_FILENAME)
    return tuple(rows), "file" if rows else "defaults"


@lru_cache(maxsize=1)
def _sport_names() -> Dict[str, str]:
    """sport_id -> sport name, from the store's sports table over the configured map."""
    settings = get_settings()
    names = {str(sport_id): name for sport_id, name in settings.sport_ids.items()}
    rows = store_client.get(settings.sports_table, params={"select": "sport_id,sport_name"})
    if isinstance(rows, list):
        for row in rows:
            if isinstance(row, dict) and row.get("sport_id") is not None and row.get("sport_name"):
                names[str(row["sport_id"])] = str(row["sport_name"])
    return names


def _sport_of(row: Dict[str, Any]) -> Optional[str]:
    name = row.get("sport") or row.get("sport_name")
    if name or row.get("sport_id") is None:
        return name
    sport_id = str(row["sport_id"])
    names = _sport_names()
    if sport_id not in names:
        # An unknown id must not match every sport.
        logger.warning("Scoring rule references unknown sport_id %s", sport_id)
        return f"sport-{sport_id}"
    return names[sport_id]


@lru_cache(maxsize=32)
def load_catalog(sport: str = "cricket", match_format: Optional[str] = None) -> RuleCatalog:
    rows, _ = _load_raw_rules()
    normalized = [{**row, "sport": _sport_of(row)} for row in rows]
    return RuleCatalog.from_rules(normalized, sport=sport, match_format=match_format)


def rules_source() -> str:
    return _load_raw_rules()[1]


def describe(sport: str = "cricket", match_format: Optional[str] = None) -> Dict[str, Any]:
    catalog = load_catalog(sport, match_format)
    return {
        "sport": sport,
        "match_format": match_format,
        "source": rules_source(),
        "configured": catalog.as_dict(),
        "resolved": catalog.resolved(),
    }


def reset_cache() -> None:
    _load_raw_rules.cache_clear()
    _sport_names.cache_clear()
    load_catalog.cache_clear()
