from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Query

from fantasy_admin.services import rules_service

router = APIRouter()


@router.get("")
def get_rules(
    sport: str = Query("cricket", description="Sport whose rules to resolve"),
    match_format: Optional[str] = Query(None, description="Optional match format e.g. T20"),
) -> Dict[str, Any]:
    """Return configured scoring rules and the effective value of every known action."""
    try:
        return rules_service.describe(sport.strip().lower(), match_format)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/reload")
def reload_rules() -> Dict[str, Any]:
    """Drop cached catalogs so the next request reads rules afresh."""
    rules_service.reset_cache()
    return {"reloaded": True, "source": rules_service.rules_source()}
