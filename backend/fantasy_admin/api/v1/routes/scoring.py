from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, File, HTTPException, Query, UploadFile
from pydantic import ValidationError

from fantasy_admin.services import scoring_service
from fantasy_admin.services.upload_service import score_upload

router = APIRouter()


@router.post("/fixed/{sport}")
def fixed_points(sport: str, stats: Dict[str, Any] = Body(..., description="Raw stat row")) -> Dict[str, Any]:
    """Authoritative fixed-formula points for one player's stat row."""
    try:
        return scoring_service.fixed_score(sport, stats)
    except (ValidationError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/preview/{sport}")
def preview(
    sport: str,
    payload: Dict[str, Any] = Body(..., description="{'stats': {...}, 'overrides': {...}, 'match_format': 'T20'}"),
) -> Dict[str, Any]:
    """Recompute points and breakdown under the current rules without writing anything."""
    stats = payload.get("stats")
    if not isinstance(stats, dict):
        raise HTTPException(status_code=400, detail="Payload must contain a 'stats' object")
    overrides = payload.get("overrides")
    if overrides is not None and not isinstance(overrides, dict):
        raise HTTPException(status_code=400, detail="'overrides' must be an object of action -> points")
    try:
        return scoring_service.preview(sport, stats, overrides=overrides, match_format=payload.get("match_format"))
    except (ValidationError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/batch/{sport}")
def batch(
    sport: str,
    payload: Dict[str, Any] = Body(..., description="Stat rows as list of objects under key 'rows'"),
    match_format: Optional[str] = Query(None),
    limit: int = Query(10, ge=1, le=100),
) -> Dict[str, Any]:
    """Score a team or match worth of players and rank teams and players."""
    rows: Optional[List[Dict[str, Any]]] = payload.get("rows")
    if not isinstance(rows, list):
        raise HTTPException(status_code=400, detail="Payload must contain 'rows' list")
    try:
        return scoring_service.score_batch(sport, rows, match_format=match_format, overrides=payload.get("overrides"), limit=limit)
    except (ValidationError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/upload/{sport}")
async def upload(
    sport: str,
    file: UploadFile = File(..., description="CSV or Excel stat sheet"),
    match_format: Optional[str] = Query(None),
    limit: int = Query(10, ge=1, le=100),
) -> Dict[str, Any]:
    content = await file.read()
    try:
        return score_upload(content, file.filename, sport, match_format=match_format, limit=limit)
    except (ValidationError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))
