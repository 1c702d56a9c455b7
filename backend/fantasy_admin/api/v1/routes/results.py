from fastapi import APIRouter, HTTPException, Query

from fantasy_admin.services.scoring_service import StatRowNotFound, StoreUnavailable, record_result

router = APIRouter()


@router.post("/{stat_id}/record")
def record(stat_id: int, sport: str = Query(..., description="cricket or football")) -> dict:
    """Store the fixed-formula fantasy points with a recorded match result."""
    try:
        return record_result(stat_id, sport)
    except StoreUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc))
    except StatRowNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except RuntimeError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
