from typing import Any, Dict

from fastapi import APIRouter

from fantasy_admin.services import rules_service, store_client

router = APIRouter()


@router.get("/live")
def live() -> dict:
    """Liveness probe for platform health checks."""
    return {"status": "ok"}


@router.get("/ready")
def ready() -> Dict[str, Any]:
    """Readiness probe reporting where scoring rules are loaded from."""
    return {
        "status": "ready",
        "store_configured": store_client.is_configured(),
        "rules_source": rules_service.rules_source(),
    }
