from fastapi import APIRouter

from fantasy_admin.api.v1.routes import health, results, rules, scoring

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(rules.router, prefix="/rules", tags=["rules"])
api_router.include_router(scoring.router, prefix="/scoring", tags=["scoring"])
api_router.include_router(results.router, prefix="/results", tags=["results"])
