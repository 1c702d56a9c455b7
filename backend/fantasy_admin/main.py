from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fantasy_admin.api.v1.api import api_router
from fantasy_admin.core.config import get_settings
from fantasy_admin.core.logging import configure_engine_logging

settings = get_settings()
configure_engine_logging()

app = FastAPI(title="Fantasy Admin Scoring Backend", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
def root() -> dict:
    return {"service": "fantasy-admin-backend", "version": app.version}
