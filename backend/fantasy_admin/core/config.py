from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    api_prefix: str = "/api/v1"
    data_dir: Path = Field(default_factory=lambda: Path(__file__).resolve().parents[3])
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    store_url: Optional[str] = None
    store_api_key: Optional[str] = None
    store_timeout: int = 10
    rules_table: str = "scoring_rules"
    sports_table: str = "sports"
    sport_ids: Dict[int, str] = Field(default_factory=lambda: {1: "cricket", 2: "football"})
    stats_table: str = "player_match_stats"
    log_level: str = "INFO"

    class Config:
        env_prefix = "FANTASY_"
        env_file = ".env"
        case_sensitive = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
