"""
Application settings
Loaded from FINCORE_* environment variables or a .env file
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FINCORE_",
        env_file=".env",
        extra="ignore",
    )

    app_env: str = "development"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = "logs/fincore.log"

    # Data
    data_dir: str = "data"
    seed_path: str = "data/seed.json"
    default_user_id: str = "demo"


@lru_cache
def get_settings() -> Settings:
    return Settings()
