"""Application settings, read from the environment (``STOREFRONT_*``) or ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_", env_file=".env", extra="ignore"
    )

    environment: Literal["development", "production"] = "production"

    store_backend: Literal["json", "mongo"] = "json"
    data_path: Path = _DATA_DIR / "storefront.json"
    mongo_url: str = "mongodb://localhost:27017/?replicaSet=rs0"
    mongo_database: str = "storefront"

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"

    log_level: str = "INFO"
    log_file: Path | None = None

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
