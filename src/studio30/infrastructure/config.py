"""Runtime settings, read from the environment (or a ``.env`` file).

  STUDIO30_DATA_DIR             JSON data directory (default ./data)
  STUDIO30_DATABASE_URL         when set, products and stock movements live
                                in this database instead of JSON files
  STUDIO30_LOG_LEVEL            DEBUG / INFO / WARNING ... (default INFO)
  STUDIO30_LOW_STOCK_THRESHOLD  stock at or below this is "low" (default 2)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    data_dir: Path = Field(default=Path("data"), validate_default=True)
    database_url: Optional[str] = Field(default=None)
    log_level: str = Field(default="INFO")
    low_stock_threshold: int = Field(default=2, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="STUDIO30_", env_file=".env", extra="ignore", frozen=True
    )

    @field_validator("data_dir")
    @classmethod
    def _absolute_data_dir(cls, value: Path) -> Path:
        return value.resolve()

    @field_validator("database_url")
    @classmethod
    def _blank_url_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read once."""
    return Settings()
