"""Application settings.

Read from ``TERESA_*`` environment variables or a ``.env`` file.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TERESA_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # HTTP service
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = "INFO"

    # Random playouts
    max_plies: int = Field(default=200, ge=0)
    seed: Optional[int] = None

    # Rendering
    unicode_board: bool = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
