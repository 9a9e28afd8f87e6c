from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BACKEND_ROOT = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LOGON_HOURS_")

    database_path: Path = Field(default=BACKEND_ROOT / "logon_hours.db")
    log_level: str = Field(default="INFO")

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)

    # JSON list, e.g. LOGON_HOURS_CORS_ORIGINS='["http://localhost:5173"]'
    cors_origins: List[str] = Field(default=["http://localhost:5173"])

    # Idle configuration sessions are dropped after this many seconds
    session_ttl_seconds: float = Field(default=1800, gt=0)
    max_sessions: int = Field(default=1000, gt=0)

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.database_path}"


settings = Settings()
