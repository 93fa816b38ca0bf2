"""Application configuration via environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class QTrackConfig(BaseSettings):
    """All configuration loaded from QTRACK_* env vars or .env file."""

    # Storage
    storage_backend: str = "sqlite"  # "sqlite" | "memory"
    db_path: str = "data/qtrack.db"

    # Admin API token (gate updates)
    admin_token: str = "dev-token-change-me"

    # Quality monitoring
    gates_file: str = ""
    metrics_retention_days: int = 7

    # HTTP
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    log_level: str = "INFO"

    model_config = {
        "env_prefix": "QTRACK_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def allowed_origins(self) -> list[str]:
        if not self.cors_origins:
            return []
        return [x.strip() for x in self.cors_origins.split(",") if x.strip()]
