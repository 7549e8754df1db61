# catalog/core/config.py

import json
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # The environment mode: 'local' or 'prod'
    ENV: str = "local"

    # --- Database URLs ---
    DATABASE_URL_LOCAL: str = "sqlite:///./catalog.db"
    DATABASE_URL_PROD: Optional[str] = None
    SQL_ECHO: bool = False

    # Upper bound on how long a scope save waits for the type row lock (PostgreSQL only)
    SCOPE_LOCK_TIMEOUT_MS: int = 5000

    # --- Admin token validation ---
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    ADMIN_ROLE: str = "admin"

    # CORS - stored as string, parsed via get_cors_origins()
    CORS_ORIGINS: Optional[str] = None

    LOG_LEVEL: str = "INFO"

    @property
    def DATABASE_URL(self) -> str:
        if self.ENV == "local" or not self.DATABASE_URL_PROD:
            return self.DATABASE_URL_LOCAL
        return self.DATABASE_URL_PROD

    def get_cors_origins(self) -> List[str]:
        """Parse CORS_ORIGINS from a comma-separated string or a JSON array."""
        if not self.CORS_ORIGINS:
            return []
        v = self.CORS_ORIGINS.strip()
        if not v:
            return []
        if v.startswith("["):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        return [origin.strip() for origin in v.split(",") if origin.strip()]


# Create a single instance of the settings
settings = Settings()
