# bloodlink/core/config.py
import os
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

# backend/bloodlink/core/config.py -> repo root
REPO_ROOT = Path(__file__).resolve().parents[3]


class ConfigError(RuntimeError):
    """Raised when the process environment cannot produce valid settings."""


class Settings(BaseSettings):
    mongo_uri: str
    mongo_db: str = "bloodlink"
    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = Field(
        "development",
        validation_alias=AliasChoices("APP_ENV", "NODE_ENV", "environment"),
    )
    cors_origin: Optional[str] = None
    frontend_dir: Path = REPO_ROOT / "frontend"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


def _env_is_production() -> bool:
    env = os.getenv("APP_ENV") or os.getenv("NODE_ENV") or os.getenv("ENVIRONMENT") or ""
    return env.strip().lower() == "production"


def load_settings() -> Settings:
    # .env is a development convenience; production reads the real environment only
    env_file = None if _env_is_production() else ".env"
    try:
        return Settings(_env_file=env_file)
    except ValidationError as exc:
        missing = {err["loc"][0] for err in exc.errors() if err["type"] == "missing"}
        if "mongo_uri" in missing:
            raise ConfigError(
                "MONGO_URI is missing. Set it in the environment or in a .env file."
            ) from exc
        raise ConfigError(f"Invalid configuration: {exc}") from exc
