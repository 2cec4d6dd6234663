"""Admin Backend — Configuration via pydantic-settings."""

import os
from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV"),
    )

    # Server
    APP_PORT: int = 3000
    API_VERSION: str = "1"
    DOCS_PATH: str = "/api-docs"
    CORS_ORIGINS: List[str] = ["*"]

    # Database
    DATABASE_URL: str

    # Logging
    LOG_LEVEL: Optional[str] = None
    LOG_DIR: str = "./logs"
    LOG_MAX_BYTES: int = Field(default=10 * 1024 * 1024, ge=0)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def log_level(self) -> str:
        if self.LOG_LEVEL:
            return self.LOG_LEVEL.upper()
        return "INFO" if self.is_production else "DEBUG"


@lru_cache
def get_settings() -> Settings:
    env = os.getenv("ENVIRONMENT") or os.getenv("NODE_ENV") or "development"
    return Settings(_env_file=(".env", f".env.{env}"))
