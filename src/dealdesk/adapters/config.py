# src/dealdesk/adapters/config.py
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # persistence
    DB_URI: str = Field(default="sqlite:///dealdesk.db")
    STORE_BACKEND: str = Field(default="sql")

    # Single key holding the whole deal id -> underwriting record mapping
    UNDERWRITING_STORE_KEY: str = Field(default="leads_uw_analyses")

    model_config = SettingsConfigDict(
        env_prefix="DEALDESK_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("STORE_BACKEND", mode="before")
    @classmethod
    def _known_backend(cls, v: Any) -> Any:
        b = str(v or "").strip().lower()
        if b not in ("sql", "memory"):
            raise ValueError("STORE_BACKEND must be 'sql' or 'memory'")
        return b

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, v: Any) -> Any:
        return str(v or "INFO").strip().upper()

    @field_validator("UNDERWRITING_STORE_KEY")
    @classmethod
    def _non_empty_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("UNDERWRITING_STORE_KEY must not be empty")
        return v


config = AppConfig()
