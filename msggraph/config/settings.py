"""
msggraph - Configuration Settings
Environment driven defaults for compilation and logging.
"""

import logging
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """msggraph settings, read from the environment or a .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ── Runtime ───────────────────────────────────────────────────────
    environment: str = Field(default="dev", alias="ENVIRONMENT")

    # ── Logging ───────────────────────────────────────────────────────
    log_level: str = Field(default="WARNING", alias="MSGGRAPH_LOG_LEVEL")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        alias="MSGGRAPH_LOG_FORMAT",
    )

    # ── Compilation ───────────────────────────────────────────────────
    # Run MessageGraph.validate() on every compile() that does not say otherwise.
    # Unset means on in prod, off elsewhere.
    strict_compile: Optional[bool] = Field(default=None, alias="MSGGRAPH_STRICT_COMPILE")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        allowed = ["dev", "development", "test", "qa", "prod"]
        if v.lower() not in allowed:
            logger.warning(f"[SETTINGS] environment '{v}' not in {allowed}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"log level '{v}' not in {allowed}")
        return v.upper()

    @model_validator(mode="after")
    def default_strict_compile(self) -> "Settings":
        if self.strict_compile is None:
            self.strict_compile = self.environment == "prod"
        return self


def get_settings() -> Settings:
    """Fresh Settings built from the current environment."""
    return Settings()


settings = Settings()
