"""Configuration management for Sheetwright using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sheetwright.engine.policies import EnginePolicies, ProgressionPolicy, VitalityPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="SHEETWRIGHT_",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Enable debug mode (echoes SQL)")

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/sheetwright.db",
        description="Database connection URL",
        alias="DATABASE_URL",
    )

    # Derivation policies
    vitality_policy: VitalityPolicy = Field(
        default=VitalityPolicy.ADDITIVE_TIERS,
        description="Vitality tier formula (additive-tiers or stepped-fraction)",
    )
    progression_policy: ProgressionPolicy = Field(
        default=ProgressionPolicy.RECOMPUTED,
        description="XP-to-next-level source (recomputed or trust-stored)",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level", alias="LOG_LEVEL")
    log_format: str = Field(
        default="console", description="Log format (console or json)", alias="LOG_FORMAT"
    )

    @property
    def data_dir(self) -> Path:
        """Get the data directory path."""
        return Path("./data")

    def engine_policies(self) -> EnginePolicies:
        """Bundle the configured derivation policies for the engine."""
        return EnginePolicies(
            vitality=self.vitality_policy,
            progression=self.progression_policy,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
