"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Secrets and deployment settings come from environment variables
    - get_settings() is cached (lru_cache): single instance per process
    - The engine never reads the environment; validation_defaults() turns the
      DISCOVERY_* overlay into an explicit ValidationConfig handed to the core

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from founder_discovery.core.validation_config import ValidationConfig


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://discovery:discovery@db:5432/discovery"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Validation thresholds overlay (unset = engine default)
    discovery_min_interviews_for_validation: int | None = None
    discovery_min_beachhead_interviews: int | None = None
    discovery_min_support_ratio: float | None = None

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def validation_defaults(self) -> ValidationConfig:
        """Engine defaults with the DISCOVERY_* environment overlay applied."""
        overrides = {
            "minimum_interviews_for_validation": self.discovery_min_interviews_for_validation,
            "minimum_beachhead_interviews": self.discovery_min_beachhead_interviews,
            "minimum_support_ratio": self.discovery_min_support_ratio,
        }
        return ValidationConfig().with_overrides(
            **{k: v for k, v in overrides.items() if v is not None},
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
