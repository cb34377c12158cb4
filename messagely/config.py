"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in production)
    - get_settings() is cached (lru_cache) — single instance per process
    - Settings are frozen: the signing key and work factor never change at runtime

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - security() hands an immutable SecurityConfig to constructors, so the
      hasher and token issuer never read settings as ambient globals
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from messagely.core.domain_types import SecurityConfig


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, frozen=True,
    )

    # Database
    database_url: str = (
        "postgresql+asyncpg://messagely:messagely@db:5432/messagely"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_timeout_seconds: float = 10.0

    # Security
    secret_key: str = "dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    bcrypt_work_factor: int = Field(12, ge=4, le=31)

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def security(self) -> SecurityConfig:
        return SecurityConfig(
            secret_key=self.secret_key,
            jwt_algorithm=self.jwt_algorithm,
            bcrypt_work_factor=self.bcrypt_work_factor,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
