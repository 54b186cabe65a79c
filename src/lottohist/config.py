"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars with LOTTOHIST_ prefix.
Loaded once at import time and treated as read-only afterwards; the
token service and stores receive the values they need explicitly.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """All app configuration. Set via LOTTOHIST_* env vars."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./lottohist.db"
    auto_create_schema: bool = True

    # Auth
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 7
    bcrypt_rounds: int = 12  # ~100ms+ per verify

    # Histories
    history_list_limit: int = 20

    # Server
    environment: str = "development"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    model_config = {"env_prefix": "LOTTOHIST_"}

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Refuse the documented default secret outside development."""
        if self.environment != "development" and self.jwt_secret == DEFAULT_JWT_SECRET:
            raise ValueError(
                "LOTTOHIST_JWT_SECRET must be set to a secure value in "
                "non-development environments. Generate one with: "
                "lottohist gen-secret"
            )
        return self

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET


# Singleton — import this everywhere
settings = Settings()
