"""Application configuration via pydantic-settings."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "StayVista"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    api_prefix: str = ""
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    workers: int = 4

    # Database
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "stayvista"
    postgres_password: str = Field(default="stayvista_secret")
    postgres_db: str = "stayvista"
    database_dsn: Optional[str] = None  # Full async URL, e.g. sqlite+aiosqlite:///./stayvista.db
    db_pool_size: int = 20
    db_max_overflow: int = 10
    create_tables_on_startup: bool = False

    @computed_field
    @property
    def database_url(self) -> str:
        """Async database connection URL."""
        if self.database_dsn:
            return self.database_dsn
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field
    @property
    def sync_database_url(self) -> str:
        """Sync database connection URL for Alembic."""
        if self.database_dsn:
            return self.database_dsn.replace("+asyncpg", "").replace("+aiosqlite", "")
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_db: int = 0

    @computed_field
    @property
    def redis_url(self) -> str:
        """Redis connection URL."""
        auth = f":{self.redis_password}@" if self.redis_password else ""
        return f"redis://{auth}{self.redis_host}:{self.redis_port}/{self.redis_db}"

    # Session token (JWT in an HTTP-only cookie)
    jwt_secret_key: str = Field(default="your-super-secret-key-change-in-production")
    jwt_algorithm: str = "HS256"
    session_token_expire_days: int = 365
    session_cookie_name: str = "token"
    session_cookie_samesite: Optional[Literal["lax", "strict", "none"]] = None

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def cookie_samesite(self) -> str:
        """SameSite policy: strict locally, none for cross-origin production frontends."""
        if self.session_cookie_samesite:
            return self.session_cookie_samesite
        return "none" if self.is_production else "strict"

    @property
    def cookie_secure(self) -> bool:
        return self.is_production

    # Payment Gateway
    payment_gateway: Literal["stripe", "manual"] = "stripe"
    stripe_secret_key: Optional[str] = None
    payment_currency: str = "usd"

    # Email (SendGrid)
    sendgrid_api_key: Optional[str] = None
    email_from_address: str = "noreply@stayvista.com"
    email_from_name: str = "StayVista"

    # Rate Limiting
    rate_limit_enabled: bool = True
    rate_limit_per_minute: int = 100
    # Peers allowed to set X-Forwarded-For / X-Real-IP (e.g. the load balancer)
    trusted_proxies: List[str] = []

    @property
    def rate_limiting_active(self) -> bool:
        """Limits apply outside development when enabled."""
        return self.rate_limit_enabled and self.environment != "development"

    # CORS
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:5174"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
