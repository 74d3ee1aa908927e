"""Pledgebook Settings — every tunable read from the environment (or a local .env).

Invariants:
    - Facebook and Stripe secrets are only ever read from the environment; the
      placeholders below let the app boot for local work and tests
    - get_settings() is cached, so the process sees one Settings instance
    - database_url always names an async driver (asyncpg or aiosqlite)

Design Decisions:
    - Relational tables and the key/value tables share database_url: one pool,
      one Alembic history
    - Literal-typed switches fail at startup on a typo instead of at first use
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "postgres://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    database_url: str = "postgresql+asyncpg://pledgebook:pledgebook@db:5432/pledgebook"
    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Login provider
    facebook_app_id: str = "facebook-app-id-placeholder"
    facebook_app_secret: str = "facebook-app-secret-placeholder"
    facebook_graph_url: str = "https://graph.facebook.com/v2.5"
    http_timeout_seconds: float = 10.0

    # Payment gateway
    stripe_secret_key: str = "sk_test_placeholder"
    stripe_currency: str = "usd"

    # "legacy" keeps the old base-36 idens for compatibility with existing data
    iden_scheme: Literal["secure", "legacy"] = "secure"

    cors_origins: list[str] = ["http://localhost:3000"]

    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        """Hosting providers hand out sync URLs; rewrite them to the async driver."""
        if isinstance(v, str):
            for prefix, async_prefix in _ASYNC_DRIVERS.items():
                if v.startswith(prefix):
                    return async_prefix + v[len(prefix):]
        return v

    @field_validator("stripe_currency")
    @classmethod
    def lowercase_currency(cls, v: str) -> str:
        return v.lower()


@lru_cache
def get_settings() -> Settings:
    return Settings()
