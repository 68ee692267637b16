"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Missing provider keys are allowed: payment raises 503, routing falls back to mock

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults for every non-secret setting: the demo runs with no .env at all
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # API
    cors_origins: list[str] = ["*"]
    seed_demo_data: bool = True

    # Token auth (demo credentials, overridable)
    auth_enabled: bool = True
    api_username: str = "API-SPECIALIST"
    api_password: str = "secure123"
    api_user_email: str = "apispecialist@example.com"

    # User accounts (/users): bcrypt hashes, HS256 JWTs
    jwt_secret: str = "shuttle-dev-jwt-secret-change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 120
    password_hash_rounds: int = 12

    # Payment provider (Stripe Checkout)
    stripe_secret_key: str | None = None
    stripe_api_base: str = "https://api.stripe.com/v1"
    payment_timeout_seconds: float = 30.0
    checkout_currency: str = "usd"
    checkout_success_url: str = "http://localhost:3001/success"
    checkout_cancel_url: str = "http://localhost:3001/cancel"

    # Routing provider (GraphHopper)
    graphhopper_api_key: str | None = None
    graphhopper_base_url: str = "https://graphhopper.com/api/1"
    routing_timeout_seconds: float = 30.0
    graphhopper_mock_fallback: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("stripe_secret_key", "graphhopper_api_key", mode="before")
    @classmethod
    def blank_key_is_none(cls, v):
        """Empty env vars (KEY=) mean "not configured"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("checkout_currency")
    @classmethod
    def lowercase_currency(cls, v: str) -> str:
        return v.lower()


@lru_cache
def get_settings() -> Settings:
    return Settings()
