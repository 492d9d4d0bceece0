from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Profit Pulse"
    debug: bool = False

    # API
    frontend_url: str = "http://localhost:3000"
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "https://profitpulse.tangentforge.com",
    ]

    # Redis (webhook idempotency claims + credit ledger)
    redis_url: str = "redis://localhost:6379"
    webhook_event_ttl_seconds: int = 60 * 60 * 24 * 30

    # Anthropic
    anthropic_api_key: str = ""
    ai_enabled: bool = True  # env: AI_ENABLED
    ai_fast_model: str = "claude-3-5-haiku-20241022"
    ai_quality_model: str = "claude-sonnet-4-20250514"
    ai_max_tokens: int = 1000

    # Stripe
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    stripe_price_starter: str = ""
    stripe_price_explorer: str = ""


@lru_cache
def get_settings() -> Settings:
    return Settings()
