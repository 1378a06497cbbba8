from typing import Optional, List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.core.constants import (
    BankDataEnvironment,
    Environment,
    RateLimiterBackend,
    TokenCounterType,
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment Profile
    environment: Environment = Environment.LOCAL

    # API Settings
    app_name: str = "Ynter Gateway"
    api_version: str = "v1"
    debug: bool = False

    # Database Components
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "ynter"
    db_use_nullpool: bool = False
    db_pool_size: int = 10
    db_pool_overflow: int = 5

    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        return f"postgresql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def async_database_url(self) -> str:
        return self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    # Redis
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_db: int = 0

    @property
    def redis_connection_url(self) -> str:
        """Construct Redis URL from components."""
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
        else:
            return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

    # Rate limiting
    rate_limiter_backend: RateLimiterBackend = RateLimiterBackend.REDIS

    # Usage metering
    max_tokens_month_basic: int = Field(default=15_000_000, gt=0)
    token_counter: TokenCounterType = TokenCounterType.TIKTOKEN
    token_encoding: str = "o200k_base"

    # Supabase Auth
    supabase_jwt_secret: str = ""
    supabase_jwt_audience: str = "authenticated"

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_max_tokens: int = 2000
    openai_timeout_seconds: float = 120.0

    # Plaid
    plaid_client_id: str = ""
    plaid_secret: str = ""
    plaid_environment: BankDataEnvironment = BankDataEnvironment.SANDBOX
    plaid_client_name: str = "Ynter"

    @property
    def plaid_base_url(self) -> str:
        """Auto-select Plaid host based on the configured environment."""
        return f"https://{self.plaid_environment.value}.plaid.com"

    # Google Places
    google_places_api_key: str = ""

    # OpenTelemetry
    otel_service_name: str = "ynter-gateway"
    otel_service_version: str = "0.1.0"

    # Axiom (telemetry export disabled when token is empty)
    axiom_token: str = ""
    axiom_dataset: str = ""

    @property
    def cors_allowed_origins(self) -> List[str]:
        """Auto-select CORS origins based on environment."""
        if self.environment == Environment.LOCAL:
            return [
                "http://localhost:3000",
                "http://localhost:8081",
            ]
        return [
            "https://ynter.com",
            "https://app.ynter.com",
        ]

    # Billing - Stripe (payments)
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""

    # Shared secret sent by the database webhook when an account is created
    account_webhook_key: str = ""


settings = Settings()
