"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from referral_wallet.config.business_constants import (
    LOCK_RETRY_DELAY_SECONDS,
    MIN_REDEEM_AMOUNT,
    PER_REFERRAL_REWARD,
    REDEMPTION_MAX_ATTEMPTS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str
    database_echo: bool = False

    # Application
    environment: str = "production"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str | None = None

    # Referral rewards
    per_referral_reward: int = Field(
        default=PER_REFERRAL_REWARD,
        gt=0,
        description="Wallet credit per successful referral"
    )

    # Redemption
    min_redeem_amount: int = Field(
        default=MIN_REDEEM_AMOUNT,
        gt=0,
        description="Minimum amount accepted in a single redemption"
    )
    redemption_max_attempts: int = Field(
        default=REDEMPTION_MAX_ATTEMPTS,
        ge=1,
        le=5,
        description="Attempts per redemption before a lock conflict is surfaced"
    )
    lock_retry_delay: float = Field(
        default=LOCK_RETRY_DELAY_SECONDS,
        ge=0,
        description="Base delay in seconds between conflict retries"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate log level name."""
        level = v.upper()
        allowed = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(
                f"Invalid LOG_LEVEL '{v}'. Expected one of: {', '.join(sorted(allowed))}"
            )
        return level

    @model_validator(mode="after")
    def validate_production(self) -> "Settings":
        """Validate production-specific requirements."""
        if self.environment == "production":
            # DEBUG must be False in production
            if self.debug:
                raise ValueError(
                    "DEBUG must be False in production environment. "
                    "Set DEBUG=false in your .env file."
                )
            if self.database_url.startswith("sqlite"):
                raise ValueError(
                    "SQLite is not supported in production. "
                    "Set DATABASE_URL to a postgresql+asyncpg:// URL."
                )
        return self


settings = Settings()
