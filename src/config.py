"""Configuration management for the marketplace service."""

from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Redis Configuration
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis URL")
    redis_key_prefix: str = Field(
        default="marketplace", description="Namespace for every stored key"
    )

    # API Configuration
    api_port: int = Field(default=8000, description="API server port")
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_workers: int = Field(default=4, description="Number of API workers")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "text"] = Field(default="json", description="Log format")

    # Pricing
    default_delivery_fee: Decimal = Field(
        default=Decimal("5"),
        ge=0,
        description="Flat delivery fee when the restaurant has no valid override",
    )
    driver_commission_rate: Decimal = Field(
        default=Decimal("0.70"),
        ge=0,
        le=1,
        description="Share of the delivery fee paid to the driver",
    )

    # Orders
    available_orders_limit: int = Field(
        default=10, description="Max unassigned orders offered to a driver"
    )
    max_transaction_retries: int = Field(
        default=5, description="Optimistic transaction retries before giving up"
    )

    # Errors
    server_error_message: str = Field(
        default="Server error, please try again",
        description="Message returned with unexpected 500 responses",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v_upper


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
