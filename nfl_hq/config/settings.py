import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Upstream Sources
    schedule_api_base_url: str = Field(
        "https://cf-gotham.sportskeeda.com/taxonomy/sport/nfl/schedule",
        description="Base URL of the per-team Sportskeeda schedule endpoint.",
    )
    season: int = Field(2025, ge=1920, description="Season year to fetch.")
    sos_url: str = Field(
        "https://statics.sportskeeda.com/assets/sheets/tools/draft-order/draft_order.json",
        description="Draft order sheet carrying strength of schedule per team.",
    )
    user_agent: str = Field(
        "Mozilla/5.0 (compatible; NFL-Team-Pages/1.0)",
        description="User-Agent header sent with every upstream request.",
    )

    # Request / Retry Settings
    request_timeout_seconds: float = Field(
        10.0, gt=0, description="Timeout applied to each individual attempt."
    )
    max_retries: int = Field(
        2, ge=0, description="Extra attempts after the first one fails."
    )
    retry_base_delay_seconds: float = Field(
        1.0, ge=0, description="Delay before the first retry."
    )
    retry_multiplier: float = Field(
        2.0, ge=1, description="Growth factor applied to the delay per retry."
    )

    # Batching Settings
    batch_size: int = Field(
        8, ge=1, description="Teams fetched concurrently in one batch."
    )
    batch_delay_seconds: float = Field(
        0.1, ge=0, description="Pause between consecutive batches."
    )

    # Cache Settings
    cache_ttl_seconds: float = Field(
        3600.0, gt=0, description="Freshness window of the standings cache."
    )
    single_flight: bool = Field(
        False,
        description="Share one in-flight computation between concurrent cache misses.",
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
