"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from typing import List


DEFAULT_MERCHANT_STOPLIST = [
    "transfer",
    "payment",
    "deposit",
    "withdrawal",
    "atm",
    "venmo",
    "zelle",
    "paypal",
    "cash app",
    "wire",
    "interest",
    "fee",
    "refund",
]


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "Subscout"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./data/db.sqlite"

    # Import paths
    import_inbox_path: str = "./data/imports/inbox"
    import_processed_path: str = "./data/imports/processed"
    import_failed_path: str = "./data/imports/failed"

    # Subscription detection
    detection_lookback_months: int = 13  # one yearly renewal plus slack
    detection_min_transactions: int = 2
    detection_confidence_floor: float = 0.4
    detection_high_amount_variance: float = 0.25
    detection_amount_variance_penalty: float = 0.2
    merchant_stoplist: List[str] = DEFAULT_MERCHANT_STOPLIST

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    frontend_url: str = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


# Global settings instance
settings = Settings()
