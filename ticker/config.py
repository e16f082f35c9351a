"""Configuration settings for the dev ticker server."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables (TICKER_ prefix)."""

    # Listening address
    host: str = "0.0.0.0"
    port: int = 9876

    # Token catalog (JSON array of {symbol, address, ...})
    tokens_path: str = "etc/tokens/localhost.json"

    # Fault injection; the --sloppy CLI flag forces this on
    sloppy: bool = False

    # Grace period for in-flight connections on shutdown
    shutdown_timeout_seconds: int = 1

    cors_max_age_seconds: int = 3600

    # Service identification
    service_name: str = "dev-ticker"
    log_level: str = "INFO"

    class Config:
        env_prefix = "TICKER_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
