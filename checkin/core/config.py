"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Event Check-In"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"  # Bind to all interfaces for check-in stations on the LAN
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Logging
    log_dir: str = "~/.logs/checkin"

    # Database
    database_url: str = "sqlite:///./checkin.db"

    # Attendee sources; a disabled source is never registered with the resolver
    rsvp_source_enabled: bool = True
    ticket_source_enabled: bool = True


settings = Settings()
