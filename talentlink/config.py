"""
Configuration management for TalentLink.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Database
    database_url: str = ""
    database_name: str = "TalentLinkDB"

    # API
    cors_origins: str = "http://localhost:5173"
    enable_debug_routes: bool = True
    rate_limit_enabled: bool = True
    rate_limit_auth: str = "10/minute"
    port: int = 3000

    # Workflows
    enforce_status_transitions: bool = False
    password_hash_iterations: int = 200_000

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


settings = Settings()
