from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APP_",
        extra="ignore",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = [
        "http://localhost:4200",
        "http://localhost:8000",
        "http://127.0.0.1:4200",
        "http://127.0.0.1:8000",
    ]

    cors_origin_regex: str | None = None
    trusted_hosts: list[str] = ["*"]
    root_path: str = ""

    # Record store
    backend: Literal["rest", "supabase"] = "rest"
    rest_base_url: str = "http://localhost:3000"
    rest_timeout: float = 10.0  # Seconds per request to the JSON store

    # Supabase (only read when backend == "supabase")
    supabase_url: str = ""
    supabase_anon_key: str = ""

    # Sessions
    session_file: str | None = None  # JSON file used to restore sessions across restarts

    # Authentication security settings
    max_login_attempts: int = 5  # Maximum failed login attempts before rate limiting
    login_attempt_window: int = 300  # Time window for login attempts (5 minutes)
    enable_rate_limiting: bool = True  # Enable rate limiting for auth endpoints

    # Change notifications
    event_queue_size: int = 100  # Pending events kept per subscriber


settings = Settings()
