"""
Application configuration using Pydantic Settings.

Configuration values can be set via environment variables (prefixed with
``SNIPPETBOX_``) or a .env file.
"""

from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="SNIPPETBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "Snippetbox"
    env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # HTTP server
    bind_addr: str = "localhost"
    bind_port: int = 4000
    shutdown_timeout: float = 5.0  # seconds allowed for in-flight requests
    tls_enabled: bool = False
    tls_cert_file: str = "./tls/cert.pem"
    tls_key_file: str = "./tls/key.pem"

    # Data store
    db_dsn: str = "sqlite:///./snippetbox.db"

    # Sessions
    session_store: Literal["sql", "memory"] = "sql"
    session_cookie: str = "session"
    session_lifetime_hours: float = 12.0
    session_cleanup_interval: float = 300.0  # seconds between expired-session sweeps, 0 disables

    # Rate limiting configuration
    rate_limit_auth_endpoints: str = "10/minute"

    # Optional Redis URL for distributed rate limiting
    # When set, rate limits will be shared across multiple instances
    redis_url: Optional[str] = None

    @property
    def addr(self) -> str:
        return f"{self.bind_addr}:{self.bind_port}"

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def secure_cookies(self) -> bool:
        """Session cookies are only marked Secure when served over TLS."""
        return self.tls_enabled


# Global settings instance
settings = Settings()
