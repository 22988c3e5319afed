"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Tasting Events"
    debug: bool = False
    log_dir: str = ""  # Empty logs to stderr

    # Server
    host: str = "0.0.0.0"  # Bind to all interfaces for external access
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Database
    database_url: str = "sqlite:///./tasting_events.db"

    # Identity proxy headers (the OIDC handshake happens in front of us)
    auth_enabled: bool = True
    auth_subject_header: str = "X-Auth-Request-User"
    auth_email_header: str = "X-Auth-Request-Email"
    auth_nickname_header: str = "X-Auth-Request-Preferred-Username"
    auth_scopes_header: str = "X-Auth-Request-Scopes"
    admin_scope: str = "admin-scope"

    # Join codes
    join_code_length: int = 8
    join_code_max_attempts: int = 10


settings = Settings()
