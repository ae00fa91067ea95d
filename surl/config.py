from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every field can be overridden with a SURL_-prefixed variable,
    e.g. SURL_WEBSITE, SURL_HOST, SURL_PORT.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Application
    app_name: str = "SURL"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "127.0.0.1"
    port: int = 7777

    # Public base URL prepended to issued identifiers (e.g. "https://s.example.com")
    website: str = ""

    # Persistent store
    store_backend: str = "sqlite"  # Options: "sqlite", "redis", "memory"
    store_path: str = "surl_db"  # Directory holding the SQLite file
    sqlite_journal_mode: str = "WAL"
    sqlite_synchronous: str = "FULL"
    redis_url: str = "redis://localhost:6379/0"

    # Logging
    log_level: str = "INFO"

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_prefix="SURL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
