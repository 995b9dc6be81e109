from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below

    An empty database_url or cache_backend means the store is not
    configured; handlers answer 500 instead of touching it.
    """

    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Application
    app_name: str = "URL Shortener"
    service_name: str = "url-shortener"
    app_version: str = "1.0.0"

    # Relational store
    database_url: str = "sqlite:///./url_shortener.db"

    # Listing
    list_limit: int = 100

    # Cache settings
    cache_backend: str = "redis"  # Options: "redis", "memory", "null"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl: int = 86400  # Default cache TTL in seconds (24 hours)

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
