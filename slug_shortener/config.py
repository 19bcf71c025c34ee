from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"  # Options: "development", "production"
    debug: bool = False
    log_level: str = "INFO"

    # Application
    app_name: str = "Slug Shortener"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 3000

    # Storage
    store_backend: str = "sqlalchemy"  # Options: "sqlalchemy", "memory"
    database_url: str = "sqlite:///./slug_shortener.db"

    # Slug rules
    slug_min_length: int = 5
    slug_max_length: int = 20
    generated_slug_length: int = 5
    max_retries: int = 5  # Attempts for a randomly generated slug
    normalize_schemeless_urls: bool = True  # "example.com" -> "http://example.com"

    # Cache settings
    cache_backend: str = "null"  # Options: "redis", "memory", "null"
    redis_url: str = "redis://localhost:6379/0"
    cache_ttl: int = 3600  # Cache TTL in seconds (1 hour)

    # Rate limiting for POST /url (per client IP)
    rate_limit_enabled: bool = True
    rate_limit_window_seconds: int = 30
    rate_limit_max_requests: int = 2
    slow_down_delay_after: int = 2
    slow_down_delay_ms: int = 500
    slow_down_max_delay_ms: int = 5000
    trust_forwarded_for: bool = False  # Only behind a proxy that sets X-Forwarded-For

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


# Create settings instance
settings = Settings()
