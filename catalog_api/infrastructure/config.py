"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    database_url: str = "postgresql+asyncpg://catalog:catalog_dev_password@db:5432/catalog"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    create_tables_on_startup: bool = False

    # Catalog search
    default_items_per_page: int = 10
    max_items_per_page: int = 100
    query_timeout_seconds: float = 10.0

    # Uploaded product images
    media_dir: str = "media"
    media_url_prefix: str = "/media"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
