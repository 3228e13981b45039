"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "postgresql+asyncpg://catalog:catalog_dev_password@db:5432/products"

    # Catalog queries
    default_page: int = 1
    default_page_size: int = 10
    search_strategy: str = "like"  # "like" or "fulltext"
    featured_products_limit: int = 8
    related_products_limit: int = 4

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
