"""Settings module using pydantic-settings for configuration management."""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service Configuration
    service_name: str = Field(default="document-catalog-service")
    environment: str = Field(default="development")
    port: int = Field(default=8006)
    host: str = Field(default="0.0.0.0")

    # Database Configuration (SQLite for documents and categories)
    database_url: str = Field(default="sqlite+aiosqlite:///./catalog.db")

    # Uploaded file storage
    upload_dir: str = Field(default="./uploads")
    max_upload_size: int = Field(default=10 * 1024 * 1024)  # 10MB

    # Pagination Configuration
    default_page_size: int = Field(default=20)
    max_page_size: int = Field(default=100)

    # Suggestions and popular terms
    suggestion_min_length: int = Field(default=2)
    suggestion_candidates: int = Field(default=10)
    suggestion_limit: int = Field(default=8)
    popular_documents: int = Field(default=10)
    popular_limit: int = Field(default=10)

    # Categories
    default_category_color: str = Field(default="#3B82F6")

    # Classification rule tables (YAML); packaged defaults when unset
    classification_rules_path: Optional[str] = Field(default=None)

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
