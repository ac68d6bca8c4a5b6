"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "Catalog Admin"
    log_level: str = "INFO"

    # Catalog API
    catalog_api_base_url: str = "http://localhost:5000/api"
    catalog_api_timeout: float = 10.0
    catalog_api_max_attempts: int = 3

    # "client" builds the tree from the flat list, "server" uses categories/tree/hierarchy
    category_tree_source: str = "client"

    # Session cookies
    session_max_age: int = 86400

    # Product form
    max_product_images: int = 5
    default_brand: str = "Wood Villa Furniture Factory"

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


# Global settings instance
settings = Settings()
