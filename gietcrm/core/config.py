"""
GietCRM configuration.
All environment variables are read here and nowhere else.
"""

from functools import lru_cache
from typing import Optional, List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Main application settings.
    Values are loaded from environment variables or the .env file.
    """

    # Application
    APP_NAME: str = "GietCRM"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    ENVIRONMENT: str = "development"

    # Server
    HOST: str = "0.0.0.0"

    # Hosted backend (Supabase). Both are required for any data access.
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""

    # None means no client-side timeout: wait for the transport
    BACKEND_TIMEOUT: Optional[float] = None

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    @property
    def is_configured(self) -> bool:
        """Both backend connection parameters are present."""
        return bool(self.SUPABASE_URL.strip() and self.SUPABASE_ANON_KEY.strip())

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"


@lru_cache()
def get_settings() -> Settings:
    """
    Return the single settings instance.
    Cached so the environment is read once per process.
    """
    return Settings()


settings = get_settings()
