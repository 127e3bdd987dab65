"""
Centralized application settings
"""
import json
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from the environment and .env"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # API Settings
    API_TITLE: str = "Back-Office API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Catalog stock management and order statistics for the store admin"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    # Database (empty is allowed at import time, connections fail loudly instead)
    DATABASE_URL: str = ""
    DB_MAX_RETRIES: int = 3
    DB_RETRY_DELAY: float = 1.0
    DB_CONNECT_TIMEOUT: int = 10

    # CORS - Can be string (comma-separated) or JSON array
    # Example: "http://localhost:3000,https://admin.example.com" or '["http://localhost:3000"]'
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:3000"

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:3000"]

        # Try JSON parse first (for array format)
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


settings = Settings()
