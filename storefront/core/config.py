"""Storefront Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Gajpati Industries"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 8000

    # Catalog API Configuration
    api_base_url: str = "https://gajpati-backend.onrender.com"
    api_prefix: str = "/api/v1"
    api_token: Optional[str] = None  # Bearer token for lead-capture writes
    request_timeout: float = 30.0

    # Catalog browsing
    page_size: int = 10
    prefetch_threshold: int = 2
    search_debounce_seconds: float = 0.4
    session_max_age_hours: int = 24
    featured_product_limit: int = 20

    # Plant id overrides per category key
    bitumen_plant_id: Optional[str] = None
    gabion_plant_id: Optional[str] = None
    construct_plant_id: Optional[str] = None

    # Lead capture
    whatsapp_number: str = "9528355555"

    class Config:
        env_file = "config/.env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def api_url(self) -> str:
        """Root URL for all catalog API calls"""
        return f"{self.api_base_url.rstrip('/')}{self.api_prefix}"

    def plant_id_overrides(self) -> dict[str, str]:
        """Get configured plant ids keyed by category key"""
        overrides = {
            "bitumen": self.bitumen_plant_id,
            "gabion": self.gabion_plant_id,
            "construct": self.construct_plant_id,
        }
        return {key: value for key, value in overrides.items() if value}


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
