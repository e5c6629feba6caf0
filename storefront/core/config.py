"""Storefront Configuration"""

from decimal import Decimal
from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    # Application
    app_name: str = "Storefront"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8001

    # Pricing
    currency: str = "INR"
    free_shipping_threshold: Decimal = Decimal("200")
    shipping_fee: Decimal = Decimal("25")

    # Order placement
    order_placement_delay: float = 2.0  # seconds, simulated placement only
    order_api_url: Optional[str] = None
    order_api_timeout: float = 30.0

    # Checkout
    checkout_redirect_path: str = "/"

    # Sessions
    session_max_age_hours: int = 24

    @property
    def remote_placement_configured(self) -> bool:
        """Check if orders should be sent to a remote order API"""
        return bool(self.order_api_url)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
