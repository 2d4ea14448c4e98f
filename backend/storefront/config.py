"""
Storefront Configuration Module

Loads environment variables for backend configuration.
"""
from pydantic_settings import BaseSettings
from typing import List, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Notes:
    - Page limits apply to every list endpoint (orders, payments, products, users)
    - Currency codes are lower-case ISO 4217 codes
    - Debug mode adds exception type details to 500 responses
    """

    # Runtime
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Database
    database_path: str = "./storefront.db"
    seed_demo_data: bool = True

    # Server (the client harness targets port 8089)
    host: str = "0.0.0.0"
    port: int = 8089

    # Pagination
    default_page_limit: int = 20
    max_page_limit: int = 100

    # Payments
    supported_currencies: List[str] = ["usd", "eur", "gbp", "cad", "aud", "jpy"]

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
