"""
CompLens configuration

All settings are read from environment variables or the .env file.
Usage:
    from complens.config import settings
    url = settings.KV_BASE_URL
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # ignore variables not declared here
    )

    # === Environment ===
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # === kv.ee listing portal ===
    KV_BASE_URL: str = "https://www2.kv.ee/en"
    KV_TIMEOUT: int = 30

    KV_HEADERS: dict = {
        "Accept": "application/json, text/plain, */*",
        "Accept-Language": "en-US,en;q=0.9",
        "User-Agent": "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0 Safari/537.36",
    }

    # === Crawling ===
    CRAWL_DELAY_MIN: float = 1.5
    CRAWL_DELAY_MAX: float = 3.0

    # === Listing page cache ===
    CACHE_DIR: str = ".cache/kv"
    CACHE_TTL_HOURS: int = 24

    # === Valuation policies ===
    # error: a missing built-in year raises MissingFeatureError
    # zero: a missing built-in year contributes 0 points
    MISSING_YEAR_POLICY: Literal["error", "zero"] = "error"

    # price: bracket the query point between neighbouring curve prices
    # point: bracket it between neighbouring curve points
    ESTIMATE_BRACKET_BY: Literal["price", "point"] = "price"


# singleton instance
settings = Settings()
