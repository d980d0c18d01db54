# tarot_api/core/config.py
import os
from typing import List

from pydantic_settings import BaseSettings

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./tarot.sqlite3"

    REDIS_HOST: str = "redis"
    REDIS_PORT: int = 6379
    REDIS_URL: str = f"redis://{REDIS_HOST}:{REDIS_PORT}"

    # Cache TTLs in seconds
    CACHE_TTL_CARDS: int = 600
    CACHE_TTL_SEARCH: int = 300
    CACHE_TTL_STATS: int = 300
    CACHE_TTL_READING: int = 300

    STORE_MAX_ATTEMPTS: int = 3
    STORE_BACKOFF_SECONDS: float = 1.0

    REVERSED_PROBABILITY: float = 0.3

    DECK_DATA_PATH: str = os.path.join(BASE_DIR, "data", "major_arcana.json")

    CORS_ORIGINS: List[str] = [
        "http://localhost",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    DEBUG: bool = False

    class Config:
        env_file = ".env"
        extra = "allow"


settings = Settings()


def get_async_database_url(database_url: str) -> str:
    """
    Return a URL with an async driver. Plain postgresql:// URLs are rewritten to asyncpg.
    """
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite:///"):
        return database_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return database_url
