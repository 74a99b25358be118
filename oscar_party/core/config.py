"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Local cache
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./oscar_party.db")

    # Remote store
    USE_FIREBASE: bool = os.getenv("USE_FIREBASE", "false").lower() in ("1", "true", "yes")
    FIREBASE_CREDENTIALS_JSON: str | None = os.getenv("FIREBASE_CREDENTIALS_JSON")
    FIREBASE_CREDENTIALS_FILE: str | None = os.getenv("FIREBASE_CREDENTIALS_FILE")
    FIREBASE_CREDENTIALS_B64: str | None = os.getenv("FIREBASE_CREDENTIALS_B64")

    # Sync
    SYNC_CHANNEL_NAME: str = os.getenv("SYNC_CHANNEL_NAME", "oscar-party")
    SYNC_ERROR_LOG_SIZE: int = 50

    # Reminders turn urgent this many days before the show
    REMINDER_URGENT_DAYS: int = 5

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:8000",
    ]

    class Config:
        env_file = ".env"

settings = Settings()
