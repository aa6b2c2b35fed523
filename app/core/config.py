"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Thread storage
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./seat_board.db")
    USE_FIREBASE: bool = os.getenv("USE_FIREBASE", "false").lower() in ("1", "true", "yes")
    FIREBASE_CREDENTIALS_JSON: str | None = os.getenv("FIREBASE_CREDENTIALS_JSON")
    FIREBASE_CREDENTIALS_FILE: str | None = os.getenv("FIREBASE_CREDENTIALS_FILE")
    FIREBASE_CREDENTIALS_B64: str | None = os.getenv("FIREBASE_CREDENTIALS_B64")
    THREADS_COLLECTION: str = os.getenv("THREADS_COLLECTION", "threads")

    # Application
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")
    API_TIMEOUT: float = float(os.getenv("API_TIMEOUT", "10"))

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://localhost:8000",
    ]

    # Seat grid
    SEAT_ROWS: int = int(os.getenv("SEAT_ROWS", "19"))
    SEAT_COLS: int = int(os.getenv("SEAT_COLS", "19"))
    SEAT_PREFIX: str = os.getenv("SEAT_PREFIX", "A")
    SEAT_STATUS_FILE: str = os.getenv("SEAT_STATUS_FILE", "static/data/seats.json")

    # Board
    DEFAULT_POST_NAME: str = os.getenv("DEFAULT_POST_NAME", "Anonymous")

    class Config:
        env_file = ".env"

settings = Settings()
