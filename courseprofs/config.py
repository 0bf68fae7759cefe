from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./courseprofs.db"

    # Application
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8000",
    ]

    # Pagination
    DEFAULT_ITEMS_PER_PAGE: int = 20
    MAX_ITEMS_PER_PAGE: int = 100

    # Reviews
    MIN_RATING: int = 1
    MAX_RATING: int = 5
    MAX_COMMENT_LENGTH: int = 1000

    # UserAuth token hashing (passlib scheme names)
    TOKEN_HASH_SCHEMES: List[str] = ["pbkdf2_sha256"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
