"""Application configuration."""
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.
    
    Environment variables take precedence over .env file.
    SECRET_KEY and VIEW_PIN have no defaults and must be provided
    by the environment (or .env) before the app starts.
    """
    
    APP_NAME: str = "Hotel Ops"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Database
    DATABASE_URL: str = "sqlite:///./hotel_ops.db"
    
    # JWT Settings
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440
    
    # Shared PIN for the read-only view
    VIEW_PIN: str
    
    BCRYPT_ROUNDS: int = 12
    
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:5174"]
    
    model_config = SettingsConfigDict(
        env_file=".env" if Path(".env").exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
