"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # MongoDB
    mongo_uri: str = "mongodb://mongodb:27017/?replicaSet=rs0"
    santa_db_name: str = "santa_db"
    # Multi-document transactions need a replica set. Turn off only for a
    # standalone mongod during local development.
    mongo_transactions: bool = True

    # Redis
    redis_host: str = "redis"
    redis_port: int = 6379

    # Rate Limiting (per client IP, fixed one-minute window)
    rate_limit_enabled: bool = True
    create_rate_limit_per_minute: int = 10
    check_rate_limit_per_minute: int = 30

    # Password hashing
    bcrypt_rounds: int = 12

    # HTTP
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8501",
    ]

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
