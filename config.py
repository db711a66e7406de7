"""
Configuration management for DoseTrack
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "DoseTrack"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENV: str = "development"

    # API
    API_PREFIX: str = "/api/v1"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database
    DATABASE_URL: str = "sqlite:///./dosetrack.db"
    DATABASE_ECHO: bool = False

    # Evidence storage
    BLOB_STORAGE_DIR: str = "./data/blobs"
    EVIDENCE_BUCKET: str = "medication-proofs"
    MAX_EVIDENCE_BYTES: int = 10 * 1024 * 1024  # 10 MB

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


class AdherenceConfig:
    """Constants for adherence computation"""

    # Streak walks back at most this many days
    STREAK_CAP_DAYS: int = 30

    # Fields a record draft must carry, non-empty
    REQUIRED_RECORD_FIELDS: tuple = ("name", "dosage", "scheduled_date", "scheduled_time")


# Database table names
class TableNames:
    MEDICATIONS = "medications"


settings = get_settings()
adherence_config = AdherenceConfig()
