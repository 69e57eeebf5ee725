# facilitiease/core/config.py
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB (transactions need a replica set)
    MONGO_URL: str = "mongodb://localhost:27017/?replicaSet=rs0"
    MONGO_DB_NAME: str = "facilitiease"

    # Tokens
    JWT_SECRET_KEY: str = "change-me-to-a-long-random-secret-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Password hashing work factor
    ARGON2_TIME_COST: int = 3
    ARGON2_MEMORY_COST: int = 65536  # KiB
    ARGON2_PARALLELISM: int = 4
    BCRYPT_ROUNDS: int = 12

    # AWS S3
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_REGION: str = "us-east-1"
    BUCKET_NAME: Optional[str] = None
    UPLOAD_PREFIX: str = "facilities"
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    # App
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
