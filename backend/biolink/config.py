from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    APP_NAME: str = "Biolink"

    # Database
    DATABASE_URL: str = "sqlite:///./biolink.db"

    # Session verification (tokens are issued by the identity provider)
    SECRET_KEY: str = "biolink-dev-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours
    SESSION_COOKIE_NAME: str = "access_token"

    # Rate Limiting
    RATE_LIMIT_TRACK_PER_MINUTE: int = 60

    # Domain
    BASE_URL: str = "http://localhost:8000"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    class Config:
        env_file = ".env"


settings = Settings()
