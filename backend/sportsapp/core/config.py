from pydantic_settings import BaseSettings
from typing import List, Any, Optional
import json
from pathlib import Path


def parse_csv(v: Any) -> List[str]:
    """List setting given as a JSON array or a comma-separated string"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        if v.startswith("["):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        return [item.strip() for item in v.split(',') if item.strip()]
    return []


class Settings(BaseSettings):
    """Read from the environment, then .env"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "SportsApp"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    SECRET_KEY: str
    API_VERSION: str = "v1"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    # ==========================================
    # Database
    # ==========================================
    DATABASE_URL: str
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800  # 30 minutes
    DB_ECHO: bool = False

    # ==========================================
    # Redis (optional - caching and shared rate limit storage)
    # ==========================================
    REDIS_URL: str = ""
    REDIS_CACHE_DB: int = 1

    # ==========================================
    # Authentication
    # ==========================================
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    SESSION_EXPIRE_DAYS: int = 30
    ADMIN_SESSION_EXPIRE_HOURS: int = 12
    REMEMBER_TOKEN_EXPIRE_DAYS: int = 30
    BCRYPT_ROUNDS: int = 12

    SESSION_COOKIE_NAME: str = "sportsapp_session"
    ADMIN_COOKIE_NAME: str = "sportsapp_admin"
    COOKIE_SECURE: bool = False
    COOKIE_SAMESITE: str = "lax"

    # ==========================================
    # Admin principal (single configured account)
    # ==========================================
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = ""
    ADMIN_PASSWORD_HASH: str = ""

    # ==========================================
    # CORS
    # ==========================================
    CORS_ORIGINS_STR: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        return parse_csv(self.CORS_ORIGINS_STR)

    # ==========================================
    # Rate Limiting
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 120

    # ==========================================
    # File Upload
    # ==========================================
    UPLOAD_PATH: str = "uploads"
    MAX_UPLOAD_SIZE: int = 52428800  # 50MB
    ALLOWED_MEDIA_TYPES_STR: str = "image/,video/"

    @property
    def ALLOWED_MEDIA_TYPES(self) -> List[str]:
        """MIME prefixes accepted for uploads"""
        return parse_csv(self.ALLOWED_MEDIA_TYPES_STR)

    @property
    def UPLOAD_DIR(self) -> Path:
        return Path(self.UPLOAD_PATH)

    # ==========================================
    # Sports News (NewsAPI)
    # ==========================================
    NEWS_API_KEY: Optional[str] = None
    NEWS_API_BASE_URL: str = "https://newsapi.org/v2"
    NEWS_PAGE_SIZE: int = 12
    NEWS_REQUEST_TIMEOUT: int = 10
    NEWS_CACHE_TTL_SECONDS: int = 600

    # ==========================================
    # Points economy
    # ==========================================
    DRILL_APPROVAL_POINTS: int = 10
    POINTS_TO_RUPEE_RATE: int = 1
    MAX_REDEMPTIONS_LISTED: int = 500

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
