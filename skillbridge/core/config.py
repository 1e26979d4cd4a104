from pydantic_settings import BaseSettings
from typing import List
import os


class Settings(BaseSettings):
    # App Configuration
    APP_NAME: str = "SkillBridge API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # CORS
    ALLOWED_HOSTS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173", "http://127.0.0.1:5173"]
    CORS_MAX_AGE: int = 86400  # 24 hours

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./skillbridge.db")
    DATABASE_ECHO: bool = False

    # Authentication
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me-in-production-at-least-32-chars")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    ALLOW_ADMIN_REGISTRATION: bool = False

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    API_RATE_LIMIT_WINDOW_SECONDS: int = 60
    API_RATE_LIMIT_MAX_REQUESTS: int = 60
    AUTH_RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    AUTH_RATE_LIMIT_MAX_REQUESTS: int = 5
    RATE_LIMIT_SWEEP_SECONDS: int = 5 * 60
    # Peers allowed to set X-Forwarded-For for rate-limit keys
    TRUSTED_PROXIES: List[str] = []

    # Redis (shared rate-limit store when running several instances)
    REDIS_URL: str = ""

    class Config:
        env_file = ".env"
        case_sensitive = True


# Create settings instance
settings = Settings()

# Update allowed hosts for production
if os.getenv("ENVIRONMENT") == "production":
    settings.ALLOWED_HOSTS.extend([
        "https://skillbridge.vercel.app"
    ])
