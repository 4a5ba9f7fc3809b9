from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database (postgresql+asyncpg://... in production)
    DATABASE_URL: str = "sqlite+aiosqlite:///./tradelink.db"
    AUTO_CREATE_TABLES: bool = True
    DB_ECHO: bool = False

    # Bearer tokens are issued elsewhere; we only verify them
    SECRET_KEY: str = "super-secret-key-change-in-prod"
    ALGORITHM: str = "HS256"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Marketplace
    HOME_COUNTRY: str = "GH"
    DEFAULT_CURRENCY: str = "USD"

    # Match explanations (optional)
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_API_URL: str = "https://api.openai.com/v1/chat/completions"
    AI_MAX_TOKENS: int = 500
    AI_TEMPERATURE: float = 0.7
    AI_TIMEOUT_SECONDS: float = 15.0

    # Logging
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True

    class Config:
        env_file = ".env"

settings = Settings()
