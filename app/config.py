import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import validator
from pydantic_settings import BaseSettings

# Find .env even in frozen or packaged mode
POSSIBLE_ENV_PATHS = [
    Path(__file__).resolve().parent.parent / ".env",        # normal
    Path(sys.executable).resolve().parent / ".env",         # frozen exe
    Path.cwd() / ".env",                                   # runtime cwd
]

for env_path in POSSIBLE_ENV_PATHS:
    if env_path.exists():
        load_dotenv(env_path, override=False)
        break


class Settings(BaseSettings):
    # Database
    DATABASE_URL: Optional[str] = None
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: str = "5432"
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = "postgres"
    DATABASE_NAME: str = "finance_tracker_db"

    # JWT
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    JWT_ISSUER: str = "finance-tracker"
    JWT_AUDIENCE: str = "finance-tracker-client"

    # HTTP
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    SERVER_IP: str = "127.0.0.1"
    SERVER_PORT: int = 8000

    # Logging
    LOG_FILE: str = "app.log"
    LOG_LEVEL: str = "DEBUG"

    @validator("SECRET_KEY")
    def secret_key_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("SECRET_KEY must be set to a non-empty value")
        return v

    @validator("API_PREFIX")
    def normalize_prefix(cls, v):
        v = (v or "").strip().rstrip("/").lower()
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @property
    def SQLALCHEMY_DATABASE_URL(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    class Config:
        env_file = ".env"
        frozen = True


# Raises at import time when SECRET_KEY is missing, so the server never boots without it
settings = Settings()
