import logging
from logging.config import dictConfig
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    ENVIRONMENT: str = "local"

    # API SERVER
    API_SERVER_HOST: str = "0.0.0.0"
    API_SERVER_PORT: int = 5000
    REQUEST_TIMEOUT_SECONDS: float = 30.0
    CORS_ORIGINS: List[str] = ["*"]

    # Database
    DATABASE_URL: str

    # JWT
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRY: int = 7 * 24 * 60 * 60

    # Password hashing
    BCRYPT_ROUNDS: int = 12

    # Submissions
    MAX_PROBLEMS_PER_SUBMISSION: int = 100

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )


Config = Settings()

# Ensure logs directory exists
log_dir = Path(Config.LOG_FILE).parent
log_dir.mkdir(parents=True, exist_ok=True)


def configure_logging():
    """Configure logging for the application."""
    log_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(lineno)d - %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "level": Config.LOG_LEVEL,
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "detailed",
                "filename": Config.LOG_FILE,
                "maxBytes": 10485760,  # 10MB
                "backupCount": 5,
                "level": Config.LOG_LEVEL,
            },
        },
        "loggers": {
            "app": {
                "handlers": ["console", "file"],
                "level": Config.LOG_LEVEL,
                "propagate": False,
            },
            "uvicorn.access": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
        },
        "root": {
            "handlers": ["console", "file"],
            "level": Config.LOG_LEVEL,
        },
    }
    dictConfig(log_config)
    return logging.getLogger("app")


# Initialize logger
logger = configure_logging()
