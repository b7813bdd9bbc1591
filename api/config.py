"""
Environment-aware configuration.
Config classes are read once by create_app(); token secrets are frozen into a
TokenSettings value that is handed to the token codec and the session store.
"""
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping

from dotenv import load_dotenv

load_dotenv()  # Read .env if present

DEFAULT_ACCESS_SECRET = "dev-access-secret-change-me"
DEFAULT_REFRESH_SECRET = "dev-refresh-secret-change-me"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///tailor-shop.db")
    SQL_ECHO = _env_flag("SQL_ECHO")

    # Access and refresh tokens are signed with independent secrets
    ACCESS_TOKEN_SECRET = os.getenv("ACCESS_TOKEN_SECRET", DEFAULT_ACCESS_SECRET)
    REFRESH_TOKEN_SECRET = os.getenv("REFRESH_TOKEN_SECRET", DEFAULT_REFRESH_SECRET)
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "tailor-shop-api")
    ACCESS_TOKEN_EXPIRES = timedelta(seconds=int(os.getenv("ACCESS_TOKEN_EXPIRES_SECONDS", "900")))
    REFRESH_TOKEN_EXPIRES = timedelta(seconds=int(os.getenv("REFRESH_TOKEN_EXPIRES_SECONDS", "604800")))

    # Include stack traces and error metadata in error responses
    EXPOSE_ERROR_DETAILS = True


class DevelopmentConfig(BaseConfig):
    DEBUG = True


class TestingConfig(BaseConfig):
    TESTING = True
    APP_ENV = "test"
    DATABASE_URL = "sqlite:///:memory:"
    SQL_ECHO = False


class ProductionConfig(BaseConfig):
    DEBUG = False
    APP_ENV = "production"
    EXPOSE_ERROR_DETAILS = False


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/test/prod).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig


@dataclass(frozen=True)
class TokenSettings:
    """Signing material and lifetimes for access/refresh tokens."""

    access_secret: str
    refresh_secret: str
    algorithm: str = "HS256"
    issuer: str = "tailor-shop-api"
    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=7)

    @classmethod
    def from_config(cls, config: Mapping) -> "TokenSettings":
        settings = cls(
            access_secret=config["ACCESS_TOKEN_SECRET"],
            refresh_secret=config["REFRESH_TOKEN_SECRET"],
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
            issuer=config.get("JWT_ISSUER", "tailor-shop-api"),
            access_ttl=config.get("ACCESS_TOKEN_EXPIRES", timedelta(minutes=15)),
            refresh_ttl=config.get("REFRESH_TOKEN_EXPIRES", timedelta(days=7)),
        )
        if config.get("APP_ENV") in ("prod", "production"):
            if settings.access_secret == DEFAULT_ACCESS_SECRET or settings.refresh_secret == DEFAULT_REFRESH_SECRET:
                raise RuntimeError("ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must be set in production")
        if settings.access_secret == settings.refresh_secret:
            raise RuntimeError("Access and refresh tokens must use different secrets")
        return settings
