"""
Environment-aware configuration.
Secrets (JWT_SECRET, POLKA_KEY) come from the environment / .env, never from code paths
that reach a client.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

from security.tokens import clamp_ttl

load_dotenv()  # Read .env if present


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")
    # "dev" unlocks POST /admin/reset
    PLATFORM = os.getenv("PLATFORM", "")
    # Access tokens
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me-to-32-bytes-or-more")
    ACCESS_TOKEN_TTL = clamp_ttl(timedelta(seconds=int(os.getenv("ACCESS_TOKEN_TTL_SECONDS", "3600"))))
    # Refresh tokens
    REFRESH_TOKEN_TTL = timedelta(days=int(os.getenv("REFRESH_TOKEN_TTL_DAYS", "60")))
    REFRESH_TOKEN_ROTATION = _env_bool("REFRESH_TOKEN_ROTATION")
    # Billing webhook pre-shared key
    POLKA_KEY = os.getenv("POLKA_KEY", "")
    FILESERVER_ROOT = os.getenv("FILESERVER_ROOT", os.getcwd())


class DevelopmentConfig(BaseConfig):
    DEBUG = True


class TestingConfig(BaseConfig):
    TESTING = True
    PLATFORM = "dev"
    JWT_SECRET = "testing-secret-that-is-long-enough-for-hs256"
    POLKA_KEY = "testing-polka-key"


class ProductionConfig(BaseConfig):
    DEBUG = False


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
