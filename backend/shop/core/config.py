"""Configuration classes selected by ``APP_ENV``; values come from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# 'development' | 'testing' | 'production'
ENV_VAR: Final[str] = "APP_ENV"

load_dotenv()

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})


def env_bool(name: str, default: bool = False) -> bool:
    """Read a flag; ``1/true/yes/y/on`` (any case) is true, unset gives ``default``."""
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Read an integer; unset or blank gives ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Settings shared by every environment.

    ``AUTH_*`` drive key loading, token issuance and claim checks; the auth
    package copies the algorithm, issuer and audience into the ``JWT_*`` keys
    flask-jwt-extended decodes with.
    ``DB_STATEMENT_TIMEOUT_MS`` only applies to PostgreSQL; ``0`` disables it.
    """

    API_BASE_PREFIX = "/api"
    APP_VERSION = os.getenv("APP_VERSION", "dev")

    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./shop.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    DB_STATEMENT_TIMEOUT_MS = env_int("DB_STATEMENT_TIMEOUT_MS", 5000)

    # <kid>.pem private keys
    AUTH_KEYS_FOLDER = os.getenv("AUTH_KEYS_FOLDER", "./keys")
    AUTH_ACTIVE_KID = os.getenv("AUTH_ACTIVE_KID", "")
    AUTH_ALGORITHM = os.getenv("AUTH_ALGORITHM", "RS256")
    AUTH_ISSUER = os.getenv("AUTH_ISSUER", "shop backend")
    AUTH_AUDIENCE = os.getenv("AUTH_AUDIENCE", "shop")
    AUTH_TOKEN_TTL = env_int("AUTH_TOKEN_TTL", 3600)

    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_TYPE = "Bearer"
    # Issued tokens carry exactly the claims built at login
    JWT_ENCODE_NBF = False

    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000")

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600


class TestingConfig(BaseConfig):
    """In-memory SQLite unless ``TEST_DATABASE_URL`` is set; fixtures inject the keys."""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    AUTH_KEYS_FOLDER = ""


class ProductionConfig(BaseConfig):
    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the class named by ``APP_ENV``; unset or unknown means development."""
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
