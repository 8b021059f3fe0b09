"""
Environment-aware configuration.
Token secrets and lifetimes, the session sweeper, CORS and env flags.
The database URL is read by DBStorage itself (DATABASE_URL).
"""
import os
import re
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present

DEFAULT_ACCESS_SECRET = "access-secret"
DEFAULT_REFRESH_SECRET = "refresh-secret"

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}


def parse_duration(value) -> timedelta:
    """
    Parse a compact lifetime such as "15m", "1h", "7d" or "3600" (seconds).
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int):
        return timedelta(seconds=value)
    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_UNITS[unit.lower()]: int(amount)})


class BaseConfig:
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    # Keep a copy of env for visibility
    APP_ENV = os.getenv("APP_ENV", "dev")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    # Token configuration: access and refresh tokens never share a secret
    JWT_ACCESS_SECRET = os.getenv("JWT_ACCESS_SECRET", DEFAULT_ACCESS_SECRET)
    JWT_REFRESH_SECRET = os.getenv("JWT_REFRESH_SECRET", DEFAULT_REFRESH_SECRET)
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_ISSUER = os.getenv("JWT_ISSUER", "marketplace-api")
    JWT_ACCESS_EXPIRES = parse_duration(os.getenv("JWT_ACCESS_EXPIRY", "1h"))
    JWT_REFRESH_EXPIRES = parse_duration(os.getenv("JWT_REFRESH_EXPIRY", "7d"))
    # Background purge of expired refresh tokens
    SESSION_SWEEPER_ENABLED = os.getenv("SESSION_SWEEPER_ENABLED", "1").lower() in ("1", "true", "yes")
    SESSION_SWEEP_INTERVAL = parse_duration(os.getenv("SESSION_SWEEP_INTERVAL", "1h"))


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    # In dev, propagate exceptions so our error handler has full context
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    DEBUG = False


class TestingConfig(BaseConfig):
    TESTING = True
    SESSION_SWEEPER_ENABLED = False
    JWT_ACCESS_SECRET = "test-access-secret-0123456789abcdef"
    JWT_REFRESH_SECRET = "test-refresh-secret-0123456789abcdef"


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/prod/test).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
