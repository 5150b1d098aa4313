import os
import re
import tempfile
from datetime import timedelta
from typing import Mapping

from dotenv import load_dotenv

load_dotenv()

VALID_ENVIRONMENTS = ("development", "production", "test")

_DURATION_RE = re.compile(r"^(\d+)\s*([smhd]?)$")
_DURATION_UNITS = {"": "seconds", "s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


class ConfigurationError(RuntimeError):
    """Raised when the process environment cannot start the API."""

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__("Invalid environment: " + "; ".join(self.problems))


def parse_duration(value: str) -> timedelta:
    """
    Parse token lifetimes such as ``3600``, ``15m``, ``1h`` or ``7d``.
    """
    match = _DURATION_RE.match(str(value).strip().lower())
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")

    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


def _pick(env: Mapping[str, str], *names: str, default=None):
    # DATABASE_* wins over POSTGRES_* when both are set
    for name in names:
        value = env.get(name)
        if value not in (None, ""):
            return value
    return default


def database_settings(env: Mapping[str, str]) -> dict:
    return {
        "host": _pick(env, "DATABASE_HOST", "POSTGRES_HOST", default="postgres"),
        "port": _pick(env, "DATABASE_PORT", "POSTGRES_PORT", default="5432"),
        "user": _pick(env, "DATABASE_USER", "POSTGRES_USER", default="postgres"),
        "password": _pick(env, "DATABASE_PASSWORD", "POSTGRES_PASSWORD", default="postgres"),
        "name": _pick(env, "DATABASE_NAME", "POSTGRES_DB", default="atelier_kaisla_dev"),
    }


def build_database_uri(env: Mapping[str, str]) -> str:
    if env.get("DATABASE_URL"):
        url = env["DATABASE_URL"]
        # Heroku style URLs are not accepted by SQLAlchemy 1.4+
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        return url

    db = database_settings(env)
    return (
        f"postgresql+psycopg2://{db['user']}:{db['password']}"
        f"@{db['host']}:{db['port']}/{db['name']}"
    )


def validate_environment(env: Mapping[str, str]) -> None:
    """
    Validate process environment before the app is built.

    Every problem is collected and reported in one ConfigurationError.
    """
    problems: list[str] = []

    node_env = env.get("NODE_ENV", "development")
    if node_env not in VALID_ENVIRONMENTS:
        problems.append(
            f"NODE_ENV must be one of {', '.join(VALID_ENVIRONMENTS)} (got {node_env!r})"
        )

    for name in ("PORT", "POSTGRES_PORT", "DATABASE_PORT"):
        value = env.get(name)
        if value not in (None, "") and not str(value).isdigit():
            problems.append(f"{name} must be a number (got {value!r})")

    if node_env != "test" and not env.get("DATABASE_URL"):
        for generic, postgres in (
            ("DATABASE_USER", "POSTGRES_USER"),
            ("DATABASE_PASSWORD", "POSTGRES_PASSWORD"),
            ("DATABASE_NAME", "POSTGRES_DB"),
        ):
            if not env.get(generic) and not env.get(postgres):
                problems.append(f"{postgres} (or {generic}) is required")

    try:
        parse_duration(env.get("JWT_EXPIRATION", "1h"))
    except ValueError as exc:
        problems.append(f"JWT_EXPIRATION: {exc}")

    if node_env == "production" and not env.get("JWT_SECRET"):
        problems.append("JWT_SECRET is required in production")

    if problems:
        raise ConfigurationError(problems)


# Largest number of images a single request may upload (article images)
MAX_IMAGES_PER_REQUEST = 10


class BaseConfig:
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_TOKEN_LOCATION = ["headers"]

    BCRYPT_LOG_ROUNDS = 10

    MAX_UPLOAD_SIZE = 5 * 1024 * 1024
    # A full image batch plus room for the form fields
    MAX_CONTENT_LENGTH = (MAX_IMAGES_PER_REQUEST + 1) * MAX_UPLOAD_SIZE

    ENABLE_DOCS = True
    VALIDATE_ENVIRONMENT = True

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> dict:
        """
        Settings read from the process environment. Only called once
        validate_environment has accepted ``env``.
        """
        return {
            "NODE_ENV": env.get("NODE_ENV", "development"),
            "PORT": int(env.get("PORT") or "4000"),
            "SECRET_KEY": env.get("SECRET_KEY", "dev-secret"),
            "SQLALCHEMY_DATABASE_URI": build_database_uri(env),
            "DATABASE_NAME": database_settings(env)["name"],
            "JWT_SECRET_KEY": env.get("JWT_SECRET", "dev-secret-change-in-production"),
            "JWT_ACCESS_TOKEN_EXPIRES": parse_duration(env.get("JWT_EXPIRATION", "1h")),
            "UPLOAD_FOLDER": os.path.abspath(env.get("UPLOAD_FOLDER", "./uploads")),
            "PUBLIC_BASE_URL": env.get("PUBLIC_BASE_URL"),
            "PUBLIC_API_URL": env.get("NUXT_PUBLIC_API_URL", "http://backend:4000/api"),
            "CORS_ORIGINS": [
                origin
                for origin in (
                    "http://localhost:3002",
                    "http://localhost:3001",
                    "http://frontend:3002",
                    "http://backoffice:3001",
                    env.get("FRONTEND_URL"),
                    env.get("BACKOFFICE_URL"),
                )
                if origin
            ],
        }


class DevelopmentConfig(BaseConfig):
    DEBUG = True


class ProductionConfig(BaseConfig):
    DEBUG = False
    ENABLE_DOCS = False


class TestingConfig(BaseConfig):
    TESTING = True
    BCRYPT_LOG_ROUNDS = 4
    VALIDATE_ENVIRONMENT = False

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> dict:
        settings = super().from_env({})
        settings.update(
            NODE_ENV="test",
            SQLALCHEMY_DATABASE_URI="sqlite://",
            DATABASE_NAME=":memory:",
            JWT_SECRET_KEY="test-secret",
            JWT_ACCESS_TOKEN_EXPIRES=timedelta(hours=1),
            UPLOAD_FOLDER=os.path.join(tempfile.gettempdir(), "atelier-test-uploads"),
            PUBLIC_BASE_URL="http://localhost:4000",
        )
        return settings


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "test": TestingConfig,
    "testing": TestingConfig,
}
