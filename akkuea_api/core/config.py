import os
from dataclasses import dataclass, field

from dotenv import load_dotenv
from sqlalchemy.engine import URL

DEFAULT_JWT_SECRET_KEY = "change-me"


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: tuple[str, ...] = ()) -> tuple[str, ...]:
    if value is None:
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _build_database_url(environ) -> str:
    explicit_url = environ.get("DATABASE_URL")
    if explicit_url:
        return explicit_url

    url = URL.create(
        "postgresql+psycopg2",
        username=environ.get("DB_USER", "postgres"),
        password=environ.get("DB_PASSWORD") or None,
        host=environ.get("DB_HOST", "localhost"),
        port=int(environ.get("DB_PORT", "5432")),
        database=environ.get("DB_NAME", "akkuea"),
    )
    return url.render_as_string(hide_password=False)


@dataclass(frozen=True)
class Settings:
    """Process configuration, loaded once at start and passed to the app."""

    app_name: str = "Akkuea API"
    app_env: str = "development"
    database_url: str = "sqlite:///./akkuea.db"
    sql_echo: bool = False
    jwt_secret_key: str = DEFAULT_JWT_SECRET_KEY
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 60 * 24
    port: int = 8080
    cors_allow_origins: tuple[str, ...] = field(default=("http://localhost:3000",))
    log_level: str = "INFO"


def load_settings(environ=None) -> Settings:
    if environ is None:
        load_dotenv()
        environ = os.environ

    return Settings(
        app_env=environ.get("APP_ENV", "development"),
        database_url=_build_database_url(environ),
        sql_echo=_get_bool(environ.get("SQL_ECHO"), default=False),
        jwt_secret_key=environ.get("JWT_SECRET_KEY") or environ.get("JWT_SECRET") or DEFAULT_JWT_SECRET_KEY,
        jwt_algorithm=environ.get("JWT_ALGORITHM", "HS256"),
        jwt_expires_minutes=int(environ.get("JWT_EXPIRES_MINUTES", "1440")),
        port=int(environ.get("PORT", "8080")),
        cors_allow_origins=_get_list(environ.get("CORS_ALLOW_ORIGINS"), default=("http://localhost:3000",)),
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
    )


def validate_runtime_config(settings: Settings) -> None:
    if settings.app_env.lower() == "production" and settings.jwt_secret_key == DEFAULT_JWT_SECRET_KEY:
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
