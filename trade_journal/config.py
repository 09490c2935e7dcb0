# trade_journal/config.py
import logging
import os
from typing import Optional
from urllib.parse import quote_plus  # For safely encoding password in DB URL

from dotenv import load_dotenv

# Load values from .env file for base configuration
# and then from .env.local to override them for local development.
# In production, environment variables should be set directly in the environment.
load_dotenv()
load_dotenv(".env.local", override=True)

logger = logging.getLogger(__name__)

DEFAULT_SECRET_KEY = "a_very_secret_default_key_for_dev_only_CHANGE_ME"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _default_database_url() -> str:
    # Option 1: a full DATABASE_URL (takes precedence if set)
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return database_url

    # Option 2: individual PostgreSQL components
    pg_host = os.getenv("PG_HOST")
    pg_user = os.getenv("PG_USER")
    pg_password = os.getenv("PG_PASSWORD")
    pg_database = os.getenv("PG_DATABASE")
    pg_port = os.getenv("PG_PORT", "5432")
    if all([pg_host, pg_user, pg_password, pg_database]):
        encoded_password = quote_plus(pg_password)
        return f"postgresql://{pg_user}:{encoded_password}@{pg_host}:{pg_port}/{pg_database}"

    # Fall back to a local SQLite file next to the project root
    default_sqlite_path = os.path.join(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
        "trade_journal.db",
    )
    return f"sqlite:///{default_sqlite_path}"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    PROJECT_NAME: str = "Trade Journal"
    PROJECT_VERSION: str = "0.1.0"

    def __init__(
        self,
        *,
        database_url: Optional[str] = None,
        secret_key: Optional[str] = None,
        access_token_expire_minutes: Optional[int] = None,
        client_origin: Optional[str] = None,
        log_level: Optional[str] = None,
        sql_echo: Optional[bool] = None,
    ):
        # --- Database settings ---
        self.DATABASE_URL: str = database_url or _default_database_url()
        self._explicit_database = bool(database_url) or "DATABASE_URL" in os.environ
        self.SQL_ECHO: bool = (
            sql_echo if sql_echo is not None else _env_flag("SQL_ECHO")
        )

        # --- Auth ---
        # IMPORTANT: Change this in production to a strong, random key!
        self.SECRET_KEY: str = secret_key or os.getenv("JWT_SECRET", DEFAULT_SECRET_KEY)
        self.ALGORITHM: str = "HS256"
        self.ACCESS_TOKEN_EXPIRE_MINUTES: int = (
            access_token_expire_minutes
            if access_token_expire_minutes is not None
            else int(os.getenv("JWT_EXPIRE_MINUTES", str(60 * 24 * 7)))
        )

        # --- CORS ---
        self.CLIENT_ORIGIN: str = client_origin or os.getenv(
            "CLIENT_ORIGIN", "http://localhost:3000"
        )

        # --- Logging ---
        level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
        if level not in VALID_LOG_LEVELS:
            logger.warning("Invalid LOG_LEVEL '%s'. Defaulting to INFO.", level)
            level = "INFO"
        self.LOG_LEVEL: str = level

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    def warn_if_insecure(self) -> None:
        if self.SECRET_KEY == DEFAULT_SECRET_KEY:
            logger.warning(
                "JWT_SECRET is using the default development value. "
                "This should be changed for production."
            )
        if self.is_sqlite and not self._explicit_database:
            logger.warning(
                "DATABASE_URL or PostgreSQL environment variables not fully set. "
                "Falling back to SQLite: %s",
                self.DATABASE_URL,
            )


# Create a single instance of the Settings class that can be imported elsewhere
settings = Settings()
