"""
Environment configuration.

Values come from the process environment. For local development a `.env`
file is loaded first (skipped when ENV=prod so prod can't be influenced by
local files).
"""

from __future__ import annotations

import logging
import os
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from dotenv import load_dotenv

if os.environ.get("ENV", "dev").strip().lower() != "prod":
    load_dotenv()


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    # asyncpg rejects libpq's sslmode query parameter.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    """
    DATABASE_URL wins; otherwise the DSN is built from DB_USER, DB_PASSWORD,
    DB_HOST, DB_PORT and DB_DATABASE.
    """
    url = _env_str("DATABASE_URL")
    if url:
        return _sanitize_database_url(url)

    database = _env_str("DB_DATABASE")
    if not database:
        raise RuntimeError("Set DATABASE_URL or DB_DATABASE (with DB_USER, DB_PASSWORD, DB_HOST, DB_PORT).")

    user = quote(_env_str("DB_USER", "postgres"), safe="")
    password = quote(_env_str("DB_PASSWORD"), safe="")
    credentials = f"{user}:{password}" if password else user
    host = _env_str("DB_HOST", "localhost")
    db_port = _env_int("DB_PORT", 5432)
    return f"postgresql://{credentials}@{host}:{db_port}/{quote(database, safe='')}"


def db_pool_min_size() -> int:
    return max(0, _env_int("DB_POOL_MIN_SIZE", 1))


def db_pool_max_size() -> int:
    return max(1, db_pool_min_size(), _env_int("DB_POOL_MAX_SIZE", 5))


def cors_origins() -> list[str]:
    raw = _env_str("CORS_ORIGINS", "*")
    return [v.strip() for v in raw.split(",") if v.strip()]


def port() -> int:
    return _env_int("PORT", 3000)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def configure_logging() -> None:
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
