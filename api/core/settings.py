"""
Process-wide configuration read from environment variables.

Values are read once on startup (see `api/main.py`) and passed explicitly to
whoever needs them. Nothing here opens a connection.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

DEFAULT_POOL_SIZE = 10
DEFAULT_MAX_UPLOAD_BYTES = 50 * 1024 * 1024  # 50 MiB
DEFAULT_MONGO_URI = "mongodb://localhost:27017/gateway"
DEFAULT_MONGO_DB_NAME = "gateway"
DEFAULT_REGION = "us-east-1"


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


def _env_float(name: str) -> float | None:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    """
    Relational DSN: `DATABASE_URL`, or composed from `RELATIONAL_DB_*` parts.
    """
    url = _env_str("DATABASE_URL")
    if url:
        return _sanitize_database_url(url)

    host = _env_str("RELATIONAL_DB_HOST", "localhost").replace('"', "")
    port = _env_int("RELATIONAL_DB_PORT", 5432)
    user = quote(_env_str("RELATIONAL_DB_USER", "postgres"), safe="")
    password = quote(_env_str("RELATIONAL_DB_PASSWORD"), safe="")
    name = _env_str("RELATIONAL_DB_NAME", "gateway")
    credentials = f"{user}:{password}" if password else user
    return f"postgresql://{credentials}@{host}:{port}/{name}"


def _mongo_db_name(uri: str) -> str:
    explicit = _env_str("MONGO_DB_NAME")
    if explicit:
        return explicit
    path = urlsplit(uri).path.lstrip("/")
    return path or DEFAULT_MONGO_DB_NAME


@dataclass(frozen=True)
class Settings:
    database_url: str
    relational_pool_size: int = DEFAULT_POOL_SIZE
    # None keeps the pool's wait queue unbounded.
    relational_acquire_timeout: float | None = None

    mongo_uri: str = DEFAULT_MONGO_URI
    mongo_db_name: str = DEFAULT_MONGO_DB_NAME

    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_session_token: str | None = None
    aws_region: str = DEFAULT_REGION
    s3_endpoint_url: str | None = None

    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    log_level: str = "INFO"


def load_settings() -> Settings:
    mongo_uri = _env_str("MONGO_URI", DEFAULT_MONGO_URI)

    pool_size = _env_int("RELATIONAL_POOL_SIZE", DEFAULT_POOL_SIZE)
    if pool_size <= 0:
        pool_size = DEFAULT_POOL_SIZE

    max_upload_bytes = _env_int("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)
    if max_upload_bytes <= 0:
        max_upload_bytes = DEFAULT_MAX_UPLOAD_BYTES

    return Settings(
        database_url=database_url(),
        relational_pool_size=pool_size,
        relational_acquire_timeout=_env_float("RELATIONAL_ACQUIRE_TIMEOUT"),
        mongo_uri=mongo_uri,
        mongo_db_name=_mongo_db_name(mongo_uri),
        aws_access_key_id=_env_str("ACCESS_KEY_ID") or None,
        aws_secret_access_key=_env_str("SECRET_ACCESS_KEY") or None,
        aws_session_token=_env_str("SESSION_TOKEN") or None,
        aws_region=_env_str("REGION", DEFAULT_REGION),
        s3_endpoint_url=_env_str("S3_ENDPOINT_URL") or None,
        max_upload_bytes=max_upload_bytes,
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
    )
