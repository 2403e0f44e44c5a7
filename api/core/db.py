"""
Async database access helpers (raw SQL) using asyncpg.

The pool is created in the FastAPI lifespan (see `api/main.py`) and kept on
`app.state.pool`. Routes receive it through the `get_pool` dependency and pass
it down to the repository functions explicitly.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Every helper converts driver failures into `StorageError` so the API can
answer with a 500 and the raw error text.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

from .errors import StorageError

logger = logging.getLogger(__name__)

# Connection refused / DNS failures come through as OSError; command_timeout as asyncio.TimeoutError.
_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def create_pool() -> asyncpg.Pool:
    min_size = _env_int("DB_POOL_MIN_SIZE", 1)
    max_size = max(_env_int("DB_POOL_MAX_SIZE", 5), min_size)
    pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=min_size,
        max_size=max_size,
        command_timeout=_env_int("DB_COMMAND_TIMEOUT", 30),
    )
    logger.info("Database pool opened (min_size=%d, max_size=%d)", min_size, max_size)
    return pool


async def close_pool(pool: asyncpg.Pool | None) -> None:
    if pool is None:
        return None
    await pool.close()
    logger.info("Database pool closed")


def get_pool(request: Request) -> asyncpg.Pool:
    """
    FastAPI dependency: the pool owned by the running app.
    """
    pool = getattr(request.app.state, "pool", None)
    if pool is None:
        raise RuntimeError("DB pool is not initialized. Start the app through its lifespan.")
    return pool


def _error_text(exc: BaseException) -> str:
    # TimeoutError has no message of its own.
    return str(exc) or type(exc).__name__


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(pool: asyncpg.Pool, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    try:
        row = await pool.fetchrow(sql, *args)
    except _DRIVER_ERRORS as exc:
        raise StorageError(_error_text(exc)) from exc
    return _record_to_dict(row) if row is not None else None


async def fetch_all(pool: asyncpg.Pool, sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    try:
        rows = await pool.fetch(sql, *args)
    except _DRIVER_ERRORS as exc:
        raise StorageError(_error_text(exc)) from exc
    return [_record_to_dict(r) for r in rows]
