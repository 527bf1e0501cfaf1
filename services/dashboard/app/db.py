from __future__ import annotations

import contextlib
from typing import Any

from sqlalchemy.engine import URL, make_url
import sqlalchemy.ext.asyncio as sa_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.pool import NullPool


# Substrings that mark a managed/cloud Postgres or an explicit SSL request.
SSL_MARKERS = (
    "sslmode=require",
    "ssl=true",
    "amazonaws.com",
    "neon.tech",
    "vercel-storage.com",
)

# libpq options asyncpg.connect() would reject as unknown keyword arguments.
_LIBPQ_ONLY_QUERY_KEYS = (
    "sslmode",
    "ssl",
    "sslrootcert",
    "sslcert",
    "sslkey",
    "channel_binding",
    "connect_timeout",
    "application_name",
    "options",
)

_SYNC_DRIVERS = ("postgres", "postgresql", "postgresql+psycopg", "postgresql+psycopg2")


def wants_ssl(database_url: str) -> bool:
    return any(marker in database_url for marker in SSL_MARKERS)


def to_async_url(database_url: str) -> URL:
    """
    Normalize a libpq-style connection string for SQLAlchemy's asyncpg dialect.

    Hosted providers hand out `postgres://...?sslmode=require`; SQLAlchemy rejects the
    `postgres` scheme and asyncpg rejects libpq query options, so both are rewritten here.
    SSL is re-applied through `connect_args`.
    """
    url = make_url(database_url)
    if url.drivername in _SYNC_DRIVERS:
        url = url.set(drivername="postgresql+asyncpg")
    return url.difference_update_query(_LIBPQ_ONLY_QUERY_KEYS)


def connect_args(database_url: str) -> dict[str, Any]:
    if wants_ssl(database_url):
        return {"ssl": "require"}
    return {}


def create_engine(database_url: str) -> AsyncEngine:
    # NullPool: disposing the engine closes the single connection a seed run opens.
    return sa_asyncio.create_async_engine(
        to_async_url(database_url),
        poolclass=NullPool,
        connect_args=connect_args(database_url),
    )


async def dispose_quietly(engine: AsyncEngine) -> None:
    # Close failures never replace the error that ended the run.
    with contextlib.suppress(Exception):
        await engine.dispose()
