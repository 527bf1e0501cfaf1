"""
Classification of seed failures into a closed set of error kinds.

Database drivers surface the interesting bits (SQLSTATE, errno, message) on different objects:
SQLAlchemy wraps the DBAPI error in `DBAPIError.orig`, the asyncpg adapter chains the native
exception as `__cause__`, and socket failures arrive as bare `OSError`. The helpers here walk that
chain once so the priority rules below can look at plain strings.
"""

from __future__ import annotations

import errno
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum


class SeedErrorKind(StrEnum):
    MISSING_ENV_VAR = "MISSING_ENV_VAR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    ECONNREFUSED = "ECONNREFUSED"
    SSL_ERROR = "SSL_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


@dataclass(frozen=True)
class SeedFailure:
    kind: SeedErrorKind
    # Usually kind.value; generic database/unknown errors pass the driver's own code through.
    code: str
    message: str
    details: str | None = None


MISSING_ENV_VAR_MESSAGE = "POSTGRES_URL environment variable is not set. Please set it in your .env file."
CONNECTION_ERROR_MESSAGE = "Failed to create database connection. Please check your POSTGRES_URL."
ECONNREFUSED_MESSAGE = (
    "Unable to connect to the database. Please make sure your database is running and the POSTGRES_URL "
    "is correct. Common issues: 1) Database server is not running, 2) Wrong host/port in POSTGRES_URL, "
    "3) Firewall blocking the connection."
)
SSL_ERROR_MESSAGE = (
    "SSL connection error. If you are using a local database, try removing SSL requirements from your "
    "connection string."
)
AUTH_ERROR_MESSAGE = "Database authentication failed. Please check your POSTGRES_URL credentials."

SQLSTATE_INVALID_AUTHORIZATION = "28000"
SQLSTATE_INVALID_PASSWORD = "28P01"

REFUSED_MARKERS = ("ECONNREFUSED", "Connection refused", "Connect call failed")


def _chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    todo: list[BaseException] = [exc]
    while todo:
        cur = todo.pop(0)
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur
        if isinstance(cur, BaseExceptionGroup):
            todo.extend(cur.exceptions)
        for nxt in (getattr(cur, "orig", None), cur.__cause__, cur.__context__):
            if isinstance(nxt, BaseException):
                todo.append(nxt)


def _own_code(exc: BaseException) -> str | None:
    for attr in ("sqlstate", "pgcode"):
        v = getattr(exc, attr, None)
        if isinstance(v, str) and v:
            return v
    # SQLAlchemy's StatementError.code is a docs-link slug ("gkpj", "dbapi"), not a driver code.
    v = getattr(exc, "code", None)
    if isinstance(v, str) and v and not _is_sqlalchemy_error(exc):
        return v
    if isinstance(exc, OSError) and exc.errno is not None:
        return errno.errorcode.get(exc.errno, str(exc.errno))
    return None


def _is_sqlalchemy_error(exc: BaseException) -> bool:
    return type(exc).__module__.startswith("sqlalchemy.")


def error_code(exc: BaseException) -> str | None:
    """First driver-level code found along the exception chain (SQLSTATE, errno name, ...)."""
    for e in _chain(exc):
        code = _own_code(e)
        if code:
            return code
    return None


def error_message(exc: BaseException) -> str:
    """Message of the innermost exception that has one; wrappers add SQL and noise."""
    msg = ""
    for e in _chain(exc):
        if isinstance(e, BaseExceptionGroup):
            continue
        text = str(e)
        if text:
            msg = text
            if not _is_sqlalchemy_error(e):
                break
    return msg


def _chain_text(exc: BaseException) -> str:
    return " | ".join(f"{type(e).__name__}: {e}" for e in _chain(exc))


def _is_refused(exc: BaseException, code: str | None, message: str) -> bool:
    if code == "ECONNREFUSED" or "ECONNREFUSED" in message:
        return True
    if any(isinstance(e, ConnectionRefusedError) for e in _chain(exc)):
        return True
    # asyncpg folds per-address failures into one plain OSError without an errno.
    text = _chain_text(exc)
    return any(marker in text for marker in REFUSED_MARKERS)


def missing_env_var() -> SeedFailure:
    return SeedFailure(
        kind=SeedErrorKind.MISSING_ENV_VAR,
        code=SeedErrorKind.MISSING_ENV_VAR.value,
        message=MISSING_ENV_VAR_MESSAGE,
    )


def classify_connection_error(exc: BaseException) -> SeedFailure:
    return SeedFailure(
        kind=SeedErrorKind.CONNECTION_ERROR,
        code=error_code(exc) or SeedErrorKind.CONNECTION_ERROR.value,
        message=CONNECTION_ERROR_MESSAGE,
        details=error_message(exc) or None,
    )


def classify_database_error(exc: BaseException) -> SeedFailure:
    """
    Map a failure raised while seeding. First match wins:
    connection refused, SSL, authentication, then pass-through.
    """
    code = error_code(exc)
    message = error_message(exc)

    if _is_refused(exc, code, message):
        return SeedFailure(SeedErrorKind.ECONNREFUSED, SeedErrorKind.ECONNREFUSED.value, ECONNREFUSED_MESSAGE)

    if "SSL" in message or code == SQLSTATE_INVALID_AUTHORIZATION or "SSL" in _chain_text(exc):
        return SeedFailure(SeedErrorKind.SSL_ERROR, SeedErrorKind.SSL_ERROR.value, SSL_ERROR_MESSAGE)

    if code == SQLSTATE_INVALID_PASSWORD or "password" in message or "authentication" in message:
        return SeedFailure(SeedErrorKind.AUTH_ERROR, SeedErrorKind.AUTH_ERROR.value, AUTH_ERROR_MESSAGE)

    return SeedFailure(
        kind=SeedErrorKind.DATABASE_ERROR,
        code=code or SeedErrorKind.DATABASE_ERROR.value,
        message=message or "Database error occurred",
    )


def classify_unexpected_error(exc: BaseException) -> SeedFailure:
    return SeedFailure(
        kind=SeedErrorKind.UNKNOWN_ERROR,
        code=error_code(exc) or SeedErrorKind.UNKNOWN_ERROR.value,
        message=error_message(exc) or "An unexpected error occurred",
    )
