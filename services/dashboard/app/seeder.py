from __future__ import annotations

import asyncio
import uuid
from collections.abc import Callable, Sequence
from typing import Any

import bcrypt
import sqlalchemy as sa
import structlog
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine
from sqlalchemy.schema import CreateTable

from services.dashboard.app import placeholder_data as data
from services.dashboard.app.db import create_engine, dispose_quietly
from services.dashboard.app.errors import (
    SeedFailure,
    classify_connection_error,
    classify_database_error,
    classify_unexpected_error,
    missing_env_var,
)
from services.dashboard.app.logging import logger
from services.dashboard.app.schema import customers, invoices, revenue, users


DEFAULT_BCRYPT_ROUNDS = 10


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


class SeedAborted(RuntimeError):
    """Raised for statements queued behind one that already failed."""


class SeedScope:
    """
    One connection inside one open transaction, shared by the concurrently running table seeds.

    asyncpg allows a single in-flight statement per connection, so statements are queued on a lock.
    Work that does not touch the connection (password hashing) still overlaps.
    """

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn
        self._lock = asyncio.Lock()
        self._failed: BaseException | None = None

    async def execute(self, statement: Any, params: Sequence[dict[str, Any]] | dict[str, Any] | None = None) -> None:
        async with self._lock:
            # Once a statement fails the transaction is aborted; queued statements never reach it.
            if self._failed is not None:
                raise SeedAborted("transaction already failed") from self._failed
            try:
                await self._conn.execute(statement, params)
            except BaseException as e:
                self._failed = e
                raise


async def _ensure_table(scope: SeedScope, table: sa.Table) -> None:
    await scope.execute(CreateTable(table, if_not_exists=True))


async def _insert_skip_conflicts(scope: SeedScope, table: sa.Table, key: str, rows: list[dict[str, Any]]) -> int:
    if rows:
        stmt = insert(table).on_conflict_do_nothing(index_elements=[table.c[key]])
        await scope.execute(stmt, rows)
    logger.info("seed_table_finished", table=table.name, rows=len(rows))
    return len(rows)


async def seed_users(scope: SeedScope, *, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> int:
    await _ensure_table(scope, users)
    # bcrypt is CPU-bound; hash every fixture password concurrently off the event loop.
    hashed = await asyncio.gather(*(asyncio.to_thread(hash_password, u.password, rounds) for u in data.USERS))
    rows = [
        {"id": u.id, "name": u.name, "email": u.email, "password": h}
        for u, h in zip(data.USERS, hashed, strict=True)
    ]
    return await _insert_skip_conflicts(scope, users, "id", rows)


async def seed_customers(scope: SeedScope) -> int:
    await _ensure_table(scope, customers)
    rows = [{"id": c.id, "name": c.name, "email": c.email, "image_url": c.image_url} for c in data.CUSTOMERS]
    return await _insert_skip_conflicts(scope, customers, "id", rows)


async def seed_invoices(scope: SeedScope) -> int:
    await _ensure_table(scope, invoices)
    rows = [
        {"id": i.id, "customer_id": i.customer_id, "amount": i.amount, "status": i.status, "date": i.date}
        for i in data.INVOICES
    ]
    return await _insert_skip_conflicts(scope, invoices, "id", rows)


async def seed_revenue(scope: SeedScope) -> int:
    await _ensure_table(scope, revenue)
    rows = [{"month": r.month, "revenue": r.revenue} for r in data.REVENUE]
    return await _insert_skip_conflicts(scope, revenue, "month", rows)


def _first_error(group: BaseExceptionGroup) -> BaseException:
    leaves: list[BaseException] = []
    todo: list[BaseException] = [group]
    while todo:
        exc = todo.pop(0)
        if isinstance(exc, BaseExceptionGroup):
            todo.extend(exc.exceptions)
        else:
            leaves.append(exc)
    # SeedAborted only echoes the failure that caused it.
    return next((e for e in leaves if not isinstance(e, SeedAborted)), leaves[0])


async def seed_database(engine: AsyncEngine, *, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS) -> dict[str, int]:
    """
    Create and populate users, customers, invoices and revenue in a single transaction.

    The four table seeds run concurrently; the first failure cancels the rest, rolls the
    transaction back and is re-raised as-is (not wrapped in an ExceptionGroup).
    Returns the number of fixture rows submitted per table.
    """
    logger.info("seed_started")
    async with engine.begin() as conn:
        await conn.execute(sa.text('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"'))
        scope = SeedScope(conn)
        try:
            async with asyncio.TaskGroup() as tg:
                tasks = {
                    "users": tg.create_task(seed_users(scope, rounds=bcrypt_rounds)),
                    "customers": tg.create_task(seed_customers(scope)),
                    "invoices": tg.create_task(seed_invoices(scope)),
                    "revenue": tg.create_task(seed_revenue(scope)),
                }
        except ExceptionGroup as eg:
            raise _first_error(eg)

    counts = {name: task.result() for name, task in tasks.items()}
    logger.info("seed_finished", counts=counts)
    return counts


async def run_seed(
    database_url: str | None,
    *,
    engine_factory: Callable[[str], AsyncEngine] = create_engine,
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> dict[str, int] | SeedFailure:
    """
    Full seed run as used by `GET /seed` and the CLI: validate config, build the engine, seed,
    release the engine. Every `Exception` comes back as a classified `SeedFailure`.

    The engine is released on every exit once it exists, including cancellation. Close errors are
    swallowed on failure paths; after a successful seed they surface as UNKNOWN_ERROR.
    """
    with structlog.contextvars.bound_contextvars(seed_run_id=uuid.uuid4().hex):
        try:
            if not database_url:
                return missing_env_var()

            try:
                engine = engine_factory(database_url)
            except Exception as e:
                return classify_connection_error(e)

            seeded = False
            try:
                counts = await seed_database(engine, bcrypt_rounds=bcrypt_rounds)
                seeded = True
            except Exception as e:
                return classify_database_error(e)
            finally:
                if seeded:
                    await engine.dispose()
                else:
                    await dispose_quietly(engine)
            return counts
        except Exception as e:
            return classify_unexpected_error(e)
