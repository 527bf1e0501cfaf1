from __future__ import annotations

import httpx
import pytest
import sqlalchemy as sa


async def _count_rows(database_url: str) -> dict[str, int]:
    from services.dashboard.app.db import create_engine

    engine = create_engine(database_url)
    try:
        async with engine.connect() as conn:
            return {
                table: (await conn.execute(sa.text(f"SELECT COUNT(1) FROM {table}"))).scalar_one()
                for table in ("users", "customers", "invoices", "revenue")
            }
    finally:
        await engine.dispose()


@pytest.fixture()
def dashboard_app(postgres_url: str):
    from services.dashboard.app.main import app
    from services.dashboard.app.settings import DashboardSettings, get_settings

    app.dependency_overrides[get_settings] = lambda: DashboardSettings(postgres_url=postgres_url)
    yield app
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_seed_twice_is_idempotent(dashboard_app, postgres_url: str):
    transport = httpx.ASGITransport(app=dashboard_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r1 = await client.get("/seed")
        r2 = await client.get("/seed")

    assert r1.status_code == 200, r1.text
    assert r2.status_code == 200, r2.text
    assert r2.json() == {"message": "Database seeded successfully"}
    assert await _count_rows(postgres_url) == {"users": 1, "customers": 6, "invoices": 13, "revenue": 12}


@pytest.mark.asyncio
async def test_stored_password_is_a_bcrypt_hash(postgres_url: str):
    from services.dashboard.app import placeholder_data as data
    from services.dashboard.app.db import create_engine
    from services.dashboard.app.seeder import seed_database, verify_password

    engine = create_engine(postgres_url)
    try:
        await seed_database(engine)
        async with engine.connect() as conn:
            stored = (
                await conn.execute(sa.text("SELECT password FROM users WHERE email = :e"), {"e": data.USERS[0].email})
            ).scalar_one()
    finally:
        await engine.dispose()

    assert stored != data.USERS[0].password
    assert verify_password(data.USERS[0].password, stored)


@pytest.mark.asyncio
async def test_wrong_password_reports_auth_error(postgres_url: str):
    from sqlalchemy.engine import make_url

    from services.dashboard.app.main import app
    from services.dashboard.app.settings import DashboardSettings, get_settings

    bad_url = make_url(postgres_url).set(password="definitely-wrong").render_as_string(hide_password=False)
    app.dependency_overrides[get_settings] = lambda: DashboardSettings(postgres_url=bad_url)
    try:
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            r = await client.get("/seed")
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 500
    assert r.json()["error"]["code"] == "AUTH_ERROR"
