from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Ensure the repo root is importable (so `import services.*` and `import tests.*` work).
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(scope="session")
def postgres_url() -> str:
    from testcontainers.postgres import PostgresContainer

    pg = PostgresContainer("postgres:16")
    try:
        pg.start()
    except Exception as e:  # noqa: BLE001
        pytest.skip(f"docker is not available: {e}")
    try:
        # testcontainers emits a psycopg2 URL; the seeder normalizes it to asyncpg.
        yield pg.get_connection_url()
    finally:
        pg.stop()
