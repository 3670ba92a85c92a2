"""
Name: Integration Test DB Setup

Responsibilities:
  - Ensure database schema exists before integration tests run
  - Run Alembic migrations once per test session
  - Truncate catalog tables between tests

Notes:
  - Only runs when RUN_INTEGRATION=1
  - Uses DATABASE_URL from environment (see alembic/env.py)
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config

from app.crosscutting.config import Settings
from app.infrastructure.db.pool import close_pool, init_pool, reset_pool

DB_USER = os.getenv("POSTGRES_USER", "postgres")
DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
DB_HOST = os.getenv("POSTGRES_HOST", "localhost")
DB_PORT = os.getenv("POSTGRES_HOST_PORT", "5432")
DB_NAME = os.getenv("POSTGRES_DB", "catalog")
DEFAULT_DATABASE_URL = (
    f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

RUN_INTEGRATION = os.getenv("RUN_INTEGRATION") == "1"

if RUN_INTEGRATION:
    # R: alembic/env.py lee DATABASE_URL; APP_ENV sigue en "test" para los unit.
    os.environ.setdefault("DATABASE_URL", DEFAULT_DATABASE_URL)


def pytest_collection_modifyitems(config, items) -> None:
    if RUN_INTEGRATION:
        return
    skip = pytest.mark.skip(reason="set RUN_INTEGRATION=1 to run against PostgreSQL")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(scope="session")
def apply_migrations() -> None:
    """Run Alembic migrations for integration tests."""
    repo_root = Path(__file__).resolve().parents[2]
    config = Config(str(repo_root / "alembic.ini"))
    config.set_main_option("script_location", str(repo_root / "alembic"))

    command.upgrade(config, "head")


@pytest.fixture(scope="session")
def db_pool(apply_migrations):
    settings = Settings(app_env="integration", database_url=os.environ["DATABASE_URL"])
    reset_pool()
    pool = init_pool(
        database_url=settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        statement_timeout_ms=settings.db_statement_timeout_ms,
    )
    yield pool
    close_pool()


@pytest.fixture
def clean_db(db_pool):
    with db_pool.connection() as conn:
        conn.execute("TRUNCATE audit_logs, products, users RESTART IDENTITY CASCADE")
    yield db_pool
