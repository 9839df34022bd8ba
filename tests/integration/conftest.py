import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from personal_color.config.settings import Settings
from personal_color.database.connection import close_pool, get_connection, init_pool

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "personal_color" / "database" / "schema.sql"

# Ids above this are treated as test data and removed after each test.
TEST_USER_ID_BASE = 900_000


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "personal_color_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(SCHEMA_PATH.read_text())
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[None, None, None]:
    yield
    with get_connection() as conn:
        conn.execute(
            "DELETE FROM color_analyses WHERE user_id >= %s",
            (TEST_USER_ID_BASE,),
        )
        conn.commit()


@pytest.fixture
def user_ids(integration_cleanup: None) -> tuple[int, int]:
    return TEST_USER_ID_BASE + 1, TEST_USER_ID_BASE + 2
