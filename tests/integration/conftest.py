import os
import shutil
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest
from psycopg import sql

from slipstage.config.settings import Settings
from slipstage.database.connection import close_pool, get_connection, init_pool
from slipstage.database.repositories.payment_records_repository import (
    PaymentRecordsRepository,
)
from slipstage.raster.cli_tool import GraphicsMagickTool


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "slipstage_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute("SELECT 1")
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
def repository(integration_pool: None) -> Generator[PaymentRecordsRepository, None, None]:
    table = f"payment_records_test_{uuid.uuid4().hex[:8]}"
    repo = PaymentRecordsRepository(table)
    repo.ensure_table()
    try:
        yield repo
    finally:
        with get_connection() as conn:
            conn.execute(sql.SQL("DROP TABLE IF EXISTS {}").format(sql.Identifier(table)))
            conn.commit()


@pytest.fixture
def graphicsmagick() -> GraphicsMagickTool:
    if shutil.which("gm") is None:
        pytest.skip("GraphicsMagick (gm) is not installed")
    return GraphicsMagickTool(timeout_seconds=60)
