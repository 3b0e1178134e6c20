from __future__ import annotations

# ruff: noqa: E402
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]
BACKEND_DIR = PROJECT_ROOT / "backend"
for path in (PROJECT_ROOT, BACKEND_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import pytest
from alembic import command
from fastapi.testclient import TestClient
from persons.core.app import create_app
from persons.core.db import build_session_factory, dispose_engine
from persons.core.settings import settings
from persons.models import Base
from persons.models import orm  # noqa: F401
from sqlalchemy import create_engine

from backend.tests.utils.db import alembic_config, sqlite_url


@pytest.fixture(scope="session", autouse=True)
def configure_test_database(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Point settings at a throwaway SQLite database and log directory."""

    original_url = settings.database_url
    original_log_directory = settings.log_directory
    workdir = tmp_path_factory.mktemp("persons")
    settings.database_url = sqlite_url(workdir / "persons_test.db")
    settings.log_directory = str(workdir / "logs")
    dispose_engine()
    yield settings.database_url
    dispose_engine()
    settings.database_url = original_url
    settings.log_directory = original_log_directory


@pytest.fixture(scope="session", autouse=True)
def apply_migrations(configure_test_database: str) -> None:
    """Run Alembic migrations once for the test database."""

    cfg = alembic_config()
    dispose_engine()
    command.upgrade(cfg, "head")
    yield
    dispose_engine()
    command.downgrade(cfg, "base")


@pytest.fixture()
def client(apply_migrations: None) -> TestClient:
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def isolated_session_factory(tmp_path: Path):
    """Session factory over a fresh, empty database private to one test."""

    engine = create_engine(
        sqlite_url(tmp_path / "isolated.db"),
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield build_session_factory(engine)
    engine.dispose()
