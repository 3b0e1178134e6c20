from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest
from persons.core import db


def test_shared_factory_is_built_once_under_concurrency(monkeypatch):
    built: list[str] = []
    real_create_engine = db.create_engine

    def slow_create_engine(url, **kwargs):
        built.append(url)
        time.sleep(0.05)
        return real_create_engine(url, **kwargs)

    db.dispose_engine()
    monkeypatch.setattr(db, "create_engine", slow_create_engine)
    barrier = threading.Barrier(8)

    def acquire(_: int):
        barrier.wait()
        return db.get_session_factory()

    try:
        with ThreadPoolExecutor(max_workers=8) as pool:
            factories = list(pool.map(acquire, range(8)))
    finally:
        db.dispose_engine()

    assert len(built) == 1
    assert all(factory is factories[0] for factory in factories)


def test_dispose_engine_forces_a_fresh_factory():
    first = db.get_session_factory()
    db.dispose_engine()
    second = db.get_session_factory()

    assert first is not second
    assert second.kw["bind"] is db.get_engine()


@pytest.mark.asyncio
async def test_health_check_reports_dialect():
    result = await db.check_db_health(use_cache=False)

    assert result["status"] == "ok"
    assert result["dialect"] == "sqlite"
    assert result["error"] is None


@pytest.mark.asyncio
async def test_health_check_reports_engine_build_failure(monkeypatch):
    def missing_driver():
        raise ModuleNotFoundError("No module named 'psycopg'")

    monkeypatch.setattr(db, "get_engine", missing_driver)
    result = await db.check_db_health(use_cache=False)

    assert result["status"] == "fail"
    assert "psycopg" in result["error"]


@pytest.mark.asyncio
async def test_health_check_reuses_recent_result(monkeypatch):
    db.invalidate_db_health_cache()
    first = await db.check_db_health()

    def unreachable():
        raise AssertionError("expected the cached health result")

    monkeypatch.setattr(db, "_ping_database", unreachable)
    try:
        assert await db.check_db_health() is first
    finally:
        db.invalidate_db_health_cache()
