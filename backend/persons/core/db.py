from __future__ import annotations

import threading
from contextlib import contextmanager
from functools import partial
from time import monotonic, perf_counter
from typing import Any, Callable, Generator, TypeVar

from anyio import to_thread
from persons.core.logging import get_logger
from persons.core.settings import settings
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

T = TypeVar("T")
SessionFactory = Callable[[], Session]

_engine: Engine | None = None
_session_factory: sessionmaker[TrackedSession] | None = None
# guards lazy construction and disposal of the two globals above
_engine_lock = threading.RLock()
_health_snapshot: tuple[float, dict[str, Any]] | None = None
HEALTH_CACHE_SECONDS = 5.0

logger = get_logger(__name__)


class TrackedSession(Session):
    """SQLAlchemy session that remembers whether ``close`` was called on it."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.closed = False

    def close(self) -> None:
        super().close()
        self.closed = True


def _connect_args(url: str) -> dict[str, Any]:
    if url.startswith("postgresql"):
        return {"connect_timeout": 1}
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                _engine = create_engine(
                    settings.database_url,
                    connect_args=_connect_args(settings.database_url),
                    pool_pre_ping=True,
                )
    return _engine


def build_session_factory(engine: Engine) -> sessionmaker[TrackedSession]:
    """Create a session factory bound to ``engine``.

    Callers that own their engine (scripts, tests) pass the result to
    ``run_in_session``/``session_scope`` instead of relying on the shared one.
    """

    return sessionmaker(
        bind=engine,
        class_=TrackedSession,
        autoflush=False,
        expire_on_commit=False,
    )


def get_session_factory() -> sessionmaker[TrackedSession]:
    """Return the process-wide factory, building it on first use."""

    global _session_factory
    if _session_factory is None:
        with _engine_lock:
            if _session_factory is None:
                _session_factory = build_session_factory(get_engine())
    return _session_factory


def _describe_work(work: Callable[..., Any]) -> str:
    return getattr(work, "__qualname__", None) or repr(work)


def _release_session(session: Session, label: str | None) -> None:
    if getattr(session, "closed", False):
        logger.warning(
            "session closed by unit of work %s; omit closing the session manually, "
            "it is closed automatically at the end of the scope",
            label or "<anonymous>",
        )
        return
    session.close()


@contextmanager
def session_scope(
    *,
    session_factory: SessionFactory | None = None,
    label: str | None = None,
) -> Generator[Session, None, None]:
    """Provide transactional scope for DB interactions.

    Commits when the block finishes, rolls back and re-raises on any error,
    and closes the session exactly once on every path.
    """

    factory = session_factory or get_session_factory()
    session = factory()
    session.begin()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        _release_session(session, label)


def run_in_session(
    work: Callable[[Session], T],
    *,
    session_factory: SessionFactory | None = None,
    label: str | None = None,
) -> T:
    """Run ``work`` with its own session and transaction and return its result."""

    with session_scope(
        session_factory=session_factory,
        label=label or _describe_work(work),
    ) as session:
        return work(session)


async def run_in_session_async(
    work: Callable[[Session], T],
    *,
    session_factory: SessionFactory | None = None,
    label: str | None = None,
) -> T:
    call = partial(
        run_in_session,
        work,
        session_factory=session_factory,
        label=label or _describe_work(work),
    )
    return await to_thread.run_sync(call)


def dispose_engine() -> None:
    global _engine, _session_factory
    with _engine_lock:
        if _engine is not None:
            _engine.dispose()
            _engine = None
        _session_factory = None
    invalidate_db_health_cache()


def invalidate_db_health_cache() -> None:
    global _health_snapshot
    _health_snapshot = None


def _ping_database() -> dict[str, Any]:
    start = perf_counter()
    try:
        engine = get_engine()
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except Exception as exc:
        # Includes driver import failures raised while the engine is built.
        logger.warning("database health check failed: %s", exc)
        return {"status": "fail", "dialect": None, "error": str(exc)}
    return {
        "status": "ok",
        "dialect": engine.dialect.name,
        "latency_ms": round((perf_counter() - start) * 1000, 3),
        "error": None,
    }


async def check_db_health(use_cache: bool = True) -> dict[str, Any]:
    """Run ``SELECT 1`` off the event loop, reusing a recent result when allowed."""

    global _health_snapshot
    snapshot = _health_snapshot
    if use_cache and snapshot is not None:
        taken_at, result = snapshot
        if monotonic() - taken_at < HEALTH_CACHE_SECONDS:
            return result

    result = await to_thread.run_sync(_ping_database)
    if use_cache:
        _health_snapshot = (monotonic(), result)
    return result
