import logging
from collections.abc import Iterator
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from .config import Settings, STORAGE_MEMORY, ensure_data_dir
from .localtime import local_now
from .models import Base
from .storage import (
    ExpenseStore,
    MemoryExpenseStore,
    SqlExpenseStore,
    seed_default_categories,
    seed_sample_expenses,
)

logger = logging.getLogger(__name__)

# Global state for the open store
_current_engine: Engine | None = None
_current_session_factory: sessionmaker | None = None
_memory_store: MemoryExpenseStore | None = None


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign keys for SQLite."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_db_engine(url: str) -> Engine:
    """Create an engine; in-memory SQLite shares one connection across threads."""
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(url, echo=False, connect_args={"check_same_thread": False})
    return create_engine(url, echo=False)


def init_schema(engine: Engine) -> None:
    """Create tables if they don't exist and seed the default categories."""
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        seed_default_categories(session)
        session.commit()


def open_storage(settings: Settings) -> None:
    """
    Open the configured expense store.

    For SQLite the file and tables are created if they don't exist.
    """
    global _current_engine, _current_session_factory, _memory_store

    close_storage()

    if settings.storage == STORAGE_MEMORY:
        _memory_store = MemoryExpenseStore()
        if settings.sample_data:
            seed_sample_expenses(_memory_store, settings.user_id, local_now())
        logger.info("Opened in-memory expense store")
        return

    if settings.database_url is None:
        ensure_data_dir(settings)

    _current_engine = create_db_engine(settings.sqlite_url)
    _current_session_factory = sessionmaker(bind=_current_engine)
    init_schema(_current_engine)

    if settings.sample_data:
        session = _current_session_factory()
        try:
            store = SqlExpenseStore(session)
            if not store.list_expenses(settings.user_id):
                seed_sample_expenses(store, settings.user_id, local_now())
            session.commit()
        finally:
            session.close()

    logger.info("Opened expense database %s", _current_engine.url)


def close_storage() -> None:
    """Close the current store."""
    global _current_engine, _current_session_factory, _memory_store

    if _current_engine is not None:
        _current_engine.dispose()
        logger.info("Closed expense database")
    _current_engine = None
    _current_session_factory = None
    _memory_store = None


def is_storage_open() -> bool:
    return _current_engine is not None or _memory_store is not None


def get_session() -> Session:
    """Get a database session for the open database."""
    if _current_session_factory is None:
        raise RuntimeError("No expense database is open")
    return _current_session_factory()


def get_store() -> Iterator[ExpenseStore]:
    """FastAPI dependency for the expense store, one transaction per request."""
    if _memory_store is not None:
        yield _memory_store
        return

    session = get_session()
    try:
        yield SqlExpenseStore(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
