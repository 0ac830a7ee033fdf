from contextlib import contextmanager
from typing import Any, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from src.api.settings import get_settings


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    """SQLite ignores REFERENCES clauses unless enabled per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# PUBLIC_INTERFACE
def create_db_engine(url: str, *, echo: bool = False, **kwargs: Any) -> Engine:
    """
    Create an engine for the given URL.

    Notes:
    - SQLite connections get foreign-key enforcement switched on and may be
      shared across threads (TestClient, uvicorn workers).
    - Other engines are configured for typical web usage (pre-ping).
    """
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        db_engine = create_engine(url, echo=echo, connect_args=connect_args, **kwargs)
        event.listen(db_engine, "connect", _enable_sqlite_foreign_keys)
        return db_engine
    return create_engine(url, echo=echo, pool_pre_ping=True, **kwargs)


_settings = get_settings()

engine = create_db_engine(_settings.database_url, echo=_settings.sql_echo)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


# PUBLIC_INTERFACE
def init_db(db_engine: Engine = engine) -> None:
    """Create all tables (in foreign-key order) if they do not exist yet."""
    # Registers every model on Base.metadata.
    from src.api.models import payment, rating, ride, user, vehicle  # noqa: F401
    from src.api.models.base import Base

    Base.metadata.create_all(db_engine)


# PUBLIC_INTERFACE
def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a SQLAlchemy session and ensures closure."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """Context manager for scripts/background jobs needing a managed session."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
