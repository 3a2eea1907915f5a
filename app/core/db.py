from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from .config import get_settings


_engine: Engine | None = None


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores REFERENCES clauses unless each connection opts in."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    is_sqlite = database_url.startswith("sqlite")
    connect_args = {"check_same_thread": False} if is_sqlite else {}
    engine = create_engine(database_url, pool_pre_ping=True, echo=echo, connect_args=connect_args)
    if is_sqlite:
        enable_sqlite_foreign_keys(engine)
    return engine


def get_engine() -> Engine:
    """Return the process-wide engine, creating it on first use."""

    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    return _engine


def dispose_engine() -> None:
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None
