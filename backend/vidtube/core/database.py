"""Database connection and session management."""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from vidtube.core.config import settings


def enable_sqlite_foreign_keys(dbapi_conn, connection_record):
    """Enable foreign key support for SQLite."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str = None, **kwargs) -> Engine:
    """
    Create a SQLAlchemy engine.

    Args:
        database_url: SQLAlchemy URL, defaults to settings.database_url
        **kwargs: Extra arguments forwarded to create_engine

    Returns:
        SQLAlchemy engine
    """
    url = database_url or settings.database_url
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        engine = create_engine(url, connect_args=connect_args, echo=settings.debug, **kwargs)
        event.listen(engine, "connect", enable_sqlite_foreign_keys)
    else:
        engine = create_engine(url, echo=settings.debug, pool_pre_ping=True, **kwargs)
    return engine


def init_db(bind: Engine) -> None:
    """Create all tables."""
    from vidtube.models import Base

    Base.metadata.create_all(bind=bind)


engine = create_db_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency for database sessions."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
