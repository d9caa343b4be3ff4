from contextlib import contextmanager
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def get_connect_args(dsn: str) -> Dict[str, Any]:
    """Get database-specific connection arguments"""
    if dsn.startswith("sqlite"):
        # SQLite needs check_same_thread=False for the threadpool handlers
        return {"check_same_thread": False}
    # PostgreSQL and other databases don't need special args
    return {}


def open_db(dsn: str) -> Engine:
    """Create the engine (connection pool) for ``dsn``."""
    options: Dict[str, Any] = {"connect_args": get_connect_args(dsn), "pool_pre_ping": True}
    if dsn in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every checkout sees an empty database
        options["poolclass"] = StaticPool
    return create_engine(dsn, **options)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@contextmanager
def session_scope(factory: sessionmaker) -> Generator[Session, None, None]:
    """Open a DB session for a single store call with proper resource management"""
    db = factory()
    try:
        yield db
    finally:
        db.close()
