from contextlib import contextmanager
from typing import Generator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from snippetbox.db.repositories.errors import PersistenceError
from snippetbox.db.session import session_scope


class SQLRepository:
    """Shared plumbing for stores backed by a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """One DB session per call; driver failures surface as PersistenceError."""
        try:
            with session_scope(self.session_factory) as db:
                yield db
        except SQLAlchemyError as e:
            raise PersistenceError(str(e)) from e
