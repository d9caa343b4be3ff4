"""Snippet persistence."""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import List

from sqlalchemy import select

from snippetbox.db.base import utcnow
from snippetbox.db.models.snippet import Snippet
from snippetbox.db.repositories.base import SQLRepository
from snippetbox.db.repositories.errors import NoRecordError

LATEST_LIMIT = 10


class SnippetModelInterface(ABC):
    """Operations the handlers need from a snippet store."""

    @abstractmethod
    def insert(self, title: str, content: str, expires: int) -> int:
        """Store a snippet that expires ``expires`` days from now.

        Returns:
            The new snippet's id.

        Raises:
            PersistenceError: The database failed.
        """

    @abstractmethod
    def get(self, id: int) -> Snippet:
        """Fetch a snippet that has not expired yet.

        Raises:
            NoRecordError: No such snippet, or it has expired.
            PersistenceError: The database failed.
        """

    @abstractmethod
    def latest(self) -> List[Snippet]:
        """Return the 10 most recently created unexpired snippets, newest first."""


class SnippetModel(SQLRepository, SnippetModelInterface):
    """SnippetModelInterface backed by the ``snippets`` table."""

    def insert(self, title: str, content: str, expires: int) -> int:
        now = utcnow()
        snippet = Snippet(
            title=title,
            content=content,
            created=now,
            expires=now + timedelta(days=expires),
        )
        with self.session() as db:
            db.add(snippet)
            db.commit()
            return snippet.id

    def get(self, id: int) -> Snippet:
        stmt = select(Snippet).where(Snippet.expires > utcnow(), Snippet.id == id)
        with self.session() as db:
            snippet = db.scalars(stmt).one_or_none()
        if snippet is None:
            raise NoRecordError(f"snippet {id} not found")
        return snippet

    def latest(self) -> List[Snippet]:
        stmt = (
            select(Snippet)
            .where(Snippet.expires > utcnow())
            .order_by(Snippet.id.desc())
            .limit(LATEST_LIMIT)
        )
        with self.session() as db:
            return list(db.scalars(stmt))
