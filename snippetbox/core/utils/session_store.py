"""Server-side session storage.

Session state lives in the `sessions` table (or in process memory for tests
and single-instance development) keyed by an opaque token; the browser only
ever holds the token.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from threading import Lock
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import delete, select, update
from sqlalchemy.orm import sessionmaker

from snippetbox.db.base import utcnow
from snippetbox.db.models.session_store import SessionData
from snippetbox.db.session import session_scope

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    @abstractmethod
    def find(self, token: str) -> Optional[Dict[str, Any]]:
        """Return the data for ``token``, or None if missing or expired."""

    @abstractmethod
    def commit(self, token: str, data: Dict[str, Any], expiry: datetime) -> None:
        """Insert or replace the data for ``token``."""

    @abstractmethod
    def delete(self, token: str) -> None:
        """Remove the entry for ``token`` if there is one."""

    @abstractmethod
    def delete_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""


class SQLSessionStore(SessionStore):
    """SessionStore backed by the `sessions` table."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def find(self, token: str) -> Optional[Dict[str, Any]]:
        stmt = select(SessionData).where(SessionData.token == token, SessionData.expiry > utcnow())
        with session_scope(self.session_factory) as db:
            row = db.scalar(stmt)
            if not row:
                return None
            return dict(row.data or {})

    def commit(self, token: str, data: Dict[str, Any], expiry: datetime) -> None:
        with session_scope(self.session_factory) as db:
            try:
                # Update first; insert only when no row exists for the token
                result = db.execute(
                    update(SessionData)
                    .where(SessionData.token == token)
                    .values(data=data, expiry=expiry)
                )
                if result.rowcount == 0:
                    db.add(SessionData(token=token, data=data, expiry=expiry))
                db.commit()
            except Exception as e:
                db.rollback()
                logger.error("Session commit failed: %s", e)
                raise

    def delete(self, token: str) -> None:
        with session_scope(self.session_factory) as db:
            db.execute(delete(SessionData).where(SessionData.token == token))
            db.commit()

    def delete_expired(self) -> int:
        with session_scope(self.session_factory) as db:
            result = db.execute(delete(SessionData).where(SessionData.expiry <= utcnow()))
            db.commit()
            return result.rowcount or 0


class MemorySessionStore(SessionStore):
    """Simple in-memory store for development/testing. Data does not survive restarts."""

    def __init__(self) -> None:
        self._items: Dict[str, Tuple[Dict[str, Any], datetime]] = {}
        self._lock = Lock()

    def find(self, token: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            item = self._items.get(token)
            if item is None:
                return None
            data, expiry = item
            if expiry <= utcnow():
                del self._items[token]
                return None
            return dict(data)

    def commit(self, token: str, data: Dict[str, Any], expiry: datetime) -> None:
        with self._lock:
            self._items[token] = (dict(data), expiry)

    def delete(self, token: str) -> None:
        with self._lock:
            self._items.pop(token, None)

    def delete_expired(self) -> int:
        now = utcnow()
        with self._lock:
            expired = [token for token, (_, expiry) in self._items.items() if expiry <= now]
            for token in expired:
                del self._items[token]
        return len(expired)
