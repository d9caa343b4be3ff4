"""Store-backed sessions.

``SessionMiddleware`` loads the session for the request's token cookie into
``request.session`` before the handler runs and writes it back afterwards.
Only the opaque token travels to the browser; the data stays in the store.
Sessions have an absolute lifetime counted from creation (or the last token
renewal), not from the last request.
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from snippetbox.core.utils.session_store import SessionStore
from snippetbox.db.base import utcnow

logger = logging.getLogger(__name__)

_DEADLINE_KEY = "__deadline"


class Session(dict):
    """Per-request session data that remembers whether it was changed."""

    def __init__(
        self,
        data: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
        deadline: Optional[datetime] = None,
    ):
        super().__init__(data or {})
        self.token = token
        self.deadline = deadline
        self.modified = False
        self.renewed = False
        self.destroyed = False

    def __setitem__(self, key: str, value: Any) -> None:
        super().__setitem__(key, value)
        self.modified = True

    def __delitem__(self, key: str) -> None:
        super().__delitem__(key)
        self.modified = True

    def pop(self, key: str, *default: Any) -> Any:
        if key in self:
            self.modified = True
        return super().pop(key, *default)

    def setdefault(self, key: str, default: Any = None) -> Any:
        if key not in self:
            self.modified = True
        return super().setdefault(key, default)

    def update(self, *args: Any, **kwargs: Any) -> None:
        super().update(*args, **kwargs)
        self.modified = True

    def clear(self) -> None:
        super().clear()
        self.modified = True

    def pop_string(self, key: str) -> str:
        """Remove ``key`` and return it as a string ("" when absent); used for flash messages."""
        value = self.pop(key, None)
        return "" if value is None else str(value)

    def renew_token(self) -> None:
        """Move the data to a fresh token. Call on any privilege change (login, logout)."""
        self.renewed = True
        self.modified = True

    def destroy(self) -> None:
        """Drop all data and delete the session from the store."""
        super().clear()
        self.destroyed = True
        self.modified = True


class SessionMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        store: SessionStore,
        cookie_name: str = "session",
        lifetime: timedelta = timedelta(hours=12),
        secure: bool = False,
    ):
        super().__init__(app)
        self.store = store
        self.cookie_name = cookie_name
        self.lifetime = lifetime
        self.secure = secure

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        session = await self._load(request.cookies.get(self.cookie_name))
        request.scope["session"] = session

        response = await call_next(request)

        if session.modified:
            await self._save(session, response)
        return response

    async def _load(self, token: Optional[str]) -> Session:
        if not token:
            return Session()
        data = await run_in_threadpool(self.store.find, token)
        if data is None:
            return Session()
        deadline = data.pop(_DEADLINE_KEY, None)
        return Session(
            data,
            token=token,
            deadline=datetime.fromisoformat(deadline) if deadline else None,
        )

    async def _save(self, session: Session, response: Response) -> None:
        response.headers.append("Vary", "Cookie")
        old_token = session.token

        if session.destroyed:
            if old_token:
                await run_in_threadpool(self.store.delete, old_token)
            response.delete_cookie(self.cookie_name, path="/", secure=self.secure, httponly=True, samesite="lax")
            return

        if session.renewed or not old_token or session.deadline is None:
            if session.renewed and old_token:
                await run_in_threadpool(self.store.delete, old_token)
            session.token = secrets.token_urlsafe(32)
            session.deadline = utcnow() + self.lifetime

        payload = dict(session)
        payload[_DEADLINE_KEY] = session.deadline.isoformat()
        await run_in_threadpool(self.store.commit, session.token, payload, session.deadline)

        max_age = max(int((session.deadline - utcnow()).total_seconds()), 0)
        response.set_cookie(
            self.cookie_name,
            session.token,
            max_age=max_age,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )
        logger.debug("Session saved", extra={"renewed": session.renewed})
