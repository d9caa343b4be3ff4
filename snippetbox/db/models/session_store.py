from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from snippetbox.db.base import Base


class SessionData(Base):
    """Server-side session state, one row per session token."""

    __tablename__ = "sessions"

    # Base provides: id, created
    token: Mapped[str] = mapped_column(String(43), unique=True, index=True, nullable=False)
    data: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    expiry: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<SessionData(expiry={self.expiry})>"
