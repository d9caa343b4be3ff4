from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from snippetbox.db.base import Base


class Snippet(Base):
    """A titled piece of text that stops being served once it expires"""

    # Base provides: id, created
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    expires: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Snippet(id={self.id}, title={self.title!r}, expires={self.expires})>"
