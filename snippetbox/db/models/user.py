from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from snippetbox.db.base import Base


class User(Base):
    """Account created by signup"""

    # Base provides: id, created
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(60), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"
