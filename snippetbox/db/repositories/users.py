"""User persistence and credential checks."""

from abc import ABC, abstractmethod

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError

from snippetbox.core.security import get_password_hash, verify_password
from snippetbox.db.models.user import User
from snippetbox.db.repositories.base import SQLRepository
from snippetbox.db.repositories.errors import DuplicateEmailError, InvalidCredentialsError


class UserModelInterface(ABC):
    """Operations the handlers need from a user store."""

    @abstractmethod
    def insert(self, name: str, email: str, password: str) -> None:
        """Create a user. Raises DuplicateEmailError if the email is taken."""

    @abstractmethod
    def authenticate(self, email: str, password: str) -> int:
        """Return the id of the user with these credentials.

        Raises InvalidCredentialsError for an unknown email or wrong password.
        """

    @abstractmethod
    def exists(self, id: int) -> bool:
        """Whether a user with ``id`` exists."""


class UserModel(SQLRepository, UserModelInterface):
    """UserModelInterface backed by the ``users`` table."""

    def insert(self, name: str, email: str, password: str) -> None:
        user = User(name=name, email=email, hashed_password=get_password_hash(password))
        with self.session() as db:
            db.add(user)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                if "email" in str(e.orig).lower():
                    raise DuplicateEmailError(email) from e
                raise

    def authenticate(self, email: str, password: str) -> int:
        with self.session() as db:
            user = db.scalars(select(User).where(User.email == email)).one_or_none()
        if user is None or not verify_password(password, user.hashed_password):
            raise InvalidCredentialsError(email)
        return user.id

    def exists(self, id: int) -> bool:
        with self.session() as db:
            return bool(db.scalar(select(exists().where(User.id == id))))
