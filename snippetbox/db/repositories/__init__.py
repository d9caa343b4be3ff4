"""Data stores used by the web handlers."""

from snippetbox.db.repositories.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    ModelError,
    NoRecordError,
    PersistenceError,
)
from snippetbox.db.repositories.snippets import SnippetModel, SnippetModelInterface
from snippetbox.db.repositories.users import UserModel, UserModelInterface

__all__ = [
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "ModelError",
    "NoRecordError",
    "PersistenceError",
    "SnippetModel",
    "SnippetModelInterface",
    "UserModel",
    "UserModelInterface",
]
