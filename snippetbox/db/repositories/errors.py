"""Errors raised by the data stores.

Handlers map ``NoRecordError`` to 404 and ``PersistenceError`` to 500; the
other two are surfaced to users as form errors.
"""


class ModelError(Exception):
    """Base class for data store errors"""


class NoRecordError(ModelError):
    """No matching record found"""


class InvalidCredentialsError(ModelError):
    """Email or password did not match a user"""


class DuplicateEmailError(ModelError):
    """Email address already belongs to a user"""


class PersistenceError(ModelError):
    """The underlying database failed"""
