"""
Record store error taxonomy.

Client-attributable failures (bad identifier, missing record) are separated
from storage failures so the HTTP layer can map them to 400 and 500.
"""


class StoreError(Exception):
    """Base class for every failure raised by the record store."""


class InvalidIdentifierError(StoreError):
    """The supplied identifier is not syntactically valid for the store."""


class RecordNotFoundError(StoreError):
    """No record matches the supplied identifier."""


class DuplicateKeyError(StoreError):
    """A record with the same identifier already exists."""


class StoreUnavailableError(StoreError):
    """The store could not be reached while connecting."""


CLIENT_ERRORS = (InvalidIdentifierError, RecordNotFoundError)
