"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    PasteNotFoundError:
        Raised when a paste is not found in the data store (never stored or reclaimed).

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

    PasteUpdateConflictError:
        Raised when an atomic read-modify-write keeps losing to concurrent writers.

Example:
    >>> from pasteshare.dao.exceptions import PasteNotFoundError
    >>> raise PasteNotFoundError("Paste with id 'V1StGXR8' not found.")
    Traceback (most recent call last):
        ...
    pasteshare.dao.exceptions.PasteNotFoundError: Paste with id 'V1StGXR8' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class PasteNotFoundError(DAOError):
    """Exception raised when a paste is not found in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, undecodable records, etc.
    """

    pass


class PasteUpdateConflictError(DAOError):
    """Exception raised when an optimistic update exhausts its retries."""

    pass
