"""Abstract base class for paste data access objects (DAOs).

This class establishes the contract the paste lifecycle engine relies on,
regardless of the underlying storage mechanism.

Responsibilities:
    - Store and fetch full PasteModel records under namespaced keys.
    - Schedule physical reclaim of records (backstop only; logical expiry is
      decided by the lifecycle engine).
    - Provide an atomic read-modify-write primitive for view counting.
    - Standardize error handling across data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from pasteshare.models import PasteModel
        >>> from pasteshare.dao.redis import PasteRedisDAO

        >>> dao = PasteRedisDAO(...)
        >>> dao.put(PasteModel(paste_id='V1StGXR8', content='hello', created_at=0, ttl_seconds=3600), expire_seconds=3660)

        >>> dao.get('V1StGXR8').content
        'hello'

        >>> dao.update('V1StGXR8', lambda p: replace(p, view_count=p.view_count + 1)).view_count
        1
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from pasteshare.models import PasteModel


class PasteBaseDAO(ABC):
    """Interface for paste data access objects (DAOs).

    Methods:
        put(paste: PasteModel, expire_seconds: int | None = None, **kwargs) -> PasteBaseDAO:
            Store the full record, replacing any prior value, optionally with an
            expiry set in the same write.
            Raises DataStoreError on connection or write failure.

        get(paste_id: str, **kwargs) -> PasteModel:
            Fetch the current record.
            Raises PasteNotFoundError if the record does not exist (or was reclaimed).
            Raises DataStoreError on connection or read failure.

        expire(paste_id: str, seconds: int, **kwargs) -> bool:
            Reclaim the record automatically after `seconds`.
            Raises DataStoreError on connection or write failure.

        update(paste_id: str, mutate: Callable, **kwargs) -> PasteModel:
            Atomically fetch, mutate and persist a record.
            Raises PasteNotFoundError, DataStoreError, PasteUpdateConflictError.

        probe(**kwargs) -> bool:
            Round-trip a short-lived probe key through the store.

    NOTE:
        - Records are never deleted explicitly; physical expiry reclaims them.
    """

    @abstractmethod
    def put(self, paste: PasteModel, expire_seconds: int | None = None, **kwargs) -> 'PasteBaseDAO':
        """Store a paste record, replacing any prior value.

        Args:
            paste (PasteModel):
                The record to store.

            expire_seconds (int | None):
                Reclaim the record after this many seconds. Set atomically
                with the value, so a stored record never lacks its expiry.
                None stores the record without expiry.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            PasteBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, paste_id: str, **kwargs) -> PasteModel:
        """Retrieve a paste record by its identifier.

        Args:
            paste_id (str):
                The paste identifier.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            PasteModel: The stored record.

        Raises:
            PasteNotFoundError:
                If no paste with the given identifier exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def expire(self, paste_id: str, seconds: int, **kwargs) -> bool:
        """Schedule the physical reclaim of a paste record.

        Args:
            paste_id (str):
                The paste identifier.

            seconds (int):
                Seconds from now after which the store drops the record.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bool: True if the expiry was set, False if the record does not exist.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def update(self, paste_id: str, mutate: Callable[[PasteModel], PasteModel], **kwargs) -> PasteModel:
        """Atomically read, mutate and persist a paste record.

        `mutate` receives the current record and returns the record to store.
        Any exception raised by `mutate` aborts the update without writing and
        propagates to the caller. Concurrent updates of the same record must
        never overwrite each other.

        Args:
            paste_id (str):
                The paste identifier.

            mutate (Callable[[PasteModel], PasteModel]):
                Pure function computing the new record from the current one.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            PasteModel: The record as persisted.

        Raises:
            PasteNotFoundError:
                If no paste with the given identifier exists.

            PasteUpdateConflictError:
                If the update could not be applied without conflicts.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def probe(self, **kwargs) -> bool:
        """Write and read back a short-lived probe key.

        Returns:
            bool: True if the value read back matches the value written.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
