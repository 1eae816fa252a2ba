"""Data Access Object (DAO) implementation for managing pastes in Redis

This module provides a Redis-based implementation of PasteBaseDAO for storing,
fetching and atomically updating PasteModel records.

Responsibilities:
    - Store and retrieve paste records as JSON strings;
    - Schedule physical reclaim of records (TTL + grace period);
    - Increment view counters without lost updates (WATCH/MULTI/EXEC);
    - Round-trip a short-lived probe key for health checks;
    - Translate Redis failures into DAO exceptions.

Classes:
    PasteRedisDAO:
        DAO for storing and retrieving PasteModel in a Redis datastore.

Example:
    >>> from pasteshare.models import PasteModel
    >>> from pasteshare.dao.redis import PasteRedisDAO

    >>> dao = PasteRedisDAO(prefix="pasteshare:dev")
    >>> dao.put(PasteModel(paste_id='V1StGXR8', content='hello', created_at=0, max_views=3))
    <PasteRedisDAO>

    >>> dao.get('V1StGXR8').view_count
    0
    >>> dao.update('V1StGXR8', lambda p: replace(p, view_count=p.view_count + 1)).view_count
    1
"""

import json
import logging
from collections.abc import Callable

import redis
from beartype import beartype

from pasteshare.constants import TTL, Paste
from pasteshare.models import PasteModel
from pasteshare.types import PasteRecord
from pasteshare.dao.base import PasteBaseDAO
from pasteshare.dao.redis.mixins import RedisClientMixin
from pasteshare.dao.redis.helpers import handle_redis_errors
from pasteshare.dao.exceptions import DataStoreError, PasteNotFoundError, PasteUpdateConflictError


logger = logging.getLogger(__name__)


def encode_paste(paste: PasteModel) -> str:
    record: PasteRecord = {
        'content': paste.content,
        'created_at': paste.created_at,
        'ttl_seconds': paste.ttl_seconds,
        'max_views': paste.max_views,
        'view_count': paste.view_count,
    }
    return json.dumps(record)


def decode_paste(paste_id: str, raw: str | bytes) -> PasteModel:
    """Rebuild a PasteModel from its stored JSON form

    Raises:
        DataStoreError: If the stored value is not a valid paste record.
    """
    try:
        record = json.loads(raw)
        paste = PasteModel(
            paste_id=paste_id,
            content=record['content'],
            created_at=int(record['created_at']),
            ttl_seconds=record.get('ttl_seconds'),
            max_views=record.get('max_views'),
            view_count=int(record.get('view_count') or 0),
        )
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        raise DataStoreError(f"Stored record for paste '{paste_id}' is corrupt.") from e

    if not isinstance(paste.content, str):
        raise DataStoreError(f"Stored record for paste '{paste_id}' is corrupt.")
    return paste


class PasteRedisDAO(RedisClientMixin, PasteBaseDAO):
    """Redis-based Data Access Object (DAO) for paste records

    This class implements the PasteBaseDAO interface using Redis as a data store.
    Each paste lives under a single key (`<prefix>:paste:<id>`) holding a JSON record.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        put(paste: PasteModel, **kwargs) -> PasteRedisDAO:
            Store the record, replacing any prior value.

        get(paste_id: str, **kwargs) -> PasteModel:
            Fetch a record. Raises PasteNotFoundError when the key doesn't exist.

        expire(paste_id: str, seconds: int, **kwargs) -> bool:
            Set the key's expiry in seconds.

        update(paste_id: str, mutate: Callable, **kwargs) -> PasteModel:
            Optimistic read-modify-write, retried on concurrent modification.
            Raises PasteUpdateConflictError after MAX_UPDATE_ATTEMPTS attempts.

        probe(**kwargs) -> bool:
            SET/GET a self-expiring healthcheck key.

    All methods raise DataStoreError on Redis failures.
    """

    @handle_redis_errors
    @beartype
    def put(self, paste: PasteModel, expire_seconds: int | None = None, **kwargs) -> 'PasteRedisDAO':
        """Store a paste record (SET, with EX when `expire_seconds` is given)"""
        self.redis.set(self.keys.paste_key(paste.paste_id), encode_paste(paste), ex=expire_seconds)
        return self

    @handle_redis_errors
    @beartype
    def get(self, paste_id: str, **kwargs) -> PasteModel:
        raw = self.redis.get(self.keys.paste_key(paste_id))
        if raw is None:
            raise PasteNotFoundError(f"Paste with id '{paste_id}' not found.")
        return decode_paste(paste_id, raw)

    @handle_redis_errors
    @beartype
    def expire(self, paste_id: str, seconds: int, **kwargs) -> bool:
        return bool(self.redis.expire(self.keys.paste_key(paste_id), seconds))

    @handle_redis_errors
    @beartype
    def update(self, paste_id: str, mutate: Callable[[PasteModel], PasteModel], **kwargs) -> PasteModel:
        """Atomically read, mutate and persist a paste record

        The key is WATCHed before reading. If another client writes it before
        EXEC, Redis aborts the transaction with WatchError and the whole
        read-mutate-write cycle is retried with the fresh record.

        The write uses SET ... KEEPTTL so the reclaim expiry scheduled at
        creation survives every view.

        Args:
            paste_id (str):
                The paste identifier.

            mutate (Callable[[PasteModel], PasteModel]):
                Computes the new record. Exceptions abort the update and propagate.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            PasteModel: The record as persisted.

        Raises:
            PasteNotFoundError:
                If the key doesn't exist.

            PasteUpdateConflictError:
                If every attempt lost to a concurrent writer.

            DataStoreError:
                If Redis connectivity issues occur or the record is corrupt.

        Example:
            >>> dao.update('V1StGXR8', lambda p: replace(p, view_count=p.view_count + 1))
            PasteModel(paste_id='V1StGXR8', ..., view_count=1)
        """
        key = self.keys.paste_key(paste_id)

        for attempt in range(1, Paste.MAX_UPDATE_ATTEMPTS + 1):
            with self.redis.pipeline(transaction=True) as pipe:
                try:
                    # After WATCH the pipeline runs commands immediately until MULTI
                    pipe.watch(key)
                    raw = pipe.get(key)
                    if raw is None:
                        raise PasteNotFoundError(f"Paste with id '{paste_id}' not found.")

                    updated = mutate(decode_paste(paste_id, raw))

                    pipe.multi()
                    pipe.set(key, encode_paste(updated), keepttl=True)
                    pipe.execute()
                    return updated
                except redis.exceptions.WatchError:
                    logger.debug('Paste modified concurrently, retrying update.', extra={'paste_id': paste_id, 'attempt': attempt})

        raise PasteUpdateConflictError(f"Paste with id '{paste_id}' could not be updated after {Paste.MAX_UPDATE_ATTEMPTS} attempts.")

    @handle_redis_errors
    def probe(self, **kwargs) -> bool:
        key = self.keys.healthcheck_key()
        self.redis.set(key, 'ok', ex=TTL.HEALTHCHECK_PROBE)
        return self.redis.get(key) in ('ok', b'ok')
