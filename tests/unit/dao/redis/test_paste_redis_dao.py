"""Unit tests for PasteRedisDAO.

Test coverage includes:
    1. put() / get() / expire()
       - Records are stored as JSON under the namespaced key and decoded back.
       - Missing keys raise PasteNotFoundError; corrupt records raise DataStoreError.
    2. update()
       - WATCH / MULTI / SET KEEPTTL / EXEC sequence.
       - Retries on WatchError, gives up with PasteUpdateConflictError.
       - Exceptions raised by the mutation abort the write.
    3. probe()
    4. Redis failures surface as DataStoreError
"""

import json
from dataclasses import replace
from unittest.mock import ANY, call

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation

from pasteshare.models import PasteModel
from pasteshare.constants import Paste
from pasteshare.exceptions import PasteUnavailableError
from pasteshare.dao.exceptions import DataStoreError, PasteNotFoundError, PasteUpdateConflictError
from pasteshare.dao.redis import PasteRedisDAO


PASTE_KEY = 'testapp:test:paste:V1StGXR8'


def increment_views(paste: PasteModel) -> PasteModel:
    return replace(paste, view_count=paste.view_count + 1)


class TestPasteRedisDAO:
    dao: PasteRedisDAO
    redis_client: redis.Redis
    paste: PasteModel

    @pytest.fixture
    def paste(self) -> PasteModel:
        return PasteModel(paste_id='V1StGXR8', content='hello <world>', created_at=1_000, ttl_seconds=60, max_views=3, view_count=1)

    @pytest.fixture
    def stored_record(self) -> str:
        # fmt: off
        return json.dumps({
            'content': 'hello <world>',
            'created_at': 1_000,
            'ttl_seconds': 60,
            'max_views': 3,
            'view_count': 1,
        })
        # fmt: on

    @pytest.fixture(autouse=True)
    def setup(self, redis_client: redis.Redis, app_prefix: str, paste: PasteModel):
        self.dao = PasteRedisDAO(redis_client=redis_client, prefix=app_prefix)
        self.redis_client = redis_client
        self.paste = paste

    # -------------------------------
    # 1. put() / get() / expire()
    # -------------------------------

    def test_put_paste(self, stored_record: str):
        result = self.dao.put(self.paste)

        assert result is self.dao
        self.redis_client.set.assert_called_once()
        key, value = self.redis_client.set.call_args.args
        assert key == PASTE_KEY
        assert json.loads(value) == json.loads(stored_record)
        assert self.redis_client.set.call_args.kwargs == {'ex': None}

    def test_put_paste_with_expiry(self):
        self.dao.put(self.paste, expire_seconds=3660)

        self.redis_client.set.assert_called_once_with(PASTE_KEY, ANY, ex=3660)
        self.redis_client.expire.assert_not_called()

    def test_get_paste(self, stored_record: str):
        self.redis_client.get.return_value = stored_record

        assert self.dao.get('V1StGXR8') == self.paste
        self.redis_client.get.assert_called_once_with(PASTE_KEY)

    def test_get_paste_stored_as_bytes(self, stored_record: str):
        self.redis_client.get.return_value = stored_record.encode('utf-8')
        assert self.dao.get('V1StGXR8') == self.paste

    def test_get_paste_without_optional_fields(self):
        self.redis_client.get.return_value = json.dumps({'content': 'x', 'created_at': 5})

        paste = self.dao.get('V1StGXR8')
        assert paste == PasteModel(paste_id='V1StGXR8', content='x', created_at=5)

    def test_get_paste_which_does_not_exist(self):
        self.redis_client.get.return_value = None
        with pytest.raises(PasteNotFoundError, match="Paste with id 'V1StGXR8' not found."):
            self.dao.get('V1StGXR8')

    @pytest.mark.parametrize(
        'raw',
        [
            'not json',
            '[1, 2, 3]',
            json.dumps({'created_at': 0}),
            json.dumps({'content': 42, 'created_at': 0}),
            json.dumps({'content': 'x', 'created_at': 'yesterday'}),
        ],
    )
    def test_get_corrupt_paste(self, raw: str):
        self.redis_client.get.return_value = raw
        with pytest.raises(DataStoreError, match="Stored record for paste 'V1StGXR8' is corrupt."):
            self.dao.get('V1StGXR8')

    @pytest.mark.parametrize('reply, expected', [(1, True), (True, True), (0, False)])
    def test_expire_paste(self, reply, expected):
        self.redis_client.expire.return_value = reply

        assert self.dao.expire('V1StGXR8', 120) is expected
        self.redis_client.expire.assert_called_once_with(PASTE_KEY, 120)

    # -------------------------------
    # 2. update()
    # -------------------------------

    def test_update_paste(self, stored_record: str):
        self.redis_client.get.return_value = stored_record
        self.redis_client.execute.return_value = [True]

        updated = self.dao.update('V1StGXR8', increment_views)

        assert updated == replace(self.paste, view_count=2)
        self.redis_client.pipeline.assert_called_once_with(transaction=True)
        self.redis_client.watch.assert_called_once_with(PASTE_KEY)
        self.redis_client.multi.assert_called_once()
        self.redis_client.execute.assert_called_once()

        # The backstop expiry set at creation must survive the write
        key, value = self.redis_client.set.call_args.args
        assert key == PASTE_KEY
        assert json.loads(value)['view_count'] == 2
        assert self.redis_client.set.call_args.kwargs == {'keepttl': True}

    def test_update_paste_retries_on_concurrent_modification(self, stored_record: str):
        self.redis_client.get.return_value = stored_record
        self.redis_client.execute.side_effect = [redis.exceptions.WatchError(), redis.exceptions.WatchError(), [True]]

        updated = self.dao.update('V1StGXR8', increment_views)

        assert updated.view_count == 2
        assert self.redis_client.watch.call_count == 3
        assert self.redis_client.get.call_count == 3
        self.redis_client.watch.assert_has_calls([call(PASTE_KEY)] * 3)

    def test_update_paste_gives_up_after_max_attempts(self, stored_record: str):
        self.redis_client.get.return_value = stored_record
        self.redis_client.execute.side_effect = redis.exceptions.WatchError()

        with pytest.raises(PasteUpdateConflictError, match=f'after {Paste.MAX_UPDATE_ATTEMPTS} attempts'):
            self.dao.update('V1StGXR8', increment_views)

        assert self.redis_client.execute.call_count == Paste.MAX_UPDATE_ATTEMPTS

    def test_update_paste_which_does_not_exist(self):
        self.redis_client.get.return_value = None

        with pytest.raises(PasteNotFoundError, match="Paste with id 'V1StGXR8' not found."):
            self.dao.update('V1StGXR8', increment_views)

        self.redis_client.multi.assert_not_called()
        self.redis_client.set.assert_not_called()

    def test_update_paste_aborted_by_mutation(self, stored_record: str):
        self.redis_client.get.return_value = stored_record

        def refuse(paste: PasteModel) -> PasteModel:
            raise PasteUnavailableError(paste.paste_id, 'expired')

        with pytest.raises(PasteUnavailableError):
            self.dao.update('V1StGXR8', refuse)

        self.redis_client.multi.assert_not_called()
        self.redis_client.set.assert_not_called()
        self.redis_client.execute.assert_not_called()

    # -------------------------------
    # 3. probe()
    # -------------------------------

    @pytest.mark.parametrize('reply, expected', [('ok', True), (b'ok', True), (None, False)])
    def test_probe(self, reply, expected):
        self.redis_client.get.return_value = reply

        assert self.dao.probe() is expected
        self.redis_client.set.assert_called_once_with('testapp:test:healthcheck', 'ok', ex=10)
        self.redis_client.get.assert_called_once_with('testapp:test:healthcheck')

    # -------------------------------
    # 4. Redis failures
    # -------------------------------

    @pytest.mark.parametrize(
        'operation',
        [
            lambda dao, paste: dao.put(paste),
            lambda dao, paste: dao.get(paste.paste_id),
            lambda dao, paste: dao.expire(paste.paste_id, 60),
            lambda dao, paste: dao.update(paste.paste_id, increment_views),
            lambda dao, paste: dao.probe(),
        ],
    )
    def test_redis_connection_errors(self, operation):
        error = redis.exceptions.ConnectionError('Connection refused')
        self.redis_client.set.side_effect = error
        self.redis_client.get.side_effect = error
        self.redis_client.expire.side_effect = error
        self.redis_client.watch.side_effect = error

        with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0."):
            operation(self.dao, self.paste)

    def test_put_rejects_non_paste_argument(self):
        with pytest.raises(BeartypeCallHintParamViolation):
            self.dao.put({'content': 'hello'})
