from pasteshare.dao.redis.redis_key_schema import RedisKeySchema
from pasteshare.dao.redis.mixins import RedisClientMixin
from pasteshare.dao.redis.paste_redis_dao import PasteRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'PasteRedisDAO',
]
