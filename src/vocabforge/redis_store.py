from typing import Mapping, Optional

import redis

from .config import settings
from .exceptions import StorageError
from .storage import KeyValueStore

_redis_client: Optional[redis.Redis] = None


def get_redis() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)
    return _redis_client


class RedisStore(KeyValueStore):
    def __init__(self, client: Optional[redis.Redis] = None):
        self.client = client if client is not None else get_redis()

    def get(self, key: str) -> Optional[str]:
        try:
            return self.client.get(key)
        except redis.exceptions.RedisError as e:
            raise StorageError(key, str(e)) from e

    def set(self, key: str, raw: str) -> None:
        try:
            self.client.set(key, raw)
        except redis.exceptions.RedisError as e:
            raise StorageError(key, str(e)) from e

    def set_many(self, items: Mapping[str, str]) -> None:
        # MULTI/EXEC so related documents commit together
        try:
            with self.client.pipeline(transaction=True) as pipe:
                for key, raw in items.items():
                    pipe.set(key, raw)
                pipe.execute()
        except redis.exceptions.RedisError as e:
            raise StorageError(", ".join(items), str(e)) from e
