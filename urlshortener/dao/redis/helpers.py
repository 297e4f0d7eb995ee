import functools
from collections.abc import Callable

import redis

from urlshortener.dao.exceptions import DataStoreError


__all__ = []


def redis_location(client: redis.Redis) -> str:
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_error(error_cls: type[DataStoreError]) -> Callable:
    """Wrap Redis-interacting DAO methods to handle connection and server errors

    Args:
        error_cls (type[DataStoreError]):
            DAO exception raised in place of redis' errors
            (StoreReadError for reads, StoreWriteError for writes).

    Returns:
        Callable:
            Decorator for DAO methods.

    Example:
        >>> @handle_redis_error(StoreReadError)
        ... def get(self, shortcode):
        ...     return self.redis.hgetall(shortcode)
    """

    def decorator(method: Callable) -> Callable:
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            try:
                return method(self, *args, **kwargs)
            except redis.exceptions.ConnectionError as e:
                raise error_cls(f"Can't connect to Redis at {redis_location(self.redis)}.") from e
            except redis.exceptions.RedisError as e:
                raise error_cls(f'Redis at {redis_location(self.redis)} failed {method.__name__}(): {e}') from e

        return wrapper

    return decorator
