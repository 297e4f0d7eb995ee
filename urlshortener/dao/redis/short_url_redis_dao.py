"""Data Access Object (DAO) implementation for managing shortened URLs in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO, an
alternative to the DynamoDB backend for self-hosted deployments.

Key layout:
    <prefix>:links:<shortcode>  (HASH)  originalURL, createdAt, expiration, clickCount

Responsibilities:
    - Create short URLs exclusively (optimistic WATCH/MULTI transaction);
    - Expire records natively with EXPIREAT when an expiration is set;
    - Retrieve short URLs;
    - Atomically increment click counters (server-side Lua script);
    - Raise appropriate DAO exceptions on Redis failures.

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving ShortURLModel in a Redis datastore.

Example:
    >>> from urlshortener.models import ShortURLModel
    >>> from urlshortener.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(prefix='urlshortener:dev')
    >>> dao.create(ShortURLModel(target='https://example.com/page', shortcode='aB3x9')) is dao
    True
    >>> dao.get('aB3x9').target
    'https://example.com/page'
    >>> dao.increment_clicks('aB3x9')
    1
"""

import redis
from beartype import beartype

from urlshortener.models import ShortURLModel
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.redis.mixins import RedisClientMixin
from urlshortener.dao.redis.helpers import handle_redis_error
from urlshortener.dao.exceptions import (
    ShortURLAlreadyExistsError,
    ShortURLNotFoundError,
    StoreReadError,
    StoreWriteError,
)
from urlshortener.utils.helpers import unix_now


# Returns nil for missing keys so HINCRBY never resurrects an expired link
INCREMENT_CLICKS_LUA = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return false
end
return redis.call('HINCRBY', KEYS[1], 'clickCount', 1)
"""


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL mappings

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        create(short_url: ShortURLModel, **kwargs) -> ShortURLRedisDAO:
            Store a short URL hash only if its key doesn't exist yet.
            Raises ShortURLAlreadyExistsError when a URL with the same shortcode exists.
            Raises StoreWriteError on Redis failures.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a short URL hash by shortcode.
            Raises ShortURLNotFoundError when the shortcode doesn't exist.
            Raises StoreReadError on Redis failures.

        increment_clicks(shortcode: str, **kwargs) -> int:
            Atomically HINCRBY the click counter of an existing short URL.
            Raises ShortURLNotFoundError when the shortcode doesn't exist.
            Raises StoreWriteError on Redis failures.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._increment_clicks_script = self.redis.register_script(INCREMENT_CLICKS_LUA)

    @handle_redis_error(StoreWriteError)
    @beartype
    def create(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLRedisDAO':
        """Insert a short URL mapping into Redis

        NOTE: The key is WATCHed between the existence check and the MULTI/EXEC
              block. If a concurrent writer creates the same shortcode in between,
              EXEC aborts with WatchError instead of overwriting its record:

              (lambda 1): WATCH <app>:links:<code>; EXISTS => 0
              (lambda 2): WATCH <app>:links:<code>; EXISTS => 0; MULTI; HSET ...; EXEC => OK
              (lambda 1): MULTI; HSET ...; EXEC => WatchError (nothing written)

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
            StoreWriteError:
                If a Redis failure occurs during the transaction.
        """
        link_key = self.keys.link_key(short_url.shortcode)
        exists_message = f"Short URL with code '{short_url.shortcode}' already exists."

        with self.redis.pipeline(transaction=True) as pipe:
            try:
                pipe.watch(link_key)
                if pipe.exists(link_key):
                    raise ShortURLAlreadyExistsError(exists_message)

                pipe.multi()
                pipe.hset(link_key, mapping=short_url.to_item())
                if short_url.expiration > 0:
                    pipe.expireat(link_key, short_url.expiration)
                pipe.execute()
            except redis.exceptions.WatchError as e:
                raise ShortURLAlreadyExistsError(exists_message) from e

        return self

    @handle_redis_error(StoreReadError)
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by shortcode

        Args:
            shortcode (str):
                The shortcode identifier for the shortened URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLModel:
                The retrieved ShortURLModel instance.

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist in Redis.
            StoreReadError:
                If Redis failures occur.
        """
        data = self.redis.hgetall(self.keys.link_key(shortcode))
        if not data:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        short_url = ShortURLModel.from_item(data)
        if short_url.expired(unix_now()):
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        return short_url

    @handle_redis_error(StoreWriteError)
    @beartype
    def increment_clicks(self, shortcode: str, **kwargs) -> int:
        """Atomically increment the click counter of a short URL

        The existence check and HINCRBY run inside a single Lua script, so
        Redis executes them atomically and never creates a hash for a
        shortcode that doesn't exist (or just expired).

        Args:
            shortcode (str):
                The shortcode of the short URL that was hit.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            int:
                click counter value after the increment.

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist in Redis.
            StoreWriteError:
                If Redis failures occur.
        """
        clicks = self._increment_clicks_script(keys=[self.keys.link_key(shortcode)])
        if clicks is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        return int(clicks)
