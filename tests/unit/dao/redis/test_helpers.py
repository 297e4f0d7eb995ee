import pytest
import redis

from urlshortener.dao.redis.helpers import handle_redis_error, redis_location
from urlshortener.dao.exceptions import StoreReadError, StoreWriteError


class DummyDAO:
    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client

    @handle_redis_error(StoreReadError)
    def disconnected(self):
        raise redis.exceptions.ConnectionError('Cannot connect')

    @handle_redis_error(StoreWriteError)
    def rejected(self):
        raise redis.exceptions.ResponseError('OOM command not allowed')

    @handle_redis_error(StoreWriteError)
    def healthy(self):
        return 'OK'


def test_redis_location(redis_client: redis.Redis):
    assert redis_location(redis_client) == 'redis.test:6379/0'


def test_handle_redis_error_on_connection_error(redis_client: redis.Redis):
    with pytest.raises(StoreReadError, match="Can't connect to Redis at redis.test:6379/0."):
        DummyDAO(redis_client).disconnected()


def test_handle_redis_error_on_server_error(redis_client: redis.Redis):
    with pytest.raises(StoreWriteError, match=r'Redis at redis.test:6379/0 failed rejected\(\): OOM command not allowed'):
        DummyDAO(redis_client).rejected()


def test_handle_redis_error_passes_results_through(redis_client: redis.Redis):
    assert DummyDAO(redis_client).healthy() == 'OK'
