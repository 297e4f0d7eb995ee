from unittest.mock import MagicMock

import pytest
import redis
from pytest import MonkeyPatch

from urlshortener.dao.exceptions import DataStoreError
from urlshortener.dao.redis import mixins
from urlshortener.dao.redis.mixins import RedisClientMixin


class TestRedisClientMixin:
    redis_client: redis.Redis
    unhealthy_redis_client: redis.Redis

    @pytest.fixture
    def unhealthy_redis_client(self, redis_client: redis.Redis) -> redis.Redis:
        redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection error')
        return redis_client

    def test_healthcheck_passes_with_healthy_redis(self, redis_client: redis.Redis):
        mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')

        redis_client.ping.assert_called_once()  # initialization performs a healthcheck
        assert mixin.redis is redis_client
        assert mixin.keys.prefix == 'testapp:test'

    def test_healthcheck_fails_with_unhealthy_redis(self, unhealthy_redis_client: redis.Redis):
        with pytest.raises(DataStoreError, match="Can't connect to Redis at redis.test:6379/0."):
            RedisClientMixin(redis_client=unhealthy_redis_client, prefix='testapp:test')

    def test_healthcheck_without_raising(self, redis_client: redis.Redis):
        mixin = RedisClientMixin(redis_client=redis_client)
        redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection error')

        assert mixin._healthcheck(raise_error=False) is False

    def test_client_is_built_from_connection_parameters(self, monkeypatch: MonkeyPatch, redis_client: redis.Redis):
        redis_cls = MagicMock(return_value=redis_client)
        monkeypatch.setattr(mixins.redis, 'Redis', redis_cls)

        RedisClientMixin(redis_host='redis.test', redis_port='6380', redis_db='1', redis_username='u', redis_password='p')

        redis_cls.assert_called_once_with(
            host='redis.test',
            port=6380,
            db=1,
            decode_responses=True,
            username='u',
            password='p',
        )
