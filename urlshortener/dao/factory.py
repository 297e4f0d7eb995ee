"""Process-wide short URL DAO

Lambda execution environments are reused across invocations, so the DAO
(and the boto3 / Redis client it holds) is built once, lazily, on first use
and shared afterwards. Construction is guarded by a lock because the
background click-increment threads may touch the DAO concurrently.

Functions:
    get_short_url_dao() -> ShortURLBaseDAO
        Return the DAO for the configured backend, building it on first call.

    reset_short_url_dao() -> None
        Drop the memoized DAO (tests, configuration reloads).
"""

import logging
import threading

from urlshortener.constants import Backend
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.exceptions import BadConfigurationError
from urlshortener.utils.config import load_config, app_prefix


logger = logging.getLogger(__name__)

_lock = threading.Lock()
_short_url_dao: ShortURLBaseDAO | None = None


def build_short_url_dao(config: dict) -> ShortURLBaseDAO:
    """Construct a DAO from a `load_config()` document

    Raises:
        BadConfigurationError:
            If the document names no known backend.
        DataStoreError:
            If the backend can't be reached during construction (Redis healthcheck).
    """
    # Backends are imported lazily so unused client libraries aren't loaded on cold start
    if Backend.DYNAMODB in config:
        from urlshortener.dao.dynamodb import ShortURLDynamoDBDAO

        return ShortURLDynamoDBDAO(**config[Backend.DYNAMODB])

    if Backend.REDIS in config:
        from urlshortener.dao.redis import ShortURLRedisDAO

        redis_config = {f'redis_{k}': v for k, v in config[Backend.REDIS].items()}
        return ShortURLRedisDAO(**redis_config, prefix=app_prefix())

    if Backend.MEMORY in config:
        from urlshortener.dao.memory import ShortURLMemoryDAO

        return ShortURLMemoryDAO(**config[Backend.MEMORY])

    raise BadConfigurationError(f'No supported store backend in configuration (keys: {sorted(config)}).')


def get_short_url_dao() -> ShortURLBaseDAO:
    """Return the process-wide DAO, building it from the environment on first use"""
    global _short_url_dao
    with _lock:
        if _short_url_dao is None:
            config = load_config()
            _short_url_dao = build_short_url_dao(config)
            logger.debug('Initialized short URL DAO.', extra={'dao': type(_short_url_dao).__name__})
        return _short_url_dao


def reset_short_url_dao() -> None:
    """Forget the process-wide DAO (the next call rebuilds it)"""
    global _short_url_dao
    with _lock:
        _short_url_dao = None
