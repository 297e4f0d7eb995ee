"""In-memory implementation of ShortURLBaseDAO

Used by tests and by local runs without any AWS or Redis dependency
(`STORE_BACKEND=memory`). Records live in a dict guarded by a lock, which
gives `increment_clicks` the same atomicity contract as the real stores.
Expired records are treated as absent, emulating a TTL-enabled store.

Example:
    >>> dao = ShortURLMemoryDAO()
    >>> dao.create(ShortURLModel(target='https://example.com', shortcode='aB3x9')) is dao
    True
    >>> dao.increment_clicks('aB3x9')
    1
    >>> dao.fail_next(StoreReadError('boom'))
    >>> dao.get('aB3x9')
    Traceback (most recent call last):
        ...
    urlshortener.dao.exceptions.StoreReadError: boom
"""

import threading
from dataclasses import replace

from beartype import beartype

from urlshortener.models import ShortURLModel
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.exceptions import DAOError, ShortURLAlreadyExistsError, ShortURLNotFoundError
from urlshortener.utils.helpers import unix_now


class ShortURLMemoryDAO(ShortURLBaseDAO):
    """Thread-safe in-memory DAO for short URL mappings"""

    def __init__(self, **kwargs):
        self._records: dict[str, ShortURLModel] = {}
        self._lock = threading.Lock()
        self._failure: DAOError | None = None

    def fail_next(self, error: DAOError) -> None:
        """Make the next DAO call raise `error` (failure injection for tests)"""
        with self._lock:
            self._failure = error

    def _raise_injected_failure(self) -> None:
        # Caller must hold self._lock
        if self._failure is not None:
            error, self._failure = self._failure, None
            raise error

    def _live(self, shortcode: str) -> ShortURLModel | None:
        # Caller must hold self._lock
        record = self._records.get(shortcode)
        if record is None or record.expired(unix_now()):
            return None
        return record

    @beartype
    def create(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLMemoryDAO':
        with self._lock:
            self._raise_injected_failure()
            if self._live(short_url.shortcode) is not None:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")
            self._records[short_url.shortcode] = short_url
        return self

    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        with self._lock:
            self._raise_injected_failure()
            record = self._live(shortcode)
        if record is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        return record

    @beartype
    def increment_clicks(self, shortcode: str, **kwargs) -> int:
        with self._lock:
            self._raise_injected_failure()
            record = self._live(shortcode)
            if record is None:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
            record = replace(record, click_count=record.click_count + 1)
            self._records[shortcode] = record
            return record.click_count
