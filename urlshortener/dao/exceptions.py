"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a ShortURLModel is not found (or already expired) in the data store.

    ShortURLAlreadyExistsError:
        Raised when attempting to create a ShortURLModel whose shortcode is taken.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, throttling, etc.).

    StoreReadError:
        Raised when a read from the data store fails.

    StoreWriteError:
        Raised when a write to the data store fails.

Example:
    >>> from urlshortener.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'aB3x9' not found.")
    Traceback (most recent call last):
        ...
    urlshortener.dao.exceptions.ShortURLNotFoundError: Short URL with code 'aB3x9' not found.
"""

from urlshortener.exceptions import UrlShortenerError


class DAOError(UrlShortenerError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class ShortURLNotFoundError(DAOError):
    """Raised when a ShortURLModel is not found in the data store."""

    error_code = 'dao:short_url_not_found_error'


class ShortURLAlreadyExistsError(DAOError):
    """Raised when creating a ShortURLModel that already exists in the data store."""

    error_code = 'dao:short_url_already_exists_error'


class DataStoreError(DAOError):
    """Raised when the data store encounters an error.

    Examples include connection issues, timeouts, throttling and auth failures.
    """

    error_code = 'dao:data_store_error'


class StoreReadError(DataStoreError):
    """Raised when reading from the data store fails."""

    error_code = 'dao:store_read_error'


class StoreWriteError(DataStoreError):
    """Raised when writing to the data store fails."""

    error_code = 'dao:store_write_error'
