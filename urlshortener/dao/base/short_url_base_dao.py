"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (e.g., DynamoDB, Redis, in-memory).

Responsibilities:
    - Provide an interface for creating and retrieving ShortURLModel objects.
    - Provide an atomic click counter increment.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from urlshortener.models import ShortURLModel
        >>> from urlshortener.dao.dynamodb import ShortURLDynamoDBDAO

        >>> dao = ShortURLDynamoDBDAO(table_name='UrlShortener')

        >>> short_url = ShortURLModel(
        ...     target='https://example.com/blog/article-123',
        ...     shortcode='aB3x9',
        ...     created_at='2025-10-15T12:00:00Z',
        ... )
        >>> dao.create(short_url) is dao
        True

        >>> retrieved = dao.get('aB3x9')
        >>> print(retrieved.target)
        https://example.com/blog/article-123

        >>> dao.increment_clicks('aB3x9')
        1
"""

from abc import ABC, abstractmethod

from urlshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        create(short_url: ShortURLModel, **kwargs) -> ShortURLBaseDAO:
            Insert a new ShortURLModel into the data store, only if its shortcode is free.
            Raises ShortURLAlreadyExistsError if the shortcode already exists.
            Raises StoreWriteError on connection or write failure.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a ShortURLModel from the data store by shortcode.
            Raises ShortURLNotFoundError if the entry does not exist or already expired.
            Raises StoreReadError on connection or read failure.

        increment_clicks(shortcode: str, **kwargs) -> int:
            Atomically increment the click counter by exactly 1.
            Raises ShortURLNotFoundError if the entry does not exist or already expired.
            Raises StoreWriteError on connection or write failure.

    Subclassing:
        Datastore-specific implementations (e.g., ShortURLDynamoDBDAO or
        ShortURLRedisDAO) must extend this class and implement all
        abstract methods.

    NOTE:
        - Mappings expire automatically through the store's TTL mechanism.
          The DAO does not provide an interface to manually delete entries.
        - Records past their expiration but not yet swept by the store are
          reported as missing, exactly like swept records.
    """

    @abstractmethod
    def create(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLBaseDAO':
        """Insert a new ShortURLModel into the data store.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a ShortURLModel with the same shortcode already exists.

            StoreWriteError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a ShortURLModel from the data store by its shortcode.

        Args:
            shortcode (str):
                The shortcode of the ShortURLModel to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel: The ShortURLModel instance.

        Raises:
            ShortURLNotFoundError:
                If no live ShortURLModel with the given shortcode exists.

            StoreReadError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def increment_clicks(self, shortcode: str, **kwargs) -> int:
        """Atomically increment the click counter of a short URL by 1.

        Implementations must use the store's atomic update primitive rather
        than a read-modify-write cycle, so concurrent redirects never lose
        an update.

        Args:
            shortcode (str):
                The shortcode of the short URL that was hit.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            int: The click counter value after the increment.

        Raises:
            ShortURLNotFoundError:
                If no live ShortURLModel with the given shortcode exists.

            StoreWriteError:
                If there is an error in the data store.
        """
        pass
