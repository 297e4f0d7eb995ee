"""Data Access Object (DAO) implementation for managing shortened URLs in DynamoDB

This module provides a DynamoDB-based implementation of ShortURLBaseDAO.

Table layout:
    partition key:  shortCode   (S)
    attributes:     originalURL (S)
                    createdAt   (S, RFC 3339)
                    expiration  (N, Unix seconds, TTL attribute, omitted when the link never expires)
                    clickCount  (N)

Responsibilities:
    - Create short URLs with a conditional write (never overwrite a live record);
    - Retrieve short URLs, hiding records that expired but weren't swept yet;
    - Atomically increment click counters with an update expression;
    - Translate AWS SDK errors into DAO exceptions.

Classes:
    ShortURLDynamoDBDAO:
        DAO for storing and retrieving ShortURLModel in a DynamoDB table.

Example:
    >>> from urlshortener.models import ShortURLModel
    >>> from urlshortener.dao.dynamodb import ShortURLDynamoDBDAO

    >>> dao = ShortURLDynamoDBDAO(table_name='UrlShortener')
    >>> dao.create(ShortURLModel(target='https://example.com', shortcode='aB3x9', created_at='2025-10-15T12:00:00Z')) is dao
    True
    >>> dao.get('aB3x9').target
    'https://example.com'
    >>> dao.increment_clicks('aB3x9')
    1
"""

import logging

from beartype import beartype
from botocore.exceptions import ClientError

from urlshortener.constants import Store
from urlshortener.models import ShortURLModel
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.dynamodb.mixins import DynamoDBClientMixin
from urlshortener.dao.dynamodb.helpers import (
    CONDITIONAL_CHECK_FAILED,
    client_error_code,
    deserialize,
    handle_dynamodb_error,
    serialize,
)
from urlshortener.dao.exceptions import (
    ShortURLAlreadyExistsError,
    ShortURLNotFoundError,
    StoreReadError,
    StoreWriteError,
)
from urlshortener.utils.helpers import unix_now


logger = logging.getLogger(__name__)


class ShortURLDynamoDBDAO(DynamoDBClientMixin, ShortURLBaseDAO):
    """DynamoDB-based Data Access Object (DAO) for managing short URL mappings

    Attributes (see DynamoDBClientMixin):
        dynamodb (botocore.client.BaseClient):
            DynamoDB client.
        table_name (str):
            Name of the short URL table.

    Methods:
        create(short_url: ShortURLModel, **kwargs) -> ShortURLDynamoDBDAO:
            PutItem conditioned on the shortcode being free (or expired).
            Raises ShortURLAlreadyExistsError when a live record holds the shortcode.
            Raises StoreWriteError on any other AWS failure.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Strongly consistent GetItem by shortcode.
            Raises ShortURLNotFoundError when the record is missing or expired.
            Raises StoreReadError on any other AWS failure.

        increment_clicks(shortcode: str, **kwargs) -> int:
            UpdateItem `SET clickCount = clickCount + 1` conditioned on a live record.
            Raises ShortURLNotFoundError when the record is missing or expired.
            Raises StoreWriteError on any other AWS failure.
    """

    def _key(self, shortcode: str) -> dict:
        return {Store.PARTITION_KEY: {'S': shortcode}}

    @handle_dynamodb_error(StoreWriteError)
    @beartype
    def create(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLDynamoDBDAO':
        """Insert a short URL record into DynamoDB

        NOTE: The condition lets an expired record that the TTL sweeper hasn't
              deleted yet be replaced, since it is already invisible to readers.

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLDynamoDBDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a live short URL with the same shortcode already exists.
            StoreWriteError:
                If DynamoDB rejects the write or can't be reached.
        """
        try:
            self.dynamodb.put_item(
                TableName=self.table_name,
                Item=serialize(short_url.to_item()),
                ConditionExpression='attribute_not_exists(#pk) OR #exp <= :now',
                ExpressionAttributeNames={'#pk': Store.PARTITION_KEY, '#exp': Store.TTL_ATTRIBUTE},
                ExpressionAttributeValues={':now': {'N': str(unix_now())}},
            )
        except ClientError as e:
            if client_error_code(e) == CONDITIONAL_CHECK_FAILED:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.") from e
            raise

        logger.debug('Created short URL record.', extra={'shortcode': short_url.shortcode, 'tableName': self.table_name})
        return self

    @handle_dynamodb_error(StoreReadError)
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL record by shortcode

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
                If the short URL does not exist or is past its expiration.
            StoreReadError:
                If DynamoDB rejects the read or can't be reached.
        """
        response = self.dynamodb.get_item(
            TableName=self.table_name,
            Key=self._key(shortcode),
            ConsistentRead=True,
        )
        item = response.get('Item')
        if not item:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        short_url = ShortURLModel.from_item(deserialize(item))
        if short_url.expired(unix_now()):
            # DynamoDB deletes expired items lazily (typically within days)
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        return short_url

    @handle_dynamodb_error(StoreWriteError)
    @beartype
    def increment_clicks(self, shortcode: str, **kwargs) -> int:
        """Atomically increment the click counter of a short URL

        The increment happens server-side in a single UpdateItem call, so
        concurrent redirects of the same shortcode never lose updates.

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
                If the short URL does not exist or is past its expiration.
            StoreWriteError:
                If DynamoDB rejects the write or can't be reached.
        """
        try:
            response = self.dynamodb.update_item(
                TableName=self.table_name,
                Key=self._key(shortcode),
                UpdateExpression='SET #clicks = if_not_exists(#clicks, :zero) + :inc',
                ConditionExpression='attribute_exists(#pk) AND (attribute_not_exists(#exp) OR #exp > :now)',
                ExpressionAttributeNames={
                    '#pk': Store.PARTITION_KEY,
                    '#exp': Store.TTL_ATTRIBUTE,
                    '#clicks': 'clickCount',
                },
                ExpressionAttributeValues={
                    ':inc': {'N': '1'},
                    ':zero': {'N': '0'},
                    ':now': {'N': str(unix_now())},
                },
                ReturnValues='UPDATED_NEW',
            )
        except ClientError as e:
            if client_error_code(e) == CONDITIONAL_CHECK_FAILED:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.") from e
            raise

        return int(response['Attributes']['clickCount']['N'])
