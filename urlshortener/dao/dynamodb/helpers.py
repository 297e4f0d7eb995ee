import functools
from typing import Any
from collections.abc import Callable

from boto3.dynamodb.types import TypeSerializer, TypeDeserializer
from botocore.exceptions import BotoCoreError, ClientError

from urlshortener.dao.exceptions import DataStoreError
from urlshortener.types import StoreItem


__all__ = []

CONDITIONAL_CHECK_FAILED = 'ConditionalCheckFailedException'

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def serialize(item: StoreItem) -> dict[str, Any]:
    """Convert a plain Python dict into DynamoDB AttributeValue format"""
    return {key: _serializer.serialize(value) for key, value in item.items()}


def deserialize(item: dict[str, Any]) -> StoreItem:
    """Convert a DynamoDB AttributeValue dict into a plain Python dict"""
    return {key: _deserializer.deserialize(value) for key, value in item.items()}


def client_error_code(error: ClientError) -> str | None:
    return error.response.get('Error', {}).get('Code')


def handle_dynamodb_error(error_cls: type[DataStoreError]) -> Callable:
    """Wrap DynamoDB-interacting DAO methods to translate AWS SDK errors

    Args:
        error_cls (type[DataStoreError]):
            DAO exception raised in place of botocore's ClientError / BotoCoreError
            (StoreReadError for reads, StoreWriteError for writes).

    Returns:
        Callable:
            Decorator for DAO methods.

    Example:
        >>> @handle_dynamodb_error(StoreReadError)
        ... def get(self, shortcode):
        ...     return self.dynamodb.get_item(...)
    """

    def decorator(method: Callable) -> Callable:
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            try:
                return method(self, *args, **kwargs)
            except ClientError as e:
                code = client_error_code(e)
                raise error_cls(f"DynamoDB table '{self.table_name}' rejected {method.__name__}() with {code}.") from e
            except BotoCoreError as e:
                raise error_cls(f"Can't reach DynamoDB table '{self.table_name}' during {method.__name__}().") from e

        return wrapper

    return decorator
