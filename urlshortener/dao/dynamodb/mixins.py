"""DynamoDB mixin providing shared client initialization.

Classes:
    - DynamoDBClientMixin: Base mixin to inject a DynamoDB client and table name.

Example:
    Typical usage with a DAO implementation:

        >>> class ShortURLDynamoDBDAO(DynamoDBClientMixin, ShortURLBaseDAO):
        ...     pass
        ...
        >>> dao = ShortURLDynamoDBDAO(table_name='UrlShortener')
"""

import boto3
from botocore.client import BaseClient

from urlshortener.constants import Store


class DynamoDBClientMixin:
    """Mixin DynamoDB client setup for DynamoDB-backed DAOs.

    The low-level client is used instead of the `Table` resource, since
    clients are safe to share with background threads.

    Attributes:
        dynamodb (botocore.client.BaseClient):
            Active DynamoDB client instance used by subclasses.

        table_name (str):
            Name of the table holding short URL records.
    """

    def __init__(
        self,
        table_name: str = Store.DEFAULT_TABLE_NAME,
        endpoint_url: str | None = None,
        region_name: str | None = None,
        dynamodb_client: BaseClient | None = None,
    ):
        """Initialize a DynamoDB-based DAO

        The option is given to either use an existing DynamoDB client or
        create one via boto3's default credential/region resolution.

        Args:
            table_name (str):
                Name of the DynamoDB table. Defaults to 'UrlShortener'.

            endpoint_url (str | None):
                Custom endpoint, e.g. LocalStack's http://localstack:4566.

            region_name (str | None):
                AWS region. Defaults to boto3's resolution (AWS_REGION etc.).

            dynamodb_client (BaseClient | None):
                Pre-initialized DynamoDB client. If None, a new client is created.
        """
        if dynamodb_client is None:
            dynamodb_client = boto3.client('dynamodb', endpoint_url=endpoint_url, region_name=region_name)

        self.dynamodb = dynamodb_client
        self.table_name = table_name
