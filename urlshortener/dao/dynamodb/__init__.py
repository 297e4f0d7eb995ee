from urlshortener.dao.dynamodb.short_url_dynamodb_dao import ShortURLDynamoDBDAO
from urlshortener.dao.dynamodb.mixins import DynamoDBClientMixin


__all__ = [
    'ShortURLDynamoDBDAO',
    'DynamoDBClientMixin',
]
