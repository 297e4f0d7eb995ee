from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    ONE_DAY = 86_400  # 60 * 60 * 24
    MAX_EXPIRE_DAYS = 36_500  # ~100 years, keeps timestamps within every store's integer range


class Shortcode:
    """Short code generation parameters."""

    DEFAULT_LENGTH = 5  # 62**5 ~ 9.16e8 possible codes
    MAX_ATTEMPTS = 5  # Regenerate on collision at most this many times


class Store:
    """Key-value store defaults."""

    DEFAULT_TABLE_NAME = 'UrlShortener'
    PARTITION_KEY = 'shortCode'
    TTL_ATTRIBUTE = 'expiration'


class Backend(StrEnum):
    DYNAMODB = 'dynamodb'
    REDIS = 'redis'
    MEMORY = 'memory'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        BASE_URL = 'BASE_URL'
        SHORTCODE_LENGTH = 'SHORTCODE_LENGTH'
        STORE_BACKEND = 'STORE_BACKEND'

    class DynamoDB(StrEnum):
        TABLE_NAME = 'TABLE_NAME'
        ENDPOINT = 'DYNAMODB_ENDPOINT'  # usually http://localstack:4566
        REGION = 'AWS_REGION'

    class Redis(StrEnum):
        HOST = 'REDIS_HOST'
        PORT = 'REDIS_PORT'
        DB = 'REDIS_DB'
        USERNAME = 'REDIS_USERNAME'
        PASSWORD = 'REDIS_PASSWORD'  # noqa: S105

    class Metrics(StrEnum):
        ENABLED = 'METRICS_ENABLED'
        NAMESPACE = 'METRICS_NAMESPACE'


class Metric(StrEnum):
    """CloudWatch metric names."""

    URL_CREATED = 'URLCreated'
    URL_REDIRECTED = 'URLRedirected'
    URL_NOT_FOUND = 'URLNotFound'
    URL_STATS_RETRIEVED = 'URLStatsRetrieved'
    STORE_ERROR = 'StoreError'
    API_LATENCY = 'APILatency'


DEFAULT_METRICS_NAMESPACE = 'URLShortener'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
