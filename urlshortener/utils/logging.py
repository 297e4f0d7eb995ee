"""JSON logging for the URL shortener's Lambda functions

IMPORTANT: Call `initialize_logging()` in the lambda handler's `__init__.py` file
before any other logging is done.

Every log line is one JSON document, picked up by CloudWatch Logs:
{
    "timestamp": "2025-10-15T12:00:00.000Z",
    "level": "INFO",
    "logger": "urlshortener.lambdas.redirect_url.app",
    "message": "Redirecting client to target URL. Responding with 302.",
    "operation": "RedirectURL",
    "event": "REDIRECT_SUCCESS",
    "shortcode": "aB3x9",
    "latencyMs": 12.5
}

Service fields are passed through `extra=` and always follow the base fields
in the order of `SERVICE_FIELDS`:
    operation   API operation (CreateURL, RedirectURL, GetURLStats, IncrementClickCount)
    event       machine-readable outcome, the same value as the response's errorCode
    shortcode   short code the request refers to
    latencyMs   handler latency in milliseconds
    error       failure message
    requestId   Lambda request id

Any other `extra` key (e.g. `attempt`, `tableName`) is appended after them.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from urlshortener.constants import ENV


SERVICE_FIELDS = ('operation', 'event', 'shortcode', 'latencyMs', 'error', 'requestId')

# Attributes every LogRecord carries; whatever else is on a record came from `extra`
RECORD_ATTRS = frozenset(vars(logging.LogRecord('', logging.INFO, '', 0, '', (), None))) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Render a LogRecord as one JSON line with the service fields"""

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec='milliseconds') \
                            .replace('+00:00', 'Z')
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        extras = {key: value for key, value in vars(record).items() if key not in RECORD_ATTRS}
        for field in SERVICE_FIELDS:
            if field in extras:
                log[field] = extras.pop(field)
        for key, value in extras.items():
            log.setdefault(key, value)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # Exceptions and other objects passed as `error` are logged as strings
        return json.dumps(log, default=str)


def initialize_logging() -> None:
    log_level = os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
            'loggers': {
                # Keep AWS SDK chatter out of the function logs
                'botocore': {'level': 'WARNING'},
                'boto3': {'level': 'WARNING'},
                'urllib3': {'level': 'WARNING'},
            },
        }
    )
