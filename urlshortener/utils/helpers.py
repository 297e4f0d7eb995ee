"""Helper utilities for AWS lambda functions.

Functions:
    base_url(event) -> str
        Extract correct public base URL from the Lambda event (or BASE_URL)
    get_short_url(shortcode, event) -> str
        Get string representation of short URL for a given shortcode
    expiry_for(days) -> int
        Convert a day count into an absolute Unix expiry timestamp
    unix_now() -> int
        Current time in Unix seconds
    created_at() -> str
        Current UTC time as an RFC 3339 string
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn uncaught handler exceptions into HTTP 500 responses

Example:
    Typical usage inside a Lambda handler:

        >>> from urlshortener.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.lambda-url.us-east-1.on.aws",
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.lambda-url.us-east-1.on.aws'

        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import logging
import functools
from datetime import datetime, UTC
from collections.abc import Callable

from urlshortener.constants import ENV, TTL, UNKNOWN_INTERNAL_SERVER_ERROR
from urlshortener.exceptions import MissingEnvironmentVariableError
from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.utils.responses import response_500
from urlshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def base_url(event: LambdaEvent) -> str:
    """Extract public base URL for short links

    The `BASE_URL` environment variable takes precedence. Otherwise the base
    URL is derived from the request's host. If the host is a default AWS
    execute-api domain, the stage name is included.

    Args:
        event (dict): Lambda event object passed to the handler

    Returns:
        str: Base URL, e.g.:
             - "https://sho.rt" (BASE_URL=https://sho.rt)
             - "https://abc123.lambda-url.us-east-1.on.aws"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    configured = os.environ.get(ENV.App.BASE_URL)
    if configured:
        return configured.rstrip('/')

    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' in domain and stage and stage != '$default':
        # Default API Gateway domains route through the stage
        return f'https://{domain}/{stage}'
    elif domain.startswith(('localhost', '127.0.0.1')):
        return f'http://{domain}'
    elif domain:
        return f'https://{domain}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return 'http://localhost:3000'


def get_short_url(shortcode: str, event: LambdaEvent) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        event (dict): Lambda event object passed to the handler

    Returns:
        str: short url string representation
    """
    return f'{base_url(event).rstrip("/")}/{shortcode}'


def expiry_for(days: int) -> int:
    """Convert a number of days into an absolute Unix expiry timestamp.

    Args:
        days (int):
            Days until the short URL expires. Zero or negative means never.

    Returns:
        int:
            now + days * 86400 in Unix seconds, or 0 ("no expiration").

    Example:
        >>> expiry_for(0)
        0
        >>> expiry_for(7) - int(datetime.now(UTC).timestamp())
        604800
    """
    if days <= 0:
        return 0
    return unix_now() + days * TTL.ONE_DAY


def unix_now() -> int:
    """Return the current time in whole Unix seconds."""
    return int(datetime.now(UTC).timestamp())


def created_at() -> str:
    """Return the current UTC time in RFC 3339 format, e.g. '2025-10-15T12:00:00Z'."""
    return datetime.now(UTC).strftime('%Y-%m-%dT%H:%M:%SZ')


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('REDIS_HOST')
        ... def redis_config():
        ...     pass
        >>> redis_config()
        MissingEnvironmentVariableError: Missing required environment variables: 'REDIS_HOST'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable[[LambdaEvent, LambdaContext], LambdaResponse]) -> Callable:
    """Decorator: respond with HTTP 500 instead of letting a handler crash

    When running locally the original exception is re-raised, so the
    traceback surfaces in SAM's console.
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception(
                'Unhandled exception in lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR},
            )
            return response_500(error_code=UNKNOWN_INTERNAL_SERVER_ERROR)

    return wrapper
