"""Utility functions for application configuration management.

All configuration is read from the Lambda function's environment variables
(set by the deployment template, or by `sam local` / the shell when running
locally). Store configuration is returned in a per-backend shape, so that
DAO constructors can be fed with keyword arguments directly:

    {
        "dynamodb": {"table_name": "UrlShortener", "endpoint_url": None, "region_name": "us-east-1"}
    }

    {
        "redis": {"host": "localhost", "port": 6379, "db": 0, "username": None, "password": None}
    }

    {
        "memory": {}
    }

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for key namespacing, or None if `APP_NAME` is not set.

    store_backend() -> Backend
        Return the configured key-value store backend (`STORE_BACKEND`).

    shortcode_length() -> int
        Return the configured shortcode length (`SHORTCODE_LENGTH`).

    load_config() -> dict
        Load the active store backend's configuration.

Example:
    Typical usage when constructing a DAO:

        >>> from urlshortener.utils.config import load_config
        >>> config = load_config()
        >>> print(config['dynamodb']['table_name'])
        UrlShortener
"""

import os
import logging
from typing import Any

from urlshortener.constants import ENV, Backend, Shortcode, Store
from urlshortener.exceptions import BadConfigurationError
from urlshortener.utils.helpers import require_environment


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'"""
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for key namespacing

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'urlshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'urlshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def store_backend() -> Backend:
    """Return the configured store backend, `dynamodb` by default

    Raises:
        BadConfigurationError:
            If `STORE_BACKEND` names an unsupported backend.
    """
    value = os.environ.get(ENV.App.STORE_BACKEND) or Backend.DYNAMODB
    try:
        return Backend(value.lower())
    except ValueError as e:
        supported = ', '.join(b.value for b in Backend)
        raise BadConfigurationError(f"Unsupported store backend '{value}' (supported: {supported}).") from e


def shortcode_length() -> int:
    """Return the configured shortcode length, 5 by default

    Raises:
        BadConfigurationError:
            If `SHORTCODE_LENGTH` is not a positive integer.
    """
    value = os.environ.get(ENV.App.SHORTCODE_LENGTH)
    if not value:
        return Shortcode.DEFAULT_LENGTH
    try:
        length = int(value)
    except ValueError as e:
        raise BadConfigurationError(f'SHORTCODE_LENGTH must be an integer (given value: {value!r}).') from e
    if length <= 0:
        raise BadConfigurationError(f'SHORTCODE_LENGTH must be positive (given value: {length}).')
    return length


def _int_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise BadConfigurationError(f'{name} must be an integer (given value: {value!r}).') from e


def _dynamodb_config() -> dict[str, Any]:
    return {
        'table_name': os.environ.get(ENV.DynamoDB.TABLE_NAME) or Store.DEFAULT_TABLE_NAME,
        'endpoint_url': os.environ.get(ENV.DynamoDB.ENDPOINT) or None,
        'region_name': os.environ.get(ENV.DynamoDB.REGION) or None,
    }


@require_environment(ENV.Redis.HOST)
def _redis_config() -> dict[str, Any]:
    return {
        'host': os.environ[ENV.Redis.HOST],
        'port': _int_env(ENV.Redis.PORT, 6379),
        'db': _int_env(ENV.Redis.DB, 0),
        'username': os.environ.get(ENV.Redis.USERNAME) or None,
        'password': os.environ.get(ENV.Redis.PASSWORD) or None,
    }


def load_config() -> dict[str, dict[str, Any]]:
    """Load the active store backend's configuration from the environment

    Returns:
        dict: {<backend>: {... backend-specific config ...}}

    Raises:
        BadConfigurationError:
            If the backend or one of its parameters is invalid.
        MissingEnvironmentVariableError:
            If a parameter required by the backend is missing.
    """
    backend = store_backend()
    if backend is Backend.DYNAMODB:
        config = _dynamodb_config()
    elif backend is Backend.REDIS:
        config = _redis_config()
    else:
        config = {}

    logger.debug('Loaded store configuration.', extra={'backend': backend.value})
    return {backend.value: config}
