import json
from typing import cast

import pytest
from pytest import MonkeyPatch

from urlshortener.types import LambdaEvent, LambdaContext
from urlshortener.dao.memory import ShortURLMemoryDAO


def _function_url_event(method: str, path: str, body: dict | str | None = None, **overrides) -> LambdaEvent:
    event = {
        'version': '2.0',
        'rawPath': path,
        'headers': {'content-type': 'application/json'},
        'requestContext': {
            'domainName': 'abc123.lambda-url.us-east-1.on.aws',
            'requestId': 'req-123',
            'http': {'method': method, 'path': path},
        },
        'isBase64Encoded': False,
    }
    if body is not None:
        event['body'] = body if isinstance(body, str) else json.dumps(body)
    event.update(overrides)
    return cast(LambdaEvent, event)


def _apigw_event(method: str, path: str, path_parameters: dict | None = None, body: dict | None = None) -> LambdaEvent:
    return cast(
        LambdaEvent,
        {
            'httpMethod': method,
            'path': path,
            'pathParameters': path_parameters,
            'body': None if body is None else json.dumps(body),
            'requestContext': {'domainName': 'abc123.execute-api.us-east-1.amazonaws.com', 'stage': 'Prod'},
        },
    )


@pytest.fixture
def function_url_event():
    """Build a Lambda Function URL (payload v2.0) event: function_url_event(method, path, body=None, **overrides)"""
    return _function_url_event


@pytest.fixture
def apigw_event():
    """Build an API Gateway REST (payload v1.0) event: apigw_event(method, path, path_parameters=None, body=None)"""
    return _apigw_event


@pytest.fixture
def context() -> LambdaContext:
    return cast(LambdaContext, {'function_name': 'urlshortener'})


@pytest.fixture
def memory_dao(monkeypatch: MonkeyPatch) -> ShortURLMemoryDAO:
    """Back every handler with a fresh in-memory store."""
    monkeypatch.setenv('STORE_BACKEND', 'memory')
    dao = ShortURLMemoryDAO()
    monkeypatch.setattr('urlshortener.dao.factory._short_url_dao', dao)
    return dao
