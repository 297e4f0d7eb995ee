"""Unit tests for helper functions in helpers.py."""

import json
from datetime import datetime, UTC
from typing import cast

import pytest
from pytest import MonkeyPatch
from freezegun import freeze_time

from urlshortener.constants import ENV
from urlshortener.types import LambdaEvent
from urlshortener.exceptions import MissingEnvironmentVariableError
from urlshortener.utils.helpers import (
    base_url,
    get_short_url,
    expiry_for,
    unix_now,
    created_at,
    require_environment,
    guarantee_500_response,
)


@pytest.mark.parametrize(
    'domain, stage, expected',
    [
        ('abc123.execute-api.us-east-1.amazonaws.com', 'Dev', 'https://abc123.execute-api.us-east-1.amazonaws.com/Dev'),
        ('xyz789.execute-api.us-east-1.amazonaws.com', 'Prod', 'https://xyz789.execute-api.us-east-1.amazonaws.com/Prod'),
        ('abc123.execute-api.us-east-1.amazonaws.com', '$default', 'https://abc123.execute-api.us-east-1.amazonaws.com'),
        ('abc123.lambda-url.us-east-1.on.aws', '$default', 'https://abc123.lambda-url.us-east-1.on.aws'),
        ('sho.rt', 'Prod', 'https://sho.rt'),
        ('localhost:3000', 'local', 'http://localhost:3000'),
        ('127.0.0.1:3000', 'local', 'http://127.0.0.1:3000'),
    ],
)
def test_base_url(domain: str, stage: str, expected: str) -> None:
    event = cast(LambdaEvent, {'requestContext': {'domainName': domain, 'stage': stage}})
    assert base_url(event) == expected


@pytest.mark.parametrize(
    'event',
    [
        {},
        {'requestContext': {}},
        {'requestContext': {'domainName': ''}},
        {'requestContext': {'stage': 'Dev'}},
    ],
)
def test_base_url_fallbacks_to_localhost(event: LambdaEvent) -> None:
    assert base_url(event) == 'http://localhost:3000'


@pytest.mark.parametrize('configured', ['https://sho.rt', 'https://sho.rt/'])
def test_base_url_prefers_environment(monkeypatch: MonkeyPatch, configured: str) -> None:
    monkeypatch.setenv(ENV.App.BASE_URL, configured)
    event = cast(LambdaEvent, {'requestContext': {'domainName': 'abc123.lambda-url.us-east-1.on.aws'}})

    assert base_url(event) == 'https://sho.rt'


@pytest.mark.parametrize(
    'shortcode, domain, expected',
    [
        ('aB3x9', 'abc123.lambda-url.us-east-1.on.aws', 'https://abc123.lambda-url.us-east-1.on.aws/aB3x9'),
        ('Zz0Zz', 'sho.rt', 'https://sho.rt/Zz0Zz'),
    ],
)
def test_get_short_url(shortcode: str, domain: str, expected: str) -> None:
    event = cast(LambdaEvent, {'requestContext': {'domainName': domain}})
    assert get_short_url(shortcode, event) == expected


@pytest.mark.parametrize('days', [0, -1, -365])
def test_expiry_for_non_positive_days_never_expires(days: int) -> None:
    assert expiry_for(days) == 0


@pytest.mark.parametrize('days', [1, 7, 365])
def test_expiry_for_is_within_tolerance_of_now(days: int) -> None:
    now = int(datetime.now(UTC).timestamp())
    assert abs(expiry_for(days) - (now + days * 86_400)) <= 5


@freeze_time('2025-10-15 12:00:00')
def test_expiry_for_frozen_clock() -> None:
    frozen_now = int(datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC).timestamp())

    assert unix_now() == frozen_now
    assert expiry_for(1) == frozen_now + 86_400
    assert expiry_for(30) == frozen_now + 30 * 86_400


@freeze_time('2025-10-15 12:34:56')
def test_created_at_is_rfc3339_utc() -> None:
    assert created_at() == '2025-10-15T12:34:56Z'


def test_require_environment(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv('ENV1', 'value1')
    monkeypatch.setenv('ENV2', 'value2')

    @require_environment('ENV1', 'ENV2')
    def sample_function(x: int) -> int:
        return x + 1

    assert sample_function(1) == 2


@pytest.mark.parametrize(
    'env_setup, missing_names',
    [
        ({'ENV1': None, 'ENV2': 'value2'}, ["'ENV1'"]),
        ({'ENV1': '', 'ENV2': 'value2'}, ["'ENV1'"]),
        ({'ENV1': None, 'ENV2': None}, ["'ENV1'", "'ENV2'"]),
        ({'ENV1': '', 'ENV2': ''}, ["'ENV1'", "'ENV2'"]),
    ],
)
def test_require_environment_with_missing_or_empty_env_vars(
    monkeypatch: MonkeyPatch,
    env_setup: dict[str, str],
    missing_names: list[str],
) -> None:
    for name, value in env_setup.items():
        if value is None:
            monkeypatch.delenv(name, raising=False)
        else:
            monkeypatch.setenv(name, value)

    @require_environment('ENV1', 'ENV2')
    def sample_function() -> None:
        pass

    expected_message = f'Missing required environment variables: {", ".join(missing_names)}'
    with pytest.raises(MissingEnvironmentVariableError, match=expected_message):
        sample_function()


def test_guarantee_500_response(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr('urlshortener.utils.helpers.running_locally', lambda: False)

    @guarantee_500_response
    def faulty_lambda_handler(event, context):
        raise RuntimeError('boom')

    response = faulty_lambda_handler({}, None)
    body = json.loads(response['body'])

    assert response['statusCode'] == 500
    assert response['headers']['Content-Type'] == 'application/json'
    assert body == {'error': 'Internal Server Error', 'errorCode': 'UNKNOWN_INTERNAL_SERVER_ERROR'}


def test_guarantee_500_response_passes_through_responses(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr('urlshortener.utils.helpers.running_locally', lambda: False)

    @guarantee_500_response
    def healthy_lambda_handler(event, context):
        return {'statusCode': 204, 'body': ''}

    assert healthy_lambda_handler({}, None) == {'statusCode': 204, 'body': ''}


def test_guarantee_500_response_reraises_when_running_locally(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr('urlshortener.utils.helpers.running_locally', lambda: True)

    @guarantee_500_response
    def faulty_lambda_handler(event, context):
        raise RuntimeError('boom')

    with pytest.raises(RuntimeError, match='boom'):
        faulty_lambda_handler({}, None)
