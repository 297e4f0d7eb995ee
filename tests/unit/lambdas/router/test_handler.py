import json
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from urlshortener.lambdas.router import app
from urlshortener.lambdas.shorten_url.app import lambda_handler as shorten_url
from urlshortener.lambdas.redirect_url.app import lambda_handler as redirect_url
from urlshortener.lambdas.url_stats.app import lambda_handler as url_stats
from urlshortener.dao.memory import ShortURLMemoryDAO
from urlshortener.utils import background


@pytest.mark.parametrize(
    'method, path, expected',
    [
        ('POST', '/shorten', shorten_url),
        ('GET', '/stats/aB3x9', url_stats),
        ('GET', '/stats/', url_stats),
        ('GET', '/aB3x9', redirect_url),
        ('GET', '/shorten', redirect_url),
        ('GET', '/', None),
        ('POST', '/aB3x9', None),
        ('POST', '/stats/aB3x9', None),
        ('DELETE', '/aB3x9', None),
        ('PUT', '/shorten', None),
    ],
)
def test_resolve(method: str, path: str, expected) -> None:
    assert app.resolve(method, path) is expected


class TestRouterHandler:
    @pytest.fixture(autouse=True)
    def setup(self, memory_dao: ShortURLMemoryDAO, function_url_event, context) -> None:
        self.dao = memory_dao
        self.event = function_url_event
        self.context = context

    def test_lambda_handler_dispatches(self, monkeypatch: MonkeyPatch) -> None:
        handler = MagicMock(return_value={'statusCode': 200, 'body': '{}'})
        monkeypatch.setattr(app, 'resolve', lambda method, path: handler)
        event = self.event('GET', '/stats/aB3x9')

        assert app.lambda_handler(event, self.context) == {'statusCode': 200, 'body': '{}'}
        handler.assert_called_once_with(event, self.context)

    @pytest.mark.parametrize('method, path', [('GET', '/'), ('DELETE', '/aB3x9'), ('OPTIONS', '/shorten')])
    def test_lambda_handler_with_unknown_route(self, method: str, path: str) -> None:
        response = app.lambda_handler(self.event(method, path), self.context)

        assert response['statusCode'] == 404
        assert json.loads(response['body']) == {'error': 'Not found', 'errorCode': 'ROUTE_NOT_FOUND'}

    def test_lambda_handler_with_apigw_event(self, apigw_event) -> None:
        response = app.lambda_handler(apigw_event('POST', '/shorten', body={'url': 'https://example.com'}), self.context)

        assert response['statusCode'] == 201
        assert json.loads(response['body'])['short_url'].startswith('https://abc123.execute-api.us-east-1.amazonaws.com/Prod/')

    def test_shorten_redirect_stats_flow(self) -> None:
        # 1- Shorten
        response = app.lambda_handler(self.event('POST', '/shorten', {'url': 'https://example.com/page', 'expire_in_days': 7}), self.context)
        assert response['statusCode'] == 201
        shortcode = json.loads(response['body'])['short_url'].rsplit('/', 1)[1]

        # 2- Redirect twice
        for _ in range(2):
            response = app.lambda_handler(self.event('GET', f'/{shortcode}'), self.context)
            assert response['statusCode'] == 302
            assert response['headers']['Location'] == 'https://example.com/page'
        assert background.drain(timeout=5) is True

        # 3- Stats
        response = app.lambda_handler(self.event('GET', f'/stats/{shortcode}'), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert body['original_url'] == 'https://example.com/page'
        assert body['click_count'] == 2
        assert body['expiration'] > 0
