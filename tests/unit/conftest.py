import pytest
from pytest import MonkeyPatch

from urlshortener.constants import ENV
from urlshortener.dao import reset_short_url_dao
from urlshortener.utils import background
from urlshortener.utils.metrics import reset_metrics_client


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: MonkeyPatch):
    """Start every test from a clean environment and fresh process-wide singletons."""
    for namespace in (ENV.App, ENV.DynamoDB, ENV.Redis, ENV.Metrics):
        for name in namespace:
            monkeypatch.delenv(name, raising=False)
    # Deployed (non-local) behavior by default: guarantee_500_response answers with 500
    monkeypatch.setenv(ENV.App.APP_ENV, 'test')

    reset_short_url_dao()
    reset_metrics_client()
    yield
    background.drain(timeout=5)
    reset_short_url_dao()
    reset_metrics_client()
