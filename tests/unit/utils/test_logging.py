"""Unit tests for the JSON logging setup in logging.py."""

import io
import sys
import json
import logging

import pytest
from pytest import MonkeyPatch

from urlshortener.constants import ENV
from urlshortener.utils.logging import JsonFormatter, initialize_logging


def _record(msg: str = 'Redirecting client to target URL.', exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name='urlshortener.lambdas.redirect_url.app',
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    record.created = 1760529600.5  # 2025-10-15T12:00:00.500Z
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    log = json.loads(JsonFormatter().format(_record()))

    assert log['timestamp'] == '2025-10-15T12:00:00.500Z'
    assert log['level'] == 'INFO'
    assert log['logger'] == 'urlshortener.lambdas.redirect_url.app'
    assert log['message'] == 'Redirecting client to target URL.'


def test_json_formatter_includes_extras():
    record = _record(operation='RedirectURL', shortcode='aB3x9', latencyMs=12.5, event='REDIRECT_SUCCESS')
    log = json.loads(JsonFormatter().format(record))

    assert log['operation'] == 'RedirectURL'
    assert log['shortcode'] == 'aB3x9'
    assert log['latencyMs'] == 12.5
    assert log['event'] == 'REDIRECT_SUCCESS'
    assert 'msg' not in log
    assert 'args' not in log


def test_json_formatter_orders_service_fields():
    record = _record(tableName='UrlShortener', latencyMs=3.1, shortcode='aB3x9', event='URL_CREATED', operation='CreateURL')
    log = json.loads(JsonFormatter().format(record))

    assert list(log) == ['timestamp', 'level', 'logger', 'message', 'operation', 'event', 'shortcode', 'latencyMs', 'tableName']


def test_json_formatter_serializes_unknown_types_as_strings():
    log = json.loads(JsonFormatter().format(_record(error=ValueError('boom'))))
    assert log['error'] == 'boom'


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError('store is down')
    except RuntimeError:
        record = _record(exc_info=sys.exc_info())

    log = json.loads(JsonFormatter().format(record))
    assert 'RuntimeError: store is down' in log['exception']


@pytest.mark.parametrize('level, expected', [(None, logging.INFO), ('debug', logging.DEBUG), ('WARNING', logging.WARNING)])
def test_initialize_logging(monkeypatch: MonkeyPatch, level: str | None, expected: int):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    if level is not None:
        monkeypatch.setenv(ENV.App.LOG_LEVEL, level)

    try:
        initialize_logging()

        assert root.level == expected
        assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)
        assert logging.getLogger('botocore').level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_json_lines_reach_the_stream():
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    logger = logging.getLogger('urlshortener.tests.stream')
    logger.addHandler(handler)
    logger.propagate = False

    try:
        logger.warning('Failed to increment click count.', extra={'shortcode': 'aB3x9'})
    finally:
        logger.removeHandler(handler)

    log = json.loads(stream.getvalue().strip())
    assert log['level'] == 'WARNING'
    assert log['shortcode'] == 'aB3x9'
