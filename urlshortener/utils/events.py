"""Accessors for Lambda HTTP events

Two event shapes reach the handlers:
    - Lambda Function URL / API Gateway HTTP API (payload v2.0):
        requestContext.http.method, rawPath, body, isBase64Encoded
    - API Gateway REST API (payload v1.0):
        httpMethod, path, pathParameters, body, isBase64Encoded

Functions:
    http_method(event) -> str
    request_path(event) -> str
    request_id(event) -> str | None
    path_parameter(event, name) -> str | None
    parse_json_body(event) -> dict
"""

import json
import base64
import binascii
from typing import Any

from urlshortener.exceptions import ParseError
from urlshortener.types import LambdaEvent


def http_method(event: LambdaEvent) -> str:
    request_context = event.get('requestContext') or {}
    method = (request_context.get('http') or {}).get('method') or event.get('httpMethod') or ''
    return method.upper()


def request_path(event: LambdaEvent) -> str:
    return event.get('rawPath') or event.get('path') or '/'


def request_id(event: LambdaEvent) -> str | None:
    return (event.get('requestContext') or {}).get('requestId')


def path_parameter(event: LambdaEvent, name: str) -> str | None:
    return (event.get('pathParameters') or {}).get(name)


def parse_json_body(event: LambdaEvent) -> dict[str, Any]:
    """Decode the event body as a JSON object

    Raises:
        ParseError:
            If the body is missing, not valid base64 / UTF-8 / JSON,
            or not a JSON object.

    Example:
        >>> parse_json_body({'body': '{"url": "https://example.com"}'})
        {'url': 'https://example.com'}
    """
    body = event.get('body') or ''
    try:
        if event.get('isBase64Encoded'):
            body = base64.b64decode(body, validate=True).decode('utf-8')
        document = json.loads(body)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ParseError(f'Request body is not valid JSON: {e}') from e

    if not isinstance(document, dict):
        raise ParseError(f'Request body must be a JSON object (given type: {type(document).__name__}).')
    return document
