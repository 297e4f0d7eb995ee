"""HTTP response builders in Lambda proxy (Function URL / API Gateway) format.

Every error response carries a JSON body shaped as:

    {"error": "<human readable message>", "errorCode": "<MACHINE_READABLE_CODE>"}
"""

import json
from typing import Any

from urlshortener.types import LambdaResponse, HttpHeaders


JSON_HEADERS: HttpHeaders = {'Content-Type': 'application/json'}


def json_response(status_code: int, body: dict[str, Any], headers: HttpHeaders | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {**JSON_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def error_response(status_code: int, message: str, error_code: str) -> LambdaResponse:
    return json_response(status_code, {'error': message, 'errorCode': error_code})


def response_200(body: dict[str, Any]) -> LambdaResponse:
    return json_response(200, body)


def response_201(body: dict[str, Any]) -> LambdaResponse:
    return json_response(201, body)


def response_302(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 302,
        'headers': {
            'Location': location,
            'Cache-Control': 'no-cache',
        },
        'body': '',  # no body needed for redirects
    }


def response_400(message: str, error_code: str) -> LambdaResponse:
    return error_response(400, message, error_code)


def response_404(message: str, error_code: str) -> LambdaResponse:
    return error_response(404, message, error_code)


def response_500(message: str | None = None, error_code: str = 'INTERNAL_SERVER_ERROR') -> LambdaResponse:
    base = 'Internal Server Error'
    return error_response(500, base if not message else f'{base} ({message})', error_code)
