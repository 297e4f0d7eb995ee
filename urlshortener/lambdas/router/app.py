import logging
from collections.abc import Callable
from typing import TypeAlias

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.utils.helpers import guarantee_500_response
from urlshortener.utils.events import http_method, request_path, request_id
from urlshortener.utils.responses import response_404
from urlshortener.lambdas.shorten_url.app import lambda_handler as shorten_url
from urlshortener.lambdas.redirect_url.app import lambda_handler as redirect_url
from urlshortener.lambdas.url_stats.app import lambda_handler as url_stats
from urlshortener.lambdas.router.constants import ROUTE_NOT_FOUND, ROUTE_MATCHED, SHORTEN_PATH, STATS_PREFIX


logger = logging.getLogger(__name__)

Handler: TypeAlias = Callable[[LambdaEvent, LambdaContext], LambdaResponse]


def resolve(method: str, path: str) -> Handler | None:
    """Map an HTTP method and path onto a handler

    Routes (evaluated in order):
        POST /shorten           -> shorten_url
        GET  /stats/<shortcode> -> url_stats
        GET  /<shortcode>       -> redirect_url

    Returns:
        Handler | None: None when no route matches.

    Example:
        >>> resolve('GET', '/stats/aB3x9').__module__
        'urlshortener.lambdas.url_stats.app'
        >>> resolve('GET', '/') is None
        True
    """
    if method == 'POST' and path == SHORTEN_PATH:
        return shorten_url
    if method == 'GET' and path.startswith(STATS_PREFIX):
        return url_stats
    if method == 'GET' and path != '/':
        return redirect_url
    return None


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Single entry point behind a Lambda Function URL

    HTTP responses:
        see shorten_url, redirect_url and url_stats handlers
        404: Not found
            error: no route for the request's method and path
    """
    method, path = http_method(event), request_path(event)

    handler = resolve(method, path)
    if handler is None:
        logger.info(
            'No route for request. Responding with 404.',
            extra={'method': method, 'path': path, 'requestId': request_id(event), 'event': ROUTE_NOT_FOUND},
        )
        return response_404('Not found', error_code=ROUTE_NOT_FOUND)

    logger.debug(
        'Routing request.',
        extra={'method': method, 'path': path, 'handler': handler.__module__, 'event': ROUTE_MATCHED},
    )
    return handler(event, context)
