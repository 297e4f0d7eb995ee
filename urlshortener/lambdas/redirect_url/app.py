import time
import logging

from urlshortener.dao import ShortURLBaseDAO, get_short_url_dao
from urlshortener.dao.exceptions import DAOError, ShortURLNotFoundError, DataStoreError
from urlshortener.exceptions import ConfigurationError
from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.utils.helpers import guarantee_500_response
from urlshortener.utils.events import request_path, path_parameter
from urlshortener.utils.background import fire_and_forget
from urlshortener.utils.metrics import get_metrics_client
from urlshortener.utils.responses import response_302, response_400, response_404, response_500
from urlshortener.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    STORE_READ_FAILED,
    CLICK_INCREMENT_FAILED,
    REDIRECT_SUCCESS,
    OPERATION,
    INCREMENT_OPERATION,
    PATH_PARAMETER,
    ENDPOINT,
)


logger = logging.getLogger(__name__)


def extract_shortcode(event: LambdaEvent) -> str:
    """Return the shortcode of a redirect request ('' if absent)

    API Gateway REST events carry it as the `shortCode` path parameter,
    Function URL events only as the request path ('/<shortcode>').
    """
    shortcode = path_parameter(event, PATH_PARAMETER)
    if shortcode is None:
        shortcode = request_path(event).removeprefix('/')
    return shortcode


def increment_clicks(dao: ShortURLBaseDAO, shortcode: str) -> int | None:
    """Background task: count a click, logging (not raising) DAO failures"""
    try:
        clicks = dao.increment_clicks(shortcode=shortcode)
    except DAOError as e:
        logger.warning(
            'Failed to increment click count.',
            extra={'operation': INCREMENT_OPERATION, 'shortcode': shortcode, 'error': str(e), 'event': CLICK_INCREMENT_FAILED},
        )
        if not isinstance(e, ShortURLNotFoundError):
            get_metrics_client().record_store_error(INCREMENT_OPERATION)
        return None

    logger.debug('Incremented click count.', extra={'operation': INCREMENT_OPERATION, 'shortcode': shortcode, 'clickCount': clicks})
    return clicks


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming HTTP requests to redirect short URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Get short URL record from database
    - Step 3: Count the click in the background (never delays the response)
    - Step 4: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
                Cache-Control: no-cache (every hit reaches the service)
        400: Bad client request
            error: missing shortcode in path
        404: Not found
            error: shortcode doesn't exist or expired
        500: Internal server error
            error: store failure

    Args:
        event (dict):
            Function URL / API Gateway event payload.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            Lambda proxy response including statusCode, headers, and body.

    Example:
        >>> event = {'rawPath': '/aB3x9', 'requestContext': {'http': {'method': 'GET'}}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    started = time.perf_counter()
    metrics = get_metrics_client()

    # 1- Extract shortcode from request's path
    shortcode = extract_shortcode(event)
    if not shortcode:
        logger.info(
            'Missing shortcode in path. Responding with 400.',
            extra={'operation': OPERATION, 'event': MISSING_SHORTCODE},
        )
        return response_400('Short code is required', error_code=MISSING_SHORTCODE)

    # 2- Get short URL record from database
    try:
        short_url_dao = get_short_url_dao()
        short_url = short_url_dao.get(shortcode=shortcode)
    except ShortURLNotFoundError:
        logger.info(
            'Short URL record not found in database. Responding with 404.',
            extra={'operation': OPERATION, 'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        metrics.record_url_not_found()
        return response_404('Short URL not found', error_code=SHORT_URL_NOT_FOUND)
    except (DataStoreError, ConfigurationError) as e:
        logger.error(
            'Failed to read short URL record. Responding with 500.',
            extra={'operation': OPERATION, 'shortcode': shortcode, 'error': str(e), 'event': STORE_READ_FAILED},
        )
        metrics.record_store_error(OPERATION)
        return response_500('failed to retrieve URL', error_code=STORE_READ_FAILED)

    # 3- Count the click without waiting for the store
    fire_and_forget(increment_clicks, short_url_dao, shortcode, description=INCREMENT_OPERATION)

    # 4- Redirect client to target URL
    latency_ms = (time.perf_counter() - started) * 1000
    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={
            'operation': OPERATION,
            'shortcode': shortcode,
            'latencyMs': round(latency_ms, 2),
            'event': REDIRECT_SUCCESS,
        },
    )
    metrics.record_url_redirected()
    metrics.record_latency(ENDPOINT, latency_ms)
    return response_302(location=short_url.target)
