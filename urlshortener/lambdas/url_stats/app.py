import time
import logging

from urlshortener.dao import get_short_url_dao
from urlshortener.dao.exceptions import ShortURLNotFoundError, DataStoreError
from urlshortener.exceptions import ConfigurationError
from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.utils.helpers import guarantee_500_response
from urlshortener.utils.events import request_path, path_parameter
from urlshortener.utils.metrics import get_metrics_client
from urlshortener.utils.responses import response_200, response_400, response_404, response_500
from urlshortener.lambdas.url_stats.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    STORE_READ_FAILED,
    STATS_RETRIEVED,
    OPERATION,
    ENDPOINT,
    STATS_PREFIX,
    PATH_PARAMETER,
)


logger = logging.getLogger(__name__)


def extract_shortcode(event: LambdaEvent) -> str:
    """Return the shortcode of a stats request ('' if absent)

    Example:
        >>> extract_shortcode({'rawPath': '/stats/aB3x9'})
        'aB3x9'
        >>> extract_shortcode({'rawPath': '/stats/'})
        ''
    """
    shortcode = path_parameter(event, PATH_PARAMETER)
    if shortcode is not None:
        return shortcode

    path = request_path(event)
    if not path.startswith(STATS_PREFIX):
        return ''
    return path.removeprefix(STATS_PREFIX)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming HTTP requests for short URL statistics

    - Step 1: Extract shortcode from request path (/stats/<shortcode>)
    - Step 2: Get short URL record from database
    - Step 3: Respond with the record's statistics

    HTTP responses:
        200: Statistics found
            original_url, created_at, expiration (0 = never), click_count
        400: Bad client request
            error: missing shortcode in path
        404: Not found
            error: shortcode doesn't exist or expired
        500: Internal server error
            error: store failure
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
        short_url = get_short_url_dao().get(shortcode=shortcode)
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
        return response_500('failed to retrieve stats', error_code=STORE_READ_FAILED)

    # 3- Respond with statistics
    latency_ms = (time.perf_counter() - started) * 1000
    logger.info(
        'Retrieved short URL statistics. Responding with 200.',
        extra={
            'operation': OPERATION,
            'shortcode': shortcode,
            'latencyMs': round(latency_ms, 2),
            'event': STATS_RETRIEVED,
        },
    )
    metrics.record_stats_retrieved()
    metrics.record_latency(ENDPOINT, latency_ms)
    return response_200(
        {
            'original_url': short_url.target,
            'created_at': short_url.created_at,
            'expiration': short_url.expiration,
            'click_count': short_url.click_count,
        }
    )
