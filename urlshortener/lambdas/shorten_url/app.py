import time
import logging
from typing import Any

from urlshortener.constants import TTL, Shortcode
from urlshortener.models import ShortURLModel
from urlshortener.exceptions import ParseError, ValidationError, RandomSourceError, ConfigurationError
from urlshortener.dao import ShortURLBaseDAO, get_short_url_dao
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, DataStoreError
from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.utils import generate_shortcode, get_short_url, expiry_for, created_at, shortcode_length
from urlshortener.utils.helpers import guarantee_500_response
from urlshortener.utils.events import parse_json_body
from urlshortener.utils.metrics import get_metrics_client
from urlshortener.utils.responses import response_201, response_400, response_500
from urlshortener.lambdas.shorten_url.constants import (
    INVALID_JSON,
    MISSING_URL,
    INVALID_EXPIRATION,
    SHORTCODE_GENERATION_FAILED,
    SHORTCODE_COLLISION,
    STORE_WRITE_FAILED,
    URL_CREATED,
    OPERATION,
    ENDPOINT,
)


logger = logging.getLogger(__name__)

VALIDATION_ERROR_CODES = {
    'url': MISSING_URL,
    'expire_in_days': INVALID_EXPIRATION,
}


def parse_shorten_request(body: dict[str, Any]) -> tuple[str, int]:
    """Validate a shorten request body

    Accepted fields:
        url (str): target URL, required and non-empty.
        expire_in_days (int): optional, alias `expireInDays`. Zero or negative means never,
            at most TTL.MAX_EXPIRE_DAYS.

    Returns:
        tuple[str, int]: (target URL, days until expiration)

    Raises:
        ValidationError (`field` names the offending field):
            If a field is missing, has the wrong type or is out of range.
    """
    target_url = body.get('url')
    if not isinstance(target_url, str) or not target_url.strip():
        raise ValidationError("missing 'url' in JSON body", field='url')

    expire_in_days = body.get('expire_in_days', body.get('expireInDays'))
    if expire_in_days is None:
        expire_in_days = 0
    # bool is a subclass of int, but `true` is not a day count
    if isinstance(expire_in_days, bool) or not isinstance(expire_in_days, int):
        raise ValidationError("'expire_in_days' must be an integer", field='expire_in_days')
    if expire_in_days > TTL.MAX_EXPIRE_DAYS:
        raise ValidationError(f"'expire_in_days' must be at most {TTL.MAX_EXPIRE_DAYS}", field='expire_in_days')

    return target_url, expire_in_days


def create_short_url(dao: ShortURLBaseDAO, target_url: str, expire_in_days: int, length: int) -> ShortURLModel:
    """Store a new short URL under a freshly generated shortcode

    The write is conditional on the shortcode being free. On collision a new
    shortcode is drawn, up to Shortcode.MAX_ATTEMPTS times.

    Raises:
        RandomSourceError:
            If the system's randomness source fails.
        ShortURLAlreadyExistsError:
            If every attempt collided with an existing shortcode.
        DataStoreError:
            If the store fails.
    """
    expiration = expiry_for(expire_in_days)

    for attempt in range(1, Shortcode.MAX_ATTEMPTS + 1):
        short_url = ShortURLModel(
            target=target_url,
            shortcode=generate_shortcode(length),
            created_at=created_at(),
            expiration=expiration,
        )
        try:
            dao.create(short_url=short_url)
        except ShortURLAlreadyExistsError:
            logger.warning(
                'Shortcode collision. Generating a new one.',
                extra={'shortcode': short_url.shortcode, 'attempt': attempt, 'event': SHORTCODE_COLLISION},
            )
        else:
            return short_url

    raise ShortURLAlreadyExistsError(f'No free shortcode found after {Shortcode.MAX_ATTEMPTS} attempts.')


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming HTTP requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Parse and validate the JSON request body
    - Step 2: Generate a shortcode and store the mapping (retry on collision)
    - Step 3: Respond to user with 201 Created

    HTTP responses:
        201: Successful URL shortening
            short_url: newly generated short URL
        400: Bad client request
            error: invalid JSON body, missing 'url' or invalid 'expire_in_days'
        500: Internal server error
            error: randomness or store failure

    Args:
        event (dict):
            Function URL / API Gateway event payload.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            Lambda proxy response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"url": "https://example.com", "expire_in_days": 7}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])
        {'short_url': 'http://localhost:3000/aB3x9'}
    """
    started = time.perf_counter()
    metrics = get_metrics_client()

    # 1- Parse and validate request body
    try:
        target_url, expire_in_days = parse_shorten_request(parse_json_body(event))
    except ParseError as e:
        logger.info(
            'Invalid JSON body. Responding with 400.',
            extra={'operation': OPERATION, 'error': str(e), 'event': INVALID_JSON},
        )
        return response_400('Invalid request body', error_code=INVALID_JSON)
    except ValidationError as e:
        logger.info(
            'Invalid shorten request. Responding with 400.',
            extra={'operation': OPERATION, 'error': str(e), 'event': VALIDATION_ERROR_CODES[e.field]},
        )
        return response_400(str(e), error_code=VALIDATION_ERROR_CODES[e.field])

    # 2- Generate shortcode and store the mapping
    try:
        short_url = create_short_url(
            get_short_url_dao(),
            target_url=target_url,
            expire_in_days=expire_in_days,
            length=shortcode_length(),
        )
    except RandomSourceError:
        logger.exception(
            'Failed to generate shortcode. Responding with 500.',
            extra={'operation': OPERATION, 'event': SHORTCODE_GENERATION_FAILED},
        )
        return response_500('failed to generate short code', error_code=SHORTCODE_GENERATION_FAILED)
    except (ShortURLAlreadyExistsError, DataStoreError, ConfigurationError) as e:
        logger.error(
            'Failed to store short URL. Responding with 500.',
            extra={'operation': OPERATION, 'error': str(e), 'event': STORE_WRITE_FAILED},
        )
        metrics.record_store_error(OPERATION)
        return response_500('failed to store short URL', error_code=STORE_WRITE_FAILED)

    # 3- Respond with the new short URL
    short_url_string = get_short_url(short_url.shortcode, event)
    latency_ms = (time.perf_counter() - started) * 1000
    logger.info(
        'Created short URL. Responding with 201.',
        extra={
            'operation': OPERATION,
            'shortcode': short_url.shortcode,
            'latencyMs': round(latency_ms, 2),
            'event': URL_CREATED,
        },
    )
    metrics.record_url_created()
    metrics.record_latency(ENDPOINT, latency_ms)
    return response_201({'short_url': short_url_string})
