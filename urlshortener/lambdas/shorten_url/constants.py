# Logging events & error codes
INVALID_JSON = 'INVALID_JSON'
MISSING_URL = 'MISSING_URL'
INVALID_EXPIRATION = 'INVALID_EXPIRATION'
SHORTCODE_GENERATION_FAILED = 'SHORTCODE_GENERATION_FAILED'
SHORTCODE_COLLISION = 'SHORTCODE_COLLISION'
STORE_WRITE_FAILED = 'STORE_WRITE_FAILED'
URL_CREATED = 'URL_CREATED'

OPERATION = 'CreateURL'
ENDPOINT = '/shorten'
