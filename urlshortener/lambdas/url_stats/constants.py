# Logging events & error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
STORE_READ_FAILED = 'STORE_READ_FAILED'
STATS_RETRIEVED = 'STATS_RETRIEVED'

OPERATION = 'GetURLStats'
PATH_PARAMETER = 'shortCode'
ENDPOINT = f'/stats/{{{PATH_PARAMETER}}}'  # /stats/{shortCode}
STATS_PREFIX = '/stats/'
