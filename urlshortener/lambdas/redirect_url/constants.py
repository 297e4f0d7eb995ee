# Logging events & error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
STORE_READ_FAILED = 'STORE_READ_FAILED'
CLICK_INCREMENT_FAILED = 'CLICK_INCREMENT_FAILED'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'

OPERATION = 'RedirectURL'
INCREMENT_OPERATION = 'IncrementClickCount'
PATH_PARAMETER = 'shortCode'
ENDPOINT = f'/{{{PATH_PARAMETER}}}'  # /{shortCode}
