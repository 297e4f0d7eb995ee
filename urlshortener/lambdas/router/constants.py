# Logging events & error codes
ROUTE_NOT_FOUND = 'ROUTE_NOT_FOUND'
ROUTE_MATCHED = 'ROUTE_MATCHED'

SHORTEN_PATH = '/shorten'
STATS_PREFIX = '/stats/'
