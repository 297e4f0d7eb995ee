from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.factory import build_short_url_dao, get_short_url_dao, reset_short_url_dao


__all__ = [
    'ShortURLBaseDAO',
    'build_short_url_dao',
    'get_short_url_dao',
    'reset_short_url_dao',
]
