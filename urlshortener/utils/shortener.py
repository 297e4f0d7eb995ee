"""Shortcode generation utility

This module provides a helper function for generating short, random,
non-sequential identifiers from the Base62 alphabet.

Functions:
    generate_shortcode(length=5):
        Generate a random Base62 string suitable for use as a URL slug.

Example:
    >>> from urlshortener.utils import generate_shortcode
    >>> generate_shortcode(5)
    'q7TzA'
"""

import secrets
import string

from urlshortener.constants import Shortcode
from urlshortener.exceptions import RandomSourceError


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits


def generate_shortcode(length: int = Shortcode.DEFAULT_LENGTH) -> str:
    """Generate a random shortcode of exactly `length` Base62 characters.

    Every character is drawn independently and uniformly from ALPHABET using
    the operating system's CSPRNG (`secrets`), so codes cannot be predicted
    from previously issued ones.

    Args:
        length (int, optional):
            Exact length of the resulting code. Defaults to 5.

    Returns:
        str: A random alphanumeric code.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is not positive.
        RandomSourceError: If the OS entropy source is unavailable.

    NOTE:
        - No uniqueness guarantee is made here. With length 5 there are
          62**5 (~9.16e8) codes; collisions are detected by the store's
          conditional write and the caller regenerates.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    try:
        return ''.join(secrets.choice(ALPHABET) for _ in range(length))
    except (NotImplementedError, OSError) as e:
        raise RandomSourceError('Cryptographically secure random source is unavailable.') from e
