from dataclasses import dataclass
from typing import Any, Self

from urlshortener.types import StoreItem


# fmt: off
@dataclass(frozen=True)
class ShortURLModel:
    """Represent a shortened URL mapping as persisted in the key-value store.

    Attributes:
        target (str):
            The original long URL that the short code redirects to.
        shortcode (str):
            The unique short identifier representing the shortened URL.
        created_at (str):
            Creation timestamp in RFC 3339 format (UTC).
        expiration (int):
            Absolute Unix timestamp after which the record is eligible for
            deletion by the store's TTL sweep. 0 means the link never expires.
        click_count (int):
            Number of redirects served for this short URL.

    Example:
        >>> url = ShortURLModel(
        ...     target='https://example.com/article/123',
        ...     shortcode='aB3x9',
        ...     created_at='2025-10-15T12:00:00Z',
        ...     expiration=1761134400,
        ... )
        >>> url.to_item()['shortCode']
        'aB3x9'
        >>> url.click_count
        0
    """
    target: str             # Original long URL
    shortcode: str          # Unique short identifier of shortened URL
    created_at: str = ''    # RFC 3339 creation timestamp
    expiration: int = 0     # Unix seconds, 0 means no expiration
    click_count: int = 0    # Redirects served so far
# fmt: on

    def expired(self, now: int) -> bool:
        """Return True when the record is past its expiration timestamp."""
        return self.expiration > 0 and self.expiration <= now

    def to_item(self) -> StoreItem:
        """Convert the model into the store's attribute layout.

        The `expiration` attribute is omitted when the link never expires, so
        TTL-enabled stores never consider the record for deletion.
        """
        item = {
            'shortCode': self.shortcode,
            'originalURL': self.target,
            'createdAt': self.created_at,
            'clickCount': int(self.click_count),
        }
        if self.expiration > 0:
            item['expiration'] = int(self.expiration)
        return item

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> Self:
        """Build a model from a store item.

        Numbers may arrive as `decimal.Decimal` (DynamoDB) or `str` (Redis),
        so they are normalized with `int()`.
        """
        return cls(
            target=item['originalURL'],
            shortcode=item['shortCode'],
            created_at=item.get('createdAt', ''),
            expiration=int(item.get('expiration') or 0),
            click_count=int(item.get('clickCount') or 0),
        )
