"""Cache key generation for the two-tier (primary + stale) key scheme.

This module provides the CacheKeyGenerator class for deriving primary keys
from request URLs and stale keys from primary keys.
"""


class CacheKeyGenerator:
    """
    Generate deterministic cache keys for gateway requests.

    Primary keys follow the pattern ``{namespace}:{url}``. Stale keys are the
    primary key with ``STALE_PREFIX`` in front: ``stale:{namespace}:{url}``.
    The namespace can never be ``stale``, so a primary key and a stale key
    never collide.

    Attributes:
        STALE_PREFIX: Fixed prefix marking the stale copy of an entry
        namespace: Prefix of every primary key
    """

    STALE_PREFIX = "stale:"

    def __init__(self, namespace: str = "content_gateway") -> None:
        """
        Initialize the key generator.

        Args:
            namespace: Prefix of primary keys (must not be "stale")

        Raises:
            ValueError: If the namespace is reserved or contains ':'
        """
        if namespace == "stale" or ":" in namespace or not namespace:
            raise ValueError(f"Invalid cache key namespace: {namespace!r}")
        self.namespace = namespace

    def primary(self, url: str) -> str:
        """
        Generate the primary cache key for a URL.

        Example:
            >>> CacheKeyGenerator().primary("http://api.example.com/items")
            'content_gateway:http://api.example.com/items'
        """
        return f"{self.namespace}:{url}"

    def stale(self, url: str) -> str:
        """
        Generate the stale cache key for a URL.

        Example:
            >>> CacheKeyGenerator().stale("http://api.example.com/items")
            'stale:content_gateway:http://api.example.com/items'
        """
        return self.stale_from_primary(self.primary(url))

    def stale_from_primary(self, primary_key: str) -> str:
        """Derive the stale key from a primary key."""
        return f"{self.STALE_PREFIX}{primary_key}"
